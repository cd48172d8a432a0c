"""Compile Synapse schemas into positional record decoders.

A Synapse schema document looks like:

  {
    "data_schema": "bts:ScRNA-seqLevel1",
    "attributes": [ { "id": "bts:Component", ... }, { "id": "bts:filename", ... }, ... ]
  }

and a record decoded against it is a positional list of values in
attribute order.  Attribute ids carry the "bts:" namespace prefix
which is stripped to form the entity field names.

"""

import re
import logging

from .exception import SchemaError, UnknownSchema

logger = logging.getLogger(__name__)

namespace_prefix = 'bts:'

_prefixed_id_re = re.compile(r'^([A-Za-z][-A-Za-z0-9_.]*):(.+)$')

def field_name(attribute_id):
    """Return entity field name for a schema attribute id.

    :param attribute_id: The "id" of a schema attribute, e.g. "bts:HTANParentID".

    Raises SchemaError for ids which cannot name a field.
    """
    if not isinstance(attribute_id, str) or not attribute_id:
        raise SchemaError('Attribute id must be a non-empty string, not %r' % (attribute_id,))
    if attribute_id.startswith(namespace_prefix):
        name = attribute_id[len(namespace_prefix):]
    else:
        m = _prefixed_id_re.match(attribute_id)
        if m:
            raise SchemaError('Attribute id %r uses unknown namespace prefix "%s:"' % (attribute_id, m.group(1)))
        name = attribute_id
    if not name:
        raise SchemaError('Attribute id %r has an empty field name' % (attribute_id,))
    return name

class Schema (object):
    """A compiled schema: an ordered tuple of entity field names."""

    def __init__(self, name, field_names):
        self.name = name
        self.field_names = tuple(field_names)

    @classmethod
    def from_doc(cls, doc):
        """Compile a Synapse schema document.

        Raises SchemaError if the document cannot be compiled.
        """
        name = doc.get('data_schema')
        if not isinstance(name, str) or not name:
            raise SchemaError('Schema document lacks a "data_schema" name')
        attributes = doc.get('attributes')
        if not isinstance(attributes, list):
            raise SchemaError('Schema %r lacks an "attributes" list' % (name,))

        field_names = []
        for attribute in attributes:
            try:
                fname = field_name(attribute['id'])
            except (KeyError, TypeError):
                raise SchemaError('Schema %r has an attribute without an "id"' % (name,))
            if fname in field_names:
                raise SchemaError('Schema %r defines field %r more than once' % (name, fname))
            field_names.append(fname)
        return cls(name, field_names)

    def decode(self, values):
        """Return {field_name: value} for one positional record.

        :param values: Positional values in attribute order.

        Values beyond the schema length are ignored. Fields without a
        corresponding value are left absent.  No type checking is done
        on the values.
        """
        return dict(zip(self.field_names, values))

class SchemaRegistry (object):
    """Compiled schemas indexed by their data_schema name."""

    def __init__(self, schemas):
        self.schemas = {}
        for schema in schemas:
            if schema.name in self.schemas:
                raise SchemaError('Schema %r is defined more than once' % (schema.name,))
            self.schemas[schema.name] = schema

    @classmethod
    def from_docs(cls, docs):
        registry = cls([ Schema.from_doc(doc) for doc in docs ])
        logger.debug('Compiled %d schemas' % len(registry.schemas))
        return registry

    def __getitem__(self, name):
        """Return the compiled schema for name.

        Raises UnknownSchema if name is not registered.
        """
        try:
            return self.schemas[name]
        except KeyError:
            raise UnknownSchema('Schema %r is not known' % (name,))
