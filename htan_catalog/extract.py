"""Extract flat entity lists from the raw Synapse dataset."""

import logging

from .diagnostics import contexts
from .entity import Entity
from .exception import InvalidDataset, UnknownSchema
from .schema import SchemaRegistry

logger = logging.getLogger(__name__)

# atlas keys which are atlas properties rather than record groups
reserved_keys = frozenset({'htan_id', 'htan_name'})

def iter_record_groups(atlas, reserved=reserved_keys):
    """Yield (key, group) for each record group of a Synapse atlas in source order."""
    for key, group in atlas.items():
        if key in reserved:
            continue
        yield key, group

def extract_entities(data, diagnostics, reserved=reserved_keys):
    """Return list of Entity decoded from every atlas record group.

    :param data: Raw Synapse dataset {"schemas": [...], "atlases": [...]}.
    :param diagnostics: A Diagnostics instance for skipped groups.
    :param reserved: Atlas keys which are not record groups.

    Atlases and their groups are processed in source order.  A group
    whose schema is unknown is skipped.  Groups with no data_schema
    and atlas properties which are not objects are ignored.

    Raises SchemaError if a schema cannot be compiled.
    Raises InvalidDataset if the dataset or a record group is malformed.
    """
    try:
        schema_docs = data['schemas']
        atlases = data['atlases']
    except (KeyError, TypeError):
        raise InvalidDataset('Synapse dataset must provide "schemas" and "atlases"')

    registry = SchemaRegistry.from_docs(schema_docs)

    entities = []
    for atlas in atlases:
        atlasid = atlas.get('htan_id')
        for key, group in iter_record_groups(atlas, reserved):
            if not isinstance(group, dict):
                logger.debug('Atlas %r property %r is not a record group, skipped' % (atlasid, key))
                continue
            schema_name = group.get('data_schema')
            if not schema_name:
                continue
            try:
                schema = registry[schema_name]
            except UnknownSchema:
                diagnostics.add(contexts.unknown_schema, schema_name, atlasid)
                continue
            try:
                records = group['record_list']
                entities.extend([
                    Entity(schema.decode(record['values']), atlasid)
                    for record in records
                ])
            except (KeyError, TypeError) as e:
                raise InvalidDataset('Atlas %r record group %r is malformed: %s' % (atlasid, key, e))

    logger.info('Extracted %d entities from %d atlases' % (len(entities), len(atlases)))
    return entities
