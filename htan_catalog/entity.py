"""Decoded Synapse entities and the derived data attached to files.

Entities are immutable from the pipeline's point of view.  Everything
derived for a file lives in a separate ResolvedFile value so the same
base entities can be resolved repeatedly.

"""

import re
import logging

from deriva.core import AttrDict

logger = logging.getLogger(__name__)

# Component discriminator terms for non-file entities
components = AttrDict({
    "biospecimen": "Biospecimen",
    "diagnosis": "Diagnosis",
    "demographics": "Demographics",
})

def _as_text(v):
    if v is None:
        return None
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    v = str(v)
    return v if v else None

class TextField (object):
    """Typed accessor returning a field value as a non-empty str or None."""

    def __init__(self, source):
        self.source = source

    def get(self, fields):
        return _as_text(fields.get(self.source))

class ListField (TextField):
    """Typed accessor splitting a delimited field into a list of identifiers.

    Identifiers are whitespace-stripped and empty elements are dropped.
    """

    def __init__(self, source, delimiters):
        super(ListField, self).__init__(source)
        self.delimiters = delimiters
        self._split_re = re.compile('[%s]' % re.escape(delimiters))

    def get(self, fields):
        v = super(ListField, self).get(fields)
        if v is None:
            return []
        return [ s.strip() for s in self._split_re.split(v) if s.strip() ]

# logical field name -> typed accessor over the decoded Synapse field
field_accessors = {
    'component': TextField('Component'),
    'filename': TextField('filename'),
    'data_file_id': TextField('HTANDataFileID'),
    'parent_data_file_ids': ListField('HTANParentDataFileID', ',;'),
    'biospecimen_id': TextField('HTANBiospecimenID'),
    'parent_biospecimen_ids': ListField('HTANParentBiospecimenID', ','),
    'parent_id': TextField('HTANParentID'),
    'participant_id': TextField('HTANParticipantID'),
    'imaging_assay_type': TextField('ImagingAssayType'),
    'assay_type': TextField('AssayType'),
    'tissue_or_organ_of_origin': TextField('TissueorOrganofOrigin'),
}

def _check_field_accessors(accessors):
    sources = [ a.source for a in accessors.values() ]
    if len(set(sources)) != len(sources):
        raise ValueError('Field accessors must map distinct source fields')
    for name, accessor in accessors.items():
        if not isinstance(accessor, TextField):
            raise TypeError('Field accessor %r must be a TextField, not %s' % (name, type(accessor)))

_check_field_accessors(field_accessors)

class Entity (object):
    """One decoded Synapse record owned by an atlas.

    Synapse field values are available through the fields mapping
    (e.g. entity['HTANParentID']) and through the typed accessors
    named in field_accessors (e.g. entity.parent_id).
    """

    def __init__(self, fields, atlasid):
        self.fields = dict(fields)
        self.atlasid = atlasid

    def __getattr__(self, name):
        accessor = field_accessors.get(name)
        if accessor is None:
            raise AttributeError('%s has no attribute %r' % (type(self).__name__, name))
        return accessor.get(self.__dict__['fields'])

    def __getitem__(self, key):
        return self.fields[key]

    def __contains__(self, key):
        return key in self.fields

    def get(self, key, default=None):
        return self.fields.get(key, default)

    def __eq__(self, other):
        if not isinstance(other, Entity):
            return NotImplemented
        return self.fields == other.fields and self.atlasid == other.atlasid

    __hash__ = None

    def __repr__(self):
        return '<%s %s atlas=%r %s>' % (
            type(self).__name__,
            self.component,
            self.atlasid,
            self.data_file_id or self.biospecimen_id or self.participant_id,
        )

    @property
    def is_file(self):
        return self.filename is not None

    def merged(self, other):
        """Return a new entity with fields of other overriding ours."""
        fields = dict(self.fields)
        if other is not None:
            fields.update(other.fields)
        return Entity(fields, self.atlasid)

    def to_dict(self):
        d = dict(self.fields)
        d['atlasid'] = self.atlasid
        return d

class ResolvedFile (object):
    """A file entity together with everything derived for it.

    :param entity: The base file Entity (never modified).
    :param level: Assay level string, e.g. "Level 2", "Other" or "Unknown".
    :param assay_name: Human readable assay name or None.
    :param atlas: The raw Synapse atlas record owning the file.
    :param atlas_metadata: External atlas metadata found by atlas id prefix, or None.
    :param primary_parents: List of primary parent file entities.
    :param biospecimen: List of joined biospecimen entities.
    :param diagnosis: List of joined diagnosis entities.
    :param demographics: List of joined demographics entities.
    :param cases: List of merged case entities.
    """

    def __init__(self, entity, level, assay_name=None, atlas=None, atlas_metadata=None,
                 primary_parents=(), biospecimen=(), diagnosis=(), demographics=(), cases=()):
        self.entity = entity
        self.level = level
        self.assay_name = assay_name
        self.atlas = atlas
        self.atlas_metadata = atlas_metadata
        self.primary_parents = list(primary_parents)
        self.biospecimen = list(biospecimen)
        self.diagnosis = list(diagnosis)
        self.demographics = list(demographics)
        self.cases = list(cases)

    @property
    def atlasid(self):
        return self.entity.atlasid

    @property
    def data_file_id(self):
        return self.entity.data_file_id

    def __repr__(self):
        return '<%s %s level=%r cases=%d>' % (type(self).__name__, self.data_file_id, self.level, len(self.cases))

    def to_dict(self):
        d = self.entity.to_dict()
        d.update({
            'level': self.level,
            'assayName': self.assay_name,
            'primaryParents': [ p.data_file_id for p in self.primary_parents ],
            'biospecimen': [ e.to_dict() for e in self.biospecimen ],
            'diagnosis': [ e.to_dict() for e in self.diagnosis ],
            'demographics': [ e.to_dict() for e in self.demographics ],
            'cases': [ e.to_dict() for e in self.cases ],
            'atlas': None if self.atlas is None else {
                k: self.atlas.get(k) for k in ('htan_id', 'htan_name')
            },
            'atlasMetadata': self.atlas_metadata,
        })
        return d
