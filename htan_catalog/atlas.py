"""Atlas summaries with case and biospecimen counts.

Atlases are only published with an entry in the external atlas
metadata, which is indexed by upper-cased atlas id.

"""

import logging

from .exception import MetadataError

logger = logging.getLogger(__name__)

def index_atlas_metadata(records):
    """Return {HTAN_ID: record} for external atlas metadata records.

    Raises MetadataError for records lacking a string htan_id.
    """
    by_id = {}
    for record in records:
        htan_id = record.get('htan_id') if isinstance(record, dict) else None
        if not isinstance(htan_id, str) or not htan_id:
            raise MetadataError('Atlas metadata record lacks "htan_id": %r' % (record,))
        by_id[htan_id.upper()] = record
    return by_id

def count_distinct(entity_lists, key):
    """Return number of distinct non-null key values over lists of entities."""
    return len({
        key(e)
        for entities in entity_lists
        for e in entities
        if key(e) is not None
    })

class Atlas (object):
    """One published atlas and its aggregate counts."""

    def __init__(self, htan_id, htan_name, metadata, num_cases=0, num_biospecimens=0):
        self.htan_id = htan_id
        self.htan_name = htan_name
        self.metadata = metadata
        self.num_cases = num_cases
        self.num_biospecimens = num_biospecimens

    def __repr__(self):
        return '<%s %s cases=%d biospecimens=%d>' % (type(self).__name__, self.htan_id, self.num_cases, self.num_biospecimens)

    def to_dict(self):
        return {
            'htan_id': self.htan_id,
            'htan_name': self.htan_name,
            'num_cases': self.num_cases,
            'num_biospecimens': self.num_biospecimens,
            'metadata': self.metadata,
        }

class AtlasAggregator (object):
    """Attach external metadata and aggregate counts to Synapse atlases.

    :param metadata_records: List of external atlas metadata records {htan_id, ...}.
    """

    def __init__(self, metadata_records):
        self.metadata_by_id = index_atlas_metadata(metadata_records)

    def metadata_for_atlas(self, atlas_id):
        """Return metadata for an exact atlas id or None."""
        return self.metadata_by_id.get(atlas_id)

    def metadata_for_file(self, atlasid):
        """Return metadata for a file's atlas id, matched by its prefix before "_"."""
        if not atlasid:
            return None
        return self.metadata_by_id.get(atlasid.split('_')[0])

    def aggregate(self, synapse_atlases, files):
        """Return list of Atlas for Synapse atlases having external metadata.

        :param synapse_atlases: Raw Synapse atlas records in source order.
        :param files: Resolved files to count, each with atlasid, cases and biospecimen.

        Cases are counted by distinct participant id and biospecimens
        by distinct biospecimen id over all files of an atlas.
        """
        files_by_atlas = {}
        for f in files:
            files_by_atlas.setdefault(f.atlasid, []).append(f)

        atlases = []
        for synapse_atlas in synapse_atlases:
            htan_id = synapse_atlas.get('htan_id')
            metadata = self.metadata_for_atlas(htan_id)
            if metadata is None:
                logger.debug('Atlas %r has no external metadata, skipped' % (htan_id,))
                continue
            atlas_files = files_by_atlas.get(htan_id, [])
            atlases.append(Atlas(
                htan_id,
                synapse_atlas.get('htan_name'),
                metadata,
                num_cases=count_distinct(
                    [ f.cases for f in atlas_files ],
                    lambda e: e.participant_id,
                ),
                num_biospecimens=count_distinct(
                    [ f.biospecimen for f in atlas_files ],
                    lambda e: e.biospecimen_id,
                ),
            ))
        return atlases
