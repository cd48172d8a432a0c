import os
import sys
import json
import logging

from deriva.core import init_logging

from .assay import assay_annotation
from .atlas import AtlasAggregator
from .cases import CaseJoiner, EntityIndex
from .dashboard import compute_dashboard_data
from .diagnostics import Diagnostics
from .entity import ResolvedFile
from .extract import extract_entities, reserved_keys
from .lineage import LineageResolver
from .loader import load_synapse_data, load_atlas_metadata

logger = logging.getLogger(__name__)

class LoadDataResult (object):
    """Pipeline output: published files and atlases plus diagnostics."""

    def __init__(self, files, atlases, diagnostics):
        self.files = files
        self.atlases = atlases
        self.diagnostics = diagnostics

    def to_dict(self):
        return {
            'files': [ f.to_dict() for f in self.files ],
            'atlases': [ a.to_dict() for a in self.atlases ],
            'diagnostics': self.diagnostics.to_list(),
        }

class Pipeline (object):
    """Resolve a raw Synapse dataset into published files and atlases.

    Typical use:

      result = Pipeline(atlas_metadata).run(synapse_data)
      result.files, result.atlases, result.diagnostics

    The raw dataset and the extracted entities are never modified, so
    run() and resolve() may be repeated on the same inputs.

    """

    # Allow caller-driven reconfig
    reserved_keys = reserved_keys

    def __init__(self, atlas_metadata):
        """Prepare a pipeline for one external atlas metadata list.

        :param atlas_metadata: List of external atlas metadata records {htan_id, ...}.

        Raises MetadataError if a metadata record lacks htan_id.
        """
        self.aggregator = AtlasAggregator(atlas_metadata)

    def run(self, data):
        """Extract and resolve a raw Synapse dataset.

        :param data: Raw Synapse dataset {"schemas": [...], "atlases": [...]}.

        Raises InvalidDataset (or its SchemaError sub-class) if the
        dataset is malformed, in which case no partial results are
        produced.
        """
        diagnostics = Diagnostics()
        entities = extract_entities(data, diagnostics, reserved=self.reserved_keys)
        return self.resolve(entities, data['atlases'], diagnostics)

    def resolve(self, entities, synapse_atlases, diagnostics=None):
        """Resolve already extracted entities.

        :param entities: Flat list of Entity as returned by extract_entities().
        :param synapse_atlases: Raw Synapse atlas records in source order.
        :param diagnostics: A Diagnostics instance to extend (default a new one).
        """
        if diagnostics is None:
            diagnostics = Diagnostics()

        files = [ e for e in entities if e.is_file ]
        synapse_atlas_map = { a.get('htan_id'): a for a in synapse_atlases }

        lineage = LineageResolver(files, diagnostics)
        joiner = CaseJoiner(EntityIndex(entities), diagnostics)

        resolved = []
        for f, primary_parents in lineage.resolve_all(files):
            level, assay_name = assay_annotation(f)
            case_data = joiner.join(f, primary_parents)
            resolved.append(ResolvedFile(
                f,
                level,
                assay_name,
                atlas=synapse_atlas_map.get(f.atlasid),
                atlas_metadata=self.aggregator.metadata_for_file(f.atlasid),
                primary_parents=primary_parents,
                biospecimen=case_data.biospecimen,
                diagnosis=case_data.diagnosis,
                demographics=case_data.demographics,
                cases=case_data.cases,
            ))

        # files must have case data
        published_files = [ f for f in resolved if f.cases ]
        atlases = self.aggregator.aggregate(synapse_atlases, published_files)

        logger.info('Resolved %d of %d files into %d atlases (%d diagnostics)' % (
            len(published_files), len(files), len(atlases), len(diagnostics),
        ))
        return LoadDataResult(published_files, atlases, diagnostics)

def process_synapse_data(data, atlas_metadata):
    """Return LoadDataResult for a raw Synapse dataset and external atlas metadata."""
    return Pipeline(atlas_metadata).run(data)

def load_data(data_location, metadata_location, headers=None):
    """Fetch both sources then process them.

    :param data_location: URL or path of the raw Synapse dataset JSON.
    :param metadata_location: URL or path of the external atlas metadata JSON.
    :param headers: Extra request headers for URL locations.
    """
    data = load_synapse_data(data_location, headers=headers)
    atlas_metadata = load_atlas_metadata(metadata_location, headers=headers)
    return process_synapse_data(data, atlas_metadata)

def main(subcommand, *args):
    """Ugly test-harness for the catalog resolution pipeline.

    Usage: python3 -m htan_catalog.pipeline <sub-command> [data_location [metadata_location]]

    Sub-commands:
    - 'summary'
       - Print dashboard counts and a diagnostics tally
    - 'dump'
       - Write resolved files, atlases and diagnostics as JSON to stdout

    Set environment variables HTAN_DATA_URL and HTAN_ATLAS_METADATA_URL
    to choose default locations.

    """
    init_logging(logging.INFO)

    if len(args) > 2:
        raise TypeError('"%s" accepts at most two positional arguments: data_location, metadata_location' % subcommand)
    data_location = args[0] if len(args) > 0 else os.getenv('HTAN_DATA_URL', 'syn_data.json')
    metadata_location = args[1] if len(args) > 1 else os.getenv('HTAN_ATLAS_METADATA_URL', 'atlas_metadata.json')

    if subcommand == 'summary':
        result = load_data(data_location, metadata_location)
        for report in compute_dashboard_data(result.files):
            sys.stdout.write('%s: %s\n' % (report['description'], report['text']))
        for context, count in sorted(result.diagnostics.counts().items()):
            sys.stdout.write('unresolved %s: %d\n' % (context, count))
    elif subcommand == 'dump':
        result = load_data(data_location, metadata_location)
        json.dump(result.to_dict(), sys.stdout, indent=2)
        sys.stdout.write('\n')
    else:
        raise ValueError('unknown sub-command "%s"' % subcommand)
    return 0

if __name__ == '__main__':
    exit(main(*sys.argv[1:]))
