"""Summary counts and predicates over resolved files."""

import re

_multiple_parent_levels_re = re.compile(r'Level[456]')

def has_multiple_parents(f):
    """True if the file's component names a Level 4, 5 or 6 product."""
    return bool(f.entity.component and _multiple_parent_levels_re.search(f.entity.component))

def includes_level1_or_level2_sequencing_data(f):
    """True for non-imaging Level 1 or Level 2 files."""
    component = f.entity.component or ''
    return (
        not component.startswith('Imaging')
        and f.level in {'Level 1', 'Level 2'}
    )

def compute_dashboard_data(files):
    """Return list of {description, text} summary counts over resolved files.

    Counts distinct atlases, organs of origin, cases and biospecimens.
    """
    atlases = set()
    organs = set()
    biospecimens = set()
    cases = set()
    for f in files:
        if f.atlasid:
            atlases.add(f.atlasid)
        for b in f.biospecimen:
            biospecimens.add(b.biospecimen_id)
        for d in f.diagnosis:
            cases.add(d.participant_id)
            organs.add(d.tissue_or_organ_of_origin)
    return [
        { 'description': 'Atlases', 'text': str(len(atlases)) },
        { 'description': 'Organs', 'text': str(len(organs)) },
        { 'description': 'Cases', 'text': str(len(cases)) },
        { 'description': 'Biospecimens', 'text': str(len(biospecimens)) },
    ]
