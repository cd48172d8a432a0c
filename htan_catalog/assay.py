"""Parse Synapse component names into assay names and levels.

Component names come in the form CamelCase-NameLevelX (with or
without the hyphen), e.g. "ScRNA-seqLevel1" or "ImagingLevel2".  We
turn them into { name: "scRNA-seq", level: "Level 1" } etc.

"""

import re
import collections

ParsedAssay = collections.namedtuple('ParsedAssay', ['name', 'level'])

level_token = 'Level'

# ordered substitution rules applied to the name part of a component
AssayNameRule = collections.namedtuple('AssayNameRule', ['name', 'pattern', 'replacement'])

name_rules = [
    # camel case to space case, a single pass over both boundary kinds
    AssayNameRule(
        'camel_case',
        re.compile(r'([A-Z])([A-Z])([a-z])|([a-z])([A-Z])'),
        r'\1\4 \2\3\5',
    ),
    # sc and sn are always lower case prefixes, joined to the next word
    AssayNameRule('sc_prefix', re.compile(r'\bSc '), 'sc'),
    AssayNameRule('sn_prefix', re.compile(r'\bSn '), 'sn'),
]

def apply_name_rules(name, rules=name_rules):
    for rule in rules:
        name = rule.pattern.sub(rule.replacement, name)
    return name

def parse_raw_assay_type(component_name, imaging_assay_type=None):
    """Return ParsedAssay(name, level) for a component name.

    :param component_name: The Synapse Component value.
    :param imaging_assay_type: An explicit imaging assay type used verbatim as name.

    The level is None when the component has no level part.  This
    never raises for str input.
    """
    split_by_level = component_name.split(level_token)
    level = '%s %s' % (level_token, split_by_level[1]) if len(split_by_level) > 1 else None
    extracted_name = split_by_level[0]

    if imaging_assay_type:
        return ParsedAssay(imaging_assay_type, level)

    if extracted_name:
        return ParsedAssay(apply_name_rules(extracted_name), level)

    # couldn't parse
    return ParsedAssay(component_name, None)

other_assay_name = 'Other Assay'
other_level = 'Other'
unknown_level = 'Unknown'

def assay_annotation(entity):
    """Return (level, assay_name) for a file entity.

    Assays which don't fit the standard model are named by the file's
    AssayType field instead, with level "Other".
    """
    component = entity.component
    if not component:
        return unknown_level, None

    parsed = parse_raw_assay_type(component, entity.imaging_assay_type)
    if parsed.level and len(parsed.level) > 1:
        level = parsed.level
    else:
        level = unknown_level
    assay_name = parsed.name

    if parsed.name == other_assay_name:
        assay_name = entity.assay_type or other_assay_name
        level = other_level

    return level, assay_name
