"""Shared pytest fixtures: a small synthetic Synapse dataset.

Atlas HTA1 has two participants with diagnosis data, one of them with
demographics, five biospecimens (B2 derived from B1, B5 belonging to
a participant without diagnosis) and five files.  Atlas HTA2 has one
resolvable file but no external metadata.
"""

import pytest

FILE_ATTRIBUTES = [
    'bts:Component',
    'bts:filename',
    'bts:HTANDataFileID',
    'bts:HTANParentDataFileID',
    'bts:HTANParentBiospecimenID',
    'bts:AssayType',
    'bts:ImagingAssayType',
]

BIOSPECIMEN_ATTRIBUTES = ['bts:Component', 'bts:HTANBiospecimenID', 'bts:HTANParentID']
DIAGNOSIS_ATTRIBUTES = ['bts:Component', 'bts:HTANParticipantID', 'bts:TissueorOrganofOrigin', 'bts:Shared']
DEMOGRAPHICS_ATTRIBUTES = ['bts:Component', 'bts:HTANParticipantID', 'bts:Gender', 'bts:Shared']

FILE_SCHEMAS = ['ScRNA-seqLevel1', 'ScRNA-seqLevel2', 'ScRNA-seqLevel3', 'ImagingLevel2', 'OtherAssay']


def schema_doc(name, attributes):
    return {
        'data_schema': 'bts:%s' % name,
        'attributes': [ {'id': a, 'description': a} for a in attributes ],
    }


def group(schema_name, *rows):
    return {
        'data_schema': 'bts:%s' % schema_name,
        'record_list': [ {'values': list(row)} for row in rows ],
    }


def file_row(component, file_id, parent_files='', biospecimens='', assay_type=None, imaging_assay_type=None):
    return (component, '%s.fastq' % file_id.lower(), file_id, parent_files, biospecimens, assay_type, imaging_assay_type)


def synapse_dataset():
    schemas = [ schema_doc(name, FILE_ATTRIBUTES) for name in FILE_SCHEMAS ]
    schemas.extend([
        schema_doc('Biospecimen', BIOSPECIMEN_ATTRIBUTES),
        schema_doc('Diagnosis', DIAGNOSIS_ATTRIBUTES),
        schema_doc('Demographics', DEMOGRAPHICS_ATTRIBUTES),
    ])
    return {
        'schemas': schemas,
        'atlases': [
            {
                'htan_id': 'HTA1',
                'htan_name': 'Atlas One',
                'Diagnosis': group(
                    'Diagnosis',
                    ('Diagnosis', 'HTA1_1', 'Colon', 'from diagnosis'),
                    ('Diagnosis', 'HTA1_2', 'Lung', 'from diagnosis'),
                ),
                'Demographics': group(
                    'Demographics',
                    ('Demographics', 'HTA1_1', 'female', 'from demographics'),
                ),
                'Biospecimen': group(
                    'Biospecimen',
                    ('Biospecimen', 'B1', 'HTA1_1'),
                    ('Biospecimen', 'B2', 'B1'),
                    ('Biospecimen', 'B3', 'HTA1_2'),
                    ('Biospecimen', 'B4', 'HTA1_2'),
                    ('Biospecimen', 'B5', 'HTA1_99'),
                ),
                'ScRNA-seqLevel1': group(
                    'ScRNA-seqLevel1',
                    file_row('ScRNA-seqLevel1', 'F1', biospecimens='B1,B2'),
                ),
                'ScRNA-seqLevel2': group(
                    'ScRNA-seqLevel2',
                    file_row('ScRNA-seqLevel2', 'F2', parent_files='F1'),
                ),
                'ScRNA-seqLevel3': group(
                    'ScRNA-seqLevel3',
                    file_row('ScRNA-seqLevel3', 'F5', parent_files='F2;F_MISSING'),
                ),
                'ImagingLevel2': group(
                    'ImagingLevel2',
                    file_row('ImagingLevel2', 'F3', biospecimens='B3,B4', imaging_assay_type='CyCIF'),
                ),
                'OtherAssay': group(
                    'OtherAssay',
                    file_row('OtherAssay', 'F4', biospecimens='B5', assay_type='RNA-seq'),
                ),
                'Unpublished': group(
                    'UnknownSchema',
                    ('x', 'y'),
                    ('z', 'w'),
                ),
            },
            {
                'htan_id': 'HTA2',
                'htan_name': 'Atlas Two',
                'Diagnosis': group(
                    'Diagnosis',
                    ('Diagnosis', 'HTA2_1', 'Breast', 'from diagnosis'),
                ),
                'Biospecimen': group(
                    'Biospecimen',
                    ('Biospecimen', 'G_B1', 'HTA2_1'),
                ),
                'ScRNA-seqLevel1': group(
                    'ScRNA-seqLevel1',
                    file_row('ScRNA-seqLevel1', 'G1', biospecimens='G_B1'),
                ),
            },
        ],
    }


def atlas_metadata():
    return [
        {'htan_id': 'hta1', 'title': 'HTAN Atlas One', 'lead_institutions': 'Somewhere'},
    ]


@pytest.fixture
def synapse_data():
    return synapse_dataset()


@pytest.fixture
def metadata():
    return atlas_metadata()
