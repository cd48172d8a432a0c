import pytest

from htan_catalog.assay import (
    ParsedAssay,
    apply_name_rules,
    assay_annotation,
    name_rules,
    parse_raw_assay_type,
)
from htan_catalog.entity import Entity


def rule(name):
    return [ r for r in name_rules if r.name == name ]


class TestNameRules:

    def test_rule_order(self):
        assert [ r.name for r in name_rules ] == ['camel_case', 'sc_prefix', 'sn_prefix']

    @pytest.mark.parametrize("raw, expected", [
        ("BulkRNA-seq", "Bulk RNA-seq"),
        ("ScATAC-seq", "Sc ATAC-seq"),
        ("OtherAssay", "Other Assay"),
        ("HIAssay", "HI Assay"),
        ("Imaging", "Imaging"),
    ])
    def test_camel_case(self, raw, expected):
        assert apply_name_rules(raw, rule('camel_case')) == expected

    @pytest.mark.parametrize("raw, expected", [
        ("Sc RNA-seq", "scRNA-seq"),
        ("Bulk Sc Thing", "Bulk scThing"),
        ("Scan Data", "Scan Data"),
    ])
    def test_sc_prefix(self, raw, expected):
        assert apply_name_rules(raw, rule('sc_prefix')) == expected

    @pytest.mark.parametrize("raw, expected", [
        ("Sn ATAC-seq", "snATAC-seq"),
        ("Snap Shot", "Snap Shot"),
    ])
    def test_sn_prefix(self, raw, expected):
        assert apply_name_rules(raw, rule('sn_prefix')) == expected


class TestParseRawAssayType:

    @pytest.mark.parametrize("component, expected", [
        ("ImagingLevel2", ParsedAssay("Imaging", "Level 2")),
        ("ScRNA-seqLevel1", ParsedAssay("scRNA-seq", "Level 1")),
        ("SnATAC-seqLevel3", ParsedAssay("snATAC-seq", "Level 3")),
        ("BulkWESLevel1", ParsedAssay("Bulk WES", "Level 1")),
        ("OtherAssay", ParsedAssay("Other Assay", None)),
    ])
    def test_components(self, component, expected):
        assert parse_raw_assay_type(component) == expected

    def test_no_level_returns_name(self):
        assert parse_raw_assay_type("Biospecimen") == ParsedAssay("Biospecimen", None)

    def test_imaging_override_verbatim(self):
        assert parse_raw_assay_type("ImagingLevel2", "CyCIF") == ParsedAssay("CyCIF", "Level 2")

    def test_imaging_override_without_level(self):
        assert parse_raw_assay_type("Imaging", "H&E") == ParsedAssay("H&E", None)

    def test_unparseable_name(self):
        assert parse_raw_assay_type("Level1") == ParsedAssay("Level1", None)


class TestAssayAnnotation:

    def entity(self, **fields):
        return Entity(fields, 'HTA1')

    def test_standard(self):
        assert assay_annotation(self.entity(Component='ImagingLevel2')) == ('Level 2', 'Imaging')

    def test_other_assay_uses_assay_type(self):
        f = self.entity(Component='OtherAssay', AssayType='RNA-seq')
        assert assay_annotation(f) == ('Other', 'RNA-seq')

    def test_other_assay_without_assay_type(self):
        assert assay_annotation(self.entity(Component='OtherAssay')) == ('Other', 'Other Assay')

    def test_no_component(self):
        assert assay_annotation(self.entity(filename='x.txt')) == ('Unknown', None)

    def test_no_level_is_unknown(self):
        assert assay_annotation(self.entity(Component='Accessory')) == ('Unknown', 'Accessory')
