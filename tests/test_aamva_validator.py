"""
Unit Tests for AAMVA compliance validation
"""

import pytest

from aamva_encoder import assemble_record, build_subfile, encode, prepare_fields
from aamva_models import RecordMetadata, ValidationStatus
from aamva_validator import STATUS_ORDER, inspect_record, validate


def _finding(report, tag):
    for field in report.fields:
        if field.tag == tag:
            return field
    return None


def _raw_without(form, metadata, *tags):
    """Consistent record with some segments left out"""
    elements, _, _ = prepare_fields(form, metadata)
    for tag in tags:
        del elements[tag]
    body = build_subfile(metadata.subfile_kind, elements)
    return assemble_record([(metadata.subfile_kind, body)], metadata).raw


class TestCompliantRecords:

    def test_complete_form_scores_full_marks(self, full_form, ny_metadata):
        report = validate(full_form, ny_metadata)
        assert report.is_header_valid is True
        assert report.overall_score == 100
        assert report.compliance_notes == []
        assert all(f.status == ValidationStatus.MATCH for f in report.fields)
        assert report.raw_string.startswith("@\n\x1e\rANSI 636005")

    def test_canadian_form_scores_full_marks(self, canadian_form):
        metadata = RecordMetadata(issuer_identification_number="636012", country="CAN")
        report = validate(canadian_form, metadata)
        assert report.overall_score == 100
        assert report.compliance_notes == []

    def test_id_record_skips_license_only_elements(self, full_form):
        report = validate(full_form, RecordMetadata(subfile_kind="ID"))
        tags = [f.tag for f in report.fields]
        assert "DCA" not in tags
        assert "DCB" not in tags
        assert "DCD" not in tags
        assert report.overall_score == 100

    def test_findings_carry_form_and_scanned_values(self, full_form, ny_metadata):
        finding = _finding(validate(full_form, ny_metadata), "DBC")
        assert finding.form_value == "M"
        assert finding.scanned_value == "1"
        assert finding.description == "Sex"


class TestFieldFindings:

    def test_missing_state_is_critical(self, full_form, ny_metadata):
        report = validate(dict(full_form, DAJ=""), ny_metadata)
        assert _finding(report, "DAJ").status == ValidationStatus.CRITICAL_INVALID
        assert report.overall_score < 100
        assert any("DAJ" in note for note in report.compliance_notes)

    def test_missing_discriminator_is_missing_in_scan(self, full_form, ny_metadata):
        form = dict(full_form)
        del form["DCF"]
        finding = _finding(validate(form, ny_metadata), "DCF")
        assert finding.status == ValidationStatus.MISSING_IN_SCAN
        assert finding.scanned_value == "NONE"

    def test_absent_tag_reported_as_tag_missing(self, full_form, ny_metadata):
        raw = _raw_without(full_form, ny_metadata, "DCS")
        report = inspect_record(raw, full_form, ny_metadata)
        finding = _finding(report, "DCS")
        assert finding.status == ValidationStatus.CRITICAL_INVALID
        assert finding.scanned_value == "Tag Missing"
        assert any("missing from the barcode" in note for note in report.compliance_notes)

    def test_unreadable_birth_date_is_format_error(self, full_form, ny_metadata):
        finding = _finding(validate(dict(full_form, DBB="1990"), ny_metadata), "DBB")
        assert finding.status == ValidationStatus.FORMAT_ERROR

    def test_eye_color_name_is_encoded_as_code(self, full_form, ny_metadata):
        report = validate(dict(full_form, DAY="GREEN", DAZ="blonde"), ny_metadata)
        assert _finding(report, "DAY").scanned_value == "GRN"
        assert _finding(report, "DAY").status == ValidationStatus.MATCH
        assert _finding(report, "DAZ").scanned_value == "BLN"
        assert report.overall_score == 100

    def test_unknown_eye_color_is_format_error(self, full_form, ny_metadata):
        finding = _finding(validate(dict(full_form, DAY="PURPLE"), ny_metadata), "DAY")
        assert finding.status == ValidationStatus.FORMAT_ERROR

    def test_scanned_value_differs_from_form(self, full_form, ny_metadata):
        raw = encode(full_form, ny_metadata)
        report = inspect_record(raw, dict(full_form, DCS="JONES"), ny_metadata)
        finding = _finding(report, "DCS")
        assert finding.status == ValidationStatus.MISMATCH
        assert finding.scanned_value == "SMITH"
        assert finding.form_value == "JONES"

    def test_form_value_compared_after_formatting(self, full_form, ny_metadata):
        raw = encode(full_form, ny_metadata)
        report = inspect_record(raw, dict(full_form, DBB="1990-01-01", DAU="69 in"), ny_metadata)
        assert _finding(report, "DBB").status == ValidationStatus.MATCH
        assert _finding(report, "DAU").status == ValidationStatus.MATCH

    def test_optional_elements_scored_when_present(self, full_form, ny_metadata):
        report = validate(dict(full_form, DDK="1", DAZ="PURPLE"), ny_metadata)
        assert _finding(report, "DDK").status == ValidationStatus.MATCH
        assert _finding(report, "DAZ").status == ValidationStatus.FORMAT_ERROR
        assert _finding(report, "DDL") is None

    def test_findings_sorted_by_severity(self, ny_metadata):
        report = validate({"DCS": "SMITH", "DBB": "1990", "DAY": "BRO"}, ny_metadata)
        ranks = [STATUS_ORDER[f.status] for f in report.fields]
        assert ranks == sorted(ranks)
        assert report.fields[0].status == ValidationStatus.CRITICAL_INVALID
        assert report.fields[-1].status == ValidationStatus.MATCH


class TestStructure:

    @pytest.mark.parametrize("raw", [
        "not a barcode",
        "ANSI 636005100001DL00310010",
        "@\n\x1e\rAAMVA636005100001",
    ])
    def test_unreadable_header_scores_zero(self, raw):
        report = inspect_record(raw)
        assert report.is_header_valid is False
        assert report.overall_score == 0
        assert report.raw_string == raw
        assert any("Critical" in note for note in report.compliance_notes)

    def test_empty_input(self):
        report = inspect_record("")
        assert report.is_header_valid is False
        assert report.overall_score == 0

    def test_unrecognized_standard_version(self, full_form):
        report = validate(full_form, RecordMetadata(standard_version="11"))
        assert report.is_header_valid is True
        assert report.overall_score < 100
        assert any("'11'" in note for note in report.compliance_notes)

    def test_length_mismatch_lowers_score(self, full_form, ny_metadata):
        raw = encode(full_form, ny_metadata)
        tampered = raw[:27] + f"{int(raw[27:31]) + 5:04d}" + raw[31:]
        report = inspect_record(tampered, full_form, ny_metadata)
        assert report.is_header_valid is True
        assert report.overall_score < 100
        assert any("Length mismatch" in note for note in report.compliance_notes)

    def test_subfile_kind_differs_from_expected(self, full_form, ny_metadata):
        raw = encode(full_form, ny_metadata)
        report = inspect_record(raw, full_form, RecordMetadata(subfile_kind="ID"))
        assert report.overall_score < 100
        assert any("marker mismatch" in note for note in report.compliance_notes)

    def test_unknown_form_tags_are_noted(self, full_form, ny_metadata):
        report = validate(dict(full_form, XYZ="1"), ny_metadata)
        assert report.overall_score == 100
        assert any("'XYZ'" in note for note in report.compliance_notes)


class TestScoreProperties:

    @pytest.mark.parametrize("tag", ["DCS", "DAJ", "DBC", "DAY", "DCF"])
    def test_removing_a_segment_never_raises_score(self, full_form, ny_metadata, tag):
        baseline = inspect_record(encode(full_form, ny_metadata), full_form, ny_metadata)
        reduced = inspect_record(_raw_without(full_form, ny_metadata, tag), full_form, ny_metadata)
        assert reduced.overall_score < baseline.overall_score

    @pytest.mark.parametrize("form", [
        {},
        {"DCS": "", "DAC": "", "DAQ": ""},
        {"DBB": "??", "DAU": "??", "DAK": "??", "DCG": "??"},
    ])
    def test_score_within_bounds(self, form, ny_metadata):
        report = validate(form, ny_metadata)
        assert 0 <= report.overall_score <= 100

    def test_validate_does_not_mutate_form(self, full_form, ny_metadata):
        form = dict(full_form, XYZ="1")
        snapshot = dict(form)
        validate(form, ny_metadata)
        assert form == snapshot
