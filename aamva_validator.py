"""
Weighted compliance validation for AAMVA DL/ID records
Returns a score plus one finding per scored element
"""
import re
from typing import Dict, List, Optional, Tuple

from aamva_decoder import (
    LENGTH_MISMATCH,
    OFFSET_OUT_OF_RANGE,
    SUBFILE_MARKER_MISMATCH,
    TRAILING_DATA,
    decode,
)
from aamva_encoder import DESIGNATOR_LENGTH, HEADER_LENGTH, encode_record, prepare_fields
from aamva_models import (
    DecodeResult,
    RecordMetadata,
    ValidationField,
    ValidationReport,
    ValidationStatus,
)
from aamva_validation_rules import (
    AAMVA_ELEMENT_RULES,
    CRITICAL,
    CRITICALITY_WEIGHTS,
    DL_ONLY_TAGS,
    OPTIONAL,
    STRUCTURAL_CHECK_WEIGHT,
)
from config import config
from field_catalog import mandatory_tags, optional_tags, require, split_known_tags
from field_formatter import is_valid_record_date, sanitize_text

# Report order, most severe first
STATUS_ORDER = {
    ValidationStatus.CRITICAL_INVALID: 0,
    ValidationStatus.FORMAT_ERROR: 1,
    ValidationStatus.MISMATCH: 2,
    ValidationStatus.MISSING_IN_SCAN: 3,
    ValidationStatus.MATCH: 4,
}

# Diagnostics already covered by a structural check
STRUCTURAL_DIAGNOSTICS = [LENGTH_MISMATCH, OFFSET_OUT_OF_RANGE, TRAILING_DATA, SUBFILE_MARKER_MISMATCH]


def _structural_checks(decoded: DecodeResult, metadata: RecordMetadata) -> List[Tuple[bool, str]]:
    """
    Evaluate record structure

    Returns:
        List of (passed, note) pairs, one per structural check
    """
    if decoded.fatal:
        reason = "; ".join(d.message for d in decoded.diagnostics if d.fatal)
        return [
            (False, f"Critical: {reason}. Scanners will fail to read this record."),
            (False, "Standard version not checked: header is unreadable"),
            (False, "Designator offsets not checked: header is unreadable"),
            (False, "Designator lengths not checked: header is unreadable"),
            (False, "Subfile marker not checked: header is unreadable"),
        ]

    checks = [(True, "")]
    header = decoded.header
    designators = decoded.designators

    # Standard version
    version = header.standard_version if header else ""
    checks.append((
        version in config.RECOGNIZED_STANDARD_VERSIONS,
        f"Unrecognized AAMVA standard version {version!r}",
    ))

    # Offsets: first subfile right after the designator table, the rest back to back
    offsets_ok = bool(designators)
    if designators:
        count = header.number_of_entries if header and header.number_of_entries else len(designators)
        expected = HEADER_LENGTH + DESIGNATOR_LENGTH * count
        for designator in designators:
            if designator.offset != expected:
                offsets_ok = False
                break
            expected = designator.offset + designator.length
    checks.append((
        offsets_ok,
        "Designator offsets are inconsistent with the header and designator table size"
        if designators else "No readable subfile designator",
    ))

    # Lengths
    length_problems = [
        d.message for d in decoded.diagnostics
        if d.code in [LENGTH_MISMATCH, OFFSET_OUT_OF_RANGE, TRAILING_DATA]
    ]
    checks.append((
        bool(designators) and not length_problems,
        "; ".join(length_problems) or "No subfile length could be checked",
    ))

    # Subfile marker
    marker_ok = (
        bool(designators)
        and all(d.subfile_kind == metadata.subfile_kind for d in designators)
        and not decoded.has_diagnostic(SUBFILE_MARKER_MISMATCH)
    )
    kinds = ", ".join(d.subfile_kind for d in designators) or "none"
    checks.append((
        marker_ok,
        f"Subfile marker mismatch: expected {metadata.subfile_kind}, designators declare {kinds}",
    ))

    return checks


def _scored_tags(decoded: DecodeResult, metadata: RecordMetadata) -> List[str]:
    tags = [
        tag for tag in mandatory_tags()
        if not (metadata.subfile_kind == "ID" and tag in DL_ONLY_TAGS)
    ]
    tags += [tag for tag in optional_tags() if decoded.fields.get(tag)]
    return tags


def _passes_rule(pattern: Optional[str], value: str, country: str) -> bool:
    if pattern is None:
        return bool(value)
    if pattern == "date":
        return is_valid_record_date(value, country)
    return re.match(pattern, value) is not None


def _check_field(
    tag: str,
    scanned: Optional[str],
    form_value: str,
    expected: Optional[str],
    metadata: RecordMetadata
) -> Tuple[ValidationField, int, int, str]:
    """
    Score one element

    Returns:
        Tuple of (finding, weight earned, weight available, note or "")
    """
    spec = require(tag)
    rule = AAMVA_ELEMENT_RULES.get(tag, {"criticality": OPTIONAL, "pattern": None, "description": spec.description})
    weight = CRITICALITY_WEIGHTS[rule["criticality"]]
    description = rule["description"]
    scanned_value = scanned or ""

    placeholder_only = (
        spec.mandatory
        and not spec.placeholder_is_value
        and scanned_value == spec.placeholder
    )

    if not scanned_value or placeholder_only:
        if rule["criticality"] == CRITICAL:
            status = ValidationStatus.CRITICAL_INVALID
        else:
            status = ValidationStatus.MISSING_IN_SCAN
        if placeholder_only:
            note = f"{tag} ({description}) has no value; only the placeholder {spec.placeholder} was encoded"
        else:
            note = f"{tag} ({description}) is missing from the barcode"
        earned = 0
    elif not _passes_rule(rule["pattern"], scanned_value, metadata.country):
        status = ValidationStatus.FORMAT_ERROR
        note = f"{tag} ({description}) violates the AAMVA format: {scanned_value!r}"
        earned = 0
    elif expected is not None and scanned_value != expected.strip():
        status = ValidationStatus.MISMATCH
        note = f"{tag} ({description}) reads {scanned_value!r}, form gives {expected.strip()!r}"
        earned = 0
    else:
        status = ValidationStatus.MATCH
        note = ""
        earned = weight

    finding = ValidationField(
        tag=tag,
        description=description,
        form_value=form_value,
        scanned_value=scanned_value if scanned is not None else "Tag Missing",
        status=status,
    )
    return finding, earned, weight, note


def inspect_record(
    raw: str,
    form_values: Optional[Dict[str, str]] = None,
    metadata: Optional[RecordMetadata] = None
) -> ValidationReport:
    """
    Validate a raw record, optionally against the form it should represent

    Args:
        raw: Wire string (from the encoder or read back from a scan)
        form_values: Tag -> raw form value; when given, decoded values are
            compared with what the encoder would produce for them
        metadata: Expected record metadata

    Returns:
        ValidationReport
    """
    metadata = metadata or RecordMetadata()
    decoded = decode(raw)
    notes: List[str] = []
    earned = 0
    total = 0

    for passed, note in _structural_checks(decoded, metadata):
        total += STRUCTURAL_CHECK_WEIGHT
        if passed:
            earned += STRUCTURAL_CHECK_WEIGHT
        else:
            notes.append(note)

    for diagnostic in decoded.diagnostics:
        if not diagnostic.fatal and diagnostic.code not in STRUCTURAL_DIAGNOSTICS:
            notes.append(diagnostic.message)

    known_form: Dict[str, str] = {}
    expected: Dict[str, str] = {}
    if form_values is not None:
        known_form, unknown = split_known_tags(form_values)
        expected, _, _ = prepare_fields(form_values, metadata)
        for tag in unknown:
            notes.append(f"Form field {tag!r} is not an AAMVA element and was not encoded")

    findings = []
    for tag in _scored_tags(decoded, metadata):
        form_value = known_form.get(tag, "")
        finding, gained, weight, note = _check_field(
            tag,
            decoded.fields.get(tag),
            form_value,
            expected.get(tag) if sanitize_text(form_value) else None,
            metadata,
        )
        findings.append(finding)
        earned += gained
        total += weight
        if note:
            notes.append(note)

    findings.sort(key=lambda f: STATUS_ORDER[f.status])
    score = round(100 * earned / total) if total else 0
    score = max(0, min(100, score))

    if config.VERBOSE:
        print(f"📊 Compliance score: {score}% ({len(notes)} note(s))")

    return ValidationReport(
        is_header_valid=not decoded.fatal,
        raw_string=raw or "",
        fields=findings,
        overall_score=score,
        compliance_notes=notes,
    )


def validate(form_values: Dict[str, str], metadata: Optional[RecordMetadata] = None) -> ValidationReport:
    """
    Encode the form, decode the result and score it

    Safe to call on every form change: no I/O and no mutation of inputs.
    """
    metadata = metadata or RecordMetadata()
    record = encode_record(form_values, metadata)
    return inspect_record(record.raw, form_values, metadata)
