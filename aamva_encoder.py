"""
AAMVA DL/ID record encoder

Builds the exact text payload handed to the PDF417 renderer:

    header (21 bytes) + designator table (10 bytes per subfile) + subfile bodies

Encoding never fails: every value is coerced (uppercased, reduced to printable
ASCII, reformatted for its element kind and cut to its maximum length).
"""
from typing import Dict, List, Optional, Tuple

from aamva_models import Designator, EncodedRecord, RecordMetadata, TruncationResult
from config import config
from field_catalog import (
    NAME_TRUNCATION_TAGS,
    is_optional_value_present,
    mandatory_tags,
    optional_tags,
    require,
    split_known_tags,
)
from field_formatter import format_value, sanitize_text
from name_truncation import truncate_name

# Separators (AAMVA 2020 section D.12.3)
COMPLIANCE_INDICATOR = "@"
DATA_ELEMENT_SEPARATOR = "\x0A"   # LF
RECORD_SEPARATOR = "\x1E"         # RS
SEGMENT_TERMINATOR = "\x0D"       # CR
FILE_TYPE = "ANSI "

HEADER_LENGTH = 21
DESIGNATOR_LENGTH = 10

# Truncation indicator tag -> name tag it reports on
TRUNCATION_INDICATOR_TAGS = {indicator: name for name, indicator in NAME_TRUNCATION_TAGS.items()}


def prepare_fields(
    values: Dict[str, str],
    metadata: RecordMetadata
) -> Tuple[Dict[str, str], Dict[str, TruncationResult], List[str]]:
    """
    Coerce a form's values into the ordered element values of one subfile

    Args:
        values: Tag -> raw value (unknown tags are set aside)
        metadata: Record metadata (country drives date byte order)

    Returns:
        Tuple of (tag -> element value in canonical order,
                  name tag -> truncation result,
                  unknown tags)
    """
    known, unknown = split_known_tags(values)
    elements = {}
    truncation = {}

    for tag in NAME_TRUNCATION_TAGS:
        truncation[tag] = truncate_name(sanitize_text(known.get(tag, "")), config.NAME_TRUNCATION_LIMIT)

    for tag in mandatory_tags():
        spec = require(tag)
        if tag in truncation:
            value = truncation[tag].text
        elif tag in TRUNCATION_INDICATOR_TAGS:
            value = truncation[TRUNCATION_INDICATOR_TAGS[tag]].truncated
        elif tag == "DCG":
            value = format_value(spec, known.get(tag, ""), metadata) or metadata.country
        else:
            value = format_value(spec, known.get(tag, ""), metadata)
        elements[tag] = value or spec.placeholder

    for tag in optional_tags():
        raw = known.get(tag, "")
        if not is_optional_value_present(raw):
            continue
        value = format_value(require(tag), raw, metadata)
        if is_optional_value_present(value):
            elements[tag] = value

    return elements, truncation, unknown


def build_subfile(subfile_kind: str, elements: Dict[str, str]) -> str:
    """Subfile body: kind marker, LF-separated tag+value segments, CR"""
    segments = [f"{tag}{value}" for tag, value in elements.items()]
    return subfile_kind + DATA_ELEMENT_SEPARATOR.join(segments) + SEGMENT_TERMINATOR


def build_header(metadata: RecordMetadata, number_of_entries: int) -> str:
    return (
        COMPLIANCE_INDICATOR
        + DATA_ELEMENT_SEPARATOR
        + RECORD_SEPARATOR
        + SEGMENT_TERMINATOR
        + FILE_TYPE
        + metadata.issuer_identification_number
        + metadata.standard_version
        + metadata.jurisdiction_version
        + f"{number_of_entries:02d}"
    )


def build_designators(subfiles: List[Tuple[str, str]]) -> List[Designator]:
    """
    Lay subfiles out one after another behind the designator table

    Args:
        subfiles: (kind, body) pairs in output order
    """
    designators = []
    offset = HEADER_LENGTH + DESIGNATOR_LENGTH * len(subfiles)
    for kind, body in subfiles:
        length = len(body.encode('ascii'))
        designators.append(Designator(subfile_kind=kind, offset=offset, length=length))
        offset += length
    return designators


def assemble_record(
    subfiles: List[Tuple[str, str]],
    metadata: RecordMetadata,
    truncation: Optional[Dict[str, TruncationResult]] = None,
    quarantined_tags: Optional[List[str]] = None
) -> EncodedRecord:
    """Join header, designator table and bodies into one record"""
    header = build_header(metadata, len(subfiles))
    designators = build_designators(subfiles)
    bodies = [body for _, body in subfiles]
    raw = header + "".join(d.to_wire() for d in designators) + "".join(bodies)

    return EncodedRecord(
        raw=raw,
        header=header,
        designators=designators,
        subfile_bodies=bodies,
        truncation=truncation or {},
        quarantined_tags=quarantined_tags or [],
    )


def encode_record(values: Dict[str, str], metadata: Optional[RecordMetadata] = None) -> EncodedRecord:
    """
    Encode form values into an AAMVA record

    Args:
        values: Tag -> raw value
        metadata: Issuer number, versions, subfile kind and country

    Returns:
        EncodedRecord whose `raw` is the wire string
    """
    metadata = metadata or RecordMetadata()
    elements, truncation, unknown = prepare_fields(values, metadata)

    if config.VERBOSE:
        print(f"🧾 Encoding {metadata.subfile_kind} subfile with {len(elements)} elements")
        if unknown:
            print(f"⚠️ Ignoring unknown tags: {', '.join(unknown)}")

    body = build_subfile(metadata.subfile_kind, elements)
    return assemble_record([(metadata.subfile_kind, body)], metadata, truncation, unknown)


def encode(values: Dict[str, str], metadata: Optional[RecordMetadata] = None) -> str:
    """Encode form values and return only the wire string"""
    return encode_record(values, metadata).raw
