"""
AAMVA DL/ID record decoder

Locates every subfile through the designator table (never by scanning for
markers) and reads its data elements with a small state machine. Malformed
input never raises: the decoder returns whatever it could recover together
with diagnostics. Only a missing header anchor is fatal.
"""
import re
from enum import Enum
from typing import Dict, List, Optional, Tuple

from aamva_encoder import (
    COMPLIANCE_INDICATOR,
    DATA_ELEMENT_SEPARATOR,
    DESIGNATOR_LENGTH,
    FILE_TYPE,
    HEADER_LENGTH,
    SEGMENT_TERMINATOR,
)
from aamva_models import DecodeResult, Designator, Diagnostic, HeaderInfo
from config import config
from field_catalog import is_known_tag

# Diagnostic codes
MISSING_COMPLIANCE_INDICATOR = "missing_compliance_indicator"
MISSING_FILE_TYPE = "missing_file_type"
SHORT_HEADER = "short_header"
BAD_ENTRY_COUNT = "bad_entry_count"
BAD_DESIGNATOR = "bad_designator"
OFFSET_OUT_OF_RANGE = "offset_out_of_range"
LENGTH_MISMATCH = "length_mismatch"
TRAILING_DATA = "trailing_data"
SUBFILE_MARKER_MISMATCH = "subfile_marker_mismatch"
MISSING_TERMINATOR = "missing_terminator"
MALFORMED_SEGMENT = "malformed_segment"
UNKNOWN_TAG = "unknown_tag"
DUPLICATE_TAG = "duplicate_tag"

SEPARATORS = (DATA_ELEMENT_SEPARATOR, SEGMENT_TERMINATOR)
TAG_PATTERN = re.compile(r'^[A-Z]{3}$')


class ParseState(Enum):
    EXPECT_KIND = "expect_kind"
    EXPECT_TAG = "expect_tag"
    READ_VALUE = "read_value"
    SKIP_SEGMENT = "skip_segment"


def parse_header(raw: str) -> HeaderInfo:
    """Read the fixed header fields; caller has checked the length"""
    count_text = raw[19:21]
    return HeaderInfo(
        compliance_indicator=raw[0:1],
        file_type=raw[4:9],
        issuer_identification_number=raw[9:15],
        standard_version=raw[15:17],
        jurisdiction_version=raw[17:19],
        number_of_entries=int(count_text) if count_text.isdigit() else 0,
    )


def parse_designators(raw: str, count: int, diagnostics: List[Diagnostic]) -> List[Designator]:
    designators = []
    for i in range(count):
        start = HEADER_LENGTH + i * DESIGNATOR_LENGTH
        entry = raw[start:start + DESIGNATOR_LENGTH]
        if len(entry) != DESIGNATOR_LENGTH or not entry[2:].isdigit():
            diagnostics.append(Diagnostic(
                code=BAD_DESIGNATOR,
                message=f"Designator {i + 1} at byte {start} is unreadable: {entry!r}",
            ))
            continue
        designators.append(Designator(
            subfile_kind=entry[0:2],
            offset=int(entry[2:6]),
            length=int(entry[6:10]),
        ))
    return designators


def _repair_kind_prefix(tag: str, value: str, subfile_kind: str) -> Tuple[str, str]:
    """Undo a subfile marker glued in front of a tag (e.g. 'DLDAQ...')"""
    segment = tag + value
    if (
        not is_known_tag(tag)
        and segment.startswith(subfile_kind)
        and is_known_tag(segment[len(subfile_kind):len(subfile_kind) + 3])
    ):
        start = len(subfile_kind)
        return segment[start:start + 3], segment[start + 3:]
    return tag, value


class SubfileParser:
    """
    State machine over one subfile body

    EXPECT_KIND -> EXPECT_TAG -> READ_VALUE -> EXPECT_TAG ...
    A segment whose tag is not three letters moves to SKIP_SEGMENT until the
    next separator.
    """

    def __init__(self, subfile_kind: str, diagnostics: List[Diagnostic]):
        self.subfile_kind = subfile_kind
        self.diagnostics = diagnostics
        self.fields: Dict[str, str] = {}
        self.unknown_fields: Dict[str, str] = {}
        self.state = ParseState.EXPECT_KIND
        self.tag = ""
        self.value = ""

    def parse(self, body: str) -> None:
        position = 0
        if self.state == ParseState.EXPECT_KIND:
            if body.startswith(self.subfile_kind):
                position = len(self.subfile_kind)
            else:
                self.diagnostics.append(Diagnostic(
                    code=SUBFILE_MARKER_MISMATCH,
                    message=f"Subfile starts with {body[:2]!r}, expected {self.subfile_kind!r}",
                ))
            self.state = ParseState.EXPECT_TAG

        for char in body[position:]:
            self._step(char)
        self._finish(body)

    def _step(self, char: str) -> None:
        is_separator = char in SEPARATORS

        if self.state == ParseState.EXPECT_TAG:
            if is_separator:
                if self.tag:
                    self._malformed(self.tag)
                return
            self.tag += char
            if len(self.tag) == 3:
                if TAG_PATTERN.match(self.tag):
                    self.state = ParseState.READ_VALUE
                else:
                    self.state = ParseState.SKIP_SEGMENT

        elif self.state == ParseState.READ_VALUE:
            if is_separator:
                self._emit()
            else:
                self.value += char

        elif self.state == ParseState.SKIP_SEGMENT:
            if is_separator:
                self._malformed(self.tag + self.value)
            else:
                self.value += char

    def _finish(self, body: str) -> None:
        if self.state == ParseState.READ_VALUE:
            self._emit()
        elif self.state == ParseState.SKIP_SEGMENT:
            self._malformed(self.tag + self.value)
        elif self.tag:
            self._malformed(self.tag)

        if not body.endswith(SEGMENT_TERMINATOR):
            self.diagnostics.append(Diagnostic(
                code=MISSING_TERMINATOR,
                message="Subfile does not end with the segment terminator (CR)",
            ))

    def _emit(self) -> None:
        tag, value = _repair_kind_prefix(self.tag, self.value, self.subfile_kind)
        value = value.strip()

        if not is_known_tag(tag):
            self.unknown_fields[tag] = value
            self.diagnostics.append(Diagnostic(
                code=UNKNOWN_TAG,
                message=f"Unknown element {tag} set aside",
            ))
        else:
            if tag in self.fields:
                self.diagnostics.append(Diagnostic(
                    code=DUPLICATE_TAG,
                    message=f"Element {tag} appears more than once; last value kept",
                ))
            self.fields[tag] = value
        self._reset()

    def _malformed(self, fragment: str) -> None:
        self.diagnostics.append(Diagnostic(
            code=MALFORMED_SEGMENT,
            message=f"Skipped malformed segment {fragment!r}",
        ))
        self._reset()

    def _reset(self) -> None:
        self.tag = ""
        self.value = ""
        self.state = ParseState.EXPECT_TAG


def decode(raw: Optional[str]) -> DecodeResult:
    """
    Decode a raw AAMVA record

    Args:
        raw: The text payload read from a PDF417 symbol

    Returns:
        DecodeResult with recovered fields and diagnostics
    """
    raw = raw or ""
    diagnostics: List[Diagnostic] = []

    # Anchor checks
    if not raw.startswith(COMPLIANCE_INDICATOR):
        return DecodeResult(diagnostics=[Diagnostic(
            code=MISSING_COMPLIANCE_INDICATOR,
            message="Missing compliance indicator (@) at byte 0",
            fatal=True,
        )])
    if raw[4:9] != FILE_TYPE:
        return DecodeResult(diagnostics=[Diagnostic(
            code=MISSING_FILE_TYPE,
            message=f"Missing file type 'ANSI ' at bytes 4-8, found {raw[4:9]!r}",
            fatal=True,
        )])

    if len(raw) < HEADER_LENGTH:
        diagnostics.append(Diagnostic(
            code=SHORT_HEADER,
            message=f"Header is {len(raw)} bytes, expected {HEADER_LENGTH}",
        ))
        return DecodeResult(diagnostics=diagnostics)

    header = parse_header(raw)
    count = header.number_of_entries
    if count < 1:
        diagnostics.append(Diagnostic(
            code=BAD_ENTRY_COUNT,
            message=f"Unreadable subfile count {raw[19:21]!r}; assuming 1",
        ))
        count = 1

    designators = parse_designators(raw, count, diagnostics)

    parsers = []
    record_end = HEADER_LENGTH + DESIGNATOR_LENGTH * count
    for designator in designators:
        if designator.offset >= len(raw):
            diagnostics.append(Diagnostic(
                code=OFFSET_OUT_OF_RANGE,
                message=f"{designator.subfile_kind} offset {designator.offset} points outside the record ({len(raw)} bytes)",
            ))
            continue

        body = raw[designator.offset:designator.offset + designator.length]
        if len(body) != designator.length:
            diagnostics.append(Diagnostic(
                code=LENGTH_MISMATCH,
                message=f"Length mismatch: declared {designator.length}, found {len(body)}. Hardware scanners may fail.",
            ))
        record_end = max(record_end, designator.offset + len(body))

        parser = SubfileParser(designator.subfile_kind, diagnostics)
        parser.parse(body)
        parsers.append(parser)

    if designators and len(raw) > record_end:
        diagnostics.append(Diagnostic(
            code=TRAILING_DATA,
            message=f"{len(raw) - record_end} bytes follow the last subfile",
        ))

    fields: Dict[str, str] = {}
    unknown_fields: Dict[str, str] = {}
    for parser in parsers:
        fields.update(parser.fields)
        unknown_fields.update(parser.unknown_fields)

    if config.VERBOSE:
        print(f"🔎 Decoded {len(fields)} elements from {len(designators)} subfile(s), {len(diagnostics)} diagnostic(s)")

    return DecodeResult(
        fields=fields,
        unknown_fields=unknown_fields,
        diagnostics=diagnostics,
        header=header,
        designators=designators,
    )
