"""
Value objects shared by the AAMVA encoder, decoder and validator
"""
import re
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import config


class FieldKind(str, Enum):
    """Semantic kind of a data element"""
    TEXT = "text"
    FIXED_CODE = "fixed_code"
    DATE = "date"
    SEX_CODE = "sex_code"
    HEIGHT = "height"
    WEIGHT = "weight"
    COUNTRY_CODE = "country_code"


class FieldSpec(BaseModel):
    """Catalog entry for one AAMVA data element"""
    model_config = ConfigDict(frozen=True)

    tag: str
    kind: FieldKind
    max_length: int
    mandatory: bool
    placeholder: str = ""
    placeholder_is_value: bool = False
    description: str = ""

    @field_validator('tag')
    @classmethod
    def validate_tag(cls, v):
        if not re.match(r'^[A-Z]{3}$', v):
            raise ValueError(f'tag must be exactly 3 uppercase letters, got {v!r}')
        return v


def _digits(value, width: int, default: str) -> str:
    digits = re.sub(r'\D', '', str(value or ''))
    if not digits:
        digits = default
    return digits[:width].rjust(width, '0')


class RecordMetadata(BaseModel):
    """
    Record-level values that are not data elements.

    Every field is coerced rather than rejected so that encoding never fails
    on a malformed metadata value.
    """
    model_config = ConfigDict(frozen=True)

    issuer_identification_number: str = config.DEFAULT_IIN
    standard_version: str = config.DEFAULT_STANDARD_VERSION
    jurisdiction_version: str = config.DEFAULT_JURISDICTION_VERSION
    subfile_kind: str = config.DEFAULT_SUBFILE_KIND
    country: str = config.DEFAULT_COUNTRY

    @field_validator('issuer_identification_number', mode='before')
    @classmethod
    def coerce_iin(cls, v):
        return _digits(v, 6, config.DEFAULT_IIN)

    @field_validator('standard_version', mode='before')
    @classmethod
    def coerce_standard_version(cls, v):
        return _digits(v, 2, config.DEFAULT_STANDARD_VERSION)

    @field_validator('jurisdiction_version', mode='before')
    @classmethod
    def coerce_jurisdiction_version(cls, v):
        return _digits(v, 2, config.DEFAULT_JURISDICTION_VERSION)

    @field_validator('subfile_kind', mode='before')
    @classmethod
    def coerce_subfile_kind(cls, v):
        kind = str(v or '').strip().upper()
        return kind if kind in config.SUPPORTED_SUBFILE_KINDS else config.DEFAULT_SUBFILE_KIND

    @field_validator('country', mode='before')
    @classmethod
    def coerce_country(cls, v):
        country = str(v or '').strip().upper()
        if country in ['CA', 'CAN', 'CANADA']:
            return 'CAN'
        return 'USA'


class TruncationResult(BaseModel):
    """Outcome of the AAMVA name truncation"""
    model_config = ConfigDict(frozen=True)

    text: str
    truncated: str  # 'T' or 'N'


class HeaderInfo(BaseModel):
    """The fixed 21-byte file header"""
    model_config = ConfigDict(frozen=True)

    compliance_indicator: str
    file_type: str
    issuer_identification_number: str
    standard_version: str
    jurisdiction_version: str
    number_of_entries: int


class Designator(BaseModel):
    """One 10-byte subfile designator"""
    model_config = ConfigDict(frozen=True)

    subfile_kind: str
    offset: int
    length: int

    def to_wire(self) -> str:
        return f"{self.subfile_kind}{self.offset:04d}{self.length:04d}"


class EncodedRecord(BaseModel):
    """The produced wire string plus the pieces it was assembled from"""
    model_config = ConfigDict(frozen=True)

    raw: str
    header: str
    designators: List[Designator]
    subfile_bodies: List[str]
    truncation: Dict[str, TruncationResult] = {}
    quarantined_tags: List[str] = []

    @property
    def byte_length(self) -> int:
        return len(self.raw.encode('ascii'))


class Diagnostic(BaseModel):
    """Advisory message produced while decoding"""
    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    fatal: bool = False


class DecodeResult(BaseModel):
    """Fields recovered from a raw record plus structural diagnostics"""
    model_config = ConfigDict(frozen=True)

    fields: Dict[str, str] = {}
    unknown_fields: Dict[str, str] = {}
    diagnostics: List[Diagnostic] = []
    header: Optional[HeaderInfo] = None
    designators: List[Designator] = []

    @property
    def fatal(self) -> bool:
        return any(d.fatal for d in self.diagnostics)

    def has_diagnostic(self, code: str) -> bool:
        return any(d.code == code for d in self.diagnostics)


class ValidationStatus(str, Enum):
    MATCH = "MATCH"
    MISMATCH = "MISMATCH"
    MISSING_IN_SCAN = "MISSING_IN_SCAN"
    FORMAT_ERROR = "FORMAT_ERROR"
    CRITICAL_INVALID = "CRITICAL_INVALID"


class ValidationField(BaseModel):
    """Finding for a single data element"""
    model_config = ConfigDict(frozen=True)

    tag: str
    description: str
    form_value: str = ""
    scanned_value: str = ""
    status: ValidationStatus


class ValidationReport(BaseModel):
    """Compliance report for one record"""
    model_config = ConfigDict(frozen=True)

    is_header_valid: bool
    raw_string: str
    fields: List[ValidationField] = Field(default_factory=list)
    overall_score: int = 0
    compliance_notes: List[str] = Field(default_factory=list)
