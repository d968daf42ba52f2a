"""
Per-kind coercion of raw form values into AAMVA element values
"""
import re
from datetime import datetime
from typing import Dict, Optional

from aamva_models import FieldKind, FieldSpec, RecordMetadata
from sex_field_normalizer import normalize_sex_field

# Byte order of 8-digit dates per country
DATE_FORMATS = {
    "USA": "%m%d%Y",
    "CAN": "%Y%m%d",
}

EYE_COLORS = {
    "BROWN": "BRO", "BLUE": "BLU", "GREEN": "GRN", "HAZEL": "HAZ",
    "BLACK": "BLK", "GRAY": "GRY", "GREY": "GRY", "MAROON": "MAR",
    "PINK": "PNK", "DICHROMATIC": "DIC", "UNKNOWN": "UNK"
}

HAIR_COLORS = {
    "BROWN": "BRO", "BLOND": "BLN", "BLONDE": "BLN", "BLACK": "BLK",
    "RED": "RED", "WHITE": "WHI", "GRAY": "GRY", "GREY": "GRY",
    "BALD": "BAL", "SANDY": "SDY", "AUBURN": "RED", "UNKNOWN": "UNK"
}

# Color elements and the names they accept
COLOR_TAGS = {"DAY": EYE_COLORS, "DAZ": HAIR_COLORS}


def sanitize_text(value) -> str:
    """
    Uppercase a value and keep printable ASCII only

    Args:
        value: Any raw value (None is treated as empty)

    Returns:
        Cleaned, trimmed text
    """
    if value is None:
        return ""
    text = str(value).upper()
    # Printable ASCII only (0x20-0x7E), line breaks collapse to spaces
    text = re.sub(r'[\r\n\t]', ' ', text)
    text = re.sub(r'[^\x20-\x7E]', '', text)
    return text.strip()


def _calendar_date(year: int, month: int, day: int) -> Optional[datetime]:
    if year < 1800 or year > 2199:
        return None
    try:
        return datetime(year, month, day)
    except ValueError:
        return None


def parse_date_digits(digits: str) -> Optional[datetime]:
    """
    Read an 8-digit date written either YYYYMMDD or MMDDYYYY

    Returns:
        datetime, or None when neither order gives a real calendar date
    """
    if not re.match(r'^\d{8}$', digits or ''):
        return None
    year_first = _calendar_date(int(digits[0:4]), int(digits[4:6]), int(digits[6:8]))
    if year_first:
        return year_first
    return _calendar_date(int(digits[4:8]), int(digits[0:2]), int(digits[2:4]))


def format_date(value: str, country: str) -> str:
    """
    Convert a date to the 8-digit byte order of the record's country

    USA records use MMDDYYYY, Canadian records YYYYMMDD. Input may be in
    either order and may contain separators. Unreadable dates are returned
    as their digits so the validator can flag them.
    """
    digits = re.sub(r'\D', '', value or '')
    parsed = parse_date_digits(digits)
    if parsed is None:
        return digits[:8]
    return parsed.strftime(DATE_FORMATS.get(country, DATE_FORMATS["USA"]))


def is_valid_record_date(value: str, country: str) -> bool:
    """True when value is a real date in the country's byte order"""
    if not re.match(r'^\d{8}$', value or ''):
        return False
    try:
        parsed = datetime.strptime(value, DATE_FORMATS.get(country, DATE_FORMATS["USA"]))
    except ValueError:
        return False
    return 1800 <= parsed.year <= 2199


def format_height(value: str) -> str:
    """
    Normalize height to three digits plus a unit

    Accepts inches ("69", "069 IN"), feet and inches ("5-09", 5'09")
    and centimetres ("175 CM", "175").

    Returns:
        "NNN IN" / "NNN CM", or "" when no number is present
    """
    text = (value or '').upper()
    numbers = re.findall(r'\d+', text)
    if not numbers:
        return ""

    # Bare numbers above 100 are taken as centimetres unless inches are stated
    if 'CM' in text or (len(numbers) == 1 and int(numbers[0]) > 100 and 'IN' not in text):
        return f"{min(int(numbers[0]), 999):03d} CM"

    if len(numbers) >= 2:
        inches = int(numbers[0]) * 12 + int(numbers[1])
    elif int(numbers[0]) <= 8 and 'IN' not in text:
        # A single small number is feet
        inches = int(numbers[0]) * 12
    else:
        inches = int(numbers[0])

    return f"{min(inches, 999):03d} IN"


def format_weight(value: str) -> str:
    digits = re.sub(r'\D', '', value or '')
    if not digits:
        return ""
    return digits[:3].rjust(3, '0')


def format_postal_code(value: str, country: str, width: int = 11) -> str:
    """
    Keep alphanumerics and pad to the fixed field width

    US ZIP codes without the +4 part are zero-filled to nine digits as the
    standard requires, then space-padded like Canadian codes.
    """
    code = re.sub(r'[^A-Z0-9]', '', (value or '').upper())
    if not code:
        return ""
    if country == "USA" and code.isdigit() and len(code) < 9:
        code = code.ljust(9, '0')
    return code[:width].ljust(width)


def normalize_color_code(value: str, colors: Dict[str, str]) -> str:
    """
    Map a color name to its 3-letter AAMVA code

    Exact names win, then the first name contained in the text; anything
    else keeps its first three letters.
    """
    if not value:
        return ""
    upper = value.upper().strip()
    if upper in colors.values():
        return upper
    if upper in colors:
        return colors[upper]
    for name, code in colors.items():
        if name in upper:
            return code
    return upper[:3]


def format_country(value: str) -> str:
    letters = re.sub(r'[^A-Z]', '', (value or '').upper())
    if letters in ['US', 'UNITEDSTATES', 'UNITEDSTATESOFAMERICA']:
        return 'USA'
    if letters in ['CA', 'CANADA']:
        return 'CAN'
    return letters[:3]


def format_value(spec: FieldSpec, value, metadata: RecordMetadata) -> str:
    """
    Coerce one raw value for the given element

    Returns:
        The element value without its tag, or "" when nothing usable was
        supplied (the caller decides on placeholders)
    """
    text = sanitize_text(value)
    if not text:
        return ""

    if spec.kind == FieldKind.DATE:
        formatted = format_date(text, metadata.country)
    elif spec.kind == FieldKind.SEX_CODE:
        formatted = normalize_sex_field(text)
    elif spec.kind == FieldKind.HEIGHT:
        formatted = format_height(text)
    elif spec.kind == FieldKind.WEIGHT:
        formatted = format_weight(text)
    elif spec.kind == FieldKind.COUNTRY_CODE:
        formatted = format_country(text)
    elif spec.tag in COLOR_TAGS:
        formatted = normalize_color_code(text, COLOR_TAGS[spec.tag])
    elif spec.tag == "DAK":
        formatted = format_postal_code(text, metadata.country, spec.max_length)
    else:
        formatted = ' '.join(text.split())

    return formatted[:spec.max_length]
