"""
Sanitization of data-extraction output before it is merged into a form

The extraction service returns a loose tag -> text map. Everything here
runs before encoding; the decoder never sees unsanitized text.
"""
import re
from typing import Dict

from field_catalog import lookup
from field_formatter import EYE_COLORS, HAIR_COLORS, format_height, normalize_color_code, sanitize_text

DATE_TAGS = ["DBA", "DBB", "DBD", "DDB", "DDC", "DDH", "DDI", "DDJ"]


def normalize_extracted_date(value: str) -> str:
    """Digits only; YYYYMMDD is flipped to MMDDYYYY"""
    if not value:
        return ""
    digits = re.sub(r'\D', '', value)
    if len(digits) == 8 and int(digits[0:4]) > 1900:
        return digits[4:6] + digits[6:8] + digits[0:4]
    return digits


def sanitize_extracted_fields(extracted: Dict) -> Dict[str, str]:
    """
    Clean a partial tag map from the extraction service

    Args:
        extracted: Tag -> value as returned by the extraction service

    Returns:
        Tag -> sanitized value, restricted to catalog tags with a value
    """
    sanitized = {}
    for key, raw in (extracted or {}).items():
        spec = lookup(str(key))
        if spec is None:
            continue

        value = sanitize_text(raw)
        if spec.tag == "DAY":
            value = normalize_color_code(value, EYE_COLORS)
        elif spec.tag == "DAZ":
            value = normalize_color_code(value, HAIR_COLORS)
        elif spec.tag == "DAU":
            value = format_height(value)
        elif spec.tag in DATE_TAGS:
            value = normalize_extracted_date(value)

        if value:
            sanitized[spec.tag] = value

    return sanitized
