"""
AAMVA DL/ID data element catalog (AAMVA 2020 Annex D)
"""
from typing import Dict, List, Optional, Tuple

from aamva_models import FieldKind, FieldSpec


class UnknownFieldTagError(KeyError):
    """Raised when code asks the catalog for a tag it does not define"""
    pass


# Values that mean "not supplied" for an optional element
OPTIONAL_SENTINELS = ["", "0", "N", "NONE"]

# Mandatory elements, in the order they are written to the subfile
MANDATORY_ELEMENTS = {
    "DCA": {"kind": FieldKind.FIXED_CODE, "max": 6, "placeholder": "NONE", "is_value": True,
            "description": "Jurisdiction-specific vehicle class"},
    "DCB": {"kind": FieldKind.FIXED_CODE, "max": 12, "placeholder": "NONE", "is_value": True,
            "description": "Jurisdiction-specific restriction codes"},
    "DCD": {"kind": FieldKind.FIXED_CODE, "max": 5, "placeholder": "NONE", "is_value": True,
            "description": "Jurisdiction-specific endorsement codes"},
    "DBA": {"kind": FieldKind.DATE, "max": 8, "placeholder": "NONE",
            "description": "Document expiration date"},
    "DCS": {"kind": FieldKind.TEXT, "max": 40, "placeholder": "NONE",
            "description": "Customer family name"},
    "DAC": {"kind": FieldKind.TEXT, "max": 40, "placeholder": "NONE",
            "description": "Customer first name"},
    "DAD": {"kind": FieldKind.TEXT, "max": 40, "placeholder": "NONE", "is_value": True,
            "description": "Customer middle name(s)"},
    "DBD": {"kind": FieldKind.DATE, "max": 8, "placeholder": "NONE",
            "description": "Document issue date"},
    "DBB": {"kind": FieldKind.DATE, "max": 8, "placeholder": "NONE",
            "description": "Date of birth"},
    "DBC": {"kind": FieldKind.SEX_CODE, "max": 1, "placeholder": "9", "is_value": True,
            "description": "Physical description - sex"},
    "DAY": {"kind": FieldKind.FIXED_CODE, "max": 3, "placeholder": "NONE",
            "description": "Physical description - eye color"},
    "DAU": {"kind": FieldKind.HEIGHT, "max": 6, "placeholder": "NONE",
            "description": "Physical description - height"},
    "DAG": {"kind": FieldKind.TEXT, "max": 35, "placeholder": "NONE",
            "description": "Address - street 1"},
    "DAI": {"kind": FieldKind.TEXT, "max": 20, "placeholder": "NONE",
            "description": "Address - city"},
    "DAJ": {"kind": FieldKind.FIXED_CODE, "max": 2, "placeholder": "NONE",
            "description": "Address - jurisdiction code"},
    "DAK": {"kind": FieldKind.FIXED_CODE, "max": 11, "placeholder": "NONE",
            "description": "Address - postal code"},
    "DAQ": {"kind": FieldKind.TEXT, "max": 25, "placeholder": "NONE",
            "description": "Customer ID number"},
    "DCF": {"kind": FieldKind.TEXT, "max": 25, "placeholder": "NONE",
            "description": "Document discriminator"},
    "DCG": {"kind": FieldKind.COUNTRY_CODE, "max": 3, "placeholder": "NONE",
            "description": "Country identification"},
    "DDE": {"kind": FieldKind.FIXED_CODE, "max": 1, "placeholder": "N", "is_value": True,
            "description": "Family name truncation"},
    "DDF": {"kind": FieldKind.FIXED_CODE, "max": 1, "placeholder": "N", "is_value": True,
            "description": "First name truncation"},
    "DDG": {"kind": FieldKind.FIXED_CODE, "max": 1, "placeholder": "N", "is_value": True,
            "description": "Middle name truncation"},
}

# Optional elements, written after the mandatory block when supplied
OPTIONAL_ELEMENTS = {
    "DAH": {"kind": FieldKind.TEXT, "max": 35, "description": "Address - street 2"},
    "DAZ": {"kind": FieldKind.FIXED_CODE, "max": 12, "description": "Hair color"},
    "DCI": {"kind": FieldKind.TEXT, "max": 33, "description": "Place of birth"},
    "DCJ": {"kind": FieldKind.TEXT, "max": 25, "description": "Audit information"},
    "DCK": {"kind": FieldKind.TEXT, "max": 25, "description": "Inventory control number"},
    "DBN": {"kind": FieldKind.TEXT, "max": 10, "description": "Alias / AKA family name"},
    "DBG": {"kind": FieldKind.TEXT, "max": 15, "description": "Alias / AKA given name"},
    "DBS": {"kind": FieldKind.TEXT, "max": 5, "description": "Alias / AKA suffix name"},
    "DCU": {"kind": FieldKind.TEXT, "max": 5, "description": "Name suffix"},
    "DCE": {"kind": FieldKind.FIXED_CODE, "max": 1, "description": "Physical description - weight range"},
    "DCL": {"kind": FieldKind.FIXED_CODE, "max": 3, "description": "Race / ethnicity"},
    "DDA": {"kind": FieldKind.FIXED_CODE, "max": 1, "description": "Compliance type"},
    "DDB": {"kind": FieldKind.DATE, "max": 8, "description": "Card revision date"},
    "DDC": {"kind": FieldKind.DATE, "max": 8, "description": "HAZMAT endorsement expiration date"},
    "DDD": {"kind": FieldKind.FIXED_CODE, "max": 1, "description": "Limited duration document indicator"},
    "DAW": {"kind": FieldKind.WEIGHT, "max": 3, "description": "Weight (pounds)"},
    "DAX": {"kind": FieldKind.WEIGHT, "max": 3, "description": "Weight (kilograms)"},
    "DDH": {"kind": FieldKind.DATE, "max": 8, "description": "Under 18 until"},
    "DDI": {"kind": FieldKind.DATE, "max": 8, "description": "Under 19 until"},
    "DDJ": {"kind": FieldKind.DATE, "max": 8, "description": "Under 21 until"},
    "DDK": {"kind": FieldKind.FIXED_CODE, "max": 1, "description": "Organ donor indicator"},
    "DDL": {"kind": FieldKind.FIXED_CODE, "max": 1, "description": "Veteran indicator"},
}

# Name elements and the truncation indicator each one drives
NAME_TRUNCATION_TAGS = {"DCS": "DDE", "DAC": "DDF", "DAD": "DDG"}


def _build_catalog() -> Dict[str, FieldSpec]:
    catalog = {}
    for tag, entry in MANDATORY_ELEMENTS.items():
        catalog[tag] = FieldSpec(
            tag=tag,
            kind=entry["kind"],
            max_length=entry["max"],
            mandatory=True,
            placeholder=entry["placeholder"],
            placeholder_is_value=entry.get("is_value", False),
            description=entry["description"],
        )
    for tag, entry in OPTIONAL_ELEMENTS.items():
        if tag in catalog:
            raise ValueError(f"Duplicate catalog tag: {tag}")
        catalog[tag] = FieldSpec(
            tag=tag,
            kind=entry["kind"],
            max_length=entry["max"],
            mandatory=False,
            description=entry["description"],
        )
    return catalog


# Built once at import, never mutated
FIELD_CATALOG: Dict[str, FieldSpec] = _build_catalog()


def lookup(tag: str) -> Optional[FieldSpec]:
    """Return the FieldSpec for a tag, or None if the tag is not in the catalog"""
    if not isinstance(tag, str):
        return None
    return FIELD_CATALOG.get(tag.upper())


def require(tag: str) -> FieldSpec:
    """
    Return the FieldSpec for a tag the caller knows must exist.

    Raises:
        UnknownFieldTagError: the tag is not registered (catalog and caller
        have drifted apart)
    """
    spec = lookup(tag)
    if spec is None:
        raise UnknownFieldTagError(tag)
    return spec


def is_known_tag(tag: str) -> bool:
    return lookup(tag) is not None


def mandatory_tags() -> List[str]:
    return list(MANDATORY_ELEMENTS.keys())


def optional_tags() -> List[str]:
    return list(OPTIONAL_ELEMENTS.keys())


def split_known_tags(values: Dict[str, str]) -> Tuple[Dict[str, str], List[str]]:
    """
    Separate catalog tags from unknown keys.

    Returns:
        Tuple of (known tag -> value with tags uppercased, sorted unknown keys)
    """
    known = {}
    unknown = []
    for key, value in (values or {}).items():
        spec = lookup(key)
        if spec is None:
            unknown.append(str(key))
        else:
            known[spec.tag] = "" if value is None else str(value)
    return known, sorted(unknown)


def is_optional_value_present(value: str) -> bool:
    """An optional element is only written when it carries a real value"""
    return (value or "").strip().upper() not in OPTIONAL_SENTINELS
