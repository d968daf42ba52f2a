"""
AAMVA element validation rules used for compliance scoring
"""

CRITICAL = "critical"
SECONDARY = "secondary"
OPTIONAL = "optional"

# Score weight per criticality
CRITICALITY_WEIGHTS = {
    CRITICAL: 10,
    SECONDARY: 4,
    OPTIONAL: 2,
}

# Weight of each structural check (header, version, offsets, lengths, marker)
STRUCTURAL_CHECK_WEIGHT = 10

# Elements that only apply to driver licenses
DL_ONLY_TAGS = ["DCA", "DCB", "DCD"]

# Rule kinds for "pattern": a regex the element value must fully match,
# "date": 8 digits in the record country's byte order, None: presence only
AAMVA_ELEMENT_RULES = {
    # Identity and legal elements
    "DAQ": {"criticality": CRITICAL, "pattern": r"^[A-Z0-9 \-]+$",
            "description": "License number"},
    "DCS": {"criticality": CRITICAL, "pattern": r"^[A-Z][A-Z ,'\-\.]*$",
            "description": "Last name"},
    "DAC": {"criticality": CRITICAL, "pattern": r"^[A-Z][A-Z ,'\-\.]*$",
            "description": "First name"},
    "DBB": {"criticality": CRITICAL, "pattern": "date",
            "description": "Date of birth"},
    "DBA": {"criticality": CRITICAL, "pattern": "date",
            "description": "Expiration date"},
    "DCG": {"criticality": CRITICAL, "pattern": r"^(USA|CAN)$",
            "description": "Country"},
    "DAJ": {"criticality": CRITICAL, "pattern": r"^[A-Z]{2}$",
            "description": "State / province code"},

    # Mandatory but secondary elements
    "DCA": {"criticality": SECONDARY, "pattern": r"^[A-Z0-9 ]{1,6}$",
            "description": "Class"},
    "DCB": {"criticality": SECONDARY, "pattern": r"^[A-Z0-9 ]{1,12}$",
            "description": "Restrictions"},
    "DCD": {"criticality": SECONDARY, "pattern": r"^[A-Z0-9 ]{1,5}$",
            "description": "Endorsements"},
    "DAD": {"criticality": SECONDARY, "pattern": r"^[A-Z][A-Z ,'\-\.]*$",
            "description": "Middle name"},
    "DBD": {"criticality": SECONDARY, "pattern": "date",
            "description": "Issue date"},
    "DBC": {"criticality": SECONDARY, "pattern": r"^[129]$",
            "description": "Sex"},
    "DAY": {"criticality": SECONDARY, "pattern": r"^(BLK|BLU|BRO|GRY|GRN|HAZ|MAR|PNK|DIC|UNK)$",
            "description": "Eye color"},
    "DAU": {"criticality": SECONDARY, "pattern": r"^\d{3} (IN|CM)$",
            "description": "Height"},
    "DAG": {"criticality": SECONDARY, "pattern": None,
            "description": "Address street"},
    "DAI": {"criticality": SECONDARY, "pattern": None,
            "description": "City"},
    "DAK": {"criticality": SECONDARY, "pattern": r"^[A-Z0-9]{5,11}$",
            "description": "Postal code"},
    "DCF": {"criticality": SECONDARY, "pattern": r"^[A-Z0-9 \-]+$",
            "description": "Document discriminator"},
    "DDE": {"criticality": SECONDARY, "pattern": r"^[TNU]$",
            "description": "Family name truncation"},
    "DDF": {"criticality": SECONDARY, "pattern": r"^[TNU]$",
            "description": "First name truncation"},
    "DDG": {"criticality": SECONDARY, "pattern": r"^[TNU]$",
            "description": "Middle name truncation"},

    # Optional elements (scored only when present)
    "DAZ": {"criticality": OPTIONAL, "pattern": r"^(BAL|BLK|BLN|BRO|GRY|RED|SDY|WHI|UNK)$",
            "description": "Hair color"},
    "DAW": {"criticality": OPTIONAL, "pattern": r"^\d{3}$",
            "description": "Weight (pounds)"},
    "DAX": {"criticality": OPTIONAL, "pattern": r"^\d{3}$",
            "description": "Weight (kilograms)"},
    "DDA": {"criticality": OPTIONAL, "pattern": r"^[FN]$",
            "description": "Compliance type"},
    "DDB": {"criticality": OPTIONAL, "pattern": "date",
            "description": "Card revision date"},
    "DDC": {"criticality": OPTIONAL, "pattern": "date",
            "description": "HAZMAT endorsement expiration date"},
    "DDH": {"criticality": OPTIONAL, "pattern": "date",
            "description": "Under 18 until"},
    "DDI": {"criticality": OPTIONAL, "pattern": "date",
            "description": "Under 19 until"},
    "DDJ": {"criticality": OPTIONAL, "pattern": "date",
            "description": "Under 21 until"},
    "DDD": {"criticality": OPTIONAL, "pattern": r"^[01]$",
            "description": "Limited duration document"},
    "DDK": {"criticality": OPTIONAL, "pattern": r"^[01]$",
            "description": "Organ donor"},
    "DDL": {"criticality": OPTIONAL, "pattern": r"^[01]$",
            "description": "Veteran"},
    "DCE": {"criticality": OPTIONAL, "pattern": r"^[0-9]$",
            "description": "Weight range"},
}
