"""
Issuing jurisdictions: AAMVA issuer identification numbers and versions
"""
from typing import Dict, List, Optional

from aamva_models import RecordMetadata
from config import config

JURISDICTIONS = {
    # Structure: code: {"name": "Jurisdiction Name", "iin": "636xxx", "version": "NN", "country": "USA"}
    "NY": {"name": "New York", "iin": "636005", "version": "10", "country": "USA"},
    "CA": {"name": "California", "iin": "636014", "version": "10", "country": "USA"},
    "TX": {"name": "Texas", "iin": "636016", "version": "10", "country": "USA"},
    "FL": {"name": "Florida", "iin": "636010", "version": "10", "country": "USA"},
    "VA": {"name": "Virginia", "iin": "636001", "version": "10", "country": "USA"},
    "ON": {"name": "Ontario", "iin": "636012", "version": "10", "country": "CAN"},
    "QC": {"name": "Quebec", "iin": "636013", "version": "10", "country": "CAN"},
    "AL": {"name": "Alabama", "iin": "636033", "version": "08", "country": "USA"},
    "AZ": {"name": "Arizona", "iin": "636026", "version": "08", "country": "USA"},
    "GA": {"name": "Georgia", "iin": "636055", "version": "08", "country": "USA"},
    "IL": {"name": "Illinois", "iin": "636035", "version": "08", "country": "USA"},
    "MI": {"name": "Michigan", "iin": "636038", "version": "08", "country": "USA"},
    "NJ": {"name": "New Jersey", "iin": "636031", "version": "08", "country": "USA"},
    "NC": {"name": "North Carolina", "iin": "636007", "version": "08", "country": "USA"},
    "OH": {"name": "Ohio", "iin": "636022", "version": "08", "country": "USA"},
    "PA": {"name": "Pennsylvania", "iin": "636025", "version": "08", "country": "USA"},
    "WA": {"name": "Washington", "iin": "636036", "version": "08", "country": "USA"},
}


def get_jurisdiction_info(code) -> Dict:
    """Get full jurisdiction information by 2-letter code"""
    code = str(code or "").strip().upper()

    if len(code) != 2:
        return {"error": f"Invalid code format: {code}"}

    if code in JURISDICTIONS:
        data = JURISDICTIONS[code]
        return {
            "code": code,
            "name": data["name"],
            "iin": data["iin"],
            "version": data["version"],
            "country": data["country"],
            "status": "valid"
        }
    else:
        return {"error": f"Jurisdiction code not found: {code}"}


def detect_jurisdiction_from_code(code) -> Optional[Dict]:
    """Return jurisdiction info for a state/province code, or None"""
    info = get_jurisdiction_info(code)
    if "error" in info:
        return None
    return info


def search_jurisdiction(search_term) -> List[Dict]:
    """Search jurisdictions by name, code or IIN"""
    search_term = str(search_term or "").strip().lower()
    results = []
    if not search_term:
        return results

    for code, data in JURISDICTIONS.items():
        if (search_term in data["name"].lower() or
            search_term == code.lower() or
            search_term == data["iin"]):
            results.append(get_jurisdiction_info(code))

    return results


def metadata_for_jurisdiction(code, subfile_kind: str = config.DEFAULT_SUBFILE_KIND) -> RecordMetadata:
    """
    Build record metadata for an issuing jurisdiction

    Unknown codes fall back to the configured defaults.
    """
    info = detect_jurisdiction_from_code(code)
    if info is None:
        return RecordMetadata(subfile_kind=subfile_kind)
    return RecordMetadata(
        issuer_identification_number=info["iin"],
        standard_version=info["version"],
        jurisdiction_version=config.DEFAULT_JURISDICTION_VERSION,
        subfile_kind=subfile_kind,
        country=info["country"],
    )
