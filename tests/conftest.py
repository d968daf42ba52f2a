import sys
from pathlib import Path

import pytest

# Modules live at the repository root
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from aamva_models import RecordMetadata  # noqa: E402


@pytest.fixture
def ny_metadata():
    """Metadata for a New York driver license."""
    return RecordMetadata(
        issuer_identification_number="636005",
        standard_version="10",
        jurisdiction_version="00",
        subfile_kind="DL",
        country="USA",
    )


@pytest.fixture
def full_form():
    """A complete, valid USA driver license form."""
    return {
        "DCA": "D",
        "DCB": "NONE",
        "DCD": "NONE",
        "DBA": "20301231",
        "DCS": "SMITH",
        "DAC": "JOHN",
        "DAD": "QUINCY",
        "DBD": "01152020",
        "DBB": "19900101",
        "DBC": "M",
        "DAY": "BRO",
        "DAU": "5-09",
        "DAG": "123 MAIN ST",
        "DAI": "ALBANY",
        "DAJ": "NY",
        "DAK": "12207",
        "DAQ": "D1234567",
        "DCF": "DOC12345",
        "DCG": "USA",
    }


@pytest.fixture
def canadian_form():
    """A complete, valid Ontario driver license form."""
    return {
        "DCA": "G",
        "DCB": "NONE",
        "DCD": "NONE",
        "DBA": "2031-06-30",
        "DCS": "TREMBLAY",
        "DAC": "MARIE",
        "DAD": "NONE",
        "DBD": "2021-06-30",
        "DBB": "1985-03-14",
        "DBC": "F",
        "DAY": "BLU",
        "DAU": "165 cm",
        "DAG": "100 QUEEN ST W",
        "DAI": "TORONTO",
        "DAJ": "ON",
        "DAK": "M5H 2N2",
        "DAQ": "T1234-56789-01234",
        "DCF": "AB1234567",
        "DCG": "CAN",
    }
