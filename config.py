"""
Configuration settings for the AAMVA Barcode Record API
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration"""

    # API Settings
    API_TITLE = "AAMVA Barcode Record API"
    API_VERSION = "1.0.0"
    API_DESCRIPTION = """
    Encoder, decoder and compliance validator for AAMVA DL/ID PDF417 data records.

    Features:
    - Byte-exact record encoding (header, designator table, subfile)
    - Designator-driven decoding with structural diagnostics
    - AAMVA name truncation (hyphen spaces, apostrophes, protected right-to-left)
    - Weighted compliance scoring with per-field findings
    """

    # Record defaults
    DEFAULT_IIN = os.getenv("AAMVA_DEFAULT_IIN", "636000")
    DEFAULT_STANDARD_VERSION = os.getenv("AAMVA_STANDARD_VERSION", "10")
    DEFAULT_JURISDICTION_VERSION = os.getenv("AAMVA_JURISDICTION_VERSION", "00")
    DEFAULT_SUBFILE_KIND = "DL"
    DEFAULT_COUNTRY = "USA"

    # Names (DCS, DAC, DAD) are truncated to this many characters
    NAME_TRUNCATION_LIMIT = 40

    # Supported values
    SUPPORTED_SUBFILE_KINDS = ["DL", "ID"]
    SUPPORTED_COUNTRIES = ["USA", "CAN"]
    RECOGNIZED_STANDARD_VERSIONS = ["01", "02", "03", "04", "05", "06", "07", "08", "09", "10"]

    # Console status output from the encoder/decoder/validator
    VERBOSE = os.getenv("AAMVA_VERBOSE", "").lower() in ["on", "true", "1", "enabled"]


# Create global config instance
config = Config()
