"""
Sex Field Normalizer
Converts various sex field representations to the AAMVA DBC code
"""

MALE = '1'
FEMALE = '2'
NOT_SPECIFIED = '9'


def normalize_sex_field(sex_value):
    """
    Normalize sex field to the AAMVA single-digit code

    Args:
        sex_value: Raw sex value from a form or an extraction service

    Returns:
        '1' (male), '2' (female) or '9' (not specified)
    """
    if not sex_value:
        return NOT_SPECIFIED

    sex_str = str(sex_value).strip().upper()

    # Already an AAMVA code
    if sex_str in [MALE, FEMALE, NOT_SPECIFIED]:
        return sex_str

    # MRZ style letters
    elif sex_str == 'M':
        return MALE
    elif sex_str == 'F':
        return FEMALE

    # Handle common variations
    elif sex_str in ['MALE', 'MAN', 'HOMME', 'MASCULINO', 'H']:
        return MALE
    elif sex_str in ['FEMALE', 'WOMAN', 'FEMME', 'FEMENINO']:
        return FEMALE

    # X, unspecified, empty or anything unrecognised
    else:
        return NOT_SPECIFIED
