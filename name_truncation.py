"""
AAMVA name truncation (DL/ID Card Design Standard, Annex A.7.7)

Names longer than the field limit are shortened in a fixed order:
  1. spaces adjacent to hyphens, right to left
  2. apostrophes, right to left
  3. remaining characters, right to left, never removing a hyphen, a space
     or the character that follows a hyphen or space
If the name still does not fit, it is cut to the limit.
"""
from aamva_models import TruncationResult
from config import config

PROTECTED_SEPARATORS = "- "


def _join_kept(text: str, removed: set) -> str:
    return ''.join(char for i, char in enumerate(text) if i not in removed)


def _drop_hyphen_spaces(text: str, limit: int) -> str:
    """
    Phase 1: remove whitespace touching a hyphen, rightmost first

    A whitespace run next to a hyphen empties one character at a time from
    its hyphen side, so each run is handled whole in a single right-to-left
    pass.
    """
    excess = len(text) - limit
    removed = set()
    i = len(text) - 1
    while i >= 0 and len(removed) < excess:
        if not text[i].isspace():
            i -= 1
            continue
        end = i
        while i >= 0 and text[i].isspace():
            i -= 1
        start = i + 1

        if end + 1 < len(text) and text[end + 1] == '-':
            run = range(end, start - 1, -1)
        elif start > 0 and text[start - 1] == '-':
            run = range(start, end + 1)
        else:
            continue
        for j in run:
            if len(removed) == excess:
                break
            removed.add(j)

    return _join_kept(text, removed)


def _drop_apostrophes(text: str, limit: int) -> str:
    """Phase 2: remove apostrophes, rightmost first"""
    excess = len(text) - limit
    removed = set()
    for i in range(len(text) - 1, -1, -1):
        if len(removed) >= excess:
            break
        if text[i] == "'":
            removed.add(i)
    return _join_kept(text, removed)


def protected_positions(text: str) -> set:
    """Indexes phase 3 may never remove"""
    protected = set()
    for i, char in enumerate(text):
        if char in PROTECTED_SEPARATORS:
            protected.add(i)
        elif i > 0 and text[i - 1] in PROTECTED_SEPARATORS:
            protected.add(i)
    return protected


def _drop_unprotected(text: str, limit: int) -> str:
    """Phase 3: remove unprotected characters from the right"""
    excess = len(text) - limit
    if excess <= 0:
        return text

    protected = protected_positions(text)
    removed = set()
    for i in range(len(text) - 1, -1, -1):
        if len(removed) == excess:
            break
        if i not in protected:
            removed.add(i)

    return _join_kept(text, removed)


def truncate_name(value: str, limit: int = config.NAME_TRUNCATION_LIMIT) -> TruncationResult:
    """
    Shorten a name to at most `limit` characters

    Args:
        value: Raw name text
        limit: Maximum length (AAMVA uses 40 for DCS/DAC/DAD)

    Returns:
        TruncationResult with the uppercased text and 'T' if any phase
        changed it, otherwise 'N'
    """
    current = (value or "").upper().strip()
    limit = max(int(limit), 0)
    if len(current) <= limit:
        return TruncationResult(text=current, truncated='N')

    text = _drop_hyphen_spaces(current, limit)
    text = _drop_apostrophes(text, limit)
    text = _drop_unprotected(text, limit)

    # Fallback once every removable character is gone
    if len(text) > limit:
        text = text[:limit]
    text = text.strip()

    if config.VERBOSE:
        print(f"✂️ Truncated name ({len(current)} -> {len(text)}): {text}")

    return TruncationResult(text=text, truncated='T' if text != current else 'N')
