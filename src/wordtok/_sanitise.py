"""
Utilities for rendering tokens as displayable strings.
"""

import unicodedata


def _escape_ctrl_chars(s: str) -> str:
    """Replace all Unicode control characters with their escape sequences."""
    cleaned = []
    for c in s:
        # control category codes vary: Cc, Cf, Cn etc.
        # so check via first character
        if unicodedata.category(c)[0] != "C":
            cleaned.append(c)
        else:
            cleaned.append(f"\\u{ord(c):04x}")
    return "".join(cleaned)


def render_token(token: str) -> str:
    """
    Return a printable form of ``token``.

    Symbol tokens may be any non-word, non-space character, including control
    characters such as NUL, which would corrupt a terminal table.
    """
    return _escape_ctrl_chars(token)
