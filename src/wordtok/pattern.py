from enum import Enum

import regex as re


class TokenPattern(str, Enum):
    """
    Regex patterns used to segment text into word and symbol tokens.

    ``WORD`` matches a maximal run of word characters (letters, digits,
    underscore) or a single character that is neither a word character nor
    whitespace. ``SYMBOL`` matches exactly one such standalone character.
    """

    WORD = r"\w+|[^\w\s]"
    SYMBOL = r"[^\w\s]"

    @property
    def compiled(self) -> re.Pattern[str]:
        """Return the compiled pattern (cached per member)."""
        return _COMPILED[self]


_COMPILED: dict[TokenPattern, re.Pattern[str]] = {
    pat: re.compile(pat.value) for pat in TokenPattern
}
