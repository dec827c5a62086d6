"""Split raw text into normalized word and punctuation tokens."""

from .pattern import TokenPattern
from .types import Token


def tokenize(text: object) -> list[Token]:
    """
    Split text into word runs and standalone symbol characters.

    Word runs are lowercased; symbol tokens are kept exactly as they appear.
    Whitespace only separates tokens and never produces one. Empty or
    non-string input yields an empty list instead of raising.

    :param text: Input text.
    :returns: Tokens in left-to-right order.
    """
    if not text or not isinstance(text, str):
        return []

    tokens: list[Token] = []
    for m in TokenPattern.WORD.compiled.finditer(text):
        tok = m.group(0)
        # symbols are a single char; anything longer is a word run
        if is_symbol(tok):
            tokens.append(tok)
        else:
            tokens.append(tok.lower())
    return tokens


def is_symbol(token: Token) -> bool:
    """Return True if ``token`` is one character that is neither a word character nor whitespace."""
    return TokenPattern.SYMBOL.compiled.fullmatch(token) is not None


__all__ = ["tokenize", "is_symbol"]
