"""Encode text to token IDs against a vocabulary and reconstruct text from IDs."""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from .errors import InvalidInputError, UninitializedVocabularyError
from .segmenter import is_symbol, tokenize
from .types import Token, TokenId
from .vocab import UNK_TOKEN, Vocabulary

log = logging.getLogger(__name__)


@dataclass
class EncodeResult:
    """Results from one encode call."""

    ids: list[TokenId] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)
    # tokens inserted into the vocabulary by this call
    n_added: int = 0


def encode(text: str, vocab: Vocabulary, expand_vocab: bool = True) -> EncodeResult:
    """
    Map each token of ``text`` to its vocabulary ID.

    Unseen tokens are inserted into ``vocab`` (mutating it) when
    ``expand_vocab`` is set, otherwise they map to the ``[UNK]`` ID. The
    caller decides whether to persist; ``n_added`` is non-zero exactly when
    the vocabulary changed.

    :param text: Text to encode.
    :param vocab: Vocabulary to look tokens up in.
    :param expand_vocab: Insert unseen tokens instead of mapping them to ``[UNK]``.
    :returns: IDs in token order, the tokens themselves and the insert count.
    :raises InvalidInputError: If ``text`` is not a string.
    :raises UninitializedVocabularyError: If ``vocab`` has no entries.
    """
    if not isinstance(text, str):
        raise InvalidInputError("text to encode must be a string", received=text)
    if vocab.is_empty():
        raise UninitializedVocabularyError()

    tokens = tokenize(text)
    unknown_id = vocab.unknown_id
    result = EncodeResult(tokens=tokens)

    for tok in tokens:
        tok_id = vocab.get_id(tok)
        if tok_id is None:
            if expand_vocab:
                tok_id = vocab.insert(tok)
                result.n_added += 1
            elif unknown_id is not None:
                tok_id = unknown_id
            else:
                # imported vocabularies may lack the marker
                raise UninitializedVocabularyError(
                    f"vocabulary has no {UNK_TOKEN} token to map unseen tokens to"
                )
        result.ids.append(tok_id)

    if result.n_added:
        log.debug(f"encode added {result.n_added} new tokens")
    return result


def decode(ids: Sequence[TokenId], vocab: Vocabulary) -> str:
    """
    Turn token IDs back into text.

    IDs with no mapping are replaced by the ``[UNK]`` marker instead of
    failing the call; the number of replacements is logged as a warning
    since the output alone cannot tell them apart from a real ``[UNK]``.

    :raises InvalidInputError: If ``ids`` is not a list or tuple.
    :raises UninitializedVocabularyError: If ``vocab`` has no entries.
    """
    if not isinstance(ids, (list, tuple)):
        raise InvalidInputError("token ids must be a list of integers", received=ids)
    if not vocab.reverse_vocab:
        raise UninitializedVocabularyError()

    tokens: list[Token] = []
    n_missing = 0
    for tok_id in ids:
        tok = None
        if isinstance(tok_id, int) and not isinstance(tok_id, bool):
            tok = vocab.get_token(tok_id)
        if tok is None:
            n_missing += 1
            tok = UNK_TOKEN
        tokens.append(tok)

    if n_missing:
        log.warning(f"{n_missing} token id(s) not in vocabulary, decoded as {UNK_TOKEN}")
    return reconstruct_text(tokens)


def reconstruct_text(tokens: Sequence[Token]) -> str:
    """
    Join tokens with single spaces, attaching standalone symbols to the left.

    This is lossy: original whitespace runs, leading and trailing whitespace
    and the space before a symbol are not recovered.
    """
    parts: list[str] = []
    for i, tok in enumerate(tokens):
        if i == 0 or is_symbol(tok):
            parts.append(tok)
        else:
            parts.append(" " + tok)
    return "".join(parts)


__all__ = ["EncodeResult", "encode", "decode", "reconstruct_text"]
