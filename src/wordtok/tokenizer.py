"""
Word-level tokenizer backed by a persistent, growable vocabulary file.
"""

import logging
import os
from pathlib import Path
from dataclasses import asdict, dataclass
from typing import Sequence

from . import codec
from ._decorators import measure_time
from .errors import InvalidInputError
from .segmenter import tokenize
from .types import ForwardVocab, Token, TokenId
from .vocab import Vocabulary, VocabularyStore, export_json, import_json

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class VocabStats:
    """Snapshot of vocabulary size and counter state."""

    size: int
    next_token_id: int
    has_unknown_token: bool

    def to_dict(self) -> dict[str, int | bool]:
        return asdict(self)


class WordTokenizer:
    """
    Tokenize, encode and decode text against a vocabulary persisted as JSON.

    The vocabulary file is the source of truth: every call reads it, and
    calls that insert tokens write it back before returning.
    """

    def __init__(self, vocab_file: str | os.PathLike[str] | None = None) -> None:
        """
        :param vocab_file: Vocabulary path. Defaults to ``$WORDTOK_VOCAB_FILE``
            or ``data/vocab.json``.
        """
        self.store = VocabularyStore(vocab_file)

    @property
    def vocab_file(self) -> Path:
        return self.store.vocab_file

    def tokenize(self, text: object) -> list[Token]:
        """Split text into lowercased words and verbatim punctuation."""
        return tokenize(text)

    def encode(self, text: str, expand_vocab: bool = True) -> list[TokenId]:
        """
        Encode text into token IDs.

        With ``expand_vocab`` unseen tokens are added to the vocabulary, which
        is saved only if something was added. Otherwise they map to ``[UNK]``.

        :raises InvalidInputError: If ``text`` is not a string.
        :raises UninitializedVocabularyError: If no vocabulary has been built.
        """
        vocab = self.store.load()
        result = codec.encode(text, vocab, expand_vocab=expand_vocab)
        if result.n_added:
            self.store.save(vocab)
        return result.ids

    def decode(self, ids: Sequence[TokenId]) -> str:
        """
        Decode token IDs back into text.

        :raises InvalidInputError: If ``ids`` is not a list of integers.
        :raises UninitializedVocabularyError: If no vocabulary has been built.
        """
        return codec.decode(ids, self.store.load())

    def encode_batch(
        self, texts: Sequence[str], expand_vocab: bool = True
    ) -> list[list[TokenId]]:
        """Encode texts in order against one load of the vocabulary, saving at most once."""
        _check_texts(texts)
        vocab = self.store.load()
        encoded: list[list[TokenId]] = []
        n_added = 0
        for text in texts:
            result = codec.encode(text, vocab, expand_vocab=expand_vocab)
            n_added += result.n_added
            encoded.append(result.ids)
        if n_added:
            self.store.save(vocab)
        return encoded

    def decode_batch(self, id_batches: Sequence[Sequence[TokenId]]) -> list[str]:
        """Decode several ID sequences against one load of the vocabulary."""
        if not isinstance(id_batches, (list, tuple)):
            raise InvalidInputError("id batches must be a list", received=id_batches)
        vocab = self.store.load()
        return [codec.decode(ids, vocab) for ids in id_batches]

    @measure_time
    def build_vocab(self, texts: Sequence[str]) -> Vocabulary:
        """
        Rebuild the vocabulary from scratch out of a training corpus.

        Starts from a vocabulary holding only ``[UNK]``, inserts every token
        of every text in order, then saves once.

        :param texts: Training texts.
        :returns: The built vocabulary.
        :raises InvalidInputError: If ``texts`` is not a list of strings.
        """
        _check_texts(texts)

        vocab = Vocabulary.initialize()
        for text in texts:
            codec.encode(text, vocab, expand_vocab=True)

        self.store.save(vocab)
        log.info(f"built vocabulary of {len(vocab)} tokens from {len(texts)} texts")
        return vocab

    def initialize_vocab(self) -> Vocabulary:
        """Overwrite the vocabulary file with one holding only ``[UNK]``."""
        vocab = Vocabulary.initialize()
        self.store.save(vocab)
        return vocab

    def reset_vocab(self) -> Vocabulary:
        """Replace the vocabulary file with one holding only ``[UNK]``."""
        return self.store.reset()

    def get_vocab_size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        return len(self.store.load())

    def get_vocabulary(self) -> ForwardVocab:
        """Return a copy of the token -> ID mapping."""
        return dict(self.store.load().vocab)

    def get_stats(self) -> VocabStats:
        vocab = self.store.load()
        return VocabStats(
            size=len(vocab),
            next_token_id=vocab.next_token_id,
            has_unknown_token=vocab.has_unknown_token,
        )

    def export_vocab(self) -> str:
        """Return the vocabulary as a JSON string suitable for :meth:`import_vocab`."""
        return export_json(self.store.load())

    def import_vocab(self, json_str: str) -> Vocabulary:
        """
        Replace the vocabulary with one exported by :meth:`export_vocab`.

        This is a full replacement, not a merge.

        :raises InvalidInputError: If ``json_str`` is not a valid vocabulary JSON.
        """
        vocab = import_json(json_str)
        self.store.save(vocab)
        log.info(f"imported vocabulary of {len(vocab)} tokens")
        return vocab


def _check_texts(texts: object) -> None:
    """Raise unless ``texts`` is a list or tuple of strings."""
    if not isinstance(texts, (list, tuple)):
        raise InvalidInputError("texts must be a list of strings", received=texts)
    for idx, text in enumerate(texts):
        if not isinstance(text, str):
            raise InvalidInputError(f"text at index {idx} is not a string", received=text)


__all__ = ["WordTokenizer", "VocabStats"]
