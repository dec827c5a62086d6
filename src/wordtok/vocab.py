"""
Bidirectional token/ID vocabulary and its JSON file persistence.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Final

from .errors import InvalidInputError, VocabularyLoadError, VocabularySaveError
from .types import ForwardVocab, ReverseVocab, Token, TokenId

try:
    _version = version("wordtok")
except PackageNotFoundError:
    _version = "dev"


UNK_TOKEN: Final[str] = "[UNK]"
FORMAT_VERSION: Final[str] = _version
DEFAULT_VOCAB_FILE: Final[Path] = Path("data") / "vocab.json"
VOCAB_FILE_ENV: Final[str] = "WORDTOK_VOCAB_FILE"

log = logging.getLogger(__name__)


def resolve_vocab_file(vocab_file: str | os.PathLike[str] | None = None) -> Path:
    """
    Pick the vocabulary file path.

    An explicit argument wins, then the ``WORDTOK_VOCAB_FILE`` environment
    variable, then ``DEFAULT_VOCAB_FILE``.
    """
    if vocab_file is not None:
        return Path(vocab_file)
    env_file = os.environ.get(VOCAB_FILE_ENV, "").strip()
    if env_file:
        return Path(env_file)
    return DEFAULT_VOCAB_FILE


@dataclass
class Vocabulary:
    """
    Token to ID mapping with its exact inverse and a monotonic ID counter.

    IDs are handed out in insertion order starting at 0. ``next_token_id`` is
    always greater than every assigned ID and never goes back.
    """

    # token -> id
    vocab: ForwardVocab = field(default_factory=dict)
    # id -> token
    reverse_vocab: ReverseVocab = field(default_factory=dict)
    next_token_id: int = 0

    @classmethod
    def create_empty(cls) -> "Vocabulary":
        """Return a vocabulary with no entries."""
        return cls()

    @classmethod
    def initialize(cls) -> "Vocabulary":
        """Return a fresh vocabulary holding only the unknown-token marker."""
        vocab = cls.create_empty()
        vocab.insert(UNK_TOKEN)
        return vocab

    def insert(self, token: Token) -> TokenId:
        """
        Add ``token`` if it is new and return its ID.

        A token already present keeps its ID and the counter is untouched.
        """
        existing = self.vocab.get(token)
        if existing is not None:
            return existing
        tok_id = self.next_token_id
        self.next_token_id += 1
        self.vocab[token] = tok_id
        self.reverse_vocab[tok_id] = token
        return tok_id

    def get_id(self, token: Token) -> TokenId | None:
        return self.vocab.get(token)

    def get_token(self, token_id: TokenId) -> Token | None:
        return self.reverse_vocab.get(token_id)

    def __contains__(self, token: object) -> bool:
        return token in self.vocab

    def __len__(self) -> int:
        return len(self.vocab)

    def is_empty(self) -> bool:
        return not self.vocab

    @property
    def unknown_id(self) -> TokenId | None:
        """ID of the unknown-token marker, or None before initialization."""
        return self.vocab.get(UNK_TOKEN)

    @property
    def has_unknown_token(self) -> bool:
        return UNK_TOKEN in self.vocab

    def copy(self) -> "Vocabulary":
        """Return an independent copy; mutating it leaves this vocabulary untouched."""
        return Vocabulary(
            vocab=dict(self.vocab),
            reverse_vocab=dict(self.reverse_vocab),
            next_token_id=self.next_token_id,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation (JSON object keys must be strings)."""
        return {
            "vocab": dict(self.vocab),
            "reverseVocab": {str(tok_id): tok for tok_id, tok in self.reverse_vocab.items()},
            "nextTokenId": self.next_token_id,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Vocabulary":
        """
        Build a vocabulary from its wire representation.

        Missing ``vocab``, ``reverseVocab`` and ``nextTokenId`` default to
        ``{}``, ``{}`` and ``0``. Extra keys such as ``savedAt`` and
        ``version`` are ignored.

        :raises ValueError: If the payload is not an object, a field has the
            wrong type, or the two maps are not exact inverses.
        """
        if not isinstance(data, dict):
            raise ValueError(
                f"vocabulary data must be a JSON object, got {type(data).__name__}"
            )

        raw_vocab = _field(data, "vocab", {})
        raw_reverse = _field(data, "reverseVocab", {})
        next_token_id = _field(data, "nextTokenId", 0)

        if not isinstance(raw_vocab, dict) or not isinstance(raw_reverse, dict):
            raise ValueError("'vocab' and 'reverseVocab' must be JSON objects")
        if not _is_id(next_token_id):
            raise ValueError(f"'nextTokenId' must be a non-negative integer: {next_token_id!r}")

        vocab: ForwardVocab = {}
        for tok, tok_id in raw_vocab.items():
            if not _is_id(tok_id):
                raise ValueError(f"token id is not a non-negative integer: {tok!r} -> {tok_id!r}")
            vocab[tok] = tok_id

        reverse_vocab: ReverseVocab = {}
        for key, tok in raw_reverse.items():
            try:
                tok_id = int(key)
            except ValueError as e:
                raise ValueError(f"reverse vocabulary key is not an integer: {key!r}") from e
            if not isinstance(tok, str):
                raise ValueError(f"reverse vocabulary value is not a string: {tok!r}")
            reverse_vocab[tok_id] = tok

        # both maps must describe the same (token, id) pairs
        if len(vocab) != len(reverse_vocab) or any(
            reverse_vocab.get(tok_id) != tok for tok, tok_id in vocab.items()
        ):
            raise ValueError("'vocab' and 'reverseVocab' are not inverse mappings")

        if vocab:
            min_next = max(vocab.values()) + 1
            if next_token_id < min_next:
                log.warning(
                    f"nextTokenId {next_token_id} would reuse assigned ids, raising it to {min_next}"
                )
                next_token_id = min_next

        return cls(vocab=vocab, reverse_vocab=reverse_vocab, next_token_id=next_token_id)


def _field(data: dict[str, Any], key: str, default: Any) -> Any:
    # absent or null fields default; any other value is type-checked by the caller
    value = data.get(key)
    return default if value is None else value


def _is_id(value: Any) -> bool:
    # bool is an int subclass but never a valid id
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class VocabularyStore:
    """
    JSON file persistence for a :class:`Vocabulary`.

    The store assumes a single writer. Two processes that load, grow and save
    the same file concurrently race: the later save silently overwrites tokens
    inserted by the earlier one. No locking is attempted.
    """

    def __init__(self, vocab_file: str | os.PathLike[str] | None = None) -> None:
        """Bind the store to ``vocab_file`` (see :func:`resolve_vocab_file`)."""
        self.vocab_file: Path = resolve_vocab_file(vocab_file)

    def exists(self) -> bool:
        return self.vocab_file.exists()

    def load(self) -> Vocabulary:
        """
        Read the vocabulary from disk.

        A missing file is not an error and yields an empty vocabulary.

        :raises VocabularyLoadError: If the file exists but cannot be read or parsed.
        """
        path = self.vocab_file

        if not path.exists():
            log.debug(f"no vocabulary at {path}, starting empty")
            return Vocabulary.create_empty()

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            vocab = Vocabulary.from_dict(data)
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        except (OSError, ValueError) as e:
            raise VocabularyLoadError(
                f"failed to load vocabulary: {e}", vocab_file=str(path)
            ) from e

        log.debug(f"loaded {len(vocab)} tokens from {path}")
        return vocab

    def save(self, vocab: Vocabulary) -> None:
        """
        Write ``vocab`` to disk with a timestamp and format version.

        The payload goes to a temporary file in the target directory which is
        then renamed over the destination, so readers see either the old or
        the new file and never a partial one.

        :raises VocabularySaveError: If the destination cannot be written.
        """
        path = self.vocab_file
        payload = {
            **vocab.to_dict(),
            "savedAt": datetime.now(timezone.utc).isoformat(),
            "version": FORMAT_VERSION,
        }

        try:
            # create directory if does not exist
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                    json.dump(payload, f, indent=2, ensure_ascii=False)
                    f.write("\n")
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise VocabularySaveError(
                f"failed to save vocabulary: {e}", vocab_file=str(path)
            ) from e

        log.info(f"saved {len(vocab)} tokens to {path}")

    def reset(self) -> Vocabulary:
        """
        Replace the persisted vocabulary with a freshly initialized one.

        The new file is renamed over the old one, so a failed reset leaves the
        previous vocabulary in place.
        """
        vocab = Vocabulary.initialize()
        self.save(vocab)
        log.info(f"vocabulary at {self.vocab_file} reset")
        return vocab


def export_json(vocab: Vocabulary) -> str:
    """Serialize the maps and counter (no timestamp or version) to indented JSON."""
    return json.dumps(vocab.to_dict(), indent=2, ensure_ascii=False)


def import_json(text: str) -> Vocabulary:
    """
    Parse an exported vocabulary.

    The result replaces whatever vocabulary the caller held; nothing is merged.

    :raises InvalidInputError: If ``text`` is not a string or not a valid vocabulary JSON.
    """
    if not isinstance(text, str):
        raise InvalidInputError("vocabulary JSON must be a string", received=text)
    try:
        return Vocabulary.from_dict(json.loads(text))
    except ValueError as e:
        raise InvalidInputError(f"invalid vocabulary JSON: {e}") from e


__all__ = [
    "UNK_TOKEN",
    "FORMAT_VERSION",
    "DEFAULT_VOCAB_FILE",
    "VOCAB_FILE_ENV",
    "Vocabulary",
    "VocabularyStore",
    "resolve_vocab_file",
    "export_json",
    "import_json",
]
