"""Factory functions for creating tokenizers."""

import os
from pathlib import Path

from .errors import VocabularyLoadError
from .tokenizer import WordTokenizer


def get_tokenizer(vocab_file: str | os.PathLike[str] | None = None) -> WordTokenizer:
    """
    Create a tokenizer bound to a vocabulary file.

    The file does not need to exist yet; build or initialize a vocabulary
    before encoding.

    :param vocab_file: Vocabulary path. Defaults to ``$WORDTOK_VOCAB_FILE``
                       or ``data/vocab.json``.
    :return: Tokenizer instance.

    .. code-block:: python

        tokenizer = get_tokenizer("data/vocab.json")
        tokenizer.build_vocab(["Hello, world!"])
    """
    return WordTokenizer(vocab_file)


def from_pretrained(vocab_file: str | os.PathLike[str]) -> WordTokenizer:
    """
    Open a tokenizer over an existing vocabulary file.

    The file is loaded once up front so a corrupt vocabulary fails here
    rather than on the first encode.

    :param vocab_file: Path to a saved vocabulary JSON file.
    :return: Tokenizer instance.
    :raises VocabularyLoadError: If the file does not exist or cannot be parsed.

    .. code-block:: python

        tokenizer = from_pretrained("path/to/vocab.json")
        ids = tokenizer.encode("Hello world", expand_vocab=False)
    """
    path = Path(vocab_file)

    if not path.exists():
        raise VocabularyLoadError("vocabulary filepath does not exist", vocab_file=str(path))

    tokenizer = WordTokenizer(path)
    # surfaces parse errors immediately
    tokenizer.store.load()

    return tokenizer
