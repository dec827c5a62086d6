"""wordtok: word-level tokenization with a persistent vocabulary."""

from .api import TokenizerAPI
from .codec import EncodeResult, decode, encode, reconstruct_text
from .errors import (
    InvalidInputError,
    UninitializedVocabularyError,
    VocabularyLoadError,
    VocabularySaveError,
    WordTokError,
)
from .factory import from_pretrained, get_tokenizer
from .segmenter import is_symbol, tokenize
from .tokenizer import VocabStats, WordTokenizer
from .vocab import (
    DEFAULT_VOCAB_FILE,
    UNK_TOKEN,
    Vocabulary,
    VocabularyStore,
    export_json,
    import_json,
)

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("wordtok")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "WordTokenizer",
    "TokenizerAPI",
    "Vocabulary",
    "VocabularyStore",
    "VocabStats",
    "EncodeResult",
    "UNK_TOKEN",
    "DEFAULT_VOCAB_FILE",
    "WordTokError",
    "InvalidInputError",
    "UninitializedVocabularyError",
    "VocabularyLoadError",
    "VocabularySaveError",
    "tokenize",
    "is_symbol",
    "encode",
    "decode",
    "reconstruct_text",
    "export_json",
    "import_json",
    "get_tokenizer",
    "from_pretrained",
]
