"""Custom exception hierarchy for wordtok errors."""


class WordTokError(Exception):
    """Base exception for all wordtok errors."""


class InvalidInputError(WordTokError):
    """Raised when an argument is not the string or sequence an operation requires."""

    def __init__(self, message: str, *, received: object = None) -> None:
        """Initialize with the offending value whose type gets appended to the message."""
        if received is not None:
            message = f"{message} (got {type(received).__name__})"
        super().__init__(message)
        self.received = received


class UninitializedVocabularyError(WordTokError):
    """Raised when encoding or decoding runs against an empty vocabulary."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "no vocabulary found, build vocabulary first using build_vocab()"
        )


class VocabularyLoadError(WordTokError):
    """Raised when a persisted vocabulary exists but cannot be parsed."""

    def __init__(self, message: str, *, vocab_file: str | None = None) -> None:
        extra = " "
        if vocab_file:
            extra += f"(path: {vocab_file}) "
        super().__init__(message + extra)
        self.vocab_file = vocab_file


class VocabularySaveError(WordTokError):
    """Raised when a vocabulary cannot be written to its destination."""

    def __init__(self, message: str, *, vocab_file: str | None = None) -> None:
        extra = " "
        if vocab_file:
            extra += f"(path: {vocab_file}) "
        super().__init__(message + extra)
        self.vocab_file = vocab_file
