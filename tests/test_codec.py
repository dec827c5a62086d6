"""Unit tests for encoding against a vocabulary and text reconstruction."""

import logging

import pytest

import wordtok as wtok
from wordtok.errors import InvalidInputError, UninitializedVocabularyError


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def vocab():
    """Return a vocabulary trained on a single sentence."""
    v = wtok.Vocabulary.initialize()
    wtok.encode("Hello world.", v, expand_vocab=True)
    return v


# Encode
# ---------------------------------------------------------------------------


def test_encode_known_tokens(vocab):
    """Known tokens map to their ids in order and nothing is added."""
    result = wtok.encode("hello world.", vocab, expand_vocab=False)
    assert result.ids == [1, 2, 3]
    assert result.tokens == ["hello", "world", "."]
    assert result.n_added == 0


def test_encode_expands_vocabulary(vocab):
    """Unseen tokens are inserted when expansion is on."""
    result = wtok.encode("Hello there!", vocab, expand_vocab=True)
    assert result.ids == [1, 4, 5]
    assert result.n_added == 2
    assert vocab.vocab["there"] == 4
    assert vocab.reverse_vocab[5] == "!"


def test_encode_repeated_token_inserted_once(vocab):
    """The same unseen token twice gets one id and one insert."""
    result = wtok.encode("new new", vocab, expand_vocab=True)
    assert result.ids == [4, 4]
    assert result.n_added == 1
    assert vocab.next_token_id == 5


def test_encode_without_expansion_uses_unknown(vocab):
    """Unseen tokens map to [UNK] and the vocabulary is untouched."""
    before = vocab.copy()
    result = wtok.encode("Unseen word here", vocab, expand_vocab=False)
    assert result.ids == [0, 0, 0]
    assert result.n_added == 0
    assert vocab == before


def test_encode_is_deterministic(vocab):
    """Same text and same starting vocabulary give identical ids."""
    first = vocab.copy()
    second = vocab.copy()
    text = "A brand new sentence, with words."
    assert wtok.encode(text, first).ids == wtok.encode(text, second).ids


def test_encode_empty_text(vocab):
    """Empty text encodes to an empty list."""
    assert wtok.encode("", vocab).ids == []


def test_encode_uninitialized_vocabulary_raises():
    """Encoding against an empty vocabulary asks for a build first."""
    with pytest.raises(UninitializedVocabularyError, match="build vocabulary first"):
        wtok.encode("hello", wtok.Vocabulary.create_empty())


@pytest.mark.parametrize("value", [None, 123, ["hello"]])
def test_encode_non_string_raises(vocab, value):
    """Encode requires a string."""
    with pytest.raises(InvalidInputError):
        wtok.encode(value, vocab)


def test_encode_without_unknown_marker_raises():
    """Frozen encoding needs an [UNK] entry to fall back on."""
    v = wtok.Vocabulary.create_empty()
    v.insert("hello")
    with pytest.raises(UninitializedVocabularyError):
        wtok.encode("goodbye", v, expand_vocab=False)


# Decode
# ---------------------------------------------------------------------------


def test_roundtrip_canonical_text():
    """Canonical text survives encode then decode exactly."""
    v = wtok.Vocabulary.initialize()
    ids = wtok.encode("hello, world!", v).ids
    assert wtok.decode(ids, v) == "hello, world!"


def test_decode_unknown_id_becomes_marker(vocab, caplog):
    """Unmapped ids decode as [UNK] with a warning instead of failing."""
    with caplog.at_level(logging.WARNING, logger="wordtok.codec"):
        text = wtok.decode([1, 999, 2], vocab)
    assert text == "hello [UNK] world"
    assert "1 token id(s) not in vocabulary" in caplog.text


def test_decode_unknown_token_encoding(vocab):
    """A token encoded without expansion decodes to the marker text."""
    ids = wtok.encode("zzz_novel_token", vocab, expand_vocab=False).ids
    assert ids == [vocab.unknown_id]
    assert wtok.decode(ids, vocab) == wtok.UNK_TOKEN


def test_decode_empty_ids(vocab):
    """No ids decode to the empty string."""
    assert wtok.decode([], vocab) == ""


def test_decode_uninitialized_vocabulary_raises():
    """Decoding against an empty vocabulary fails."""
    with pytest.raises(UninitializedVocabularyError):
        wtok.decode([0], wtok.Vocabulary.create_empty())


def test_decode_non_list_raises(vocab):
    """Decode requires a list of ids."""
    with pytest.raises(InvalidInputError):
        wtok.decode("1 2 3", vocab)


# Reconstruction
# ---------------------------------------------------------------------------


def test_reconstruct_attaches_symbols():
    """Symbols hug the previous token, words get one space."""
    assert wtok.reconstruct_text(["the", "cat", "sat", "."]) == "the cat sat."
    assert wtok.reconstruct_text(["what", "?", "!"]) == "what?!"


def test_reconstruct_first_token_has_no_space():
    """Even a leading symbol gets no separator."""
    assert wtok.reconstruct_text(["(", "a", ")"]) == "(a)"
    assert wtok.reconstruct_text(["hello"]) == "hello"
    assert wtok.reconstruct_text([]) == ""


def test_reconstruct_is_lossy():
    """Spaces before symbols and multi-space runs are not recovered."""
    v = wtok.Vocabulary.initialize()
    ids = wtok.encode("a  -  b", v).ids
    assert wtok.decode(ids, v) == "a- b"


def test_reconstruct_multichar_marker_spaced_like_word():
    """[UNK] is not a single symbol, so it is preceded by a space."""
    assert wtok.reconstruct_text(["hi", "[UNK]", "!"]) == "hi [UNK]!"
