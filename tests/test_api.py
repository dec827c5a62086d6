"""Unit tests for the request-level TokenizerAPI."""

import json

import pytest

import wordtok as wtok
from wordtok.errors import InvalidInputError


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def api(tmp_path):
    """Return an API whose vocabulary was trained on a small corpus."""
    api = wtok.TokenizerAPI(tmp_path / "vocab.json")
    api.train(["Hello, world!", "The quick brown fox."])
    return api


# Processing
# ---------------------------------------------------------------------------


def test_process_text_collapses_whitespace(api):
    """Whitespace is canonicalized before encoding so the round trip holds."""
    result = api.process_text("  Hello,   world!\n")
    assert result["original"] == "  Hello,   world!\n"
    assert result["processed"] == "Hello, world!"
    assert result["tokens"] == ["hello", ",", "world", "!"]
    assert result["encoded"] == [1, 2, 3, 4]
    assert result["decoded"] == "hello, world!"
    # decode lowercases words, so the comparison is against the cleaned text
    assert result["stats"]["roundTripSuccess"] is False


def test_process_text_stats(api):
    """Stats merge text counts with vocabulary info."""
    result = api.process_text("the fox\njumped.")
    stats = result["stats"]
    assert stats["words"] == 3
    assert stats["characters"] == len("the fox\njumped.")
    assert stats["lines"] == 2
    assert stats["tokenCount"] == 4
    assert stats["vocabSize"] == 11
    assert stats["roundTripSuccess"] is True


def test_process_text_optional_sections(api):
    """Tokens and stats can be left out."""
    result = api.process_text("hello", include_stats=False, include_tokens=False)
    assert "tokens" not in result
    assert "stats" not in result
    assert result["encoded"] == [1]


def test_process_text_frozen_vocabulary(api):
    """Without expansion unseen words come back as [UNK]."""
    result = api.process_text("hello stranger", expand_vocab=False)
    assert result["decoded"] == "hello [UNK]"
    assert result["stats"]["vocabSize"] == 10


@pytest.mark.parametrize("text", ["", "   ", None, 5])
def test_process_text_rejects_blank(api, text):
    with pytest.raises(InvalidInputError):
        api.process_text(text)


def test_batch_process_collects_failures(api):
    """A bad item is reported without aborting the batch."""
    results = api.batch_process(["hello world", "   ", "the fox"])
    assert [r["success"] for r in results] == [True, False, True]
    assert [r["index"] for r in results] == [0, 1, 2]
    assert results[0]["result"]["decoded"] == "hello world"
    assert "invalid text input" in results[1]["error"]


def test_batch_process_rejects_non_list(api):
    with pytest.raises(InvalidInputError):
        api.batch_process("hello")


# Training and vocabulary info
# ---------------------------------------------------------------------------


def test_train_reports_growth(tmp_path):
    """Training on an empty store reports every token as added."""
    api = wtok.TokenizerAPI(tmp_path / "vocab.json")
    result = api.train(["The cat sat.", "The dog ran."])
    assert result == {
        "success": True,
        "tokensAdded": 7,
        "vocabularySize": 7,
        "trainedOnTexts": 2,
    }


def test_get_vocabulary_info(api):
    """Tokens are listed in id order alongside statistics."""
    info = api.get_vocabulary_info()
    assert info["size"] == 10
    assert info["tokens"][:5] == ["[UNK]", "hello", ",", "world", "!"]
    assert info["statistics"] == {"size": 10, "nextTokenId": 10, "hasUnknownToken": True}


# Export / import state
# ---------------------------------------------------------------------------


def test_export_import_state(api, tmp_path):
    """Exported state restores the same vocabulary elsewhere."""
    state = api.export_state()
    assert state["statistics"]["size"] == 10
    assert "exportedAt" in state

    other = wtok.TokenizerAPI(tmp_path / "other.json")
    other.import_state(json.dumps(state))
    assert other.get_vocabulary_info()["vocabulary"] == api.get_vocabulary_info()["vocabulary"]


@pytest.mark.parametrize("state", ["not json", json.dumps({"statistics": {}}), json.dumps([1])])
def test_import_state_rejects_invalid(api, state):
    with pytest.raises(InvalidInputError):
        api.import_state(state)


# Request dispatch
# ---------------------------------------------------------------------------


def test_handle_tokenize(api):
    response = api.handle_request("tokenize", {"text": "Hi there!"})
    assert response == {"success": True, "tokens": ["hi", "there", "!"], "vocabSize": 10}


def test_handle_encode_respects_expand_flag(api):
    """expandVocab=False keeps the vocabulary frozen."""
    response = api.handle_request("encode", {"text": "hello stranger", "expandVocab": False})
    assert response["success"] is True
    assert response["tokens"] == ["hello", "stranger"]
    assert response["encoded"] == [1, 0]
    assert response["vocabSize"] == 10


def test_handle_encode_expands_by_default(api):
    response = api.handle_request("encode", {"text": "hello stranger"})
    assert response["encoded"] == [1, 10]
    assert response["vocabSize"] == 11


def test_handle_decode(api):
    response = api.handle_request("decode", {"ids": [1, 2, 3, 4]})
    assert response == {"success": True, "decoded": "hello, world!", "vocabSize": 10}


@pytest.mark.parametrize("ids", [None, "1,2", [1, -2], [1, "2"]])
def test_handle_decode_invalid_ids(api, ids):
    response = api.handle_request("decode", {"ids": ids})
    assert response["success"] is False
    assert "token ids" in response["error"]


def test_handle_get_vocab(api):
    response = api.handle_request("getVocab")
    assert response["success"] is True
    assert response["vocabulary"]["fox"] == 8
    assert response["vocabSize"] == 10


def test_handle_unknown_action(api):
    assert api.handle_request("explode", {}) == {"success": False, "error": "Invalid action"}


@pytest.mark.parametrize("payload", [["text", "hi"], "text=hi", 42])
def test_handle_non_object_payload(api, payload):
    """A payload that is not a dict comes back as a failure, not a crash."""
    response = api.handle_request("tokenize", payload)
    assert response["success"] is False
    assert "payload must be an object" in response["error"]


def test_handle_encode_without_vocabulary(tmp_path):
    """Errors come back as a failure payload with the message."""
    api = wtok.TokenizerAPI(tmp_path / "empty.json")
    response = api.handle_request("encode", {"text": "hello"})
    assert response["success"] is False
    assert "build vocabulary first" in response["error"]
