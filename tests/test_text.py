"""Unit tests for text validation, statistics and display helpers."""

import pytest

from wordtok._sanitise import render_token
from wordtok._text import clean_text, is_valid_text, is_valid_token_ids, text_stats


@pytest.mark.parametrize(
    "value, expected",
    [("hello", True), (" x ", True), ("", False), ("  \n", False), (None, False), (3, False)],
)
def test_is_valid_text(value, expected):
    assert is_valid_text(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ([0, 1, 2], True),
        ((), True),
        ([], True),
        ([1, -1], False),
        ([1, 2.0], False),
        ([True], False),
        ("123", False),
        (None, False),
    ],
)
def test_is_valid_token_ids(value, expected):
    assert is_valid_token_ids(value) is expected


def test_clean_text():
    """Whitespace runs collapse and ends are stripped."""
    assert clean_text("  a\t\tb \n c  ") == "a b c"
    assert clean_text("   ") == ""
    assert clean_text(None) == ""


def test_text_stats():
    assert text_stats("Hello, world!\nBye.") == {"words": 3, "characters": 18, "lines": 2}
    assert text_stats("") == {"words": 0, "characters": 0, "lines": 0}


def test_render_token_escapes_control_chars():
    """Control characters are shown as escapes, printable text is untouched."""
    assert render_token("\x00") == "\\u0000"
    assert render_token("\x7f") == "\\u007f"
    assert render_token("€") == "€"
    assert render_token("[UNK]") == "[UNK]"
