import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from unittest import mock
from pdfscrape import text as text_module
from pdfscrape.text import is_readable, normalize_text, strip_binary, truncate_text

@pytest.mark.parametrize("candidate, expected", [
    ("Hello", True),
    ("Lecture notes, week 3", True),
    ("abc", False),            # too short
    ("", False),
    (None, False),
    ("1234 5678", False),      # no letters
    ("a1b2c3d4", False),       # letters but no two-letter run
    ("@@@@@@ab", False),       # ratio 0.25
    ("abc1234567", False),     # ratio exactly 0.3 is not enough
    ("abcd123456", True),      # ratio 0.4
])
def test_is_readable(candidate, expected):
    assert is_readable(candidate) is expected

def test_is_readable_custom_thresholds():
    assert is_readable("ab12", min_length=5) is False
    assert is_readable("ab123456", min_letter_ratio=0.2) is True

def test_normalize_collapses_whitespace():
    assert normalize_text("  a\t\tb\r\n c  ") == "a b c"

def test_normalize_strips_control_chars():
    assert normalize_text("a\x00b\x07c\x7f") == "abc"
    assert normalize_text("x\x0by\x0cz\x1f") == "xyz"

def test_normalize_keeps_unicode():
    assert normalize_text("Café  naïve") == "Café naïve"

def test_normalize_empty():
    assert normalize_text("") == ""
    assert normalize_text(None) == ""
    assert normalize_text(" \n\t ") == ""

def test_normalize_returns_input_on_error(monkeypatch):
    monkeypatch.setattr(text_module, "logger", mock.Mock())
    monkeypatch.setattr(text_module, "_CONTROL", mock.Mock(sub=mock.Mock(side_effect=RuntimeError("boom"))))
    assert normalize_text("  raw\ttext ") == "  raw\ttext "
    assert text_module.logger.warning.called

def test_strip_binary():
    assert strip_binary("caf\xe9\ufffd ok\x01") == "caf ok"
    assert strip_binary("") == ""

def test_truncate_short_text_unchanged():
    assert truncate_text("short", 100) == "short"
    assert truncate_text("x" * 100, 100) == "x" * 100

def test_truncate_long_text():
    original = "word " * 1000
    result = truncate_text(original, 500)
    assert len(result) <= 500
    assert result.startswith("word word")
    assert result.endswith(f"[Text truncated from original length of {len(original)} characters]")
