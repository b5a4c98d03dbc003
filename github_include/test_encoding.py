"""
Pytest tests for encoding.normalize().
"""

import pytest

from github_include.encoding import normalize


def test_normalize_valid_utf8_passthrough():
    assert normalize("héllo 世界".encode("utf-8")) == "héllo 世界"


def test_normalize_strips_leading_bom():
    assert normalize(b"\xef\xbb\xbf# Title\n") == "# Title\n"


def test_normalize_only_strips_leading_bom():
    text = normalize("a\ufeffb".encode("utf-8"))
    assert text == "a\ufeffb"


def test_normalize_repairs_invalid_bytes():
    # Latin-1 "café" is invalid UTF-8
    text = normalize(b"caf\xe9 ok")
    assert text == "caf\ufffd ok"


def test_normalize_truncated_multibyte_sequence():
    text = normalize("世".encode("utf-8")[:2])
    assert text == "\ufffd"


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"\xff\xfe\xfd",
        b"\x80" * 64,
        b"\xef\xbb\xbf\xc3",
        bytes(range(256)),
        None,
    ],
)
def test_normalize_never_raises_and_yields_valid_utf8(raw):
    text = normalize(raw)
    assert isinstance(text, str)
    assert not text.startswith("\ufeff")
    text.encode("utf-8")  # must not raise


def test_normalize_newlines_optional():
    assert normalize(b"a\r\nb\rc") == "a\r\nb\rc"
    assert normalize(b"a\r\nb\rc", normalize_newlines=True) == "a\nb\nc"


def test_normalize_str_with_lone_surrogate():
    text = normalize("x\ud800y")
    text.encode("utf-8")
    assert text.startswith("x") and text.endswith("y")
