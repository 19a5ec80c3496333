import pytest

from folderinsights.utils import format_bytes, format_elapsed, parse_size


def test_format_bytes():
    assert format_bytes(0) == "0 B"
    assert format_bytes(1023) == "1023 B"
    assert format_bytes(1536) == "1.50 KB"
    assert format_bytes(1073741824) == "1.00 GB"
    assert format_bytes(-5) == "-5 B"
    assert format_bytes(5 * 1024 ** 6) == "5120.00 PB"


@pytest.mark.parametrize("text, expected", [
    ("0", 0),
    ("1073741824", 1073741824),
    ("512MB", 512 * 1024 ** 2),
    ("1GB", 1073741824),
    ("1.5 GiB", 1610612736),
    ("2k", 2048),
    ("10 b", 10),
])
def test_parse_size(text, expected):
    assert parse_size(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "-1", "1XB"])
def test_parse_size_rejects(text):
    with pytest.raises(ValueError):
        parse_size(text)


def test_format_elapsed():
    assert format_elapsed(0) == "00:00:00"
    assert format_elapsed(61.9) == "00:01:01"
    assert format_elapsed(3600 * 27 + 5) == "27:00:05"
