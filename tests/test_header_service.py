from __future__ import annotations

import io
import itertools

import pytest

from pnmcodec.models.errors import (
    FormatError,
    MalformedDimensionsError,
    MalformedMaxValueError,
    MissingMagicError,
    UnsupportedMagicError,
)
from pnmcodec.services.header_service import HeaderService


def scan(data: bytes):
    return HeaderService().scan(io.BytesIO(data))


def test_scan_plain_header():
    header = scan(b"P5\n2 1\n300\n\x00\x0a\x01\x2c")
    assert header.magic == "P5"
    assert (header.width, header.height) == (2, 1)
    assert header.declared_max == 300
    assert header.data_offset == len(b"P5\n2 1\n300\n")
    assert header.samples_per_pixel == 1
    assert header.is_binary
    assert header.standard_sample_width == 2


def test_stream_left_after_max_line():
    stream = io.BytesIO(b"P2\n2 1\n9\n4 9\n")
    HeaderService().scan(stream)
    assert stream.read() == b"4 9\n"


@pytest.mark.parametrize(
    "before_magic, before_dims, before_max",
    list(itertools.product([False, True], repeat=3)),
)
def test_comments_before_any_line(before_magic, before_dims, before_max):
    plain = scan(b"P3\n4 3\n65535\n")
    parts = []
    if before_magic:
        parts.append(b"# leading comment\n")
    parts.append(b"P3\n")
    if before_dims:
        parts.append(b"# one\n#two\n")
    parts.append(b"4 3\n")
    if before_max:
        parts.append(b"# 12 34\n")
    parts.append(b"65535\n")

    header = scan(b"".join(parts))
    assert (header.magic, header.width, header.height, header.declared_max) == (
        plain.magic, plain.width, plain.height, plain.declared_max,
    )


def test_crlf_and_extra_whitespace():
    header = scan(b"P6\r\n  7\t 5  \r\n255\r\n")
    assert header.magic == "P6"
    assert (header.width, header.height, header.declared_max) == (7, 5, 255)
    assert header.samples_per_pixel == 3


def test_blank_lines_skipped():
    header = scan(b"P2\n\n3 3\n\n15\n")
    assert (header.width, header.height, header.declared_max) == (3, 3, 15)


@pytest.mark.parametrize("data", [b"", b"# only\n# comments\n"])
def test_missing_magic(data):
    with pytest.raises(MissingMagicError):
        scan(data)


@pytest.mark.parametrize("magic", [b"P1", b"P4", b"P7", b"PF", b"P5 2 1 255"])
def test_unsupported_magic(magic):
    with pytest.raises(UnsupportedMagicError):
        scan(magic + b"\n2 1\n255\n")


@pytest.mark.parametrize(
    "data",
    [
        b"P2\n10\n255\n",
        b"P2\nx 5\n255\n",
        b"P2\n-3 5\n255\n",
        b"P2\n0 5\n255\n",
        b"P2\n",
        b"P2\n# comment only\n",
    ],
)
def test_malformed_dimensions(data):
    with pytest.raises(MalformedDimensionsError):
        scan(data)


@pytest.mark.parametrize(
    "data",
    [
        b"P2\n2 2\nabc\n",
        b"P2\n2 2\n255 7\n",
        b"P2\n2 2\n",
        b"P5\n1 1\n-1\n\x05",
        b"P2\n1 1\n+5\n5\n",
        b"P2\n1 1\n1_000\n5\n",
        b"P2\n1 1\n4294967296\n5\n",
    ],
)
def test_malformed_max_value(data):
    with pytest.raises(MalformedMaxValueError):
        scan(data)


def test_format_errors_are_value_errors():
    with pytest.raises(ValueError):
        scan(b"P9\n1 1\n1\n")
    assert issubclass(MissingMagicError, FormatError)
