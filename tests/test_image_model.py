from __future__ import annotations

import numpy as np
import pytest

from pnmcodec.config import CodecSettings
from pnmcodec.models.errors import InvalidImageError
from pnmcodec.models.image_model import PnmHeader, PnmImage, magic_for


def test_blank_is_zeroed_gray():
    image = PnmImage.blank(3, 2)
    assert image.samples_per_pixel == 1
    assert image.samples.tolist() == [0] * 6
    assert image.min is None and image.max is None


def test_blank_color():
    image = PnmImage.blank(2, 2, 3)
    assert image.sample_count == 12
    assert image.pixel_count == 4
    assert image.is_color


def test_from_samples_computes_min_max():
    image = PnmImage.from_samples(2, 2, 1, [4, 9, 1, 7])
    assert (image.min, image.max) == (1, 9)
    assert image.samples.dtype == np.int64
    assert image.size == (2, 2)


@pytest.mark.parametrize(
    "width, height, spp, samples",
    [
        (0, 1, 1, []),
        (2, -1, 1, [1, 2]),
        (1, 1, 2, [1, 2]),
        (1, 1, 4, [1, 2, 3, 4]),
        (2, 2, 1, [1, 2, 3]),
        (1, 1, 3, [1, 2]),
    ],
)
def test_invalid_images(width, height, spp, samples):
    with pytest.raises(InvalidImageError):
        PnmImage(width, height, spp, np.array(samples, dtype=np.int64))


def test_rejects_two_dimensional_buffer():
    with pytest.raises(InvalidImageError):
        PnmImage(2, 2, 1, np.zeros((2, 2), dtype=np.int64))


def test_rejects_float_samples():
    with pytest.raises(InvalidImageError):
        PnmImage(1, 1, 1, np.array([0.5]))


def test_rejects_min_above_max():
    with pytest.raises(InvalidImageError):
        PnmImage(1, 1, 1, np.array([3]), min=5, max=3)


def test_same_as_ignores_min_max():
    a = PnmImage(2, 1, 1, np.array([1, 2]))
    b = PnmImage.from_samples(2, 1, 1, [1, 2])
    c = PnmImage.from_samples(1, 2, 1, [1, 2])
    assert a.same_as(b)
    assert not a.same_as(c)


def test_header_properties():
    header = PnmHeader("P3", 4, 2, 255, 12)
    assert header.samples_per_pixel == 3
    assert not header.is_binary
    assert header.sample_count == 24
    assert header.standard_sample_width == 1
    assert PnmHeader("P6", 1, 1, 256, 11).standard_sample_width == 2


def test_magic_for():
    assert magic_for(1, binary=False) == "P2"
    assert magic_for(3, binary=True) == "P6"
    with pytest.raises(InvalidImageError):
        magic_for(2, binary=True)


@pytest.mark.parametrize(
    "kwargs",
    [{"binary_offset": "middle"}, {"ascii_samples_per_line": -1}, {"comment": "two\nlines"}],
)
def test_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        CodecSettings(**kwargs)
