import numpy as np
import pytest

from imageprompt.libs.vision.luma import (
    PixelColor,
    classify,
    classify_row,
    gray_value,
    gray_values,
)


@pytest.mark.parametrize("gray", [0, 1, 64, 127, 128, 200, 254, 255])
def test_opaque_gray_maps_to_itself(gray):
    assert gray_value(gray) == gray
    assert gray_value((gray, gray, gray)) == gray
    assert gray_value((gray, gray, gray, 255)) == gray


def test_threshold_boundary():
    assert classify(127) is PixelColor.BLACK
    assert classify(128) is PixelColor.WHITE
    assert classify((128, 128, 128)) is PixelColor.WHITE


def test_primary_colours_use_601_weights():
    assert gray_value((255, 0, 0)) == 76
    assert gray_value((0, 255, 0)) == 150
    assert gray_value((0, 0, 255)) == 29
    assert classify((255, 0, 0)) is PixelColor.BLACK
    assert classify((0, 255, 0)) is PixelColor.WHITE


def test_alpha_is_premultiplied():
    assert gray_value((255, 255, 255, 0)) == 0
    assert classify((255, 255, 255, 0)) is PixelColor.BLACK
    # 255 * 257 * 128 / 255 lands just above the threshold, 127 just below
    assert gray_value((255, 255, 255, 128)) == 128
    assert gray_value((255, 255, 255, 127)) == 127


def test_gray_values_is_vectorised():
    rgba = np.array(
        [[[0, 0, 0, 255], [255, 255, 255, 255]], [[128, 128, 128, 255], [255, 0, 0, 255]]],
        dtype=np.uint8,
    )
    out = gray_values(rgba)
    assert out.shape == (2, 2)
    assert out.tolist() == [[0, 255], [128, 76]]


def test_classify_row():
    row = np.array(
        [[0, 0, 0, 255], [10, 10, 10, 255], [250, 250, 250, 255]], dtype=np.uint8
    )
    assert classify_row(row) == [PixelColor.BLACK, PixelColor.BLACK, PixelColor.WHITE]
    assert classify_row(np.zeros((0, 4), dtype=np.uint8)) == []


def test_rejects_malformed_samples():
    with pytest.raises(ValueError):
        gray_value((1, 2))
    with pytest.raises(ValueError):
        gray_values(np.zeros((2, 3), dtype=np.uint8))
