"""
Тесты сравнения файлов и ввода-вывода
"""
import numpy as np
import pytest

from regiondiff.core.io import (
    has_supported_color_type,
    is_supported_format,
    png_header,
    read_png,
    safe_imread,
    safe_imwrite,
    to_rgba,
)
from regiondiff.core.pipeline import compare_image_files, load_image_pair
from regiondiff.core.types import ComparisonConfig, ComparisonState
from regiondiff.errors import ImageDecodeError, UnsupportedFormatError

from conftest import BLUE, RED, make_img, write_gray_alpha_png, write_png


@pytest.fixture
def png_pair(tmp_path, test_images):
    img_a, img_b = test_images
    return write_png(tmp_path / "expected.png", img_a), write_png(tmp_path / "actual.png", img_b)


def test_is_supported_format():
    assert is_supported_format("a.png")
    assert is_supported_format("A.PNG")
    assert not is_supported_format("a.jpg")
    assert not is_supported_format("a")


def test_imread_roundtrip(tmp_path, test_images):
    _, img_b = test_images
    path = tmp_path / "подпапка" / "result.png"
    assert safe_imwrite(path, img_b)

    img = safe_imread(path)
    assert has_supported_color_type(img)
    np.testing.assert_array_equal(to_rgba(img), img_b)


def test_imwrite_replaces_existing(tmp_path):
    path = tmp_path / "result.png"
    path.write_bytes(b"old")
    assert safe_imwrite(path, make_img((5, 5)))
    assert safe_imread(path).shape == (5, 5, 4)


def test_imread_missing_file(tmp_path):
    with pytest.raises(ImageDecodeError):
        safe_imread(tmp_path / "missing.png")


def test_load_image_pair_format(tmp_path):
    with pytest.raises(UnsupportedFormatError):
        load_image_pair(tmp_path / "expected.jpg", tmp_path / "actual.png")


def test_match(tmp_path, test_images):
    img_a, _ = test_images
    expected = write_png(tmp_path / "expected.png", img_a)
    actual = write_png(tmp_path / "actual.png", img_a)

    outcome = compare_image_files(expected, actual)
    assert outcome.state is ComparisonState.MATCH
    assert outcome.image is None


def test_mismatch(png_pair):
    outcome = compare_image_files(*png_pair)

    assert outcome.state is ComparisonState.MISMATCH
    assert tuple(outcome.image[30, 30]) == RED
    assert tuple(outcome.image[35, 35]) == BLUE


def test_mismatch_within_tolerance(png_pair):
    outcome = compare_image_files(*png_pair, config=ComparisonConfig(allowed_difference_percent=5))
    assert outcome.is_match


def test_format_not_supported(tmp_path, test_images):
    img_a, img_b = test_images
    expected = write_png(tmp_path / "expected.png", img_a)
    actual = write_png(tmp_path / "actual.jpg", img_b)

    outcome = compare_image_files(expected, actual)
    assert outcome.state is ComparisonState.FORMAT_NOT_SUPPORTED
    assert outcome.is_error


def test_color_type_not_supported(tmp_path):
    rgb = np.full((10, 10, 3), 200, dtype=np.uint8)
    expected = write_png(tmp_path / "expected.png", rgb)
    actual = write_png(tmp_path / "actual.png", rgb)

    outcome = compare_image_files(expected, actual)
    assert outcome.state is ComparisonState.COLOR_TYPE_NOT_SUPPORTED


def test_size_mismatch(tmp_path):
    expected = write_png(tmp_path / "expected.png", make_img((10, 10)))
    actual = write_png(tmp_path / "actual.png", make_img((10, 12)))

    outcome = compare_image_files(expected, actual)
    assert outcome.state is ComparisonState.SIZE_MISMATCH


def test_decode_failure(tmp_path):
    expected = write_png(tmp_path / "expected.png", make_img((10, 10)))
    broken = tmp_path / "actual.png"
    broken.write_bytes(b"not a png")

    assert compare_image_files(expected, broken).state is ComparisonState.DECODE_FAILURE
    assert compare_image_files(expected, tmp_path / "missing.png").state is ComparisonState.DECODE_FAILURE


def test_png_header(tmp_path, test_images):
    img_a, _ = test_images
    rgba = write_png(tmp_path / "rgba.png", img_a)
    gray_alpha = write_gray_alpha_png(tmp_path / "la.png")

    assert png_header(rgba.read_bytes()) == (8, 6)
    assert png_header(gray_alpha.read_bytes()) == (8, 4)
    assert png_header(b"not a png") is None


def test_gray_alpha_decodes_to_four_channels(tmp_path):
    """OpenCV расширяет серый+альфа до BGRA, отсечь его можно только по заголовку"""
    img, header = read_png(write_gray_alpha_png(tmp_path / "la.png"))
    assert img.shape == (10, 10, 4)
    assert header == (8, 4)
    assert not has_supported_color_type(img, header)


def test_gray_alpha_not_supported(tmp_path):
    expected = write_gray_alpha_png(tmp_path / "expected.png")
    actual = write_gray_alpha_png(tmp_path / "actual.png", gray=0)

    outcome = compare_image_files(expected, actual)
    assert outcome.state is ComparisonState.COLOR_TYPE_NOT_SUPPORTED

    rgba = write_png(tmp_path / "rgba.png", make_img((10, 10)))
    assert compare_image_files(rgba, actual).state is ComparisonState.COLOR_TYPE_NOT_SUPPORTED
