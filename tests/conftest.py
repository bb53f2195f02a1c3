"""
Конфигурация pytest
"""
import struct
import zlib

import cv2
import numpy as np
import pytest

GRAY = (128, 128, 128, 255)
BLUE = (0, 0, 255, 255)
RED = (255, 0, 0, 255)


def pytest_configure(config):
    """Регистрируем маркеры"""
    config.addinivalue_line(
        "markers", "benchmark: бенчмарк-тесты производительности"
    )


def make_img(shape=(100, 100), color=GRAY):
    """RGBA изображение, залитое одним цветом"""
    return np.full((*shape, 4), color, dtype=np.uint8)


def write_png(path, img):
    """Записывает RGBA (или любое другое) изображение в PNG без смены каналов"""
    if img.ndim == 3 and img.shape[2] == 4:
        img = cv2.cvtColor(img, cv2.COLOR_RGBA2BGRA)
    success, buffer = cv2.imencode(".png", img)
    assert success
    path.write_bytes(buffer.tobytes())
    return path


def _png_chunk(kind, payload):
    return struct.pack(">I", len(payload)) + kind + payload + struct.pack(">I", zlib.crc32(kind + payload))


def write_gray_alpha_png(path, width=10, height=10, gray=128, alpha=255):
    """PNG с типом цвета 4 (серый + альфа, 8 бит) - OpenCV такой не пишет"""
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 4, 0, 0, 0)
    rows = b"".join(b"\x00" + bytes((gray, alpha)) * width for _ in range(height))
    data = (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", ihdr)
        + _png_chunk(b"IDAT", zlib.compress(rows))
        + _png_chunk(b"IEND", b"")
    )
    path.write_bytes(data)
    return path


@pytest.fixture
def test_images():
    """Серое изображение и копия с синим квадратом 10x10"""
    img_a = make_img()
    img_b = img_a.copy()
    img_b[30:40, 30:40] = BLUE
    return img_a, img_b
