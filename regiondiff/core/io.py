"""
Чтение/запись изображений и проверка входных файлов
"""
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import cv2
import numpy as np

from ..errors import ImageDecodeError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

SUPPORTED_SUFFIXES = (".png",)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
# Заголовок IHDR: (битовая глубина, тип цвета); 6 - RGBA
RGBA8_HEADER = (8, 6)


def is_supported_format(path: PathLike) -> bool:
    """
    Поддерживается ли формат файла (только PNG, по расширению).

    :param path: путь к файлу
    :return: True для .png
    """
    return Path(path).suffix.lower() in SUPPORTED_SUFFIXES


def png_header(data: bytes) -> Optional[Tuple[int, int]]:
    """
    Битовая глубина и тип цвета из чанка IHDR.

    :param data: содержимое PNG файла
    :return: (bit_depth, color_type) или None, если это не PNG
    """
    if len(data) < 26 or data[:8] != PNG_SIGNATURE or data[12:16] != b"IHDR":
        return None
    return data[24], data[25]


def read_png(path: PathLike) -> Tuple[np.ndarray, Optional[Tuple[int, int]]]:
    """
    Чтение изображения вместе с заголовком PNG (кириллица в путях поддерживается).

    OpenCV расширяет серый+альфа до 4 каналов, поэтому цветовую модель
    файла видно только по заголовку.

    :param path: путь к файлу
    :return: изображение в порядке каналов OpenCV и (bit_depth, color_type)
    :raises ImageDecodeError: файл не читается или не декодируется
    """
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise ImageDecodeError(f"Не удалось прочитать {path}: {e}") from e

    img_array = np.asarray(bytearray(data), dtype=np.uint8)
    img = cv2.imdecode(img_array, cv2.IMREAD_UNCHANGED) if img_array.size else None
    if img is None:
        raise ImageDecodeError(f"Не удалось декодировать {path}")
    return img, png_header(data)


def safe_imread(path: PathLike) -> np.ndarray:
    """
    Чтение изображения без изменения каналов и глубины.

    :param path: путь к файлу
    :return: изображение в порядке каналов OpenCV (BGRA для RGBA PNG)
    :raises ImageDecodeError: файл не читается или не декодируется
    """
    img, _ = read_png(path)
    return img


def has_supported_color_type(img: np.ndarray, header: Optional[Tuple[int, int]] = None) -> bool:
    """
    Только 4 канала по 8 бит; если известен заголовок PNG - только RGBA8 в файле.

    :param img: декодированное изображение
    :param header: (bit_depth, color_type) из read_png
    """
    if header is not None and header != RGBA8_HEADER:
        return False
    return img.ndim == 3 and img.shape[2] == 4 and img.dtype == np.uint8


def to_rgba(img: np.ndarray) -> np.ndarray:
    """BGRA (OpenCV) -> RGBA"""
    return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)


def from_rgba(img: np.ndarray) -> np.ndarray:
    """RGBA -> BGRA (OpenCV)"""
    return cv2.cvtColor(img, cv2.COLOR_RGBA2BGRA)


def safe_imwrite(path: PathLike, rgba: np.ndarray) -> bool:
    """
    Запись RGBA изображения в PNG. Существующий файл заменяется.

    :param path: путь к файлу
    :param rgba: RGBA изображение
    :return: успешность операции
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        success, buffer = cv2.imencode(".png", from_rgba(rgba))
        if not success:
            logger.error(f"Не удалось закодировать PNG для {path}")
            return False
        if path.exists():
            path.unlink()
        with open(path, 'wb') as f:
            f.write(buffer.tobytes())
        return True
    except OSError as e:
        logger.error(f"Ошибка записи {path}: {e}")
        return False
