"""
Сравнение файлов: проверки входа и запуск ядра
"""
import logging
from typing import Optional, Tuple

import numpy as np

from ..errors import (
    DimensionMismatchError,
    ImageDecodeError,
    UnsupportedColorTypeError,
    UnsupportedFormatError,
)
from .diff import compare_regions
from .io import PathLike, has_supported_color_type, is_supported_format, read_png, to_rgba
from .types import ComparisonConfig, ComparisonOutcome, ComparisonState

logger = logging.getLogger(__name__)


def load_image_pair(expected_path: PathLike, actual_path: PathLike) -> Tuple[np.ndarray, np.ndarray]:
    """
    Загружает и проверяет пару изображений.
    Порядок проверок: формат -> декодирование -> цветовая модель -> размеры.

    :param expected_path: путь к эталонному PNG
    :param actual_path: путь к проверяемому PNG
    :return: пара RGBA изображений
    :raises UnsupportedFormatError, ImageDecodeError,
        UnsupportedColorTypeError, DimensionMismatchError
    """
    if not (is_supported_format(expected_path) and is_supported_format(actual_path)):
        raise UnsupportedFormatError(f"Форматы {expected_path} и {actual_path} не поддерживаются (только PNG)")

    expected, expected_header = read_png(expected_path)
    actual, actual_header = read_png(actual_path)

    if not (
        has_supported_color_type(expected, expected_header)
        and has_supported_color_type(actual, actual_header)
    ):
        raise UnsupportedColorTypeError(
            f"Цветовая модель не поддерживается: {expected.shape} {expected.dtype} / "
            f"{actual.shape} {actual.dtype} (нужен RGBA8)"
        )

    if expected.shape[:2] != actual.shape[:2]:
        raise DimensionMismatchError(f"Размеры не совпадают: {expected.shape[:2]} vs {actual.shape[:2]}")

    return to_rgba(expected), to_rgba(actual)


def compare_image_files(
    expected_path: PathLike,
    actual_path: PathLike,
    config: Optional[ComparisonConfig] = None
) -> ComparisonOutcome:
    """
    Сравнивает два PNG файла. Ошибки входа возвращаются как состояние
    результата, а не исключение.

    :param expected_path: путь к эталонному PNG
    :param actual_path: путь к проверяемому PNG
    :param config: параметры сравнения
    :return: результат сравнения
    """
    try:
        expected, actual = load_image_pair(expected_path, actual_path)
    except UnsupportedFormatError as e:
        logger.warning(str(e))
        return ComparisonOutcome(ComparisonState.FORMAT_NOT_SUPPORTED)
    except ImageDecodeError as e:
        logger.warning(str(e))
        return ComparisonOutcome(ComparisonState.DECODE_FAILURE)
    except UnsupportedColorTypeError as e:
        logger.warning(str(e))
        return ComparisonOutcome(ComparisonState.COLOR_TYPE_NOT_SUPPORTED)
    except DimensionMismatchError as e:
        logger.warning(str(e))
        return ComparisonOutcome(ComparisonState.SIZE_MISMATCH)

    return compare_regions(expected, actual, config)
