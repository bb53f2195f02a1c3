"""
Сравнение изображений и поиск регионов различий
"""
import logging
from typing import Optional, Tuple

import cv2
import numpy as np

from ..errors import DimensionMismatchError, UnsupportedColorTypeError
from .labeling import DIFFERENT, label_regions
from .overlay import draw_rectangles
from .rectangles import build_rectangles, consolidate_rectangles
from .types import ComparisonConfig, ComparisonOutcome, ComparisonState

logger = logging.getLogger(__name__)


def diff_matrix(expected: np.ndarray, actual: np.ndarray) -> Tuple[np.ndarray, int]:
    """
    Попиксельное сравнение по всем четырём каналам.

    :param expected: RGBA изображение
    :param actual: RGBA изображение того же размера
    :return: матрица различий 0/1 (int64) и количество различающихся пикселей
    """
    d = cv2.absdiff(expected, actual)
    changed = np.any(d != 0, axis=2).astype(np.uint8)
    count = cv2.countNonZero(changed)
    matrix = changed.astype(np.int64) * DIFFERENT
    return matrix, count


def is_allowed_difference(count: int, total: int, allowed_percent: float) -> bool:
    """
    Укладывается ли доля различий в допуск.

    :param count: количество различающихся пикселей
    :param total: общее количество пикселей
    :param allowed_percent: допустимый процент различий
    :return: True, если изображения считаются совпадающими
    """
    if count == 0:
        return True
    percent = count / total * 100
    return percent <= allowed_percent


def _check_grids(expected: np.ndarray, actual: np.ndarray) -> None:
    if expected.shape != actual.shape:
        raise DimensionMismatchError(f"Размеры не совпадают: {expected.shape} vs {actual.shape}")
    if expected.ndim != 3 or expected.shape[2] != 4 or expected.dtype != np.uint8 or actual.dtype != np.uint8:
        raise UnsupportedColorTypeError(
            f"Ожидаются RGBA8 изображения, получено {expected.shape} {expected.dtype} / {actual.dtype}"
        )


def compare_regions(
    expected: np.ndarray,
    actual: np.ndarray,
    config: Optional[ComparisonConfig] = None
) -> ComparisonOutcome:
    """
    Ядро сравнения: маска различий -> допуск -> регионы -> прямоугольники ->
    слияние -> отрисовка рамок.

    :param expected: эталонное RGBA изображение
    :param actual: проверяемое RGBA изображение того же размера
    :param config: параметры сравнения (по умолчанию ComparisonConfig())
    :return: MATCH или MISMATCH с размеченной копией actual
    """
    if config is None:
        config = ComparisonConfig()
    _check_grids(expected, actual)

    h, w = expected.shape[:2]
    total = h * w
    # Пустое изображение: сравнивать нечего
    if total == 0:
        return ComparisonOutcome(ComparisonState.MATCH)

    matrix, count = diff_matrix(expected, actual)
    logger.info(f"Различающихся пикселей: {count} из {total}")

    if is_allowed_difference(count, total, config.allowed_difference_percent):
        return ComparisonOutcome(ComparisonState.MATCH, different_pixels=count, total_pixels=total)

    region_count = label_regions(matrix, config.jump_threshold)
    rectangles = build_rectangles(matrix, region_count, config.minimum_region_area)
    rectangles = consolidate_rectangles(rectangles)
    logger.info(f"Прямоугольников различий: {len(rectangles)}")

    # Все регионы отфильтрованы по площади - различия не показываются
    if not rectangles:
        return ComparisonOutcome(ComparisonState.MATCH, different_pixels=count, total_pixels=total)

    result = draw_rectangles(actual, rectangles)
    return ComparisonOutcome(
        ComparisonState.MISMATCH,
        image=result,
        rectangles=rectangles,
        different_pixels=count,
        total_pixels=total,
    )
