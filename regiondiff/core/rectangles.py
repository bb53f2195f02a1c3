"""
Прямоугольники регионов: построение по матрице меток и слияние пересекающихся
"""
import logging
from typing import List, Optional, Sequence

import numpy as np

from .labeling import FIRST_LABEL
from .types import EMPTY_MAX, EMPTY_MIN, Rectangle

logger = logging.getLogger(__name__)


def build_rectangles(
    matrix: np.ndarray,
    region_count: int,
    minimum_region_area: int = 1
) -> List[Rectangle]:
    """
    Ограничивающие прямоугольники для меток 2..region_count включительно.

    Метки без ячеек дают пустой прямоугольник и отбрасываются, как и
    прямоугольники площадью меньше minimum_region_area.

    :param matrix: размеченная матрица различий
    :param region_count: счётчик меток, возвращённый label_regions
    :param minimum_region_area: минимальная площадь прямоугольника
    :return: список прямоугольников в порядке возрастания меток
    """
    slots = region_count - FIRST_LABEL + 1
    if slots <= 0:
        return []

    min_x = np.full(slots, EMPTY_MIN, dtype=np.int64)
    min_y = np.full(slots, EMPTY_MIN, dtype=np.int64)
    max_x = np.full(slots, EMPTY_MAX, dtype=np.int64)
    max_y = np.full(slots, EMPTY_MAX, dtype=np.int64)

    # Один проход по всем размеченным ячейкам вместо скана матрицы на каждую метку
    ys, xs = np.nonzero((matrix >= FIRST_LABEL) & (matrix <= region_count))
    idx = matrix[ys, xs] - FIRST_LABEL
    np.minimum.at(min_x, idx, xs)
    np.minimum.at(min_y, idx, ys)
    np.maximum.at(max_x, idx, xs)
    np.maximum.at(max_y, idx, ys)

    rectangles = []
    for i in range(slots):
        rectangle = Rectangle(int(min_x[i]), int(min_y[i]), int(max_x[i]), int(max_y[i]))
        if rectangle.is_empty:
            continue
        if rectangle.size() < minimum_region_area:
            logger.debug(f"Регион {i + FIRST_LABEL} отброшен: площадь {rectangle.size()} < {minimum_region_area}")
            continue
        rectangles.append(rectangle)
    return rectangles


def merge_rectangles(rectangles: Sequence[Rectangle]) -> List[Rectangle]:
    """
    Один проход слияния пересекающихся прямоугольников.

    Прямоугольник в текущей позиции поглощает все последующие, с которыми
    пересекается; после каждого слияния позиция сдвигается на шаг назад,
    чтобы сравнить выросший прямоугольник с соседом слева.

    :param rectangles: исходные прямоугольники
    :return: прямоугольники после прохода (поглощённые удалены)
    """
    slots: List[Optional[Rectangle]] = list(rectangles)
    position = 0
    while position < len(slots):
        if slots[position] is None:
            position += 1
            continue
        for index in range(position + 1, len(slots)):
            current = slots[position]
            other = slots[index]
            if current is None or other is None:
                continue
            if current.is_overlapping(other):
                slots[position] = current.merge(other)
                slots[index] = None
                if position != 0:
                    position -= 1
        position += 1
    return [rectangle for rectangle in slots if rectangle is not None]


def consolidate_rectangles(rectangles: Sequence[Rectangle]) -> List[Rectangle]:
    """
    Слияние в два прохода: откат в merge_rectangles смотрит только на одну
    позицию назад, второй проход добирает транзитивные пересечения.
    Если после них список ещё сокращается, проходы повторяются, пока
    не останется ни одной пересекающейся пары.

    :param rectangles: исходные прямоугольники
    :return: итоговые прямоугольники
    """
    merged = merge_rectangles(merge_rectangles(rectangles))
    # Проход без слияний означает, что пересечений больше нет
    while True:
        again = merge_rectangles(merged)
        if len(again) == len(merged):
            break
        merged = again
    logger.debug(f"Прямоугольников до слияния: {len(rectangles)}, после: {len(merged)}")
    return merged
