"""
Разметка регионов различий в матрице (заливка с допуском на разрывы)
"""
import logging
from typing import List, Tuple

import numpy as np

logger = logging.getLogger(__name__)

# Значения ячеек матрицы различий
EQUAL = 0
DIFFERENT = 1
FIRST_LABEL = 2


def _jump_targets(x: int, y: int, jump_threshold: int) -> List[Tuple[int, int]]:
    """
    Соседи, до которых дотягивается заливка из (x, y).

    Направления: вправо, вниз, вверх-вправо, вниз-влево, вниз-вправо,
    на расстояние 1..jump_threshold. Прыжки в отрицательные координаты
    отбрасываются.
    """
    targets = []
    for i in range(jump_threshold):
        step = 1 + i
        targets.append((x + step, y))
        targets.append((x, y + step))
        if y >= step:
            targets.append((x + step, y - step))
        if x >= step:
            targets.append((x - step, y + step))
        targets.append((x + step, y + step))
    return targets


def join_to_region(matrix: np.ndarray, x: int, y: int, label: int, jump_threshold: int) -> int:
    """
    Присоединяет к региону label все ячейки со значением 1,
    достижимые из (x, y) прыжками не дальше jump_threshold.

    Явный стек вместо рекурсии: глубина ограничена кучей, а не стеком вызовов.

    :param matrix: матрица различий (изменяется на месте)
    :param x: колонка стартовой ячейки
    :param y: строка стартовой ячейки
    :param label: метка региона (>= 2)
    :param jump_threshold: максимальный перекрываемый разрыв
    :return: количество размеченных ячеек
    """
    height, width = matrix.shape
    joined = 0
    stack = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        if cx >= width or cy >= height or matrix[cy, cx] != DIFFERENT:
            continue
        matrix[cy, cx] = label
        joined += 1
        for tx, ty in _jump_targets(cx, cy, jump_threshold):
            if tx < width and ty < height and matrix[ty, tx] == DIFFERENT:
                stack.append((tx, ty))
    return joined


def label_regions(matrix: np.ndarray, jump_threshold: int = 5) -> int:
    """
    Размечает все ячейки со значением 1 метками регионов >= 2.

    Обход построчный (сверху вниз, слева направо); на каждой найденной
    ячейке со значением 1 запускается заливка и счётчик меток растёт.

    :param matrix: матрица различий 0/1 (изменяется на месте)
    :param jump_threshold: максимальный перекрываемый разрыв
    :return: значение счётчика меток после обхода (последняя метка не занята)
    """
    width = matrix.shape[1]
    region_count = FIRST_LABEL
    # Ячейки со значением 1 появляются только при сравнении пикселей,
    # поэтому кандидатов достаточно собрать один раз.
    for flat in np.flatnonzero(matrix == DIFFERENT):
        y, x = divmod(int(flat), width)
        if matrix[y, x] != DIFFERENT:
            continue
        joined = join_to_region(matrix, x, y, region_count, jump_threshold)
        logger.debug(f"Регион {region_count}: старт ({x}, {y}), ячеек {joined}")
        region_count += 1
    logger.debug(f"Регионов размечено: {region_count - FIRST_LABEL}")
    return region_count
