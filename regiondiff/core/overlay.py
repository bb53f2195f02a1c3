"""
Отрисовка рамок различий поверх изображения
"""
import logging
from typing import Sequence, Tuple

import numpy as np

from .types import Rectangle

logger = logging.getLogger(__name__)

OUTLINE_COLOR = (255, 0, 0, 255)  # RGBA, непрозрачный красный
OUTLINE_THICKNESS = 3


def draw_rectangle(img: np.ndarray, rectangle: Rectangle, color: Tuple[int, int, int, int]) -> None:
    """
    Рисует однопиксельную рамку прямоугольника (на месте).

    :param img: RGBA изображение
    :param rectangle: прямоугольник внутри изображения
    :param color: цвет рамки RGBA
    """
    x0, y0, x1, y1 = rectangle.min_x, rectangle.min_y, rectangle.max_x, rectangle.max_y
    img[y0, x0:x1 + 1] = color
    img[y1, x0:x1 + 1] = color
    img[y0:y1 + 1, x0] = color
    img[y0:y1 + 1, x1] = color


def draw_rectangles(
    actual: np.ndarray,
    rectangles: Sequence[Rectangle],
    color: Tuple[int, int, int, int] = OUTLINE_COLOR,
    thickness: int = OUTLINE_THICKNESS
) -> np.ndarray:
    """
    Копия изображения с рамками вокруг прямоугольников.

    Каждая рамка рисуется thickness раз, с расширением на пиксель наружу
    перед каждым следующим контуром. Контур, вышедший за границы
    изображения, пропускается целиком.

    :param actual: RGBA изображение (не изменяется)
    :param rectangles: прямоугольники различий
    :param color: цвет рамки RGBA
    :param thickness: количество концентрических контуров
    :return: новое RGBA изображение
    """
    result = actual.copy()
    h, w = result.shape[:2]
    skipped = 0
    for rectangle in rectangles:
        outline = rectangle
        for i in range(thickness):
            if i > 0:
                outline = outline.grown()
            if outline.out_of_bounds(w, h):
                skipped += 1
                continue
            draw_rectangle(result, outline, color)
    if skipped:
        logger.debug(f"Контуров за границами изображения: {skipped}")
    return result
