"""
Типы данных сравнения: прямоугольник, конфигурация, результат
"""
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, List, Mapping, Optional

import numpy as np


# Значение "пустого" прямоугольника: ни один пиксель его ещё не расширял
EMPTY_MIN = np.iinfo(np.int64).max
EMPTY_MAX = 0


@dataclass
class Rectangle:
    """
    Прямоугольник с включительными углами (min_x, min_y) - (max_x, max_y).
    """
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def empty(cls) -> "Rectangle":
        """Зарезервированный пустой прямоугольник"""
        return cls(EMPTY_MIN, EMPTY_MIN, EMPTY_MAX, EMPTY_MAX)

    @property
    def is_empty(self) -> bool:
        return self.min_x > self.max_x or self.min_y > self.max_y

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    def size(self) -> int:
        """Площадь в пикселях"""
        return self.width * self.height

    def merge(self, other: "Rectangle") -> "Rectangle":
        """
        Наименьший прямоугольник, содержащий оба.

        :param other: второй прямоугольник
        :return: новый прямоугольник
        """
        return Rectangle(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def is_overlapping(self, other: "Rectangle") -> bool:
        """
        Пересекаются ли прямоугольники (касание считается пересечением).

        :param other: второй прямоугольник
        :return: True, если пересекаются интервалы и по Y, и по X
        """
        if self.max_y < other.min_y or other.max_y < self.min_y:
            return False
        return self.max_x >= other.min_x and other.max_x >= self.min_x

    def out_of_bounds(self, width: int, height: int) -> bool:
        """Выходит ли хотя бы один угол за пределы изображения"""
        return (
            self.min_x >= width
            or self.max_x >= width
            or self.min_y >= height
            or self.max_y >= height
        )

    def grown(self) -> "Rectangle":
        """
        Прямоугольник, расширенный на один пиксель в каждую сторону.

        min уменьшается только если обе координаты >= 1, иначе остаётся на месте
        (у края изображения рамка растёт лишь наружу).

        :return: новый прямоугольник
        """
        min_x, min_y = self.min_x, self.min_y
        if min_x >= 1 and min_y >= 1:
            min_x -= 1
            min_y -= 1
        return Rectangle(min_x, min_y, self.max_x + 1, self.max_y + 1)


@dataclass(frozen=True)
class ComparisonConfig:
    """
    Параметры одного сравнения.

    :param jump_threshold: максимальный разрыв (в пикселях), который
        перекрывается при объединении различий в регион
    :param allowed_difference_percent: допустимый процент различающихся
        пикселей, при котором изображения считаются совпадающими
    :param minimum_region_area: минимальная площадь прямоугольника региона
    """
    jump_threshold: int = 5
    allowed_difference_percent: float = 0.0
    minimum_region_area: int = 1

    def __post_init__(self):
        if self.jump_threshold < 0:
            raise ValueError(f"jump_threshold должен быть >= 0, получено {self.jump_threshold}")
        if not 0.0 <= self.allowed_difference_percent <= 100.0:
            raise ValueError(
                f"allowed_difference_percent должен быть в диапазоне 0..100, "
                f"получено {self.allowed_difference_percent}"
            )
        if self.minimum_region_area < 1:
            raise ValueError(f"minimum_region_area должен быть >= 1, получено {self.minimum_region_area}")

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "ComparisonConfig":
        """
        Создаёт конфигурацию из словаря настроек (лишние ключи игнорируются).

        :param settings: словарь настроек
        :return: конфигурация
        """
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in settings.items() if k in known})


class ComparisonState(Enum):
    MATCH = "match"
    MISMATCH = "mismatch"
    FORMAT_NOT_SUPPORTED = "format_not_supported"
    COLOR_TYPE_NOT_SUPPORTED = "color_type_not_supported"
    SIZE_MISMATCH = "size_mismatch"
    DECODE_FAILURE = "decode_failure"


@dataclass(frozen=True)
class ComparisonOutcome:
    """
    Результат сравнения. image заполнен только для MISMATCH.
    """
    state: ComparisonState
    image: Optional[np.ndarray] = None
    rectangles: List[Rectangle] = field(default_factory=list)
    different_pixels: int = 0
    total_pixels: int = 0

    @property
    def is_match(self) -> bool:
        return self.state is ComparisonState.MATCH

    @property
    def is_mismatch(self) -> bool:
        return self.state is ComparisonState.MISMATCH

    @property
    def is_error(self) -> bool:
        return not (self.is_match or self.is_mismatch)

    @property
    def different_percent(self) -> float:
        if self.total_pixels == 0:
            return 0.0
        return self.different_pixels / self.total_pixels * 100
