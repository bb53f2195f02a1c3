"""
Исключения regiondiff
"""

__all__ = [
    "RegionDiffError",
    "ImageDecodeError",
    "UnsupportedFormatError",
    "UnsupportedColorTypeError",
    "DimensionMismatchError",
]


class RegionDiffError(Exception):
    """Базовое исключение пакета"""


class ImageDecodeError(RegionDiffError):
    """Файл не удалось прочитать или декодировать"""


class UnsupportedFormatError(RegionDiffError):
    """Формат файла не поддерживается (только PNG)"""


class UnsupportedColorTypeError(RegionDiffError):
    """Изображение не 4-канальное 8-битное (RGBA8)"""


class DimensionMismatchError(RegionDiffError):
    """Размеры изображений не совпадают"""
