"""
regiondiff - поиск и разметка областей различий между двумя изображениями
"""

__version__ = "1.0.0"

from .core.diff import compare_regions, diff_matrix, is_allowed_difference
from .core.labeling import label_regions
from .core.rectangles import build_rectangles, merge_rectangles, consolidate_rectangles
from .core.overlay import draw_rectangles
from .core.pipeline import compare_image_files
from .core.types import ComparisonConfig, ComparisonOutcome, ComparisonState, Rectangle

__all__ = [
    "compare_regions",
    "compare_image_files",
    "diff_matrix",
    "is_allowed_difference",
    "label_regions",
    "build_rectangles",
    "merge_rectangles",
    "consolidate_rectangles",
    "draw_rectangles",
    "ComparisonConfig",
    "ComparisonOutcome",
    "ComparisonState",
    "Rectangle",
]
