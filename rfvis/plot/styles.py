"""
Mappings from layout records to visual properties (colour, thickness, size).

All colours are returned as hex strings that can be placed into SVG
attributes directly.
"""

import math
from enum import Enum
from typing import Sequence, Union

import matplotlib
import matplotlib.colors as mcolors
import numpy as np

from rfvis.layout import BranchRecord, BunchRecord, LeafRecord


class BranchColor(Enum):
    IMPURITY = "impurity"
    DROP_OF_IMPURITY = "impurity-drop"
    BLACK = "black"
    PATH = "path"


class LeafColor(Enum):
    IMPURITY = "impurity"
    BEST_CLASS = "class"
    PATH = "path"


def parse_style(enum_type, value):
    """Look up a style by member name or by its value, case-insensitive."""
    if isinstance(value, enum_type):
        return value
    text = str(value).strip()
    for member in enum_type:
        if text.upper() == member.name or text.lower() == member.value:
            return member
    choices = ", ".join(member.value for member in enum_type)
    raise ValueError(f"Unsupported setting '{value}'. Choose one of: {choices}")


# Primary colours of the scales
PATH_COLOR = "#ff0000"
DIMMED_COLOR = mcolors.to_hex((0.0, 0.0, 0.0, 0.5), keep_alpha=True)
MISSING_CLASS_COLOR = "#808080"

BRANCH_IMPURITY_CMAP = mcolors.LinearSegmentedColormap.from_list(
    "branch_impurity", ["green", "brown"]
)
BRANCH_DROP_CMAP = mcolors.LinearSegmentedColormap.from_list(
    "branch_drop", ["red", "green"]
)
LEAF_IMPURITY_CMAP = mcolors.LinearSegmentedColormap.from_list(
    "leaf_impurity", [(0.0, "green"), (0.5, "red"), (1.0, "red")]
)
CLASS_PALETTE = matplotlib.colormaps["tab10"]

MIN_BRANCH_THICKNESS = 1
MAX_BRANCH_THICKNESS = 15
MIN_LEAF_RADIUS = 1
MAX_LEAF_RADIUS = 100


def linear_scale(value: float, domain: Sequence[float], output: Sequence[float]) -> float:
    """Map ``value`` linearly from ``domain`` onto ``output``, clamped at both ends."""
    low, high = domain
    if high <= low:
        return float(output[0])
    return float(np.interp(value, [low, high], output))


def _cmap_color(cmap: mcolors.Colormap, value: float) -> str:
    return mcolors.to_hex(cmap(float(np.clip(value, 0.0, 1.0))))


def _path_color(selected: bool) -> str:
    return PATH_COLOR if selected else DIMMED_COLOR


def class_color(index: int) -> str:
    return mcolors.to_hex(CLASS_PALETTE(index % CLASS_PALETTE.N))


def branch_color(branch: BranchRecord, mode: Union[BranchColor, str] = BranchColor.IMPURITY) -> str:
    match parse_style(BranchColor, mode):
        case BranchColor.IMPURITY:
            return _cmap_color(BRANCH_IMPURITY_CMAP, branch.impurity)
        case BranchColor.DROP_OF_IMPURITY:
            # Leaves have no split, so they show no drop at all
            drop = branch.impurity_drop if branch.impurity_drop is not None else 0.0
            return _cmap_color(BRANCH_DROP_CMAP, drop)
        case BranchColor.BLACK:
            return "#000000"
        case BranchColor.PATH:
            return _path_color(branch.selected_path_element)


def branch_thickness(branch: BranchRecord, total_samples: int) -> float:
    """Stroke width in pixels, growing linearly with the number of samples."""
    return linear_scale(
        branch.samples, (1, total_samples), (MIN_BRANCH_THICKNESS, MAX_BRANCH_THICKNESS)
    )


def leaf_color(leaf: LeafRecord, mode: Union[LeafColor, str] = LeafColor.IMPURITY) -> str:
    match parse_style(LeafColor, mode):
        case LeafColor.IMPURITY:
            return _cmap_color(LEAF_IMPURITY_CMAP, leaf.impurity)
        case LeafColor.BEST_CLASS:
            if leaf.best_class is None:
                return MISSING_CLASS_COLOR
            return class_color(leaf.best_class.index)
        case LeafColor.PATH:
            return _path_color(leaf.selected_path_element)


def leaf_size(leaf: Union[LeafRecord, BunchRecord], total_samples: int) -> float:
    """Circle radius in pixels; the circle area is proportional to the samples."""
    max_radius = math.sqrt(total_samples / math.pi)
    radius = math.sqrt(max(leaf.samples, 0) / math.pi)
    return linear_scale(radius, (1, max_radius), (MIN_LEAF_RADIUS, MAX_LEAF_RADIUS))
