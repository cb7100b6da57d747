"""Glue between layout, path highlighting and SVG rendering of one tree."""

import copy
from typing import Iterable, Optional, Union
from xml.etree.ElementTree import Element

from rfvis.highlight import mark_path
from rfvis.layout import LayoutConfig, TreeLayout, calculate_layout
from rfvis.nodes import Tree
from rfvis.plot.styles import BranchColor, LeafColor
from rfvis.plot.tree_renderer import render_tree_svg


def layout_tree(
    tree: Tree,
    total_samples: int,
    config: Optional[LayoutConfig] = None,
    highlight_leaf_ids: Optional[Iterable[int]] = None,
) -> TreeLayout:
    """
    Lay out a tree, optionally with highlighted decision paths.

    Highlighting works on a copy so the shared parsed tree keeps its flags.
    """
    if highlight_leaf_ids is not None:
        tree = copy.deepcopy(tree)
        mark_path(tree, highlight_leaf_ids)
    return calculate_layout(tree, total_samples, config)


def render_tree(
    tree: Tree,
    total_samples: int,
    config: Optional[LayoutConfig] = None,
    branch_color: Union[BranchColor, str] = BranchColor.IMPURITY,
    leaf_color: Union[LeafColor, str] = LeafColor.IMPURITY,
    highlight_leaf_ids: Optional[Iterable[int]] = None,
) -> Element:
    if config is None:
        config = LayoutConfig()
    layout = layout_tree(tree, total_samples, config, highlight_leaf_ids)
    return render_tree_svg(
        layout,
        total_samples,
        config.width,
        config.height,
        branch_color_mode=branch_color,
        leaf_color_mode=leaf_color,
    )
