"""
Renders a computed TreeLayout as an SVG document.

Branches are drawn as lines, leaves as circles and truncated subtrees
("bunches") as pie charts of the class distribution below the cut.
"""

import logging
import xml.etree.ElementTree as ET
from typing import List, Union

from rfvis.layout import TreeLayout
from rfvis.nodes import LeafNode, TreeNode, traverse
from rfvis.plot.styles import (
    BranchColor,
    LeafColor,
    branch_color,
    branch_thickness,
    class_color,
    leaf_color,
    leaf_size,
    parse_style,
)
from rfvis.plot.svg import (
    add_svg_circle,
    add_svg_group,
    add_svg_line,
    add_svg_pie,
    fmt,
    get_svg_root,
)

logger = logging.getLogger(__name__)


def aggregate_class_counts(node: TreeNode) -> List[int]:
    """Sum the class distributions of all leaves below ``node``."""
    totals: List[int] = []
    for current in traverse(node):
        if not isinstance(current, LeafNode):
            continue
        for class_count in current.classes:
            if class_count.index >= len(totals):
                totals.extend([0] * (class_count.index + 1 - len(totals)))
            totals[class_count.index] += class_count.count
    return totals


def render_tree_svg(
    layout: TreeLayout,
    total_samples: int,
    width: float,
    height: float,
    branch_color_mode: Union[BranchColor, str] = BranchColor.IMPURITY,
    leaf_color_mode: Union[LeafColor, str] = LeafColor.IMPURITY,
) -> ET.Element:
    """
    Build the SVG element tree for one laid out decision tree.

    Args:
        layout: Result of ``calculate_layout``
        total_samples: Number of samples the forest was fitted on
        width: Width of the SVG
        height: Height of the SVG
        branch_color_mode: Colour mapping of the branches
        leaf_color_mode: Colour mapping of the leaves

    Returns:
        The ``svg`` root element
    """
    branch_mode = parse_style(BranchColor, branch_color_mode)
    leaf_mode = parse_style(LeafColor, leaf_color_mode)

    svg_root = get_svg_root(width, height)

    branch_group = add_svg_group(svg_root, "branches")
    for branch in layout.branches:
        add_svg_line(
            branch_group,
            (branch.x, branch.y),
            (branch.x2, branch.y2),
            {
                "id": f"branch-{branch.index}",
                "stroke": branch_color(branch, branch_mode),
                "stroke-width": fmt(branch_thickness(branch, total_samples)),
                "stroke-linecap": "round",
            },
        )

    # Leaves are sorted by descending samples, so small ones end up on top
    leaf_group = add_svg_group(svg_root, "leafs")
    for leaf in layout.leafs:
        add_svg_circle(
            leaf_group,
            (leaf.x, leaf.y),
            leaf_size(leaf, total_samples),
            {"id": f"leaf-{leaf.leaf_id}", "fill": leaf_color(leaf, leaf_mode)},
        )

    bunch_group = add_svg_group(svg_root, "bunches")
    for bunch in layout.bunches:
        counts = aggregate_class_counts(bunch.base_node)
        add_svg_pie(
            bunch_group,
            (bunch.x, bunch.y),
            leaf_size(bunch, total_samples),
            counts,
            [class_color(index) for index in range(len(counts))],
        )

    logger.debug(
        f"Rendered {len(layout.branches)} branches, {len(layout.leafs)} leafs "
        f"and {len(layout.bunches)} bunches"
    )
    return svg_root
