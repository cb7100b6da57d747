import xml.etree.ElementTree as ET

import pytest

from rfvis.layout import LayoutConfig, calculate_layout
from rfvis.plot.styles import (
    DIMMED_COLOR,
    PATH_COLOR,
    BranchColor,
    LeafColor,
    branch_color,
    branch_thickness,
    class_color,
    leaf_color,
    leaf_size,
    linear_scale,
    parse_style,
)
from rfvis.plot.svg import build_pie_slice_path, pie_angles, svg_to_string
from rfvis.plot.tree_renderer import aggregate_class_counts, render_tree_svg
from rfvis.render import layout_tree, render_tree

SVG_NS = "{http://www.w3.org/2000/svg}"


def _parse(svg_root):
    return ET.fromstring(svg_to_string(svg_root))


def test_linear_scale_clamps():
    assert linear_scale(5, (0, 10), (0, 100)) == 50
    assert linear_scale(-5, (0, 10), (0, 100)) == 0
    assert linear_scale(50, (0, 10), (0, 100)) == 100
    assert linear_scale(3, (1, 1), (7, 9)) == 7


def test_parse_style():
    assert parse_style(BranchColor, "impurity-drop") is BranchColor.DROP_OF_IMPURITY
    assert parse_style(BranchColor, "DROP_OF_IMPURITY") is BranchColor.DROP_OF_IMPURITY
    assert parse_style(LeafColor, "class") is LeafColor.BEST_CLASS
    assert parse_style(LeafColor, LeafColor.PATH) is LeafColor.PATH
    with pytest.raises(ValueError):
        parse_style(LeafColor, "rainbow")


def test_branch_colors(small_tree):
    layout = calculate_layout(small_tree, 100)
    root = layout.branches[0]
    assert branch_color(root, BranchColor.BLACK) == "#000000"
    assert branch_color(root, BranchColor.PATH) == DIMMED_COLOR
    assert branch_color(root, "impurity").startswith("#")
    # Leaves carry no impurity drop and map to the low end of the scale
    assert branch_color(layout.branches[1], BranchColor.DROP_OF_IMPURITY) == "#ff0000"


def test_branch_thickness(small_tree):
    layout = calculate_layout(small_tree, 100)
    assert branch_thickness(layout.branches[0], 100) == 15
    assert 1 < branch_thickness(layout.branches[1], 100) < 15


def test_leaf_colors(small_tree):
    layout = calculate_layout(small_tree, 100)
    leaf = layout.leafs[0]
    assert leaf_color(leaf, LeafColor.BEST_CLASS) == class_color(leaf.best_class.index)
    assert leaf_color(leaf, LeafColor.PATH) == DIMMED_COLOR
    assert leaf_color(leaf, LeafColor.IMPURITY).startswith("#")


def test_leaf_impurity_saturates_at_half(records):
    from rfvis.nodes import Tree
    from rfvis.parser import parse_statistics

    text = records.tree_text(
        records.internal(0, 20),
        records.leaf(1, 10, 0, impurity=0.5),
        records.leaf(1, 10, 1, impurity=0.9),
    )
    layout = calculate_layout(Tree(0, parse_statistics(text)), 20)
    colors = {leaf_color(leaf, LeafColor.IMPURITY) for leaf in layout.leafs}
    assert colors == {"#ff0000"}


def test_leaf_size_grows_with_samples(small_tree):
    layout = calculate_layout(small_tree, 100)
    big, small = layout.leafs
    assert leaf_size(big, 100) > leaf_size(small, 100)
    assert leaf_size(big, 100) <= 100


def test_pie_angles():
    angles = pie_angles([1, 1, 2])
    assert angles[0][0] == 0
    assert angles[-1][1] == pytest.approx(6.283185307)
    assert pie_angles([0, 0]) == []


def test_pie_slice_path():
    path = build_pie_slice_path((10, 10), 5, 0, 3.5)
    assert path.startswith("M 10 10 L 10 5 A 5 5 0 1 1")
    assert path.endswith("Z")


def test_aggregate_class_counts(deep_tree):
    assert aggregate_class_counts(deep_tree.base_node) == [106, 94]
    assert aggregate_class_counts(deep_tree.nodes[6]) == [41, 9]


def test_render_tree_svg(deep_tree):
    layout = calculate_layout(deep_tree, 200, LayoutConfig(width=500, height=400))
    svg = _parse(render_tree_svg(layout, 200, 500, 400))

    assert svg.tag == f"{SVG_NS}svg"
    assert svg.get("width") == "500"
    lines = svg.findall(f".//{SVG_NS}line")
    circles = svg.findall(f".//{SVG_NS}g[@class='leafs']/{SVG_NS}circle")
    assert len(lines) == len(deep_tree.nodes)
    assert len(circles) == 5
    assert lines[0].get("id") == "branch-0"
    assert lines[0].get("x1") == "250"
    assert lines[0].get("y1") == "400"


def test_render_bunches_as_pies(deep_tree):
    layout = calculate_layout(deep_tree, 200, LayoutConfig(max_depth=2))
    svg = _parse(render_tree_svg(layout, 200, 800, 800))
    pies = svg.findall(f".//{SVG_NS}g[@class='bunch']")
    assert len(pies) == 2
    assert len(pies[0].findall(f"{SVG_NS}path")) == 2


def test_render_tree_highlight_uses_copy(reference_tree):
    svg = _parse(
        render_tree(
            reference_tree,
            100,
            branch_color=BranchColor.PATH,
            leaf_color=LeafColor.PATH,
            highlight_leaf_ids=[0],
        )
    )
    red = [line for line in svg.iter(f"{SVG_NS}line") if line.get("stroke") == PATH_COLOR]
    assert len(red) == 3
    assert not any(node.selected_path_element for node in reference_tree.nodes)


def test_layout_tree_without_highlight_keeps_flags(reference_tree):
    reference_tree.nodes[0].selected_path_element = True
    layout = layout_tree(reference_tree, 100)
    assert layout.branches[0].selected_path_element
