"""Parsing, layout and rendering of random forest tree dumps."""

from rfvis.exceptions import EmptyForestError, FormatError, RFVisError, StructuralError
from rfvis.highlight import mark_path
from rfvis.layout import BranchStrategy, LayoutConfig, TreeLayout, calculate_layout
from rfvis.nodes import ClassCount, Forest, InternalNode, LeafNode, Tree
from rfvis.parser import assemble_forest, parse_statistics

__all__ = [
    "RFVisError",
    "FormatError",
    "StructuralError",
    "EmptyForestError",
    "ClassCount",
    "InternalNode",
    "LeafNode",
    "Tree",
    "Forest",
    "parse_statistics",
    "assemble_forest",
    "BranchStrategy",
    "LayoutConfig",
    "TreeLayout",
    "calculate_layout",
    "mark_path",
]
