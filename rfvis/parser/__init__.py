"""
Parsers for random forest text dumps.

This module turns the ``forest.txt`` summary and the ``tree_<id>.txt`` node
listings into the in-memory node model.
"""

from .statistics_parser import (
    parse_statistics,
    parse_node,
    parse_class_counts,
)
from .forest_parser import (
    assemble_forest,
    parse_correlation_matrix,
)

__all__ = [
    "parse_statistics",
    "parse_node",
    "parse_class_counts",
    "assemble_forest",
    "parse_correlation_matrix",
]
