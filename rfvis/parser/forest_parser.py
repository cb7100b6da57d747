"""
Assembles a Forest from ``forest.txt`` and the per-tree statistics files.

``forest.txt`` consists of three blocks separated by a blank line:

1. the bracketed correlation matrix (rows separated by ``;`` + newline,
   values by ``,``)
2. one out-of-bag error per tree, one per line
3. the overall validation error
"""

import logging
from typing import List, Sequence

import numpy as np

from rfvis.exceptions import EmptyForestError, FormatError
from rfvis.nodes import Forest, Tree
from rfvis.parser.statistics_parser import parse_statistics

logger = logging.getLogger(__name__)


def _parse_float(token: str, what: str) -> float:
    try:
        return float(token.strip())
    except ValueError:
        raise FormatError(f"Cannot parse {what} value '{token.strip()}' as a float")


def parse_correlation_matrix(text: str) -> np.ndarray:
    """
    Parse a correlation matrix block into a two-dimensional float array.

    Args:
        text: Matrix text such as "[1,0.5;\\n0.5,1]"

    Returns:
        numpy array of shape (rows, columns)

    Raises:
        FormatError: If a value is not a float or rows differ in length
    """
    text = text.replace("[", "").replace("]", "").strip()
    rows = [
        [_parse_float(value, "correlation") for value in line.split(",")]
        for line in text.split(";\n")
    ]
    widths = {len(row) for row in rows}
    if len(widths) != 1:
        raise FormatError(f"Correlation matrix rows differ in length: {sorted(widths)}")
    return np.array(rows, dtype=float)


def split_forest_blocks(text: str) -> List[str]:
    blocks = text.replace("\r\n", "\n").strip().split("\n\n")
    if len(blocks) < 3:
        raise FormatError(
            f"Forest file needs 3 blocks separated by blank lines, found {len(blocks)}"
        )
    return blocks


def assemble_forest(forest_text: str, tree_texts: Sequence[str]) -> Forest:
    """
    Build the Forest aggregate from raw file contents.

    Args:
        forest_text: Content of ``forest.txt``
        tree_texts: Contents of the ``tree_<id>.txt`` files in tree order

    Returns:
        Forest with one Tree per tree text

    Raises:
        EmptyForestError: If no tree texts are given
        FormatError: If a numeric token cannot be parsed or the number of
            out-of-bag errors differs from the number of trees
        StructuralError: If one of the tree files is malformed
    """
    if not tree_texts:
        raise EmptyForestError("A forest needs at least one tree")

    blocks = split_forest_blocks(forest_text)
    correlation_matrix = parse_correlation_matrix(blocks[0])
    oob_errors = [
        _parse_float(line, "out-of-bag error")
        for line in blocks[1].strip().split("\n")
    ]
    error = _parse_float(blocks[2], "forest error")

    if len(oob_errors) != len(tree_texts):
        raise FormatError(
            f"Found {len(oob_errors)} out-of-bag errors for {len(tree_texts)} trees"
        )
    if correlation_matrix.shape != (len(tree_texts), len(tree_texts)):
        logger.warning(
            f"Correlation matrix has shape {correlation_matrix.shape} "
            f"but the forest has {len(tree_texts)} trees"
        )

    trees = [
        Tree(oob_error=oob_error, base_node=parse_statistics(tree_text))
        for oob_error, tree_text in zip(oob_errors, tree_texts)
    ]
    logger.info(f"Assembled forest with {len(trees)} trees")

    return Forest(
        error=error,
        total_samples=trees[0].base_node.samples,
        correlation_matrix=correlation_matrix,
        trees=trees,
    )
