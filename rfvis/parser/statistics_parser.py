"""
Parser for the per-tree statistics files (``tree_<id>.txt``).

Each file starts with two header lines followed by one ``;``-separated record
per node in pre-order. Internal node records have 11 fields, leaf records
have 6. The tree is rebuilt with a stack of currently open ancestors.
"""

import logging
from typing import List, Tuple

from rfvis.exceptions import FormatError, StructuralError
from rfvis.nodes import ClassCount, InternalNode, LeafNode, TreeNode

logger = logging.getLogger(__name__)

INTERNAL_NODE_FIELDS = 11
LEAF_NODE_FIELDS = 6
HEADER_LINES = 2


# ===================================================================
# 1. FIELD CONVERSION
# ===================================================================


def _to_int(token: str, name: str, line_number: int) -> int:
    try:
        return int(token.strip())
    except ValueError:
        raise FormatError(f"Field '{name}' is not an integer: '{token}'", line_number)


def _to_float(token: str, name: str, line_number: int) -> float:
    try:
        return float(token.strip())
    except ValueError:
        raise FormatError(f"Field '{name}' is not a number: '{token}'", line_number)


def _parse_depth(token: str, line_number: int) -> int:
    depth = _to_int(token, "depth", line_number)
    if depth < 0:
        raise FormatError(f"Depth must be non-negative, got {depth}", line_number)
    return depth


def parse_class_counts(token: str, line_number: int) -> Tuple[ClassCount, ...]:
    """
    Parse the comma separated class distribution of a leaf.

    Args:
        token: String in format "12,0,3"
        line_number: Line used in error messages

    Returns:
        Tuple of ClassCount in class index order
    """
    values = token.strip().strip("[]").split(",")
    return tuple(
        ClassCount(index, _to_int(value, "classes", line_number))
        for index, value in enumerate(values)
    )


# ===================================================================
# 2. RECORD PARSING
# ===================================================================


def parse_internal_node(fields: List[str], line_number: int) -> InternalNode:
    return InternalNode(
        depth=_parse_depth(fields[0], line_number),
        samples=_to_int(fields[1], "samples", line_number),
        impurity=_to_float(fields[2], "impurity", line_number),
        impurity_drop=_to_float(fields[3], "impurity_drop", line_number),
        split=tuple(f.strip() for f in fields[4:]),
    )


def parse_leaf_node(fields: List[str], line_number: int) -> LeafNode:
    no_classes = _to_int(fields[4], "no_classes", line_number)
    classes = parse_class_counts(fields[5], line_number)
    if len(classes) != no_classes:
        raise FormatError(
            f"Leaf declares {no_classes} classes but lists {len(classes)} counts",
            line_number,
        )
    return LeafNode(
        depth=_parse_depth(fields[0], line_number),
        samples=_to_int(fields[1], "samples", line_number),
        impurity=_to_float(fields[2], "impurity", line_number),
        leaf_id=_to_int(fields[3], "leaf_id", line_number),
        classes=classes,
    )


def parse_node(line: str, line_number: int) -> TreeNode:
    """Dispatch a record on its field count."""
    fields = line.split(";")
    if len(fields) == INTERNAL_NODE_FIELDS:
        return parse_internal_node(fields, line_number)
    if len(fields) == LEAF_NODE_FIELDS:
        return parse_leaf_node(fields, line_number)
    raise FormatError(
        f"Unknown tree file format: expected {INTERNAL_NODE_FIELDS} or "
        f"{LEAF_NODE_FIELDS} fields, got {len(fields)}",
        line_number,
    )


# ===================================================================
# 3. TREE RECONSTRUCTION
# ===================================================================


def attach_node(stack: List[TreeNode], node: TreeNode, line_number: int) -> None:
    """Attach ``node`` under the top of ``stack`` and push it."""
    if not stack:
        raise StructuralError("Found a second root node at depth 0", line_number)

    parent = stack[-1]
    match parent:
        case LeafNode():
            raise StructuralError(
                f"Leaf node {parent.leaf_id} cannot have children", line_number
            )
        case InternalNode():
            if len(parent.children) >= 2:
                raise StructuralError(
                    f"Node at depth {parent.depth} already has two children", line_number
                )
            parent.add(node)
            node.parent_id = parent.node_id
    stack.append(node)


def parse_statistics(text: str) -> TreeNode:
    """
    Parse the content of a tree statistics file into a linked node tree.

    Args:
        text: Full content of a ``tree_<id>.txt`` file, header lines included

    Returns:
        The root node. Every node has ``node_id`` set to its pre-order index
        and ``parent_id`` set to the index of its parent.

    Raises:
        FormatError: If a record has neither 11 nor 6 fields or holds
            unparseable values
        StructuralError: If the depth sequence is not a valid pre-order encoding
    """
    lines = text.replace("\r\n", "\n").strip().split("\n")[HEADER_LINES:]
    records = [
        (number, line)
        for number, line in enumerate(lines, start=HEADER_LINES + 1)
        if line.strip()
    ]
    if not records:
        raise StructuralError("Tree file contains no node records")

    first_line, first = records[0]
    base_node = parse_node(first, first_line)
    if base_node.depth != 0:
        raise StructuralError(
            f"Root node must have depth 0, got {base_node.depth}", first_line
        )

    stack: List[TreeNode] = [base_node]
    for node_id, (line_number, line) in enumerate(records[1:], start=1):
        node = parse_node(line, line_number)
        node.node_id = node_id
        latest = stack[-1]

        if node.depth == latest.depth + 1:  # child
            pass
        elif node.depth == latest.depth:  # sibling
            stack.pop()
        elif node.depth < latest.depth:  # a whole subtree was closed
            del stack[node.depth:]
        else:
            raise StructuralError(
                f"Depth jumps from {latest.depth} to {node.depth}", line_number
            )

        attach_node(stack, node, line_number)

    logger.debug(f"Parsed tree with {len(records)} nodes")
    return base_node
