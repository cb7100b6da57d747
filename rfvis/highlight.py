"""Marking of root-to-leaf decision paths."""

import logging
from typing import Callable, Iterable, List

from rfvis.nodes import LeafNode, Tree, TreeNode, traverse

logger = logging.getLogger(__name__)


def walk_and_apply(node: TreeNode, fn: Callable[[TreeNode], None]) -> None:
    """Walk down a tree depth first and apply ``fn`` to each node."""
    for current in traverse(node):
        fn(current)


def get_leaf_nodes(node: TreeNode) -> List[LeafNode]:
    return [current for current in traverse(node) if isinstance(current, LeafNode)]


def path_to_root(tree: Tree, node: TreeNode) -> List[TreeNode]:
    """Return ``node`` followed by all of its ancestors up to the root."""
    path = [node]
    parent = tree.parent_of(node)
    while parent is not None:
        path.append(parent)
        parent = tree.parent_of(parent)
    return path


def _reset(node: TreeNode) -> None:
    node.selected_path_element = False


def mark_path(tree: Tree, leaf_ids: Iterable[int]) -> None:
    """
    Mark the given leaves and all of their ancestors in place.

    Every flag is reset first, so calling this with an empty set clears all
    highlights and calling it twice with the same set is a no-op.

    Args:
        tree: Tree on which the marking is performed
        leaf_ids: IDs of the leaves whose paths shall be highlighted
    """
    targets = set(leaf_ids)
    walk_and_apply(tree.base_node, _reset)

    found = set()
    for leaf in get_leaf_nodes(tree.base_node):
        if leaf.leaf_id not in targets:
            continue
        found.add(leaf.leaf_id)
        for node in path_to_root(tree, leaf):
            node.selected_path_element = True

    missing = targets - found
    if missing:
        logger.debug(f"Leaf ids not present in tree: {sorted(missing)}")
