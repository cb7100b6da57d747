"""
Node model for parsed decision trees.

A tree is stored as a small arena: every node carries its pre-order index
(``node_id``) and the index of its parent (``parent_id``). Children are owned
downwards through ``InternalNode.children``; the upward relation is only an
index and is resolved through :meth:`Tree.parent_of`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

import numpy as np


@dataclass(frozen=True, slots=True)
class ClassCount:
    """Number of samples of one class that ended up in a leaf."""

    index: int
    count: int


@dataclass(slots=True, eq=False)
class InternalNode:
    depth: int
    samples: int
    impurity: float
    impurity_drop: float
    split: Tuple[str, ...] = ()
    children: List["TreeNode"] = field(default_factory=list)
    node_id: int = 0
    parent_id: Optional[int] = None
    selected_path_element: bool = False

    def add(self, node: "TreeNode") -> None:
        self.children.append(node)

    def __repr__(self):
        return f"InternalNode(id={self.node_id}, depth={self.depth}, samples={self.samples})"


@dataclass(slots=True, eq=False)
class LeafNode:
    depth: int
    samples: int
    impurity: float
    leaf_id: int
    classes: Tuple[ClassCount, ...] = ()
    node_id: int = 0
    parent_id: Optional[int] = None
    selected_path_element: bool = False

    @property
    def no_classes(self) -> int:
        return len(self.classes)

    @property
    def best_class(self) -> Optional[ClassCount]:
        # max() keeps the first maximal element, so ties go to the lower index
        if not self.classes:
            return None
        return max(self.classes, key=lambda c: c.count)

    def __repr__(self):
        return f"LeafNode(id={self.node_id}, leaf_id={self.leaf_id}, samples={self.samples})"


TreeNode = Union[InternalNode, LeafNode]


def traverse(node: TreeNode) -> Iterator[TreeNode]:
    """Yield ``node`` and all of its descendants in pre-order."""
    stack: List[TreeNode] = [node]
    while stack:
        current = stack.pop()
        yield current
        match current:
            case InternalNode(children=children):
                stack.extend(reversed(children))
            case LeafNode():
                pass


@dataclass(eq=False)
class Tree:
    """A single decision tree of a forest together with its node arena."""

    oob_error: float
    base_node: TreeNode
    nodes: List[TreeNode] = field(init=False, repr=False)

    def __post_init__(self):
        self.nodes = list(traverse(self.base_node))
        for index, node in enumerate(self.nodes):
            if node.node_id != index:
                raise ValueError(
                    f"Node ids must follow pre-order, got {node.node_id} at position {index}"
                )

    def parent_of(self, node: TreeNode) -> Optional[TreeNode]:
        if node.parent_id is None:
            return None
        return self.nodes[node.parent_id]

    def leaves(self) -> List[LeafNode]:
        return [node for node in self.nodes if isinstance(node, LeafNode)]

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass(eq=False)
class Forest:
    """
    Parsed random forest.

    Attributes:
        error: Validation error of the whole forest, between 0 and 1.
        total_samples: Number of samples the forest was fitted on, taken from
            the root of the first tree.
        correlation_matrix: Square matrix of tree correlations.
        trees: All trees of the forest in file order.
    """

    error: float
    total_samples: int
    correlation_matrix: np.ndarray
    trees: List[Tree]

    @property
    def oob_errors(self) -> List[float]:
        return [tree.oob_error for tree in self.trees]
