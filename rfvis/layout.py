"""
Layout calculation for branching random forest trees.

The trunk is anchored at the bottom centre of the canvas and grows upwards.
Every child branch starts at the terminus of its parent; its length shrinks
with the share of samples it receives and its angle is skewed outwards by the
imbalance of the split.

The layout never writes to the parsed nodes. All geometry lives in the
returned :class:`TreeLayout`, so the same tree can be laid out with different
configurations side by side.
"""

import logging
import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from rfvis.nodes import ClassCount, InternalNode, LeafNode, Tree, TreeNode

logger = logging.getLogger(__name__)

DEFAULT_TRUNK_LENGTH = 100
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 800
DEFAULT_MAX_SHORTENING_FACTOR = 0.9
DEFAULT_MIN_BRANCH_LENGTH = 4


class BranchStrategy(Enum):
    """How the children of a node are assigned to the left and right side."""

    SIMPLE = "simple"
    UP = "up"

    @classmethod
    def parse(cls, value: "str | BranchStrategy") -> "BranchStrategy":
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            choices = ", ".join(s.name for s in cls)
            raise ValueError(f"Unknown branch strategy '{value}'. Choose one of: {choices}")


@dataclass
class LayoutConfig:
    """Rendering parameters of a single layout pass."""

    max_depth: float = math.inf
    trunk_length: float = DEFAULT_TRUNK_LENGTH
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    branch_strategy: BranchStrategy = BranchStrategy.SIMPLE
    max_shortening_factor: float = DEFAULT_MAX_SHORTENING_FACTOR
    min_branch_length: float = DEFAULT_MIN_BRANCH_LENGTH

    def __post_init__(self):
        self.branch_strategy = BranchStrategy.parse(self.branch_strategy)
        # Truncation compares node depths for equality, so only whole depths cut
        if self.max_depth != math.inf and not (
            float(self.max_depth).is_integer() and self.max_depth >= 1
        ):
            raise ValueError(
                f"max_depth must be a whole number of at least 1, got {self.max_depth}"
            )
        if self.trunk_length <= 0:
            raise ValueError(f"trunk_length must be positive, got {self.trunk_length}")
        if self.max_shortening_factor <= 0:
            raise ValueError(
                f"max_shortening_factor must be positive, got {self.max_shortening_factor}"
            )
        if self.min_branch_length < 0:
            raise ValueError(
                f"min_branch_length must not be negative, got {self.min_branch_length}"
            )


# --- Layout records ---


@dataclass(frozen=True, slots=True)
class NodeGeometry:
    x: float
    y: float
    x2: float
    y2: float
    angle: float
    length: float
    depth: int
    index: int
    parent_index: Optional[int]


@dataclass(frozen=True, slots=True)
class BranchRecord:
    node_id: int
    index: int
    parent_index: Optional[int]
    x: float
    y: float
    x2: float
    y2: float
    angle: float
    length: float
    depth: int
    samples: int
    impurity: float
    impurity_drop: Optional[float]
    selected_path_element: bool


@dataclass(frozen=True, slots=True)
class LeafRecord:
    node_id: int
    x: float
    y: float
    depth: int
    impurity: float
    samples: int
    leaf_id: int
    no_classes: int
    classes: Tuple[ClassCount, ...]
    best_class: Optional[ClassCount]
    selected_path_element: bool


@dataclass(frozen=True, slots=True)
class BunchRecord:
    """Placeholder for a subtree that was cut off at the maximum depth."""

    node_id: int
    x: float
    y: float
    depth: int
    samples: int
    base_node: TreeNode


@dataclass
class TreeLayout:
    branches: List[BranchRecord] = field(default_factory=list)
    leafs: List[LeafRecord] = field(default_factory=list)
    bunches: List[BunchRecord] = field(default_factory=list)
    geometry: Dict[int, NodeGeometry] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "branches": [asdict(branch) for branch in self.branches],
            "leafs": [asdict(leaf) for leaf in self.leafs],
            "bunches": [
                {
                    "node_id": bunch.node_id,
                    "x": bunch.x,
                    "y": bunch.y,
                    "depth": bunch.depth,
                    "samples": bunch.samples,
                }
                for bunch in self.bunches
            ],
        }


# --- Geometry helpers ---


def _proportion(child_samples: int, parent_samples: int) -> float:
    if parent_samples <= 0:
        return 0.0
    return child_samples / parent_samples


def _make_geometry(
    x: float,
    y: float,
    angle: float,
    length: float,
    depth: int,
    index: int,
    parent_index: Optional[int],
) -> NodeGeometry:
    return NodeGeometry(
        x=x,
        y=y,
        x2=x + length * math.sin(angle),
        y2=y - length * math.cos(angle),
        angle=angle,
        length=length,
        depth=depth,
        index=index,
        parent_index=parent_index,
    )


def order_children(
    node: InternalNode, angle: float, strategy: BranchStrategy
) -> Tuple[Optional[TreeNode], Optional[TreeNode]]:
    """
    Decide which child grows to the left and which to the right.

    Args:
        node: Internal node with one or two children
        angle: Angle of the branch leading into ``node``
        strategy: Ordering strategy

    Returns:
        Tuple of (left_child, right_child); a missing child is None
    """
    first = node.children[0] if len(node.children) > 0 else None
    second = node.children[1] if len(node.children) > 1 else None

    match strategy:
        case BranchStrategy.SIMPLE:
            return first, second
        case BranchStrategy.UP:
            # The bigger child is placed away from the side the branch leans to
            first_samples = first.samples if first is not None else 0
            first_bigger = _proportion(first_samples, node.samples) >= 0.5
            left_bound = angle < 0
            if first_bigger == left_bound:
                return second, first
            return first, second


def child_length(child: TreeNode, parent: TreeNode, parent_length: float, config: LayoutConfig) -> float:
    share = min(_proportion(child.samples, parent.samples), config.max_shortening_factor)
    return max(share * parent_length, config.min_branch_length)


def calculate_layout(
    tree: Tree, total_samples: int, config: Optional[LayoutConfig] = None
) -> TreeLayout:
    """
    Compute the branching layout of one tree.

    Args:
        tree: Parsed tree
        total_samples: Number of samples the forest was fitted on
        config: Rendering parameters, defaults to ``LayoutConfig()``

    Returns:
        TreeLayout whose ``branches`` are in pre-order and whose ``leafs`` and
        ``bunches`` are sorted by descending sample count.
    """
    if config is None:
        config = LayoutConfig()

    layout = TreeLayout()

    # Explicit stack instead of recursion so deep trees do not hit the recursion limit
    stack: List[Tuple[TreeNode, float, float, float, float, int, Optional[int]]] = [
        (tree.base_node, config.width / 2, config.height, 0.0, config.trunk_length, 0, None)
    ]
    while stack:
        node, x, y, angle, length, depth, parent_index = stack.pop()
        geometry = _make_geometry(x, y, angle, length, depth, len(layout.branches), parent_index)
        layout.geometry[node.node_id] = geometry
        layout.branches.append(_branch_record(node, geometry))

        if depth == config.max_depth - 1:
            layout.bunches.append(_bunch_record(node, geometry))
            continue

        match node:
            case LeafNode():
                layout.leafs.append(_leaf_record(node, geometry))
            case InternalNode(children=[]):
                layout.bunches.append(_bunch_record(node, geometry))
            case InternalNode():
                left, right = order_children(node, angle, config.branch_strategy)
                pending = []
                if left is not None:
                    spread = abs(_proportion(left.samples, node.samples) - 1)
                    pending.append((left, angle - spread))
                if right is not None:
                    spread = abs(_proportion(right.samples, node.samples) - 1)
                    pending.append((right, angle + spread))
                # Pushed in reverse so the left child is visited first
                for child, child_angle in reversed(pending):
                    stack.append(
                        (
                            child,
                            geometry.x2,
                            geometry.y2,
                            child_angle,
                            child_length(child, node, length, config),
                            depth + 1,
                            geometry.index,
                        )
                    )

    layout.leafs.sort(key=lambda leaf: leaf.samples, reverse=True)
    layout.bunches.sort(key=lambda bunch: bunch.samples, reverse=True)

    logger.debug(
        f"Layout of {len(tree)} nodes (total samples {total_samples}): "
        f"{len(layout.branches)} branches, {len(layout.leafs)} leafs, "
        f"{len(layout.bunches)} bunches"
    )
    return layout


def _branch_record(node: TreeNode, geometry: NodeGeometry) -> BranchRecord:
    match node:
        case InternalNode():
            impurity_drop: Optional[float] = node.impurity_drop
        case LeafNode():
            impurity_drop = None
    return BranchRecord(
        node_id=node.node_id,
        index=geometry.index,
        parent_index=geometry.parent_index,
        x=geometry.x,
        y=geometry.y,
        x2=geometry.x2,
        y2=geometry.y2,
        angle=geometry.angle,
        length=geometry.length,
        depth=geometry.depth,
        samples=node.samples,
        impurity=node.impurity,
        impurity_drop=impurity_drop,
        selected_path_element=node.selected_path_element,
    )


def _leaf_record(node: LeafNode, geometry: NodeGeometry) -> LeafRecord:
    return LeafRecord(
        node_id=node.node_id,
        x=geometry.x2,
        y=geometry.y2,
        depth=geometry.depth,
        impurity=node.impurity,
        samples=node.samples,
        leaf_id=node.leaf_id,
        no_classes=node.no_classes,
        classes=node.classes,
        best_class=node.best_class,
        selected_path_element=node.selected_path_element,
    )


def _bunch_record(node: TreeNode, geometry: NodeGeometry) -> BunchRecord:
    return BunchRecord(
        node_id=node.node_id,
        x=geometry.x2,
        y=geometry.y2,
        depth=geometry.depth,
        samples=node.samples,
        base_node=node,
    )
