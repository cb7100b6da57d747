"""Request handling helpers."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

from flask import Request

from rfvis.layout import (
    DEFAULT_TRUNK_LENGTH,
    BranchStrategy,
    LayoutConfig,
)
from rfvis.plot.styles import BranchColor, LeafColor, parse_style


@dataclass
class RenderRequest:
    """Encapsulates the query parameters of a layout or SVG request."""

    config: LayoutConfig
    branch_color: BranchColor
    leaf_color: LeafColor
    path: Optional[List[int]] = None


def _get_number(request: Request, name: str, default: float) -> float:
    value = request.args.get(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Query parameter '{name}' must be a number, got '{value}'")


def _get_depth(request: Request) -> float:
    value = request.args.get("depth")
    if value is None or value == "":
        return math.inf
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Query parameter 'depth' must be an integer, got '{value}'")


def parse_leaf_ids(value: Optional[str]) -> Optional[List[int]]:
    """Parse a comma separated list of leaf ids; None if the parameter is absent."""
    if value is None:
        return None
    try:
        return [int(token) for token in value.split(",") if token.strip()]
    except ValueError:
        raise ValueError(f"Query parameter 'path' must list integer leaf ids, got '{value}'")


def parse_render_request(request: Request, width: float, height: float) -> RenderRequest:
    """Parses and validates the query of a tree rendering request."""
    config = LayoutConfig(
        max_depth=_get_depth(request),
        trunk_length=_get_number(request, "trunkLength", DEFAULT_TRUNK_LENGTH),
        width=_get_number(request, "width", width),
        height=_get_number(request, "height", height),
        branch_strategy=BranchStrategy.parse(request.args.get("branchStrategy", "simple")),
    )
    return RenderRequest(
        config=config,
        branch_color=parse_style(BranchColor, request.args.get("branchColor", "impurity")),
        leaf_color=parse_style(LeafColor, request.args.get("leafColor", "impurity")),
        path=parse_leaf_ids(request.args.get("path")),
    )
