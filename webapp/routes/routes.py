# --------------------------------------------------------------
#  routes.py
# --------------------------------------------------------------
from __future__ import annotations

from logging import Logger
from typing import Any, Tuple, Union

from flask import Blueprint, Response, current_app, jsonify, request

from rfvis.exceptions import RFVisError
from rfvis.io import dump_json, forest_summary
from rfvis.plot.svg import svg_to_string
from rfvis.render import layout_tree, render_tree
from webapp.routes.helpers import parse_render_request
from webapp.services.forest_service import get_forest_state

bp = Blueprint("main", __name__)


@bp.route("/info")
def info() -> Response:
    """Name of the data folder that is being served."""
    return jsonify({"name": current_app.config["DATA_FOLDER"]})


@bp.route("/data")
def data() -> Response:
    """Raw content of the forest input files."""
    state = get_forest_state()
    return jsonify(state.raw_data.to_dict())


@bp.route("/forest")
def forest() -> Response:
    state = get_forest_state()
    return Response(dump_json(forest_summary(state.forest)), mimetype="application/json")


# ----------------------------------------------------------------------
# Tree rendering endpoints
# ----------------------------------------------------------------------


@bp.route("/trees/<int:index>/layout")
def tree_layout(index: int) -> Union[Response, Tuple[dict[str, Any], int]]:
    log: Logger = current_app.logger
    state = get_forest_state()
    tree = state.get_tree(index)
    if tree is None:
        return _fail(404, f"Tree {index} does not exist"), 404

    try:
        req = parse_render_request(
            request, current_app.config["SVG_WIDTH"], current_app.config["SVG_HEIGHT"]
        )
    except ValueError as e:
        log.warning(f"[layout] Bad request: {e}")
        return _fail(400, str(e)), 400

    layout = layout_tree(tree, state.forest.total_samples, req.config, req.path)
    return Response(dump_json(layout.to_dict()), mimetype="application/json")


@bp.route("/trees/<int:index>/svg")
def tree_svg(index: int) -> Union[Response, Tuple[dict[str, Any], int]]:
    log: Logger = current_app.logger
    state = get_forest_state()
    tree = state.get_tree(index)
    if tree is None:
        return _fail(404, f"Tree {index} does not exist"), 404

    try:
        req = parse_render_request(
            request, current_app.config["SVG_WIDTH"], current_app.config["SVG_HEIGHT"]
        )
    except ValueError as e:
        log.warning(f"[svg] Bad request: {e}")
        return _fail(400, str(e)), 400

    log.info(f"[svg] Rendering tree {index} (depth={req.config.max_depth})")
    svg_root = render_tree(
        tree,
        state.forest.total_samples,
        req.config,
        branch_color=req.branch_color,
        leaf_color=req.leaf_color,
        highlight_leaf_ids=req.path,
    )
    return Response(svg_to_string(svg_root), mimetype="image/svg+xml")


# ----------------------------------------------------------------------
# Error handling
# ----------------------------------------------------------------------


@bp.errorhandler(RFVisError)
def forest_error(exc: RFVisError):
    current_app.logger.error(f"[forest] Failed to parse forest: {exc}")
    return _fail(500, str(exc)), 500


@bp.errorhandler(FileNotFoundError)
def missing_data(exc: FileNotFoundError):
    current_app.logger.error(f"[forest] Missing data: {exc}")
    return _fail(500, str(exc)), 500


# ----------------------------------------------------------------------
# Utility: short error JSON helper
# ----------------------------------------------------------------------
def _fail(status_code: int, message: str) -> dict[str, Any]:
    return {
        "error": message,
        "status": status_code,
    }
