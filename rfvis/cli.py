"""Command line interface: export SVGs or start the GUI server."""

import logging
import math
from pathlib import Path
from typing import List, Optional

import click

from rfvis.exceptions import RFVisError
from rfvis.io import load_forest, write_svg
from rfvis.layout import DEFAULT_HEIGHT, DEFAULT_TRUNK_LENGTH, DEFAULT_WIDTH, BranchStrategy, LayoutConfig
from rfvis.nodes import Forest
from rfvis.plot.styles import BranchColor, LeafColor, parse_style
from rfvis.render import render_tree

logger = logging.getLogger(__name__)


def export_forest(
    forest: Forest,
    out_dir: Path,
    config: LayoutConfig,
    branch_color: BranchColor = BranchColor.IMPURITY,
    leaf_color: LeafColor = LeafColor.IMPURITY,
    highlight_leaf_ids: Optional[List[int]] = None,
) -> List[Path]:
    """Write one ``tree-<index>.svg`` per tree and return the written paths."""
    paths = []
    for index, tree in enumerate(forest.trees):
        svg_root = render_tree(
            tree,
            forest.total_samples,
            config,
            branch_color=branch_color,
            leaf_color=leaf_color,
            highlight_leaf_ids=highlight_leaf_ids,
        )
        file_path = out_dir / f"tree-{index}.svg"
        write_svg(svg_root, file_path)
        logger.info(f'>> Exported "{file_path}"')
        paths.append(file_path)
    return paths


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Visualize random forest tree dumps."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@main.command("cli")
@click.argument("data", type=click.Path(exists=True, file_okay=False))
@click.option("--out", "-o", type=click.Path(), default=None,
              help="Output folder for the SVG files. If omitted the current working directory is used.")
@click.option("--width", "-w", type=float, default=DEFAULT_WIDTH, show_default=True, help="Width of the SVG.")
@click.option("--height", "-h", type=float, default=DEFAULT_HEIGHT, show_default=True, help="Height of the SVG.")
@click.option("--trunk-length", "-l", type=float, default=DEFAULT_TRUNK_LENGTH, show_default=True,
              help="Length of the trunk which influences the entire tree size.")
@click.option("--depth", "-d", type=int, default=None,
              help="Depth of the tree rendering. Cut off subtrees are drawn as pie charts.")
@click.option("--branch-strategy", type=click.Choice(["simple", "up"]), default="simple", show_default=True)
@click.option("--leaf-color", type=click.Choice([c.value for c in LeafColor]), default="impurity",
              show_default=True, help="Colour of the leaves.")
@click.option("--branch-color", type=click.Choice([c.value for c in BranchColor]), default="impurity",
              show_default=True, help="Colour of the branches.")
@click.option("--path", "-p", "path_leaf_ids", type=int, multiple=True,
              help="Leaf id whose decision path is highlighted. May be repeated.")
def cli_command(data, out, width, height, trunk_length, depth, branch_strategy,
                leaf_color, branch_color, path_leaf_ids):
    """Command line interface to generate SVGs."""
    out_dir = Path(out).resolve() if out else Path.cwd()
    if not out_dir.is_dir():
        raise click.UsageError(f"Output directory {out_dir} does not exist.")

    try:
        config = LayoutConfig(
            max_depth=depth if depth is not None else math.inf,
            trunk_length=trunk_length,
            width=width,
            height=height,
            branch_strategy=BranchStrategy.parse(branch_strategy),
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    try:
        forest = load_forest(data)
    except FileNotFoundError as e:
        raise click.ClickException(f"Could not read forest: {e}")
    except RFVisError as e:
        raise click.ClickException(f"Could not parse forest: {e}")

    export_forest(
        forest,
        out_dir,
        config,
        branch_color=parse_style(BranchColor, branch_color),
        leaf_color=parse_style(LeafColor, leaf_color),
        highlight_leaf_ids=list(path_leaf_ids) if path_leaf_ids else None,
    )


@main.command("gui")
@click.argument("data", type=click.Path(exists=True, file_okay=False))
@click.option("--port", "-p", type=int, default=8080, show_default=True,
              help="Port on which the server shall run on.")
@click.option("--host", default="127.0.0.1", show_default=True)
def gui_command(data, port, host):
    """Graphical user interface."""
    from webapp import create_app

    app = create_app(data)
    app.logger.info(f"GUI running at http://{host}:{port}")
    app.run(host=host, port=port)


if __name__ == "__main__":
    main()
