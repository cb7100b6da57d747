import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union
from xml.etree.ElementTree import Element

import numpy as np

from rfvis.nodes import Forest
from rfvis.parser.forest_parser import assemble_forest
from rfvis.plot.svg import svg_to_string

logger = logging.getLogger(__name__)

FOREST_FILE = "forest.txt"


@dataclass
class RawForestData:
    """Raw content of the input files of one forest."""

    forest_file_content: str
    tree_file_contents: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "forestFileContent": self.forest_file_content,
            "treeFileContents": self.tree_file_contents,
        }


class NumpyEncoder(json.JSONEncoder):
    def default(self, o: Any):
        if isinstance(o, np.ndarray):
            return o.tolist()
        if isinstance(o, np.generic):
            return o.item()
        return super().default(o)


def _tree_file_id(path: Path) -> Union[int, None]:
    try:
        return int(path.stem.split("_")[1])
    except (IndexError, ValueError):
        return None


def read_data_folder(data_folder: Union[str, Path]) -> RawForestData:
    """
    Read the text files of a forest from the given folder.

    Args:
        data_folder: Folder containing ``forest.txt`` and ``tree_<id>.txt`` files

    Returns:
        RawForestData with the tree files ordered by their numeric id

    Raises:
        FileNotFoundError: If the folder or ``forest.txt`` does not exist
    """
    data_path = Path(data_folder).resolve()
    if not data_path.is_dir():
        raise FileNotFoundError(f"Data folder {data_path} does not exist")

    forest_file_content = (data_path / FOREST_FILE).read_text(encoding="utf-8")

    tree_files = {}
    for path in data_path.iterdir():
        if not (path.name.startswith("tree") and path.suffix == ".txt"):
            continue
        tree_id = _tree_file_id(path)
        if tree_id is None:
            logger.warning(f"Skipping tree file without numeric id: {path.name}")
            continue
        tree_files[tree_id] = path

    tree_file_contents = [
        tree_files[tree_id].read_text(encoding="utf-8") for tree_id in sorted(tree_files)
    ]
    logger.info(f"Read {len(tree_file_contents)} tree files from {data_path}")
    return RawForestData(forest_file_content, tree_file_contents)


def load_forest(data_folder: Union[str, Path]) -> Forest:
    raw_data = read_data_folder(data_folder)
    return assemble_forest(raw_data.forest_file_content, raw_data.tree_file_contents)


def forest_summary(forest: Forest) -> Dict[str, Any]:
    return {
        "error": forest.error,
        "totalSamples": forest.total_samples,
        "correlationMatrix": forest.correlation_matrix,
        "oobErrors": forest.oob_errors,
        "treeCount": len(forest.trees),
    }


def dump_json(data: Any) -> str:
    return json.dumps(data, cls=NumpyEncoder)


def write_svg(svg_root: Element, path: Union[str, Path]) -> None:
    with open(path, mode="w", encoding="utf-8") as f:
        f.write(svg_to_string(svg_root))
