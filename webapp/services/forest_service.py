"""Loading and caching of the forest served by the GUI backend."""

from dataclasses import dataclass
from logging import Logger
from typing import Optional

from flask import current_app

from rfvis.io import RawForestData, read_data_folder
from rfvis.nodes import Forest, Tree
from rfvis.parser import assemble_forest

EXTENSION_KEY = "rfvis"


@dataclass
class ForestState:
    """Raw input files and the forest parsed from them."""

    name: str
    raw_data: RawForestData
    forest: Forest

    def get_tree(self, index: int) -> Optional[Tree]:
        if 0 <= index < len(self.forest.trees):
            return self.forest.trees[index]
        return None


def load_forest_state(data_folder: str) -> ForestState:
    raw_data = read_data_folder(data_folder)
    forest = assemble_forest(raw_data.forest_file_content, raw_data.tree_file_contents)
    return ForestState(name=data_folder, raw_data=raw_data, forest=forest)


def get_forest_state() -> ForestState:
    """Return the forest of the current app, parsing it on first use."""
    state: Optional[ForestState] = current_app.extensions.get(EXTENSION_KEY)
    if state is None:
        log: Logger = current_app.logger
        data_folder = current_app.config["DATA_FOLDER"]
        log.info(f"[forest] Loading forest from {data_folder}")
        state = load_forest_state(data_folder)
        current_app.extensions[EXTENSION_KEY] = state
        log.info(f"[forest] Loaded {len(state.forest.trees)} trees")
    return state
