import logging
from types import SimpleNamespace

import pytest

from rfvis.nodes import Tree
from rfvis.parser import parse_statistics


def pytest_configure(config):
    """Set up test environment before tests run."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# ----------------------------------------------------------------------
# Record builders
# ----------------------------------------------------------------------


def internal(depth, samples, impurity=0.5, drop=0.1):
    # 4 statistic fields followed by 7 opaque split fields
    return f"{depth};{samples};{impurity};{drop};0;feature_3;0.25;axis;-;-;-"


def leaf(depth, samples, leaf_id, counts=None, impurity=0.0):
    if counts is None:
        counts = [samples, 0]
    return f"{depth};{samples};{impurity};{leaf_id};{len(counts)};{','.join(str(c) for c in counts)}"


def tree_text(*records):
    return "H1\nH2\n" + "\n".join(records) + "\n"


@pytest.fixture
def records():
    return SimpleNamespace(internal=internal, leaf=leaf, tree_text=tree_text)


@pytest.fixture
def small_tree_text():
    """Root with 100 samples and two leaves with 40 and 60 samples."""
    return tree_text(
        internal(0, 100, impurity=0.5),
        leaf(1, 40, 0, [30, 10], impurity=0.375),
        leaf(1, 60, 1, [10, 50], impurity=0.278),
    )


@pytest.fixture
def small_tree(small_tree_text):
    return Tree(oob_error=0.1, base_node=parse_statistics(small_tree_text))


@pytest.fixture
def reference_tree_text():
    """Pre-order depths [0, 1, 2, 2, 1, 2, 3, 3]."""
    return tree_text(
        internal(0, 100),
        internal(1, 60),
        leaf(2, 30, 0),
        leaf(2, 30, 1),
        internal(1, 40),
        internal(2, 40),
        leaf(3, 25, 2),
        leaf(3, 15, 3),
    )


@pytest.fixture
def reference_tree(reference_tree_text):
    return Tree(oob_error=0.2, base_node=parse_statistics(reference_tree_text))


@pytest.fixture
def deep_tree():
    """Unbalanced tree four levels deep."""
    text = tree_text(
        internal(0, 200),
        internal(1, 150),
        internal(2, 100),
        leaf(3, 70, 0, [60, 10]),
        leaf(3, 30, 1, [5, 25]),
        leaf(2, 50, 2, [0, 50]),
        internal(1, 50),
        leaf(2, 45, 3, [40, 5]),
        leaf(2, 5, 4, [1, 4]),
    )
    return Tree(oob_error=0.3, base_node=parse_statistics(text))


FOREST_TEXT = "[1,0.25,0.5;\n0.25,1,0.75;\n0.5,0.75,1]\n\n0.1\n0.2\n0.3\n\n0.15\n"


@pytest.fixture
def forest_folder(tmp_path, small_tree_text, reference_tree_text):
    """Data folder with three trees whose ids do not sort lexicographically."""
    (tmp_path / "forest.txt").write_text(FOREST_TEXT, encoding="utf-8")
    (tmp_path / "tree_0.txt").write_text(small_tree_text, encoding="utf-8")
    (tmp_path / "tree_2.txt").write_text(reference_tree_text, encoding="utf-8")
    (tmp_path / "tree_10.txt").write_text(
        tree_text(internal(0, 80), leaf(1, 20, 0), leaf(1, 60, 1)), encoding="utf-8"
    )
    (tmp_path / "notes.md").write_text("ignored", encoding="utf-8")
    return tmp_path
