from click.testing import CliRunner

from rfvis.cli import main


def test_cli_exports_one_svg_per_tree(forest_folder, tmp_path):
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    result = CliRunner().invoke(
        main, ["cli", str(forest_folder), "--out", str(out_dir), "--depth", "2"]
    )
    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in out_dir.iterdir()) == [
        "tree-0.svg",
        "tree-1.svg",
        "tree-2.svg",
    ]
    assert "<svg" in (out_dir / "tree-1.svg").read_text(encoding="utf-8")


def test_cli_with_styles_and_path(forest_folder, tmp_path):
    result = CliRunner().invoke(
        main,
        [
            "cli",
            str(forest_folder),
            "-o",
            str(tmp_path),
            "--branch-color",
            "path",
            "--leaf-color",
            "class",
            "--branch-strategy",
            "up",
            "--path",
            "1",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "#ff0000" in (tmp_path / "tree-0.svg").read_text(encoding="utf-8")


def test_cli_missing_out_dir(forest_folder, tmp_path):
    result = CliRunner().invoke(
        main, ["cli", str(forest_folder), "--out", str(tmp_path / "nope")]
    )
    assert result.exit_code != 0
    assert "does not exist" in result.output


def test_cli_reports_parse_errors(forest_folder, tmp_path):
    (forest_folder / "tree_0.txt").write_text("H1\nH2\n0;1;2\n", encoding="utf-8")
    result = CliRunner().invoke(main, ["cli", str(forest_folder), "-o", str(tmp_path)])
    assert result.exit_code == 1
    assert "Could not parse forest" in result.output


def test_cli_rejects_invalid_depth(forest_folder, tmp_path):
    result = CliRunner().invoke(
        main, ["cli", str(forest_folder), "-o", str(tmp_path), "--depth", "0"]
    )
    assert result.exit_code == 2


def test_cli_reports_missing_forest_file(forest_folder, tmp_path):
    (forest_folder / "forest.txt").unlink()
    result = CliRunner().invoke(main, ["cli", str(forest_folder), "-o", str(tmp_path)])
    assert result.exit_code == 1
    assert "Could not read forest" in result.output
    assert "forest.txt" in result.output
    assert not isinstance(result.exception, FileNotFoundError)
