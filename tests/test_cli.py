import json

import pytest
from click.testing import CliRunner

from cppviz import __version__
from cppviz.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def code_file(tmp_path):
    path = tmp_path / "sample.cpp"
    path.write_text("int main() {\n    if (ready) {\n        go();\n    }\n    return 0;\n}\n")
    return path


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_flowchart_to_stdout(runner, code_file):
    result = runner.invoke(main, ["flowchart", str(code_file)])
    assert result.exit_code == 0
    assert result.output.startswith("graph TD;\n")
    assert 'Node1{"ready ?"}:::decision;' in result.output
    assert 'Node3(("return 0;")):::terminator;' in result.output
    assert "click" not in result.output


def test_flowchart_options(runner, code_file):
    result = runner.invoke(main, ["flowchart", str(code_file), "--direction", "LR", "--click-bindings"])
    assert result.exit_code == 0
    assert result.output.startswith("graph LR;\n")
    payload = f"{code_file.resolve().as_posix()}:2"
    assert f'click Node1 call onNodeClick("Node1", "{payload}");' in result.output


def test_flowchart_writes_files(runner, code_file, tmp_path):
    output = tmp_path / "out" / "chart"
    output.parent.mkdir()
    result = runner.invoke(main, ["flowchart", str(code_file), "-o", str(output), "--format", "all"])
    assert result.exit_code == 0
    assert result.output == ""
    assert (tmp_path / "out" / "chart.mmd").read_text().startswith("graph TD;")
    data = json.loads((tmp_path / "out" / "chart.json").read_text())
    assert {node["id"] for node in data["nodes"]} == {"Start", "Node0", "Node1", "Node2", "Node3"}
    assert (tmp_path / "out" / "chart.dot").exists()


def test_flowchart_missing_file(runner, tmp_path):
    result = runner.invoke(main, ["flowchart", str(tmp_path / "missing.c")])
    assert result.exit_code == 2


def test_flowchart_rejects_unknown_format(runner, code_file):
    result = runner.invoke(main, ["flowchart", str(code_file), "--format", "svg"])
    assert result.exit_code == 2


def test_deps(runner, source_tree):
    result = runner.invoke(main, ["deps", str(source_tree)])
    assert result.exit_code == 0
    assert "F1 --> F2;" in result.output
    assert "F3 --> F2;" in result.output


def test_deps_with_folder_filter(runner, source_tree):
    result = runner.invoke(main, ["deps", str(source_tree), "-f", "other"])
    assert result.exit_code == 0
    assert 'F0["lonely.c"]:::file;' in result.output
    assert "util" not in result.output


def test_deps_with_custom_ignore_list(runner, source_tree):
    result = runner.invoke(main, ["deps", str(source_tree), "--ignore", "other"])
    assert result.exit_code == 0
    assert 'subgraph G0 ["📁 build"]' in result.output


def test_folders(runner, source_tree):
    result = runner.invoke(main, ["folders", str(source_tree)])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["Root", "lib", "other"]


def test_folders_without_sources(runner, tmp_path):
    result = runner.invoke(main, ["folders", str(tmp_path)])
    assert result.exit_code == 1
    assert "No source folders found." in result.output
