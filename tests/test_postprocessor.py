import json

import pytest

from cppviz.codeviews.flowchart.flowchart_driver import FlowchartDriver
from cppviz.codeviews.includes.include_driver import IncludeGraphDriver
from cppviz.utils import postprocessor

CODE = 'try {\n    puts("a \\\\ b");\n} catch (Error& e) {\n    log(e);\n}\n'


def test_json_output_keeps_attributes(tmp_path, build):
    graph = build(CODE).graph
    filename = tmp_path / "graph.json"
    graph_json = postprocessor.write_networkx_to_json(graph, filename)
    assert json.loads(filename.read_text()) == graph_json
    nodes = {node["id"]: node for node in graph_json["nodes"]}
    assert nodes["Start"]["type_label"] == "root"
    assert nodes["Node1"]["label"] == 'puts("a \\\\ b");'
    assert nodes["Node1"]["line"] == 2


def test_dot_output_quotes_labels(tmp_path, build):
    graph = build(CODE).graph
    filename = tmp_path / "graph.dot"
    postprocessor.write_to_dot(graph, str(filename), src_language="cpp")
    dot = filename.read_text()
    assert dot.startswith("strict digraph") or dot.startswith("digraph")
    assert "puts(" in dot
    assert "CATCH: Error&amp; e" not in dot
    assert "dashed" in dot


def test_dot_output_leaves_the_graph_untouched(tmp_path, build):
    graph = build(CODE).graph
    postprocessor.write_to_dot(graph, str(tmp_path / "graph.dot"), src_language="cpp")
    assert graph.nodes["Node2"]["label"] == "CATCH: Error& e"


def test_mermaid_output(tmp_path):
    filename = tmp_path / "chart.mmd"
    postprocessor.write_mermaid("graph TD;\n", filename)
    assert filename.read_text() == "graph TD;\n"


def test_flowchart_driver_formats(tmp_path):
    FlowchartDriver("cpp", CODE, str(tmp_path / "chart.anything"), "json")
    assert (tmp_path / "chart.json").exists()
    assert not (tmp_path / "chart.mmd").exists()


def test_flowchart_driver_without_output():
    driver = FlowchartDriver("c", "a();\n")
    assert driver.mermaid.startswith("graph TD;")
    assert driver.get_graph().number_of_nodes() == 2


def test_drivers_reject_unknown_formats(tmp_path):
    with pytest.raises(ValueError):
        FlowchartDriver("cpp", "a();", None, "svg")
    with pytest.raises(ValueError):
        IncludeGraphDriver(tmp_path, graph_format="svg")


def test_include_driver_writes_files(source_tree, tmp_path):
    output = tmp_path / "deps"
    driver = IncludeGraphDriver(source_tree, output_file=str(output), graph_format="all")
    assert (tmp_path / "deps.mmd").read_text() == driver.mermaid
    assert (tmp_path / "deps.json").exists()
    assert (tmp_path / "deps.dot").exists()
    assert driver.adjacency["F2"] == ["F1", "F3"]


def test_cli_and_drivers_accept_the_same_formats():
    from cppviz import cli
    from cppviz.codeviews.flowchart import flowchart_driver
    from cppviz.codeviews.includes import include_driver

    assert cli.GRAPH_FORMATS is postprocessor.GRAPH_FORMATS
    assert not hasattr(flowchart_driver, "GRAPH_FORMATS")
    assert not hasattr(include_driver, "GRAPH_FORMATS")
