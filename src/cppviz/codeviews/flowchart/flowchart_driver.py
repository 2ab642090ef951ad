import os

from loguru import logger

from .flowchart_cpp import FlowchartGraph
from ...utils import postprocessor
from ...utils.mermaid import DEFAULT_FLOWCHART_PROPERTIES, flowchart_to_mermaid


class FlowchartDriver:
    def __init__(
        self,
        src_language="cpp",
        src_code="",
        output_file=None,
        graph_format="mermaid",
        properties=None,
    ):
        if graph_format not in postprocessor.GRAPH_FORMATS:
            raise ValueError(f"Unknown graph format {graph_format!r}, expected one of {postprocessor.GRAPH_FORMATS}")

        self.src_language = src_language
        self.src_code = src_code
        self.properties = {**DEFAULT_FLOWCHART_PROPERTIES, **(properties or {})}

        self.flowchart = FlowchartGraph(self.src_language, self.src_code, self.properties)
        self.node_list = self.flowchart.node_list
        self.edge_list = self.flowchart.edge_list
        self.graph = self.flowchart.graph
        self.mermaid = flowchart_to_mermaid(self.node_list, self.edge_list, self.properties)
        logger.debug("Flowchart has {} nodes and {} edges", len(self.node_list), len(self.edge_list))

        if output_file:
            base_name = os.path.splitext(output_file)[0]
            if graph_format == "all" or graph_format == "mermaid":
                postprocessor.write_mermaid(self.mermaid, base_name + ".mmd")
            if graph_format == "all" or graph_format == "json":
                self.json = postprocessor.write_networkx_to_json(self.graph, base_name + ".json")
            if graph_format == "all" or graph_format == "dot":
                postprocessor.write_to_dot(
                    self.graph, base_name + ".dot",
                    output_png=self.properties.get("output_png", False), src_language=self.src_language
                )

    def get_graph(self):
        return self.graph
