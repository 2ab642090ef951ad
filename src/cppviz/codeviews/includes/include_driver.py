import os

from .include_graph import IncludeGraph
from ...utils import postprocessor


class IncludeGraphDriver:
    def __init__(
        self,
        root_dir=".",
        allowed_folders=None,
        output_file=None,
        graph_format="mermaid",
        properties=None,
    ):
        if graph_format not in postprocessor.GRAPH_FORMATS:
            raise ValueError(f"Unknown graph format {graph_format!r}, expected one of {postprocessor.GRAPH_FORMATS}")

        self.root_dir = root_dir
        self.properties = properties or {}

        self.include_graph = IncludeGraph(root_dir, allowed_folders, self.properties)
        self.result = self.include_graph.result
        self.mermaid = self.result.mermaid
        self.adjacency = self.result.adjacency
        self.graph = self.result.graph

        if output_file:
            base_name = os.path.splitext(output_file)[0]
            if graph_format == "all" or graph_format == "mermaid":
                postprocessor.write_mermaid(self.mermaid, base_name + ".mmd")
            if graph_format == "all" or graph_format == "json":
                self.json = postprocessor.write_networkx_to_json(self.graph, base_name + ".json")
            if graph_format == "all" or graph_format == "dot":
                postprocessor.write_to_dot(
                    self.graph, base_name + ".dot",
                    output_png=self.properties.get("output_png", False), src_language="cpp"
                )

    def get_graph(self):
        return self.graph
