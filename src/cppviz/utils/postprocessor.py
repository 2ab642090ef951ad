import copy
import json
from subprocess import check_call

import networkx as nx
from networkx.readwrite import json_graph

GRAPH_FORMATS = ("mermaid", "json", "dot", "all")


def networkx_to_json(graph):
    """Convert a networkx graph to a json object"""
    graph_json = json_graph.node_link_data(graph)
    return graph_json


def write_networkx_to_json(graph, filename):
    """Convert a networkx graph to a json object and write it to filename"""
    graph_json = networkx_to_json(graph)
    with open(filename, "w") as f:
        json.dump(graph_json, f)
    return graph_json


def write_mermaid(mermaid, filename):
    with open(filename, "w", encoding="utf-8") as f:
        f.write(mermaid)
    return mermaid


def to_dot(graph):
    return nx.nx_pydot.to_pydot(graph)


def write_to_dot(og_graph, filename, output_png=False, src_language=None):
    graph = copy.deepcopy(og_graph)

    # DOT reserved keywords that need to be quoted
    dot_reserved_keywords = {
        'node', 'edge', 'graph', 'digraph', 'subgraph', 'strict',
        'Node', 'Edge', 'Graph', 'Digraph', 'Subgraph', 'Strict'
    }

    for node in graph.nodes:
        if 'label' in graph.nodes[node]:
            label = str(graph.nodes[node]['label'])
            if src_language in ['c', 'cpp']:
                # Escape backslashes first to preserve escape sequences
                label = label.replace('\\', '\\\\')
                label = label.replace('"', '\\"')
                label = label.replace('\n', ' ')
                label = label.replace('\r', ' ')

            # Quote C/C++ labels (for :: and other special chars) and reserved keywords
            if src_language in ['c', 'cpp'] or label in dot_reserved_keywords:
                label = f'"{label}"'

            graph.nodes[node]['label'] = label

    for edge in graph.edges:
        data = graph.edges[edge]
        if 'label' in data:
            label = str(data['label']).replace('"', '\\"')
            if not label:
                del data['label']
            else:
                data['label'] = f'"{label}"'

    nx.nx_pydot.write_dot(graph, filename)
    if output_png:
        check_call(
            ["dot", "-Tpng", filename, "-o", filename.rsplit(".", 1)[0] + ".png"]
        )
