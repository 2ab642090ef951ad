from pathlib import PurePath

from .c_nodes import StatementKind, node_categories
from .label_utils import sanitize_label

FLOWCHART_CLASS_DEFS = [
    "classDef default fill:#1e1e1e,stroke:#cccccc,stroke-width:1px,color:#fff,rx:3px,ry:3px;",
    "classDef decision fill:#5b2d90,stroke:#a772d0,stroke-width:2px,color:#fff,rx:5px,ry:5px;",
    "classDef process fill:#005f9e,stroke:#2696d1,stroke-width:2px,color:#fff,rx:3px,ry:3px;",
    "classDef terminator fill:#820808,stroke:#ff5555,stroke-width:2px,color:#fff,rx:10px,ry:10px;",
    "classDef switchNode fill:#9c5b0b,stroke:#e08c1d,stroke-width:2px,color:#fff,rx:5px,ry:5px;",
    "classDef catchNode fill:#946c00,stroke:#ffd700,stroke-width:2px,color:#fff,rx:5px,ry:5px;",
]

INCLUDE_CLASS_DEFS = [
    "classDef file fill:#2d2d2d,stroke:#569cd6,stroke-width:2px,color:#fff;",
    "classDef folder fill:#1e1e1e,stroke:#444,stroke-width:2px,color:#aaa,stroke-dasharray: 5 5;",
]

# Mermaid class used for each node category
CATEGORY_CLASSES = {category: category for category in node_categories}
CATEGORY_CLASSES.update({"switchHeader": "switchNode", "exceptionBlock": "catchNode"})

DIAMOND = ("{", "}")
BOX = ("[", "]")
ROUNDED = ("(", ")")
CIRCLE = ("((", "))")
ASYMMETRIC = (">", "]")

NODE_SHAPES = {
    StatementKind.IF: DIAMOND,
    StatementKind.ELSE: BOX,
    StatementKind.SWITCH: DIAMOND,
    StatementKind.CASE: BOX,
    StatementKind.LOOP: DIAMOND,
    StatementKind.DO: ROUNDED,
    StatementKind.TRY: ASYMMETRIC,
    StatementKind.CATCH: ASYMMETRIC,
    StatementKind.JUMP: CIRCLE,
    StatementKind.STATEMENT: BOX,
}

DEFAULT_FLOWCHART_PROPERTIES = {
    "direction": "TD",
    "click_bindings": False,
    "source_path": None,
}


def node_declaration(node):
    opening, closing = NODE_SHAPES.get(node.kind, BOX)
    css_class = CATEGORY_CLASSES.get(node.category, "default")
    return f'{node.id}{opening}"{sanitize_label(node.label)}"{closing}:::{css_class};'


def edge_declaration(edge):
    if edge.tag:
        return f"{edge.src} -- {sanitize_label(edge.tag)} --> {edge.dest};"
    if edge.style == "dashed":
        return f"{edge.src} -.-> {edge.dest};"
    return f"{edge.src} --> {edge.dest};"


def click_binding(node_id, payload):
    return f'click {node_id} call onNodeClick("{node_id}", "{payload}");'


def flowchart_to_mermaid(node_list, edge_list, properties=None):
    """
    Render flowchart node and edge records as Mermaid text.

    Nodes come out in creation order, then edges in creation order. With
    the click_bindings property set, each node also gets a click handler whose
    payload is "<source_path>:<line>" (or just the line without a path).
    """
    properties = {**DEFAULT_FLOWCHART_PROPERTIES, **(properties or {})}

    lines = [f"graph {properties['direction']};"]
    lines.extend(FLOWCHART_CLASS_DEFS)

    if node_list:
        lines.append(f"Start((START)) --> {node_list[0].id};")
    else:
        lines.append("Start((START));")

    lines.extend(node_declaration(node) for node in node_list)
    lines.extend(edge_declaration(edge) for edge in edge_list)

    if properties["click_bindings"]:
        source_path = properties["source_path"]
        for node in node_list:
            if source_path:
                payload = f"{PurePath(source_path).as_posix()}:{node.line}"
            else:
                payload = str(node.line)
            lines.append(click_binding(node.id, payload))

    return "\n".join(lines) + "\n"


def include_graph_to_mermaid(folder_groups, file_names, edges, click_paths, direction="LR"):
    """
    Render an include-dependency graph.

    folder_groups maps a folder (relative POSIX path, "Root" for the top) to
    the ids of the files drawn inside it. file_names maps ids to base names,
    click_paths maps ids to the absolute path sent back on click.
    """
    lines = [f"graph {direction};"]
    lines.extend(INCLUDE_CLASS_DEFS)

    group_counter = 0
    for folder_name, file_ids in folder_groups.items():
        if not file_ids:
            continue
        short_name = folder_name.split("/")[-1]
        lines.append(f'subgraph G{group_counter} ["📁 {sanitize_label(short_name)}"]')
        group_counter += 1
        lines.append("direction TB;")
        for file_id in file_ids:
            lines.append(f'{file_id}["{sanitize_label(file_names[file_id])}"]:::file;')
        lines.append("end")

    for src, dest in edges:
        lines.append(f"{src} --> {dest};")

    for file_id, path in click_paths.items():
        lines.append(click_binding(file_id, path))

    return "\n".join(lines) + "\n"
