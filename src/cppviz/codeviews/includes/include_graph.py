import re
from pathlib import Path
from typing import NamedTuple

import networkx as nx
from loguru import logger

from ...utils import repo_scanner
from ...utils.mermaid import include_graph_to_mermaid

INCLUDE_PATTERN = re.compile(r'#include\s*["<]([^">]+)[">]')


class IncludeGraphResult(NamedTuple):
    mermaid: str
    adjacency: dict
    graph: nx.DiGraph


class IncludeGraph:
    """
    File-level dependency graph built from #include directives.

    Only files found under root_dir take part; includes of system or third
    party headers that are not in the tree are dropped. With allowed_folders
    the graph is restricted to those folders (and their subfolders) and every
    kept file is drawn, otherwise only files with at least one edge are.
    """

    def __init__(self, root_dir, allowed_folders=None, properties=None):
        self.root_dir = Path(root_dir)
        self.allowed_folders = list(allowed_folders or [])
        self.properties = properties or {}
        self.ignore_folders = self.properties.get("ignore_folders", repo_scanner.IGNORE_FOLDERS)
        self.direction = self.properties.get("direction", "LR")

        self.path_to_id = {}
        self.id_to_path = {}
        self.records = {
            "folders": {},
            "unresolved_includes": {},
        }

        self.graph = nx.DiGraph()
        self.collect_files()
        self.add_include_edges()
        self.result = IncludeGraphResult(self.to_mermaid(), self.adjacency(), self.graph)

    @property
    def is_filter_mode(self):
        return len(self.allowed_folders) > 0

    def collect_files(self):
        for path in repo_scanner.find_source_files(self.root_dir, self.ignore_folders):
            folder = repo_scanner.relative_folder(path, self.root_dir)
            if self.is_filter_mode and not repo_scanner.is_in_folders(folder, self.allowed_folders):
                continue
            file_id = f"F{len(self.path_to_id)}"
            self.path_to_id[path] = file_id
            self.id_to_path[file_id] = path
            self.records["folders"][file_id] = folder
            self.graph.add_node(file_id, label=path.name, path=path.as_posix(), folder=folder)
        logger.debug("Collected {} source files under {}", len(self.path_to_id), self.root_dir)

    def resolve_include(self, included_name):
        """First collected file whose path is included_name or ends with /included_name."""
        included_name = included_name.replace("\\", "/")
        for path, file_id in self.path_to_id.items():
            posix_path = path.as_posix()
            if posix_path == included_name or posix_path.endswith("/" + included_name):
                return file_id
        return None

    def add_include_edges(self):
        for path, source_id in self.path_to_id.items():
            try:
                content = path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.warning(f"Could not read {path}: {e}")
                continue

            for match in INCLUDE_PATTERN.finditer(content):
                included_name = match.group(1).strip()
                target_id = self.resolve_include(included_name)
                if target_id is None:
                    self.records["unresolved_includes"].setdefault(source_id, []).append(included_name)
                    continue
                if target_id != source_id:
                    self.graph.add_edge(source_id, target_id)

    def is_shown(self, file_id):
        return self.is_filter_mode or self.graph.degree(file_id) > 0

    def adjacency(self):
        """Undirected neighbours of every file, for highlighting both ends of an include."""
        undirected = self.graph.to_undirected(as_view=True)
        return {file_id: sorted(undirected.neighbors(file_id), key=_id_order) for file_id in self.graph.nodes}

    def to_mermaid(self):
        folder_groups = {}
        for file_id in self.id_to_path:
            if not self.is_shown(file_id):
                continue
            folder_groups.setdefault(self.records["folders"][file_id], []).append(file_id)

        edges = [(src, dest) for src, dest in self.graph.edges if self.is_shown(src) and self.is_shown(dest)]
        file_names = {file_id: path.name for file_id, path in self.id_to_path.items()}
        click_paths = {
            file_id: path.resolve().as_posix()
            for file_id, path in self.id_to_path.items()
            if self.is_shown(file_id)
        }
        return include_graph_to_mermaid(folder_groups, file_names, edges, click_paths, self.direction)


def _id_order(file_id):
    return int(file_id[1:])
