# src/linkdist/graph/builder.py

import logging
import networkx as nx
from pathlib import Path
from typing import Dict, Iterable, Tuple, Union
from tqdm import tqdm

from linkdist.parser.edge_list import EdgeListReader


class LinkGraphBuilder:
    """Builds a directed link graph from label pairs, interning labels to dense integer ids."""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.graph = nx.DiGraph()
        self.id_map: Dict[str, int] = {}
        self.records_read = 0
        self.duplicate_links = 0

    def node_id(self, label: str) -> int:
        """Return the id for ``label``, assigning the next free id on first sight."""
        node = self.id_map.get(label)
        if node is None:
            node = len(self.id_map)
            self.id_map[label] = node
            self.graph.add_node(node, label=label)
        return node

    def add_link(self, source: str, target: str) -> Tuple[int, int]:
        # Source is interned before target so first-seen order follows the file
        source_id = self.node_id(source)
        target_id = self.node_id(target)
        if self.graph.has_edge(source_id, target_id):
            self.duplicate_links += 1
        else:
            self.graph.add_edge(source_id, target_id)
        self.records_read += 1
        return source_id, target_id

    def build_from_records(self, records: Iterable[Tuple[str, str]],
                           show_progress: bool = False) -> nx.DiGraph:
        """Add one edge per (source, target) record and return the graph.

        Errors raised while iterating ``records`` propagate unchanged.
        """
        for source, target in tqdm(records, desc="Reading links", unit=" rows", disable=not show_progress):
            self.add_link(source, target)

        self.logger.info(
            f"Built graph with {self.graph.number_of_nodes()} nodes and "
            f"{self.graph.number_of_edges()} edges from {self.records_read} records"
        )
        if self.duplicate_links > 0:
            self.logger.debug(f"Collapsed {self.duplicate_links} duplicate links")
        return self.graph

    def get_statistics(self):
        return {
            "records_read": self.records_read,
            "num_nodes": self.graph.number_of_nodes(),
            "num_edges": self.graph.number_of_edges(),
            "duplicate_links": self.duplicate_links,
            "self_loops": nx.number_of_selfloops(self.graph),
        }


def load_graph(path: Union[str, Path], delimiter: str = "\t", has_header: bool = False,
               encoding: str = "utf-8", show_progress: bool = False) -> nx.DiGraph:
    """Load a directed graph from an edge list file.

    Each node carries a ``label`` attribute with its original label. The load
    is all-or-nothing: a missing file or malformed row raises and no graph is
    returned.
    """
    logger = logging.getLogger(__name__)
    logger.debug(f"Loading graph from {path}")
    reader = EdgeListReader(path, delimiter=delimiter, has_header=has_header, encoding=encoding)
    builder = LinkGraphBuilder()
    return builder.build_from_records(reader, show_progress=show_progress)
