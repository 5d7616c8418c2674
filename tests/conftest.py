# tests/conftest.py
import sys
import pytest
import networkx as nx
from pathlib import Path

# Add the src directory to the path so we can import from it
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def make_edge_list(tmp_path):
    """Factory writing rows of fields to a tab-separated file under tmp_path"""
    def _make(rows, name="edges.tsv"):
        path = tmp_path / name
        path.write_text("".join("\t".join(row) + "\n" for row in rows), encoding="utf-8")
        return path
    return _make


@pytest.fixture
def chain_graph():
    """Nodes 0..3 with edges 0->1 and 1->2; node 3 is isolated"""
    G = nx.DiGraph()
    G.add_nodes_from(range(4))
    G.add_edge(0, 1)
    G.add_edge(1, 2)
    return G


@pytest.fixture
def hub_graph():
    """A small link graph with a hub, a shortcut, a cycle and a self-loop"""
    G = nx.DiGraph()
    G.add_edges_from([
        (0, 1), (0, 2), (0, 3),   # hub
        (1, 4), (2, 4), (2, 5),   # 4 is reached twice from 0
        (0, 4),                   # shortcut: 4 is also a direct successor of 0
        (3, 0),                   # cycle back to the hub
        (5, 5),                   # self-loop
    ])
    G.add_node(6)
    return G


@pytest.fixture
def subreddit_tsv(make_edge_list):
    """Edge list in the shape of the Reddit hyperlink dataset (extra columns, repeats)"""
    rows = [
        ["askreddit", "funny", "1a2b", "2017-01-01 00:00:00", "1"],
        ["funny", "pics", "1a2c", "2017-01-01 00:01:00", "1"],
        ["askreddit", "funny", "1a2d", "2017-01-01 00:02:00", "-1"],
        ["pics", "askreddit", "1a2e", "2017-01-01 00:03:00", "1"],
        ["news", "pics", "1a2f", "2017-01-01 00:04:00", "1"],
    ]
    return make_edge_list(rows, name="links.tsv")
