# tests/unit/analysis/test_graph_analysis.py
import pytest
import networkx as nx
import pandas as pd

from linkdist.analysis.graph_analysis import (
    GraphAnalyzer,
    degree_distribution,
    distance2_distribution,
    second_hop_neighbors,
)


def _assert_histogram_shape(histogram, num_nodes):
    values = [value for value, _ in histogram]
    assert values == sorted(set(values))
    assert all(count > 0 for _, count in histogram)
    assert sum(count for _, count in histogram) == num_nodes


class TestDegreeDistribution:
    """Test the out-degree histogram"""

    def test_chain(self, chain_graph):
        assert degree_distribution(chain_graph) == [(0, 2), (1, 2)]

    def test_hub_graph(self, hub_graph):
        assert degree_distribution(hub_graph) == [(0, 2), (1, 3), (2, 1), (4, 1)]
        _assert_histogram_shape(degree_distribution(hub_graph), hub_graph.number_of_nodes())

    def test_empty_graph(self):
        assert degree_distribution(nx.DiGraph()) == []

    def test_self_loop_counts_once(self):
        G = nx.DiGraph([(0, 0), (0, 1)])
        assert degree_distribution(G) == [(0, 1), (2, 1)]


class TestDistance2Distribution:
    """Test the distance-2 reach-count histogram"""

    def test_chain(self, chain_graph):
        assert distance2_distribution(chain_graph) == [(0, 3), (1, 1)]

    def test_hub_graph(self, hub_graph):
        assert distance2_distribution(hub_graph) == [(0, 5), (1, 1), (3, 1)]
        _assert_histogram_shape(distance2_distribution(hub_graph), hub_graph.number_of_nodes())

    def test_empty_graph(self):
        assert distance2_distribution(nx.DiGraph()) == []

    def test_direct_successor_takes_precedence(self, hub_graph):
        # 4 is reachable through 1 and 2 but is also linked directly from 0
        assert second_hop_neighbors(hub_graph, 0) == {5}

    def test_origin_is_never_counted(self, hub_graph):
        # 3 -> 0 -> 3 returns to the origin
        assert second_hop_neighbors(hub_graph, 3) == {1, 2, 4}

    def test_two_cycle(self):
        G = nx.DiGraph([(0, 1), (1, 0)])
        assert distance2_distribution(G) == [(0, 2)]

    def test_paths_are_deduplicated(self):
        # Four two-hop paths from 0 all end at 9
        G = nx.DiGraph([(0, m) for m in range(1, 5)] + [(m, 9) for m in range(1, 5)])
        assert second_hop_neighbors(G, 0) == {9}

    def test_never_counts_self_or_direct_successors(self, hub_graph):
        for node in hub_graph:
            reached = second_hop_neighbors(hub_graph, node)
            assert node not in reached
            assert reached.isdisjoint(hub_graph.successors(node))

    def test_recomputing_is_identical(self, hub_graph):
        assert distance2_distribution(hub_graph) == distance2_distribution(hub_graph)
        assert degree_distribution(hub_graph) == degree_distribution(hub_graph)


class TestGraphAnalyzer:
    """Test the GraphAnalyzer class"""

    @pytest.fixture
    def labelled_graph(self, hub_graph):
        nx.set_node_attributes(hub_graph, {n: f"r/{n}" for n in hub_graph}, "label")
        return hub_graph

    def test_init(self, hub_graph):
        analyzer = GraphAnalyzer(hub_graph)

        assert analyzer.graph is hub_graph
        assert analyzer._cache == {}

    def test_get_basic_statistics(self, hub_graph):
        stats = GraphAnalyzer(hub_graph).get_basic_statistics()

        assert stats["num_nodes"] == 7
        assert stats["num_edges"] == 9
        assert stats["self_loops"] == 1
        assert stats["out_degree_stats"]["min"] == 0
        assert stats["out_degree_stats"]["max"] == 4
        assert stats["out_degree_stats"]["mean"] == pytest.approx(9 / 7)
        assert stats["out_degree_stats"]["median"] == 1.0

    def test_basic_statistics_empty_graph(self):
        stats = GraphAnalyzer(nx.DiGraph()).get_basic_statistics()

        assert stats["num_nodes"] == 0
        assert stats["out_degree_stats"]["max"] == 0

    def test_distributions_are_cached(self, hub_graph):
        analyzer = GraphAnalyzer(hub_graph)

        first = analyzer.get_distance2_distribution()
        assert analyzer.get_distance2_distribution() is first
        assert analyzer.get_degree_distribution() == degree_distribution(hub_graph)
        assert set(analyzer._cache) == {"distance2_dist", "degree_dist"}

    def test_get_top_nodes_out_degree(self, labelled_graph):
        top = GraphAnalyzer(labelled_graph).get_top_nodes("out_degree", top_n=3)

        assert isinstance(top, pd.DataFrame)
        assert list(top.columns) == ["node_id", "label", "score"]
        assert top["node_id"].tolist() == [0, 2, 1]
        assert top["label"].tolist() == ["r/0", "r/2", "r/1"]
        assert top["score"].tolist() == [4, 2, 1]

    def test_get_top_nodes_distance2(self, labelled_graph):
        top = GraphAnalyzer(labelled_graph).get_top_nodes("distance2", top_n=2)

        assert top["node_id"].tolist() == [3, 0]
        assert top["score"].tolist() == [3, 1]

    def test_get_top_nodes_all(self, labelled_graph):
        assert len(GraphAnalyzer(labelled_graph).get_top_nodes(top_n=0)) == 7

    def test_get_top_nodes_unknown_metric(self, hub_graph):
        with pytest.raises(ValueError, match="Unsupported metric"):
            GraphAnalyzer(hub_graph).get_top_nodes("pagerank")
