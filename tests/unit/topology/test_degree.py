"""Unit tests for degree calculation."""

from repo_topology.topology.degree import build_graph_nodes, calculate_degrees


class TestCalculateDegrees:
    def test_in_plus_out(self, make_graph):
        graph = make_graph(["a", "b", "c"], [("a", "b"), ("a", "c"), ("b", "c")])

        assert calculate_degrees(graph) == {"a": 2, "b": 2, "c": 2}

    def test_isolated_node_has_zero_degree(self, make_graph):
        graph = make_graph(["a", "b", "c"], [("a", "b")])

        assert calculate_degrees(graph)["c"] == 0

    def test_sum_is_twice_the_resolvable_edge_count(self, small_graph):
        degrees = calculate_degrees(small_graph)

        assert sum(degrees.values()) == 2 * len(small_graph.resolvable_edges())

    def test_orphan_edges_are_skipped(self, make_graph):
        graph = make_graph(["a", "b"], [("a", "b"), ("a", "ghost"), ("ghost", "b")])

        degrees = calculate_degrees(graph)

        assert degrees == {"a": 1, "b": 1}
        assert "ghost" not in degrees

    def test_duplicate_edges_count_each_time(self, make_graph):
        graph = make_graph(["a", "b"], [("a", "b"), ("a", "b")])

        assert calculate_degrees(graph) == {"a": 2, "b": 2}

    def test_self_loop_counts_twice(self, make_graph):
        graph = make_graph(["a"], [("a", "a")])

        assert calculate_degrees(graph) == {"a": 2}


class TestBuildGraphNodes:
    def test_group_is_parent_directory(self, small_graph):
        nodes = {n.id: n for n in build_graph_nodes(small_graph)}

        assert nodes["src/auth/login.ts"].group == "src/auth"
        assert nodes["README.md"].group == "(root)"

    def test_label_is_last_segment(self, small_graph):
        nodes = {n.id: n for n in build_graph_nodes(small_graph)}

        assert nodes["src/billing/invoice.ts"].label == "invoice.ts"

    def test_one_node_per_graph_node(self, small_graph):
        assert [n.id for n in build_graph_nodes(small_graph)] == small_graph.nodes
