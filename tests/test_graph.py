from collections import Counter

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from adjgraph.graph import Graph
from adjgraph.indices import Direction, EdgeIndex, IndexType, edge_index, node_index


@st.composite
def graphs(draw, directed=None, weights=st.integers(-50, 50)):
    if directed is None:
        directed = draw(st.booleans())
    n = draw(st.integers(0, 8))
    g = Graph(directed=directed)
    for _ in range(n):
        g.add_node(draw(weights))
    if n:
        items = draw(
            st.lists(
                st.tuples(st.integers(0, n - 1), st.integers(0, n - 1), weights),
                max_size=20,
            )
        )
        for a, b, w in items:
            g.add_edge(node_index(a), node_index(b), w)
    return g


def assert_graph_consistent(g):
    assert g.node_count() == len(list(g.node_indices()))
    assert g.edge_count() == len(list(g.edge_indices()))
    for edge in g.raw_edges():
        assert g.find_edge(edge.source(), edge.target()) is not None


def triples(g):
    return Counter((g[r.source()], g[r.target()], r.weight) for r in g.edge_references())


def make_graph():
    g = Graph()
    a, b, c, d, e, f = (g.add_node(x) for x in "ABCDEF")
    g.extend_with_edges([
        (a, b, 7), (c, a, 9), (a, d, 14), (b, c, 10), (d, c, 2),
        (d, e, 9), (b, f, 15), (c, f, 11), (e, f, 6),
    ])
    g.remove_node(d)
    return g


def test_remove_node_reindexes_like_source():
    g = make_graph()
    assert [w for _, w in g.node_references()] == ["A", "B", "C", "F", "E"]
    ends = [(r.source().index, r.target().index) for r in g.edge_references()]
    assert ends == [(0, 1), (2, 0), (1, 3), (1, 2), (2, 3), (4, 3)]
    assert [r.weight for r in g.edge_references()] == [7, 9, 15, 10, 11, 6]
    assert_graph_consistent(g)


def test_walker_sums_incoming_weights():
    gr = Graph()
    a, b, c = gr.add_node(0.0), gr.add_node(0.0), gr.add_node(0.0)
    gr.add_edge(a, b, 3.0)
    gr.add_edge(b, c, 2.0)
    gr.add_edge(c, b, 1.0)
    for node in [a, b, c]:
        walker = gr.neighbors_directed(node, Direction.INCOMING).detach()
        while (edge := walker.next_edge(gr)) is not None:
            gr[node] += gr[edge]
    assert (gr[a], gr[b], gr[c]) == (0.0, 4.0, 2.0)


def test_from_edges_adds_nodes():
    g = Graph.from_edges([(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)], node_default=int)
    assert g.node_count() == 4
    assert g.edge_count() == 6
    assert [w for _, w in g.node_references()] == [0, 0, 0, 0]
    assert g.edge_weight(0) is None


def test_from_edges_rejects_bad_item():
    with pytest.raises(ValueError):
        Graph.from_edges([(0,)])


def test_neighbors_most_recent_first():
    g = Graph()
    a, b, c = g.add_node("a"), g.add_node("b"), g.add_node("c")
    g.add_edge(a, b, 1)
    g.add_edge(a, c, 2)
    assert list(g.neighbors(a)) == [c, b]
    assert list(g.neighbors_directed(b, Direction.INCOMING)) == [a]
    assert list(g.neighbors(b)) == []
    assert sorted(g.neighbors_undirected(b)) == [a]


def test_undirected_self_loop_counted_once():
    g = Graph.new_undirected()
    a, b = g.add_node(None), g.add_node(None)
    g.add_edge(a, a, 0)
    g.add_edge(a, b, 1)
    assert list(g.neighbors(a)) == [b, a]
    assert list(g.neighbors(b)) == [a]


def test_edges_directed_incoming_and_undirected_swap():
    g = Graph()
    a, b, c = g.add_node(0), g.add_node(0), g.add_node(0)
    g.add_edge(a, b, 1)
    g.add_edge(c, b, 2)
    incoming = list(g.edges_directed(b, Direction.INCOMING))
    assert [(r.source(), r.target(), r.weight) for r in incoming] == [(c, b, 2), (a, b, 1)]
    assert list(g.edges(b)) == []

    u = g.into_edge_type(False)
    refs = list(u.edges(b))
    assert [(r.source(), r.target()) for r in refs] == [(b, c), (b, a)]
    assert g.is_directed() and not u.is_directed()


def test_find_edge_directions():
    g = Graph()
    a, b = g.add_node(0), g.add_node(0)
    e = g.add_edge(a, b, 5)
    assert g.find_edge(a, b) == e
    assert g.find_edge(b, a) is None
    assert g.find_edge_undirected(b, a) == (e, Direction.INCOMING)
    assert g.find_edge_undirected(a, b) == (e, Direction.OUTGOING)
    assert g.into_edge_type(False).find_edge(b, a) == e
    assert g.contains_edge(a, b) and not g.contains_edge(b, a)
    assert g.find_edge(node_index(9), a) is None


def test_externals():
    g = Graph()
    a, b, c = g.add_node(0), g.add_node(0), g.add_node(0)
    g.add_edge(a, b, None)
    assert list(g.externals(Direction.INCOMING)) == [a, c]
    assert list(g.externals(Direction.OUTGOING)) == [b, c]
    u = g.into_edge_type(False)
    assert list(u.externals(Direction.OUTGOING)) == [c]


def test_update_edge():
    g = Graph()
    a, b = g.add_node(0), g.add_node(0)
    e = g.add_edge(a, b, 1)
    assert g.update_edge(a, b, 9) == e
    assert g[e] == 9
    e2 = g.update_edge(b, a, 3)
    assert e2 == edge_index(1)
    assert g.edge_count() == 2


def test_add_edge_out_of_bounds():
    g = Graph()
    g.add_node(0)
    with pytest.raises(IndexError):
        g.add_edge(0, 1, None)


def test_u8_node_capacity():
    g = Graph(index_type=IndexType.U8)
    for _ in range(255):
        g.add_node(None)
    with pytest.raises(OverflowError):
        g.add_node(None)
    assert g.node_count() == 255


def test_indexing_and_missing_lookups():
    g = Graph()
    a = g.add_node("x")
    g[a] = "y"
    assert g[a] == "y"
    assert g.node_weight(5) is None
    assert g.edge_weight(0) is None
    assert g.edge_endpoints(0) is None
    assert g.remove_edge(3) is None
    assert g.remove_node(7) is None
    with pytest.raises(IndexError):
        g[node_index(3)]
    with pytest.raises(TypeError):
        g[0]


def test_first_and_next_edge():
    g = Graph()
    a, b = g.add_node(0), g.add_node(0)
    e0 = g.add_edge(a, b, 0)
    e1 = g.add_edge(a, b, 1)
    assert g.first_edge(a, Direction.OUTGOING) == e1
    assert g.next_edge(e1, Direction.OUTGOING) == e0
    assert g.next_edge(e0, Direction.OUTGOING) is None
    assert g.first_edge(a, Direction.INCOMING) is None
    assert g.first_edge(node_index(4), Direction.OUTGOING) is None


def test_clear_edges_and_clear():
    g = make_graph()
    g.clear_edges()
    assert g.edge_count() == 0
    assert g.node_count() == 5
    assert all(list(g.neighbors_undirected(n)) == [] for n in g.node_indices())
    g.clear()
    assert g.node_count() == 0


def test_map_keeps_indices():
    g = make_graph()
    h = g.map(lambda i, w: w.lower(), lambda e, w: w * 2)
    assert [w for _, w in h.node_references()] == ["a", "b", "c", "f", "e"]
    assert [r.weight for r in h.edge_references()] == [14, 18, 30, 20, 22, 12]
    assert [h.edge_endpoints(e) for e in h.edge_indices()] == [
        g.edge_endpoints(e) for e in g.edge_indices()
    ]
    assert list(h.neighbors(1)) == list(g.neighbors(1))


def test_filter_map_drops_node_and_its_edges():
    g = make_graph()
    h = g.filter_map(lambda i, w: None if w == "C" else w, lambda e, w: w)
    assert [w for _, w in h.node_references()] == ["A", "B", "F", "E"]
    assert sorted(r.weight for r in h.edge_references()) == [6, 7, 15]


def test_copy_is_independent():
    g = make_graph()
    h = g.copy()
    h.remove_node(0)
    h[node_index(0)] = "Z"
    assert g.node_count() == 5
    assert g[node_index(0)] == "A"
    assert_graph_consistent(g)


def test_repr():
    g = Graph()
    a, b = g.add_node("a"), g.add_node("b")
    g.add_edge(a, b, 5)
    assert repr(g) == (
        "Graph(Ty='Directed', node_count=2, edge_count=1, edges=[(0, 1)], "
        "node_weights={0: 'a', 1: 'b'}, edge_weights={0: 5})"
    )


def test_retain_nodes_example():
    g = make_graph()
    g.retain_nodes(lambda gr, i: gr[i] != "B")
    assert sorted(w for _, w in g.node_references()) == ["A", "C", "E", "F"]
    assert sorted(r.weight for r in g.edge_references()) == [6, 9, 11]
    assert_graph_consistent(g)


@settings(max_examples=60)
@given(graphs(directed=True))
def test_reverse_directed(g):
    count = g.node_count()
    outs = [len(list(g.neighbors_directed(node_index(i), Direction.OUTGOING))) for i in range(count)]
    ins = [len(list(g.neighbors_directed(node_index(i), Direction.INCOMING))) for i in range(count)]
    g.reverse()
    new_ins = [len(list(g.neighbors_directed(node_index(i), Direction.INCOMING))) for i in range(count)]
    new_outs = [len(list(g.neighbors_directed(node_index(i), Direction.OUTGOING))) for i in range(count)]
    assert new_ins == outs
    assert new_outs == ins
    assert_graph_consistent(g)


@settings(max_examples=60)
@given(graphs())
def test_graph_retain_nodes(g):
    og = g.copy()
    nodes = g.node_count()
    num_negs = sum(1 for n in g.raw_nodes() if n.weight < 0)
    removed = []

    def keep(gr, i):
        ok = gr[i] >= 0
        if not ok:
            removed.append(i)
        return ok

    g.retain_nodes(keep)
    assert all(g[node_index(i)] >= 0 for i in range(g.node_count()))
    assert sum(1 for n in g.raw_nodes() if n.weight < 0) == 0
    assert len(removed) == num_negs
    assert num_negs + g.node_count() == nodes
    filtered = og.filter_map(lambda _, w: w if w >= 0 else None, lambda _, w: w)
    assert g.node_count() == filtered.node_count()
    assert g.edge_count() == filtered.edge_count()
    assert triples(g) == triples(filtered)
    assert_graph_consistent(g)


@settings(max_examples=60)
@given(graphs())
def test_graph_retain_edges(g):
    og = g.copy()
    edges = g.edge_count()
    num_negs = sum(1 for e in g.raw_edges() if e.weight < 0)
    g.retain_edges(lambda gr, i: gr[i] >= 0)
    assert all(g[edge_index(i)] >= 0 for i in range(g.edge_count()))
    assert sum(1 for e in g.raw_edges() if e.weight < 0) == 0
    assert num_negs + g.edge_count() == edges
    filtered = og.filter_map(lambda _, w: w, lambda _, w: w if w >= 0 else None)
    assert g.node_count() == filtered.node_count()
    assert triples(g) == triples(filtered)
    assert_graph_consistent(g)


@settings(max_examples=80)
@given(graphs(), st.integers(0, 10), st.integers(0, 10))
def test_graph_remove_edge(g, a, b):
    a, b = node_index(a), node_index(b)
    edge = g.find_edge(a, b)
    if not g.is_directed():
        assert (edge is not None) == (g.find_edge(b, a) is not None)
    if edge is not None:
        assert isinstance(edge, EdgeIndex)
        before = g.edge_count()
        g.remove_edge(edge)
        assert g.edge_count() == before - 1
    assert_graph_consistent(g)
    if g.find_edge(a, b) is None:
        assert b not in list(g.neighbors(a)) or g.find_edge(a, b) is not None
    else:
        assert b in list(g.neighbors(a))


@settings(max_examples=60)
@given(graphs())
def test_remove_node_keeps_consistency(g):
    if g.node_count():
        target = node_index(0)
        before = g.node_count()
        g.remove_node(target)
        assert g.node_count() == before - 1
    assert_graph_consistent(g)
    for ref in g.edge_references():
        assert ref.source().index < g.node_count()
        assert ref.target().index < g.node_count()