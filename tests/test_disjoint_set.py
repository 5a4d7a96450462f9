import pytest

from visionkit.disjoint_set import DisjointSetForest, Edge, segment_graph


def test_new_forest_has_singletons():
    forest = DisjointSetForest(5)
    assert forest.set_count() == 5
    assert [forest.find(i) for i in range(5)] == list(range(5))
    assert all(forest.size(i) == 1 for i in range(5))


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        DisjointSetForest(-1)


def test_join_equal_rank_makes_second_root():
    forest = DisjointSetForest(2)
    forest.join(0, 1)
    assert forest.find(0) == 1
    assert forest.size(1) == 2
    assert forest.set_count() == 1


def test_join_higher_rank_stays_root():
    forest = DisjointSetForest(3)
    forest.join(0, 1)  # root 1 has rank 1
    forest.join(1, 2)  # rank 1 > rank 0, so 1 stays root
    assert forest.find(2) == 1
    assert forest.size(1) == 3


def test_joins_merge_everything():
    forest = DisjointSetForest(6)
    for i in range(5):
        forest.join(forest.find(i), forest.find(i + 1))
    roots = {forest.find(i) for i in range(6)}
    assert len(roots) == 1
    root = roots.pop()
    assert forest.size(root) == 6
    assert forest.set_count() == 1


def test_find_out_of_range():
    forest = DisjointSetForest(2)
    with pytest.raises(IndexError):
        forest.find(5)


def test_edges_order_by_weight():
    edges = [Edge(0, 1, 3.0), Edge(1, 2, 1.0), Edge(2, 3, 2.0)]
    assert [e.weight for e in sorted(edges)] == [1.0, 2.0, 3.0]


def _two_clusters():
    return [Edge(1, 2, 100.0), Edge(0, 1, 0.0), Edge(2, 3, 0.0)]


def test_segment_graph_small_constant_keeps_clusters_apart():
    forest = segment_graph(4, _two_clusters(), 1.0)
    assert forest.set_count() == 2
    assert forest.find(0) == forest.find(1)
    assert forest.find(2) == forest.find(3)
    assert forest.find(1) != forest.find(2)


def test_segment_graph_large_constant_merges_all():
    forest = segment_graph(4, _two_clusters(), 1000.0)
    assert forest.set_count() == 1
    assert forest.size(forest.find(0)) == 4


def test_segment_graph_leaves_input_order():
    edges = _two_clusters()
    before = list(edges)
    segment_graph(4, edges, 1.0)
    assert edges == before


def test_segment_graph_without_edges():
    forest = segment_graph(3, [], 10.0)
    assert forest.set_count() == 3