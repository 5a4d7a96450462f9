"""Disjoint-set forest and graph segmentation over weighted edges."""

from __future__ import annotations

from dataclasses import dataclass, field
from operator import attrgetter
from typing import Iterable


@dataclass(frozen=True)
class Edge:
    """An undirected edge between vertices ``a`` and ``b``, ordered by weight."""

    a: int
    b: int
    weight: float = field(compare=False)

    def __lt__(self, other: "Edge") -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.weight < other.weight


@dataclass
class _SetNode:
    parent: int
    rank: int = 0
    size: int = 1


class DisjointSetForest:
    """Union-find over the integers ``0 .. count - 1`` with union by rank."""

    def __init__(self, count: int) -> None:
        if count < 0:
            raise ValueError(f"element count must not be negative, got {count}")
        self._nodes = [_SetNode(parent=i) for i in range(count)]
        self._sets = count

    def __len__(self) -> int:
        return len(self._nodes)

    def find(self, x: int) -> int:
        """Return the root of the set holding ``x``."""
        nodes = self._nodes
        root = x
        while root != nodes[root].parent:
            root = nodes[root].parent
        nodes[x].parent = root
        return root

    def join(self, x: int, y: int) -> None:
        """Merge the sets whose roots are ``x`` and ``y``."""
        nx, ny = self._nodes[x], self._nodes[y]
        if nx.rank > ny.rank:
            ny.parent = x
            nx.size += ny.size
        else:
            nx.parent = y
            ny.size += nx.size
            if nx.rank == ny.rank:
                ny.rank += 1
        self._sets -= 1

    def size(self, x: int) -> int:
        """Return the size recorded at root ``x``."""
        return self._nodes[x].size

    def set_count(self) -> int:
        """Return the number of distinct sets in the forest."""
        return self._sets


def segment_graph(vertex_count: int, edges: Iterable[Edge], c: float) -> DisjointSetForest:
    """Segment a graph by merging components across edges in weight order.

    Two components merge when the edge between them weighs no more than the
    internal threshold of either; a component's threshold is the weight of the
    edge that last grew it plus ``c`` divided by its size.
    """
    forest = DisjointSetForest(vertex_count)
    thresholds = [float(c)] * vertex_count

    for edge in sorted(edges, key=attrgetter("weight")):
        a = forest.find(edge.a)
        b = forest.find(edge.b)
        if a == b:
            continue
        if edge.weight <= thresholds[a] and edge.weight <= thresholds[b]:
            forest.join(a, b)
            root = forest.find(a)
            thresholds[root] = edge.weight + c / forest.size(root)

    return forest