# ppattach/graph.py
from typing import Iterator, List, Tuple

import networkx as nx

from ppattach.core.data_structures import DependencyEdge, DependencyNode, Sentence


class DependencyGraph:
    """
    Tokens of one sentence connected by word order and dependency edges.

    Nodes are addressed by their 0-based offset. Relation edges point from the
    head to the dependent, precedence edges from token i to token i + 1.
    A MultiDiGraph is needed because a head can also be the preceding token.
    """

    def __init__(self):
        self.g = nx.MultiDiGraph()
        self.nodes: List[DependencyNode] = []

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, idx: int) -> DependencyNode:
        return self.nodes[idx]

    def add_node(self, node: DependencyNode) -> int:
        idx = len(self.nodes)
        self.nodes.append(node)
        self.g.add_node(idx, node=node)
        return idx

    def add_edge(self, source: int, target: int, edge: DependencyEdge):
        self.g.add_edge(source, target, weight=edge)

    def out_edges(self, idx: int) -> Iterator[Tuple[int, DependencyEdge]]:
        """(target, edge) pairs in insertion order."""
        for _, target, edge in self.g.out_edges(idx, data="weight"):
            yield target, edge

    def in_edges(self, idx: int) -> Iterator[Tuple[int, DependencyEdge]]:
        """(source, edge) pairs in insertion order."""
        for source, _, edge in self.g.in_edges(idx, data="weight"):
            yield source, edge

    def relation_edges(self) -> Iterator[Tuple[int, int, DependencyEdge]]:
        """
        All (head, dependent, edge) triples, ordered by the dependent's position,
        which is the order in which the builder adds them.
        """
        for dep in range(len(self.nodes)):
            for head, edge in self.in_edges(dep):
                if edge.is_relation:
                    yield head, dep, edge

    def edge_counts(self) -> Tuple[int, int]:
        """(precedence, relation) edge counts."""
        precedence = relation = 0
        for _, _, edge in self.g.edges(data="weight"):
            if edge.is_precedence:
                precedence += 1
            else:
                relation += 1
        return precedence, relation


def sentence_to_graph(sentence: Sentence, projective: bool = False) -> DependencyGraph:
    """
    Builds the dependency graph of a sentence.
    Head indices are trusted: the reader validates them before a Sentence exists.
    """
    graph = DependencyGraph()

    nodes = [
        graph.add_node(DependencyNode(token=token, offset=offset))
        for offset, token in enumerate(sentence)
    ]

    for idx, token in enumerate(sentence):
        if idx > 0:
            graph.add_edge(nodes[idx - 1], nodes[idx], DependencyEdge.precedence())

        head, rel = token.attachment(projective)
        if head:
            graph.add_edge(nodes[head - 1], nodes[idx], DependencyEdge.relation(rel))

    return graph
