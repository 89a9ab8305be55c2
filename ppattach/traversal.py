# ppattach/traversal.py
import logging
from enum import Enum
from typing import Callable, Iterator, Optional

from ppattach.core.data_structures import DependencyEdge
from ppattach.graph import DependencyGraph

logger = logging.getLogger(__name__)


class EdgeDirection(Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"


class Direction(Enum):
    PRECEDING = "preceding"
    SUCCEEDING = "succeeding"


def first_matching_edge(
        graph: DependencyGraph,
        idx: int,
        direction: EdgeDirection,
        predicate: Callable[[DependencyEdge], bool]
) -> Optional[int]:
    """
    Returns the other endpoint of the first edge of `idx` in `direction`
    whose weight satisfies `predicate`, or None.
    """
    edges = graph.out_edges(idx) if direction is EdgeDirection.OUTGOING else graph.in_edges(idx)
    for other, edge in edges:
        if predicate(edge):
            return other
    return None


def _is_precedence(edge: DependencyEdge) -> bool:
    return edge.is_precedence


def _is_relation(edge: DependencyEdge) -> bool:
    return edge.is_relation


def adjacent_tokens(graph: DependencyGraph, idx: int, direction: Direction) -> Iterator[int]:
    """
    Neighbours of `idx` in word order, nearest first, up to the sentence boundary.
    `idx` itself is not included.
    """
    edge_direction = EdgeDirection.INCOMING if direction is Direction.PRECEDING else EdgeDirection.OUTGOING
    current = idx
    while True:
        current = first_matching_edge(graph, current, edge_direction, _is_precedence)
        if current is None:
            return
        yield current


def ancestor_tokens(graph: DependencyGraph, idx: int) -> Iterator[int]:
    """
    Heads of `idx`, its head's head and so on until a root is reached.
    Stops after len(graph) steps so that cyclic annotations cannot hang the walk.
    """
    current = idx
    for _ in range(len(graph)):
        current = first_matching_edge(graph, current, EdgeDirection.INCOMING, _is_relation)
        if current is None:
            return
        yield current

    logger.warning(f"Ancestor walk from token {idx} exceeded {len(graph)} steps, relation cycle?")
