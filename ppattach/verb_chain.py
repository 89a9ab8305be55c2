# ppattach/verb_chain.py
import logging

from ppattach.config import DEFAULT_CONFIG
from ppattach.graph import DependencyGraph
from ppattach.traversal import EdgeDirection, first_matching_edge

logger = logging.getLogger(__name__)


def resolve_verb(graph: DependencyGraph, verb: int, aux_relation: str = DEFAULT_CONFIG.aux_relation) -> int:
    """
    Follows auxiliary relations down the verb cluster, e.g. from a finite
    'hat' to the participle 'gegeben' it governs, and returns the main verb.
    A verb without an auxiliary dependent is returned as is.
    """
    def is_aux(edge):
        return edge.is_relation and edge.label == aux_relation

    seen = {verb}
    current = verb
    while True:
        nxt = first_matching_edge(graph, current, EdgeDirection.OUTGOING, is_aux)
        if nxt is None:
            return current
        if nxt in seen:
            logger.warning(f"Cycle in auxiliary chain at token {nxt}, stopping at token {current}")
            return current
        seen.add(nxt)
        current = nxt
