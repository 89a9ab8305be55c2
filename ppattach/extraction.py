# ppattach/extraction.py
import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from ppattach.competition import CompetitionFinder
from ppattach.config import DEFAULT_CONFIG, ExtractionConfig, FIELD_MF
from ppattach.core.data_structures import AttachmentInstance, DependencyNode
from ppattach.core.interfaces import BaseExtractor
from ppattach.exceptions import RankingError
from ppattach.graph import DependencyGraph
from ppattach.ranking import assign_ranks
from ppattach.traversal import Direction, EdgeDirection, adjacent_tokens, first_matching_edge

logger = logging.getLogger(__name__)


def _has_text(node: DependencyNode, lemma: bool) -> bool:
    return node.token.text(lemma) is not None and node.token.pos is not None


def _complement(graph: DependencyGraph, pp: int, pn_relation: str) -> Optional[int]:
    return first_matching_edge(
        graph, pp, EdgeDirection.OUTGOING,
        lambda e: e.is_relation and e.label == pn_relation
    )


class AmbiguousPPExtractor(BaseExtractor):
    """
    PPs in one topological field together with the heads competing for them.

    Only PPs whose gold head is among the candidates are reported, and unless
    `include_all` is set only those with more than one candidate.
    """

    def __init__(
            self,
            field: str = FIELD_MF,
            lemma: bool = False,
            include_all: bool = False,
            config: ExtractionConfig = DEFAULT_CONFIG
    ):
        self.field = field
        self.lemma = lemma
        self.include_all = include_all
        self.config = config
        self.finder = CompetitionFinder(config)

    def extract(self, graph: DependencyGraph) -> Iterator[AttachmentInstance]:
        for head, pp, edge in graph.relation_edges():
            if edge.label != self.config.pp_relation:
                continue

            instance = self._instance(graph, head, pp)
            if instance is not None:
                yield instance

    def _instance(self, graph: DependencyGraph, head: int, pp: int) -> Optional[AttachmentInstance]:
        # 1. Head and field filters
        head_pos = graph[head].token.pos
        if head_pos is None or not self.config.relevant_tag(head_pos):
            return None

        pp_node = graph[pp]
        if pp_node.token.feature(self.config.field_feature) != self.field:
            return None

        # 2. Nominal complement of the preposition
        complement = _complement(graph, pp, self.config.pn_relation)
        if complement is None:
            logger.debug(f"PP at token {pp} has no {self.config.pn_relation} dependent")
            return None

        complement_node = graph[complement]
        if not (_has_text(pp_node, self.lemma) and _has_text(complement_node, self.lemma)):
            return None

        # 3. Competition
        candidates = self.finder.find(graph, pp, head, self.field)
        if candidates is None:
            logger.debug(f"Competition for PP at token {pp} abandoned")
            return None

        instance = AttachmentInstance(pp_node=pp_node, complement_node=complement_node, candidates=candidates)
        if not instance.has_gold_head:
            return None
        if not self.include_all and len(candidates) <= 1:
            return None
        if not all(_has_text(c.node, self.lemma) for c in candidates):
            return None

        try:
            assign_ranks(pp_node.offset, candidates)
        except RankingError as e:
            logger.error(f"Inconsistent candidates for PP at token {pp}: {e}")
            return None

        return instance

    def format(self, instance: AttachmentInstance) -> str:
        pp = instance.pp_node
        compl = instance.complement_node
        parts = [
            pp.token.text(self.lemma), pp.token.pos,
            compl.token.text(self.lemma), compl.token.pos,
        ]

        for candidate in instance.candidates:
            token = candidate.node.token
            parts.extend([
                token.text(self.lemma),
                token.pos,
                str(candidate.node.offset - pp.offset),
                str(candidate.rank),
                "1" if candidate.is_gold_head else "0",
            ])

        return " ".join(parts)


@dataclass
class PPRecord:
    head_node: DependencyNode
    head_field: str
    pp_node: DependencyNode
    pp_field: str
    complement_node: DependencyNode
    preceding_tag: str


class PPExtractor(BaseExtractor):
    """Every PP attachment with the fields of head and PP."""

    NO_TAG = "NONE"

    def __init__(self, lemma: bool = False, config: ExtractionConfig = DEFAULT_CONFIG):
        self.lemma = lemma
        self.config = config

    def extract(self, graph: DependencyGraph) -> Iterator[PPRecord]:
        feature = self.config.field_feature

        for head, pp, edge in graph.relation_edges():
            if edge.label != self.config.pp_relation:
                continue

            complement = _complement(graph, pp, self.config.pn_relation)
            if complement is None:
                continue

            head_node, pp_node, complement_node = graph[head], graph[pp], graph[complement]
            if not (_has_text(head_node, self.lemma) and _has_text(pp_node, self.lemma)):
                continue
            if complement_node.token.text(self.lemma) is None:
                continue

            head_field = head_node.token.feature(feature)
            pp_field = pp_node.token.feature(feature)
            if head_field is None or pp_field is None:
                continue

            preceding = next(adjacent_tokens(graph, pp, Direction.PRECEDING), None)
            preceding_tag = self.NO_TAG
            if preceding is not None and graph[preceding].token.pos is not None:
                preceding_tag = graph[preceding].token.pos

            yield PPRecord(
                head_node=head_node,
                head_field=head_field,
                pp_node=pp_node,
                pp_field=pp_field,
                complement_node=complement_node,
                preceding_tag=preceding_tag,
            )

    def format(self, record: PPRecord) -> str:
        return " ".join([
            record.head_node.token.text(self.lemma), record.head_node.token.pos, record.head_field,
            record.pp_node.token.text(self.lemma), record.pp_node.token.pos, record.pp_field,
            record.complement_node.token.text(self.lemma), record.preceding_tag,
        ])


@dataclass
class RelationPair:
    head_node: DependencyNode
    dependent_node: DependencyNode


class BilexicalExtractor(BaseExtractor):
    """Head/dependent pairs of one dependency relation."""

    def __init__(self, relation: str, lemma: bool = False):
        self.relation = relation
        self.lemma = lemma

    def extract(self, graph: DependencyGraph) -> Iterator[RelationPair]:
        for head, dep, edge in graph.relation_edges():
            if edge.label != self.relation:
                continue
            if _has_text(graph[head], self.lemma) and _has_text(graph[dep], self.lemma):
                yield RelationPair(head_node=graph[head], dependent_node=graph[dep])

    def format(self, record: RelationPair) -> str:
        head = record.head_node.token
        dep = record.dependent_node.token
        return " ".join([head.text(self.lemma), head.pos, dep.text(self.lemma), dep.pos])


def count_relevant_tokens(graph: DependencyGraph, config: ExtractionConfig = DEFAULT_CONFIG) -> int:
    """Tokens of the sentence that could head a PP at all."""
    return sum(
        1 for node in graph.nodes
        if node.token.pos is not None and config.relevant_tag(node.token.pos)
    )
