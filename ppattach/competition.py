# ppattach/competition.py
"""
Finds the tokens that compete with the gold head for a PP attachment.

All three fields share one scan engine. A scan walks a lazy sequence of
tokens and looks up an action for every token in a rule table:

    EMIT         keep the token as a candidate if its tag is relevant, go on
    ACCEPT_VERB  resolve the verb chain of the token, add it, finish
    CLAUSE_HEAD  climb from a C-field token to the clause's VC verb, add it, finish
    STOP         end this scan, keep what was found
    ABANDON      give up on the PP

MF is a single scan to the left. VF and NF first locate the verbal bracket,
then collect middle field material next to the bracket and material from the
PP's own field.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterator, List, Optional, Tuple

from ppattach.config import (
    DEFAULT_CONFIG, ExtractionConfig,
    FIELD_C, FIELD_LK, FIELD_MF, FIELD_NF, FIELD_UK, FIELD_VC, FIELD_VF,
)
from ppattach.core.data_structures import CompetingHead
from ppattach.graph import DependencyGraph
from ppattach.traversal import Direction, adjacent_tokens, ancestor_tokens
from ppattach.verb_chain import resolve_verb

logger = logging.getLogger(__name__)


class Action(Enum):
    EMIT = "emit"
    ACCEPT_VERB = "accept_verb"
    CLAUSE_HEAD = "clause_head"
    STOP = "stop"
    ABANDON = "abandon"


@dataclass(frozen=True)
class ScanRule:
    action: Action
    fields: Optional[FrozenSet[str]] = None  # None matches any field
    tags: Optional[FrozenSet[str]] = None    # None matches any tag

    def matches(self, pos: str, field: str) -> bool:
        if self.tags is not None and pos not in self.tags:
            return False
        if self.fields is not None and field not in self.fields:
            return False
        return True


@dataclass(frozen=True)
class ScanTable:
    rules: Tuple[ScanRule, ...]
    default: Action        # no rule matched
    on_missing: Action     # token without tag or field
    on_exhausted: Action   # ran into the sentence boundary

    def action(self, pos: Optional[str], field: Optional[str]) -> Action:
        if pos is None or field is None:
            return self.on_missing
        for rule in self.rules:
            if rule.matches(pos, field):
                return rule.action
        return self.default


def field_run(*fields: str) -> ScanTable:
    """Collect candidates while the tokens stay within `fields`."""
    return ScanTable(
        rules=(ScanRule(Action.EMIT, fields=frozenset(fields)),),
        default=Action.STOP,
        on_missing=Action.STOP,
        on_exhausted=Action.STOP,
    )


@dataclass(frozen=True)
class BracketProcedure:
    """Rule table for a PP outside the middle field (VF or NF)."""
    bracket_direction: Direction
    bracket_fields: FrozenSet[str]
    bracket_needs_verb: bool
    # Where the middle field scan starts: None means at the bracket itself,
    # otherwise at the nearest preceding token in one of these fields.
    midfield_anchor_fields: Optional[FrozenSet[str]]
    own_field_run: ScanTable


MIDFIELD_RUN = field_run(FIELD_MF, FIELD_UK)

BRACKET_PROCEDURES = {
    FIELD_VF: BracketProcedure(
        bracket_direction=Direction.SUCCEEDING,
        bracket_fields=frozenset({FIELD_LK}),
        bracket_needs_verb=False,
        midfield_anchor_fields=None,
        own_field_run=field_run(FIELD_VF, FIELD_UK),
    ),
    FIELD_NF: BracketProcedure(
        bracket_direction=Direction.PRECEDING,
        bracket_fields=frozenset({FIELD_VC, FIELD_LK}),
        bracket_needs_verb=True,
        midfield_anchor_fields=frozenset({FIELD_C, FIELD_LK}),
        own_field_run=field_run(FIELD_NF, FIELD_UK),
    ),
}


def _add_candidate(candidates: List[CompetingHead], graph: DependencyGraph, idx: int, is_gold_head: bool):
    # A resolved bracket verb can be reached again by a later run
    if any(c.node.offset == idx for c in candidates):
        return
    candidates.append(CompetingHead(node=graph[idx], is_gold_head=is_gold_head))


class CompetitionFinder:
    def __init__(self, config: ExtractionConfig = DEFAULT_CONFIG):
        self.config = config
        self.mf_scan = ScanTable(
            rules=(
                ScanRule(Action.ACCEPT_VERB, tags=frozenset(config.finite_verb_tags)),
                ScanRule(Action.CLAUSE_HEAD, fields=frozenset({FIELD_C})),
                ScanRule(Action.EMIT, fields=frozenset({FIELD_MF, FIELD_UK})),
            ),
            default=Action.ABANDON,
            on_missing=Action.ABANDON,
            on_exhausted=Action.ABANDON,
        )

    def field(self, graph: DependencyGraph, idx: int) -> Optional[str]:
        return graph[idx].token.feature(self.config.field_feature)

    def find(
            self,
            graph: DependencyGraph,
            pp: int,
            gold_head: int,
            field: str
    ) -> Optional[List[CompetingHead]]:
        """
        Candidates for the attachment of the PP at `pp`, or None when the
        configuration around the PP is not supported and the PP must be skipped.
        """
        if field == FIELD_MF:
            candidates: List[CompetingHead] = []
            if not self._scan(graph, adjacent_tokens(graph, pp, Direction.PRECEDING),
                              self.mf_scan, gold_head, candidates):
                return None
            return candidates

        procedure = BRACKET_PROCEDURES.get(field)
        if procedure is None:
            raise ValueError(f"No competition rules for field {field!r}")

        return self._find_bracketed(graph, pp, gold_head, procedure)

    def _find_bracketed(
            self,
            graph: DependencyGraph,
            pp: int,
            gold_head: int,
            procedure: BracketProcedure
    ) -> Optional[List[CompetingHead]]:
        # 1. Verbal bracket
        bracket = self._find_bracket(graph, pp, procedure)
        if bracket is None:
            logger.debug(f"No bracket for PP at token {pp}")
            return None

        # 2. The verb the bracket stands for
        verb = resolve_verb(graph, bracket, self.config.aux_relation)
        candidates = [CompetingHead(
            node=graph[verb],
            is_gold_head=verb == gold_head or gold_head in ancestor_tokens(graph, verb),
        )]

        # 3. A noun right before the PP is the closest attachment site;
        # middle field material is then out of reach.
        preceding = next(adjacent_tokens(graph, pp, Direction.PRECEDING), None)
        preceding_is_noun = False
        if preceding is not None:
            preceding_pos = graph[preceding].token.pos
            if preceding_pos is None:
                return None
            preceding_is_noun = preceding_pos.startswith(self.config.noun_tag_prefix)

        # 4. Middle field next to the bracket
        if not preceding_is_noun:
            anchor = self._midfield_anchor(graph, pp, bracket, procedure)
            if anchor is not None:
                self._scan(graph, adjacent_tokens(graph, anchor, Direction.SUCCEEDING),
                           MIDFIELD_RUN, gold_head, candidates)

        # 5. The PP's own field
        self._scan(graph, adjacent_tokens(graph, pp, Direction.PRECEDING),
                   procedure.own_field_run, gold_head, candidates)

        return candidates

    def _find_bracket(self, graph: DependencyGraph, pp: int, procedure: BracketProcedure) -> Optional[int]:
        for idx in adjacent_tokens(graph, pp, procedure.bracket_direction):
            if self.field(graph, idx) not in procedure.bracket_fields:
                continue
            if procedure.bracket_needs_verb:
                pos = graph[idx].token.pos
                if pos is None or not pos.startswith(self.config.verb_tag_prefix):
                    continue
            return idx
        return None

    def _midfield_anchor(self, graph: DependencyGraph, pp: int, bracket: int,
                         procedure: BracketProcedure) -> Optional[int]:
        if procedure.midfield_anchor_fields is None:
            return bracket
        for idx in adjacent_tokens(graph, pp, Direction.PRECEDING):
            if self.field(graph, idx) in procedure.midfield_anchor_fields:
                return idx
        return None

    def _scan(
            self,
            graph: DependencyGraph,
            tokens: Iterator[int],
            table: ScanTable,
            gold_head: int,
            candidates: List[CompetingHead]
    ) -> bool:
        """Runs one scan, appending to `candidates`. False means abandon."""
        for idx in tokens:
            pos = graph[idx].token.pos
            action = table.action(pos, self.field(graph, idx))

            if action is Action.EMIT:
                if self.config.relevant_tag(pos):
                    _add_candidate(candidates, graph, idx, idx == gold_head)
            elif action is Action.ACCEPT_VERB:
                self._add_verb(graph, idx, gold_head, candidates)
                return True
            elif action is Action.CLAUSE_HEAD:
                finite = self._clause_verb(graph, idx)
                if finite is None:
                    logger.debug(f"C-field token {idx} has no VC head")
                    return False
                self._add_verb(graph, finite, gold_head, candidates)
                return True
            elif action is Action.STOP:
                return True
            else:
                return False

        return table.on_exhausted is not Action.ABANDON

    def _add_verb(self, graph: DependencyGraph, idx: int, gold_head: int, candidates: List[CompetingHead]):
        verb = resolve_verb(graph, idx, self.config.aux_relation)
        _add_candidate(candidates, graph, verb, verb == gold_head)

    def _clause_verb(self, graph: DependencyGraph, idx: int) -> Optional[int]:
        """The right bracket verb governing a C-field token, if any."""
        for ancestor in ancestor_tokens(graph, idx):
            field = self.field(graph, ancestor)
            if field == FIELD_VC:
                return ancestor
            if field != FIELD_C:
                return None
        return None
