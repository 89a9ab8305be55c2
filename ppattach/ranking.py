# ppattach/ranking.py
from typing import List, Sequence

from ppattach.core.data_structures import CompetingHead
from ppattach.exceptions import RankingError


def compute_ranks(pp_offset: int, candidate_offsets: Sequence[int]) -> List[int]:
    """
    Signed distance ranks of the candidates relative to the PP.

    Candidates left of the PP get -1, -2, ... counting outwards from the PP,
    candidates right of it +1, +2, ... The result follows the input order.
    """
    before = sorted(
        (i for i, offset in enumerate(candidate_offsets) if offset < pp_offset),
        key=lambda i: candidate_offsets[i],
        reverse=True
    )
    after = sorted(
        (i for i, offset in enumerate(candidate_offsets) if offset > pp_offset),
        key=lambda i: candidate_offsets[i]
    )

    if len(before) + len(after) != len(candidate_offsets):
        raise RankingError(f"Candidate at the PP's own offset {pp_offset}: {list(candidate_offsets)}")

    ranks = [0] * len(candidate_offsets)
    for rank, i in enumerate(before, 1):
        ranks[i] = -rank
    for rank, i in enumerate(after, 1):
        ranks[i] = rank

    return ranks


def assign_ranks(pp_offset: int, candidates: List[CompetingHead]) -> List[CompetingHead]:
    ranks = compute_ranks(pp_offset, [c.node.offset for c in candidates])
    for candidate, rank in zip(candidates, ranks):
        candidate.rank = rank
    return candidates
