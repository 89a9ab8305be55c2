"""ppattach: PP attachment competition extracted from German CoNLL-X treebanks."""

__version__ = "0.1.0"

from .competition import CompetitionFinder
from .config import DEFAULT_CONFIG, ExtractionConfig, load_config
from .core.data_structures import (
    AttachmentInstance, CompetingHead, DependencyEdge, DependencyNode, Sentence, Token,
)
from .extraction import AmbiguousPPExtractor, BilexicalExtractor, PPExtractor
from .graph import DependencyGraph, sentence_to_graph
from .ingestion.loader import read_sentences
from .ranking import compute_ranks
from .traversal import Direction, EdgeDirection, adjacent_tokens, ancestor_tokens, first_matching_edge
from .verb_chain import resolve_verb

__all__ = [
    "AmbiguousPPExtractor",
    "AttachmentInstance",
    "BilexicalExtractor",
    "CompetingHead",
    "CompetitionFinder",
    "DEFAULT_CONFIG",
    "DependencyEdge",
    "DependencyGraph",
    "DependencyNode",
    "Direction",
    "EdgeDirection",
    "ExtractionConfig",
    "PPExtractor",
    "Sentence",
    "Token",
    "adjacent_tokens",
    "ancestor_tokens",
    "compute_ranks",
    "first_matching_edge",
    "load_config",
    "read_sentences",
    "resolve_verb",
    "sentence_to_graph",
]
