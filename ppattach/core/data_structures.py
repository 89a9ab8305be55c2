# ppattach/core/data_structures.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator


class Token(BaseModel):
    """
    One row of a CoNLL-X treebank.
    Absent columns ('_') are None; head 0 or None marks a root.
    """
    model_config = ConfigDict(frozen=True)

    form: str
    lemma: Optional[str] = None
    pos: Optional[str] = None
    features: Optional[Dict[str, Optional[str]]] = None
    head: Optional[int] = None  # 1-based, 0 = ROOT
    head_rel: Optional[str] = None

    # Projective variant of the attachment
    p_head: Optional[int] = None
    p_head_rel: Optional[str] = None

    @model_validator(mode='after')
    def check_heads(self):
        for name in ("head", "p_head"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"Negative {name} {value} for token '{self.form}'")
        return self

    def feature(self, name: str) -> Optional[str]:
        if not self.features:
            return None
        return self.features.get(name)

    def text(self, lemma: bool = False) -> Optional[str]:
        """Form or lemma, depending on what the output should show."""
        return self.lemma if lemma else self.form

    def attachment(self, projective: bool = False) -> Tuple[Optional[int], Optional[str]]:
        if projective:
            return self.p_head, self.p_head_rel
        return self.head, self.head_rel


@dataclass(frozen=True)
class Sentence:
    tokens: Tuple[Token, ...]
    sent_id: Optional[str] = None

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, idx: int) -> Token:
        return self.tokens[idx]

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)


@dataclass(frozen=True, eq=False)
class DependencyNode:
    token: Token
    offset: int  # 0-based position in the sentence


class EdgeKind(Enum):
    RELATION = "relation"
    PRECEDENCE = "precedence"


@dataclass(frozen=True)
class DependencyEdge:
    """Either a labeled head -> dependent relation or a word order link."""
    kind: EdgeKind
    label: Optional[str] = None

    @classmethod
    def relation(cls, label: Optional[str]) -> "DependencyEdge":
        return cls(EdgeKind.RELATION, label)

    @classmethod
    def precedence(cls) -> "DependencyEdge":
        return cls(EdgeKind.PRECEDENCE)

    @property
    def is_relation(self) -> bool:
        return self.kind is EdgeKind.RELATION

    @property
    def is_precedence(self) -> bool:
        return self.kind is EdgeKind.PRECEDENCE


@dataclass
class CompetingHead:
    node: DependencyNode
    is_gold_head: bool
    rank: Optional[int] = None


@dataclass
class AttachmentInstance:
    pp_node: DependencyNode
    complement_node: DependencyNode
    candidates: List[CompetingHead] = field(default_factory=list)

    @property
    def has_gold_head(self) -> bool:
        return any(c.is_gold_head for c in self.candidates)
