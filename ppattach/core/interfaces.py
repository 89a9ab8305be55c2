# ppattach/core/interfaces.py
from abc import ABC, abstractmethod
from typing import Any, Iterator

from ppattach.graph import DependencyGraph


class BaseExtractor(ABC):
    @abstractmethod
    def extract(self, graph: DependencyGraph) -> Iterator[Any]:
        """
        Takes the graph of one sentence.
        Yields one record per matching edge, in sentence order.
        """
        pass

    @abstractmethod
    def format(self, record: Any) -> str:
        """Renders a record as one whitespace-separated output line (without newline)."""
        pass
