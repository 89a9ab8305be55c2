# ppattach/statistics.py
from dataclasses import dataclass
from typing import TextIO

from rich.console import Console
from rich.table import Table

from ppattach.core.data_structures import AttachmentInstance


@dataclass
class CompetitionStats:
    """Running totals for the --stats mode of extract-ambiguous-pps."""
    sentences: int = 0
    instances: int = 0
    candidates: int = 0
    relevant_tokens: int = 0

    def add_sentence(self, relevant_tokens: int):
        self.sentences += 1
        self.relevant_tokens += relevant_tokens

    def add_instance(self, instance: AttachmentInstance):
        self.instances += 1
        self.candidates += len(instance.candidates)

    @property
    def avg_candidates(self) -> float:
        return self.candidates / self.instances if self.instances > 0 else 0.0

    @property
    def avg_relevant_tokens(self) -> float:
        return self.relevant_tokens / self.sentences if self.sentences > 0 else 0.0

    def report(self, out: TextIO, title: str = "PP attachment competition"):
        table = Table(title=title)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Sentences", str(self.sentences))
        table.add_row("PP instances", str(self.instances))
        table.add_row("Avg. candidates per PP", f"{self.avg_candidates:.2f}")
        table.add_row("Avg. N/V tokens per sentence", f"{self.avg_relevant_tokens:.2f}")

        Console(file=out).print(table)
