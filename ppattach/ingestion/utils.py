# ppattach/ingestion/utils.py
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union


@contextmanager
def open_input(path: Optional[Union[str, Path]] = None) -> Iterator[TextIO]:
    """The file at `path`, or stdin when no path is given."""
    if path is None:
        yield sys.stdin
        return
    with open(path, "r", encoding="utf-8") as f:
        yield f


@contextmanager
def open_output(path: Optional[Union[str, Path]] = None) -> Iterator[TextIO]:
    """The file at `path` (created or truncated), or stdout when no path is given."""
    if path is None:
        yield sys.stdout
        sys.stdout.flush()
        return
    with open(path, "w", encoding="utf-8") as f:
        yield f
