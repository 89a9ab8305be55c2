# ppattach/exceptions.py
from typing import Optional


class PPAttachError(Exception):
    """Base class for all errors raised by ppattach."""


class TreebankError(PPAttachError):
    """
    The treebank could not be read into sentences.
    Always fatal: the run is aborted instead of skipping the sentence.
    """

    def __init__(self, message: str, sentence_no: Optional[int] = None):
        self.sentence_no = sentence_no
        if sentence_no is not None:
            message = f"sentence {sentence_no}: {message}"
        super().__init__(message)


class RankingError(PPAttachError):
    """A candidate shares its offset with the PP it competes for."""
