# ppattach/ingestion/loader.py
import logging
import re
from typing import Dict, Iterator, Optional, TextIO

from conllu import parse_incr
from conllu.exceptions import ParseException
from conllu.models import TokenList

from ppattach.core.data_structures import Sentence, Token
from ppattach.exceptions import TreebankError
from ppattach.ingestion.validators import DataValidator

logger = logging.getLogger(__name__)

CONLLX_FIELDS = (
    "id", "form", "lemma", "cpostag", "postag", "feats", "head", "deprel", "phead", "pdeprel"
)

# ID through DEPREL must be present, the projective columns are optional
MIN_COLUMNS = 8

_FEATURE_SEPARATOR = re.compile(r"[|;]")
_KEY_VALUE_SEPARATOR = re.compile(r"[:=]")


def parse_features(value: str) -> Optional[Dict[str, Optional[str]]]:
    """
    'morph:nsf|tf:MF' -> {'morph': 'nsf', 'tf': 'MF'}.
    Both ':' and '=' separate keys from values; a bare key maps to None.
    """
    if value in ("", "_"):
        return None

    features = {}
    for part in _FEATURE_SEPARATOR.split(value):
        if not part:
            continue
        kv = _KEY_VALUE_SEPARATOR.split(part, maxsplit=1)
        features[kv[0]] = kv[1] if len(kv) == 2 else None
    return features


def _parse_id(line, i):
    if len(line) < MIN_COLUMNS:
        raise ParseException(f"Expected at least {MIN_COLUMNS} columns, got {len(line)}: {line!r}")
    try:
        return int(line[i])
    except ValueError:
        raise ParseException(f"Invalid token ID {line[i]!r}")


def _parse_head(line, i):
    if line[i] == "_":
        return None
    try:
        return int(line[i])
    except ValueError:
        raise ParseException(f"Invalid head {line[i]!r}")


FIELD_PARSERS = {
    "id": _parse_id,
    "feats": lambda line, i: parse_features(line[i]),
    "head": _parse_head,
    "phead": _parse_head,
}


def _nullable(value: Optional[str]) -> Optional[str]:
    if value is None or value == "_":
        return None
    return value


def to_sentence(token_list: TokenList, sentence_no: int) -> Sentence:
    result = DataValidator.validate_sentence(token_list)
    if not result.is_valid:
        raise TreebankError("; ".join(result.errors), sentence_no)

    tokens = []
    for t in token_list:
        tokens.append(Token(
            form=t['form'],
            lemma=_nullable(t.get('lemma')),
            # Fine-grained tag (STTS), the coarse one only if nothing else is there
            pos=_nullable(t.get('postag')) or _nullable(t.get('cpostag')),
            features=t.get('feats'),
            head=t.get('head'),
            head_rel=_nullable(t.get('deprel')),
            p_head=t.get('phead'),
            p_head_rel=_nullable(t.get('pdeprel')),
        ))

    return Sentence(tokens=tuple(tokens), sent_id=token_list.metadata.get('sent_id'))


def read_sentences(stream: TextIO) -> Iterator[Sentence]:
    """
    Lazily reads CoNLL-X sentences.
    The first malformed sentence raises TreebankError and ends the stream.
    """
    iterator = parse_incr(stream, fields=CONLLX_FIELDS, field_parsers=FIELD_PARSERS)
    sentence_no = 0

    while True:
        sentence_no += 1
        try:
            token_list = next(iterator)
        except StopIteration:
            logger.debug(f"Read {sentence_no - 1} sentences")
            return
        except ParseException as e:
            raise TreebankError(str(e), sentence_no) from e

        yield to_sentence(token_list, sentence_no)

