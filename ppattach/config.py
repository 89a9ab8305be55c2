# ppattach/config.py
import logging
from pathlib import Path
from typing import FrozenSet, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from ppattach.exceptions import PPAttachError

logger = logging.getLogger(__name__)

# Topological field labels (TüBa-D/Z style)
FIELD_VF = "VF"  # Vorfeld
FIELD_MF = "MF"  # Mittelfeld
FIELD_NF = "NF"  # Nachfeld
FIELD_LK = "LK"  # linke Klammer
FIELD_VC = "VC"  # rechte Klammer / Verbalkomplex
FIELD_C = "C"    # C-Feld (Komplementierer)
FIELD_UK = "UK"  # unbekannt

EXTRACTABLE_FIELDS = (FIELD_VF, FIELD_MF, FIELD_NF)


class ExtractionConfig(BaseModel):
    """
    Labels and tag sets the extractors depend on.
    The defaults match the TüBa-D/Z dependency conversion.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    pp_relation: str = "PP"
    pn_relation: str = "PN"
    aux_relation: str = "AUX"
    field_feature: str = "tf"
    finite_verb_tags: FrozenSet[str] = frozenset({"VVFIN", "VAFIN", "VMFIN"})
    relevant_tag_prefixes: Tuple[str, ...] = ("N", "V")
    noun_tag_prefix: str = "N"
    verb_tag_prefix: str = "V"

    def relevant_tag(self, pos: str) -> bool:
        """Only noun-like and verb-like tokens can compete for a PP."""
        return pos.startswith(self.relevant_tag_prefixes)


DEFAULT_CONFIG = ExtractionConfig()


def load_config(path: Optional[Union[str, Path]] = None) -> ExtractionConfig:
    """
    Reads a YAML file and overlays its keys on the default configuration.
    Without a path the defaults are returned unchanged.
    """
    if path is None:
        return DEFAULT_CONFIG

    path = Path(path)
    logger.info(f"Loading extraction config from {path}")

    with open(path, 'r', encoding='utf-8') as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise PPAttachError(f"Config {path} must contain a mapping, got {type(raw).__name__}")

    try:
        return ExtractionConfig(**raw)
    except ValidationError as e:
        raise PPAttachError(f"Invalid config {path}: {e}") from e
