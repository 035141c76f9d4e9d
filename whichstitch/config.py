"""
Engine configuration.

EngineConfig carries the caller-configured defaults for a parse. It can be
built directly or loaded from a YAML document:

    starting_stitches: 96
    max_repeat: 500
    max_stitches: 2000
    glossary:
      - code: m1l
        title: Make one left
        detail: Left-leaning lifted increase.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from whichstitch.glossary.registry import glossary_from_data, read_yaml
from whichstitch.parser.classifier import DEFAULT_MAX_STITCHES
from whichstitch.parser.expander import DEFAULT_MAX_REPEAT
from whichstitch.schemas.pattern import GlossaryEntry

logger = logging.getLogger(__name__)

DEFAULT_STARTING_STITCHES = 90


@dataclass(frozen=True)
class EngineConfig:
    """
    Defaults for parse_pattern().

    Attributes:
        starting_stitches: Live stitches entering the first round.
        max_repeat: Upper bound on ``rep from * N times`` counts.
        max_stitches: Upper bound on the stitches one instruction or one row
            may cover.
        glossary: Glossary used when the caller passes none.
    """

    starting_stitches: int = DEFAULT_STARTING_STITCHES
    max_repeat: int = DEFAULT_MAX_REPEAT
    max_stitches: int = DEFAULT_MAX_STITCHES
    glossary: tuple[GlossaryEntry, ...] = ()

    def __post_init__(self) -> None:
        if self.starting_stitches < 1:
            raise ValueError(f"starting_stitches must be >= 1, got {self.starting_stitches}")
        if self.max_repeat < 1:
            raise ValueError(f"max_repeat must be >= 1, got {self.max_repeat}")
        if self.max_stitches < 1:
            raise ValueError(f"max_stitches must be >= 1, got {self.max_stitches}")


def load_config(path: Path) -> EngineConfig:
    """
    Load an EngineConfig from YAML; missing keys keep their defaults.

    Raises ValueError for invalid YAML, a non-mapping document, or values
    EngineConfig rejects.
    """
    data = read_yaml(path) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: config must be a mapping")

    config = EngineConfig(
        starting_stitches=int(data.get("starting_stitches", DEFAULT_STARTING_STITCHES)),
        max_repeat=int(data.get("max_repeat", DEFAULT_MAX_REPEAT)),
        max_stitches=int(data.get("max_stitches", DEFAULT_MAX_STITCHES)),
        glossary=glossary_from_data(data.get("glossary"), source=str(path)),
    )
    logger.info("Loaded engine config from %s", path)
    return config
