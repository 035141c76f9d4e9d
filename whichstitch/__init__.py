"""
whichstitch — knitting pattern notation engine.

parse_pattern() turns loosely structured pattern text ("Rnd 3: *k2, p2tog*,
rep from * to * 5 times") into rows of addressable stitches with running
live stitch counts.
"""

from whichstitch.assembler.assembler import parse_pattern
from whichstitch.config import EngineConfig, load_config
from whichstitch.glossary.registry import default_glossary, load_glossary
from whichstitch.schemas.pattern import GlossaryEntry, ParseResult, PatternRow, StitchStep

__all__ = [
    "EngineConfig",
    "GlossaryEntry",
    "ParseResult",
    "PatternRow",
    "StitchStep",
    "default_glossary",
    "load_config",
    "load_glossary",
    "parse_pattern",
]
