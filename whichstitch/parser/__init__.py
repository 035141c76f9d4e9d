"""parser — text → round drafts → classified operations."""

from whichstitch.parser.classifier import RULES, StitchRule, classify_token, clean_token
from whichstitch.parser.expander import StitchLimitExceeded, expand_body
from whichstitch.parser.extractor import extract_round_drafts

__all__ = [
    "RULES",
    "StitchLimitExceeded",
    "StitchRule",
    "classify_token",
    "clean_token",
    "expand_body",
    "extract_round_drafts",
]
