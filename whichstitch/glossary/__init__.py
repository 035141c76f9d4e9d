from .registry import (
    GlossaryLookup,
    LabelRegistry,
    default_glossary,
    get_registry,
    glossary_from_data,
    load_glossary,
    normalize_code,
    read_yaml,
)

__all__ = [
    "GlossaryLookup",
    "LabelRegistry",
    "default_glossary",
    "get_registry",
    "glossary_from_data",
    "load_glossary",
    "normalize_code",
    "read_yaml",
]
