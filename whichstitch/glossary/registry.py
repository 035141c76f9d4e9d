"""
Label registry: loads the heuristic label tables from YAML at startup and
resolves display labels for stitch codes.

The registry is a module-level singleton; call get_registry() to obtain it.
Tables are loaded and validated once at import time and never written to
afterwards.

Label resolution order for a code:
  1. The caller's glossary (GlossaryLookup), keyed by normalized code.
  2. Exact heuristic codes (label_heuristics.yaml ``exact``).
  3. Heuristic prefixes in listed order (label_heuristics.yaml ``prefixes``).
  4. The code itself, verbatim.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable

import yaml

from whichstitch.schemas.pattern import GlossaryEntry

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent / "data"

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def normalize_code(code: str) -> str:
    """Strip non-alphanumerics and uppercase: ``"k2tog tbl"`` → ``"K2TOGTBL"``."""
    return _NON_ALNUM.sub("", code).upper()


@dataclass(frozen=True)
class GlossaryLookup:
    """Read-only mapping of normalized code → display title."""

    titles: MappingProxyType[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_entries(cls, entries: Iterable[GlossaryEntry]) -> GlossaryLookup:
        """Build a lookup; later entries override earlier ones with the same code."""
        titles: dict[str, str] = {}
        for entry in entries:
            key = normalize_code(entry.code)
            title = entry.title.strip()
            if key and title:
                titles[key] = title
        return cls(titles=MappingProxyType(titles))

    def get(self, code: str) -> str | None:
        return self.titles.get(normalize_code(code))


def read_yaml(path: Path) -> Any:
    """
    Parse a YAML file.

    Raises FileNotFoundError naming the path when it is missing, and
    ValueError when the document is not valid YAML.
    """
    try:
        with open(path) as f:
            return yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"YAML file not found: {path}") from None
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse YAML file {path}: {exc}") from exc


class LabelRegistry:
    """
    Immutable registry of heuristic label tables.

    ``exact`` is a MappingProxyType and ``prefixes`` a tuple once loading
    finishes. Instantiate directly to use a custom data directory (e.g. in
    tests); otherwise use get_registry() for the module singleton.
    """

    def __init__(self, data_dir: Path = _DATA_DIR) -> None:
        self._data_dir = data_dir
        self._problems: list[str] = []
        self.exact: MappingProxyType[str, str] = MappingProxyType({})
        self.prefixes: tuple[tuple[str, str], ...] = ()

        self._load_heuristics()
        self._validate()
        logger.info(
            "Loaded %d exact and %d prefix label heuristics from %s",
            len(self.exact),
            len(self.prefixes),
            data_dir,
        )

    # ── Loading ────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> Any:
        return read_yaml(self._data_dir / filename)

    def _entries(self, data: dict[str, Any], table: str) -> list[Any]:
        entries = data.get(table) or []
        if not isinstance(entries, list):
            self._problems.append(f"{table} must be a list")
            return []
        return entries

    def _load_heuristics(self) -> None:
        data = self._load_yaml("label_heuristics.yaml") or {}
        if not isinstance(data, dict):
            self._problems.append("label_heuristics.yaml must be a mapping")
            return

        exact: dict[str, str] = {}
        for i, entry in enumerate(self._entries(data, "exact")):
            if not isinstance(entry, dict) or "code" not in entry or "label" not in entry:
                self._problems.append(f"exact entry {i} is missing 'code' or 'label'")
                continue
            exact[str(entry["code"])] = str(entry["label"])

        prefixes: list[tuple[str, str]] = []
        for i, entry in enumerate(self._entries(data, "prefixes")):
            if not isinstance(entry, dict) or "prefix" not in entry or "label" not in entry:
                self._problems.append(f"prefix entry {i} is missing 'prefix' or 'label'")
                continue
            prefixes.append((str(entry["prefix"]), str(entry["label"])))

        self.exact = MappingProxyType(exact)
        self.prefixes = tuple(prefixes)

    def _validate(self) -> None:
        """
        Raises ValueError listing every problem found: malformed entries,
        codes or prefixes that are not in normalized form, and prefixes
        shadowed by an earlier one.
        """
        errors: list[str] = list(self._problems)

        for code in self.exact:
            if not code or code != normalize_code(code):
                errors.append(f"exact code is not normalized: {code!r}")

        for i, (prefix, _) in enumerate(self.prefixes):
            if not prefix or prefix != normalize_code(prefix):
                errors.append(f"prefix is not normalized: {prefix!r}")
                continue
            for earlier, _ in self.prefixes[:i]:
                if prefix.startswith(earlier):
                    errors.append(
                        f"prefix {prefix!r} is shadowed by earlier prefix {earlier!r}"
                    )

        if errors:
            raise ValueError(
                "Label registry validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )

    # ── Queries ────────────────────────────────────────────────────────────────

    def heuristic_label(self, code: str) -> str | None:
        """Return the heuristic label for a code, or None if nothing matches."""
        key = normalize_code(code)
        if key in self.exact:
            return self.exact[key]
        for prefix, label in self.prefixes:
            if key.startswith(prefix):
                return label
        return None

    def resolve_label(self, code: str, glossary: GlossaryLookup) -> str:
        """Glossary title, else heuristic label, else the code verbatim."""
        return glossary.get(code) or self.heuristic_label(code) or code


# ── Glossary files ─────────────────────────────────────────────────────────────


def load_glossary(path: Path) -> tuple[GlossaryEntry, ...]:
    """
    Load glossary entries from a YAML file.

    The document is either a list of ``{code, title, detail}`` mappings or a
    mapping with such a list under ``entries``. Raises ValueError on entries
    missing ``code`` or ``title`` and on documents that are not valid YAML.
    """
    return glossary_from_data(read_yaml(path), source=str(path))


def default_glossary() -> tuple[GlossaryEntry, ...]:
    """Return the bundled starter glossary."""
    return load_glossary(_DATA_DIR / "default_glossary.yaml")


def glossary_from_data(data: object, source: str) -> tuple[GlossaryEntry, ...]:
    """Convert an already-parsed YAML document into glossary entries."""
    if data is None:
        return ()
    if isinstance(data, dict):
        data = data.get("entries") or []
    if not isinstance(data, list):
        raise ValueError(f"{source}: glossary must be a list of entries")

    entries: list[GlossaryEntry] = []
    for i, raw in enumerate(data):
        if not isinstance(raw, dict) or "code" not in raw or "title" not in raw:
            raise ValueError(f"{source}: entry {i} needs 'code' and 'title'")
        entries.append(
            GlossaryEntry(
                code=str(raw["code"]),
                title=str(raw["title"]),
                detail=str(raw.get("detail") or "").strip(),
            )
        )
    return tuple(entries)


# ── Module singleton ───────────────────────────────────────────────────────────

_registry = LabelRegistry()


def get_registry() -> LabelRegistry:
    """Return the module-level registry singleton."""
    return _registry
