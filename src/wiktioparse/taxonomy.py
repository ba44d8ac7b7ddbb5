"""
Section taxonomy loading.

The taxonomy decides how the classifier reshapes a header tree and which
sections each extraction pass reads. It lives in schema/taxonomy.yaml
next to this module and is loaded into an immutable Taxonomy value, so a
custom edition can swap the file without touching code.

YAML files support anchors (&name) and aliases (*name). When an alias is
used inside a list it produces a nested list, which is flattened on load.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from wiktioparse.errors import SchemaError


DEFAULT_TAXONOMY_PATH = Path(__file__).parent / "schema" / "taxonomy.yaml"

TEMPLATE_ROLES = ("ipa", "accent", "sense", "link", "trans_top", "translation", "subpage")

PASS_NAMES = ("translations", "onyms", "terms", "pronunciation")


def flatten_list(items: list[Any]) -> list[str]:
    """
    Flatten a list that may contain nested lists from YAML alias references.

        common: &common [a, b]
        all: [*common, c]

    gives all == [['a', 'b'], 'c'], flattened here to ['a', 'b', 'c'].
    """
    result: list[str] = []
    for item in items:
        if isinstance(item, list):
            result.extend(flatten_list(item))
        else:
            result.append(str(item))
    return result


@dataclass(frozen=True)
class PassConfig:
    """One extraction pass: extractor name and the section labels it reads."""

    name: str
    labels: frozenset[str]


@dataclass(frozen=True)
class Taxonomy:
    """Named sets of section titles and template names."""

    parts_of_speech: frozenset[str]
    collapsible: frozenset[str]
    semi_collapsible: frozenset[str]
    ignored: frozenset[str]
    etymology_pattern: re.Pattern
    templates: dict[str, frozenset[str]]
    passes: tuple[PassConfig, ...]

    def is_numbered_etymology(self, title: str) -> bool:
        return self.etymology_pattern.match(title) is not None

    def template_names(self, role: str) -> frozenset[str]:
        return self.templates[role]

    def summary(self) -> str:
        return (
            f"{len(self.parts_of_speech)} parts of speech, "
            f"{len(self.collapsible)} collapsible, "
            f"{len(self.semi_collapsible)} semi-collapsible, "
            f"{len(self.ignored)} ignored sections, "
            f"passes: {', '.join(p.name for p in self.passes)}"
        )


def _load_yaml(path: Path) -> dict:
    """Load a YAML mapping with a clear error message if it is missing."""
    if not path.exists():
        raise SchemaError(
            f"Taxonomy file not found: {path}\n"
            f"This file defines the section taxonomy and template names."
        )
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaError(f"Invalid YAML in {path}: {e}")
    if not isinstance(data, dict):
        raise SchemaError(f"Taxonomy file {path} must contain a mapping")
    return data


def _title_set(data: dict, key: str, path: Path) -> frozenset[str]:
    if key not in data:
        raise SchemaError(f"Missing required key {key!r} in {path}")
    return frozenset(flatten_list(data[key] or []))


def taxonomy_from_dict(data: dict, source: Path = DEFAULT_TAXONOMY_PATH) -> Taxonomy:
    """Build and validate a Taxonomy from parsed YAML."""
    collapsible = _title_set(data, "collapsible", source)

    templates_data = data.get("templates") or {}
    templates = {}
    for role in TEMPLATE_ROLES:
        if role not in templates_data:
            raise SchemaError(f"Missing template names for {role!r} in {source}")
        templates[role] = frozenset(flatten_list(templates_data[role]))

    passes = []
    for entry in data.get("passes") or []:
        name = entry.get("name")
        if name not in PASS_NAMES:
            raise SchemaError(
                f"Unknown extraction pass {name!r} in {source}; "
                f"expected one of {', '.join(PASS_NAMES)}"
            )
        labels = frozenset(flatten_list(entry.get("labels") or []))
        # Extractors read line lists, which only collapsible sections yield
        stray = labels - collapsible
        if stray:
            raise SchemaError(
                f"Pass {name!r} reads sections that are not collapsible: "
                f"{', '.join(sorted(stray))}"
            )
        passes.append(PassConfig(name=name, labels=labels))

    try:
        etymology_pattern = re.compile(data.get("etymology_pattern", r"^Etymology \d+$"))
    except re.error as e:
        raise SchemaError(f"Invalid etymology_pattern in {source}: {e}")

    return Taxonomy(
        parts_of_speech=_title_set(data, "parts_of_speech", source),
        collapsible=collapsible,
        semi_collapsible=_title_set(data, "semi_collapsible", source),
        ignored=_title_set(data, "ignored", source),
        etymology_pattern=etymology_pattern,
        templates=templates,
        passes=tuple(passes),
    )


_default: Optional[Taxonomy] = None


def load_taxonomy(path: Optional[Path] = None) -> Taxonomy:
    """
    Load a taxonomy file, or the packaged default when path is None.

    The packaged default is parsed once and reused.
    """
    global _default
    if path is None:
        if _default is None:
            _default = taxonomy_from_dict(_load_yaml(DEFAULT_TAXONOMY_PATH))
        return _default
    return taxonomy_from_dict(_load_yaml(path), source=path)
