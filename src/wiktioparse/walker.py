"""
Labeled-subtree walker.

A single traversal drives every extraction pass: it descends through
sections and Forms lists, and wherever a child title is in the pass's label
set it hands the child's value to the pass's extractor (or preaction).
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from wiktioparse.classify import FORMS_KEY
from wiktioparse.tree import Section


class Preaction(Protocol):
    """Replaces tree[key] itself, with the active language and depth at hand."""

    def __call__(self, language: Optional[str], level: int, tree: Section, key: str, value: Any) -> None:
        ...


Extractor = Callable[[list[str]], Any]


@dataclass(frozen=True)
class ExtractionPass:
    """An extractor bound to the section titles it applies to."""

    name: str
    labels: frozenset[str]
    extractor: Extractor
    preaction: Optional[Preaction] = None

    def run(self, tree: Section) -> None:
        walk(tree, self.labels, self.extractor, self.preaction)


def walk(
    tree: Section,
    labels: frozenset[str],
    extractor: Extractor,
    preaction: Optional[Preaction] = None,
    language: Optional[str] = None,
    level: int = 0,
) -> None:
    """
    Apply extractor to every labeled child below tree.

    At level 0 each child title is taken as the language of its subtree.
    """
    for key in list(tree.children):
        value = tree.children[key]
        if level == 0:
            language = key

        if key in labels:
            if preaction is None:
                tree.children[key] = extractor(value)
            else:
                preaction(language, level, tree, key, value)
        elif key == FORMS_KEY and isinstance(value, list):
            for form in value:
                if isinstance(form, Section):
                    walk(form, labels, extractor, preaction, language, level + 1)
        elif isinstance(value, Section):
            walk(value, labels, extractor, preaction, language, level + 1)
