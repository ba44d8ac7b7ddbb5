"""
Section classification.

Reshapes a raw header tree into the document model according to the
section taxonomy:

    part of speech      raw lines become a "Definitions" list
    ignored             removed
    semi-collapsible    raw lines cleaned, children kept
                        (replaced by the cleaned list when there are none)
    collapsible         replaced by its cleaned raw lines
    Etymology N         moved into the parent's "Forms" list, its raw lines
                        under "Etymology"

Nodes holding parts of speech without numbered etymologies get those parts
of speech moved into a "Forms" list as well, one wrapper per part of speech
in document order.

Classification mutates the tree in place and is idempotent: a classified
tree passes through a second run unchanged.
"""

import logging
import re
from typing import Optional

from wiktioparse.taxonomy import Taxonomy
from wiktioparse.tree import Section

logger = logging.getLogger(__name__)

DASH_LINE_RE = re.compile(r"^-+$")

FORMS_KEY = "Forms"
DEFINITIONS_KEY = "Definitions"
ETYMOLOGY_KEY = "Etymology"


def clean_lines(lines: Optional[list[str]]) -> list[str]:
    """Strip lines and drop the blank and dash-only ones."""
    cleaned = []
    for line in lines or []:
        line = line.strip()
        if line and not DASH_LINE_RE.match(line):
            cleaned.append(line)
    return cleaned


def classify(tree: Section, taxonomy: Taxonomy, level: int = 0) -> Section:
    """Classify tree in place and return it."""
    if level == 1:
        tree.lines = None

    for key in list(tree.children):
        value = tree.children[key]
        # Lists and extracted structures are final
        if not isinstance(value, Section):
            continue

        if key in taxonomy.parts_of_speech and DEFINITIONS_KEY not in value:
            value.children = {DEFINITIONS_KEY: clean_lines(value.lines), **value.children}
            value.lines = None

        if key in taxonomy.ignored:
            del tree.children[key]
            continue

        if key in taxonomy.semi_collapsible:
            cleaned = clean_lines(value.lines)
            if not value.children:
                tree.children[key] = cleaned
                continue
            value.lines = cleaned

        if key in taxonomy.collapsible:
            tree.children[key] = clean_lines(value.lines)
            continue

        classify(value, taxonomy, level + 1)

        if taxonomy.is_numbered_etymology(key):
            _move_to_forms(tree, key, value)

    for key, value in tree.children.items():
        if isinstance(value, Section) and FORMS_KEY not in value:
            _group_parts_of_speech(key, value, taxonomy)

    return tree


def _move_to_forms(tree: Section, key: str, value: Section) -> None:
    """Turn an "Etymology N" child into an element of tree's Forms list."""
    value.children = {ETYMOLOGY_KEY: clean_lines(value.lines), **value.children}
    value.lines = None
    forms = tree.children.setdefault(FORMS_KEY, [])
    forms.append(value)
    del tree.children[key]
    logger.debug(f"{key} -> Forms[{len(forms) - 1}]")


def _group_parts_of_speech(key: str, node: Section, taxonomy: Taxonomy) -> None:
    """Move the part-of-speech children of node into Forms."""
    pos_keys = [k for k in node.children if k in taxonomy.parts_of_speech]
    if not pos_keys:
        return
    node.children[FORMS_KEY] = [Section(children={k: node.children.pop(k)}) for k in pos_keys]
    logger.debug(f"{key}: grouped {', '.join(pos_keys)} into Forms")
