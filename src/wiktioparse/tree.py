"""
Header tree for wikitext articles.

An article is split on its ==Header== lines into a tree of Section nodes.
Each node keeps the raw lines written directly under its header and its
child sections keyed by title, in document order. The root node stands for
the whole article; its children are language names ("English", "Spanish").
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional

logger = logging.getLogger(__name__)

# A trailing <!-- comment --> after the closing run is allowed
HEADER_RE = re.compile(r"^\s*(={2,})\s*([^=]+?)\s*\1\s*(?:<!--.*?-->\s*)*$")

# Key that raw lines render under in the output document
RAW_KEY = "_"


class HeaderMatch(NamedTuple):
    level: int
    title: str


@dataclass
class Section:
    """
    A document node: raw lines plus titled children.

    lines is None when the node never had lines of its own (an intermediate
    node) or once classification has lifted them elsewhere. A child value is
    a Section, a plain line list for a collapsed section, an extracted
    structure, or, under the key "Forms", a list of Sections.
    """

    lines: Optional[list[str]] = None
    children: dict[str, Any] = field(default_factory=dict)

    def __contains__(self, key: str) -> bool:
        return key in self.children

    def __getitem__(self, key: str) -> Any:
        return self.children[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.children[key] = value

    def __delitem__(self, key: str) -> None:
        del self.children[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.children.get(key, default)

    def child(self, path: list[str]) -> "Section":
        """Walk down path from this node, creating missing nodes."""
        node = self
        for title in path:
            if not isinstance(node.children.get(title), Section):
                node.children[title] = Section()
            node = node.children[title]
        return node

    def to_dict(self) -> dict:
        """Render as plain nested dicts and lists, ready for JSON."""
        result: dict[str, Any] = {}
        if self.lines is not None:
            result[RAW_KEY] = list(self.lines)
        for key, value in self.children.items():
            result[key] = _render(value)
        return result


def _render(value: Any) -> Any:
    if isinstance(value, Section):
        return value.to_dict()
    if isinstance(value, list):
        return [_render(v) for v in value]
    if isinstance(value, dict):
        return {k: _render(v) for k, v in value.items()}
    return value


def parse_header(line: str) -> Optional[HeaderMatch]:
    """Parse a ==Title== line; None for anything else."""
    m = HEADER_RE.match(line)
    if not m or not m.group(2).strip():
        return None
    return HeaderMatch(level=len(m.group(1)), title=m.group(2).strip())


def find_top_level(lines: list[str]) -> Optional[int]:
    """Level of the first header in the document, None without headers."""
    for line in lines:
        header = parse_header(line)
        if header:
            return header.level
    return None


def build_tree(lines: list[str]) -> Section:
    """
    Nest lines under their headers.

    The first header's level is the document's top level. A header at or
    above the current level closes sections until the path is no deeper than
    (level - top level), then opens itself; so a header at the current level
    becomes a sibling, and one shallower than the top level lands at the
    root. Lines before the first header are dropped.
    """
    root = Section()
    top_level = find_top_level(lines)
    if top_level is None:
        root.lines = list(lines)
        return root

    path: list[str] = []
    current: Optional[Section] = None
    current_level = 0

    for line in lines:
        header = parse_header(line)
        if header is None:
            if current is not None:
                current.lines.append(line)
            continue

        if header.level <= current_level:
            depth = max(header.level - top_level, 0)
            del path[depth:]
        path.append(header.title)

        current = root.child(path)
        current.lines = []
        current_level = header.level
        logger.debug(f"found level {header.level} -> {'/'.join(path)}")

    return root
