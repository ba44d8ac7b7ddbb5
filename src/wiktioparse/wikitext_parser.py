"""
Bracket-aware scanner for the small slice of wikitext markup we read.

Handles:
- Templates: {{name|param1|param2|...}}
- Wikilinks: [[target#anchor|display]]
- Nesting (links inside template parameters, templates inside templates)

Grammar:
    content     ::= (template | wikilink | text)*
    template    ::= "{{" name ("|" param)* "}}"
    param       ::= (template | wikilink | param_char)*
    wikilink    ::= "[[" target ("#" anchor)? ("|" display)? "]]"

Only the outermost templates of a line are returned. A nested template
inside a parameter collapses to the word it displays ({{l|es|casa}} -> casa),
and a wikilink collapses to its display text.
"""

from dataclasses import dataclass, field
from typing import Optional


# Templates whose display word is their second positional parameter
# (the first being a language code).
LINKING_TEMPLATES = frozenset({"l", "m", "link", "mention", "l-self", "ll"})

# Templates whose display text is their first parameter.
GLOSS_TEMPLATES = frozenset({"w", "gloss", "q", "qualifier", "i", "qual"})


@dataclass
class Wikilink:
    """A parsed [[target#anchor|display]] link."""

    target: str
    anchor: Optional[str] = None
    display: Optional[str] = None

    def text(self) -> str:
        return self.display if self.display else self.target


@dataclass
class Template:
    """A parsed {{name|param|...}} call."""

    name: str
    params: list[str] = field(default_factory=list)

    def positional(self) -> list[str]:
        """Parameters that are not name=value pairs, in order."""
        return [p for p in self.params if "=" not in p]

    def named(self, key: str) -> Optional[str]:
        prefix = f"{key}="
        for p in self.params:
            if p.startswith(prefix):
                return p[len(prefix):]
        return None


class WikitextScanner:
    """
    Recursive descent scanner over a single chunk of wikitext.

    Usage:
        templates = WikitextScanner(line).templates()
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    # -------------------------------------------------------------------------
    # Primitives
    # -------------------------------------------------------------------------

    def at_end(self) -> bool:
        return self.pos >= self.length

    def match(self, expected: str) -> bool:
        return self.text.startswith(expected, self.pos)

    def consume_if(self, expected: str) -> bool:
        if self.match(expected):
            self.pos += len(expected)
            return True
        return False

    def take(self) -> str:
        ch = self.text[self.pos]
        self.pos += 1
        return ch

    # -------------------------------------------------------------------------
    # Productions
    # -------------------------------------------------------------------------

    def templates(self) -> list[Template]:
        """Return every top-level template in the text, in order."""
        found = []
        self.pos = 0
        while not self.at_end():
            if self.match("{{"):
                found.append(self.read_template())
            elif self.match("[["):
                self.read_wikilink()
            else:
                self.pos += 1
        return found

    def read_template(self) -> Template:
        self.consume_if("{{")
        name = self.read_until_separator(nested=False)
        params = []
        while self.consume_if("|"):
            params.append(self.read_until_separator(nested=True))
        self.consume_if("}}")
        return Template(name=name.strip(), params=params)

    def read_until_separator(self, nested: bool) -> str:
        """Read a template name or parameter, stopping at | or }}."""
        parts = []
        while not self.at_end() and not (self.match("|") or self.match("}}")):
            if self.match("{{"):
                inner = self.read_template()
                if nested:
                    parts.append(template_display(inner))
            elif self.match("[["):
                parts.append(self.read_wikilink().text())
            else:
                parts.append(self.take())
        return "".join(parts).strip()

    def read_wikilink(self) -> Wikilink:
        self.consume_if("[[")
        target = self.read_link_part("#|")
        anchor = display = None
        if self.consume_if("#"):
            anchor = self.read_link_part("|")
        if self.consume_if("|"):
            display = self.read_link_part("")
        self.consume_if("]]")
        return Wikilink(target=target, anchor=anchor, display=display or None)

    def read_link_part(self, stops: str) -> str:
        parts = []
        while not self.at_end() and not self.match("]]"):
            if self.text[self.pos] in stops:
                break
            if self.match("{{"):
                parts.append(template_display(self.read_template()))
            else:
                parts.append(self.take())
        return "".join(parts)

    def strip_links(self) -> str:
        """Replace wikilinks by their display text, leave everything else."""
        parts = []
        self.pos = 0
        while not self.at_end():
            if self.match("[["):
                parts.append(self.read_wikilink().text())
            else:
                parts.append(self.take())
        return "".join(parts).replace("[", "").replace("]", "").strip()


def template_display(template: Template) -> str:
    """Text a nested template contributes to the parameter around it."""
    name = template.name.lower()
    params = template.positional()
    if name in LINKING_TEMPLATES and len(params) >= 2:
        return params[1]
    if name in GLOSS_TEMPLATES and params:
        return params[0]
    return ""


def find_templates(text: str, *names: str) -> list[Template]:
    """
    Find the top-level templates of text with one of the given names.

    Names compare exactly: template names are case-sensitive on
    Wiktionary past their first letter, and {{a}} and {{A}} differ in
    practice.
    """
    wanted = set(names)
    return [t for t in WikitextScanner(text).templates() if t.name in wanted]


def strip_links(text: str) -> str:
    """Strip [[...]] link markup from text, keeping displayed words."""
    return WikitextScanner(text).strip_links()
