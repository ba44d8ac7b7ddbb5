"""
Translation subpage resolution.

Long entries move their translation tables to a "<title>/translations"
subpage and leave a marker behind:

    ====Translations====
    {{see translation subpage|Noun}}

The resolver runs the whole parsing pipeline on the subpage, picks the
translations of the same language and part of speech, and splices them in
place of the marker.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from wiktioparse.classify import FORMS_KEY
from wiktioparse.errors import SpliceError
from wiktioparse.tree import Section
from wiktioparse.walker import walk
from wiktioparse.wikitext_parser import find_templates

if TYPE_CHECKING:
    from wiktioparse.pipeline import WiktioParser

logger = logging.getLogger(__name__)

SUBPAGE_SUFFIX = "/translations"

# What to do when a subpage cannot be spliced in
SPLICE_KEEP = "keep"
SPLICE_RAISE = "raise"
SPLICE_POLICIES = (SPLICE_KEEP, SPLICE_RAISE)


class TranslationResolver:
    """
    Preaction for translation sections of one document.

    trail lists the titles whose pipelines are running, outermost first.
    Each subpage title extends its host title, so only the trail length
    against max_depth ends recursion.
    """

    def __init__(
        self,
        parser: "WiktioParser",
        title: str,
        trail: tuple[str, ...],
        extractor: Callable[[list[str]], Any],
    ):
        self.parser = parser
        self.title = title
        self.trail = trail
        self.extractor = extractor
        self.marker_names = parser.taxonomy.template_names("subpage")

    def subpage_pos(self, lines: list[str]) -> Optional[str]:
        """Part of speech named by a leading subpage marker, if any."""
        if not lines:
            return None
        for template in find_templates(lines[0], *self.marker_names):
            params = template.positional()
            if params and params[0].strip():
                return params[0].strip()
        return None

    def __call__(self, language: Optional[str], level: int, tree: Section, key: str, value: Any) -> None:
        if not isinstance(value, list):
            return

        pos = self.subpage_pos(value)
        if pos is None:
            tree[key] = self.extractor(value)
            return

        try:
            resolved = self.resolve_spliced(language, level, self.splice(language, pos, key), key)
        except SpliceError as e:
            if self.parser.on_splice_failure == SPLICE_RAISE:
                raise
            logger.warning(f"{e}; leaving the reference unresolved")
            return

        tree[key] = resolved

    def splice(self, language: Optional[str], pos: str, key: str) -> Any:
        """Fetch and parse the subpage, returning its matching translations."""
        subtitle = self.title + SUBPAGE_SUFFIX
        if len(self.trail) > self.parser.max_depth:
            raise SpliceError(subtitle, f"nested deeper than {self.parser.max_depth} subpage(s)")

        logger.info(f"Resolving {language} {pos} {key.lower()} from {subtitle!r}")
        document = self.parser.parse_document(subtitle, self.trail + (subtitle,))
        if document is None:
            raise SpliceError(subtitle, "article not found")

        entry = document.get(language)
        if not isinstance(entry, Section):
            raise SpliceError(subtitle, f"no {language} section")

        forms = entry.get(FORMS_KEY)
        if isinstance(forms, list):
            holder = next(
                (form[pos] for form in forms if isinstance(form, Section) and isinstance(form.get(pos), Section)),
                None,
            )
        else:
            holder = entry.get(pos)

        if not isinstance(holder, Section):
            raise SpliceError(subtitle, f"no {pos} section under {language}")
        if key not in holder:
            raise SpliceError(subtitle, f"no {key} under {language} {pos}")
        return holder[key]

    def resolve_spliced(self, language: Optional[str], level: int, resolved: Any, key: str) -> Any:
        """Finish whatever the subpage's own pipeline left unresolved."""
        if isinstance(resolved, Section):
            walk(resolved, frozenset({key}), self.extractor, self, language, level + 1)
        elif isinstance(resolved, list):
            if self.subpage_pos(resolved) is not None:
                raise SpliceError(self.title + SUBPAGE_SUFFIX, "subpage translations are themselves unresolved")
            return self.extractor(resolved)
        return resolved
