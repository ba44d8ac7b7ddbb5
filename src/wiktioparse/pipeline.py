"""
Article parsing pipeline.

Pipeline:
    fetch -> header tree -> classification -> translations -> onyms
          -> terms -> pronunciation -> document

The extraction passes and their order come from the taxonomy. The
translations pass resolves "see translation subpage" markers by running
this same pipeline on the subpage.
"""

import logging
from typing import Optional

from wiktioparse.classify import classify
from wiktioparse.extractors import bind_extractor
from wiktioparse.fetch import Fetcher
from wiktioparse.resolver import SPLICE_KEEP, SPLICE_POLICIES, TranslationResolver
from wiktioparse.taxonomy import Taxonomy, load_taxonomy
from wiktioparse.transliteration import NullTransliterator, Transliterator
from wiktioparse.tree import Section, build_tree
from wiktioparse.walker import ExtractionPass

logger = logging.getLogger(__name__)

# Subpages resolved below the requested article, at most
DEFAULT_MAX_DEPTH = 2

# Passes whose sections may point at another article
RESOLVED_PASSES = {"translations": TranslationResolver}


class WiktioParser:
    """
    Parses Wiktionary articles into nested word records.

    Usage:
        parser = WiktioParser(WiktionaryClient())
        record = parser.process("palabra")  # None if there is no such page
    """

    def __init__(
        self,
        fetcher: Fetcher,
        transliterator: Optional[Transliterator] = None,
        taxonomy: Optional[Taxonomy] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        on_splice_failure: str = SPLICE_KEEP,
    ):
        if on_splice_failure not in SPLICE_POLICIES:
            raise ValueError(
                f"on_splice_failure must be one of {', '.join(SPLICE_POLICIES)}, "
                f"got {on_splice_failure!r}"
            )
        if max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {max_depth}")

        self.fetcher = fetcher
        self.transliterator = transliterator or NullTransliterator()
        self.taxonomy = taxonomy or load_taxonomy()
        self.max_depth = max_depth
        self.on_splice_failure = on_splice_failure

    def passes(self, title: str, trail: tuple[str, ...]) -> list[ExtractionPass]:
        """Configure the extraction passes for one document."""
        passes = []
        for config in self.taxonomy.passes:
            extractor = bind_extractor(config.name, self.taxonomy, self.transliterator)
            preaction = None
            if config.name in RESOLVED_PASSES:
                preaction = RESOLVED_PASSES[config.name](self, title, trail, extractor)
            passes.append(ExtractionPass(config.name, config.labels, extractor, preaction))
        return passes

    def parse_lines(self, title: str, lines: list[str], trail: Optional[tuple[str, ...]] = None) -> Section:
        """Run the pipeline on already-fetched wikitext lines."""
        trail = trail or (title,)
        document = classify(build_tree(lines), self.taxonomy)
        for extraction in self.passes(title, trail):
            extraction.run(document)
            logger.debug(f"{title}: {extraction.name} pass done")
        return document

    def parse_document(self, title: str, trail: Optional[tuple[str, ...]] = None) -> Optional[Section]:
        """Fetch and parse an article; None when it cannot be fetched."""
        lines = self.fetcher.fetch(title)
        if lines is None:
            logger.warning(f"No data for {title!r}")
            return None
        logger.info(f"Parsing {title!r} ({len(lines):,} lines)")
        return self.parse_lines(title, lines, trail)

    def process(self, title: str) -> Optional[dict]:
        """Parse an article into a JSON-ready record keyed by language."""
        document = self.parse_document(title)
        if document is None:
            return None
        return document.to_dict()
