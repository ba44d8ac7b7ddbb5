"""
wiktioparse - structured word records from Wiktionary wikitext.

Modules:
    tree: header tree builder
    classify: section taxonomy classification
    walker: labeled-subtree walker for extraction passes
    extractors: pronunciation, onym, term and translation extractors
    resolver: translation subpage splicing
    pipeline: fetch -> build -> classify -> extract
    fetch: MediaWiki API client
    transliteration: word-to-IPA tables
"""

from wiktioparse.errors import SchemaError, SpliceError, WiktioParseError
from wiktioparse.fetch import WiktionaryClient
from wiktioparse.pipeline import WiktioParser
from wiktioparse.taxonomy import Taxonomy, load_taxonomy
from wiktioparse.transliteration import NullTransliterator, TableTransliterator
from wiktioparse.tree import Section, build_tree

__version__ = "0.1.0"

__all__ = [
    "NullTransliterator",
    "SchemaError",
    "Section",
    "SpliceError",
    "TableTransliterator",
    "Taxonomy",
    "WiktioParseError",
    "WiktioParser",
    "WiktionaryClient",
    "build_tree",
    "load_taxonomy",
]
