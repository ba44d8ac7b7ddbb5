"""
Word-to-IPA transliteration used to annotate translations.

TableTransliterator reads one YAML file per language from a directory:

    data/ipa/es_ipa.yaml
        words:              # exact spellings, checked first
          canción: kanˈθjon
        rules:              # ordered rewrites applied to the lowercased word
          - [ch, tʃ]
          - [ll, ʎ]
          - [ñ, ɲ]

The language code is the file name before "_ipa.yaml". Files whose name
starts with an underscore hold shared material and are not languages.
Every file is loaded up front, so supports() never touches the disk.
"""

import logging
from pathlib import Path
from typing import Optional, Protocol

import yaml

from wiktioparse.errors import SchemaError

logger = logging.getLogger(__name__)

IPA_FILE_SUFFIX = "_ipa.yaml"


class Transliterator(Protocol):
    def supports(self, lang: str) -> bool:
        ...

    def transliterate(self, lang: str, word: str) -> Optional[str]:
        ...


class NullTransliterator:
    """Supports no language; translations stay plain words."""

    def supports(self, lang: str) -> bool:
        return False

    def transliterate(self, lang: str, word: str) -> Optional[str]:
        return None


class LanguageTable:
    """Lexicon and rewrite rules for one language."""

    def __init__(self, words: Optional[dict] = None, rules: Optional[list] = None):
        self.words = {str(k): str(v) for k, v in (words or {}).items()}
        self.rules = [(str(src), str(dst)) for src, dst in (rules or [])]

    def convert(self, word: str) -> str:
        if word in self.words:
            return self.words[word]
        result = word.lower()
        for src, dst in self.rules:
            result = result.replace(src, dst)
        return result


class TableTransliterator:
    """Transliterator backed by per-language YAML tables."""

    def __init__(self, tables: dict[str, LanguageTable]):
        self.tables = tables

    @classmethod
    def from_directory(cls, directory: Path) -> "TableTransliterator":
        if not directory.is_dir():
            raise SchemaError(f"IPA table directory not found: {directory}")

        tables = {}
        for path in sorted(directory.glob(f"*{IPA_FILE_SUFFIX}")):
            if path.name.startswith("_"):
                continue
            lang = path.name[: -len(IPA_FILE_SUFFIX)]
            try:
                with open(path, encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
                tables[lang] = LanguageTable(data.get("words"), data.get("rules"))
            except (yaml.YAMLError, AttributeError, TypeError, ValueError) as e:
                raise SchemaError(f"Invalid IPA table {path}: {e}")

        logger.info(f"Loaded IPA tables for {len(tables)} language(s): {', '.join(tables) or '-'}")
        return cls(tables)

    def supports(self, lang: str) -> bool:
        return lang in self.tables

    def transliterate(self, lang: str, word: str) -> Optional[str]:
        table = self.tables.get(lang)
        if table is None:
            return None
        return table.convert(word)
