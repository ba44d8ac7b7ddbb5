"""
Section extractors.

Each extractor turns the cleaned lines of one collapsed section into a
structure:

    Pronunciation               -> [{"ipa": ..., "tag": ...}, ...]
    Synonyms, Antonyms, ...     -> {sense: [term, ...]}
    Derived/Related terms       -> [term, ...]
    Translations                -> {sense: {lang: [word | {"word", "ipa"}]}}

Lines that do not match the expected templates are skipped; wikitext is
irregular enough that a miss is normal, not an error.
"""

import logging
import re
from functools import partial
from typing import Any, Callable, Optional, TypedDict, Union

from wiktioparse.taxonomy import Taxonomy, load_taxonomy
from wiktioparse.transliteration import Transliterator
from wiktioparse.wikitext_parser import find_templates, strip_links

logger = logging.getLogger(__name__)

LANG_CODE_RE = re.compile(r"^[a-z]{2,3}(?:-[a-z]{2,3})*$")

# Everything after the last pipe of a line, provided no brace follows
TERM_LINE_RE = re.compile(r"^.*\|([^}]+)$")

# Language code written as the first item of multi-line column templates
COLUMN_LANG_CODE = "en"


class _PronunciationBase(TypedDict):
    ipa: str


class PronunciationEntry(_PronunciationBase, total=False):
    tag: str


class TranslationEntry(TypedDict):
    word: str
    ipa: str


OnymMap = dict[str, list[str]]
TranslationTable = dict[str, dict[str, list[Union[str, TranslationEntry]]]]


def clean_ipa(ipa: str) -> str:
    """Strip the /slashes/ delimiting a phonemic transcription."""
    return ipa.strip().strip("/").strip()


def _drop_lang_code(params: list[str]) -> list[str]:
    """Drop a leading language code when more parameters follow it."""
    if len(params) >= 2 and LANG_CODE_RE.match(params[0]):
        return params[1:]
    return params


def extract_pronunciation(lines: list[str], taxonomy: Optional[Taxonomy] = None) -> list[PronunciationEntry]:
    taxonomy = taxonomy or load_taxonomy()
    ipa_names = taxonomy.template_names("ipa")
    accent_names = taxonomy.template_names("accent")

    result: list[PronunciationEntry] = []
    for line in lines:
        ipa = None
        for template in find_templates(line, *ipa_names):
            params = _drop_lang_code(template.positional())
            if params and clean_ipa(params[0]):
                ipa = clean_ipa(params[0])
                break
        if ipa is None:
            continue

        entry: PronunciationEntry = {"ipa": ipa}
        accents = find_templates(line, *accent_names)
        if accents:
            tags = _drop_lang_code(accents[0].positional())
            if tags:
                entry["tag"] = ", ".join(tags)
        result.append(entry)

    return result


def extract_onyms(lines: list[str], taxonomy: Optional[Taxonomy] = None) -> OnymMap:
    """
    Group linked terms by the sense they are listed under.

    A line opening with {{sense|...}} starts a bucket; the {{l|lang|term}}
    links on that same line fill it.
    """
    taxonomy = taxonomy or load_taxonomy()
    sense_names = taxonomy.template_names("sense")
    link_names = taxonomy.template_names("link")

    result: OnymMap = {}
    for line in lines:
        senses = find_templates(line, *sense_names)
        if not senses:
            continue
        sense = ", ".join(senses[0].positional()).strip()
        terms = []
        for link in find_templates(line, *link_names):
            params = link.positional()
            if len(params) >= 2 and params[1].strip():
                terms.append(params[1].strip())
        result[sense] = terms

    return result


def extract_terms(lines: list[str], taxonomy: Optional[Taxonomy] = None) -> list[str]:
    """Collect the items of multi-line column lists (|term per line)."""
    result = []
    for line in lines:
        m = TERM_LINE_RE.match(line)
        if not m:
            continue
        term = m.group(1).strip()
        if term and term != COLUMN_LANG_CODE:
            result.append(term)
    return result


def extract_translations(
    lines: list[str],
    taxonomy: Optional[Taxonomy] = None,
    transliterator: Optional[Transliterator] = None,
) -> TranslationTable:
    """
    Build the sense -> language -> words table of a translations section.

    Words in languages the transliterator supports carry their IPA.
    Translations listed before any {{trans-top}} go under the "" sense.
    """
    taxonomy = taxonomy or load_taxonomy()
    top_names = taxonomy.template_names("trans_top")
    translation_names = taxonomy.template_names("translation")

    table: TranslationTable = {}
    sense = ""
    for line in lines:
        tops = find_templates(line, *top_names)
        if tops:
            sense = ", ".join(tops[0].positional()).strip()
            table[sense] = {}
            continue

        matches = 0
        for template in find_templates(line, *translation_names):
            params = template.positional()
            if len(params) < 2:
                continue
            lang = params[0].strip()
            word = strip_links(params[1])
            if not lang or not word:
                continue

            entry: Union[str, TranslationEntry] = word
            if transliterator is not None and transliterator.supports(lang):
                entry = {"word": word, "ipa": transliterator.transliterate(lang, word)}
            table.setdefault(sense, {}).setdefault(lang, []).append(entry)
            matches += 1

        if matches:
            logger.debug(f"{matches} translation(s) for sense {sense!r}: {line}")

    return table


# Extraction pass name -> extractor, resolved once per pass
EXTRACTORS = {
    "translations": extract_translations,
    "onyms": extract_onyms,
    "terms": extract_terms,
    "pronunciation": extract_pronunciation,
}


def bind_extractor(
    name: str,
    taxonomy: Taxonomy,
    transliterator: Optional[Transliterator] = None,
) -> Callable[[list[str]], Any]:
    """Return the named extractor with its configuration applied."""
    extractor = EXTRACTORS[name]
    if extractor is extract_translations:
        return partial(extractor, taxonomy=taxonomy, transliterator=transliterator)
    return partial(extractor, taxonomy=taxonomy)
