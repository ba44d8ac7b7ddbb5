"""Pytest configuration and shared fixtures."""
import pytest

from wiktioparse.pipeline import WiktioParser
from wiktioparse.taxonomy import load_taxonomy


WORD_ARTICLE = """{{also|Word|WORD}}
==English==
{{wikipedia}}

===Etymology 1===
From {{inh|en|enm|word}}.

====Pronunciation====
* {{a|UK}} {{IPA|en|/wɜːd/}}
* {{a|US}} {{IPA|en|/wɝd/}}
* {{audio|en|en-us-word.ogg|Audio (US)}}

====Noun====
{{en-noun}}

# The smallest unit of language that has a particular meaning.
# {{lb|en|informal}} A brief discussion.

=====Synonyms=====
* {{sense|unit of language}} {{l|en|term}}, {{l|en|vocable}}

=====Antonyms=====
* {{sense|promise}} {{l|en|lie}}

=====Derived terms=====
{{col3|en
|buzzword
|byword
|wordplay
}}

=====Translations=====
{{see translation subpage|Noun}}

====Verb====
{{en-verb}}

# To say or write using particular words.

===Etymology 2===
Clipping of {{m|en|wordy}}.

====Adjective====
{{en-adj}}

# {{lb|en|slang}} Used to express agreement.

===Further reading===
* {{R:Webster 1913}}

----

==Old English==

===Noun===
{{ang-noun}}

# word, speech
"""

WORD_TRANSLATIONS = """{{translation subpage|Noun}}
==English==

===Etymology 1===

====Noun====

=====Translations=====
{{trans-top|unit of language}}
* French: {{t+|fr|mot|m}}
* Spanish: {{t+|es|palabra|f}}
{{trans-bottom}}
{{trans-top|promise}}
* Spanish: {{t+|es|palabra|f}}
{{trans-bottom}}

====Verb====

=====Translations=====
{{trans-top|to say or write}}
* Spanish: {{t|es|expresar}}
{{trans-bottom}}
"""

PALABRA_ARTICLE = """==Spanish==

===Etymology===
From {{inh|es|la|parabola}}.

===Pronunciation===
* {{IPA|es|/paˈlabɾa/}}

===Noun===
{{es-noun|f}}

# [[word]]
# [[speech]]

====Synonyms====
* {{sense|word}} {{l|es|vocablo}}, {{l|es|término}}

====Translations====
{{trans-top|word}}
* English: {{t+|en|word}}
* French: {{t+|fr|mot|m}}, {{t|fr|[[parole]]|f}}
{{trans-bottom}}

===References===
* {{R:DRAE}}
"""


class FakeFetcher:
    """Serves articles from a dict and records every title asked for."""

    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    def fetch(self, title):
        self.calls.append(title)
        text = self.pages.get(title)
        if text is None:
            return None
        return text.split("\n")


class FakeTransliterator:
    """Transliterates from a {lang: {word: ipa}} table."""

    def __init__(self, table):
        self.table = table

    def supports(self, lang):
        return lang in self.table

    def transliterate(self, lang, word):
        return self.table[lang].get(word, word)


@pytest.fixture
def taxonomy():
    """The packaged section taxonomy."""
    return load_taxonomy()


@pytest.fixture
def word_article():
    return WORD_ARTICLE.split("\n")


@pytest.fixture
def palabra_article():
    return PALABRA_ARTICLE.split("\n")


@pytest.fixture
def make_fetcher():
    """Factory for fetchers over a custom set of pages."""
    return FakeFetcher


@pytest.fixture
def fetcher():
    """Fetcher serving the sample articles."""
    return FakeFetcher({
        "word": WORD_ARTICLE,
        "word/translations": WORD_TRANSLATIONS,
        "palabra": PALABRA_ARTICLE,
    })


@pytest.fixture
def transliterator():
    """Transliterator supporting Spanish only."""
    return FakeTransliterator({
        "es": {
            "palabra": "pa.ˈla.bra",
            "expresar": "eks.pɾe.ˈsaɾ",
        },
    })


@pytest.fixture
def parser(fetcher):
    """Parser over the sample articles, without transliteration."""
    return WiktioParser(fetcher)
