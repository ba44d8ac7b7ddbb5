"""Unit tests for the bracket-aware wikitext scanner.

Covers the template and link shapes the extractors rely on:
- Template parameters split on top-level pipes only
- Wikilinks with display text and section anchors: [[page#section|display]]
- Nested templates collapsing to the word they display
- Exact, case-sensitive template name lookup
"""

import pytest

from wiktioparse.wikitext_parser import (
    Template,
    Wikilink,
    WikitextScanner,
    find_templates,
    strip_links,
    template_display,
)


class TestWikilink:
    """Test Wikilink dataclass and text extraction."""

    def test_text_returns_display_when_present(self):
        wl = Wikilink(target="isle", display="Isle")
        assert wl.text() == "Isle"

    def test_text_returns_target_when_no_display(self):
        wl = Wikilink(target="word")
        assert wl.text() == "word"

    def test_anchor_preserved(self):
        wl = Wikilink(target="Man", anchor="Etymology 2", display="Man")
        assert wl.anchor == "Etymology 2"
        assert wl.text() == "Man"


class TestTemplate:
    def test_positional_skips_named(self):
        t = Template(name="t+", params=["fr", "mot", "g=m"])
        assert t.positional() == ["fr", "mot"]

    def test_named(self):
        t = Template(name="t+", params=["fr", "mot", "g=m"])
        assert t.named("g") == "m"
        assert t.named("tr") is None


class TestScannerTemplates:
    """Test top-level template scanning."""

    def test_simple(self):
        assert WikitextScanner("{{IPA|en|/wɜːd/}}").templates() == [
            Template(name="IPA", params=["en", "/wɜːd/"])
        ]

    def test_several_on_one_line(self):
        templates = WikitextScanner("* {{a|UK}} {{IPA|en|/wɜːd/}}").templates()
        assert [t.name for t in templates] == ["a", "IPA"]

    def test_no_params(self):
        assert WikitextScanner("{{trans-bottom}}").templates() == [Template(name="trans-bottom")]

    def test_name_whitespace_stripped(self):
        assert WikitextScanner("{{ IPA |en|x}}").templates()[0].name == "IPA"

    def test_plain_text(self):
        assert WikitextScanner("# The smallest unit of language.").templates() == []

    def test_unclosed_template(self):
        assert WikitextScanner("{{l|en|word").templates() == [Template(name="l", params=["en", "word"])]

    def test_templates_inside_links_ignored(self):
        templates = WikitextScanner("[[foo|{{l|en|x}}]] {{sense|a}}").templates()
        assert [t.name for t in templates] == ["sense"]

    def test_utf8_params(self):
        t = WikitextScanner("{{t+|ja|言葉|tr=kotoba}}").templates()[0]
        assert t.positional() == ["ja", "言葉"]
        assert t.named("tr") == "kotoba"


class TestNestedParams:
    """Nested markup inside a parameter collapses to its displayed text."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("{{t|fr|[[parole]]|f}}", ["fr", "parole", "f"]),
            ("{{t|fr|[[parole|paroles]]}}", ["fr", "paroles"]),
            ("{{l|en|[[Man#Etymology 2|Man]]}}", ["en", "Man"]),
            ("{{t|fr|{{l|fr|mot}}}}", ["fr", "mot"]),
            ("{{sense|{{w|Earth}}}}", ["Earth"]),
            ("{{t|fr|mot{{g|m}}}}", ["fr", "mot"]),
        ],
    )
    def test_params(self, text, expected):
        assert WikitextScanner(text).templates()[0].params == expected

    def test_pipe_inside_link_does_not_split(self):
        t = WikitextScanner("{{l|en|[[a|b]]|gloss}}").templates()[0]
        assert len(t.params) == 3


class TestTemplateDisplay:
    @pytest.mark.parametrize(
        "template,expected",
        [
            (Template(name="l", params=["es", "casa"]), "casa"),
            (Template(name="m", params=["en", "wordy"]), "wordy"),
            (Template(name="w", params=["Earth"]), "Earth"),
            (Template(name="l", params=["es"]), ""),
            (Template(name="g", params=["m"]), ""),
        ],
    )
    def test_display(self, template, expected):
        assert template_display(template) == expected


class TestFindTemplates:
    def test_filters_by_name(self):
        found = find_templates("* {{a|UK}} {{IPA|en|/wɜːd/}}", "IPA")
        assert [t.params for t in found] == [["en", "/wɜːd/"]]

    def test_any_of_several_names(self):
        found = find_templates("* French: {{t+|fr|mot|m}}, {{t|fr|parole|f}}", "t", "t+")
        assert [t.params[1] for t in found] == ["mot", "parole"]

    def test_case_sensitive(self):
        assert find_templates("{{ipa|en|/x/}}", "IPA") == []

    def test_no_prefix_match(self):
        assert find_templates("{{trans-top|sense}}", "t") == []


class TestStripLinks:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("[[parole]]", "parole"),
            ("[[w:foo|bar]]", "bar"),
            ("plain", "plain"),
            (" [[a]] [[b|c]] ", "a c"),
            ("[parole", "parole"),
        ],
    )
    def test_strip(self, text, expected):
        assert strip_links(text) == expected
