"""Unit tests for the labeled-subtree walker."""
from wiktioparse.tree import Section
from wiktioparse.walker import ExtractionPass, walk


def sample_tree():
    return Section(children={
        "English": Section(children={
            "Forms": [
                Section(children={"Noun": Section(children={"Synonyms": ["a"], "Definitions": ["# n"]})}),
                Section(children={"Verb": Section(children={"Synonyms": ["b"]})}),
            ],
            "Pronunciation": ["p"],
        }),
        "Spanish": Section(children={
            "Noun": Section(children={"Synonyms": ["c"]}),
        }),
    })


class TestWalk:
    def test_extractor_replaces_every_labeled_value(self):
        tree = sample_tree()
        walk(tree, frozenset({"Synonyms"}), lambda lines: [s.upper() for s in lines])

        assert tree["English"]["Forms"][0]["Noun"]["Synonyms"] == ["A"]
        assert tree["English"]["Forms"][1]["Verb"]["Synonyms"] == ["B"]
        assert tree["Spanish"]["Noun"]["Synonyms"] == ["C"]

    def test_unlabeled_values_untouched(self):
        tree = sample_tree()
        walk(tree, frozenset({"Synonyms"}), lambda lines: [])

        assert tree["English"]["Pronunciation"] == ["p"]
        assert tree["English"]["Forms"][0]["Noun"]["Definitions"] == ["# n"]

    def test_preaction_gets_language_and_level(self):
        tree = sample_tree()
        calls = []

        def preaction(language, level, node, key, value):
            calls.append((language, level, key, value))
            node[key] = "done"

        walk(tree, frozenset({"Synonyms"}), lambda lines: None, preaction)

        assert calls == [
            ("English", 3, "Synonyms", ["a"]),
            ("English", 3, "Synonyms", ["b"]),
            ("Spanish", 2, "Synonyms", ["c"]),
        ]
        assert tree["Spanish"]["Noun"]["Synonyms"] == "done"

    def test_labeled_top_level_key_is_its_own_language(self):
        tree = Section(children={"Translations": ["x"]})
        seen = []

        walk(tree, frozenset({"Translations"}), len, lambda lang, level, node, key, value: seen.append(lang))

        assert seen == ["Translations"]

    def test_does_not_enter_extracted_structures(self):
        """A dict produced by an earlier pass is never walked into."""
        tree = Section(children={
            "English": Section(children={
                "Translations": {"Synonyms": {"fr": ["mot"]}},
            }),
        })
        walk(tree, frozenset({"Synonyms"}), lambda lines: "replaced")

        assert tree["English"]["Translations"] == {"Synonyms": {"fr": ["mot"]}}


class TestExtractionPass:
    def test_run_walks_with_bound_labels(self):
        tree = sample_tree()
        ExtractionPass("count", frozenset({"Pronunciation", "Synonyms"}), len).run(tree)

        assert tree["English"]["Pronunciation"] == 1
        assert tree["Spanish"]["Noun"]["Synonyms"] == 1
