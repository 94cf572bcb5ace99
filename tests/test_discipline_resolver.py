import json

import pytest

from discipline_resolver import match_prefix_directly, resolve_prefixes, tokenize_title
from prefix_tables import DEFAULT_DISCIPLINE_MAPPING, DisciplineTable


class TestTokenize:
    def test_drops_short_words_and_punctuation(self):
        assert tokenize_title("Computer Science, B.S.") == ["computer", "science"]

    def test_lowercases(self):
        assert tokenize_title("POLITICAL Science") == ["political", "science"]

    def test_empty(self):
        assert tokenize_title("") == []
        assert tokenize_title(None) == []

    def test_okina_and_apostrophe_do_not_split_words(self):
        assert tokenize_title("Hawaiʻian Studies") == ["hawaiian", "studies"]
        assert tokenize_title("Women’s Studies") == ["womens", "studies"]

    def test_non_ascii_letters_kept(self):
        assert tokenize_title("ʻŌlelo Hawaiʻi") == ["ōlelo", "hawaii"]


class TestResolve:
    def test_manoa_computer_science(self):
        prefixes = resolve_prefixes("uh_manoa", "Computer Science")
        assert "ICS" in prefixes
        assert prefixes == ["ICS", "DATA"]

    def test_hilo_uses_campus_table(self):
        assert resolve_prefixes("uh_hilo", "Computer Science")[0] == "CS"

    def test_political_science_does_not_match_on_science(self):
        table = DisciplineTable(
            mappings={"test_u": {"political_science": ["POLS"], "computer_science": ["ICS"]}},
            known_prefixes={"test_u": []},
        )
        assert resolve_prefixes("test_u", "Political Science", table=table) == ["POLS"]
        assert resolve_prefixes("test_u", "Science", table=table) == []

    def test_unmapped_institution_uses_default_table(self):
        prefixes = resolve_prefixes("mystery_college", "Computer Science", known_prefixes=[])
        assert prefixes == DEFAULT_DISCIPLINE_MAPPING["computer_science"]

    def test_direct_prefix_match_on_first_word(self):
        # No 'chemistry' discipline entry needed: CHEM matches the first four letters.
        table = DisciplineTable(mappings={"test_u": {}}, default_mapping={}, known_prefixes={"test_u": ["CHEM", "ICS"]})
        assert resolve_prefixes("test_u", "Chemistry", table=table) == ["CHEM"]

    def test_direct_prefix_exact_match(self):
        assert match_prefix_directly("Art", ["ART", "ARCH"]) == ["ART"]

    def test_direct_match_keeps_catalog_case(self):
        assert match_prefix_directly("Mathematics", ["MATH", "Math", "Mgt"]) == ["MATH", "Math"]

    def test_no_match_is_empty(self):
        assert resolve_prefixes("uh_manoa", "Underwater Basket Weaving") == []

    def test_no_duplicates(self):
        prefixes = resolve_prefixes("uh_manoa", "Data Science and Computer Science")
        assert len(prefixes) == len(set(prefixes))
        assert prefixes == ["DATA", "ICS"]

    def test_truncates_to_cap_in_discovery_order(self):
        words = ["alpha", "bravo", "charlie", "delta", "echo", "foxtrot", "golf", "hotel", "india", "juliet"]
        mapping = {f"{w}_studies": [f"P{i:02d}A", f"P{i:02d}B"] for i, w in enumerate(words)}
        table = DisciplineTable(mappings={"big_u": mapping}, known_prefixes={"big_u": []})
        title = " ".join(words)
        prefixes = resolve_prefixes("big_u", title, table=table)
        assert len(prefixes) == 15
        assert prefixes[:4] == ["P00A", "P00B", "P01A", "P01B"]
        assert prefixes[-1] == "P07A"

    @pytest.mark.parametrize("base,extra", [
        ("Computer Science", "Mathematics"),
        ("Business", "Accounting Economics"),
        ("Biology", "Chemistry Physics"),
        ("History", "Philosophy"),
    ])
    def test_appending_keywords_never_shrinks(self, base, extra):
        before = set(resolve_prefixes("uh_manoa", base))
        after = set(resolve_prefixes("uh_manoa", f"{base} {extra}"))
        assert before <= after

    def test_prepending_a_word_drops_the_direct_match(self):
        # Direct prefix matching only looks at the first word of the title.
        assert resolve_prefixes("uh_manoa", "Zoology") == ["ZOOL"]
        prefixes = resolve_prefixes("uh_manoa", "Computer Zoology")
        assert "ZOOL" not in prefixes
        assert prefixes == ["ICS", "DATA"]

    def test_okina_in_title(self):
        assert resolve_prefixes("uh_manoa", "Hawaiʻian Studies") == resolve_prefixes("uh_manoa", "Hawaiian Studies")
        assert resolve_prefixes("uh_manoa", "Hawaiʻian Studies") == ["HWST", "HAW"]


class TestDisciplineTable:
    def test_resolve_matches_first_part_only(self):
        table = DisciplineTable()
        assert table.resolve("uh_manoa", "political") == ["POLS"]
        assert table.resolve("uh_manoa", "science") == []

    def test_has_mapping(self):
        table = DisciplineTable()
        assert table.has_mapping("uh_manoa")
        assert not table.has_mapping("nowhere")

    def test_from_json(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({
            "version": "test-2",
            "mappings": {"x_u": {"robotics": ["ROBO"]}},
            "default": {"robotics": ["RBT"]},
        }))
        table = DisciplineTable.from_json(str(path))
        assert table.version == "test-2"
        assert table.resolve("x_u", "robotics") == ["ROBO"]
        assert table.resolve("other_u", "robotics") == ["RBT"]
        # Missing "prefixes" section falls back to the built-in list.
        assert "ICS" in table.known_prefixes_for("uh_manoa")
