"""Tests for language line parsing."""

import pytest

from cvpress.layout.document import Flag
from cvpress.templates.languages import (
    DEFAULT_LEVEL,
    flag_for,
    level_from_label,
    parse_language,
    parse_languages,
    split_top_level,
)


class TestSplit:
    def test_separators(self):
        assert split_top_level("A, B · C | D; E • F") == ["A", "B", "C", "D", "E", "F"]

    def test_parentheses_protect_separators(self):
        assert split_top_level("Anglais (B2, TOEIC 900), Allemand") == [
            "Anglais (B2, TOEIC 900)",
            "Allemand",
        ]

    def test_empty(self):
        assert split_top_level("  ,  ") == []


class TestLevels:
    @pytest.mark.parametrize(
        "label, level",
        [
            ("Natif", 5),
            ("langue maternelle", 5),
            ("Courant", 4),
            ("Fluent", 4),
            ("C1", 4),
            ("C2 - bilingue", 5),
            ("B2", 3),
            ("Professional", 3),
            ("A2", 2),
            ("notions", 2),
            ("A1", 1),
            ("", DEFAULT_LEVEL),
            ("TOEIC 900", DEFAULT_LEVEL),
        ],
    )
    def test_level_from_label(self, label, level):
        assert level_from_label(label) == level

    @pytest.mark.parametrize(
        "name, flag",
        [
            ("Français", Flag.FR),
            ("English", Flag.EN),
            ("Anglais", Flag.EN),
            ("Espagnol", Flag.ES),
            ("Deutsch", Flag.DE),
            ("Italien", Flag.IT),
            ("Portugais", Flag.PT),
            ("Arabe", Flag.AR),
            ("Mandarin", Flag.ZH),
            ("Klingon", Flag.GENERIC),
        ],
    )
    def test_flag_for(self, name, flag):
        assert flag_for(name) == flag


class TestParse:
    def test_parenthesized(self):
        entries = parse_languages("Français (Natif), Anglais (Courant)")
        assert [e.name for e in entries] == ["Français", "Anglais"]
        assert [e.level_label for e in entries] == ["Natif", "Courant"]
        assert [e.level for e in entries] == [5, 4]
        assert [e.flag for e in entries] == [Flag.FR, Flag.EN]

    @pytest.mark.parametrize("text", ["English: C1", "English - C1", "English – C1"])
    def test_delimited(self, text):
        entry = parse_language(text)
        assert entry.name == "English"
        assert entry.level_label == "C1"
        assert entry.level == 4

    def test_name_only(self):
        entry = parse_language("Allemand")
        assert entry.name == "Allemand"
        assert entry.level_label == ""
        assert entry.level == DEFAULT_LEVEL
        assert entry.flag == Flag.DE

    def test_empty_line(self):
        assert parse_languages("") == []
