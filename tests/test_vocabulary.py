"""Tests for the keyword tables and Czech date parsing."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from lvzj.nodes import Color, Style
from lvzj.vocabulary import (
    BOX_COLORS,
    HIGHLIGHT_COLORS,
    color_from_word,
    contains_keyword,
    find_keyword,
    match_styles,
    match_text_color,
    parse_czech_date,
    split_highlight,
)

PRAGUE = ZoneInfo("Europe/Prague")


class TestKeywords:
    def test_find_substring(self) -> None:
        assert find_keyword("velmi tučně", "tučně") == 6
        assert find_keyword("nic", "tučně") == -1

    def test_whole_word_requires_word_start(self) -> None:
        assert not contains_keyword("netučně", "tučně", whole_word=True)
        assert contains_keyword("ne tučně", "tučně", whole_word=True)

    def test_whole_word_allows_stem_suffix(self) -> None:
        assert contains_keyword("kurzívou", "kurzív", whole_word=True)

    def test_match_styles_combines(self) -> None:
        assert match_styles("tučně kurzívou") == {Style.BOLD, Style.ITALIC}

    def test_match_text_color_none(self) -> None:
        assert match_text_color("tučně") is None

    @pytest.mark.parametrize("word,color", [
        ("modrozeleně", Color.CYAN),
        ("červeně", Color.RED),
        ("zelenou", Color.GREEN),
        ("modře", Color.BLUE),
        ("žlutě", Color.YELLOW),
        ("fialově", Color.PURPLE),
        ("růžovou", Color.PINK),
        ("hnědě", Color.BROWN),
        ("oranžově", Color.ORANGE),
        ("šedou", Color.GRAY),
        ("bíle", Color.WHITE),
        ("černě", Color.BLACK),
    ])
    def test_text_colours(self, word: str, color: Color) -> None:
        assert match_text_color(word) == color


class TestColourWords:
    def test_any_grammatical_form(self) -> None:
        for word in ("červené", "červená", "červený", "červeně"):
            assert color_from_word(word, HIGHLIGHT_COLORS) == Color.RED

    def test_compound_before_parts(self) -> None:
        assert color_from_word("modrozelené", HIGHLIGHT_COLORS) == Color.CYAN

    def test_restricted_palette(self) -> None:
        assert color_from_word("modrozelený", BOX_COLORS) is None

    def test_unknown(self) -> None:
        assert color_from_word("hnědá", BOX_COLORS) is None


class TestSplitHighlight:
    def test_no_clause(self) -> None:
        assert split_highlight("tučně") == ("tučně", None)

    def test_used_words_are_blanked(self) -> None:
        remaining, color = split_highlight("zelené podbarvení")
        assert color == Color.GREEN
        assert remaining.strip() == ""

    def test_next_word_wins_over_previous(self) -> None:
        _, color = split_highlight("červené podbarvení modré")
        assert color == Color.BLUE


class TestCzechDate:
    def test_date_only(self) -> None:
        assert parse_czech_date("5.6.2025", PRAGUE) == datetime(2025, 6, 5, tzinfo=PRAGUE)

    def test_date_and_time(self) -> None:
        assert parse_czech_date("5. 6. 2025 7:05", PRAGUE) == datetime(2025, 6, 5, 7, 5, tzinfo=PRAGUE)

    def test_result_is_aware(self) -> None:
        assert parse_czech_date("1.1.2030", PRAGUE).tzinfo is PRAGUE

    def test_no_date(self) -> None:
        assert parse_czech_date("zítra", PRAGUE) is None

    def test_impossible_date(self) -> None:
        assert parse_czech_date("30. 2. 2025", PRAGUE) is None
