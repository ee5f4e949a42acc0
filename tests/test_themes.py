import pytest

from moodjournal.lexicon import Lexicon
from moodjournal.themes import dominant_theme, extract_themes


def test_meeting_with_boss_is_work():
    assert "work" in extract_themes("I had a great meeting with my boss")
    assert extract_themes("I had a great meeting with my boss") == ["work"]


@pytest.mark.parametrize("text", ["", "The quick brown fox", "   "])
def test_no_match_is_general(text):
    assert extract_themes(text) == ["general"]


def test_declaration_order_not_alphabetical():
    text = "Grateful for my family after a stressful week at work"
    assert extract_themes(text) == ["work", "family", "stress", "gratitude"]


def test_case_insensitive():
    assert extract_themes("WORK WORK WORK") == ["work"]


def test_substring_keywords():
    # "walk" inside "walking", "learn" inside "learned"
    assert extract_themes("Walking home I learned a lot") == ["personal_growth", "nature"]


def test_injected_keyword_table():
    lexicon = Lexicon(
        categories=(),
        high_intensifiers=(),
        low_intensifiers=(),
        negations=(),
        positive_phrases=(),
        negative_phrases=(),
        theme_keywords={"cooking": ("recipe", "bake")},
    )
    assert extract_themes("Tried a new bread recipe", lexicon) == ["cooking"]
    assert extract_themes("Went to work", lexicon) == ["general"]


def test_dominant_theme():
    assert dominant_theme(["stress", "work"]) == "stress"
    assert dominant_theme([]) == "general"
