from moodjournal.lexicon import DEFAULT_LEXICON, GENERAL_THEME


# Theme extraction
def extract_themes(text: str, lexicon=DEFAULT_LEXICON) -> list:
    """Themes whose keywords appear in ``text``, in declaration order.

    The first theme is treated as the dominant one. Text matching nothing
    is tagged ``general`` so every entry carries at least one theme.
    """
    text_lower = (text or "").lower()
    found_themes = [
        theme for theme, keywords in lexicon.theme_keywords.items()
        if any(keyword in text_lower for keyword in keywords)
    ]
    return found_themes or [GENERAL_THEME]


def dominant_theme(themes) -> str:
    return themes[0] if themes else GENERAL_THEME
