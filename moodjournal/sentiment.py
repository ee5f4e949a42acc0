import re

from moodjournal.lexicon import DEFAULT_LEXICON

_NON_WORD = re.compile(r"[^\w\s']")
_UPPERCASE = re.compile(r"[A-Z]")

NEGATION_WINDOW = 3
INTENSIFIER_WINDOW = 2
LONG_TEXT_TOKENS = 20
LONG_TEXT_BOOST = 1.1
NEUTRAL_LONG_TEXT_SCORE = 0.05


def tokenize(text: str) -> list:
    """Lowercase, drop punctuation other than apostrophes, split on whitespace."""
    return _NON_WORD.sub(" ", text.lower()).split()


def _partial_match(token: str, word: str, min_length: int) -> bool:
    if token == word:
        return True
    if min(len(token), len(word)) < min_length:
        return False
    return word in token or token in word


def category_weight(token: str, lexicon=DEFAULT_LEXICON):
    """Weight of the first category matching ``token``, or None."""
    for category in lexicon.categories:
        for word in category.words:
            if _partial_match(token, word, lexicon.min_partial_length):
                return category.weight
    return None


def _is_negated(tokens, i, lexicon) -> bool:
    for j in range(max(0, i - NEGATION_WINDOW), i):
        if any(neg in tokens[j] for neg in lexicon.negations):
            return True
    return False


def _intensifier(tokens, i, lexicon) -> float:
    for j in range(max(0, i - INTENSIFIER_WINDOW), i):
        candidates = [tokens[j]]
        if j + 1 < i:
            # two-word intensifiers such as "kind of"
            candidates.append(tokens[j] + " " + tokens[j + 1])
        for candidate in candidates:
            if candidate in lexicon.high_intensifiers:
                return lexicon.high_multiplier
            if candidate in lexicon.low_intensifiers:
                return lexicon.low_multiplier
    return 1.0


def _phrase_score(lowered: str, lexicon):
    score, matches = 0.0, 0
    for phrase in lexicon.positive_phrases:
        if phrase in lowered:
            score += lexicon.phrase_weight
            matches += 1
    for phrase in lexicon.negative_phrases:
        if phrase in lowered:
            score -= lexicon.phrase_weight
            matches += 1
    return score, matches


def analyze_sentiment(text: str, lexicon=DEFAULT_LEXICON) -> float:
    """
    Score the emotional valence of ``text`` in [-1, 1].

    Contextual phrases are matched against the raw lowercased text, then
    every token is looked up in the weighted lexicon with negation (previous
    three tokens) and intensifiers (previous two tokens) applied. The total
    is scaled by sentiment-word density and clamped.
    """
    if not text or not text.strip():
        return 0.0

    lowered = text.lower()
    tokens = tokenize(text)
    total, sentiment_words = _phrase_score(lowered, lexicon)

    for i, token in enumerate(tokens):
        weight = category_weight(token, lexicon)
        if weight is None:
            continue
        sentiment_words += 1
        contribution = weight * _intensifier(tokens, i, lexicon)
        if _is_negated(tokens, i, lexicon):
            contribution = -contribution
        total += contribution

    if sentiment_words == 0:
        # no lexicon hits, fall back to punctuation and shouting
        if text.count("!") >= 2:
            total += 0.1
        if len(text) > 10 and len(_UPPERCASE.findall(text)) / len(text) > 0.3:
            total += 0.05

    if sentiment_words > 0:
        total *= 1 + sentiment_words / max(len(tokens), 1)
    elif len(tokens) > LONG_TEXT_TOKENS and "why" not in lowered and "what" not in lowered:
        total = NEUTRAL_LONG_TEXT_SCORE

    if len(tokens) > LONG_TEXT_TOKENS:
        total *= LONG_TEXT_BOOST

    return max(-1.0, min(1.0, total))


def sentiment_label(score: float) -> str:
    if score > 0.3:
        return "very_positive"
    if score > 0.1:
        return "positive"
    if score > -0.1:
        return "neutral"
    if score > -0.3:
        return "challenging"
    return "very_challenging"
