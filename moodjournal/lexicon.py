"""
Static word lists used by the sentiment scorer and the theme extractor.

Everything here is read-only. ``DEFAULT_LEXICON`` is built once at import time
and passed (or defaulted) into the scoring functions, so a test can build its
own ``Lexicon`` with a handful of words instead of patching module globals.
"""
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class SentimentCategory:
    name: str
    words: tuple
    weight: float


@dataclass(frozen=True)
class Lexicon:
    # Enumeration order matters: the first category a token matches wins.
    categories: tuple
    high_intensifiers: tuple
    low_intensifiers: tuple
    negations: tuple
    positive_phrases: tuple
    negative_phrases: tuple
    theme_keywords: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    # Tokens shorter than this only match a lexicon word exactly.
    min_partial_length: int = 3
    high_multiplier: float = 1.5
    low_multiplier: float = 0.7
    phrase_weight: float = 0.4


GENERAL_THEME = "general"

SENTIMENT_CATEGORIES = (
    SentimentCategory(
        "strong_positive",
        ("amazing", "incredible", "fantastic", "wonderful", "excellent", "outstanding",
         "brilliant", "spectacular", "magnificent", "extraordinary", "thrilled", "ecstatic",
         "overjoyed", "elated", "euphoric", "blissful", "delighted", "grateful", "blessed",
         "thankful", "birthday", "celebrate", "celebration", "special", "meaningful",
         "loved ones", "family", "friends"),
        0.3,
    ),
    SentimentCategory(
        "moderate_positive",
        ("good", "great", "nice", "happy", "glad", "pleased", "content", "satisfied",
         "peaceful", "calm", "hopeful", "optimistic", "positive", "cheerful", "joyful",
         "excited", "energized", "accomplished", "proud", "confident", "love", "like",
         "enjoy", "fun", "success", "beautiful", "perfect"),
        0.2,
    ),
    SentimentCategory(
        "mild_positive",
        ("okay", "fine", "alright", "decent", "fair", "pleasant", "comfortable", "relaxed",
         "stable", "better", "improving", "improvement", "progress"),
        0.1,
    ),
    SentimentCategory(
        "mild_negative",
        ("tired", "busy", "concerned", "worried", "uncertain", "confused", "disappointed",
         "bothered", "annoyed", "uncomfortable", "difficult", "challeng", "hard", "tough",
         "embarrass"),
        -0.1,
    ),
    SentimentCategory(
        "moderate_negative",
        ("sad", "upset", "frustrated", "angry", "stressed", "anxious", "overwhelmed",
         "discouraged", "lonely", "hurt", "bad", "awful", "terrible", "horrible", "unhappy",
         "depress", "miserable", "hate", "dislike", "pain", "suffer", "struggle"),
        -0.2,
    ),
    SentimentCategory(
        "strong_negative",
        ("devastated", "heartbroken", "hopeless", "desperate", "suicidal", "worthless",
         "useless", "failure", "disaster", "nightmare", "agony", "torment", "anguish",
         "despair", "rage", "fury", "disgusted", "repulsed", "disgust", "revolt"),
        -0.3,
    ),
)

HIGH_INTENSIFIERS = (
    "very", "extremely", "incredibly", "absolutely", "completely", "totally", "really",
    "so", "quite", "truly", "deeply", "immensely", "utterly", "thoroughly",
)

LOW_INTENSIFIERS = (
    "somewhat", "slightly", "a bit", "kind of", "sort of", "rather", "fairly", "pretty",
    "moderately",
)

NEGATIONS = (
    "not", "no", "never", "none", "nobody", "nothing", "neither", "nowhere", "hardly",
    "scarcely", "barely", "n't", "don't", "won't", "can't", "shouldn't", "wouldn't",
    "couldn't", "isn't", "aren't", "wasn't", "weren't",
)

POSITIVE_PHRASES = (
    "best day", "so happy", "really excited", "absolutely love", "incredibly grateful",
    "perfect day", "amazing time", "wonderful experience", "great day", "special day",
    "loved ones", "meaningful day", "celebrate with",
)

NEGATIVE_PHRASES = (
    "worst day", "so sad", "really upset", "absolutely hate", "completely overwhelmed",
    "terrible day", "awful time", "i wish", "horrible experience", "why am i",
    "what is wrong", "even if", "feel like dying", "want to die", "can't take it",
    "killing me", "wrong with me",
)

# Theme Categories, in declaration order
THEME_CATEGORIES = MappingProxyType({
    "work": ("work", "job", "office", "meeting", "project", "boss", "colleague", "deadline",
             "presentation", "career"),
    "family": ("family", "mom", "dad", "sister", "brother", "parents", "children", "kids",
               "relatives"),
    "health": ("health", "exercise", "sleep", "tired", "energy", "workout", "fitness",
               "medical", "doctor"),
    "relationships": ("friend", "relationship", "partner", "love", "dating", "marriage",
                      "social", "connection", "boyfriend", "girlfriend"),
    "stress": ("stress", "anxiety", "worried", "overwhelmed", "pressure", "tension", "nervous",
               "panic"),
    "gratitude": ("grateful", "thankful", "appreciate", "blessed", "fortunate", "lucky",
                  "abundance"),
    "creativity": ("creative", "art", "music", "writing", "ideas", "inspiration",
                   "imagination", "design"),
    "personal_growth": ("growth", "learn", "reflection", "insight", "understand", "wisdom",
                        "development"),
    "nature": ("nature", "outdoor", "walk", "trees", "sky", "weather", "garden", "animals"),
    "goals": ("goal", "achievement", "success", "progress", "plan", "future", "ambition",
              "dream"),
})

DEFAULT_LEXICON = Lexicon(
    categories=SENTIMENT_CATEGORIES,
    high_intensifiers=HIGH_INTENSIFIERS,
    low_intensifiers=LOW_INTENSIFIERS,
    negations=NEGATIONS,
    positive_phrases=POSITIVE_PHRASES,
    negative_phrases=NEGATIVE_PHRASES,
    theme_keywords=THEME_CATEGORIES,
)
