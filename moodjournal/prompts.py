import random

from moodjournal.themes import dominant_theme

DEFAULT_PROMPT = "What's on your mind today?"

# Follow-up prompts keyed by the dominant theme of the latest entry
CONTEXTUAL_PROMPTS = {
    "work": (
        "What brought you energy at work today?",
        "How did you find moments of calm during your workday?",
        "What's one thing you learned about yourself through work today?",
        "How did you handle challenges at work today?",
    ),
    "stress": (
        "What helped you feel more grounded today?",
        "How did you show kindness to yourself during stressful moments?",
        "What would you tell a friend facing similar challenges?",
        "What small victory can you celebrate today?",
    ),
    "gratitude": (
        "What small moment brought you joy today?",
        "Who or what are you most grateful for right now?",
        "How did gratitude show up in your day?",
        "What made you smile today?",
    ),
    "creativity": (
        "What inspired you today?",
        "How did you express your creativity, even in small ways?",
        "What new ideas are bubbling up for you?",
        "Where did you find beauty today?",
    ),
    "relationships": (
        "How did you connect with others today?",
        "What did you learn about someone important to you?",
        "How did you show care for the people in your life?",
        "What conversation meant the most to you today?",
    ),
    "personal_growth": (
        "What did you discover about yourself today?",
        "How did you step outside your comfort zone?",
        "What are you becoming more aware of lately?",
        "What pattern are you noticing in your thoughts or behavior?",
    ),
}

DEFAULT_PROMPTS = (
    "How are you feeling right now, and what's behind that feeling?",
    "What's been on your mind lately that you haven't fully explored?",
    "What would you like to let go of today?",
    "What are you most curious about right now?",
    "What deserves your attention today?",
)

REFLECTION_PROMPTS = (
    "How do you feel reading this entry now?",
    "What has changed since you wrote this?",
    "What would you tell the person who wrote this?",
    "What patterns do you notice in your growth?",
    "How might you approach this situation differently now?",
    "What wisdom have you gained since writing this?",
    "How has your perspective evolved?",
    "What surprises you about this past version of yourself?",
    "What would you want to remember from this moment?",
    "How does this entry make you feel about your journey?",
)


def prompts_for(themes) -> tuple:
    """The prompt pool the next prompt is drawn from."""
    return CONTEXTUAL_PROMPTS.get(dominant_theme(themes), DEFAULT_PROMPTS)


def next_prompt(themes, rng=None) -> str:
    """Pick a follow-up prompt seeded by the dominant theme in ``themes``.

    ``rng`` is anything with a ``choice`` method; pass a seeded
    ``random.Random`` to make the pick reproducible.
    """
    rng = rng or random
    return rng.choice(prompts_for(themes))


def reflection_prompt(rng=None) -> str:
    return (rng or random).choice(REFLECTION_PROMPTS)
