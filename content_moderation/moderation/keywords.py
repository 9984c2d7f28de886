"""
Keyword tables and thresholds for content moderation.

All tables live in an immutable ClassifierConfig that is built once and
passed to the analyzers, so nothing here is mutated at runtime.
"""

from dataclasses import dataclass, field

from content_moderation.moderation.schema import Category


@dataclass(frozen=True)
class ModerationThresholds:
    """Per-category confidence needed to flag a detection."""

    nudity: float = 0.6
    violence: float = 0.5
    horror: float = 0.5
    gore: float = 0.4  # stricter
    drugs: float = 0.5
    weapons: float = 0.4

    def for_category(self, category: Category) -> float:
        return getattr(self, category.value)


# Horror/scary content in titles and descriptions (substring match)
HORROR_KEYWORDS = (
    'horror', 'scary', 'fear', 'terror', 'creepy', 'disturbing',
    'nightmare', 'demon', 'ghost', 'zombie', 'blood', 'dark',
    'sinister', 'evil', 'death', 'skull', 'monster', 'mutant',
    # Phrases
    'jump scare', 'haunted house', 'serial killer',
)

# Violence (substring match)
VIOLENCE_KEYWORDS = (
    'violence', 'fight', 'attack', 'weapon', 'gun', 'knife',
    'blood', 'injury', 'wound', 'combat', 'war', 'explosion',
    'shootout', 'brawl', 'massacre',
)

# Adult/NSFW (word-bounded, any hit is enough)
ADULT_KEYWORDS = (
    'nsfw', '18+', 'adult', 'explicit', 'xxx', 'nude', 'naked', 'sex',
    'porn', 'nudity', 'erotic',
)

# Fallback pattern scorer: word-bounded terms per category. Gore stems also
# match inflections ("dismembered", "mutilation"); each term counts once.
PATTERN_TERMS = (
    (Category.NUDITY, (
        r'nude', r'naked', r'nsfw', r'xxx', r'porn', r'explicit',
        r'sexy', r'bikini', r'underwear', r'lingerie',
    )),
    (Category.VIOLENCE, (
        r'fight', r'kill', r'murder', r'attack', r'assault',
        r'blood', r'war', r'battle', r'shoot', r'stab',
    )),
    (Category.HORROR, (
        r'horror', r'scary', r'terror', r'creepy', r'ghost', r'demon',
        r'zombie', r'haunted', r'nightmare', r'dead', r'death',
    )),
    (Category.GORE, (
        r'gore', r'gory', r'dismember\w*', r'mutilat\w*',
        r'decapitat\w*', r'torture', r'brutal',
    )),
    (Category.DRUGS, (
        r'drug', r'cocaine', r'heroin', r'weed', r'marijuana',
        r'meth', r'pill', r'inject',
    )),
    (Category.WEAPONS, (
        r'gun', r'rifle', r'pistol', r'sword', r'knife',
        r'weapon', r'bomb', r'explosive',
    )),
)

# Provider label name substrings -> category (a label may hit several)
PROVIDER_LABEL_RULES = (
    (Category.NUDITY, ('nudity', 'explicit')),
    (Category.VIOLENCE, ('violence', 'graphic')),
    (Category.GORE, ('gore', 'graphic_violence')),
    (Category.DRUGS, ('drug', 'tobacco')),
    (Category.WEAPONS, ('weapon', 'gun', 'knife')),
)

# Moderation kinds whose labels we trust
TRUSTED_PROVIDER_KINDS = ('aws_rek', 'google_video_intelligence')


@dataclass(frozen=True)
class ClassifierConfig:
    """Immutable tables and constants used by the classifier."""

    thresholds: ModerationThresholds = field(default_factory=ModerationThresholds)

    horror_keywords: tuple[str, ...] = HORROR_KEYWORDS
    violence_keywords: tuple[str, ...] = VIOLENCE_KEYWORDS
    adult_keywords: tuple[str, ...] = ADULT_KEYWORDS
    pattern_terms: tuple[tuple[Category, tuple[str, ...]], ...] = PATTERN_TERMS

    provider_label_rules: tuple = PROVIDER_LABEL_RULES
    trusted_provider_kinds: tuple[str, ...] = TRUSTED_PROVIDER_KINDS

    # Keyword scorer (horror, violence)
    keyword_weight: float = 0.2
    keyword_max_confidence: float = 0.8
    text_detection_threshold: float = 0.4

    # Any adult keyword yields this confidence
    adult_confidence: float = 0.9

    # Pattern scorer
    pattern_base_confidence: float = 0.6
    pattern_weight: float = 0.1
    pattern_max_confidence: float = 0.95
    pattern_detection_floor: float = 0.5


DEFAULT_CLASSIFIER_CONFIG = ClassifierConfig()
