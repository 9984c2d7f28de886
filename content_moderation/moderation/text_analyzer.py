"""
Text-based content analysis for media titles and descriptions.

Uses two strategies:
1. Keyword scoring (horror, violence, adult) - primary text signal
2. Word-bounded pattern scoring over all six categories - fallback
   simulation used when no stronger signal exists

Also provides colour-based horror scoring from a provider's dominant
colour palette.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from content_moderation.moderation.keywords import DEFAULT_CLASSIFIER_CONFIG, ClassifierConfig
from content_moderation.moderation.schema import Category, Detection


@dataclass
class TextAnalysis:
    """Result of keyword scoring."""

    horror: Detection = field(default_factory=Detection)
    violence: Detection = field(default_factory=Detection)
    adult: Detection = field(default_factory=Detection)


def combine_text(title: Optional[str], description: Optional[str] = None) -> str:
    """Case-fold title and description into one searchable string."""
    return f"{title or ''} {description or ''}".lower()


class TextAnalyzer:
    """
    Keyword and pattern scorer.

    Deterministic: identical text always yields identical detections.
    """

    def __init__(self, classifier_config: Optional[ClassifierConfig] = None):
        """
        Initialize text analyzer.

        Args:
            classifier_config: Keyword tables and thresholds
                               (defaults to DEFAULT_CLASSIFIER_CONFIG)
        """
        self.config = classifier_config or DEFAULT_CLASSIFIER_CONFIG
        self._compile_patterns()

    def _compile_patterns(self):
        """Compile adult and per-category regexes."""
        # Word-bounded without \b so terms like "18+" still work
        adult_terms = '|'.join(re.escape(kw) for kw in self.config.adult_keywords)
        self.adult_regex = re.compile(rf'(?<!\w)(?:{adult_terms})(?!\w)', re.IGNORECASE)

        # One regex per term so confidence counts terms, not surface forms
        self.pattern_regexes = {
            category: [re.compile(rf'\b(?:{term})\b', re.IGNORECASE) for term in terms]
            for category, terms in self.config.pattern_terms
        }

    def _score_keywords(self, text: str, keywords: Iterable[str]) -> Detection:
        # Each list entry counts once, however often it appears
        matches = [kw for kw in keywords if kw in text]
        if not matches:
            return Detection()

        confidence = min(len(matches) * self.config.keyword_weight, self.config.keyword_max_confidence)
        return Detection(
            detected=confidence >= self.config.text_detection_threshold,
            confidence=confidence,
            matched_keywords=matches,
            source="text",
        )

    def analyze_text(self, title: Optional[str], description: Optional[str] = None) -> TextAnalysis:
        """
        Score title and description against the horror, violence and adult lists.

        Horror and violence scale with the number of distinct keywords
        matched. Any adult keyword gives a flat confidence regardless of
        how many matched.

        Args:
            title: Media title
            description: Media description (may be empty or None)

        Returns:
            TextAnalysis with one Detection per keyword category
        """
        text = combine_text(title, description)

        adult = Detection()
        adult_matches = sorted({m.group(0).lower() for m in self.adult_regex.finditer(text)})
        if adult_matches:
            adult = Detection(
                detected=True,
                confidence=self.config.adult_confidence,
                matched_keywords=adult_matches,
                source="text",
            )

        return TextAnalysis(
            horror=self._score_keywords(text, self.config.horror_keywords),
            violence=self._score_keywords(text, self.config.violence_keywords),
            adult=adult,
        )

    def analyze_patterns(
        self,
        title: Optional[str],
        description: Optional[str] = None,
    ) -> dict[Category, Detection]:
        """
        Pattern-based scoring over all six categories.

        confidence = min(0.6 + 0.1 * pattern terms matched, 0.95)

        Args:
            title: Media title
            description: Media description

        Returns:
            Dict mapping every Category -> Detection
        """
        text = combine_text(title, description)
        results = {category: Detection() for category in Category}

        for category, regexes in self.pattern_regexes.items():
            term_hits = [regex.findall(text) for regex in regexes]
            term_hits = [hits for hits in term_hits if hits]
            if not term_hits:
                continue

            matched = sorted({word for hits in term_hits for word in hits})
            confidence = min(
                self.config.pattern_base_confidence + len(term_hits) * self.config.pattern_weight,
                self.config.pattern_max_confidence,
            )
            threshold = self.config.thresholds.for_category(category)
            results[category] = Detection(
                detected=confidence >= threshold or confidence >= self.config.pattern_detection_floor,
                confidence=confidence,
                matched_keywords=matched,
                source="pattern",
            )

        return results

    def analyze_colors_for_horror(self, colors: Optional[Iterable]) -> Detection:
        """
        Score a dominant colour palette for horror.

        Dark, red-heavy palettes suggest horror content:
        score = 0.6 * dark_ratio + 0.4 * blood_red_ratio

        Args:
            colors: Iterable of (hex_color, weight) pairs, e.g. [("#0a0a0a", 42.5)]

        Returns:
            Horror Detection (empty if the palette is missing or unusable)
        """
        if not colors:
            return Detection()

        dark_weight = 0.0
        red_weight = 0.0
        total_weight = 0.0

        for entry in colors:
            try:
                color, weight = entry[0], float(entry[1])
                hex_value = str(color).lstrip('#')
                r = int(hex_value[0:2], 16)
                g = int(hex_value[2:4], 16)
                b = int(hex_value[4:6], 16)
            except (TypeError, ValueError, IndexError):
                continue

            total_weight += weight

            if (r + g + b) / 3 < 60:
                dark_weight += weight

            if r > 150 and g < 80 and b < 80:
                red_weight += weight

        if total_weight <= 0:
            return Detection()

        score = (dark_weight / total_weight) * 0.6 + (red_weight / total_weight) * 0.4
        confidence = min(score, 1.0)

        return Detection(
            detected=confidence >= self.config.thresholds.horror,
            confidence=confidence,
            source="color",
        )
