"""
Descriptive analysis attached to ranked candidates.

Nothing here affects ranking; it helps a reader judge a candidate.
"""

import re
from typing import ClassVar

from cipherlab.models.schemas import CandidateAnalysis, ContextMatch, ReadabilityReport


class CandidateInsights:
    """Readability metrics and topic detection for candidate plaintexts."""

    CONTEXTS: ClassVar[dict[str, tuple[str, ...]]] = {
        "Military": ("attack", "defense", "troops", "enemy", "command"),
        "Diplomatic": ("treaty", "agreement", "negotiate", "alliance"),
        "Personal": ("love", "friend", "family", "home", "meet"),
        "Business": ("contract", "money", "deal", "price", "market"),
    }

    _SENTENCE_END = re.compile(r"[.!?]+")

    def readability(self, text: str) -> ReadabilityReport:
        """
        Words per sentence scaled by inverse word length.

        score = (words / sentences) * (1 / avg_word_length) * 100, or 0
        when the text has no words.
        """
        words = text.split()
        sentences = [s for s in self._SENTENCE_END.split(text) if s]

        if not words:
            return ReadabilityReport(
                score=0.0, avg_word_length=0.0, sentence_count=len(sentences), word_count=0
            )

        avg_word_length = sum(len(w) for w in words) / len(words)
        score = (len(words) / max(len(sentences), 1)) * (1 / avg_word_length) * 100
        return ReadabilityReport(
            score=score,
            avg_word_length=avg_word_length,
            sentence_count=len(sentences),
            word_count=len(words),
        )

    def contexts(self, text: str) -> list[ContextMatch]:
        """Categories with at least one keyword in the text, most matches first."""
        lowered = text.lower()
        matches = [
            ContextMatch(
                category=category,
                matches=sum(1 for keyword in keywords if keyword in lowered),
            )
            for category, keywords in self.CONTEXTS.items()
        ]
        found = [m for m in matches if m.matches > 0]
        found.sort(key=lambda m: m.matches, reverse=True)
        return found

    def analyze(self, text: str) -> CandidateAnalysis:
        return CandidateAnalysis(readability=self.readability(text), contexts=self.contexts(text))
