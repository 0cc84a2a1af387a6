import re
from collections import Counter
from typing import ClassVar

from cipherlab.services.analysis.language_model import ENGLISH, LanguageModel
from cipherlab.services.analysis.statistics import StatisticalAnalyzer


class TextScorer:
    """
    Plaintext likelihood scores.

    Three independent scales:
    - quick_score: 0-1, used inside brute-force searches with a 0.5 cutoff
    - composite_score: 0-1, weighted letter/word/pattern signal
    - language_score: unbounded, used to rank candidates across ciphers
    """

    # Top ten English letters used by the quick score
    QUICK_FREQUENCIES: ClassVar[dict[str, float]] = {
        "E": 0.13, "T": 0.091, "A": 0.082, "O": 0.075, "I": 0.07,
        "N": 0.067, "S": 0.063, "H": 0.061, "R": 0.06, "D": 0.043,
    }

    # Letter frequencies in percent used by the composite score
    COMPOSITE_FREQUENCIES: ClassVar[dict[str, float]] = {
        "e": 12.7, "t": 9.1, "a": 8.2, "o": 7.5, "i": 7.0, "n": 6.7,
        "s": 6.3, "h": 6.1, "r": 6.0, "d": 4.3, "l": 4.0, "c": 2.8,
        "u": 2.8, "m": 2.4, "w": 2.4, "f": 2.2, "g": 2.0, "y": 2.0,
        "p": 1.9, "b": 1.5, "v": 1.0, "k": 0.8, "j": 0.15, "x": 0.15,
        "q": 0.10, "z": 0.07,
    }

    COMPOSITE_MARKERS: ClassVar[tuple[str, ...]] = ("the", "and", "ing", "ion", "ed", "s")

    LETTER_WEIGHT: ClassVar[float] = 0.4
    WORD_WEIGHT: ClassVar[float] = 0.4
    PATTERN_WEIGHT: ClassVar[float] = 0.2

    _REPEAT_RUN = re.compile(r"(.)\1+")

    def __init__(self, language: LanguageModel = ENGLISH):
        self.language = language
        self._statistics = StatisticalAnalyzer(language)

    # ------------------------------------------------------------------
    # Quick score
    # ------------------------------------------------------------------

    def quick_score(self, text: str) -> float:
        """
        Average closeness of the ten most common English letters.

        Observed frequency is count / len(text), so spaces and
        punctuation dilute it.

        Returns:
            Score in [0, 1]; 0.0 for empty text
        """
        if not text:
            return 0.0

        counts = Counter(text.upper())
        total = len(text)
        closeness = [
            1 - abs(expected - counts.get(letter, 0) / total)
            for letter, expected in self.QUICK_FREQUENCIES.items()
        ]
        return sum(closeness) / len(closeness)

    # ------------------------------------------------------------------
    # Composite score
    # ------------------------------------------------------------------

    def composite_score(self, text: str) -> float:
        """
        Weighted blend of letter frequency, marker words and repetition.

        Returns:
            0.4 * letter + 0.4 * word + 0.2 * pattern, 0.0 for empty text
        """
        if not text:
            return 0.0

        return (
            self.LETTER_WEIGHT * self.letter_frequency_score(text)
            + self.WORD_WEIGHT * self.word_match_score(text)
            + self.PATTERN_WEIGHT * self.pattern_score(text)
        )

    def letter_frequency_score(self, text: str) -> float:
        """Agreement of the lowercase letter percentages with English, over 26."""
        letters = [c for c in text.lower() if "a" <= c <= "z"]
        if not letters:
            return 0.0

        counts = Counter(letters)
        total = len(letters)
        score = sum(
            1 - abs(count / total * 100 - self.COMPOSITE_FREQUENCIES[letter]) / 100
            for letter, count in counts.items()
        )
        return score / 26

    def word_match_score(self, text: str) -> float:
        """Fraction of marker substrings present anywhere in the text."""
        lowered = text.lower()
        found = sum(1 for marker in self.COMPOSITE_MARKERS if marker in lowered)
        return found / len(self.COMPOSITE_MARKERS)

    def pattern_score(self, text: str) -> float:
        """
        Penalty for runs of the same character.

        Returns:
            1.0 while repeated runs cover at most 20% of the text, then
            decreasing linearly
        """
        if not text:
            return 0.0

        repeated = sum(len(m.group(0)) for m in self._REPEAT_RUN.finditer(text))
        ratio = repeated / len(text)
        if ratio <= 0.2:
            return 1.0
        return 1 - (ratio - 0.2)

    # ------------------------------------------------------------------
    # Language score
    # ------------------------------------------------------------------

    def language_score(self, text: str) -> float:
        """
        Cross-cipher ranking score.

        2 per common word, plus frequency correlation, plus 1 per common
        pattern found, minus 2 per non-printable character.
        """
        if not text:
            return 0.0

        lowered = text.lower()
        word_hits = sum(1 for word in lowered.split() if word in self.language.common_words)
        pattern_hits = sum(1 for pattern in self.language.common_patterns if pattern in lowered)
        unprintable = sum(1 for c in text if ord(c) < 32 or ord(c) > 126)

        return (
            word_hits * 2
            + self.frequency_correlation(lowered)
            + pattern_hits
            - unprintable * 2
        )

    def frequency_correlation(self, text: str) -> float:
        """
        Mean closeness of character frequencies to English.

        Averages 1 - |f_text - f_english| over every character seen in
        either the text or the reference table.
        """
        if not text:
            return 0.0

        lowered = text.lower()
        counts = Counter(lowered)
        total = len(lowered)
        reference = self.language.letter_frequencies

        keys = set(counts) | set(reference)
        closeness = sum(
            1 - abs(counts.get(k, 0) / total - reference.get(k, 0.0)) for k in keys
        )
        return closeness / len(keys)

    def entropy(self, text: str) -> float:
        """Shannon entropy of the raw characters, in bits."""
        return self._statistics.entropy(text)


DEFAULT_SCORER = TextScorer()
