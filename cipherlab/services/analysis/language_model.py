from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class LanguageModel:
    """
    Read-only English reference data shared by the scorer and all engines.

    Attributes:
        letter_frequencies: Lowercase letter -> relative frequency (0-1)
        common_words: Lowercase words counted as evidence of plaintext
        common_patterns: Lowercase substrings (with their spacing) that
            are typical of English prose
    """

    letter_frequencies: Mapping[str, float]
    common_words: frozenset[str]
    common_patterns: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        # Freeze the mapping so instances can be shared across threads
        object.__setattr__(
            self, "letter_frequencies", MappingProxyType(dict(self.letter_frequencies))
        )
        object.__setattr__(self, "common_words", frozenset(self.common_words))
        object.__setattr__(self, "common_patterns", tuple(self.common_patterns))


ENGLISH_FREQUENCIES: dict[str, float] = {
    "e": 0.1202, "t": 0.0910, "a": 0.0812, "o": 0.0768, "i": 0.0731,
    "n": 0.0695, "s": 0.0628, "r": 0.0602, "h": 0.0592, "d": 0.0432,
    "l": 0.0398, "u": 0.0288, "c": 0.0271, "m": 0.0261, "f": 0.0230,
    "y": 0.0211, "w": 0.0209, "g": 0.0203, "p": 0.0182, "b": 0.0149,
    "v": 0.0111, "k": 0.0069, "x": 0.0017, "q": 0.0011, "j": 0.0010,
    "z": 0.0007,
}

COMMON_WORDS: tuple[str, ...] = (
    "the", "be", "to", "of", "and", "a", "in", "that", "have", "i",
    "it", "for", "not", "on", "with", "he", "as", "you", "do", "at",
    "this", "but", "his", "by", "from", "they", "we", "say", "her", "she",
    "or", "an", "will", "my", "one", "all", "would", "there", "their", "what",
    "so", "up", "out", "if", "about", "who", "get", "which", "go", "me",
    "when", "make", "can", "like", "time", "no", "just", "him", "know", "take",
    "people", "into", "year", "your", "good", "some", "could", "them", "see", "other",
    "than", "then", "now", "look", "only", "come", "its", "over", "think", "also",
)

COMMON_PATTERNS: tuple[str, ...] = (
    "ing ", "ion ", "the ", " the ", " of ", " and ", " to ", " a ",
    "tion", "ment", "that", "with", "have", "this", "from", "they",
    "would", "there", "their", "what", "about", "which", "when", "make",
    "please", "thank", "best", "regards", "dear", "hello", "sincerely",
    "first", "second", "third", "between", "after", "before", "during",
    "should", "could", "might", "every", "never", "always", "sometimes",
)

ENGLISH = LanguageModel(
    letter_frequencies=ENGLISH_FREQUENCIES,
    common_words=frozenset(COMMON_WORDS),
    common_patterns=COMMON_PATTERNS,
)
