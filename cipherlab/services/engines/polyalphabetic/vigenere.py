import logging
from collections import Counter
from typing import ClassVar

from cipherlab.core.config import Settings
from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType
from cipherlab.services.analysis.statistics import StatisticalAnalyzer
from cipherlab.services.engines.base import CipherKey, CipherVariant, letters_only
from cipherlab.services.engines.monoalphabetic.caesar import shift_letter
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.scoring.scorer import TextScorer

logger = logging.getLogger(__name__)


@EngineRegistry.register
class VigenereCipher(CipherVariant):
    """
    Vigenère cipher variant.

    Each letter is shifted by the matching letter of a repeating keyword.
    The keyword advances only over letters, so spaces and punctuation
    pass through without consuming key letters.

    Key recovery uses Kasiski examination to propose key lengths, then a
    per-column frequency attack that assumes each column's most frequent
    letter decrypts to E. A short list of common keywords is tried too.
    """

    cipher_type = CipherType.VIGENERE
    cipher_family = CipherFamily.POLYALPHABETIC
    description = (
        "Shifts each letter by the corresponding letter of a repeating "
        "keyword, so one plaintext letter can encrypt to many ciphertext letters."
    )
    key_help = "A word containing only letters A-Z, repeated along the text. Example: LEMON"

    # Words whose presence marks a likely decryption
    MARKER_WORDS: ClassVar[tuple[str, ...]] = (
        "THE", "AND", "THAT", "HAVE", "FOR", "NOT", "WITH", "YOU",
    )

    # Common keywords tried in addition to the Kasiski results
    COMMON_KEYS: ClassVar[tuple[str, ...]] = (
        "KEY", "SECRET", "PASSWORD", "CIPHER", "CODE", "CRYPTO",
        "HIDDEN", "LOCK", "SAFE", "SECURE", "VIGENERE",
    )

    def __init__(
        self,
        scorer: TextScorer | None = None,
        settings: Settings | None = None,
        max_key_length: int | None = None,
        min_ngram: int | None = None,
    ):
        super().__init__(scorer, settings)
        self.max_key_length = max_key_length or self.settings.vigenere_max_key_length
        self.min_ngram = min_ngram or self.settings.vigenere_min_ngram
        self._statistics = StatisticalAnalyzer()

    def _parse_key(self, key: CipherKey, text: str) -> str:
        if isinstance(key, dict):
            key = key.get("keyword", key.get("key"))
        if not isinstance(key, str):
            raise TypeError("keyword must be a string")
        key = key.strip()
        if not key or not (key.isascii() and key.isalpha()):
            raise ValueError("keyword must be one or more letters A-Z")
        return key.upper()

    def format_key(self, key: CipherKey) -> str:
        return self._parse_key(key, "")

    def _encrypt(self, text: str, key: str) -> str:
        return self._apply(text, key, 1)

    def _decrypt(self, text: str, key: str) -> str:
        return self._apply(text, key, -1)

    def _apply(self, text: str, key: str, direction: int) -> str:
        shifts = [ord(k) - 65 for k in key]
        result = []
        index = 0
        for char in text:
            if char.isascii() and char.isalpha():
                result.append(shift_letter(char, direction * shifts[index % len(shifts)]))
                index += 1
            else:
                result.append(char)
        return "".join(result)

    # ------------------------------------------------------------------
    # Key recovery
    # ------------------------------------------------------------------

    def find_possible_key_lengths(self, text: str) -> list[int]:
        """
        Kasiski examination.

        Args:
            text: Ciphertext; non-letters are ignored

        Returns:
            Sorted key lengths in 2..max_key_length that divide a
            distance between repeated n-grams
        """
        lengths = self._statistics.candidate_key_lengths(
            letters_only(text), self.max_key_length, self.min_ngram
        )
        logger.debug("Kasiski key lengths: %s", lengths)
        return lengths

    def find_possible_keys(self, text: str, key_length: int) -> list[str]:
        """
        Per-column frequency attack for one key length.

        Each column's most frequent letter is assumed to be E. Ties go
        to the letter seen first; an empty column gets 'A'.
        """
        letters = letters_only(text)
        key = []
        for column_index in range(key_length):
            column = letters[column_index::key_length]
            if not column:
                key.append("A")
                continue
            most_frequent = Counter(column).most_common(1)[0][0]
            key.append(chr((ord(most_frequent) - ord("E")) % 26 + 65))
        return ["".join(key)]

    def marker_score(self, text: str) -> int:
        """Number of marker words appearing anywhere in the text."""
        upper = text.upper()
        return sum(1 for word in self.MARKER_WORDS if word in upper)

    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """Decrypt with Kasiski-derived and common keys, best marker score first."""
        keys: dict[str, None] = {}
        for length in self.find_possible_key_lengths(text):
            for key in self.find_possible_keys(text, length):
                keys.setdefault(key, None)
        for key in self.COMMON_KEYS:
            keys.setdefault(key, None)

        candidates = []
        for key in keys:
            plaintext = self._decrypt(text, key)
            candidates.append(self.candidate(plaintext, key, float(self.marker_score(plaintext))))

        candidates.sort(key=lambda c: c.score, reverse=True)
        return candidates
