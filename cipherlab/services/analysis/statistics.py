import math
import string
from collections import Counter
from typing import ClassVar

from scipy import stats

from cipherlab.models.schemas import FrequencyData, RepeatedSequence, StatisticsProfile
from cipherlab.services.analysis.language_model import ENGLISH, LanguageModel


class StatisticalAnalyzer:
    """
    Statistical measurements used for cipher detection and key recovery.

    Computes:
    - Character frequencies
    - Index of Coincidence (IOC)
    - Shannon entropy over raw characters
    - Rank correlation of the letter frequency curve against English
    - Repeated n-grams and their distances (Kasiski examination)
    """

    ALPHABET: ClassVar[str] = string.ascii_uppercase

    def __init__(self, language: LanguageModel = ENGLISH):
        self.language = language

    def analyze(self, text: str, min_ngram: int = 3) -> StatisticsProfile:
        """
        Perform complete statistical analysis on text.

        Args:
            text: Raw ciphertext, any characters
            min_ngram: Length of repeated sequences to look for

        Returns:
            StatisticsProfile with all computed statistics
        """
        letters = self.letters_only(text)
        repeated = self.repeated_sequences(letters, min_ngram)

        return StatisticsProfile(
            length=len(text),
            letter_count=len(letters),
            unique_chars=len(set(text)),
            character_frequencies=self._character_frequencies(letters),
            entropy=self.entropy(text),
            index_of_coincidence=self.index_of_coincidence(letters),
            frequency_correlation=self.frequency_correlation(letters),
            repeated_sequences=repeated,
            kasiski_distances=self.kasiski_distances(repeated),
        )

    def letters_only(self, text: str) -> str:
        """Uppercase text with every non A-Z character removed."""
        return "".join(c for c in text.upper() if c in self.ALPHABET)

    def _character_frequencies(self, letters: str) -> list[FrequencyData]:
        """Calculate letter frequencies, most frequent first."""
        counter = Counter(letters)
        total = len(letters)

        result = [
            FrequencyData(
                character=char,
                count=counter.get(char, 0),
                frequency=counter.get(char, 0) / total if total > 0 else 0.0,
            )
            for char in self.ALPHABET
        ]

        result.sort(key=lambda x: x.frequency, reverse=True)
        return result

    def entropy(self, text: str) -> float:
        """
        Calculate Shannon entropy in bits per character.

        Every character counts, including spaces and digits.
        - Binary alphabets stay at or below 1 bit
        - English prose sits around 4 bits
        """
        if not text:
            return 0.0
        counts = list(Counter(text).values())
        return float(stats.entropy(counts, base=2))

    def index_of_coincidence(self, letters: str) -> float:
        """
        Calculate Index of Coincidence.

        IOC measures how likely two randomly chosen letters are the same.
        - English text: ~0.0667
        - Random text: ~0.0385 (1/26)
        """
        n = len(letters)
        if n <= 1:
            return 0.0

        counter = Counter(letters)
        numerator = sum(f * (f - 1) for f in counter.values())
        return numerator / (n * (n - 1))

    def frequency_correlation(self, letters: str) -> float | None:
        """
        Spearman correlation between observed and English letter frequencies.

        Monoalphabetic ciphers keep the shape of the curve but move the
        letters, transpositions keep both.

        Returns:
            Correlation in [-1, 1], or None when the text has too few
            distinct letters for a rank correlation
        """
        counter = Counter(letters)
        if len(counter) < 2:
            return None

        observed = [counter.get(c, 0) for c in self.ALPHABET]
        expected = [
            self.language.letter_frequencies.get(c.lower(), 0.0) for c in self.ALPHABET
        ]
        correlation, _ = stats.spearmanr(observed, expected)
        if math.isnan(correlation):
            return None
        return float(correlation)

    def repeated_sequences(self, letters: str, length: int = 3) -> list[RepeatedSequence]:
        """
        Find n-grams of the given length that occur more than once.

        Only gaps of at least ``length`` are recorded, so overlapping
        runs such as ``AAAA`` do not produce spurious distances.

        Args:
            letters: Normalized text (uppercase letters only)
            length: N-gram length

        Returns:
            Repeated sequences in order of first occurrence
        """
        seen: dict[str, list[int]] = {}

        for i in range(len(letters) - length + 1):
            seen.setdefault(letters[i:i + length], []).append(i)

        repeated = []
        for seq, positions in seen.items():
            if len(positions) < 2:
                continue
            distances = [
                b - a for a, b in zip(positions, positions[1:]) if b - a >= length
            ]
            if distances:
                repeated.append(
                    RepeatedSequence(sequence=seq, positions=positions, distances=distances)
                )

        return repeated

    def kasiski_distances(self, repeated_sequences: list[RepeatedSequence]) -> list[int]:
        """
        Collect the distinct distances between repeated sequences.

        Key lengths of a periodic cipher divide most of these distances.
        """
        distances: set[int] = set()
        for seq in repeated_sequences:
            distances.update(seq.distances)
        return sorted(distances)

    def candidate_key_lengths(
        self,
        letters: str,
        max_key_length: int = 10,
        min_ngram: int = 3,
    ) -> list[int]:
        """
        Kasiski examination: every divisor 2..max_key_length of any repeat distance.

        Args:
            letters: Normalized ciphertext
            max_key_length: Largest key length to propose
            min_ngram: Length of repeated sequences to look for

        Returns:
            Sorted candidate key lengths (possibly empty)
        """
        distances = self.kasiski_distances(self.repeated_sequences(letters, min_ngram))
        return sorted({
            length
            for distance in distances
            for length in range(2, max_key_length + 1)
            if distance % length == 0
        })
