import logging
import re
from dataclasses import dataclass
from typing import ClassVar

from cipherlab.models.schemas import CipherType, MethodPrediction
from cipherlab.services.analysis.statistics import StatisticalAnalyzer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectionThresholds:
    """Structural thresholds and the confidence attached to each rule."""

    # Entropy thresholds (bits per raw character)
    entropy_low: float = 3.0
    entropy_high: float = 4.0

    binary_confidence: float = 0.9
    caesar_confidence: float = 0.7
    vigenere_confidence: float = 0.6
    numeric_confidence: float = 0.8
    substitution_confidence: float = 0.5
    enigma_confidence: float = 0.4


SIMPLE_SUBSTITUTION = "Simple Substitution"


class CipherDetector:
    """
    Rule-based guess at the cipher behind a ciphertext.

    Each rule looks at the raw structure of the text (alphabet size,
    character classes, entropy). Several rules may fire; predictions are
    used as weights by the analyzer, never as a filter.
    """

    THRESHOLDS: ClassVar[DetectionThresholds] = DetectionThresholds()

    _UPPERCASE_ONLY = re.compile(r"[A-Z]+")
    _NUMBERS_ONLY = re.compile(r"[0-9]+(\s+[0-9]+)*")

    def __init__(self, statistics: StatisticalAnalyzer | None = None):
        self.statistics = statistics or StatisticalAnalyzer()

    def detect(self, ciphertext: str) -> list[MethodPrediction]:
        """
        Propose likely cipher methods.

        Args:
            ciphertext: Raw ciphertext

        Returns:
            Predictions sorted by confidence, highest first (may be empty)
        """
        t = self.THRESHOLDS
        predictions: list[MethodPrediction] = []

        if len(set(ciphertext)) == 2:
            predictions.append(self._predict(CipherType.BACON, t.binary_confidence))

        if self._UPPERCASE_ONLY.fullmatch(ciphertext):
            predictions.append(self._predict(CipherType.CAESAR, t.caesar_confidence))
            predictions.append(self._predict(CipherType.VIGENERE, t.vigenere_confidence))

        if self._NUMBERS_ONLY.fullmatch(ciphertext):
            predictions.append(self._predict(CipherType.A1Z26, t.numeric_confidence))

        entropy = self.statistics.entropy(ciphertext)
        if ciphertext and entropy < t.entropy_low:
            predictions.append(
                MethodPrediction(method=SIMPLE_SUBSTITUTION, confidence=t.substitution_confidence)
            )
        if entropy > t.entropy_high:
            predictions.append(self._predict(CipherType.ENIGMA, t.enigma_confidence))

        predictions.sort(key=lambda p: p.confidence, reverse=True)
        logger.debug("Detected %s", [(p.method, p.confidence) for p in predictions])
        return predictions

    def confidence_map(self, ciphertext: str) -> dict[str, float]:
        """Method name -> confidence, keeping the highest value per method."""
        result: dict[str, float] = {}
        for prediction in self.detect(ciphertext):
            result.setdefault(prediction.method, prediction.confidence)
        return result

    @staticmethod
    def _predict(cipher_type: CipherType, confidence: float) -> MethodPrediction:
        return MethodPrediction(method=cipher_type.display_name, confidence=confidence)
