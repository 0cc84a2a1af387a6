"""
Cipher analyzer - ranks candidate plaintexts across every cipher.

1. Detect likely methods from the ciphertext structure
2. Run every registered variant's brute-force search in worker threads
3. Weight each attempt's language score by its method confidence
4. Merge, sort and truncate, then label and annotate the survivors
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from cipherlab.core.config import Settings, get_settings
from cipherlab.core.exceptions import CiphertextTooLongError, InvalidCiphertextError
from cipherlab.models.schemas import CandidateResult, ConfidenceBucket
from cipherlab.services.detection.cipher_detector import CipherDetector
from cipherlab.services.engines.base import CipherVariant
from cipherlab.services.engines.monoalphabetic.caesar import CaesarCipher
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.pipeline.insights import CandidateInsights
from cipherlab.services.scoring.scorer import DEFAULT_SCORER, TextScorer

logger = logging.getLogger(__name__)


class CipherAnalyzer:
    """
    Orchestrates unsupervised decryption across registered variants.

    Variants are registered under a method name; that name is matched
    against detector predictions and reported on every candidate.
    """

    def __init__(
        self,
        scorer: TextScorer | None = None,
        detector: CipherDetector | None = None,
        settings: Settings | None = None,
    ):
        self.scorer = scorer or DEFAULT_SCORER
        self.detector = detector or CipherDetector()
        self.settings = settings or get_settings()
        self.insights = CandidateInsights()
        self._methods: dict[str, CipherVariant] = {}

    @classmethod
    def with_all_ciphers(cls, settings: Settings | None = None) -> "CipherAnalyzer":
        """Analyzer with every registered variant under its display name."""
        analyzer = cls(settings=settings)
        registry = EngineRegistry()
        for engine in registry.get_all_engines():
            analyzer.register_cipher(engine.name, engine)
        return analyzer

    def register_cipher(self, name: str, variant: CipherVariant) -> None:
        """
        Register a variant under a method name, replacing any previous one.

        Raises:
            TypeError: If ``variant`` is not a CipherVariant
        """
        if not isinstance(variant, CipherVariant):
            raise TypeError(f"{type(variant).__name__} is not a CipherVariant")
        self._methods[name] = variant

    @property
    def registered_methods(self) -> list[str]:
        return list(self._methods)

    def analyze(self, ciphertext: str) -> list[CandidateResult]:
        """
        Rank candidate plaintexts for a ciphertext.

        Args:
            ciphertext: Text of unknown cipher

        Returns:
            Up to ``max_results`` candidates, best first. Empty for empty
            or over-long input. Never raises.
        """
        if not ciphertext or not ciphertext.strip():
            return []
        if len(ciphertext) > self.settings.max_ciphertext_length:
            logger.warning(
                "Ciphertext of %d characters exceeds the limit of %d; skipping analysis",
                len(ciphertext),
                self.settings.max_ciphertext_length,
            )
            return []

        confidences = self.detector.confidence_map(ciphertext)
        attempts = self._run_searches(ciphertext)

        results: list[CandidateResult] = []
        for name, candidates in attempts:
            method_confidence = confidences.get(name, self.settings.default_method_confidence)
            for candidate in candidates:
                results.append(CandidateResult(
                    method=name,
                    text=candidate.text,
                    key=candidate.key,
                    score=self.scorer.language_score(candidate.text) * method_confidence,
                    method_confidence=method_confidence,
                    composite_score=self.scorer.composite_score(candidate.text),
                ))

        results.sort(key=lambda r: (r.score, r.composite_score), reverse=True)
        top = results[:self.settings.max_results]
        logger.debug("Ranked %d candidates, returning %d", len(results), len(top))

        return [
            r.model_copy(update={
                "confidence": self.bucket(r.score),
                "analysis": self.insights.analyze(r.text),
            })
            for r in top
        ]

    def _run_searches(self, ciphertext: str) -> list[tuple[str, list[CandidateResult]]]:
        """Run every brute-force search; failed variants contribute nothing."""
        if not self._methods:
            return []

        with ThreadPoolExecutor(max_workers=self.settings.max_parallel_engines) as pool:
            futures = [
                (name, pool.submit(variant.brute_force_decrypt, ciphertext))
                for name, variant in self._methods.items()
            ]

            attempts = []
            for name, future in futures:
                try:
                    candidates = future.result()
                except Exception:
                    logger.warning("Brute-force search failed for %s", name, exc_info=True)
                    continue
                logger.debug("%s produced %d candidates", name, len(candidates))
                attempts.append((name, candidates))

        return attempts

    def bucket(self, score: float) -> ConfidenceBucket:
        """High above 10, Medium above 5, otherwise Low."""
        if score > self.settings.high_confidence_score:
            return ConfidenceBucket.HIGH
        if score > self.settings.medium_confidence_score:
            return ConfidenceBucket.MEDIUM
        return ConfidenceBucket.LOW

    def shift_sweep(self, text: str) -> list[CandidateResult]:
        """
        Try all 26 Caesar shifts ranked by composite score.

        Raises:
            InvalidCiphertextError: If text is empty
            CiphertextTooLongError: If text exceeds ``max_ciphertext_length``
        """
        if not text:
            raise InvalidCiphertextError("Text must be a non-empty string")
        if len(text) > self.settings.max_ciphertext_length:
            raise CiphertextTooLongError(len(text), self.settings.max_ciphertext_length)

        caesar = CaesarCipher(scorer=self.scorer, settings=self.settings)
        candidates = []
        for shift in range(26):
            plaintext = caesar.decrypt(text, shift)
            score = self.scorer.composite_score(plaintext)
            candidates.append(CandidateResult(
                method=caesar.name,
                text=plaintext,
                key=str(shift),
                score=score,
                composite_score=score,
            ))

        candidates.sort(key=lambda c: c.score, reverse=True)
        return candidates
