"""Tests for the cross-cipher analyzer."""

import logging

import pytest

from cipherlab.core.config import Settings
from cipherlab.core.exceptions import CiphertextTooLongError, InvalidCiphertextError
from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType, ConfidenceBucket
from cipherlab.services.engines.base import CipherVariant
from cipherlab.services.engines.monoalphabetic.caesar import CaesarCipher
from cipherlab.services.pipeline.analyzer import CipherAnalyzer
from cipherlab.services.pipeline.insights import CandidateInsights


class BrokenCipher(CipherVariant):
    """Variant whose search always fails."""

    cipher_type = CipherType.CAESAR
    cipher_family = CipherFamily.MONOALPHABETIC
    description = "Always fails."
    key_help = "None."

    def _parse_key(self, key, text):
        return None

    def _encrypt(self, text, key):
        return text

    def _decrypt(self, text, key):
        return text

    def brute_force_decrypt(self, text):
        raise RuntimeError("search exploded")


@pytest.fixture(scope="module")
def analyzer():
    return CipherAnalyzer.with_all_ciphers()


class TestCipherAnalyzer:
    """Test ranking across every registered variant."""

    def test_all_ciphers_registered(self, analyzer):
        assert len(analyzer.registered_methods) == 14
        assert "Rail Fence" in analyzer.registered_methods

    def test_bacon_ranked_first(self, analyzer):
        results = analyzer.analyze("aabbbaabaaababaababaabbab")

        top = results[0]
        assert top.method == "Bacon"
        assert top.text == "HELLO"
        assert top.method_confidence == 0.9

    def test_caesar_key_found(self, analyzer):
        plaintext = "THE ARMY AND THE FLEET WILL MEET AT THE BRIDGE IN THE MORNING"
        ciphertext = CaesarCipher().encrypt(plaintext, 3)

        results = analyzer.analyze(ciphertext)

        assert results[0].text == plaintext
        assert any(r.method == "Caesar" and r.key == "3" for r in results)

    def test_results_shape(self, analyzer):
        results = analyzer.analyze("WKH DUPB DQG WKH IOHHW")

        assert 0 < len(results) <= 10
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        for result in results:
            assert isinstance(result, CandidateResult)
            assert result.confidence in set(ConfidenceBucket)
            assert result.analysis is not None
            assert result.composite_score is not None

    def test_unknown_method_uses_default_confidence(self, analyzer):
        results = analyzer.analyze("WKH DUPB DQG WKH IOHHW")
        assert all(r.method_confidence == 0.3 for r in results)

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank_input(self, analyzer, text):
        assert analyzer.analyze(text) == []

    def test_too_long_input(self, caplog):
        analyzer = CipherAnalyzer(settings=Settings(max_ciphertext_length=10))
        analyzer.register_cipher("Caesar", CaesarCipher())

        with caplog.at_level(logging.WARNING, logger="cipherlab"):
            assert analyzer.analyze("A" * 11) == []

        assert "exceeds the limit" in caplog.text

    def test_failing_variant_is_skipped(self, caplog):
        analyzer = CipherAnalyzer()
        analyzer.register_cipher("Broken", BrokenCipher())
        analyzer.register_cipher("Caesar", CaesarCipher())

        with caplog.at_level(logging.WARNING, logger="cipherlab"):
            results = analyzer.analyze("KHOOR ZRUOG")

        assert results
        assert all(r.method == "Caesar" for r in results)
        assert "Broken" in caplog.text

    def test_max_results(self):
        analyzer = CipherAnalyzer(settings=Settings(max_results=3))
        analyzer.register_cipher("Caesar", CaesarCipher())
        assert len(analyzer.analyze("KHOOR ZRUOG")) == 3

    def test_no_methods(self):
        assert CipherAnalyzer().analyze("KHOOR") == []

    def test_register_rejects_non_variant(self):
        with pytest.raises(TypeError):
            CipherAnalyzer().register_cipher("Caesar", object())

    def test_register_replaces(self):
        analyzer = CipherAnalyzer()
        analyzer.register_cipher("Caesar", CaesarCipher())
        analyzer.register_cipher("Caesar", CaesarCipher())
        assert analyzer.registered_methods == ["Caesar"]

    @pytest.mark.parametrize(
        "score,expected",
        [
            (10.5, ConfidenceBucket.HIGH),
            (10.0, ConfidenceBucket.MEDIUM),
            (7.0, ConfidenceBucket.MEDIUM),
            (5.0, ConfidenceBucket.LOW),
            (-1.0, ConfidenceBucket.LOW),
        ],
    )
    def test_bucket(self, analyzer, score, expected):
        assert analyzer.bucket(score) == expected


class TestShiftSweep:
    """Test the standalone Caesar sweep."""

    def test_best_shift(self, analyzer):
        plaintext = "The standing army attacked the nation and ended the siege."
        ciphertext = CaesarCipher().encrypt(plaintext, 5)

        candidates = analyzer.shift_sweep(ciphertext)

        assert len(candidates) == 26
        assert candidates[0].key == "5"
        assert candidates[0].text == plaintext

    def test_sorted(self, analyzer):
        scores = [c.score for c in analyzer.shift_sweep("Mjqqt")]
        assert scores == sorted(scores, reverse=True)

    def test_empty_raises(self, analyzer):
        with pytest.raises(InvalidCiphertextError):
            analyzer.shift_sweep("")

    def test_too_long_raises(self):
        analyzer = CipherAnalyzer(settings=Settings(max_ciphertext_length=10))

        with pytest.raises(CiphertextTooLongError) as exc_info:
            analyzer.shift_sweep("A" * 11)

        assert exc_info.value.details == {"length": 11, "max_length": 10}
        assert len(analyzer.shift_sweep("A" * 10)) == 26


class TestCandidateInsights:
    """Test readability and context detection."""

    @pytest.fixture
    def insights(self):
        return CandidateInsights()

    def test_readability(self, insights):
        report = insights.readability("Hello world. Bye.")

        assert report.word_count == 3
        assert report.sentence_count == 2
        assert report.avg_word_length == 5.0
        assert report.score == pytest.approx(30.0)

    def test_readability_without_punctuation(self, insights):
        report = insights.readability("one two")
        assert report.sentence_count == 1
        assert report.score == pytest.approx(2 / 3 * 100)

    def test_readability_empty(self, insights):
        report = insights.readability("")
        assert report.word_count == 0
        assert report.score == 0.0

    def test_contexts(self, insights):
        contexts = insights.contexts("Attack the enemy at home")

        assert [c.category for c in contexts] == ["Military", "Personal"]
        assert contexts[0].matches == 2
        assert contexts[1].matches == 1

    def test_no_context(self, insights):
        assert insights.contexts("nothing relevant here") == []
