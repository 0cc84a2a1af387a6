import string
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from cipherlab.core.config import Settings, get_settings
from cipherlab.core.exceptions import InvalidKeyError
from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType, EnigmaKey
from cipherlab.services.scoring.scorer import DEFAULT_SCORER, TextScorer

# Shift, "a,b" pair, keyword, compound "square,transposition" or rotor bundle
CipherKey = int | str | tuple[Any, ...] | dict[str, Any] | EnigmaKey | None

# Errors a key parser may raise for a malformed key
KEY_ERRORS = (ValueError, TypeError, KeyError, IndexError)


@dataclass
class DecryptionResult:
    """Result of a decryption with a known key."""

    plaintext: str
    key: str
    confidence: float = 1.0


class CipherVariant(ABC):
    """
    Abstract base class for all cipher variants.

    Each variant must provide:
    - _parse_key(): Turn a user key into the variant's own key type,
      raising ValueError/TypeError when it is malformed
    - _encrypt() / _decrypt(): Transform text with a parsed key
    - brute_force_decrypt(): Search likely keys without being given one

    ``encrypt`` and ``decrypt`` return the input unchanged for a key
    that does not parse, so batch searches never abort on one bad key.
    ``encrypt_with_key`` and ``decrypt_with_key`` are the strict
    counterparts and raise InvalidKeyError instead.
    """

    # Cipher metadata
    cipher_type: ClassVar[CipherType]
    cipher_family: ClassVar[CipherFamily]
    description: ClassVar[str]
    key_help: ClassVar[str]

    ALPHABET: ClassVar[str] = string.ascii_uppercase

    def __init__(
        self,
        scorer: TextScorer | None = None,
        settings: Settings | None = None,
    ):
        self.scorer = scorer or DEFAULT_SCORER
        self.settings = settings or get_settings()

    @property
    def name(self) -> str:
        """Display name, taken from the variant's cipher type."""
        return self.cipher_type.display_name

    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------

    def encrypt(self, text: str, key: CipherKey = None) -> str:
        """
        Encrypt text with the given key.

        Args:
            text: Plaintext
            key: Variant-specific key

        Returns:
            Ciphertext, or ``text`` unchanged when the key is invalid
        """
        try:
            parsed = self._parse_key(key, text)
        except KEY_ERRORS:
            return text
        return self._encrypt(text, parsed)

    def decrypt(self, text: str, key: CipherKey = None) -> str:
        """
        Decrypt text with the given key.

        Args:
            text: Ciphertext
            key: Variant-specific key

        Returns:
            Plaintext, or ``text`` unchanged when the key is invalid
        """
        try:
            parsed = self._parse_key(key, text)
        except KEY_ERRORS:
            return text
        return self._decrypt(text, parsed)

    def validate(self, text: str, key: CipherKey = None) -> bool:
        """
        Check that a key is usable for this variant and text.

        Args:
            text: The text the key will be applied to
            key: Variant-specific key

        Returns:
            True if encrypt/decrypt can be trusted with this key
        """
        try:
            self._parse_key(key, text)
        except KEY_ERRORS:
            return False
        return True

    @abstractmethod
    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """
        Decrypt without a known key.

        Must not raise on empty or malformed input.

        Args:
            text: Ciphertext

        Returns:
            Candidates, best first (possibly empty)
        """

    def describe(self) -> str:
        """Short description of the cipher."""
        return self.description

    def key_description(self) -> str:
        """What a valid key looks like."""
        return self.key_help

    # ------------------------------------------------------------------
    # Strict entry points
    # ------------------------------------------------------------------

    def encrypt_with_key(self, text: str, key: CipherKey = None) -> str:
        """
        Encrypt, raising InvalidKeyError for a key that does not parse.

        Only the key is checked; ciphertext-format rules in ``validate``
        do not apply to plaintext.
        """
        try:
            parsed = self._parse_key(key, text)
        except KEY_ERRORS as e:
            raise InvalidKeyError(self.name, key, str(e)) from e
        return self._encrypt(text, parsed)

    def decrypt_with_key(self, text: str, key: CipherKey = None) -> DecryptionResult:
        """
        Decrypt with a known key.

        Raises:
            InvalidKeyError: If the key fails validation
        """
        self._require_valid(text, key)
        return DecryptionResult(
            plaintext=self.decrypt(text, key),
            key=self.format_key(key),
        )

    def _require_valid(self, text: str, key: CipherKey) -> None:
        if not self.validate(text, key):
            raise InvalidKeyError(self.name, key, self.key_description())

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _parse_key(self, key: CipherKey, text: str) -> Any:
        """Return the parsed key or raise ValueError/TypeError."""

    @abstractmethod
    def _encrypt(self, text: str, key: Any) -> str:
        """Encrypt with a parsed key."""

    @abstractmethod
    def _decrypt(self, text: str, key: Any) -> str:
        """Decrypt with a parsed key."""

    def format_key(self, key: CipherKey) -> str:
        """Human-readable form of a key for candidate results."""
        return "" if key is None else str(key)

    # ------------------------------------------------------------------
    # Helpers for brute-force searches
    # ------------------------------------------------------------------

    def quick_score(self, text: str) -> float:
        """Per-cipher quick score (0-1)."""
        return self.scorer.quick_score(text)

    def candidate(self, text: str, key: str, score: float) -> CandidateResult:
        """Build a candidate tagged with this variant's name."""
        return CandidateResult(method=self.name, text=text, key=key, score=score)

    def plausible(self, candidates: list[CandidateResult]) -> list[CandidateResult]:
        """Keep candidates above the quick-score threshold, best first."""
        threshold = self.settings.quick_score_threshold
        kept = [c for c in candidates if c.score > threshold]
        kept.sort(key=lambda c: c.score, reverse=True)
        return kept

    @staticmethod
    def split_key(key: CipherKey, parts: int = 2) -> list[Any]:
        """
        Split a compound key given as "a,b", a tuple/list or a dict.

        Raises:
            ValueError: If the key does not have exactly ``parts`` parts
        """
        if isinstance(key, str):
            values: list[Any] = [part.strip() for part in key.split(",")]
        elif isinstance(key, dict):
            values = list(key.values())
        elif isinstance(key, (tuple, list)):
            values = list(key)
        else:
            raise TypeError(f"unsupported key type {type(key).__name__}")

        if len(values) != parts:
            raise ValueError(f"expected {parts} key parts, got {len(values)}")
        return values


def letters_only(text: str) -> str:
    """Uppercase and drop every character outside A-Z."""
    return "".join(c for c in text.upper() if "A" <= c <= "Z")


def strict_int(value: Any) -> int:
    """
    Parse an integer key, rejecting bools, floats with a fraction and junk.

    Raises:
        ValueError: If the value is not an integer
    """
    if isinstance(value, bool):
        raise TypeError("boolean is not a valid integer key")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value} is not an integer")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"unsupported key type {type(value).__name__}")
