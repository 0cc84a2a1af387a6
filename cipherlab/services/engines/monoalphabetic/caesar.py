from typing import Any

from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType
from cipherlab.services.engines.base import CipherKey, CipherVariant, strict_int
from cipherlab.services.engines.registry import EngineRegistry


def shift_letter(char: str, shift: int) -> str:
    """Shift an ASCII letter by ``shift`` places, keeping its case."""
    if "A" <= char <= "Z":
        return chr((ord(char) - 65 + shift) % 26 + 65)
    if "a" <= char <= "z":
        return chr((ord(char) - 97 + shift) % 26 + 97)
    return char


def shift_text(text: str, shift: int) -> str:
    return "".join(shift_letter(char, shift) for char in text)


@EngineRegistry.register
class CaesarCipher(CipherVariant):
    """
    Caesar cipher variant.

    Shifts each letter by a fixed amount. With only 26 possible keys it
    is broken by trying every shift and scoring each result.
    """

    cipher_type = CipherType.CAESAR
    cipher_family = CipherFamily.MONOALPHABETIC
    description = (
        "Shifts every letter of the plaintext a fixed number of places "
        "along the alphabet, wrapping from Z back to A."
    )
    key_help = "A whole number of places to shift, from 0 to 25. Example: 3"

    def _parse_key(self, key: CipherKey, text: str) -> int:
        if isinstance(key, dict):
            key = key.get("shift", key.get("key"))
        shift = strict_int(key)
        if shift < 0:
            raise ValueError("shift must not be negative")
        return shift

    def _encrypt(self, text: str, key: int) -> str:
        return shift_text(text, key % 26)

    def _decrypt(self, text: str, key: int) -> str:
        return shift_text(text, (26 - key % 26) % 26)

    def format_key(self, key: Any) -> str:
        return str(self._parse_key(key, ""))

    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """Try all 26 shifts, best quick score first."""
        candidates = []
        for shift in range(26):
            plaintext = self._decrypt(text, shift)
            candidates.append(self.candidate(plaintext, str(shift), self.quick_score(plaintext)))

        candidates.sort(key=lambda c: c.score, reverse=True)
        return candidates
