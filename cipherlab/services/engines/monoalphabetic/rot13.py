from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType
from cipherlab.services.engines.base import CipherKey, CipherVariant
from cipherlab.services.engines.monoalphabetic.caesar import shift_text
from cipherlab.services.engines.registry import EngineRegistry


@EngineRegistry.register
class ROT13Cipher(CipherVariant):
    """
    ROT13 variant.

    A Caesar shift of 13, which makes it its own inverse. Any key is
    ignored.
    """

    cipher_type = CipherType.ROT13
    cipher_family = CipherFamily.MONOALPHABETIC
    description = "Replaces each letter with the one 13 places after it; applying it twice restores the text."
    key_help = "No key required. The shift is always 13."

    SHIFT = 13

    def _parse_key(self, key: CipherKey, text: str) -> None:
        return None

    def _encrypt(self, text: str, key: None) -> str:
        return shift_text(text, self.SHIFT)

    def _decrypt(self, text: str, key: None) -> str:
        return self._encrypt(text, key)

    def format_key(self, key: CipherKey) -> str:
        return ""

    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """Only one decryption exists."""
        return [self.candidate(self._decrypt(text, None), "", 1.0)]
