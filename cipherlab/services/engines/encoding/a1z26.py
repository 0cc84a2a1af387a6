from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType
from cipherlab.services.engines.base import CipherKey, CipherVariant
from cipherlab.services.engines.registry import EngineRegistry


@EngineRegistry.register
class A1Z26Cipher(CipherVariant):
    """A1Z26 variant: A=1 ... Z=26, numbers separated by single spaces."""

    cipher_type = CipherType.A1Z26
    cipher_family = CipherFamily.ENCODING
    description = "Replaces each letter with its position in the alphabet (A=1, B=2, ..., Z=26)."
    key_help = "No key required. Numbers are separated by spaces."

    SEPARATOR = " "

    def _parse_key(self, key: CipherKey, text: str) -> None:
        return None

    def format_key(self, key: CipherKey) -> str:
        return ""

    def validate(self, text: str, key: CipherKey = None) -> bool:
        """True when every space-separated token is a number from 1 to 26."""
        return all(self._letter_number(token) is not None for token in text.split(self.SEPARATOR))

    @staticmethod
    def _letter_number(token: str) -> int | None:
        if token.isascii() and token.isdigit() and 1 <= int(token) <= 26:
            return int(token)
        return None

    def _encrypt(self, text: str, key: None) -> str:
        return self.SEPARATOR.join(
            str(ord(char) - 64) if "A" <= char <= "Z" else char
            for char in text.upper()
        )

    def _decrypt(self, text: str, key: None) -> str:
        result = []
        for token in text.split(self.SEPARATOR):
            if not (token.isascii() and token.isdigit()):
                result.append(token)
            elif (number := self._letter_number(token)) is not None:
                result.append(chr(number + 64))
        return "".join(result)

    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """The mapping is fixed, so there is a single decoding."""
        return [self.candidate(self._decrypt(text, None), "", 1.0)]
