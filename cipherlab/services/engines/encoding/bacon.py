from types import MappingProxyType

from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType
from cipherlab.services.engines.base import CipherKey, CipherVariant
from cipherlab.services.engines.registry import EngineRegistry

# I/J and U/V share a code
LETTER_TO_CODE = MappingProxyType({
    "A": "aaaaa", "B": "aaaab", "C": "aaaba", "D": "aaabb", "E": "aabaa",
    "F": "aabab", "G": "aabba", "H": "aabbb", "I": "abaaa", "J": "abaaa",
    "K": "abaab", "L": "ababa", "M": "ababb", "N": "abbaa", "O": "abbab",
    "P": "abbba", "Q": "abbbb", "R": "baaaa", "S": "baaab", "T": "baaba",
    "U": "baabb", "V": "baabb", "W": "babaa", "X": "babab", "Y": "babba",
    "Z": "babbb",
})

# First letter wins for shared codes
CODE_TO_LETTER = MappingProxyType(
    {code: letter for letter, code in reversed(LETTER_TO_CODE.items())}
)


@EngineRegistry.register
class BaconCipher(CipherVariant):
    """
    Bacon cipher variant.

    Each letter becomes a five-symbol group over {a, b}. Decryption keeps
    only a/b characters, so the same message may also hide as 0/1 digits
    or as upper/lower case, which the brute-force search tries too.
    """

    cipher_type = CipherType.BACON
    cipher_family = CipherFamily.ENCODING
    description = "Replaces each letter with a five-character group of 'a's and 'b's."
    key_help = "No key required. Text is groups of 'a'/'b' (or '0'/'1')."

    GROUP = 5

    def _parse_key(self, key: CipherKey, text: str) -> None:
        return None

    def format_key(self, key: CipherKey) -> str:
        return ""

    def validate(self, text: str, key: CipherKey = None) -> bool:
        """True when the a/b/0/1 symbols form whole five-symbol groups."""
        symbols = [c for c in text.lower() if c in "ab01"]
        return len(symbols) > 0 and len(symbols) % self.GROUP == 0

    def _encrypt(self, text: str, key: None) -> str:
        return " ".join(LETTER_TO_CODE.get(char, char) for char in text.upper())

    def _decrypt(self, text: str, key: None) -> str:
        symbols = "".join(c for c in text.lower() if c in "ab")
        groups = (symbols[i:i + self.GROUP] for i in range(0, len(symbols), self.GROUP))
        return "".join(CODE_TO_LETTER.get(group, group) for group in groups)

    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """Decode as a/b, then as 0/1 and as upper/lower case when those differ."""
        standard = self._decrypt(text, None)
        candidates = [self.candidate(standard, "Standard (A/B)", 1.0)]

        binary = self._decrypt(text.replace("0", "a").replace("1", "b"), None)
        if binary != standard:
            candidates.append(self.candidate(binary, "Binary (0/1)", 0.9))

        by_case = "".join(
            "b" if "A" <= c <= "Z" else "a" if "a" <= c <= "z" else c
            for c in text
        )
        upper_lower = self._decrypt(by_case, None)
        if upper_lower != standard:
            candidates.append(self.candidate(upper_lower, "Case (Upper/Lower)", 0.8))

        return candidates
