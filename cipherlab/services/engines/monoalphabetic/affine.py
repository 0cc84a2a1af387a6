import math

from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType
from cipherlab.services.engines.base import CipherKey, CipherVariant, strict_int
from cipherlab.services.engines.registry import EngineRegistry


@EngineRegistry.register
class AffineCipher(CipherVariant):
    """
    Affine cipher variant: E(x) = (a*x + b) mod 26.

    ``a`` must be coprime with 26, leaving 12 x 26 = 312 keys, all of
    which the brute-force search tries.
    """

    cipher_type = CipherType.AFFINE
    cipher_family = CipherFamily.MONOALPHABETIC
    description = (
        "Maps each letter x to (a*x + b) mod 26, a linear substitution "
        "that generalizes the Caesar shift."
    )
    key_help = "Two numbers 'a,b': a coprime with 26, b from 0 to 25. Example: '5,8'"

    M = 26
    VALID_A = tuple(a for a in range(1, 26) if math.gcd(a, 26) == 1)

    def _parse_key(self, key: CipherKey, text: str) -> tuple[int, int]:
        if isinstance(key, dict):
            key = (key.get("a"), key.get("b"))
        a, b = (strict_int(part) for part in self.split_key(key))

        if a <= 0 or math.gcd(a, self.M) != 1:
            raise ValueError(f"a={a} is not a positive number coprime with 26")
        if not 0 <= b < self.M:
            raise ValueError(f"b={b} is outside 0..25")
        return a, b

    def format_key(self, key: CipherKey) -> str:
        a, b = self._parse_key(key, "")
        return f"{a},{b}"

    @classmethod
    def mod_inverse(cls, a: int) -> int:
        """Multiplicative inverse of ``a`` modulo 26, by trial."""
        a %= cls.M
        for x in range(1, cls.M):
            if (a * x) % cls.M == 1:
                return x
        return 1

    def _encrypt(self, text: str, key: tuple[int, int]) -> str:
        a, b = key
        return "".join(self._map_char(c, lambda x: a * x + b) for c in text)

    def _decrypt(self, text: str, key: tuple[int, int]) -> str:
        a, b = key
        a_inv = self.mod_inverse(a)
        return "".join(self._map_char(c, lambda y: a_inv * (y - b)) for c in text)

    def _map_char(self, char: str, transform) -> str:
        if "A" <= char <= "Z":
            return chr(transform(ord(char) - 65) % self.M + 65)
        if "a" <= char <= "z":
            return chr(transform(ord(char) - 97) % self.M + 97)
        return char

    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """Try every valid (a, b) pair and keep the plausible ones."""
        candidates = []
        for a in self.VALID_A:
            for b in range(self.M):
                plaintext = self._decrypt(text, (a, b))
                candidates.append(self.candidate(plaintext, f"{a},{b}", self.quick_score(plaintext)))

        return self.plausible(candidates)
