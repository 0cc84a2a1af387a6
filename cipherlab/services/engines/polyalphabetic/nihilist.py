from typing import ClassVar

from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType
from cipherlab.services.engines.base import CipherKey, CipherVariant, letters_only
from cipherlab.services.engines.grids import PolybiusGrid, polybius_grid
from cipherlab.services.engines.registry import EngineRegistry


@EngineRegistry.register
class NihilistCipher(CipherVariant):
    """
    Nihilist cipher variant.

    Letters and a repeating key phrase are both turned into two-digit
    Polybius numbers (row then column) and added. Sums are not reduced,
    so ciphertext numbers run from 22 to 110.
    """

    cipher_type = CipherType.NIHILIST
    cipher_family = CipherFamily.POLYALPHABETIC
    description = (
        "Adds the Polybius numbers of the plaintext to those of a repeating "
        "key phrase, producing a sequence of numbers."
    )
    key_help = "Two keys separated by a comma: the square keyword, then the key phrase. Example: 'SQUARE,PHRASE'"

    SQUARE_KEYS: ClassVar[tuple[str, ...]] = ("SECRET", "CIPHER", "KEY")
    PHRASES: ClassVar[tuple[str, ...]] = ("NIHILIST", "PASSWORD", "KEY")

    def _parse_key(self, key: CipherKey, text: str) -> tuple[PolybiusGrid, list[int]]:
        square_key, phrase = self.split_key(key)
        square_key, phrase = letters_only(str(square_key)), letters_only(str(phrase))
        if not square_key or not phrase:
            raise ValueError("both the square keyword and the key phrase need letters")

        grid = polybius_grid(square_key)
        return grid, [self._number(grid, char) for char in phrase]

    def format_key(self, key: CipherKey) -> str:
        square_key, phrase = self.split_key(key)
        return f"{square_key},{phrase}"

    @staticmethod
    def _number(grid: PolybiusGrid, char: str) -> int:
        row, col = grid.coordinates(char)
        return row * 10 + col

    def _encrypt(self, text: str, key: tuple[PolybiusGrid, list[int]]) -> str:
        grid, phrase = key
        letters = [c for c in letters_only(text) if grid.coordinates(c)]
        return " ".join(
            str(self._number(grid, char) + phrase[i % len(phrase)])
            for i, char in enumerate(letters)
        )

    def _decrypt(self, text: str, key: tuple[PolybiusGrid, list[int]]) -> str:
        grid, phrase = key
        result = []
        index = 0
        for token in text.split():
            if not (token.isascii() and token.isdigit()):
                result.append(token)
                continue
            diff = str(int(token) - phrase[index % len(phrase)])
            index += 1
            if len(diff) == 2 and diff.isdigit():
                result.append(grid.char_at(int(diff[0]), int(diff[1])) or "")
        return "".join(result)

    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """Try each common square keyword with each common phrase."""
        candidates = []
        for square_key in self.SQUARE_KEYS:
            for phrase in self.PHRASES:
                key = f"{square_key},{phrase}"
                plaintext = self.decrypt(text, key)
                candidates.append(self.candidate(plaintext, key, self.quick_score(plaintext)))

        return self.plausible(candidates)
