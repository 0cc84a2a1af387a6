from typing import ClassVar

from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType
from cipherlab.services.engines.base import CipherKey, CipherVariant, letters_only
from cipherlab.services.engines.encoding.polybius import DEFAULT_KEY_LABEL, parse_grid_keyword
from cipherlab.services.engines.grids import PolybiusGrid, polybius_grid
from cipherlab.services.engines.registry import EngineRegistry


@EngineRegistry.register
class BifidCipher(CipherVariant):
    """
    Bifid cipher variant.

    Writes the row coordinates of the whole message, then all the column
    coordinates, and reads the combined stream back two digits at a
    time. Only letters survive; J is encrypted as I.
    """

    cipher_type = CipherType.BIFID
    cipher_family = CipherFamily.FRACTIONATING
    description = (
        "Splits every letter into its Polybius row and column, mixes the "
        "row and column streams, and recombines them into new letters."
    )
    key_help = "Optional keyword that rearranges the grid. Leave empty for the standard square."

    COMMON_KEYS: ClassVar[tuple[str, ...]] = ("SECRET", "CIPHER", "KEY", "BIFID", "")

    def _parse_key(self, key: CipherKey, text: str) -> PolybiusGrid:
        return polybius_grid(parse_grid_keyword(key))

    def format_key(self, key: CipherKey) -> str:
        return parse_grid_keyword(key) or DEFAULT_KEY_LABEL

    def _encrypt(self, text: str, key: PolybiusGrid) -> str:
        positions = [key.coordinates(c) for c in letters_only(text)]
        stream = [row for row, _ in positions] + [col for _, col in positions]
        return "".join(
            key.char_at(stream[i], stream[i + 1]) or "" for i in range(0, len(stream), 2)
        )

    def _decrypt(self, text: str, key: PolybiusGrid) -> str:
        stream = [n for c in letters_only(text) for n in key.coordinates(c)]
        half = len(stream) // 2
        rows, cols = stream[:half], stream[half:]
        return "".join(key.char_at(row, col) or "" for row, col in zip(rows, cols))

    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """Try the standard grid and a few common keywords."""
        candidates = []
        for keyword in self.COMMON_KEYS:
            plaintext = self._decrypt(text, polybius_grid(keyword))
            candidates.append(
                self.candidate(plaintext, keyword or DEFAULT_KEY_LABEL, self.quick_score(plaintext))
            )
        return self.plausible(candidates)
