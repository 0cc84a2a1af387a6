from typing import ClassVar

from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType
from cipherlab.services.engines.base import CipherKey, CipherVariant
from cipherlab.services.engines.encoding.polybius import DEFAULT_KEY_LABEL, parse_grid_keyword
from cipherlab.services.engines.grids import MERGE_J_AND_C, PolybiusGrid, polybius_grid
from cipherlab.services.engines.registry import EngineRegistry


@EngineRegistry.register
class TapCodeCipher(CipherVariant):
    """
    Tap code variant.

    Each letter is a row and a column of taps in a 5x5 grid, written as
    dots: ".. ..." is row 2, column 3. Letters are separated by " / ".
    J is tapped as I and C as K, so C is never produced.
    """

    cipher_type = CipherType.TAP_CODE
    cipher_family = CipherFamily.ENCODING
    description = (
        "Encodes each letter as two groups of taps (row and column in a "
        "5x5 grid), as used by prisoners to communicate through walls."
    )
    key_help = "Optional keyword that rearranges the grid. Leave empty for the standard grid."

    COMMON_KEYS: ClassVar[tuple[str, ...]] = ("SECRET", "CIPHER", "KEY", "TAP", "")

    SEPARATOR = " / "

    def _parse_key(self, key: CipherKey, text: str) -> PolybiusGrid:
        return polybius_grid(parse_grid_keyword(key), MERGE_J_AND_C)

    def format_key(self, key: CipherKey) -> str:
        return parse_grid_keyword(key) or DEFAULT_KEY_LABEL

    def _encrypt(self, text: str, key: PolybiusGrid) -> str:
        taps = []
        for char in text.upper():
            position = key.coordinates(char) if "A" <= char <= "Z" else None
            taps.append(f"{'.' * position[0]} {'.' * position[1]}" if position else char)
        return self.SEPARATOR.join(taps)

    def _decrypt(self, text: str, key: PolybiusGrid) -> str:
        result = []
        for pattern in text.split("/"):
            pattern = pattern.strip()
            if " " not in pattern:
                result.append(pattern)
                continue
            groups = pattern.split(" ")
            result.append(key.char_at(groups[0].count("."), groups[1].count(".")) or "")
        return "".join(result)

    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """Try the standard grid and a few common keywords."""
        candidates = []
        for keyword in self.COMMON_KEYS:
            plaintext = self._decrypt(text, polybius_grid(keyword, MERGE_J_AND_C))
            candidates.append(
                self.candidate(plaintext, keyword or DEFAULT_KEY_LABEL, self.quick_score(plaintext))
            )
        return self.plausible(candidates)
