import re
from typing import ClassVar

from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType
from cipherlab.services.engines.base import CipherKey, CipherVariant, letters_only
from cipherlab.services.engines.grids import PolybiusGrid, polybius_grid
from cipherlab.services.engines.registry import EngineRegistry

DEFAULT_KEY_LABEL = "(default)"


def parse_grid_keyword(key: CipherKey) -> str:
    """
    Normalize an optional grid keyword.

    None or an empty string selects the standard grid. A non-empty key
    must contain at least one letter.

    Raises:
        ValueError: If a non-empty key has no letters
    """
    if key is None:
        return ""
    if isinstance(key, dict):
        key = key.get("keyword", key.get("key", ""))
    if not isinstance(key, str):
        raise TypeError("grid keyword must be a string")
    if key and not letters_only(key):
        raise ValueError("grid keyword needs at least one letter")
    return letters_only(key)


@EngineRegistry.register
class PolybiusCipher(CipherVariant):
    """
    Polybius square variant.

    Letters become their (row, column) digits in a 5x5 grid with I/J
    merged; other characters are kept. Tokens are joined by spaces, so
    HELLO gives "23 15 31 31 34" on the standard grid.
    """

    cipher_type = CipherType.POLYBIUS
    cipher_family = CipherFamily.ENCODING
    description = (
        "Converts each letter into the two digits of its row and column in "
        "a 5x5 grid. I and J share a cell."
    )
    key_help = "Optional keyword that rearranges the grid. Leave empty for the standard square."

    COMMON_KEYS: ClassVar[tuple[str, ...]] = ("SECRET", "CIPHER", "POLYBIUS", "KEY", "")

    _TOKEN = re.compile(r"\d{2}|\d\s\d|\S")

    def _parse_key(self, key: CipherKey, text: str) -> PolybiusGrid:
        return polybius_grid(parse_grid_keyword(key))

    def format_key(self, key: CipherKey) -> str:
        return parse_grid_keyword(key) or DEFAULT_KEY_LABEL

    def _encrypt(self, text: str, key: PolybiusGrid) -> str:
        tokens = []
        for char in text.upper():
            position = key.coordinates(char) if "A" <= char <= "Z" else None
            tokens.append(f"{position[0]}{position[1]}" if position else char)
        return " ".join(tokens)

    def _decrypt(self, text: str, key: PolybiusGrid) -> str:
        result = []
        for token in self._TOKEN.findall(text):
            digits = [c for c in token if c.isdigit()]
            if not digits:
                result.append(token)
            elif len(digits) == 2:
                result.append(key.char_at(int(digits[0]), int(digits[1])) or "")
        return "".join(result)

    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """Try the standard grid and a few common keywords."""
        candidates = []
        for keyword in self.COMMON_KEYS:
            plaintext = self._decrypt(text, polybius_grid(keyword))
            candidates.append(
                self.candidate(plaintext, keyword or DEFAULT_KEY_LABEL, self.quick_score(plaintext))
            )
        return self.plausible(candidates)
