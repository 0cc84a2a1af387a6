from typing import ClassVar

from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType
from cipherlab.services.engines.base import CipherKey, CipherVariant, letters_only
from cipherlab.services.engines.grids import PolybiusGrid, polybius_grid
from cipherlab.services.engines.registry import EngineRegistry


def column_order(keyword: str) -> list[int]:
    """Column indices in alphabetical order of the keyword letters (stable)."""
    return sorted(range(len(keyword)), key=lambda i: keyword[i])


def columnar_transposition(text: str, keyword: str) -> str:
    """Deal text round-robin into columns and read them in keyword order."""
    width = len(keyword)
    columns = [text[i::width] for i in range(width)]
    return "".join(columns[i] for i in column_order(keyword))


def inverse_columnar_transposition(text: str, keyword: str) -> str:
    """Undo columnar_transposition, allowing for a short last row."""
    width = len(keyword)
    rows, remainder = divmod(len(text), width)
    lengths = [rows + 1 if i < remainder else rows for i in range(width)]

    columns = [""] * width
    position = 0
    for index in column_order(keyword):
        columns[index] = text[position:position + lengths[index]]
        position += lengths[index]

    return "".join(
        columns[col][row]
        for row in range(max(lengths, default=0))
        for col in range(width)
        if row < lengths[col]
    )


@EngineRegistry.register
class ADFGXCipher(CipherVariant):
    """
    ADFGX cipher variant.

    Letters are substituted by their coordinates in a keyed 5x5 square
    labelled A, D, F, G, X, and the resulting symbols are shuffled with a
    keyed columnar transposition. Non-letters are dropped.
    """

    cipher_type = CipherType.ADFGX
    cipher_family = CipherFamily.FRACTIONATING
    description = (
        "Substitutes letters with pairs of the symbols A, D, F, G, X from a "
        "keyed square, then transposes the symbols by columns."
    )
    key_help = "Two keywords separated by a comma: the square keyword, then the transposition keyword. Example: 'SQUARE,KEY'"

    COORDINATES: ClassVar[str] = "ADFGX"
    SQUARE_KEYS: ClassVar[tuple[str, ...]] = ("SECRET", "CIPHER", "KEY")
    TRANSPOSITION_KEYS: ClassVar[tuple[str, ...]] = ("ADFGX", "CIPHER", "KEY")

    def _parse_key(self, key: CipherKey, text: str) -> tuple[PolybiusGrid, str]:
        square_key, transposition_key = self.split_key(key)
        square_key = letters_only(str(square_key))
        transposition_key = letters_only(str(transposition_key))
        if not square_key or not transposition_key:
            raise ValueError("both the square and the transposition keyword need letters")
        return polybius_grid(square_key), transposition_key

    def format_key(self, key: CipherKey) -> str:
        square_key, transposition_key = self.split_key(key)
        return f"{square_key},{transposition_key}"

    def _encrypt(self, text: str, key: tuple[PolybiusGrid, str]) -> str:
        grid, keyword = key
        symbols = []
        for char in letters_only(text):
            row, col = grid.coordinates(char)
            symbols.append(self.COORDINATES[row - 1] + self.COORDINATES[col - 1])
        return columnar_transposition("".join(symbols), keyword)

    def _decrypt(self, text: str, key: tuple[PolybiusGrid, str]) -> str:
        grid, keyword = key
        symbols = inverse_columnar_transposition(letters_only(text), keyword)

        result = []
        for i in range(0, len(symbols), 2):
            pair = symbols[i:i + 2]
            if len(pair) < 2:
                result.append(pair)
                continue
            row = self.COORDINATES.find(pair[0]) + 1
            col = self.COORDINATES.find(pair[1]) + 1
            result.append(grid.char_at(row, col) or "")
        return "".join(result)

    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """Try each common square keyword with each common transposition keyword."""
        candidates = []
        for square_key in self.SQUARE_KEYS:
            for transposition_key in self.TRANSPOSITION_KEYS:
                key = f"{square_key},{transposition_key}"
                plaintext = self.decrypt(text, key)
                candidates.append(self.candidate(plaintext, key, self.quick_score(plaintext)))
        return self.plausible(candidates)
