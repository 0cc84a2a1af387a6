"""
Keyed coordinate grids shared by the fractionating and encoding ciphers.

A grid is laid out row-major from ``keyword + base alphabet`` with
duplicates dropped. Grids are immutable and cached per keyword, so all
variants and worker threads share the same instances.
"""

from dataclasses import dataclass, field
from functools import lru_cache

POLYBIUS_ALPHABET = "ABCDEFGHIKLMNOPQRSTUVWXYZ"
TRIFID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ+"
TRIFID_FILLER = "+"

# Letters folded into another before lookup
MERGE_J = (("J", "I"),)
MERGE_J_AND_C = (("J", "I"), ("C", "K"))


def _seed_alphabet(keyword: str, base: str, allowed: str, size: int, filler: str = "") -> str:
    """Deduplicated ``keyword + base`` restricted to ``allowed``, padded to ``size``."""
    seen: dict[str, None] = {}
    for char in keyword + base:
        if char in allowed:
            seen.setdefault(char, None)
    symbols = "".join(seen)[:size]
    return symbols + filler * (size - len(symbols))


@dataclass(frozen=True)
class PolybiusGrid:
    """
    5x5 grid with 1-based (row, column) coordinates.

    Attributes:
        symbols: The 25 grid letters, row-major
        merges: (from, to) pairs applied to a letter before lookup
    """

    symbols: str
    merges: tuple[tuple[str, str], ...] = MERGE_J
    size: int = 5
    _positions: dict[str, tuple[int, int]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.symbols) != self.size * self.size:
            raise ValueError(f"grid needs {self.size * self.size} symbols, got {len(self.symbols)}")
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError("grid symbols must be unique")

        positions = {
            char: (index // self.size + 1, index % self.size + 1)
            for index, char in enumerate(self.symbols)
        }
        object.__setattr__(self, "_positions", positions)

    @property
    def rows(self) -> list[str]:
        return [self.symbols[i:i + self.size] for i in range(0, len(self.symbols), self.size)]

    def normalize(self, char: str) -> str:
        """Uppercase a letter and fold merged letters."""
        char = char.upper()
        for source, target in self.merges:
            if char == source:
                return target
        return char

    def coordinates(self, char: str) -> tuple[int, int] | None:
        """1-based (row, column) of a letter, or None if it is not in the grid."""
        return self._positions.get(self.normalize(char))

    def char_at(self, row: int, col: int) -> str | None:
        """Letter at 1-based (row, column), or None when out of range."""
        if 1 <= row <= self.size and 1 <= col <= self.size:
            return self.symbols[(row - 1) * self.size + (col - 1)]
        return None


@dataclass(frozen=True)
class TrifidCube:
    """
    3x3x3 cube with 1-based (layer, row, column) coordinates.

    The 27th slot holds the ``+`` filler unless the keyword places it
    earlier.
    """

    symbols: str
    _positions: dict[str, tuple[int, int, int]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.symbols) != 27:
            raise ValueError(f"cube needs 27 symbols, got {len(self.symbols)}")
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError("cube symbols must be unique")

        positions = {
            char: (index // 9 + 1, index // 3 % 3 + 1, index % 3 + 1)
            for index, char in enumerate(self.symbols)
        }
        object.__setattr__(self, "_positions", positions)

    def coordinates(self, char: str) -> tuple[int, int, int]:
        """Position of a symbol; unknown symbols map to (1, 1, 1)."""
        return self._positions.get(char.upper(), (1, 1, 1))

    def char_at(self, layer: int, row: int, col: int) -> str:
        """Symbol at a position; out-of-range positions give the filler."""
        if all(1 <= n <= 3 for n in (layer, row, col)):
            return self.symbols[(layer - 1) * 9 + (row - 1) * 3 + (col - 1)]
        return TRIFID_FILLER


@lru_cache(maxsize=128)
def polybius_grid(keyword: str = "", merges: tuple[tuple[str, str], ...] = MERGE_J) -> PolybiusGrid:
    """
    Build (or fetch the cached) keyed 5x5 grid.

    Args:
        keyword: Seed letters; anything outside A-Z is ignored
        merges: Letter folds applied to the keyword and at lookup

    Returns:
        The grid. An empty keyword gives the standard square.
    """
    folded = keyword.upper()
    for source, target in merges:
        folded = folded.replace(source, target)
    return PolybiusGrid(
        symbols=_seed_alphabet(folded, POLYBIUS_ALPHABET, POLYBIUS_ALPHABET, 25),
        merges=merges,
    )


@lru_cache(maxsize=128)
def trifid_cube(keyword: str = "") -> TrifidCube:
    """Build (or fetch the cached) keyed 3x3x3 cube."""
    return TrifidCube(
        symbols=_seed_alphabet(
            keyword.upper(), TRIFID_ALPHABET, TRIFID_ALPHABET, 27, TRIFID_FILLER
        )
    )
