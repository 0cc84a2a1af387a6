"""Tests for keyed Polybius grids and Trifid cubes."""

import pytest

from cipherlab.services.engines.grids import (
    MERGE_J_AND_C,
    PolybiusGrid,
    TrifidCube,
    polybius_grid,
    trifid_cube,
)


class TestPolybiusGrid:
    """Test 5x5 grid construction and lookup."""

    def test_standard_grid(self):
        grid = polybius_grid()
        assert grid.rows == ["ABCDE", "FGHIK", "LMNOP", "QRSTU", "VWXYZ"]

    def test_keyed_grid(self):
        grid = polybius_grid("KEYWORD")
        assert grid.rows == ["KEYWO", "RDABC", "FGHIL", "MNPQS", "TUVXZ"]

    def test_keyword_noise_ignored(self):
        assert polybius_grid("key word!") == polybius_grid("KEYWORD")

    def test_j_folds_into_i(self):
        grid = polybius_grid()
        assert grid.coordinates("J") == grid.coordinates("I") == (2, 4)
        assert "J" not in grid.symbols

    def test_coordinates_roundtrip(self):
        grid = polybius_grid("CIPHER")
        for char in grid.symbols:
            assert grid.char_at(*grid.coordinates(char)) == char

    def test_lowercase_lookup(self):
        grid = polybius_grid()
        assert grid.coordinates("h") == (2, 3)

    def test_out_of_range(self):
        grid = polybius_grid()
        assert grid.char_at(0, 1) is None
        assert grid.char_at(6, 1) is None
        assert grid.coordinates("1") is None

    def test_tap_code_merges(self):
        grid = polybius_grid("", MERGE_J_AND_C)
        assert grid.coordinates("C") == grid.coordinates("K")
        assert grid.coordinates("J") == grid.coordinates("I")

    def test_tap_code_keyword_folded(self):
        grid = polybius_grid("CAT", MERGE_J_AND_C)
        assert grid.symbols.startswith("KAT")
        assert len(set(grid.symbols)) == 25

    def test_grids_are_cached(self):
        assert polybius_grid("KEY") is polybius_grid("KEY")

    def test_invalid_symbols_rejected(self):
        with pytest.raises(ValueError):
            PolybiusGrid("ABC")
        with pytest.raises(ValueError):
            PolybiusGrid("A" * 25)


class TestTrifidCube:
    """Test 3x3x3 cube construction and lookup."""

    def test_standard_cube(self):
        cube = trifid_cube()
        assert cube.symbols == "ABCDEFGHIJKLMNOPQRSTUVWXYZ+"
        assert cube.coordinates("A") == (1, 1, 1)
        assert cube.coordinates("Z") == (3, 3, 2)
        assert cube.coordinates("+") == (3, 3, 3)

    def test_keyed_cube(self):
        cube = trifid_cube("KEY")
        assert cube.symbols.startswith("KEYABCD")
        assert len(set(cube.symbols)) == 27

    def test_unknown_char_defaults(self):
        cube = trifid_cube()
        assert cube.coordinates("?") == (1, 1, 1)

    def test_out_of_range_gives_filler(self):
        cube = trifid_cube()
        assert cube.char_at(4, 1, 1) == "+"
        assert cube.char_at(0, 1, 1) == "+"

    def test_coordinates_roundtrip(self):
        cube = trifid_cube("SECRET")
        for char in cube.symbols:
            assert cube.char_at(*cube.coordinates(char)) == char

    def test_invalid_symbols_rejected(self):
        with pytest.raises(ValueError):
            TrifidCube("ABC")
