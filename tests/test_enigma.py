"""Tests for the Enigma machine simulation."""

import pytest
from pydantic import ValidationError

from cipherlab.models.schemas import EnigmaKey
from cipherlab.services.engines.electromechanical.enigma import (
    EnigmaCipher,
    EnigmaMachine,
    EnigmaReflector,
    EnigmaRotor,
)


class TestEnigmaMachine:
    """Test the rotor machine itself."""

    @pytest.fixture
    def key(self):
        return EnigmaKey(rotors=["I", "II", "III"], positions="AAA", rings="AAA", reflector="B")

    def test_known_output(self, key):
        assert EnigmaMachine.from_key(key).process_text("AAAAA") == "BDZGO"

    def test_no_letter_encrypts_to_itself(self, key):
        plaintext = "A" * 100
        ciphertext = EnigmaMachine.from_key(key).process_text(plaintext)
        assert all(p != c for p, c in zip(plaintext, ciphertext))

    def test_streaming_matches_one_shot(self, key):
        machine = EnigmaMachine.from_key(key)
        chunked = machine.process_text("HELLO") + machine.process_text("WORLD")
        assert chunked == EnigmaMachine.from_key(key).process_text("HELLOWORLD")

    def test_rightmost_rotor_steps_first(self, key):
        machine = EnigmaMachine.from_key(key)
        machine.step()
        assert [r.position for r in machine.rotors] == [0, 0, 1]

    def test_notch_carries_left(self):
        key = EnigmaKey(rotors="I II III", positions="AAU", rings="AAA")
        machine = EnigmaMachine.from_key(key)
        machine.step()
        # Rotor III reaches its notch at V
        assert [r.position for r in machine.rotors] == [0, 1, 21]

    def test_invalid_rotor_wiring(self):
        with pytest.raises(ValueError):
            EnigmaRotor(wiring=tuple(range(25)) + (0,), notch=0)

    def test_invalid_reflector_wiring(self):
        with pytest.raises(ValueError):
            EnigmaReflector(wiring=tuple((x + 1) % 26 for x in range(26)))


class TestEnigmaKey:
    """Test key validation."""

    def test_string_shorthand(self):
        key = EnigmaKey(rotors="i, ii, iii", positions="abc", rings="AAA", reflector="c")
        assert key.rotors == ["I", "II", "III"]
        assert key.positions == ["A", "B", "C"]
        assert key.reflector == "C"

    def test_plugboard_normalized(self):
        key = EnigmaKey(rotors=["I"], positions="A", rings="A", plugboard=" ab  cd ")
        assert key.plugboard == "AB CD"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"rotors": ["VI", "II", "III"]},
            {"positions": "AB"},
            {"rings": "A1A"},
            {"reflector": "A"},
            {"plugboard": "AA"},
            {"plugboard": "AB BC"},
            {"plugboard": "ABC"},
            {"rotors": []},
        ],
    )
    def test_invalid_keys(self, overrides):
        fields = {"rotors": ["I", "II", "III"], "positions": "AAA", "rings": "AAA"}
        fields.update(overrides)
        with pytest.raises(ValidationError):
            EnigmaKey(**fields)


class TestEnigmaCipher:
    """Test the Enigma cipher variant."""

    @pytest.fixture
    def engine(self):
        return EnigmaCipher()

    @pytest.fixture
    def key_dict(self):
        return {
            "rotors": ["II", "IV", "V"],
            "positions": "BLA",
            "rings": "BUL",
            "reflector": "B",
            "plugboard": "AV BS CG DL FU HZ IN KM OW RX",
        }

    def test_encrypt_is_involution(self, engine, key_dict):
        plaintext = "THEENEMYWILLATTACKATDAWN"
        ciphertext = engine.encrypt(plaintext, key_dict)
        assert ciphertext != plaintext
        assert engine.encrypt(ciphertext, key_dict) == plaintext

    def test_decrypt_equals_encrypt(self, engine, key_dict):
        assert engine.decrypt("ATTACK", key_dict) == engine.encrypt("ATTACK", key_dict)

    def test_non_letters_dropped_and_uppercased(self, engine):
        key = {"rotors": ["I", "II", "III"], "positions": "AAA", "rings": "AAA"}
        assert engine.encrypt("aa aaa!", key) == "BDZGO"

    def test_key_forms_agree(self, engine, key_dict):
        model = EnigmaKey(**key_dict)
        expected = engine.encrypt("HELLO", model)
        assert engine.encrypt("HELLO", key_dict) == expected
        assert engine.encrypt("HELLO", model.model_dump_json()) == expected

    def test_invalid_key_passes_through(self, engine):
        key = {"rotors": ["VI", "II", "III"], "positions": "AAA", "rings": "AAA"}
        assert engine.validate("HELLO", key) is False
        assert engine.encrypt("HELLO", key) == "HELLO"
        assert engine.encrypt("HELLO", "not json") == "HELLO"
        assert engine.encrypt("HELLO", 42) == "HELLO"

    def test_format_key_is_json(self, engine, key_dict):
        formatted = engine.format_key(key_dict)
        assert EnigmaKey.model_validate_json(formatted) == EnigmaKey(**key_dict)

    def test_brute_force_sample_size(self, engine):
        # Ten rotor choices, five start positions each
        candidates = engine.brute_force_decrypt("BDZGO")
        assert len(candidates) == 50

    def test_brute_force_is_deterministic(self):
        first = EnigmaCipher().brute_force_decrypt("QWERTYUIOP")
        second = EnigmaCipher().brute_force_decrypt("QWERTYUIOP")
        assert [c.key for c in first] == [c.key for c in second]

    def test_brute_force_sorted(self, engine):
        scores = [c.score for c in engine.brute_force_decrypt("QWERTYUIOP")]
        assert scores == sorted(scores, reverse=True)

    def test_max_candidates(self):
        engine = EnigmaCipher(max_candidates=7)
        assert len(engine.sample_keys()) == 7
        assert len(engine.brute_force_decrypt("ABC")) == 7

    def test_seed_changes_sample(self):
        assert EnigmaCipher(seed=1).sample_keys() != EnigmaCipher(seed=2).sample_keys()

    def test_sample_keys_use_defaults(self, engine):
        for key in engine.sample_keys():
            assert len(key.rotors) == 3
            assert key.rings == ["A", "A", "A"]
            assert key.reflector == "B"
            assert key.plugboard == ""
