import itertools
import logging
import random
from dataclasses import dataclass, field
from typing import ClassVar

from cipherlab.core.config import Settings
from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType, EnigmaKey
from cipherlab.services.engines.base import CipherKey, CipherVariant, letters_only
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.scoring.scorer import TextScorer

logger = logging.getLogger(__name__)

# name -> (wiring, notch)
ROTORS: dict[str, tuple[str, str]] = {
    "I": ("EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    "II": ("AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    "III": ("BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    "IV": ("ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    "V": ("VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
}

REFLECTORS: dict[str, str] = {
    "B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    "C": "FVPJIAOYEDRZXWGCTKUQSBNMHL",
}


def _indices(letters: str) -> tuple[int, ...]:
    return tuple(ord(c) - 65 for c in letters)


@dataclass
class EnigmaRotor:
    """
    One rotor: a fixed wiring plus a mutable position.

    Attributes:
        wiring: Permutation of 0..25
        notch: Position at which the rotor to the left steps
        position: Current rotation offset
        ring: Ring setting offset
    """

    wiring: tuple[int, ...]
    notch: int
    position: int = 0
    ring: int = 0
    inverse: tuple[int, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if sorted(self.wiring) != list(range(26)):
            raise ValueError("rotor wiring must be a permutation of 26 letters")
        inverse = [0] * 26
        for index, target in enumerate(self.wiring):
            inverse[target] = index
        self.inverse = tuple(inverse)

    @classmethod
    def named(cls, name: str, position: int = 0, ring: int = 0) -> "EnigmaRotor":
        wiring, notch = ROTORS[name]
        return cls(_indices(wiring), ord(notch) - 65, position % 26, ring % 26)

    def forward(self, x: int) -> int:
        return (self.wiring[(x + self.position - self.ring) % 26] - self.position + self.ring) % 26

    def backward(self, x: int) -> int:
        return (self.inverse[(x + self.position - self.ring) % 26] - self.position + self.ring) % 26

    def rotate(self) -> bool:
        """Advance one step; True when the new position is the notch."""
        self.position = (self.position + 1) % 26
        return self.position == self.notch


@dataclass(frozen=True)
class EnigmaReflector:
    """Fixed involutive wiring."""

    wiring: tuple[int, ...]

    def __post_init__(self) -> None:
        if any(self.wiring[self.wiring[x]] != x for x in range(26)):
            raise ValueError("reflector wiring must pair letters symmetrically")

    @classmethod
    def named(cls, name: str) -> "EnigmaReflector":
        return cls(_indices(REFLECTORS[name]))

    def reflect(self, x: int) -> int:
        return self.wiring[x]


class EnigmaMachine:
    """
    Rotor stack, reflector and plugboard.

    A machine is stateful: every processed letter steps the rotors. Use
    one machine per message, or keep one across ``process_text`` calls
    to encrypt a message in chunks. The middle rotor does not
    double-step.
    """

    def __init__(
        self,
        rotors: list[EnigmaRotor],
        reflector: EnigmaReflector,
        plugboard: dict[int, int] | None = None,
    ):
        self.rotors = rotors
        self.reflector = reflector
        self.plugboard = plugboard or {}

    @classmethod
    def from_key(cls, key: EnigmaKey) -> "EnigmaMachine":
        """Build a machine at the key's initial settings."""
        rotors = [
            EnigmaRotor.named(name, ord(position) - 65, ord(ring) - 65)
            for name, position, ring in zip(key.rotors, key.positions, key.rings)
        ]
        plugboard: dict[int, int] = {}
        for pair in key.plugboard.split():
            a, b = _indices(pair)
            plugboard[a] = b
            plugboard[b] = a
        return cls(rotors, EnigmaReflector.named(key.reflector), plugboard)

    def step(self) -> None:
        """Step the rightmost rotor, carrying left while rotors hit their notch."""
        for rotor in reversed(self.rotors):
            if not rotor.rotate():
                break

    def process(self, x: int) -> int:
        """Encipher one letter index (0-25)."""
        self.step()

        x = self.plugboard.get(x, x)
        for rotor in reversed(self.rotors):
            x = rotor.forward(x)
        x = self.reflector.reflect(x)
        for rotor in self.rotors:
            x = rotor.backward(x)
        return self.plugboard.get(x, x)

    def process_text(self, text: str) -> str:
        """Encipher the letters of ``text``; everything else is dropped."""
        return "".join(chr(self.process(ord(c) - 65) + 65) for c in letters_only(text))


@EngineRegistry.register
class EnigmaCipher(CipherVariant):
    """
    Enigma machine variant.

    Keys are EnigmaKey models, dicts or their JSON form. Decryption is
    encryption with the same starting settings. The brute-force search
    samples start positions for every choice of three rotors out of
    five, with rings at AAA, reflector B and an empty plugboard.
    """

    cipher_type = CipherType.ENIGMA
    cipher_family = CipherFamily.ELECTROMECHANICAL
    description = (
        "Simulates the rotor machine of the Second World War: a plugboard, "
        "stepping rotors and a reflector give a new substitution for every letter."
    )
    key_help = (
        "Rotors (I-V), start positions (A-Z), ring settings (A-Z), reflector (B or C) "
        'and optional plugboard pairs. Example: {"rotors": ["I", "II", "III"], '
        '"positions": "AAA", "rings": "AAA", "reflector": "B", "plugboard": "AB CD"}'
    )

    ROTOR_NAMES: ClassVar[tuple[str, ...]] = tuple(ROTORS)

    def __init__(
        self,
        scorer: TextScorer | None = None,
        settings: Settings | None = None,
        max_candidates: int | None = None,
        positions_per_combination: int | None = None,
        seed: int | None = None,
    ):
        super().__init__(scorer, settings)
        self.max_candidates = max_candidates or self.settings.enigma_max_candidates
        self.positions_per_combination = (
            positions_per_combination or self.settings.enigma_positions_per_combination
        )
        self.seed = self.settings.enigma_seed if seed is None else seed

    def _parse_key(self, key: CipherKey, text: str) -> EnigmaKey:
        if isinstance(key, EnigmaKey):
            return key
        if isinstance(key, str):
            return EnigmaKey.model_validate_json(key)
        if isinstance(key, dict):
            return EnigmaKey.model_validate(key)
        raise TypeError("Enigma key must be an EnigmaKey, a dict or JSON")

    def format_key(self, key: CipherKey) -> str:
        return self._parse_key(key, "").model_dump_json()

    def _encrypt(self, text: str, key: EnigmaKey) -> str:
        return EnigmaMachine.from_key(key).process_text(text)

    def _decrypt(self, text: str, key: EnigmaKey) -> str:
        return self._encrypt(text, key)

    def sample_keys(self) -> list[EnigmaKey]:
        """
        Deterministic sample of keys for the brute-force search.

        The same seed always yields the same keys, capped at
        ``max_candidates``.
        """
        rng = random.Random(self.seed)
        keys = []
        for rotors in itertools.combinations(self.ROTOR_NAMES, 3):
            for _ in range(self.positions_per_combination):
                if len(keys) >= self.max_candidates:
                    logger.debug("Enigma search capped at %d keys", self.max_candidates)
                    return keys
                positions = "".join(chr(rng.randrange(26) + 65) for _ in rotors)
                keys.append(
                    EnigmaKey(rotors=list(rotors), positions=positions, rings="AAA", reflector="B")
                )
        return keys

    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """Decrypt under every sampled key, best quick score first."""
        candidates = []
        for key in self.sample_keys():
            plaintext = self._decrypt(text, key)
            candidates.append(
                self.candidate(plaintext, key.model_dump_json(), self.quick_score(plaintext))
            )

        candidates.sort(key=lambda c: c.score, reverse=True)
        return candidates
