"""Rotor machine variants."""

from cipherlab.services.engines.electromechanical.enigma import (
    EnigmaCipher,
    EnigmaMachine,
    EnigmaReflector,
    EnigmaRotor,
)

__all__ = [
    "EnigmaCipher",
    "EnigmaMachine",
    "EnigmaReflector",
    "EnigmaRotor",
]
