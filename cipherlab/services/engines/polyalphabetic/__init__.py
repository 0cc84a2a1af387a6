"""Polyalphabetic cipher variants."""

from cipherlab.services.engines.polyalphabetic.vigenere import VigenereCipher
from cipherlab.services.engines.polyalphabetic.nihilist import NihilistCipher

__all__ = [
    "VigenereCipher",
    "NihilistCipher",
]
