"""Monoalphabetic cipher variants."""

from cipherlab.services.engines.monoalphabetic.caesar import CaesarCipher
from cipherlab.services.engines.monoalphabetic.rot13 import ROT13Cipher
from cipherlab.services.engines.monoalphabetic.affine import AffineCipher

__all__ = [
    "CaesarCipher",
    "ROT13Cipher",
    "AffineCipher",
]
