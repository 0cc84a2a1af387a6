"""Transposition cipher variants."""

from cipherlab.services.engines.transposition.rail_fence import RailFenceCipher

__all__ = [
    "RailFenceCipher",
]
