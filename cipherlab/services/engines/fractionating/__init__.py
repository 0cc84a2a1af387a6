"""Fractionating cipher variants."""

from cipherlab.services.engines.fractionating.bifid import BifidCipher
from cipherlab.services.engines.fractionating.trifid import TrifidCipher
from cipherlab.services.engines.fractionating.adfgx import ADFGXCipher

__all__ = [
    "BifidCipher",
    "TrifidCipher",
    "ADFGXCipher",
]
