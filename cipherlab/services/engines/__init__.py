"""Cipher variants and their closed registry."""

from cipherlab.services.engines.base import CipherVariant, DecryptionResult
from cipherlab.services.engines.registry import EngineRegistry

__all__ = [
    "CipherVariant",
    "DecryptionResult",
    "EngineRegistry",
]
