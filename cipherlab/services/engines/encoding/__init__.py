"""Fixed-table and grid encodings."""

from cipherlab.services.engines.encoding.a1z26 import A1Z26Cipher
from cipherlab.services.engines.encoding.bacon import BaconCipher
from cipherlab.services.engines.encoding.polybius import PolybiusCipher
from cipherlab.services.engines.encoding.tap_code import TapCodeCipher

__all__ = [
    "A1Z26Cipher",
    "BaconCipher",
    "PolybiusCipher",
    "TapCodeCipher",
]
