from typing import ClassVar

from cipherlab.core.config import Settings
from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType
from cipherlab.services.engines.base import CipherKey, CipherVariant
from cipherlab.services.engines.encoding.polybius import DEFAULT_KEY_LABEL
from cipherlab.services.engines.grids import TRIFID_ALPHABET, TrifidCube, trifid_cube
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.scoring.scorer import TextScorer


def parse_cube_keyword(key: CipherKey) -> str:
    """Keep the A-Z and '+' characters of an optional cube keyword."""
    if key is None:
        return ""
    if isinstance(key, dict):
        key = key.get("keyword", key.get("key", ""))
    if not isinstance(key, str):
        raise TypeError("cube keyword must be a string")
    keyword = "".join(c for c in key.upper() if c in TRIFID_ALPHABET)
    if key and not keyword:
        raise ValueError("cube keyword needs at least one letter or '+'")
    return keyword


@EngineRegistry.register
class TrifidCipher(CipherVariant):
    """
    Trifid cipher variant.

    Each letter has a (layer, row, column) position in a 3x3x3 cube.
    The message is cut into periods; within a period the layer digits,
    then the row digits, then the column digits are written out and
    read back three at a time. The last period may be short.
    """

    cipher_type = CipherType.TRIFID
    cipher_family = CipherFamily.FRACTIONATING
    description = (
        "Turns each letter into three cube coordinates and mixes them "
        "period by period before converting them back into letters."
    )
    key_help = (
        "Optional keyword that rearranges the cube, followed by the rest of "
        "the alphabet and '+'. Leave empty for the standard cube."
    )

    COMMON_KEYS: ClassVar[tuple[str, ...]] = ("SECRET", "CIPHER", "KEY", "TRIFID", "")

    def __init__(
        self,
        scorer: TextScorer | None = None,
        settings: Settings | None = None,
        period: int | None = None,
    ):
        super().__init__(scorer, settings)
        self.period = period or self.settings.trifid_period

    def _parse_key(self, key: CipherKey, text: str) -> TrifidCube:
        return trifid_cube(parse_cube_keyword(key))

    def format_key(self, key: CipherKey) -> str:
        return parse_cube_keyword(key) or DEFAULT_KEY_LABEL

    def _groups(self, text: str):
        letters = "".join(c for c in text.upper() if c in TRIFID_ALPHABET)
        for start in range(0, len(letters), self.period):
            yield letters[start:start + self.period]

    def _encrypt(self, text: str, key: TrifidCube) -> str:
        result = []
        for group in self._groups(text):
            positions = [key.coordinates(c) for c in group]
            stream = [position[axis] for axis in range(3) for position in positions]
            result.extend(key.char_at(*stream[i:i + 3]) for i in range(0, len(stream), 3))
        return "".join(result)

    def _decrypt(self, text: str, key: TrifidCube) -> str:
        result = []
        for group in self._groups(text):
            stream = [n for c in group for n in key.coordinates(c)]
            size = len(group)
            result.extend(
                key.char_at(stream[j], stream[j + size], stream[j + 2 * size])
                for j in range(size)
            )
        return "".join(result)

    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """Try the standard cube and a few common keywords."""
        candidates = []
        for keyword in self.COMMON_KEYS:
            plaintext = self._decrypt(text, trifid_cube(keyword))
            candidates.append(
                self.candidate(plaintext, keyword or DEFAULT_KEY_LABEL, self.quick_score(plaintext))
            )
        return self.plausible(candidates)
