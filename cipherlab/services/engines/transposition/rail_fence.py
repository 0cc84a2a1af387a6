from cipherlab.core.config import Settings
from cipherlab.models.schemas import CandidateResult, CipherFamily, CipherType
from cipherlab.services.engines.base import CipherKey, CipherVariant, strict_int
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.scoring.scorer import TextScorer


def zigzag(length: int, rails: int) -> list[int]:
    """Rail index of each position when writing ``length`` characters."""
    pattern = []
    rail, step = 0, 1
    for _ in range(length):
        pattern.append(rail)
        rail += step
        if rail == rails - 1:
            step = -1
        elif rail == 0:
            step = 1
    return pattern


@EngineRegistry.register
class RailFenceCipher(CipherVariant):
    """
    Rail fence variant.

    Writes the text in a zig-zag across N rails and reads the rails top
    to bottom. Every character takes part, including spaces.
    """

    cipher_type = CipherType.RAIL_FENCE
    cipher_family = CipherFamily.TRANSPOSITION
    description = (
        "Writes the message diagonally across a number of rails, bouncing "
        "between the top and bottom rail, then reads it off rail by rail."
    )
    key_help = "Number of rails, at least 2 and no more than the text length. Example: 3"

    def __init__(
        self,
        scorer: TextScorer | None = None,
        settings: Settings | None = None,
        max_rails: int | None = None,
    ):
        super().__init__(scorer, settings)
        self.max_rails = max_rails or self.settings.rail_fence_max_rails

    def _parse_key(self, key: CipherKey, text: str) -> int:
        if isinstance(key, dict):
            key = key.get("rails", key.get("key"))
        rails = strict_int(key)
        if rails <= 1:
            raise ValueError("at least 2 rails are needed")
        if rails > len(text):
            raise ValueError("more rails than characters")
        return rails

    def format_key(self, key: CipherKey) -> str:
        if isinstance(key, dict):
            key = key.get("rails", key.get("key"))
        return str(strict_int(key))

    def _encrypt(self, text: str, key: int) -> str:
        fence = [[] for _ in range(key)]
        for char, rail in zip(text, zigzag(len(text), key)):
            fence[rail].append(char)
        return "".join("".join(rail) for rail in fence)

    def _decrypt(self, text: str, key: int) -> str:
        pattern = zigzag(len(text), key)
        lengths = [pattern.count(rail) for rail in range(key)]

        fence = []
        position = 0
        for length in lengths:
            fence.append(iter(text[position:position + length]))
            position += length

        return "".join(next(fence[rail]) for rail in pattern)

    def brute_force_decrypt(self, text: str) -> list[CandidateResult]:
        """Try 2..max_rails rails (bounded by the text length)."""
        candidates = []
        for rails in range(2, min(self.max_rails, len(text)) + 1):
            plaintext = self._decrypt(text, rails)
            candidates.append(self.candidate(plaintext, str(rails), self.quick_score(plaintext)))
        return self.plausible(candidates)
