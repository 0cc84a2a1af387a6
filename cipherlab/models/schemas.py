from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ============================================================================
# Enums
# ============================================================================


class CipherFamily(str, Enum):
    """Supported cipher families."""

    MONOALPHABETIC = "monoalphabetic"
    POLYALPHABETIC = "polyalphabetic"
    ENCODING = "encoding"
    FRACTIONATING = "fractionating"
    TRANSPOSITION = "transposition"
    ELECTROMECHANICAL = "electromechanical"


class CipherType(str, Enum):
    """Specific cipher types. Every member has exactly one engine."""

    CAESAR = "caesar"
    ROT13 = "rot13"
    AFFINE = "affine"
    VIGENERE = "vigenere"
    NIHILIST = "nihilist"
    A1Z26 = "a1z26"
    BACON = "bacon"
    POLYBIUS = "polybius"
    TAP_CODE = "tap_code"
    BIFID = "bifid"
    TRIFID = "trifid"
    ADFGX = "adfgx"
    RAIL_FENCE = "rail_fence"
    ENIGMA = "enigma"

    @property
    def display_name(self) -> str:
        """Method name shown to users and matched against detector output."""
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES: dict[CipherType, str] = {
    CipherType.CAESAR: "Caesar",
    CipherType.ROT13: "ROT13",
    CipherType.AFFINE: "Affine",
    CipherType.VIGENERE: "Vigenere",
    CipherType.NIHILIST: "Nihilist",
    CipherType.A1Z26: "A1Z26",
    CipherType.BACON: "Bacon",
    CipherType.POLYBIUS: "Polybius Square",
    CipherType.TAP_CODE: "Tap Code",
    CipherType.BIFID: "Bifid",
    CipherType.TRIFID: "Trifid",
    CipherType.ADFGX: "ADFGX",
    CipherType.RAIL_FENCE: "Rail Fence",
    CipherType.ENIGMA: "Enigma",
}


class ConfidenceBucket(str, Enum):
    """Coarse confidence label derived from a ranking score."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


# ============================================================================
# Statistics Schemas
# ============================================================================


class FrequencyData(BaseModel):
    """Character frequency data."""

    character: str
    count: int
    frequency: float = Field(ge=0.0, le=1.0)


class RepeatedSequence(BaseModel):
    """An n-gram that occurs more than once, with the gaps between occurrences."""

    sequence: str
    positions: list[int]
    distances: list[int]


class StatisticsProfile(BaseModel):
    """Complete statistical analysis profile."""

    model_config = ConfigDict(from_attributes=True)

    # Basic metrics
    length: int
    letter_count: int
    unique_chars: int

    # Frequency analysis
    character_frequencies: list[FrequencyData]

    # Statistical measures
    entropy: float
    index_of_coincidence: float
    frequency_correlation: float | None = None

    # Pattern detection
    repeated_sequences: list[RepeatedSequence] = []
    kasiski_distances: list[int] = []


# ============================================================================
# Detection Schemas
# ============================================================================


class MethodPrediction(BaseModel):
    """A detector guess about the cipher that produced a ciphertext."""

    model_config = ConfigDict(frozen=True)

    method: str
    confidence: float = Field(ge=0.0, le=1.0)


# ============================================================================
# Candidate Schemas
# ============================================================================


class ReadabilityReport(BaseModel):
    """Word and sentence shape of a candidate plaintext."""

    model_config = ConfigDict(frozen=True)

    score: float
    avg_word_length: float
    sentence_count: int
    word_count: int


class ContextMatch(BaseModel):
    """Number of topic keywords from one category found in a candidate."""

    model_config = ConfigDict(frozen=True)

    category: str
    matches: int


class CandidateAnalysis(BaseModel):
    """Extra information attached to ranked candidates."""

    model_config = ConfigDict(frozen=True)

    readability: ReadabilityReport
    contexts: list[ContextMatch] = []


class CandidateResult(BaseModel):
    """A candidate plaintext produced by a brute-force search."""

    model_config = ConfigDict(frozen=True)

    method: str
    text: str
    key: str
    score: float
    method_confidence: float | None = None
    composite_score: float | None = None
    confidence: ConfidenceBucket | None = None
    analysis: CandidateAnalysis | None = None


# ============================================================================
# Key Schemas
# ============================================================================


RotorName = Literal["I", "II", "III", "IV", "V"]


def _as_letters(value: Any) -> Any:
    """Accept "ABC" as shorthand for ["A", "B", "C"]."""
    if isinstance(value, str):
        return [c for c in value.upper() if not c.isspace()]
    if isinstance(value, (list, tuple)):
        return [str(v).upper() for v in value]
    return value


class EnigmaKey(BaseModel):
    """Rotor, ring, reflector and plugboard settings for one message."""

    model_config = ConfigDict(frozen=True)

    rotors: list[RotorName] = Field(min_length=1)
    positions: list[str]
    rings: list[str]
    reflector: Literal["B", "C"] = "B"
    plugboard: str = ""

    @field_validator("rotors", mode="before")
    @classmethod
    def _split_rotors(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper().replace(",", " ").split()
        return value

    @field_validator("positions", "rings", mode="before")
    @classmethod
    def _split_letters(cls, value: Any) -> Any:
        return _as_letters(value)

    @field_validator("positions", "rings")
    @classmethod
    def _check_letters(cls, value: list[str]) -> list[str]:
        for letter in value:
            if len(letter) != 1 or not ("A" <= letter <= "Z"):
                raise ValueError(f"'{letter}' is not a single letter A-Z")
        return value

    @field_validator("reflector", mode="before")
    @classmethod
    def _upper_reflector(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("plugboard")
    @classmethod
    def _check_plugboard(cls, value: str) -> str:
        value = value.upper().strip()
        seen: set[str] = set()
        for pair in value.split():
            if len(pair) != 2 or not pair.isalpha() or not pair.isascii():
                raise ValueError(f"plugboard pair '{pair}' must be two letters")
            if pair[0] == pair[1] or seen & set(pair):
                raise ValueError(f"plugboard pair '{pair}' reuses a letter")
            seen.update(pair)
        return " ".join(value.split())

    @model_validator(mode="after")
    def _check_lengths(self) -> "EnigmaKey":
        if not (len(self.rotors) == len(self.positions) == len(self.rings)):
            raise ValueError("rotors, positions and rings must have the same length")
        return self
