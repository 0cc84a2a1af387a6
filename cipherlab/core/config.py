from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Toolkit settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CIPHERLAB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Logging
    log_level: str = "WARNING"

    # Analysis settings
    max_ciphertext_length: int = 100_000
    max_results: int = Field(default=10, ge=1)
    max_parallel_engines: int = Field(default=4, ge=1)
    default_method_confidence: float = Field(default=0.3, ge=0.0, le=1.0)
    high_confidence_score: float = 10.0
    medium_confidence_score: float = 5.0
    quick_score_threshold: float = 0.5

    # Per-cipher search bounds
    vigenere_max_key_length: int = Field(default=10, ge=2)
    vigenere_min_ngram: int = Field(default=3, ge=2)
    rail_fence_max_rails: int = Field(default=10, ge=2)
    trifid_period: int = Field(default=5, ge=1)
    enigma_max_candidates: int = Field(default=100, ge=1)
    enigma_positions_per_combination: int = Field(default=5, ge=1)
    enigma_seed: int = 1940


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
