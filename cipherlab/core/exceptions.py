from typing import Any


class CryptanalysisError(Exception):
    """Base exception for all cryptanalysis errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(CryptanalysisError):
    """Raised when input validation fails."""

    pass


class CiphertextTooLongError(ValidationError):
    """Raised when ciphertext exceeds maximum length."""

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Ciphertext length {length} exceeds maximum {max_length}",
            {"length": length, "max_length": max_length},
        )


class InvalidCiphertextError(ValidationError):
    """Raised when ciphertext format is invalid."""

    pass


class InvalidKeyError(ValidationError):
    """Raised by the strict entry points when a key fails validation."""

    def __init__(self, cipher: str, key: Any, reason: str | None = None):
        message = f"Invalid key for {cipher}: {key!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message,
            {"cipher": cipher, "key": repr(key), "reason": reason},
        )


class EngineError(CryptanalysisError):
    """Base exception for cipher engine errors."""

    pass


class EngineNotFoundError(EngineError):
    """Raised when requested cipher engine is not found."""

    def __init__(self, engine_name: str):
        super().__init__(
            f"Cipher engine '{engine_name}' not found",
            {"engine_name": engine_name},
        )
