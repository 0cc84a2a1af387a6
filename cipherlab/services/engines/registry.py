from typing import Type

from cipherlab.core.exceptions import EngineError, EngineNotFoundError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.base import CipherVariant


class EngineRegistry:
    """
    Closed registry of cipher variants.

    Every CipherType has exactly one variant class. The check runs when
    this module is imported, so a missing or duplicated variant fails
    fast instead of surfacing during analysis.
    """

    _engines: dict[CipherType, Type[CipherVariant]] = {}
    _instances: dict[CipherType, CipherVariant] = {}

    @classmethod
    def register(cls, engine_class: Type[CipherVariant]) -> Type[CipherVariant]:
        """
        Register a cipher variant class.

        Used as a decorator:
            @EngineRegistry.register
            class CaesarCipher(CipherVariant):
                ...

        Raises:
            EngineError: If another class already claims the cipher type
        """
        existing = cls._engines.get(engine_class.cipher_type)
        if existing is not None and existing is not engine_class:
            raise EngineError(
                f"{engine_class.__name__} and {existing.__name__} both implement "
                f"{engine_class.cipher_type.value}",
                {"cipher_type": engine_class.cipher_type.value},
            )
        cls._engines[engine_class.cipher_type] = engine_class
        return engine_class

    def get_engine(self, cipher_type: CipherType | str) -> CipherVariant:
        """
        Get the shared variant instance for a cipher type.

        Args:
            cipher_type: Cipher type, its value ("rail_fence") or its
                display name ("Rail Fence")

        Raises:
            EngineNotFoundError: If nothing matches
        """
        resolved = self._resolve(cipher_type)

        # Lazy instantiation with caching
        if resolved not in self._instances:
            self._instances[resolved] = self._engines[resolved]()

        return self._instances[resolved]

    def create_engine(self, cipher_type: CipherType | str, **kwargs) -> CipherVariant:
        """Build a new, unshared variant instance with custom arguments."""
        return self._engines[self._resolve(cipher_type)](**kwargs)

    def get_engines_by_family(self, family: CipherFamily) -> list[CipherVariant]:
        """Get all variants belonging to a cipher family, in CipherType order."""
        return [
            self.get_engine(cipher_type)
            for cipher_type in CipherType
            if self._engines[cipher_type].cipher_family == family
        ]

    def get_all_engines(self) -> list[CipherVariant]:
        """Get one instance of every variant, in CipherType order."""
        return [self.get_engine(cipher_type) for cipher_type in CipherType]

    @classmethod
    def list_registered(cls) -> list[CipherType]:
        """List all registered cipher types."""
        return [cipher_type for cipher_type in CipherType if cipher_type in cls._engines]

    @classmethod
    def is_registered(cls, cipher_type: CipherType) -> bool:
        return cipher_type in cls._engines

    @classmethod
    def verify_complete(cls) -> None:
        """
        Raise EngineError unless every CipherType has a variant.
        """
        missing = [t.value for t in CipherType if t not in cls._engines]
        if missing:
            raise EngineError(
                f"No cipher variant registered for: {', '.join(missing)}",
                {"missing": missing},
            )

    def _resolve(self, cipher_type: CipherType | str) -> CipherType:
        if isinstance(cipher_type, CipherType):
            return cipher_type
        for candidate in CipherType:
            if cipher_type in (candidate.value, candidate.display_name):
                return candidate
        raise EngineNotFoundError(str(cipher_type))


# Import variants to trigger registration
def _load_engines() -> None:
    """Load all variant modules to trigger registration."""
    from cipherlab.services.engines import (  # noqa: F401
        electromechanical,
        encoding,
        fractionating,
        monoalphabetic,
        polyalphabetic,
        transposition,
    )


# Load variants when module is imported
_load_engines()
EngineRegistry.verify_complete()
