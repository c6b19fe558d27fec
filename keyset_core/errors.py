from __future__ import annotations
from typing import Optional


class KeysetError(Exception):
    """Base class for every failure raised by keyset_core."""
    stage: str = "keyset"

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class InvalidInputError(KeysetError):
    stage = "input"


class KeysetReadError(InvalidInputError):
    stage = "read"


class KeysetDecryptionError(InvalidInputError):
    stage = "decrypt"


class KeysetParseError(InvalidInputError):
    stage = "parse"


class KeysetEncryptionError(InvalidInputError):
    stage = "encrypt"


class KeysetDerivationError(InvalidInputError):
    stage = "derive"


class RegistryError(KeysetError):
    stage = "registry"


class UnknownKeyTypeError(RegistryError):
    pass


class KeyGenerationError(KeysetError):
    stage = "generate"


class KeysetNotFoundError(KeysetError):
    stage = "storage"


class AeadError(KeysetError):
    stage = "aead"
