"""
keyset_core
===========
Keyset lifecycle behind an opaque handle.

Provides:
- Keyset records and their canonical wire encoding
- KeysetHandle: envelope-encrypted read/write, generation, public-keyset derivation
- Registry of key managers keyed by type URL (Ed25519, X25519, AES-GCM built in)
- Keyset readers/writers and pluggable keyset stores (SQLite default)
"""

from .aead import Aead, AesGcmAead
from .constants import KeyMaterialType, KeyStatus, OutputPrefixType
from .errors import (
    KeysetError,
    InvalidInputError,
    KeysetReadError,
    KeysetDecryptionError,
    KeysetParseError,
    KeysetEncryptionError,
    KeysetDerivationError,
    RegistryError,
    UnknownKeyTypeError,
    KeyGenerationError,
    KeysetNotFoundError,
    AeadError,
)
from .keyset import EncryptedKeyset, Key, KeyData, KeyInfo, Keyset, KeysetInfo, KeyTemplate
from .keyset_handle import KeysetHandle
from .keyset_manager import KeysetManager
from .registry import Registry

__version__ = "0.1.0"
