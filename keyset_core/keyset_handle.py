"""
keyset_core.keyset_handle
-------------------------
KeysetHandle owns one in-memory Keyset and is the only way keysets cross the
serialization boundary:

- read():  reader -> EncryptedKeyset -> master AEAD decrypt -> parse -> handle
- write(): serialize -> master AEAD encrypt -> EncryptedKeyset -> writer
- generate_new(): delegate to KeysetManager
- get_public_keyset_handle(): derive public entries through a Registry

Envelope encryption always uses empty associated data.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Any, List, Optional

from .constants import EMPTY_ASSOCIATED_DATA, KeyMaterialType
from .errors import (
    InvalidInputError,
    KeysetDecryptionError,
    KeysetDerivationError,
    KeysetEncryptionError,
    KeysetParseError,
    KeysetReadError,
)
from .keyset import EncryptedKeyset, Key, Keyset, KeysetInfo, KeyTemplate
from .logger import get_logger
from .registry import Registry

log = get_logger("keyset_core.keyset_handle")


class KeysetHandle:
    def __init__(self, keyset: Keyset):
        self._keyset = keyset

    @property
    def keyset(self) -> Keyset:
        """The owned keyset. Immutable; callers cannot change it through this view."""
        return self._keyset

    def keyset_info(self) -> KeysetInfo:
        return self._keyset.info()

    def __repr__(self) -> str:
        # never print key material
        return f"KeysetHandle({self.keyset_info()!r})"

    # ------------------------------------------------------------------
    # Envelope read / write
    # ------------------------------------------------------------------
    @classmethod
    def read(cls, reader: Any, master_key_aead: Any) -> "KeysetHandle":
        """
        Read an encrypted keyset and decrypt it with the master key.

        Raises:
            KeysetReadError: the reader failed
            KeysetDecryptionError: the master key could not decrypt the data
            KeysetParseError: the plaintext is not a keyset
        """
        try:
            enc_keyset = reader.read_encrypted()
            if not isinstance(enc_keyset, EncryptedKeyset):
                raise TypeError(f"reader returned {type(enc_keyset).__name__}, not EncryptedKeyset")
            ciphertext = enc_keyset.encrypted_keyset
        except Exception as e:
            log.warning(f"[KEYSET READ] reader failed: {e}")
            raise KeysetReadError(f"Error reading encrypted keyset data: {e}") from e

        keyset = _decrypt(ciphertext, master_key_aead)
        log.debug(f"[KEYSET READ] ok keys={len(keyset)} primary={keyset.primary_key_id}")
        return cls(keyset)

    def write(self, writer: Any, master_key_aead: Any) -> Any:
        """
        Encrypt the keyset with the master key and hand it to the writer.

        The writer is called once, only after encryption succeeded; whatever it
        returns is returned unchanged and its exceptions propagate as-is.
        """
        if writer is None:
            raise InvalidInputError("Writer must be non-null", stage="write")
        enc_keyset = _encrypt(self._keyset, master_key_aead)
        log.debug(f"[KEYSET WRITE] encrypted keys={len(self._keyset)}")
        return writer.write(enc_keyset)

    # ------------------------------------------------------------------
    # Generation / derivation
    # ------------------------------------------------------------------
    @classmethod
    def generate_new(cls, template: KeyTemplate, registry: Optional[Registry] = None) -> "KeysetHandle":
        from .keyset_manager import KeysetManager

        return KeysetManager.new(template, registry).get_keyset_handle()

    def get_public_keyset_handle(self, registry: Optional[Registry] = None) -> "KeysetHandle":
        """
        New handle whose keyset holds the public counterpart of every entry.

        Every entry must be ASYMMETRIC_PRIVATE; one that is not fails the whole
        derivation. Order, key ids, statuses, output prefixes and the primary
        key id are kept. This handle is left untouched.
        """
        if registry is None:
            registry = Registry.with_defaults()
        public_keys: List[Key] = []
        for key in self._keyset.key:
            public_keys.append(_extract_public_key(key, registry))
        log.debug(f"[KEYSET DERIVE] derived {len(public_keys)} public keys")
        return KeysetHandle(
            Keyset(key=tuple(public_keys), primary_key_id=self._keyset.primary_key_id)
        )


def _encrypt(keyset: Keyset, master_key_aead: Any) -> EncryptedKeyset:
    try:
        ciphertext = master_key_aead.encrypt(keyset.serialize(), EMPTY_ASSOCIATED_DATA)
    except Exception as e:
        log.warning(f"[KEYSET WRITE] encryption failed: {e}")
        raise KeysetEncryptionError(f"Encryption of the keyset failed: {e}") from e
    return EncryptedKeyset(encrypted_keyset=ciphertext, keyset_info=keyset.info())


def _decrypt(ciphertext: bytes, master_key_aead: Any) -> Keyset:
    try:
        plaintext = master_key_aead.decrypt(ciphertext, EMPTY_ASSOCIATED_DATA)
    except Exception as e:
        log.warning(f"[KEYSET READ] decryption failed: {e}")
        raise KeysetDecryptionError(f"Error decrypting encrypted keyset: {e}") from e
    try:
        return Keyset.parse(plaintext)
    except KeysetParseError:
        log.warning("[KEYSET READ] decrypted data is not a keyset")
        raise


def _extract_public_key(key: Key, registry: Registry) -> Key:
    if key.key_data.key_material_type != KeyMaterialType.ASYMMETRIC_PRIVATE:
        raise KeysetDerivationError(
            f"Key material of key {key.key_id} is not of type ASYMMETRIC_PRIVATE"
        )
    public_key_data = registry.get_public_key_data(key.key_data.type_url, key.key_data.value)
    return key.with_key_data(
        replace(public_key_data, key_material_type=KeyMaterialType.ASYMMETRIC_PUBLIC)
    )
