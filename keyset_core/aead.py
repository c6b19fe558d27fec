"""
keyset_core.aead
----------------
AEAD capability used as the master key for envelope encryption.

Anything with encrypt(plaintext, associated_data) and
decrypt(ciphertext, associated_data) works as a master key; KMS clients,
HSM wrappers and test fakes only need to match this interface.
AesGcmAead is the local implementation backed by `cryptography`.
"""

from __future__ import annotations
import os
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .errors import AeadError

NONCE_SIZE = 12
TAG_SIZE = 16


class Aead:
    """Interface for authenticated encryption with associated data."""

    def encrypt(self, plaintext: bytes, associated_data: bytes) -> bytes:
        raise NotImplementedError

    def decrypt(self, ciphertext: bytes, associated_data: bytes) -> bytes:
        raise NotImplementedError


class AesGcmAead(Aead):
    """
    AES-GCM with a random 96-bit nonce per message.

    Ciphertext layout: nonce (12 bytes) || ciphertext || tag (16 bytes).
    """

    def __init__(self, key: bytes):
        if len(key) not in (16, 32):
            raise AeadError(f"AES-GCM key must be 16 or 32 bytes, got {len(key)}")
        self._aes = AESGCM(key)

    @classmethod
    def generate(cls, key_size: int = 32) -> "AesGcmAead":
        return cls(os.urandom(key_size))

    def encrypt(self, plaintext: bytes, associated_data: Optional[bytes] = b"") -> bytes:
        nonce = os.urandom(NONCE_SIZE)
        return nonce + self._aes.encrypt(nonce, plaintext, associated_data or None)

    def decrypt(self, ciphertext: bytes, associated_data: Optional[bytes] = b"") -> bytes:
        if len(ciphertext) < NONCE_SIZE + TAG_SIZE:
            raise AeadError("ciphertext too short")
        nonce, body = ciphertext[:NONCE_SIZE], ciphertext[NONCE_SIZE:]
        try:
            return self._aes.decrypt(nonce, body, associated_data or None)
        except InvalidTag as e:
            raise AeadError("decryption failed: authentication tag mismatch") from e

    def __repr__(self) -> str:
        return "AesGcmAead(<redacted>)"
