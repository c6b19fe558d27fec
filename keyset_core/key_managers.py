"""
keyset_core.key_managers
------------------------
Built-in key managers backed by `cryptography`:

- Ed25519 (signing): private keys derive Ed25519 public keys
- X25519 (key agreement): private keys derive X25519 public keys
- AES-GCM: symmetric keys, no public counterpart

Key material is the raw key encoding (32 bytes for the curve keys, 16 or 32
for AES-GCM).
"""

from __future__ import annotations
import json, os
from typing import List

from cryptography.hazmat.primitives.asymmetric import ed25519, x25519

from .constants import KeyMaterialType, TYPE_URL_PREFIX
from .errors import KeyGenerationError, KeysetDerivationError
from .keyset import KeyData

ED25519_PRIVATE_KEY_TYPE = TYPE_URL_PREFIX + "Ed25519PrivateKey"
ED25519_PUBLIC_KEY_TYPE = TYPE_URL_PREFIX + "Ed25519PublicKey"
X25519_PRIVATE_KEY_TYPE = TYPE_URL_PREFIX + "X25519PrivateKey"
X25519_PUBLIC_KEY_TYPE = TYPE_URL_PREFIX + "X25519PublicKey"
AES_GCM_KEY_TYPE = TYPE_URL_PREFIX + "AesGcmKey"


class Ed25519PrivateKeyManager:
    type_url = ED25519_PRIVATE_KEY_TYPE
    public_type_url = ED25519_PUBLIC_KEY_TYPE
    key_material_type = KeyMaterialType.ASYMMETRIC_PRIVATE

    def new_key_data(self, template_value: bytes = b"") -> KeyData:
        sk = ed25519.Ed25519PrivateKey.generate()
        return KeyData(self.type_url, sk.private_bytes_raw(), self.key_material_type)

    def get_public_key_data(self, private_key_value: bytes) -> KeyData:
        try:
            sk = ed25519.Ed25519PrivateKey.from_private_bytes(private_key_value)
        except ValueError as e:
            raise KeysetDerivationError(f"invalid Ed25519 private key: {e}") from e
        return KeyData(
            self.public_type_url,
            sk.public_key().public_bytes_raw(),
            KeyMaterialType.ASYMMETRIC_PUBLIC,
        )


class X25519PrivateKeyManager:
    type_url = X25519_PRIVATE_KEY_TYPE
    public_type_url = X25519_PUBLIC_KEY_TYPE
    key_material_type = KeyMaterialType.ASYMMETRIC_PRIVATE

    def new_key_data(self, template_value: bytes = b"") -> KeyData:
        sk = x25519.X25519PrivateKey.generate()
        return KeyData(self.type_url, sk.private_bytes_raw(), self.key_material_type)

    def get_public_key_data(self, private_key_value: bytes) -> KeyData:
        try:
            sk = x25519.X25519PrivateKey.from_private_bytes(private_key_value)
        except ValueError as e:
            raise KeysetDerivationError(f"invalid X25519 private key: {e}") from e
        return KeyData(
            self.public_type_url,
            sk.public_key().public_bytes_raw(),
            KeyMaterialType.ASYMMETRIC_PUBLIC,
        )


class AesGcmKeyManager:
    """Template value is JSON: {"keySize": 16 | 32}."""
    type_url = AES_GCM_KEY_TYPE
    key_material_type = KeyMaterialType.SYMMETRIC

    def new_key_data(self, template_value: bytes = b"") -> KeyData:
        try:
            params = json.loads(template_value or b"{}")
            key_size = int(params.get("keySize", 32))
        except (ValueError, AttributeError, TypeError) as e:
            raise KeyGenerationError(f"invalid AES-GCM key format: {e}") from e
        if key_size not in (16, 32):
            raise KeyGenerationError(f"unsupported AES-GCM key size: {key_size}")
        return KeyData(self.type_url, os.urandom(key_size), self.key_material_type)


def default_key_managers() -> List[object]:
    return [Ed25519PrivateKeyManager(), X25519PrivateKeyManager(), AesGcmKeyManager()]
