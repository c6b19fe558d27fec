# keyset_core/templates.py
from __future__ import annotations
from .constants import OutputPrefixType
from .key_managers import (
    AES_GCM_KEY_TYPE,
    ED25519_PRIVATE_KEY_TYPE,
    X25519_PRIVATE_KEY_TYPE,
)
from .keyset import KeyTemplate
from .utils import canonical_json


def aes_gcm_template(key_size: int, output_prefix_type: OutputPrefixType = OutputPrefixType.TINK) -> KeyTemplate:
    return KeyTemplate(AES_GCM_KEY_TYPE, canonical_json({"keySize": key_size}), output_prefix_type)


ED25519 = KeyTemplate(ED25519_PRIVATE_KEY_TYPE)
ED25519_RAW = KeyTemplate(ED25519_PRIVATE_KEY_TYPE, output_prefix_type=OutputPrefixType.RAW)
X25519 = KeyTemplate(X25519_PRIVATE_KEY_TYPE)
AES128_GCM = aes_gcm_template(16)
AES256_GCM = aes_gcm_template(32)
