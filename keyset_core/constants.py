# keyset_core/constants.py
from __future__ import annotations
from enum import Enum


class KeyMaterialType(str, Enum):
    UNKNOWN_KEYMATERIAL = "UNKNOWN_KEYMATERIAL"
    SYMMETRIC = "SYMMETRIC"
    ASYMMETRIC_PRIVATE = "ASYMMETRIC_PRIVATE"
    ASYMMETRIC_PUBLIC = "ASYMMETRIC_PUBLIC"
    REMOTE = "REMOTE"


class KeyStatus(str, Enum):
    UNKNOWN_STATUS = "UNKNOWN_STATUS"
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"
    DESTROYED = "DESTROYED"


class OutputPrefixType(str, Enum):
    UNKNOWN_PREFIX = "UNKNOWN_PREFIX"
    TINK = "TINK"
    LEGACY = "LEGACY"
    RAW = "RAW"
    CRUNCHY = "CRUNCHY"


# Envelope encryption authenticates the keyset bytes only. Changing this
# breaks every previously written keyset.
EMPTY_ASSOCIATED_DATA = b""

TYPE_URL_PREFIX = "type.keyset-core.dev/"
MAX_KEY_ID = 0xFFFFFFFF
