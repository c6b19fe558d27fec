# keyset_core/storage/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from keyset_core.keyset import EncryptedKeyset, KeysetInfo
from keyset_core.utils import now_ts


@dataclass
class KeysetRecord:
    """
    Storage-level representation of a named encrypted keyset.

    Only ciphertext and the material-free KeysetInfo are ever stored.
    """
    name: str
    encrypted_keyset: bytes
    keyset_info: Optional[KeysetInfo] = None
    updated_at: str = field(default_factory=now_ts)

    def to_encrypted_keyset(self) -> EncryptedKeyset:
        return EncryptedKeyset(self.encrypted_keyset, self.keyset_info)

    @classmethod
    def from_encrypted_keyset(cls, name: str, enc: EncryptedKeyset) -> "KeysetRecord":
        return cls(name=name, encrypted_keyset=enc.encrypted_keyset, keyset_info=enc.keyset_info)
