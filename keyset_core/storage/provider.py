# keyset_core/storage/provider.py
from __future__ import annotations
from typing import Any, Dict, List

from keyset_core.errors import KeysetNotFoundError
from keyset_core.keyset import EncryptedKeyset
from keyset_core.keyset_io import KeysetReader, KeysetWriter
from keyset_core.storage.models import KeysetRecord


class KeysetStore:
    # Interface
    def upsert(self, rec: KeysetRecord) -> None:
        raise NotImplementedError

    def fetch(self, name: str) -> KeysetRecord | None:
        raise NotImplementedError

    def delete(self, name: str) -> bool:
        raise NotImplementedError

    def list_names(self) -> List[str]:
        raise NotImplementedError

    def log_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        raise NotImplementedError

    def put(self, name: str, enc: EncryptedKeyset) -> None:
        self.upsert(KeysetRecord.from_encrypted_keyset(name, enc))
        self.log_event("keyset.write", {"name": name})

    def get(self, name: str) -> EncryptedKeyset:
        rec = self.fetch(name)
        if rec is None:
            raise KeysetNotFoundError(f"no keyset named {name!r}")
        self.log_event("keyset.read", {"name": name})
        return rec.to_encrypted_keyset()

    def reader(self, name: str) -> "StoreKeysetReader":
        return StoreKeysetReader(self, name)

    def writer(self, name: str) -> "StoreKeysetWriter":
        return StoreKeysetWriter(self, name)


class StoreKeysetReader(KeysetReader):
    def __init__(self, store: KeysetStore, name: str):
        self.store = store
        self.name = name

    def read_encrypted(self) -> EncryptedKeyset:
        return self.store.get(self.name)


class StoreKeysetWriter(KeysetWriter):
    def __init__(self, store: KeysetStore, name: str):
        self.store = store
        self.name = name

    def write(self, encrypted_keyset: EncryptedKeyset) -> None:
        self.store.put(self.name, encrypted_keyset)
