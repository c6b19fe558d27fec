from typing import Any, Dict, List, Optional
from keyset_core.storage.models import KeysetRecord
from keyset_core.storage.provider import KeysetStore


class InMemoryKeysetStore(KeysetStore):
    def __init__(self):
        self.keysets: Dict[str, KeysetRecord] = {}
        self.audit = []

    def upsert(self, rec: KeysetRecord) -> None:
        self.keysets[rec.name] = rec

    def fetch(self, name: str) -> Optional[KeysetRecord]:
        return self.keysets.get(name)

    def delete(self, name: str) -> bool:
        return self.keysets.pop(name, None) is not None

    def list_names(self) -> List[str]:
        return sorted(self.keysets)

    # audit
    def log_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        self.audit.append((event_type, payload))
