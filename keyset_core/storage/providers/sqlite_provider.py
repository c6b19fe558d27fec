from __future__ import annotations
from typing import Optional, Dict, Any, List
import json, sqlite3, os

from keyset_core.keyset import KeysetInfo
from keyset_core.storage.provider import KeysetStore
from keyset_core.storage.models import KeysetRecord
from keyset_core.utils import now_ts


class SQLiteKeysetStore(KeysetStore):
    def __init__(self, path="db/keysets.db"):
        # If no directory, default to current working directory
        dir_path = os.path.dirname(path) or "."
        os.makedirs(dir_path, exist_ok=True)
        self.db = sqlite3.connect(path, check_same_thread=False)
        self._init()

    def _init(self) -> None:
        c = self.db.cursor()
        c.execute("""CREATE TABLE IF NOT EXISTS keysets(
            name TEXT PRIMARY KEY,
            encrypted_keyset BLOB NOT NULL,
            keyset_info TEXT,
            updated_at TEXT NOT NULL
        )""")
        c.execute("""CREATE TABLE IF NOT EXISTS audit(
            ts TEXT,
            event_type TEXT,
            payload TEXT
        )""")
        self.db.commit()

    def upsert(self, rec: KeysetRecord) -> None:
        info = json.dumps(rec.keyset_info.to_dict(), sort_keys=True) if rec.keyset_info else None
        self.db.execute(
            "INSERT INTO keysets(name,encrypted_keyset,keyset_info,updated_at) VALUES(?,?,?,?) "
            "ON CONFLICT(name) DO UPDATE SET encrypted_keyset=excluded.encrypted_keyset, "
            "keyset_info=excluded.keyset_info, updated_at=excluded.updated_at",
            (rec.name, rec.encrypted_keyset, info, rec.updated_at)
        )
        self.db.commit()

    def fetch(self, name: str) -> Optional[KeysetRecord]:
        cur = self.db.execute(
            "SELECT name,encrypted_keyset,keyset_info,updated_at FROM keysets WHERE name=?", (name,)
        )
        row = cur.fetchone()
        if not row:
            return None
        name, blob, info, updated_at = row
        return KeysetRecord(
            name=name,
            encrypted_keyset=bytes(blob),
            keyset_info=KeysetInfo.from_dict(json.loads(info)) if info else None,
            updated_at=updated_at,
        )

    def delete(self, name: str) -> bool:
        cur = self.db.execute("DELETE FROM keysets WHERE name=?", (name,))
        self.db.commit()
        return cur.rowcount > 0

    def list_names(self) -> List[str]:
        cur = self.db.execute("SELECT name FROM keysets ORDER BY name")
        return [r[0] for r in cur.fetchall()]

    def log_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        self.db.execute("INSERT INTO audit(ts,event_type,payload) VALUES(?,?,?)",
                        (now_ts(), event_type, json.dumps(payload, separators=(",", ":"), sort_keys=True)))
        self.db.commit()

    def close(self):
        self.db.close()
