"""
keyset_core.keyset
------------------
Record types for keysets and their envelope form.

- KeyData / Key / Keyset: the keyset schema (ordered entries + primary key id)
- KeysetInfo: material-free view of a keyset for introspection
- EncryptedKeyset: ciphertext of a serialized keyset, as handed to writers
- KeyTemplate: opaque parameters a key manager generates keys from

The wire encoding is canonical JSON with base64 key material, so the same
keyset always serializes to the same bytes.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple
import json

from .constants import KeyMaterialType, KeyStatus, OutputPrefixType, MAX_KEY_ID
from .errors import KeysetParseError
from .utils import b64e, b64d, canonical_json


@dataclass(frozen=True)
class KeyData:
    type_url: str
    value: bytes = field(repr=False)  # key material, kept out of reprs and logs
    key_material_type: KeyMaterialType = KeyMaterialType.UNKNOWN_KEYMATERIAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "typeUrl": self.type_url,
            "value": b64e(self.value),
            "keyMaterialType": self.key_material_type.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyData":
        return cls(
            type_url=_require(data, "typeUrl", str),
            value=b64d(_require(data, "value", str)),
            key_material_type=KeyMaterialType(_require(data, "keyMaterialType", str)),
        )


@dataclass(frozen=True)
class Key:
    key_data: KeyData
    key_id: int
    status: KeyStatus = KeyStatus.ENABLED
    output_prefix_type: OutputPrefixType = OutputPrefixType.TINK

    def with_key_data(self, key_data: KeyData) -> "Key":
        """Copy of this entry carrying different key data."""
        return replace(self, key_data=key_data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyData": self.key_data.to_dict(),
            "keyId": self.key_id,
            "status": self.status.value,
            "outputPrefixType": self.output_prefix_type.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Key":
        return cls(
            key_data=KeyData.from_dict(_require(data, "keyData", dict)),
            key_id=_key_id(_require(data, "keyId", int)),
            status=KeyStatus(_require(data, "status", str)),
            output_prefix_type=OutputPrefixType(_require(data, "outputPrefixType", str)),
        )


@dataclass(frozen=True)
class KeyInfo:
    type_url: str
    status: KeyStatus
    key_id: int
    output_prefix_type: OutputPrefixType

    def to_dict(self) -> Dict[str, Any]:
        return {
            "typeUrl": self.type_url,
            "status": self.status.value,
            "keyId": self.key_id,
            "outputPrefixType": self.output_prefix_type.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyInfo":
        return cls(
            type_url=data["typeUrl"],
            status=KeyStatus(data["status"]),
            key_id=int(data["keyId"]),
            output_prefix_type=OutputPrefixType(data["outputPrefixType"]),
        )


@dataclass(frozen=True)
class KeysetInfo:
    primary_key_id: int
    key_info: Tuple[KeyInfo, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primaryKeyId": self.primary_key_id,
            "keyInfo": [k.to_dict() for k in self.key_info],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeysetInfo":
        return cls(
            primary_key_id=int(data["primaryKeyId"]),
            key_info=tuple(KeyInfo.from_dict(k) for k in data.get("keyInfo", [])),
        )


@dataclass(frozen=True)
class Keyset:
    """
    Ordered key entries plus the id of the primary entry.

    `primary_key_id` is expected to name an entry in `key`, but that is not
    checked here; parsing and construction accept any uint32.
    """
    key: Tuple[Key, ...] = ()
    primary_key_id: int = 0

    def __post_init__(self):
        # accept any iterable of keys, store an immutable tuple
        object.__setattr__(self, "key", tuple(self.key))

    def __len__(self) -> int:
        return len(self.key)

    def key_ids(self) -> Tuple[int, ...]:
        return tuple(k.key_id for k in self.key)

    def info(self) -> KeysetInfo:
        return KeysetInfo(
            primary_key_id=self.primary_key_id,
            key_info=tuple(
                KeyInfo(
                    type_url=k.key_data.type_url,
                    status=k.status,
                    key_id=k.key_id,
                    output_prefix_type=k.output_prefix_type,
                )
                for k in self.key
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": [k.to_dict() for k in self.key],
            "primaryKeyId": self.primary_key_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Keyset":
        keys = _require(data, "key", list)
        for entry in keys:
            if not isinstance(entry, dict):
                raise ValueError("key entries must be objects")
        return cls(
            key=tuple(Key.from_dict(k) for k in keys),
            primary_key_id=_key_id(_require(data, "primaryKeyId", int)),
        )

    def serialize(self) -> bytes:
        """Canonical byte encoding used as the envelope plaintext."""
        return canonical_json(self.to_dict())

    @classmethod
    def parse(cls, data: bytes) -> "Keyset":
        """
        Parse the canonical encoding back into a Keyset.

        Raises KeysetParseError for anything that is not a well-formed keyset
        record. The message never echoes the input, which may be key material.
        """
        try:
            obj = json.loads(bytes(data).decode("utf-8"))
            if not isinstance(obj, dict):
                raise ValueError("top-level value must be an object")
            return cls.from_dict(obj)
        except (UnicodeDecodeError, ValueError, KeyError, TypeError, RecursionError) as e:
            raise KeysetParseError(
                f"Could not parse the decrypted data as a Keyset ({type(e).__name__})"
            ) from e


@dataclass(frozen=True)
class EncryptedKeyset:
    encrypted_keyset: bytes
    keyset_info: Optional[KeysetInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"encryptedKeyset": b64e(self.encrypted_keyset)}
        if self.keyset_info is not None:
            d["keysetInfo"] = self.keyset_info.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EncryptedKeyset":
        info = data.get("keysetInfo")
        return cls(
            encrypted_keyset=b64d(_require(data, "encryptedKeyset", str)),
            keyset_info=KeysetInfo.from_dict(info) if info else None,
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_json(cls, text: str | bytes) -> "EncryptedKeyset":
        obj = json.loads(text)
        if not isinstance(obj, dict):
            raise ValueError("encrypted keyset must be a JSON object")
        return cls.from_dict(obj)


@dataclass(frozen=True)
class KeyTemplate:
    type_url: str
    value: bytes = b""
    output_prefix_type: OutputPrefixType = OutputPrefixType.TINK


def _require(data: Dict[str, Any], name: str, kind: type) -> Any:
    if name not in data:
        raise KeyError(name)
    value = data[name]
    # bool is an int subclass; a flag is never a valid id
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise TypeError(f"{name} must be {kind.__name__}")
    return value


def _key_id(value: int) -> int:
    if not 0 <= value <= MAX_KEY_ID:
        raise ValueError("key id out of uint32 range")
    return value
