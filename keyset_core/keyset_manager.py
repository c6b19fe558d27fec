"""
keyset_core.keyset_manager
--------------------------
Builds keysets from key templates. This is the key-manager collaborator
behind KeysetHandle.generate_new(); it owns a working copy of a keyset and
hands out immutable KeysetHandles over it.
"""

from __future__ import annotations
import secrets
from typing import List, Optional

from .constants import KeyStatus, MAX_KEY_ID
from .errors import InvalidInputError
from .keyset import Key, Keyset, KeyTemplate
from .keyset_handle import KeysetHandle
from .logger import get_logger
from .registry import Registry

log = get_logger("keyset_core.keyset_manager")


class KeysetManager:
    def __init__(self, keyset: Optional[Keyset] = None, registry: Optional[Registry] = None):
        if keyset is None:
            keyset = Keyset()
        self._keys: List[Key] = list(keyset.key)
        self._primary_key_id = keyset.primary_key_id
        self._registry = registry if registry is not None else Registry.with_defaults()

    @classmethod
    def new(cls, template: KeyTemplate, registry: Optional[Registry] = None) -> "KeysetManager":
        manager = cls(registry=registry)
        manager.rotate(template)
        return manager

    def add(self, template: KeyTemplate) -> int:
        """Generate a key from the template and append it. Returns its key id."""
        key_data = self._registry.new_key_data(template)
        key_id = self._new_key_id()
        self._keys.append(
            Key(
                key_data=key_data,
                key_id=key_id,
                status=KeyStatus.ENABLED,
                output_prefix_type=template.output_prefix_type,
            )
        )
        log.debug(f"[KEYSET] added key {key_id} type={template.type_url}")
        return key_id

    def rotate(self, template: KeyTemplate) -> int:
        """Add a key and make it primary."""
        key_id = self.add(template)
        self.set_primary(key_id)
        return key_id

    def set_primary(self, key_id: int) -> None:
        for key in self._keys:
            if key.key_id == key_id:
                if key.status != KeyStatus.ENABLED:
                    raise InvalidInputError(f"key {key_id} is not enabled", stage="generate")
                self._primary_key_id = key_id
                return
        raise InvalidInputError(f"key {key_id} not found", stage="generate")

    def get_keyset_handle(self) -> KeysetHandle:
        return KeysetHandle(Keyset(key=tuple(self._keys), primary_key_id=self._primary_key_id))

    def _new_key_id(self) -> int:
        taken = {k.key_id for k in self._keys}
        while True:
            key_id = secrets.randbelow(MAX_KEY_ID) + 1
            if key_id not in taken:
                return key_id
