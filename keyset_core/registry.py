"""
keyset_core.registry
--------------------
Capability table mapping key type URLs to key managers.

A key manager is any object exposing:

- type_url: str
- key_material_type: KeyMaterialType
- new_key_data(template_value: bytes) -> KeyData
- get_public_key_data(private_key_value: bytes) -> KeyData   (private key types only)

New key types are added by registering a manager instance. Registries are
plain objects handed to the operations that need them; there is no global one.
"""

from __future__ import annotations
import threading
from typing import Any, Dict, List

from .errors import RegistryError, UnknownKeyTypeError
from .keyset import KeyData, KeyTemplate
from .logger import get_logger

log = get_logger("keyset_core.registry")


class Registry:
    def __init__(self):
        self._managers: Dict[str, Any] = {}
        self._lock = threading.Lock()

    @classmethod
    def with_defaults(cls) -> "Registry":
        """New registry holding the built-in key managers."""
        from .key_managers import default_key_managers

        registry = cls()
        for manager in default_key_managers():
            registry.register_key_manager(manager)
        return registry

    def register_key_manager(self, manager: Any) -> None:
        type_url = manager.type_url
        with self._lock:
            existing = self._managers.get(type_url)
            if existing is not None and type(existing) is not type(manager):
                raise RegistryError(
                    f"type {type_url} is already registered with {type(existing).__name__}"
                )
            self._managers[type_url] = manager
        log.debug(f"[REGISTRY] registered {type_url}")

    def get_key_manager(self, type_url: str) -> Any:
        manager = self._managers.get(type_url)
        if manager is None:
            raise UnknownKeyTypeError(f"No manager for type {type_url} has been registered.")
        return manager

    def type_urls(self) -> List[str]:
        return sorted(self._managers)

    def new_key_data(self, template: KeyTemplate) -> KeyData:
        return self.get_key_manager(template.type_url).new_key_data(template.value)

    def get_public_key_data(self, type_url: str, private_key_value: bytes) -> KeyData:
        """Derive the public KeyData for a private key of the given type."""
        manager = self.get_key_manager(type_url)
        derive = getattr(manager, "get_public_key_data", None)
        if derive is None:
            raise RegistryError(f"{type_url} is not a private key type")
        return derive(private_key_value)
