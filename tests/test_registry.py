import threading
import pytest
from cryptography.hazmat.primitives.asymmetric import x25519

from keyset_core import InvalidInputError, KeyMaterialType, Registry, RegistryError, UnknownKeyTypeError
from keyset_core.errors import KeyGenerationError, KeysetDerivationError
from keyset_core.key_managers import (
    AES_GCM_KEY_TYPE, ED25519_PRIVATE_KEY_TYPE, X25519_PRIVATE_KEY_TYPE, X25519_PUBLIC_KEY_TYPE,
    AesGcmKeyManager, Ed25519PrivateKeyManager,
)
from keyset_core.keyset import KeyTemplate
from keyset_core import templates


def test_defaults_registered():
    registry = Registry.with_defaults()
    assert set(registry.type_urls()) == {
        ED25519_PRIVATE_KEY_TYPE, X25519_PRIVATE_KEY_TYPE, AES_GCM_KEY_TYPE,
    }


def test_registries_are_independent():
    a = Registry()
    b = Registry.with_defaults()
    a.register_key_manager(AesGcmKeyManager())
    assert a.type_urls() == [AES_GCM_KEY_TYPE]
    assert len(b.type_urls()) == 3


def test_unknown_type():
    with pytest.raises(UnknownKeyTypeError):
        Registry().get_key_manager("nope")


def test_conflicting_registration_rejected():
    class Impostor:
        type_url = ED25519_PRIVATE_KEY_TYPE

    registry = Registry.with_defaults()
    registry.register_key_manager(Ed25519PrivateKeyManager())
    with pytest.raises(RegistryError):
        registry.register_key_manager(Impostor())


def test_custom_key_type_registers_by_table_entry():
    class ToyPrivateKeyManager:
        type_url = "toy/private"
        key_material_type = KeyMaterialType.ASYMMETRIC_PRIVATE

        def new_key_data(self, template_value):
            raise NotImplementedError

        def get_public_key_data(self, value):
            from keyset_core import KeyData
            return KeyData("toy/public", value[::-1], KeyMaterialType.ASYMMETRIC_PUBLIC)

    registry = Registry()
    registry.register_key_manager(ToyPrivateKeyManager())
    kd = registry.get_public_key_data("toy/private", b"abc")
    assert kd.type_url == "toy/public"
    assert kd.value == b"cba"


def test_public_key_data_requires_private_manager():
    registry = Registry.with_defaults()
    with pytest.raises(RegistryError):
        registry.get_public_key_data(AES_GCM_KEY_TYPE, b"k" * 16)


def test_x25519_public_derivation():
    registry = Registry.with_defaults()
    priv = registry.new_key_data(templates.X25519)
    pub = registry.get_public_key_data(priv.type_url, priv.value)
    expected = x25519.X25519PrivateKey.from_private_bytes(priv.value).public_key().public_bytes_raw()
    assert pub.type_url == X25519_PUBLIC_KEY_TYPE
    assert pub.value == expected
    assert pub.key_material_type == KeyMaterialType.ASYMMETRIC_PUBLIC


def test_invalid_private_bytes():
    registry = Registry.with_defaults()
    for type_url in (ED25519_PRIVATE_KEY_TYPE, X25519_PRIVATE_KEY_TYPE):
        with pytest.raises(KeysetDerivationError) as exc:
            registry.get_public_key_data(type_url, b"short")
        assert isinstance(exc.value, InvalidInputError)
        assert exc.value.stage == "derive"


def test_aes_gcm_templates():
    registry = Registry.with_defaults()
    assert len(registry.new_key_data(templates.AES128_GCM).value) == 16
    assert len(registry.new_key_data(templates.AES256_GCM).value) == 32
    with pytest.raises(KeyGenerationError):
        registry.new_key_data(KeyTemplate(AES_GCM_KEY_TYPE, b'{"keySize": 24}'))
    with pytest.raises(KeyGenerationError):
        registry.new_key_data(KeyTemplate(AES_GCM_KEY_TYPE, b"not json"))


def test_concurrent_lookups():
    registry = Registry.with_defaults()
    priv = registry.new_key_data(templates.ED25519)
    results = []

    def worker():
        for _ in range(50):
            results.append(registry.get_public_key_data(priv.type_url, priv.value).value)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(results) == 200
    assert len(set(results)) == 1
