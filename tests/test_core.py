import pytest

from keyset_core import AeadError, AesGcmAead
from keyset_core.logger import get_logger
from keyset_core.utils import b64d, b64e, canonical_json


def test_aes_gcm_encrypt_decrypt():
    aead = AesGcmAead.generate()
    ct = aead.encrypt(b"hi", b"")
    assert ct != aead.encrypt(b"hi", b"")  # fresh nonce
    assert aead.decrypt(ct, b"") == b"hi"


def test_aes_gcm_associated_data_is_bound():
    aead = AesGcmAead.generate(16)
    ct = aead.encrypt(b"hi", b"ctx")
    with pytest.raises(AeadError):
        aead.decrypt(ct, b"other")


def test_aes_gcm_rejects_bad_key_and_short_ciphertext():
    with pytest.raises(AeadError):
        AesGcmAead(b"short")
    with pytest.raises(AeadError):
        AesGcmAead.generate().decrypt(b"tiny", b"")


def test_utils():
    assert b64d(b64e(b"\x00\xff")) == b"\x00\xff"
    with pytest.raises(ValueError):
        b64d("not base64!")
    assert canonical_json({"b": 1, "a": [1, 2]}) == b'{"a":[1,2],"b":1}'


def test_logger_level_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("KEYSET_LOG_LEVEL", "debug")
    log = get_logger("keyset_core.test_env", to_file=str(tmp_path / "logs" / "k.log"))
    assert log.level == 10
    assert (tmp_path / "logs" / "k.log").exists()
