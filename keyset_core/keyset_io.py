"""
keyset_core.io
--------------
Reader / writer capabilities for encrypted keysets.

KeysetHandle only calls read_encrypted() and write(); where the bytes live
(stream, file, keyset store, KMS-backed blob) is up to the implementation.
The built-in ones store the EncryptedKeyset record as JSON.
"""

from __future__ import annotations
import io, os
from typing import IO, Any, Optional, Union

from .keyset import EncryptedKeyset


class KeysetReader:
    def read_encrypted(self) -> EncryptedKeyset:
        raise NotImplementedError


class KeysetWriter:
    def write(self, encrypted_keyset: EncryptedKeyset) -> Any:
        raise NotImplementedError


class JsonKeysetReader(KeysetReader):
    """Reads one EncryptedKeyset JSON record from bytes, str, or a stream."""

    def __init__(self, source: Union[bytes, str, IO]):
        self._source = source

    def read_encrypted(self) -> EncryptedKeyset:
        source = self._source
        data = source.read() if hasattr(source, "read") else source
        return EncryptedKeyset.from_json(data)


class JsonKeysetWriter(KeysetWriter):
    """Writes the EncryptedKeyset JSON record to a text or binary stream."""

    def __init__(self, stream: IO):
        self._stream = stream

    def write(self, encrypted_keyset: EncryptedKeyset) -> int:
        text = encrypted_keyset.to_json()
        if isinstance(self._stream, io.TextIOBase):
            return self._stream.write(text)
        return self._stream.write(text.encode("utf-8"))


class BytesKeysetWriter(KeysetWriter):
    """Keeps the JSON record in memory; handy for tests and transports."""

    def __init__(self):
        self.data: Optional[bytes] = None

    def write(self, encrypted_keyset: EncryptedKeyset) -> int:
        self.data = encrypted_keyset.to_json().encode("utf-8")
        return len(self.data)


class FileKeysetReader(KeysetReader):
    def __init__(self, path: str):
        self.path = path

    def read_encrypted(self) -> EncryptedKeyset:
        with open(self.path, "rb") as f:
            return JsonKeysetReader(f).read_encrypted()


class FileKeysetWriter(KeysetWriter):
    def __init__(self, path: str):
        self.path = path

    def write(self, encrypted_keyset: EncryptedKeyset) -> int:
        # If no directory, default to current working directory
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "wb") as f:
            return JsonKeysetWriter(f).write(encrypted_keyset)
