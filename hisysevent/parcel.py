"""A flat binary message buffer and the helpers that carry objects through it."""

from __future__ import annotations

import struct
from typing import Any, Iterable, Protocol, Sequence, TypeVar

# Written ahead of a vector to mark it as empty or as holding items.
VALUE_NULL = -1
VALUE_OBJECT = 1
# The most items a vector read from a parcel may hold.
RULE_COUNT_LIMIT = 512 * 1024


class ParcelError(Exception):
    """Data could not be written to or read from a parcel."""


class Parcelable(Protocol):
    """An object that knows how to write itself to and read itself from a parcel."""

    def marshal(self, parcel: "Parcel") -> None: ...

    @classmethod
    def unmarshal(cls, parcel: "Parcel") -> Any: ...


P = TypeVar("P", bound=Parcelable)


class Parcel:
    """A little-endian message buffer read back in the order it was written.

    Remote objects cannot travel as bytes; they are kept beside the buffer
    and the buffer holds their index.
    """

    def __init__(self, data: bytes = b"") -> None:
        self._buffer = bytearray(data)
        self._pos = 0
        self._objects: list[Any] = []

    @property
    def data(self) -> bytes:
        """The bytes written so far."""
        return bytes(self._buffer)

    @property
    def remaining(self) -> int:
        """How many bytes are left to read."""
        return len(self._buffer) - self._pos

    def _pack(self, fmt: str, value: Any) -> None:
        try:
            self._buffer += struct.pack("<" + fmt, value)
        except struct.error as exc:
            raise ParcelError(f"cannot write {value!r}: {exc}") from exc

    def _unpack(self, fmt: str) -> Any:
        size = struct.calcsize("<" + fmt)
        if self._pos + size > len(self._buffer):
            raise ParcelError("not enough data left in parcel")
        (value,) = struct.unpack_from("<" + fmt, self._buffer, self._pos)
        self._pos += size
        return value

    def _write_blob(self, blob: bytes) -> None:
        self.write_int32(len(blob))
        self._buffer += blob

    def _read_blob(self) -> bytes:
        length = self.read_int32()
        if length < 0 or self._pos + length > len(self._buffer):
            raise ParcelError(f"invalid blob length {length}")
        blob = bytes(self._buffer[self._pos:self._pos + length])
        self._pos += length
        return blob

    def write_int32(self, value: int) -> None:
        self._pack("i", value)

    def read_int32(self) -> int:
        return self._unpack("i")

    def write_uint32(self, value: int) -> None:
        self._pack("I", value)

    def read_uint32(self) -> int:
        return self._unpack("I")

    def write_int64(self, value: int) -> None:
        self._pack("q", value)

    def read_int64(self) -> int:
        return self._unpack("q")

    def write_bool(self, value: bool) -> None:
        self.write_int32(1 if value else 0)

    def read_bool(self) -> bool:
        return self.read_int32() != 0

    def write_string(self, value: str) -> None:
        self._write_blob(value.encode("utf-8"))

    def read_string(self) -> str:
        try:
            return self._read_blob().decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParcelError(f"invalid string data: {exc}") from exc

    def write_string_vector(self, values: Sequence[str]) -> None:
        self.write_int32(len(values))
        for value in values:
            self.write_string(value)

    def read_string_vector(self) -> list[str]:
        return [self.read_string() for _ in range(self._read_count())]

    def write_uint32_vector(self, values: Sequence[int]) -> None:
        self.write_int32(len(values))
        for value in values:
            self.write_uint32(value)

    def read_uint32_vector(self) -> list[int]:
        return [self.read_uint32() for _ in range(self._read_count())]

    def write_int64_vector(self, values: Sequence[int]) -> None:
        self.write_int32(len(values))
        for value in values:
            self.write_int64(value)

    def read_int64_vector(self) -> list[int]:
        return [self.read_int64() for _ in range(self._read_count())]

    def write_interface_token(self, descriptor: str) -> None:
        self.write_string(descriptor)

    def read_interface_token(self) -> str:
        return self.read_string()

    def write_remote_object(self, obj: Any) -> None:
        if obj is None:
            raise ParcelError("remote object is null")
        self.write_int32(len(self._objects))
        self._objects.append(obj)

    def read_remote_object(self) -> Any:
        index = self.read_int32()
        if not 0 <= index < len(self._objects):
            raise ParcelError(f"no remote object at index {index}")
        return self._objects[index]

    def write_shared_memory(self, data: bytes) -> None:
        self._write_blob(bytes(data))

    def read_shared_memory(self) -> bytes:
        return self._read_blob()

    def write_parcelable(self, obj: Parcelable | None) -> None:
        """Write a presence flag followed by the object itself."""
        if obj is None:
            self.write_int32(0)
            return
        self.write_int32(1)
        obj.marshal(self)

    def read_parcelable(self, cls: type[P]) -> P | None:
        """Read an object written by :meth:`write_parcelable`, or None if absent."""
        if self.read_int32() == 0:
            return None
        return cls.unmarshal(self)

    def _read_count(self) -> int:
        count = self.read_int32()
        if count < 0:
            raise ParcelError(f"invalid item count {count}")
        return count


def write_vector(parcel: Parcel, items: Iterable[Parcelable]) -> None:
    """Write a list of parcelable objects, marking an empty list as null."""
    items = list(items)
    if not items:
        parcel.write_int32(VALUE_NULL)
        return
    parcel.write_int32(VALUE_OBJECT)
    parcel.write_int32(len(items))
    for item in items:
        parcel.write_parcelable(item)


def read_vector(parcel: Parcel, cls: type[P]) -> list[P]:
    """Read a list written by :func:`write_vector`."""
    if parcel.read_int32() != VALUE_OBJECT:
        return []
    size = parcel.read_int32()
    if size > RULE_COUNT_LIMIT:
        raise ParcelError(f"too many items in vector: {size}")
    result: list[P] = []
    for _ in range(size):
        item = parcel.read_parcelable(cls)
        if item is None:
            raise ParcelError("null item in vector")
        result.append(item)
    return result