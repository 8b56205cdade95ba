from __future__ import annotations

from dataclasses import dataclass

import pytest

from hisysevent.parcel import (
    RULE_COUNT_LIMIT,
    VALUE_NULL,
    VALUE_OBJECT,
    Parcel,
    ParcelError,
    read_vector,
    write_vector,
)


@dataclass
class _Item:
    name: str
    number: int

    def marshal(self, parcel: Parcel) -> None:
        parcel.write_string(self.name)
        parcel.write_int64(self.number)

    @classmethod
    def unmarshal(cls, parcel: Parcel) -> "_Item":
        return cls(parcel.read_string(), parcel.read_int64())


def test_int32_wire_format_is_little_endian():
    parcel = Parcel()
    parcel.write_int32(1)
    assert parcel.data == b"\x01\x00\x00\x00"


def test_scalars_round_trip_in_order():
    parcel = Parcel()
    parcel.write_int32(-7)
    parcel.write_uint32(4294967295)
    parcel.write_int64(9223372036854775800)
    parcel.write_bool(True)
    parcel.write_bool(False)
    reader = Parcel(parcel.data)
    assert reader.read_int32() == -7
    assert reader.read_uint32() == 4294967295
    assert reader.read_int64() == 9223372036854775800
    assert reader.read_bool() is True
    assert reader.read_bool() is False
    assert reader.remaining == 0


def test_strings_and_vectors_round_trip():
    parcel = Parcel()
    parcel.write_string("KERNEL_VENDOR")
    parcel.write_string("")
    parcel.write_string_vector(["123", "456", "789"])
    parcel.write_uint32_vector([1, 2, 3])
    parcel.write_int64_vector([-1, 1502965663170])
    parcel.write_interface_token("ohos.hiviewdfx.ISysEventService")
    parcel.write_shared_memory(b"abc\x00def")
    reader = Parcel(parcel.data)
    assert reader.read_string() == "KERNEL_VENDOR"
    assert reader.read_string() == ""
    assert reader.read_string_vector() == ["123", "456", "789"]
    assert reader.read_uint32_vector() == [1, 2, 3]
    assert reader.read_int64_vector() == [-1, 1502965663170]
    assert reader.read_interface_token() == "ohos.hiviewdfx.ISysEventService"
    assert reader.read_shared_memory() == b"abc\x00def"


def test_read_past_end_raises():
    with pytest.raises(ParcelError):
        Parcel().read_int32()
    with pytest.raises(ParcelError):
        Parcel(b"\x01\x00").read_int64()


def test_write_out_of_range_raises():
    with pytest.raises(ParcelError):
        Parcel().write_int32(2**31)
    with pytest.raises(ParcelError):
        Parcel().write_uint32(-1)


def test_truncated_string_raises():
    parcel = Parcel()
    parcel.write_string("DEMO")
    with pytest.raises(ParcelError):
        Parcel(parcel.data[:-1]).read_string()


def test_remote_objects_travel_beside_the_buffer():
    marker = object()
    parcel = Parcel()
    parcel.write_remote_object(marker)
    assert parcel.read_remote_object() is marker
    with pytest.raises(ParcelError):
        parcel.write_remote_object(None)
    with pytest.raises(ParcelError):
        Parcel(parcel.data).read_remote_object()


def test_parcelable_round_trip_and_null():
    parcel = Parcel()
    parcel.write_parcelable(_Item("DEMO", 42))
    parcel.write_parcelable(None)
    assert parcel.read_parcelable(_Item) == _Item("DEMO", 42)
    assert parcel.read_parcelable(_Item) is None


def test_empty_vector_is_written_as_null_marker():
    parcel = Parcel()
    write_vector(parcel, [])
    assert parcel.read_int32() == VALUE_NULL
    assert parcel.remaining == 0
    write_vector(parcel, [])
    assert read_vector(Parcel(parcel.data), _Item) == []


def test_vector_round_trip():
    items = [_Item("A", 1), _Item("B", -2), _Item("C", 3)]
    parcel = Parcel()
    write_vector(parcel, items)
    assert read_vector(parcel, _Item) == items
    assert parcel.remaining == 0


def test_vector_over_limit_raises():
    parcel = Parcel()
    parcel.write_int32(VALUE_OBJECT)
    parcel.write_int32(RULE_COUNT_LIMIT + 1)
    with pytest.raises(ParcelError):
        read_vector(parcel, _Item)


def test_vector_with_null_item_raises():
    parcel = Parcel()
    parcel.write_int32(VALUE_OBJECT)
    parcel.write_int32(1)
    parcel.write_parcelable(None)
    with pytest.raises(ParcelError):
        read_vector(parcel, _Item)