"""Callback side of the system event service: bulk strings, stubs and proxies."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Protocol, Sequence

from .parcel import Parcel, ParcelError

_LOG = logging.getLogger(__name__)

SYS_EVENT_CALLBACK_DESCRIPTOR = "ohos.hiviewdfx.ISysEventCallback"
QUERY_SYS_EVENT_CALLBACK_DESCRIPTOR = "ohos.hiviewdfx.IQuerySysEventCallback"

# Request codes of the event callback.
HANDLE = 0
# Request codes of the query callback.
ON_QUERY = 0
ON_COMPLETE = 1

SHARED_MEMORY_NAME = "HiSysEventService SharedMemory"
SHARED_MEMORY_SIZE = 1024 * 769


def _c_string(text: str) -> bytes:
    """Encode ``text`` as UTF-8, cut at its first NUL as a C string would be."""
    return text.encode("utf-8").split(b"\0", 1)[0]


def write_bulk_data(parcel: Parcel, items: Sequence[str]) -> None:
    """Write strings as a size table plus one shared block of NUL-terminated texts."""
    encoded = [_c_string(item) for item in items]
    sizes = [len(chunk) + 1 for chunk in encoded]
    block = b"".join(chunk + b"\0" for chunk in encoded)
    if len(block) > SHARED_MEMORY_SIZE:
        _LOG.error("writing shared memory failed.")
        raise ParcelError(
            f"bulk data of {len(block)} bytes exceeds shared memory of {SHARED_MEMORY_SIZE} bytes")
    parcel.write_uint32_vector(sizes)
    parcel.write_shared_memory(block)


def read_bulk_data(parcel: Parcel) -> list[str]:
    """Read strings written by :func:`write_bulk_data`."""
    sizes = parcel.read_uint32_vector()
    block = parcel.read_shared_memory()
    result: list[str] = []
    offset = 0
    for size in sizes:
        if offset + size > len(block):
            raise ParcelError("bulk data item lies outside the shared memory")
        chunk = block[offset:offset + size].split(b"\0", 1)[0]
        result.append(chunk.decode("utf-8", errors="replace"))
        offset += size
    return result


def _check_descriptor(data: Parcel, expected: str) -> None:
    remote = data.read_interface_token()
    if remote != expected:
        _LOG.error("read descriptor failed.")
        raise ParcelError(f"interface descriptor mismatch: {remote!r}")


class SysEventCallbackStub(ABC):
    """Receives pushed events and hands them to :meth:`handle`."""

    descriptor = SYS_EVENT_CALLBACK_DESCRIPTOR

    def on_remote_request(self, code: int, data: Parcel, reply: Parcel) -> None:
        """Decode one request; raise ParcelError on bad data, ValueError on unknown codes."""
        _check_descriptor(data, self.descriptor)
        if code != HANDLE:
            raise ValueError(f"unknown request code {code}")
        domain = data.read_string()
        event_name = data.read_string()
        event_type = data.read_uint32()
        event_detail = data.read_string()
        self.handle(domain, event_name, event_type, event_detail)

    @abstractmethod
    def handle(self, domain: str, event_name: str, event_type: int, event_detail: str) -> None:
        """Deal with one event pushed by the service."""


class QuerySysEventCallbackStub(ABC):
    """Receives query results and completion notices."""

    descriptor = QUERY_SYS_EVENT_CALLBACK_DESCRIPTOR

    def on_remote_request(self, code: int, data: Parcel, reply: Parcel) -> None:
        """Decode one request; raise ParcelError on bad data, ValueError on unknown codes."""
        _check_descriptor(data, self.descriptor)
        if code == ON_QUERY:
            sys_events = read_bulk_data(data)
            seq = data.read_int64_vector()
            self.on_query(sys_events, seq)
        elif code == ON_COMPLETE:
            reason = data.read_int32()
            total = data.read_int32()
            seq = data.read_int64()
            self.on_complete(reason, total, seq)
        else:
            raise ValueError(f"unknown request code {code}")

    @abstractmethod
    def on_query(self, sys_events: list[str], seq: list[int]) -> None:
        """Deal with one batch of queried events and their sequence numbers."""

    @abstractmethod
    def on_complete(self, reason: int, total: int, seq: int) -> None:
        """Deal with the end of a query."""


class EventListener(Protocol):
    """What a :class:`ListenerProxy` forwards to."""

    def on_event(self, domain: str, event_name: str, event_type: int,
                 event_detail: str) -> None: ...

    def on_service_died(self) -> None: ...


class QueryCallback(Protocol):
    """What a :class:`QueryProxy` forwards to."""

    def on_query(self, sys_events: list[str], seq: list[int]) -> None: ...

    def on_complete(self, reason: int, total: int, seq: int) -> None: ...


class ListenerProxy(SysEventCallbackStub):
    """Forwards pushed events and service death to a listener."""

    def __init__(self, listener: EventListener | Any | None) -> None:
        self.listener = listener

    def handle(self, domain: str, event_name: str, event_type: int, event_detail: str) -> None:
        if self.listener is not None:
            self.listener.on_event(domain, event_name, event_type, event_detail)

    def on_remote_died(self) -> None:
        """Tell the listener the service went away."""
        if self.listener is not None:
            self.listener.on_service_died()


class QueryProxy(QuerySysEventCallbackStub):
    """Forwards query results to a query callback."""

    def __init__(self, callback: QueryCallback | Any | None) -> None:
        self.callback = callback

    def on_query(self, sys_events: Sequence[str], seq: Sequence[int]) -> None:
        if self.callback is not None:
            self.callback.on_query(list(sys_events), list(seq))

    def on_complete(self, reason: int, total: int, seq: int) -> None:
        if self.callback is not None:
            self.callback.on_complete(reason, total, seq)