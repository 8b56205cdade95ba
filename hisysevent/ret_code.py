"""Result codes of the system event service and their descriptions."""

from __future__ import annotations

from enum import IntEnum


class RetCode(IntEnum):
    """Result codes returned by the system event service."""

    IPC_CALL_SUCCEED = 0

    ERR_LISTENER_NOT_EXIST = -10
    ERR_SYS_EVENT_SERVICE_NOT_FOUND = -11

    ERR_PARCEL_DATA_IS_NULL = -12
    ERR_REMOTE_SERVICE_IS_NULL = -13
    ERR_CAN_NOT_WRITE_DESCRIPTOR = -14
    ERR_CAN_NOT_WRITE_PARCEL = -15
    ERR_CAN_NOT_WRITE_REMOTE_OBJECT = -16
    ERR_CAN_NOT_SEND_REQ = -17
    ERR_CAN_NOT_READ_PARCEL = -18
    ERR_NO_PERMISSION = -19
    ERR_LISTENER_STATUS_INVALID = -20
    ERR_LISTENERS_EMPTY = -21
    ERR_ADD_DEATH_RECIPIENT = -22
    ERR_QUERY_RULE_INVALID = -23
    ERR_DEBUG_MODE_SET_REPEAT = -24

    ERR_TOO_MANY_WATCH_RULES = -25
    ERR_TOO_MANY_WATCHERS = -26
    ERR_TOO_MANY_QUERY_RULES = -27
    ERR_TOO_MANY_CONCURRENT_QUERIES = -28
    ERR_QUERY_OVER_TIME = -29
    ERR_QUERY_OVER_LIMIT = -30
    ERR_QUERY_TOO_FREQUENTLY = -31

    ERR_TOO_MANY_EVENTS = -32
    ERR_EXPORT_FREQUENCY_OVER_LIMIT = -33
    ERR_REMOVE_SUBSCRIBE = -34

    ERR_QUERY_ARG_NULL = -35
    ERR_QUERY_CALLBACK_NULL = -36


_DESCRIPTIONS: dict[int, str] = {
    RetCode.ERR_SYS_EVENT_SERVICE_NOT_FOUND: "service not found.",
    RetCode.ERR_PARCEL_DATA_IS_NULL: "parcel data is null.",
    RetCode.ERR_REMOTE_SERVICE_IS_NULL: "remote service is null.",
    RetCode.ERR_CAN_NOT_WRITE_DESCRIPTOR: "descriptor wrote failed.",
    RetCode.ERR_CAN_NOT_WRITE_PARCEL: "parcel wrote failed.",
    RetCode.ERR_CAN_NOT_WRITE_REMOTE_OBJECT: "remote object wrote failed.",
    RetCode.ERR_CAN_NOT_SEND_REQ: "request sent failed.",
    RetCode.ERR_CAN_NOT_READ_PARCEL: "parcel read failed.",
    RetCode.ERR_ADD_DEATH_RECIPIENT: "add death recipient failed.",
    RetCode.ERR_QUERY_RULE_INVALID: "invalid query rule.",
    RetCode.ERR_TOO_MANY_WATCHERS: "too many wathers subscribed.",
    RetCode.ERR_QUERY_TOO_FREQUENTLY: "query too frequently.",
}

_UNKNOWN = "unknown error."


def error_description(code: int) -> str:
    """Return the human readable description of a result code."""
    return _DESCRIPTIONS.get(int(code), _UNKNOWN)


class SysEventError(Exception):
    """A failed call to the system event service, carrying its result code."""

    def __init__(self, code: int, message: str | None = None) -> None:
        try:
            self.code: int = RetCode(int(code))
        except ValueError:
            self.code = int(code)
        self.message = message if message is not None else error_description(code)
        super().__init__(self.message)