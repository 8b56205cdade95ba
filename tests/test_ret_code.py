import pytest

from hisysevent.ret_code import RetCode, SysEventError, error_description


@pytest.mark.parametrize(
    "code, text",
    [
        (RetCode.ERR_SYS_EVENT_SERVICE_NOT_FOUND, "service not found."),
        (RetCode.ERR_QUERY_RULE_INVALID, "invalid query rule."),
        (RetCode.ERR_TOO_MANY_WATCHERS, "too many wathers subscribed."),
        (RetCode.ERR_QUERY_TOO_FREQUENTLY, "query too frequently."),
        (RetCode.ERR_CAN_NOT_SEND_REQ, "request sent failed."),
    ],
)
def test_known_descriptions(code, text):
    assert error_description(code) == text


def test_plain_int_is_accepted():
    assert error_description(int(RetCode.ERR_CAN_NOT_READ_PARCEL)) == "parcel read failed."


@pytest.mark.parametrize(
    "code",
    [RetCode.IPC_CALL_SUCCEED, RetCode.ERR_LISTENER_NOT_EXIST, RetCode.ERR_NO_PERMISSION, 12345],
)
def test_unknown_descriptions(code):
    assert error_description(code) == "unknown error."


def test_error_carries_code_and_description():
    err = SysEventError(int(RetCode.ERR_ADD_DEATH_RECIPIENT))
    assert err.code is RetCode.ERR_ADD_DEATH_RECIPIENT
    assert str(err) == "add death recipient failed."


def test_error_with_unlisted_code_keeps_int():
    err = SysEventError(777)
    assert err.code == 777
    assert str(err) == "unknown error."


def test_error_custom_message():
    err = SysEventError(RetCode.ERR_QUERY_RULE_INVALID, "bad rule")
    assert err.code == RetCode.ERR_QUERY_RULE_INVALID
    assert str(err) == "bad rule"