from __future__ import annotations

import pytest

from hisysevent.parcel import Parcel, ParcelError, read_vector, write_vector
from hisysevent.rules import QueryArgument, RuleType, SysEventQueryRule, SysEventRule


def test_query_argument_defaults_and_round_trip():
    default = QueryArgument()
    assert (default.begin_time, default.end_time, default.max_events) == (-1, -1, 0)
    assert (default.from_seq, default.to_seq) == (-1, -1)

    argument = QueryArgument(1502965663170, 1502965664170, 10, 5, 357)
    parcel = Parcel()
    argument.marshal(parcel)
    assert QueryArgument.unmarshal(Parcel(parcel.data)) == argument


def test_query_argument_field_order_on_wire():
    parcel = Parcel()
    QueryArgument(100, 200, 10, 5, 357).marshal(parcel)
    assert parcel.read_int64() == 100
    assert parcel.read_int64() == 200
    assert parcel.read_int32() == 10
    assert parcel.read_int64() == 5
    assert parcel.read_int64() == 357


def test_query_argument_truncated_raises():
    parcel = Parcel()
    QueryArgument(1, 2, 3).marshal(parcel)
    with pytest.raises(ParcelError):
        QueryArgument.unmarshal(Parcel(parcel.data[:-4]))


def test_sys_event_rule_default_is_whole_word():
    rule = SysEventRule(tag="TAG1")
    assert rule.rule_type == RuleType.WHOLE_WORD == 1
    assert (rule.domain, rule.event_name, rule.event_type) == ("", "", 0)


def test_sys_event_rule_round_trip():
    rule = SysEventRule("KERNEL_VENDOR", "POWER_KEY", "TAG1", RuleType.PREFIX, 1)
    parcel = Parcel()
    rule.marshal(parcel)
    restored = SysEventRule.unmarshal(Parcel(parcel.data))
    assert restored == rule
    assert restored.rule_type is RuleType.PREFIX


def test_sys_event_rule_keeps_unknown_rule_type():
    rule = SysEventRule("DEMO", "EVENT_NAME_A", rule_type=9)
    parcel = Parcel()
    rule.marshal(parcel)
    assert SysEventRule.unmarshal(parcel).rule_type == 9


def test_sys_event_query_rule_round_trip():
    rule = SysEventQueryRule(
        "USERIAM_PIN", ["USERIAM_TEMPLATE_CHANGE", "BREAK"], RuleType.WHOLE_WORD, 3, "cond"
    )
    parcel = Parcel()
    rule.marshal(parcel)
    assert SysEventQueryRule.unmarshal(Parcel(parcel.data)) == rule


def test_sys_event_query_rule_writes_types_first():
    parcel = Parcel()
    SysEventQueryRule("DEMO", ["EVENT_NAME_A"], RuleType.REGULAR, 4, "").marshal(parcel)
    assert parcel.read_uint32() == 4
    assert parcel.read_uint32() == RuleType.REGULAR
    assert parcel.read_string() == "DEMO"
    assert parcel.read_string() == ""
    assert parcel.read_string_vector() == ["EVENT_NAME_A"]


def test_sys_event_query_rule_truncated_raises():
    parcel = Parcel()
    SysEventQueryRule("DEMO", ["A", "B"]).marshal(parcel)
    with pytest.raises(ParcelError):
        SysEventQueryRule.unmarshal(Parcel(parcel.data[:-2]))


def test_rule_vectors_round_trip():
    rules = [
        SysEventRule("KERNEL_VENDOR", "POWER_KEY"),
        SysEventRule(tag="TAG1", rule_type=RuleType.REGULAR, event_type=2),
    ]
    query_rules = [SysEventQueryRule("HIVIEWDFX", ["BREAK"], event_type=3)]
    parcel = Parcel()
    write_vector(parcel, rules)
    write_vector(parcel, query_rules)
    assert read_vector(parcel, SysEventRule) == rules
    assert read_vector(parcel, SysEventQueryRule) == query_rules
    assert parcel.remaining == 0