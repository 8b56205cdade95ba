"""Rules and arguments sent to the system event service."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from .parcel import Parcel


class RuleType(IntEnum):
    """How a rule's text is matched against events."""

    WHOLE_WORD = 1
    PREFIX = 2
    REGULAR = 3


def _rule_type(value: int) -> int:
    try:
        return RuleType(value)
    except ValueError:
        return value


@dataclass
class QueryArgument:
    """Time range, event count and sequence range of a query."""

    begin_time: int = -1
    end_time: int = -1
    max_events: int = 0
    from_seq: int = -1
    to_seq: int = -1

    def marshal(self, parcel: Parcel) -> None:
        parcel.write_int64(self.begin_time)
        parcel.write_int64(self.end_time)
        parcel.write_int32(self.max_events)
        parcel.write_int64(self.from_seq)
        parcel.write_int64(self.to_seq)

    @classmethod
    def unmarshal(cls, parcel: Parcel) -> "QueryArgument":
        return cls(
            begin_time=parcel.read_int64(),
            end_time=parcel.read_int64(),
            max_events=parcel.read_int32(),
            from_seq=parcel.read_int64(),
            to_seq=parcel.read_int64(),
        )


@dataclass
class SysEventRule:
    """A rule selecting events to listen to, by domain and name or by tag."""

    domain: str = ""
    event_name: str = ""
    tag: str = ""
    rule_type: int = RuleType.WHOLE_WORD
    event_type: int = 0

    def marshal(self, parcel: Parcel) -> None:
        parcel.write_string(self.domain)
        parcel.write_string(self.event_name)
        parcel.write_string(self.tag)
        parcel.write_uint32(self.rule_type)
        parcel.write_uint32(self.event_type)

    @classmethod
    def unmarshal(cls, parcel: Parcel) -> "SysEventRule":
        return cls(
            domain=parcel.read_string(),
            event_name=parcel.read_string(),
            tag=parcel.read_string(),
            rule_type=_rule_type(parcel.read_uint32()),
            event_type=parcel.read_uint32(),
        )


@dataclass
class SysEventQueryRule:
    """A rule selecting stored events of a domain for a query."""

    domain: str = ""
    event_list: list[str] = field(default_factory=list)
    rule_type: int = RuleType.WHOLE_WORD
    event_type: int = 0
    condition: str = ""

    def marshal(self, parcel: Parcel) -> None:
        parcel.write_uint32(self.event_type)
        parcel.write_uint32(self.rule_type)
        parcel.write_string(self.domain)
        parcel.write_string(self.condition)
        parcel.write_string_vector(self.event_list)

    @classmethod
    def unmarshal(cls, parcel: Parcel) -> "SysEventQueryRule":
        event_type = parcel.read_uint32()
        rule_type = _rule_type(parcel.read_uint32())
        domain = parcel.read_string()
        condition = parcel.read_string()
        event_list = parcel.read_string_vector()
        return cls(
            domain=domain,
            event_list=event_list,
            rule_type=rule_type,
            event_type=event_type,
            condition=condition,
        )