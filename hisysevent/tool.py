"""The command line front end: option parsing, checks and subscription or query."""

from __future__ import annotations

import os
import re
import sys
import threading
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Protocol, Sequence, TextIO

from .ret_code import RetCode, SysEventError, error_description
from .rules import QueryArgument, RuleType, SysEventQueryRule, SysEventRule
from .tool_output import ToolListener, ToolQuery

ARG_SELECTION = "vrc:o:n:t:lS:s:E:e:m:dhg:"
INVALID_EVENT_TYPE = 0
DEFAULT_TIME_STAMP = -1
DEFAULT_MAX_EVENTS = 10000
_SECONDS_TO_MILLIS = 1000
_REGEX_LENGTH_LIMIT = 32

_LLONG_MIN = -(2 ** 63)
_LLONG_MAX = 2 ** 63 - 1

_TIME_FORMAT = re.compile(
    r"[0-9]{4}-"
    r"((0[13578]|1[02])-(0[1-9]|[12][0-9]|3[01])|(0[2469]|11)-(0[1-9]|[12][0-9]|30))"
    r" ([01][0-9]|2[0-3])(:[0-5][0-9]){2}"
)

_HELP_LINES = (
    "hisysevent [[-v] -r [-d | -c [WHOLE_WORD|PREFIX|REGULAR] -t <tag> "
    "| -c [WHOLE_WORD|PREFIX|REGULAR] -o <domain> -n <eventName> "
    "| -g [FAULT|STATISTIC|SECURITY|BEHAVIOR]] "
    "| -l [[-s <begin time> -e <end time> | -S <formatted begin time> -E <formatted end time>] "
    "-m <count> -c [WHOLE_WORD] -o <domain> -n <eventName> -g [FAULT|STATISTIC|SECURITY|BEHAVIOR]]]",
    "-r,    subscribe on all domains, event names and tags.",
    "-r -c [WHOLE_WORD|PREFIX|REGULAR] -t <tag>, subscribe on tag.",
    "-r -c [WHOLE_WORD|PREFIX|REGULAR] -o <domain> -n <eventName>, subscribe on domain and event name.",
    "-r -g [FAULT|STATISTIC|SECURITY|BEHAVIOR], subscribe on event type.",
    "-r -d set debug mode, both options must appear at the same time.",
    "-l -s <begin time> -e <end time> -m <max hisysevent count>"
    ", get history hisysevent log with time stamps, end time should not be "
    "earlier than begin time.",
    "-l -S <formatted begin time> -E <formatted end time> -m <max hisysevent count>"
    ", get history hisysevent log with formatted time string, end time should not be "
    "earlier than begin time.",
    "-l -c [WHOLE_WORD] -o <domain> -n <eventName> -m <max hisysevent count>"
    ", get history hisysevent log with domain and event name.",
    "-l -g [FAULT|STATISTIC|SECURITY|BEHAVIOR] -m <max hisysevent count>"
    ", get history hisysevent log with event type.",
    "-v,    open valid event checking mode.",
    "-h,    help manual.",
)


class EventType(IntEnum):
    """Kinds of system events."""

    FAULT = 1
    STATISTIC = 2
    SECURITY = 3
    BEHAVIOR = 4


@dataclass
class ToolArgs:
    """Settings gathered from the command line."""

    real: bool = False
    check_valid_event: bool = False
    domain: str = ""
    event_name: str = ""
    tag: str = ""
    rule_type: RuleType = RuleType.WHOLE_WORD
    history: bool = False
    is_debug: bool = False
    begin_time: int = DEFAULT_TIME_STAMP
    end_time: int = DEFAULT_TIME_STAMP
    max_events: int = DEFAULT_MAX_EVENTS
    event_type: int = INVALID_EVENT_TYPE


class EventService(Protocol):
    """The system event service the tool talks to.

    Each call returns a result code, or returns None / raises
    :class:`SysEventError` in the Python style.
    """

    def add_listener(self, listener: ToolListener, rules: list[SysEventRule]) -> int | None: ...

    def set_debug_mode(self, listener: ToolListener, mode: bool) -> int | None: ...

    def query(self, argument: QueryArgument, rules: list[SysEventQueryRule],
              callback: ToolQuery) -> int | None: ...


def rule_type_from_arg(text: str) -> RuleType:
    """Map a rule type name to its value; unknown names mean WHOLE_WORD."""
    try:
        return RuleType[text]
    except KeyError:
        return RuleType.WHOLE_WORD


def event_type_from_arg(text: str) -> int:
    """Map an event type name to its value; unknown names give 0."""
    try:
        return int(EventType[text])
    except KeyError:
        return INVALID_EVENT_TYPE


def parse_time_stamp(text: str) -> int:
    """Turn ``YYYY-MM-DD hh:mm:ss`` local time into milliseconds, or -1 if malformed."""
    if _TIME_FORMAT.fullmatch(text) is None:
        return DEFAULT_TIME_STAMP
    date_part, time_part = text.split(" ")
    year, month, day = (int(part) for part in date_part.split("-"))
    hour, minute, second = (int(part) for part in time_part.split(":"))
    seconds = time.mktime((year, month, day, hour, minute, second, 0, 0, 0))
    return int(seconds) * _SECONDS_TO_MILLIS


def is_valid_regex(pattern: str) -> bool:
    """Return whether ``pattern`` is short enough and compiles as a regex."""
    if len(pattern) > _REGEX_LENGTH_LIMIT:
        return False
    try:
        re.compile(pattern)
    except re.error:
        return False
    return True


def _strtol(text: str) -> int:
    """Parse a leading integer with C prefix rules (0x hex, 0 octal); 0 if none."""
    text = text.lstrip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text[:2].lower() == "0x" and text[2:3] and text[2] in "0123456789abcdefABCDEF":
        base, digits, text = 16, "0123456789abcdef", text[2:]
    elif text.startswith("0"):
        base, digits = 8, "01234567"
    else:
        base, digits = 10, "0123456789"
    length = 0
    while length < len(text) and text[length].lower() in digits:
        length += 1
    if length == 0:
        return 0
    value = sign * int(text[:length], base)
    return max(_LLONG_MIN, min(_LLONG_MAX, value))


def _getopt(args: Sequence[str], spec: str) -> Iterator[tuple[str, str | None]]:
    """Yield (option, argument) pairs; bad options come out as ('?', message)."""
    takes_arg: dict[str, bool] = {}
    for index, char in enumerate(spec):
        if char != ":":
            takes_arg[char] = spec[index + 1:index + 2] == ":"
    position = 0
    while position < len(args):
        arg = args[position]
        position += 1
        if arg == "--":
            return
        if not arg.startswith("-") or arg == "-":
            continue
        offset = 1
        while offset < len(arg):
            char = arg[offset]
            offset += 1
            if char not in takes_arg:
                yield "?", f"invalid option -- '{char}'"
                continue
            if not takes_arg[char]:
                yield char, None
                continue
            if offset < len(arg):
                yield char, arg[offset:]
            elif position < len(args):
                yield char, args[position]
                position += 1
            else:
                yield "?", f"option requires an argument -- '{char}'"
            break


def _result_code(call, *args) -> int:
    try:
        result = call(*args)
    except SysEventError as exc:
        return int(exc.code)
    return int(RetCode.IPC_CALL_SUCCEED) if result is None else int(result)


class HiSysEventTool:
    """Parses the command line and subscribes to or queries system events."""

    def __init__(self, auto_exit: bool = True, out: TextIO | None = None) -> None:
        self.auto_exit = auto_exit
        self.args = ToolArgs()
        self._out = out
        self._notified = threading.Event()

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def _say(self, text: str) -> None:
        print(text, file=self.out)

    def parse_cmd_line(self, argv: Sequence[str] | None = None) -> bool:
        """Apply the options in ``argv`` (program name excluded) and check them."""
        if argv is None:
            argv = sys.argv[1:]
        for opt, value in _getopt(list(argv), ARG_SELECTION):
            if opt == "?":
                print(f"hisysevent: {value}", file=sys.stderr)
                continue
            if opt == "h":
                self.print_help()
                if self.auto_exit:
                    self.out.flush()
                    os._exit(0)
                continue
            self._apply(opt, value or "")
        return self._check_cmd_line()

    def _apply(self, opt: str, value: str) -> None:
        args = self.args
        match opt:
            case "v":
                args.check_valid_event = True
            case "r":
                args.real = True
            case "c":
                args.rule_type = rule_type_from_arg(value)
            case "o":
                args.domain = value
            case "n":
                args.event_name = value
            case "t":
                args.tag = value
            case "l":
                args.history = True
            case "s":
                args.begin_time = _strtol(value)
            case "S":
                args.begin_time = parse_time_stamp(value)
            case "e":
                args.end_time = _strtol(value)
            case "E":
                args.end_time = parse_time_stamp(value)
            case "m":
                args.max_events = _strtol(value)
            case "d":
                args.is_debug = True
            case "g":
                args.event_type = event_type_from_arg(value)

    def _check_cmd_line(self) -> bool:
        args = self.args
        if not args.real and not args.history:
            return False
        if args.real and args.history:
            self._say("canot read both read && history hisysevent")
            return False
        if args.is_debug and not args.real:
            self._say("debug must follow with real log")
            return False
        if args.history and args.end_time > 0 and args.begin_time > args.end_time:
            self._say("invalid time startTime must less than endTime("
                      f"{args.begin_time} > {args.end_time}).")
            return False
        return True

    def print_help(self) -> None:
        """Print the usage text."""
        for line in _HELP_LINES:
            self._say(line)

    def do_action(self, service: EventService) -> bool:
        """Subscribe or query as the options ask; False if nothing could be done."""
        args = self.args
        if args.rule_type == RuleType.REGULAR and not all(
                is_valid_regex(text) for text in (args.domain, args.event_name, args.tag)):
            self._say("invalid regex")
            return False
        if args.real:
            self._subscribe(service)
            return True
        if args.history:
            return self._query(service)
        return False

    def _subscribe(self, service: EventService) -> None:
        args = self.args
        listener = ToolListener(args.check_valid_event, stream=self._out)
        if args.tag:
            rule = SysEventRule(tag=args.tag, rule_type=args.rule_type, event_type=args.event_type)
        else:
            rule = SysEventRule(domain=args.domain, event_name=args.event_name,
                                rule_type=args.rule_type, event_type=args.event_type)
        code = _result_code(service.add_listener, listener, [rule])
        failed = code != RetCode.IPC_CALL_SUCCEED or (
            args.is_debug and _result_code(service.set_debug_mode, listener, True) != 0)
        if failed:
            self._say(f"failed to subscribe system event: {error_description(code)}")

    def _query(self, service: EventService) -> bool:
        args = self.args
        callback = ToolQuery(args.check_valid_event, self.auto_exit, stream=self._out)
        argument = QueryArgument(args.begin_time, args.end_time, args.max_events)
        if args.rule_type != RuleType.WHOLE_WORD:
            self._say('only "-c WHOLE_WORD" supported with "hisysevent -l" cmd.')
            return False
        rules: list[SysEventQueryRule] = []
        if args.domain or args.event_name or args.event_type != INVALID_EVENT_TYPE:
            rules.append(SysEventQueryRule(args.domain, [args.event_name],
                                           args.rule_type, args.event_type))
        code = _result_code(service.query, argument, rules, callback)
        if code != RetCode.IPC_CALL_SUCCEED:
            self._say(f"failed to query system event: {error_description(code)}")
        return True

    def wait_client(self, timeout: float | None = None) -> bool:
        """Block until :meth:`notify_client` is called; False if ``timeout`` ran out."""
        notified = self._notified.wait(timeout)
        self._notified.clear()
        return notified

    def notify_client(self) -> None:
        """Wake the thread waiting in :meth:`wait_client`."""
        self._notified.set()