"""Highlights the keys and values of an event that break its definition."""

from __future__ import annotations

import json
import logging
from enum import IntEnum
from typing import Any

from .json_flatten import JsonFlattenParser

_LOG = logging.getLogger(__name__)

DEFAULT_DEFINITIONS_PATH = "/data/system/hiview/unzip_configs/sys_event_def/hisysevent.def"
DECORATE_PREFIX = "\033[31m"
DECORATE_SUFFIX = "\033[0m"

_ARRAY_SIZE = "arrsize"
_LEVEL = "level"
_LEVEL_KEY = "level_"
_TYPE = "type"
_BASE_KEY = "__BASE"
_DOMAIN_KEY = "domain_"
_NAME_KEY = "name_"

INNER_BUILD_KEYS = frozenset({
    "__BASE", "domain_", "name_", "type_", "level_", "tag_",
    "time_", "tz_", "pid_", "tid_", "uid_", "traceid_", "log_",
    "id_", "spanid_", "pspanid_", "trace_flag_", "info_", "seq_",
})
_VALID_LEVELS = ("CRITICAL", "MINOR")

_INT32 = (-(2 ** 31), 2 ** 31 - 1)
_INT64 = (-(2 ** 63), 2 ** 63 - 1)
_UINT32 = (0, 2 ** 32 - 1)
_UINT64 = (0, 2 ** 64 - 1)

_INTEGER_RANGES = {
    "INT8": _INT32,
    "INT16": _INT32,
    "INT32": _INT32,
    "INT64": _INT64,
    "UINT8": _UINT32,
    "UINT16": _UINT32,
    "UINT32": _UINT32,
    "UINT64": _UINT64,
}


class Validity(IntEnum):
    """How a key/value pair of an event compares with its definition."""

    KEY_INVALID = 0
    VALUE_INVALID = 1
    KV_BOTH_VALID = 2


def _reject_duplicates(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"duplicate key {key!r}")
        result[key] = value
    return result


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard number {name}")


def _load_strict(text: str) -> Any:
    """Parse JSON strictly: no duplicate keys, no NaN, an object or array at the root."""
    value = json.loads(text, object_pairs_hook=_reject_duplicates, parse_constant=_reject_constant)
    if not isinstance(value, (dict, list)):
        raise ValueError("root must be an object or an array")
    return value


def _as_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _as_uint(value: Any) -> int:
    if isinstance(value, (int, float)) and value >= 0:
        return int(value)
    return 0


def _integral_within(value: Any, bounds: tuple[int, int]) -> bool:
    low, high = bounds
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return low <= value <= high
    if isinstance(value, float):
        return value.is_integer() and low <= value <= high
    return False


def judge_data_type(data_type: str, value: Any) -> bool:
    """Return whether ``value`` fits the declared parameter type ``data_type``."""
    if data_type == "BOOL":
        return isinstance(value, bool) or (_integral_within(value, _INT32) and value in (0, 1))
    bounds = _INTEGER_RANGES.get(data_type)
    if bounds is not None:
        return _integral_within(value, bounds)
    if data_type in ("FLOAT", "DOUBLE"):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if data_type == "STRING":
        return isinstance(value, str)
    return False


def decorate(validity: Validity, key: str, value: str) -> str:
    """Render one ``"key":value`` pair, colouring the invalid part red."""
    if validity == Validity.KEY_INVALID:
        return f'"{DECORATE_PREFIX}{key}{DECORATE_SUFFIX}":{value}'
    if validity == Validity.VALUE_INVALID:
        return f'"{key}":{DECORATE_PREFIX}{value}{DECORATE_SUFFIX}'
    return f'"{key}":{value}'


def _level_validity(base_info: Any) -> Validity:
    if not isinstance(base_info, dict) or _LEVEL not in base_info:
        _LOG.error("level not defined in __BASE")
        return Validity.KEY_INVALID
    if _as_string(base_info[_LEVEL]) in _VALID_LEVELS:
        return Validity.KV_BOTH_VALID
    return Validity.VALUE_INVALID


def _attr_validity(value: Any, key: str, standard: dict[str, Any]) -> Validity:
    if key not in standard:
        return Validity.KEY_INVALID
    spec = standard[key]
    if not isinstance(spec, dict):
        spec = {}
    data_type = _as_string(spec.get(_TYPE))
    if _ARRAY_SIZE in spec:
        if not isinstance(value, list) or len(value) > _as_uint(spec[_ARRAY_SIZE]):
            return Validity.VALUE_INVALID
        first = value[0] if value else None
        return Validity.KV_BOTH_VALID if judge_data_type(data_type, first) else Validity.VALUE_INVALID
    return Validity.KV_BOTH_VALID if judge_data_type(data_type, value) else Validity.VALUE_INVALID


class JsonDecorator:
    """Checks event JSON texts against the event definition file."""

    def __init__(self, definitions_path: str = DEFAULT_DEFINITIONS_PATH) -> None:
        self._definitions: Any = None
        try:
            with open(definitions_path, "rb") as handle:
                self._definitions = _load_strict(handle.read().decode("utf-8"))
        except (OSError, ValueError):
            _LOG.error("parse json file failed, please check the style of json file: %s.",
                       definitions_path)

    @property
    def valid(self) -> bool:
        """Whether the definition file was loaded."""
        return self._definitions is not None

    def decorate_event_json(self, origin: str) -> str:
        """Return ``origin`` with every invalid key or value highlighted in red."""
        if self._definitions is None:
            _LOG.error("root json value is not valid, failed to decorate.")
            return origin
        try:
            event = _load_strict(origin)
        except ValueError:
            _LOG.error("parse json failed, please check the style of json: %s.", origin)
            return origin
        marks: dict[str, Validity] = {}
        if not self._needs_decoration(event, marks):
            _LOG.debug("no need to decorate this event json string.")
            return origin
        if not marks:
            return origin
        parser = JsonFlattenParser(origin)
        return parser.render(
            lambda key, value: decorate(marks.get(key, Validity.KV_BOTH_VALID), key, value))

    def _needs_decoration(self, event: Any, marks: dict[str, Validity]) -> bool:
        root = self._definitions
        if not isinstance(root, dict) or not isinstance(event, dict):
            return True
        domain = _as_string(event.get(_DOMAIN_KEY))
        name = _as_string(event.get(_NAME_KEY))
        if domain not in root:
            return True
        defined_domain = root[domain]
        if not isinstance(defined_domain, dict) or name not in defined_domain:
            return True
        defined_name = defined_domain[name]
        if not isinstance(defined_name, dict):
            return True
        base_need = False
        if _BASE_KEY in defined_name:
            level_validity = _level_validity(defined_name[_BASE_KEY])
            marks[_LEVEL_KEY] = level_validity
            base_need = level_validity != Validity.KV_BOTH_VALID
        extensive_need = False
        for key, value in event.items():
            if key in INNER_BUILD_KEYS:
                continue
            validity = _attr_validity(value, key, defined_name)
            marks[key] = validity
            if validity != Validity.KV_BOTH_VALID:
                extensive_need = True
        return base_need or extensive_need