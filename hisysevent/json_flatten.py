"""A lenient scanner that splits a flat JSON object into raw key/value texts."""

from __future__ import annotations

from typing import Callable

_NUMBER = 1
_STRING = 2
_BRACKET = 3

_CHAR_CLASS: dict[str, int] = {c: _NUMBER for c in "0123456789-+."}
_CHAR_CLASS['"'] = _STRING
_CHAR_CLASS["{"] = _BRACKET
_CHAR_CLASS["["] = _BRACKET

_CLOSING = {"{": "}", "[": "]"}


def _kind(char: str) -> int:
    return _CHAR_CLASS.get(char, 0)


class JsonFlattenParser:
    """Splits the top level of a JSON object into (key, raw value) pairs.

    Values keep their original text: strings keep their quotes, nested
    objects and arrays are kept whole. Literals such as true, false and
    null are not recognised and are skipped over.
    """

    def __init__(self, json: str) -> None:
        self._text = ""
        self._pos = 0
        self.pairs: list[tuple[str, str]] = []
        self.parse(json)

    def parse(self, json: str) -> None:
        """Scan ``json`` and replace the stored pairs with what it holds."""
        self._text = json
        self._pos = 0
        self.pairs = []
        while self._pos < len(json):
            if _kind(json[self._pos]) != _STRING:
                self._pos += 1
                continue
            key = self._parse_key()
            value = self._parse_value()
            self.pairs.append((key, value))

    def render(self, handler: Callable[[str, str], str]) -> str:
        """Join ``handler(key, value)`` for every pair into an object text."""
        return "{" + ",".join(handler(key, value) for key, value in self.pairs) + "}"

    def _parse_key(self) -> str:
        text = self._text
        self._pos += 1  # opening quotation mark
        start = self._pos
        while self._pos < len(text) and _kind(text[self._pos]) != _STRING:
            self._pos += 1
        key = text[start:self._pos]
        self._pos += 1  # closing quotation mark
        return key

    def _parse_value(self) -> str:
        text = self._text
        while self._pos < len(text):
            char = text[self._pos]
            kind = _kind(char)
            if kind == _BRACKET:
                return self._parse_brackets(char)
            if kind == _NUMBER:
                return self._parse_number()
            if kind == _STRING:
                return self._parse_string()
            self._pos += 1
        return ""

    def _parse_number(self) -> str:
        text = self._text
        start = self._pos
        while self._pos < len(text) and _kind(text[self._pos]) == _NUMBER:
            self._pos += 1
        return text[start:self._pos]

    def _parse_string(self) -> str:
        text = self._text
        start = self._pos
        self._pos += 1
        while self._pos < len(text):
            if _kind(text[self._pos]) == _STRING and text[self._pos - 1] != "\\":
                break
            self._pos += 1
        self._pos += 1
        return text[start:min(self._pos, len(text))]

    def _parse_brackets(self, left: str) -> str:
        text = self._text
        right = _CLOSING[left]
        start = self._pos
        depth = 1
        self._pos += 1
        while self._pos < len(text):
            char = text[self._pos]
            if char == left:
                depth += 1
            elif char == right:
                depth -= 1
                if depth == 0:
                    break
            self._pos += 1
        self._pos += 1
        return text[start:min(self._pos, len(text))]