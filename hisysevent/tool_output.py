"""Callbacks of the command line tool that print received events."""

from __future__ import annotations

import os
import sys
from typing import Iterable, TextIO

from .json_decorator import JsonDecorator

_SERVICE_DIED = "service disconnect, exit"


class _Printer:
    def __init__(self, check_valid_event: bool, decorator: JsonDecorator | None,
                 stream: TextIO | None) -> None:
        self.check_valid_event = check_valid_event
        self.decorator = decorator if decorator is not None else JsonDecorator()
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _emit(self, text: str) -> None:
        print(text, file=self.stream, flush=True)

    def _print_record(self, record: str) -> None:
        if self.check_valid_event and self.decorator is not None:
            self._emit(self.decorator.decorate_event_json(record))
            return
        self._emit(record)

    def _exit(self) -> None:
        self.stream.flush()
        os._exit(0)


class ToolListener(_Printer):
    """Prints each event pushed by a subscription, one JSON text per line."""

    def __init__(self, check_valid_event: bool, decorator: JsonDecorator | None = None,
                 stream: TextIO | None = None) -> None:
        super().__init__(check_valid_event, decorator, stream)

    def on_event(self, record: str | None) -> None:
        """Print one event, highlighted if valid-event checking is on."""
        if record is None:
            return
        self._print_record(record)

    def on_service_died(self) -> None:
        """Report the lost service and end the process."""
        self._emit(_SERVICE_DIED)
        self._exit()


class ToolQuery(_Printer):
    """Prints the events returned by a query, one JSON text per line."""

    def __init__(self, check_valid_event: bool, auto_exit: bool = True,
                 decorator: JsonDecorator | None = None, stream: TextIO | None = None) -> None:
        super().__init__(check_valid_event, decorator, stream)
        self.auto_exit = auto_exit

    def on_query(self, records: Iterable[str] | None) -> None:
        """Print a batch of queried events."""
        if records is None:
            return
        for record in records:
            self._print_record(record)

    def on_complete(self, reason: int, total: int) -> None:
        """End the process once the query is done, if auto exit is on."""
        if not self.auto_exit:
            return
        self._exit()