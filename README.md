# hisysevent

A Python library for the client side of system events. It builds the rules
and arguments used to subscribe to and query events, carries them through a
simple binary `Parcel`, decodes the callbacks that deliver events, checks
event JSON texts against a file of event definitions, and holds the logic of
a command-line front end that subscribes or queries through a service object
you supply.

It has no dependencies outside the standard library and needs Python 3.10
or later.

## Modules

- `hisysevent.ret_code`: `RetCode`, the result codes of the event service;
  `error_description(code)`, which turns a code into a short message
  (`"unknown error."` for codes without one); and `SysEventError`, an
  exception carrying a `code` and a `message`.
- `hisysevent.json_flatten`: `JsonFlattenParser`, a lenient scanner that
  splits the top level of a JSON object into `(key, raw value)` pairs,
  stored in `pairs`. Values keep their original text: strings keep their
  quotes, nested objects and arrays stay whole. `parse(json)` rescans a new
  text; `render(handler)` joins `handler(key, value)` for every pair into
  `{...}`.
- `hisysevent.file_util`: `is_file_exists`, `is_file`, `is_directory`,
  `remove_file`, `remove_directory`, `force_create_directory` (creates every
  missing parent with owner-only access), `file_path_by_dir` and
  `is_legal_path` (rejects paths containing `./` or `../`). The removal and
  creation helpers raise `OSError` when they fail.
- `hisysevent.parcel`: `Parcel`, a little-endian buffer with typed
  `write_*` / `read_*` methods for 32- and 64-bit integers, booleans,
  strings, string and integer vectors, interface tokens, shared-memory
  blocks, remote objects (kept beside the buffer by index) and parcelable
  objects. `write_vector` and `read_vector` carry lists of parcelable
  objects, an empty list being marked as null. Bad or missing data raises
  `ParcelError`.
- `hisysevent.rules`: `RuleType` (`WHOLE_WORD`, `PREFIX`, `REGULAR`) and the
  dataclasses `QueryArgument`, `SysEventRule` and `SysEventQueryRule`, each
  with `marshal(parcel)` and the class method `unmarshal(parcel)`.
- `hisysevent.json_decorator`: `JsonDecorator(definitions_path)` loads a
  strict JSON definitions file and `decorate_event_json(text)` returns the
  event text with every key not defined for the event, every value that does
  not fit its declared type, and an invalid `level_`, wrapped in red ANSI
  colour codes. The text is returned unchanged when the definitions could
  not be loaded (see the `valid` property), when the event is not strict
  JSON, when its domain or name is not defined, or when everything is
  valid. `judge_data_type(data_type, value)`, `decorate(validity, key,
  value)` and the `Validity` enum are the building blocks.
- `hisysevent.tool_output`: `ToolListener` and `ToolQuery`, which print
  event JSON texts one per line to a stream (standard output by default),
  decorated when valid-event checking is on. `ToolListener.on_service_died`
  and `ToolQuery.on_complete` (when `auto_exit` is true) end the process.
- `hisysevent.callbacks`: `write_bulk_data` / `read_bulk_data` for batches
  of strings packed as a size table plus one shared block;
  `SysEventCallbackStub` and `QuerySysEventCallbackStub`, abstract classes
  whose `on_remote_request(code, data, reply)` checks the interface token
  and decodes a request; and `ListenerProxy` and `QueryProxy`, which forward
  decoded events and results to a listener or query callback.
- `hisysevent.tool`: `HiSysEventTool`, the command-line logic, with
  `ToolArgs`, `EventType`, the `EventService` protocol and the helpers
  `rule_type_from_arg`, `event_type_from_arg`, `parse_time_stamp` and
  `is_valid_regex`.

## Examples

Flatten an event and rewrite each pair:

```python
from hisysevent.json_flatten import JsonFlattenParser

parser = JsonFlattenParser('{"domain_":"DEMO","UINT64_T":18446744073709551610}')
text = parser.render(lambda key, value: f"{key}|{value}")
# '{domain_|"DEMO",UINT64_T|18446744073709551610}'
```

Check an event against a definitions file:

```python
from hisysevent.json_decorator import JsonDecorator

decorator = JsonDecorator("hisysevent.def")
print(decorator.decorate_event_json('{"domain_":"HIVIEWDFX","name_":"BREAK"}'))
```

Round-trip a rule through a parcel:

```python
from hisysevent.parcel import Parcel, read_vector, write_vector
from hisysevent.rules import SysEventQueryRule

parcel = Parcel()
write_vector(parcel, [SysEventQueryRule("DEMO", ["EVENT_NAME_A"])])
rules = read_vector(Parcel(parcel.data), SysEventQueryRule)
```

Drive the tool logic with your own service object:

```python
from hisysevent.tool import HiSysEventTool

tool = HiSysEventTool(auto_exit=False)
if tool.parse_cmd_line(["-l", "-m", "10", "-g", "FAULT"]):
    tool.do_action(service)
else:
    tool.print_help()
```

`parse_cmd_line` takes the options without the program name (it reads
`sys.argv[1:]` when given nothing). It accepts `-r` to subscribe to live
events or `-l` to query stored ones (never both), `-c` for the rule type
(`WHOLE_WORD`, `PREFIX`, `REGULAR`; only `WHOLE_WORD` with `-l`), `-o`
domain, `-n` event name, `-t` tag, `-g` event type (`FAULT`, `STATISTIC`,
`SECURITY`, `BEHAVIOR`), `-s`/`-e` for begin and end timestamps in
milliseconds, `-S`/`-E` for the same as local `YYYY-MM-DD HH:MM:SS`, `-m`
for the maximum number of events (10000 by default), `-d` for debug mode
with `-r`, `-v` to check events against their definitions, and `-h` for
help. The `service` passed to `do_action` needs `add_listener`,
`set_debug_mode` and `query` methods; each may return a result code, return
`None` for success, or raise `SysEventError`. `wait_client(timeout)` blocks
until another thread calls `notify_client()`.

## What the package does not do

The package does not connect to a running system event service. There is
no built-in object that sends requests to the service: `HiSysEventTool`
works only through the service object you pass to `do_action`, and the
callback stubs decode requests only from `Parcel` objects you hand them.
For the same reason no command is installed; the tool logic is used from
Python.