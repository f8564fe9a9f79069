"""
ledger_vm.runtime.events_api — contract-facing event emission.

Events are validated, stamped with the emitting address and staged in the
journal, so they become visible only when the enclosing top-level call
commits.

Rules
-----
* name: non-empty bytes, at most MAX_EVENT_NAME_BYTES
* keys: identifier-like str
* values: bytes | int (u256/i256 range) | bool | str | None
* per top-level call at most `max_logs_per_call` events; each event's
  encoded payload at most `max_event_bytes`
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping

from ledger_vm.errors import ResourceLimit, StaticCallViolation, VmError
from ledger_vm.types.events import LogEvent

from .context import active_engine

MAX_EVENT_NAME_BYTES = 64
MAX_KEY_LEN = 64
MAX_INT_BITS = 256

_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _invalid(msg: str, **data: Any) -> VmError:
    return VmError(message=msg, code="EVENT_INVALID", data=data or None)


def _check_name(name: Any) -> bytes:
    if not isinstance(name, (bytes, bytearray)):
        raise _invalid("event name must be bytes")
    b = bytes(name)
    if not b or len(b) > MAX_EVENT_NAME_BYTES:
        raise _invalid("event name length out of range", len=len(b))
    return b


def _check_key(key: Any) -> str:
    if not isinstance(key, str) or len(key) > MAX_KEY_LEN or not _KEY_RE.match(key):
        raise _invalid("event key must be an identifier", key=str(key))
    return key


def _check_value(value: Any) -> Any:
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, int):
        if value.bit_length() > MAX_INT_BITS:
            raise _invalid("event int arg out of range", bits=value.bit_length())
        return value
    raise _invalid("unsupported event arg type", py_type=type(value).__name__)


def _payload_size(name: bytes, args: Mapping[str, Any]) -> int:
    n = len(name)
    for k, v in args.items():
        n += len(k)
        if isinstance(v, (bytes, str)):
            n += len(v)
        else:
            n += 32
    return n


def emit(name: bytes, args: Mapping[str, Any]) -> None:
    eng = active_engine()
    frame = eng.current_frame()
    if frame.read_only:
        raise StaticCallViolation("events.emit")
    bname = _check_name(name)
    if not isinstance(args, Mapping):
        raise _invalid("event args must be a mapping")
    checked: Dict[str, Any] = {_check_key(k): _check_value(v) for k, v in args.items()}

    cap = eng.config.max_event_bytes
    size = _payload_size(bname, checked)
    if size > cap:
        raise ResourceLimit("event payload too large", limit="event_bytes", size=size, cap=cap)
    pending = len(eng.journal.pending_logs())
    if pending >= eng.config.max_logs_per_call:
        raise ResourceLimit("too many events in one call", limit="logs_per_call", size=pending + 1, cap=eng.config.max_logs_per_call)

    eng.journal.append_log(LogEvent(address=frame.address, name=bname, args=checked))
    frame.logs_emitted += 1


__all__ = ["emit", "MAX_EVENT_NAME_BYTES"]
