"""
ledger_vm.receipts.encoding — deterministic CBOR encoding for call receipts.

Wire schema:

  Receipt = {
    "status": uint,          ; 0=SUCCESS, 1=REVERT, 2=FAULT (TxStatus.as_int)
    "sender": bytes,
    "to":     bytes,
    "fn":     text,
    "logs":   [ LogEvent ],
    "error":  { "code": text, "reason": bytes } / null,
  }

  LogEvent = {
    "address": bytes,
    "name":    bytes,
    "args":    { text => bytes / int / bool / text / null },
  }

Maps are encoded canonically (`cbor2.dumps(..., canonical=True)`), so equal
receipts always encode to equal bytes. Return values are not part of the
receipt.

Public API
----------
- receipt_to_cbor(result: CallResult) -> bytes
- receipt_from_cbor(data: bytes) -> CallResult
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import cbor2

from ledger_vm.types import CallResult, LogEvent, TxStatus


def log_to_obj(ev: LogEvent) -> Dict[str, Any]:
    return {"address": ev.address, "name": ev.name, "args": dict(ev.args)}


def _obj_to_log(obj: Mapping[str, Any]) -> LogEvent:
    try:
        return LogEvent(address=bytes(obj["address"]), name=bytes(obj["name"]), args=dict(obj["args"]))
    except KeyError as e:
        raise ValueError(f"missing LogEvent field: {e}") from None


def _error_obj(result: CallResult) -> Optional[Dict[str, Any]]:
    if result.error is None:
        return None
    return {"code": result.error.get("code", ""), "reason": result.reason or b""}


def receipt_to_cbor(result: CallResult) -> bytes:
    obj = {
        "status": result.status.as_int,
        "sender": result.sender,
        "to": result.to,
        "fn": result.fn,
        "logs": [log_to_obj(ev) for ev in result.logs],
        "error": _error_obj(result),
    }
    return cbor2.dumps(obj, canonical=True)


def receipt_from_cbor(data: bytes) -> CallResult:
    obj = cbor2.loads(data)
    if not isinstance(obj, dict):
        raise ValueError("receipt must decode to a map")
    err = obj.get("error")
    error: Optional[Dict[str, Any]] = None
    if err is not None:
        error = {"code": err["code"], "data": {"reason": bytes(err["reason"]).decode("utf-8", "replace")}}
    return CallResult(
        sender=bytes(obj["sender"]),
        to=bytes(obj["to"]),
        fn=obj["fn"],
        status=TxStatus.from_int(obj["status"]),
        logs=tuple(_obj_to_log(o) for o in obj["logs"]),
        error=error,
    )


__all__ = ["receipt_to_cbor", "receipt_from_cbor", "log_to_obj"]
