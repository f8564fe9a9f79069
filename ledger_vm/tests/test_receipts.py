from __future__ import annotations

import cbor2

from ledger_vm import TxStatus
from ledger_vm.receipts import compute_logs_root, hash_log_leaf, receipt_from_cbor, receipt_to_cbor
from ledger_vm.types import LogEvent


def test_success_receipt_survives_cbor(engine, alice, probe):
    res = engine.execute(alice, probe, "inc", 3)
    decoded = receipt_from_cbor(receipt_to_cbor(res))
    assert decoded.status is TxStatus.SUCCESS
    assert decoded.sender == alice
    assert decoded.to == probe
    assert decoded.fn == "inc"
    assert decoded.logs == res.logs
    assert decoded.error is None


def test_failed_receipt_keeps_reason(engine, alice, probe):
    res = engine.execute(alice, probe, "inc_then_fail")
    raw = receipt_to_cbor(res)
    obj = cbor2.loads(raw)
    assert obj["status"] == 1
    assert obj["error"] == {"code": "REVERT", "reason": b"Nope"}
    assert receipt_from_cbor(raw).reason == b"Nope"


def test_receipt_encoding_is_canonical(engine, alice, probe):
    res = engine.execute(alice, probe, "inc")
    assert receipt_to_cbor(res) == receipt_to_cbor(res)
    obj = cbor2.loads(receipt_to_cbor(res))
    assert cbor2.dumps(obj, canonical=True) == receipt_to_cbor(res)


def test_logs_root_is_order_sensitive_and_domain_separated():
    a = LogEvent(address=b"\x01" * 20, name=b"A", args={"x": 1})
    b = LogEvent(address=b"\x01" * 20, name=b"B", args={"x": 2})
    empty = compute_logs_root([])
    assert len(empty) == 32
    assert compute_logs_root([a]) == hash_log_leaf(a)
    assert compute_logs_root([a, b]) != compute_logs_root([b, a])
    assert compute_logs_root([a, b]) == compute_logs_root([a, b])
    assert compute_logs_root([a]) != empty


def test_logs_root_over_engine_logs(engine, alice, probe):
    engine.call(alice, probe, "inc")
    engine.call(alice, probe, "inc")
    root = compute_logs_root(engine.logs)
    assert root == compute_logs_root(list(engine.logs))
    assert root != compute_logs_root(engine.logs[:1])
