from __future__ import annotations

import io
import json
import logging

import pytest

from ledger_vm import logging as vlog


@pytest.fixture
def json_stream():
    stream = io.StringIO()
    vlog.configure(json=True, level="DEBUG", stream=stream)
    yield stream
    root = logging.getLogger(vlog.ROOT_LOGGER)
    for h in list(root.handlers):
        root.removeHandler(h)
    vlog.clear_context()


def _lines(stream: io.StringIO):
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


def test_failed_call_is_logged_with_reason(json_stream, engine, alice, probe):
    engine.execute(alice, probe, "inc_then_fail")
    failures = [r for r in _lines(json_stream) if r["msg"] == "call failed"]
    assert len(failures) == 1
    rec = failures[0]
    assert rec["level"] == "WARNING"
    assert rec["logger"] == "ledger_vm.runtime.engine"
    assert rec["code"] == "REVERT"
    assert rec["reason"] == "0x" + b"Nope".hex()
    assert rec["sender"] == "0x" + alice.hex()
    assert rec["height"] == engine.block.height
    assert "trace_id" in rec


def test_deploy_is_logged(json_stream, engine, alice, probe_path):
    addr = engine.deploy(alice, probe_path)
    deployed = [r for r in _lines(json_stream) if r["msg"] == "contract deployed"]
    assert deployed[-1]["address"] == "0x" + addr.hex()
    assert deployed[-1]["deployer"] == "0x" + alice.hex()


def test_trace_scope_restores_context():
    vlog.bind(component="tests")
    with vlog.trace_scope("abc", height=3) as tid:
        assert tid == "abc"
        assert vlog.context()["height"] == 3
        with vlog.trace_scope() as inner:
            assert inner == "abc"
    assert vlog.context() == {"component": "tests"}
    vlog.clear_context()


def test_text_formatter_renders_extras():
    stream = io.StringIO()
    fmt = vlog.TextFormatter(stream)
    rec = logging.LogRecord("ledger_vm.x", logging.INFO, __file__, 1, "hello", None, None)
    rec.to = b"\x01\x02"
    line = fmt.format(rec)
    assert line.endswith("| hello")
    assert "to=0x0102" in line


def test_with_fields_adapter_merges_extras(json_stream):
    log = vlog.with_fields(vlog.get_logger("ledger_vm.tests"), component="probe")
    log.info("ping", extra={"n": 1})
    rec = [r for r in _lines(json_stream) if r["msg"] == "ping"][0]
    assert rec["component"] == "probe"
    assert rec["n"] == 1
