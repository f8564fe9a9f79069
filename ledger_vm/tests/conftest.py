# -*- coding: utf-8 -*-
"""
ledger_vm.tests.conftest
========================

Fixtures for engine-level tests:

- `engine`          a fresh Engine with strict mode on
- `alice`/`bob`     deterministic 20-byte accounts
- `write_contract`  write contract source to tmp_path and return its path
- `probe`           a deployed general-purpose test contract (PROBE_SRC)
"""
from __future__ import annotations

import hashlib
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from ledger_vm.config import load_config
from ledger_vm.runtime import Engine


def account(tag: str) -> bytes:
    return hashlib.sha3_256(b"ledger_vm-tests|" + tag.encode("utf-8")).digest()[:20]


PROBE_SRC = '''
from ledger_vm.stdlib import abi, calls, code, env, events, storage, treasury


def construct(caller, start=0):
    storage.set_int(b"n", start)
    storage.set(b"owner", caller)
    code.set_immutable(b"tag", b"probe")


def get():
    return storage.get_int(b"n")


def owner():
    return storage.get(b"owner")


def inc(caller, by=1):
    n = storage.get_int(b"n") + by
    storage.set_int(b"n", n)
    events.emit(b"Inc", {"by": by, "who": caller})
    return n


def inc_then_fail(caller):
    inc(caller)
    abi.revert(b"Nope")


def boom():
    return 1 // 0


def whoami(caller):
    return caller


def tag():
    return code.get_immutable(b"tag")


def late_immutable():
    code.set_immutable(b"x", b"y")


def paid():
    return env.value()


def bal():
    return treasury.balance()


def pay(to, amount):
    treasury.transfer(to, amount)


def try_pay(to, amount):
    return treasury.try_transfer(to, amount)


def receive(caller):
    events.emit(b"Received", {"sender": caller, "value": env.value()})


def call_other(other, fn, *args):
    return calls.call(other, fn, *args)


def try_other(other, fn, *args):
    return calls.try_call(other, fn, *args)


def view_other(other, fn, *args):
    return calls.view(other, fn, *args)


def try_view_other(other, fn, *args):
    return calls.try_view(other, fn, *args)


def recurse(target, n):
    if n == 0:
        return 0
    return calls.call(target, "recurse", target, n - 1) + 1


def make_clone(template=None):
    return calls.clone(template or env.self_address())


def spawn(path):
    return calls.create(path, 7)


def block():
    return env.block_height(), env.timestamp(), env.chain_id()


def _private():
    return 1
'''

# No constructor and no receive hook.
PLAIN_SRC = '''
from ledger_vm.stdlib import storage


def put(value):
    storage.set(b"v", value)


def fetch():
    return storage.get(b"v")
'''


@pytest.fixture
def engine() -> Engine:
    return Engine(config=load_config().with_overrides(strict_mode=True))


@pytest.fixture
def alice() -> bytes:
    return account("alice")


@pytest.fixture
def bob() -> bytes:
    return account("bob")


@pytest.fixture
def write_contract(tmp_path: Path) -> Callable[[str, str], str]:
    def _write(name: str, src: str) -> str:
        p = tmp_path / f"{name}.py"
        p.write_text(textwrap.dedent(src), encoding="utf-8")
        return str(p)

    return _write


@pytest.fixture
def probe_path(write_contract) -> str:
    return write_contract("probe", PROBE_SRC)


@pytest.fixture
def plain_path(write_contract) -> str:
    return write_contract("plain", PLAIN_SRC)


@pytest.fixture
def probe(engine: Engine, alice: bytes, probe_path: str) -> bytes:
    return engine.deploy(alice, probe_path)
