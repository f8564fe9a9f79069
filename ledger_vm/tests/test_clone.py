from __future__ import annotations

import pytest

from ledger_vm import Revert
from ledger_vm.errors import CLONE_FAILED, UnknownFunction
from ledger_vm.runtime import derive_address
from ledger_vm.state import MAX_NONCE


def test_clone_shares_code_and_immutables_but_not_storage(engine, alice, probe):
    engine.call(alice, probe, "inc", 5)
    clone = engine.call(alice, probe, "make_clone")

    assert clone == derive_address(probe, 0)
    assert engine.delegate_of(clone) == probe
    assert engine.code_at(clone) is engine.code_at(probe)
    assert engine.view(clone, "tag") == b"probe"

    # the clone never ran a constructor: its storage starts empty
    assert engine.view(clone, "get") == 0
    assert engine.view(clone, "owner") == b""

    engine.call(alice, clone, "inc", 2)
    assert engine.view(clone, "get") == 2
    assert engine.view(probe, "get") == 5


def test_clone_of_clone_delegates_to_the_template(engine, alice, probe):
    first = engine.call(alice, probe, "make_clone")
    second = engine.call(alice, first, "make_clone")
    assert engine.delegate_of(second) == probe
    assert second == derive_address(first, 0)


def test_clone_emits_events_under_its_own_address(engine, alice, probe):
    clone = engine.call(alice, probe, "make_clone")
    engine.call(alice, clone, "inc")
    assert engine.logs[-1].address == clone


def test_clone_of_plain_account_fails(engine, alice, bob, probe):
    with pytest.raises(UnknownFunction):
        engine.call(alice, probe, "make_clone", bob)


def test_clone_fails_when_deployer_nonce_is_exhausted(engine, alice, probe):
    engine.set_nonce(probe, MAX_NONCE)
    with pytest.raises(Revert) as ei:
        engine.call(alice, probe, "make_clone")
    assert ei.value.reason == CLONE_FAILED
    assert engine.nonce_of(probe) == MAX_NONCE


def test_clone_keeps_value_sent_to_its_address_beforehand(engine, alice, probe):
    target = derive_address(probe, engine.nonce_of(probe))
    engine.fund(target, 1)
    clone = engine.call(alice, probe, "make_clone")
    assert clone == target
    assert engine.delegate_of(clone) == probe
    assert engine.balance_of(clone) == 1
    assert engine.view(clone, "bal") == 1


def test_clone_fails_when_a_contract_already_lives_at_the_address(engine, alice, probe, probe_path):
    child = engine.call(alice, probe, "spawn", probe_path)
    assert child == derive_address(probe, 0)
    engine.set_nonce(probe, 0)
    with pytest.raises(Revert) as ei:
        engine.call(alice, probe, "make_clone")
    assert ei.value.reason == CLONE_FAILED
    # allocation was rolled back with the failed call
    assert engine.nonce_of(probe) == 0
    assert engine.delegate_of(child) is None
    assert engine.view(child, "get") == 7


def test_clone_fails_when_the_address_has_sent_transactions(engine, alice, probe):
    target = derive_address(probe, engine.nonce_of(probe))
    engine.set_nonce(target, 1)
    with pytest.raises(Revert) as ei:
        engine.call(alice, probe, "make_clone")
    assert ei.value.reason == CLONE_FAILED
    assert engine.delegate_of(target) is None


def test_failed_clone_can_be_retried_with_try_call(engine, alice, probe_path):
    a = engine.deploy(alice, probe_path)
    b = engine.deploy(alice, probe_path)
    engine.set_nonce(b, MAX_NONCE)
    ok, reason = engine.call(alice, a, "try_other", b, "make_clone")
    assert ok is False
    assert reason == CLONE_FAILED
