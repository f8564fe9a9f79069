# -*- coding: utf-8 -*-
"""
Ledger template tests.

The template is deployed directly by `issuer`, which therefore plays the
role of the deploying factory and is the only account allowed to run
`initialize`.
"""
from __future__ import annotations

import pytest

from ledger_vm import Revert
from ledger_vm.runtime import ZERO_ADDRESS

from contracts.stdlib import errors
from contracts.stdlib.math import U256_MAX

from .conftest import LEDGER, account

SUPPLY = 1_000_000


@pytest.fixture
def issuer() -> bytes:
    return account("issuer")


@pytest.fixture
def ledger(engine, issuer) -> bytes:
    return engine.deploy(issuer, LEDGER)


@pytest.fixture
def token(engine, issuer, ledger, alice, carol) -> bytes:
    engine.call(issuer, ledger, "initialize", b"Alpha", b"ALP", 6, SUPPLY, alice, carol)
    return ledger


def _reason(ei) -> bytes:
    return ei.value.reason


# ---------------------------------------------------------------------------
# construction / initialization
# ---------------------------------------------------------------------------

def test_fresh_ledger_is_uninitialized(engine, issuer, ledger):
    assert engine.view(ledger, "factory") == issuer
    assert engine.view(ledger, "initialized") is False
    assert engine.view(ledger, "creator") == ZERO_ADDRESS
    assert engine.view(ledger, "total_supply") == 0
    assert engine.view(ledger, "max_initial_supply") == 10**30


def test_initialize_sets_metadata_and_mints(engine, issuer, ledger, alice, carol):
    res = engine.execute(issuer, ledger, "initialize", b"Alpha", b"ALP", 6, SUPPLY, alice, carol)
    assert res.is_success
    assert engine.view(ledger, "initialized") is True
    assert engine.view(ledger, "name") == b"Alpha"
    assert engine.view(ledger, "symbol") == b"ALP"
    assert engine.view(ledger, "decimals") == 6
    assert engine.view(ledger, "total_supply") == SUPPLY
    assert engine.view(ledger, "balance_of", alice) == SUPPLY
    assert engine.view(ledger, "creator") == alice
    assert engine.view(ledger, "pauser") == carol

    names = [ev.name for ev in res.logs]
    assert names == [b"Transfer", b"TokenInitialized"]
    mint, init = res.logs
    assert (mint["from"], mint["to"], mint["value"]) == (ZERO_ADDRESS, alice, SUPPLY)
    assert init["creator"] == alice
    assert init["pauser"] == carol
    assert init["initial_supply"] == SUPPLY
    assert init["decimals"] == 6


def test_only_the_deploying_factory_may_initialize(engine, ledger, bob, alice):
    with pytest.raises(Revert) as ei:
        engine.call(bob, ledger, "initialize", b"Alpha", b"ALP", 6, SUPPLY, alice)
    assert _reason(ei) == errors.UNAUTHORIZED
    assert engine.view(ledger, "initialized") is False


def test_initialize_is_one_shot(engine, issuer, token, bob):
    with pytest.raises(Revert) as ei:
        engine.call(issuer, token, "initialize", b"Other", b"OTH", 18, 5, bob)
    assert _reason(ei) == errors.ALREADY_INITIALIZED
    assert engine.view(token, "name") == b"Alpha"


def test_unauthorized_is_reported_before_already_initialized(engine, token, bob):
    with pytest.raises(Revert) as ei:
        engine.call(bob, token, "initialize", b"Other", b"OTH", 18, 5, bob)
    assert _reason(ei) == errors.UNAUTHORIZED


@pytest.mark.parametrize(
    "name,symbol,decimals,supply,creator_tag",
    [
        (b"", b"ALP", 6, SUPPLY, "alice"),
        (b"x" * 33, b"ALP", 6, SUPPLY, "alice"),
        (b"Alpha", b"", 6, SUPPLY, "alice"),
        (b"Alpha", b"ABCDEFGHIJK", 6, SUPPLY, "alice"),
        (b"Alpha", b"ALP", 19, SUPPLY, "alice"),
        (b"Alpha", b"ALP", -1, SUPPLY, "alice"),
        (b"Alpha", b"ALP", 6, 0, "alice"),
        (b"Alpha", b"ALP", 6, 10**30 + 1, "alice"),
        (b"Alpha", b"ALP", 6, SUPPLY, None),
        ("Alpha", b"ALP", 6, SUPPLY, "alice"),
    ],
)
def test_initialize_rejects_bad_parameters(engine, issuer, ledger, name, symbol, decimals, supply, creator_tag):
    creator = ZERO_ADDRESS if creator_tag is None else account(creator_tag)
    with pytest.raises(Revert) as ei:
        engine.call(issuer, ledger, "initialize", name, symbol, decimals, supply, creator)
    assert _reason(ei) == errors.INVALID_PARAMETER
    assert engine.view(ledger, "initialized") is False


def test_bounds_are_inclusive(engine, issuer, ledger, alice):
    engine.call(issuer, ledger, "initialize", b"n" * 32, b"s" * 10, 18, 10**30, alice)
    assert engine.view(ledger, "total_supply") == 10**30


def test_supply_ceiling_comes_from_the_constructor(engine, issuer, alice):
    small = engine.deploy(issuer, LEDGER, 1_000)
    assert engine.view(small, "max_initial_supply") == 1_000
    with pytest.raises(Revert) as ei:
        engine.call(issuer, small, "initialize", b"A", b"A", 0, 1_001, alice)
    assert _reason(ei) == errors.INVALID_PARAMETER


@pytest.mark.parametrize(
    "fn,args",
    [
        ("transfer", ("bob", 1)),
        ("approve", ("bob", 1)),
        ("transfer_from", ("alice", "bob", 1)),
        ("increase_allowance", ("bob", 1)),
        ("decrease_allowance", ("bob", 0)),
        ("pause", ()),
    ],
)
def test_mutations_require_initialization(engine, ledger, alice, fn, args):
    resolved = [account(a) if isinstance(a, str) else a for a in args]
    with pytest.raises(Revert) as ei:
        engine.call(alice, ledger, fn, *resolved)
    assert _reason(ei) == errors.NOT_INITIALIZED


# ---------------------------------------------------------------------------
# transfers
# ---------------------------------------------------------------------------

def test_transfer_moves_balance_and_emits(engine, token, alice, bob):
    res = engine.execute(alice, token, "transfer", bob, 250)
    assert res.return_value is True
    assert engine.view(token, "balance_of", alice) == SUPPLY - 250
    assert engine.view(token, "balance_of", bob) == 250
    (ev,) = res.logs
    assert ev.name == b"Transfer"
    assert (ev["from"], ev["to"], ev["value"]) == (alice, bob, 250)


def test_zero_transfer_is_allowed(engine, token, alice, bob):
    res = engine.execute(alice, token, "transfer", bob, 0)
    assert res.is_success
    assert res.logs[0]["value"] == 0


def test_transfer_to_self_keeps_balance(engine, token, alice):
    engine.call(alice, token, "transfer", alice, 10)
    assert engine.view(token, "balance_of", alice) == SUPPLY


def test_transfer_beyond_balance_fails(engine, token, bob, carol):
    with pytest.raises(Revert) as ei:
        engine.call(bob, token, "transfer", carol, 1)
    assert _reason(ei) == errors.INSUFFICIENT_BALANCE


def test_transfer_to_null_account_fails(engine, token, alice):
    with pytest.raises(Revert) as ei:
        engine.call(alice, token, "transfer", ZERO_ADDRESS, 1)
    assert _reason(ei) == errors.INVALID_ACCOUNT


def test_transfer_rejects_bad_amounts(engine, token, alice, bob):
    for amount in (-1, U256_MAX + 1, True):
        with pytest.raises(Revert) as ei:
            engine.call(alice, token, "transfer", bob, amount)
        assert _reason(ei) == errors.INVALID_PARAMETER
    assert engine.view(token, "balance_of", alice) == SUPPLY


# ---------------------------------------------------------------------------
# allowances
# ---------------------------------------------------------------------------

def test_approve_and_transfer_from(engine, token, alice, bob, carol):
    res = engine.execute(alice, token, "approve", bob, 100)
    (ev,) = res.logs
    assert ev.name == b"Approval"
    assert (ev["owner"], ev["spender"], ev["value"]) == (alice, bob, 100)

    res = engine.execute(bob, token, "transfer_from", alice, carol, 40)
    assert res.return_value is True
    assert [e.name for e in res.logs] == [b"Transfer"]
    assert engine.view(token, "allowance", alice, bob) == 60
    assert engine.view(token, "balance_of", carol) == 40


def test_allowance_is_checked_before_balance(engine, token, alice, bob, carol):
    engine.call(alice, token, "transfer", carol, SUPPLY)
    with pytest.raises(Revert) as ei:
        engine.call(bob, token, "transfer_from", alice, carol, 1)
    assert _reason(ei) == errors.INSUFFICIENT_ALLOWANCE

    engine.call(alice, token, "approve", bob, 5)
    with pytest.raises(Revert) as ei:
        engine.call(bob, token, "transfer_from", alice, carol, 5)
    assert _reason(ei) == errors.INSUFFICIENT_BALANCE
    assert engine.view(token, "allowance", alice, bob) == 5


def test_unlimited_allowance_is_not_decremented(engine, token, alice, bob, carol):
    engine.call(alice, token, "approve", bob, U256_MAX)
    engine.call(bob, token, "transfer_from", alice, carol, 1_000)
    assert engine.view(token, "allowance", alice, bob) == U256_MAX


def test_increase_and_decrease_allowance(engine, token, alice, bob):
    engine.call(alice, token, "increase_allowance", bob, 30)
    engine.call(alice, token, "increase_allowance", bob, 12)
    assert engine.view(token, "allowance", alice, bob) == 42
    res = engine.execute(alice, token, "decrease_allowance", bob, 40)
    assert res.logs[0]["value"] == 2
    with pytest.raises(Revert) as ei:
        engine.call(alice, token, "decrease_allowance", bob, 3)
    assert _reason(ei) == errors.INSUFFICIENT_ALLOWANCE


def test_increase_allowance_cannot_overflow(engine, token, alice, bob):
    engine.call(alice, token, "approve", bob, U256_MAX)
    with pytest.raises(Revert) as ei:
        engine.call(alice, token, "increase_allowance", bob, 1)
    assert _reason(ei) == b"UINT:OVERFLOW"


def test_views_never_fail_on_odd_input(engine, token):
    assert engine.view(token, "balance_of", b"short") == 0
    assert engine.view(token, "balance_of", "not-bytes") == 0
    assert engine.view(token, "allowance", b"", b"") == 0


# ---------------------------------------------------------------------------
# pause switch
# ---------------------------------------------------------------------------

def test_pauser_can_pause_and_unpause(engine, token, alice, bob, carol):
    res = engine.execute(carol, token, "pause")
    assert [e.name for e in res.logs] == [b"Paused"]
    assert engine.view(token, "paused") is True

    for fn, args in (("transfer", (bob, 1)), ("approve", (bob, 1))):
        with pytest.raises(Revert) as ei:
            engine.call(alice, token, fn, *args)
        assert _reason(ei) == errors.PAUSED
    assert engine.view(token, "balance_of", alice) == SUPPLY

    # pausing twice is a silent no-op
    assert engine.execute(carol, token, "pause").logs == ()

    engine.call(carol, token, "unpause")
    engine.call(alice, token, "transfer", bob, 1)
    assert engine.view(token, "balance_of", bob) == 1


def test_only_pauser_may_pause(engine, token, alice):
    with pytest.raises(Revert) as ei:
        engine.call(alice, token, "pause")
    assert _reason(ei) == errors.UNAUTHORIZED


def test_null_pauser_means_unpausable(engine, issuer, ledger, alice):
    engine.call(issuer, ledger, "initialize", b"Alpha", b"ALP", 6, SUPPLY, alice)
    assert engine.view(ledger, "pauser") == ZERO_ADDRESS
    with pytest.raises(Revert) as ei:
        engine.call(alice, ledger, "pause")
    assert _reason(ei) == errors.UNAUTHORIZED


def test_transfer_pauser(engine, token, bob, carol):
    res = engine.execute(carol, token, "transfer_pauser", bob)
    assert res.logs[0].name == b"PauserTransferred"
    assert engine.view(token, "pauser") == bob
    with pytest.raises(Revert):
        engine.call(carol, token, "pause")
    engine.call(bob, token, "pause")
    with pytest.raises(Revert) as ei:
        engine.call(bob, token, "transfer_pauser", ZERO_ADDRESS)
    assert _reason(ei) == errors.INVALID_ACCOUNT
