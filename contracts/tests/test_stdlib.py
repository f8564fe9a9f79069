# -*- coding: utf-8 -*-
"""
Pure helpers from contracts.stdlib: revert-tag classification, checked U256
math and token parameter validation. None of these need an engine.
"""
from __future__ import annotations

import pytest

from ledger_vm import Revert

from contracts.stdlib import errors
from contracts.stdlib.math import U256_MAX, is_u256
from contracts.stdlib.math.safe_uint import ERR_OVER, ERR_UNDER, try_sub_u256, u256_add, u256_sub
from contracts.stdlib.token import ZERO_ADDRESS, is_account, is_address_or_null, require_decimals


@pytest.mark.parametrize(
    "tag,family",
    [
        (errors.UNAUTHORIZED, errors.AUTHORIZATION),
        (errors.INVALID_PARAMETER, errors.VALIDATION),
        (errors.INVALID_ACCOUNT, errors.VALIDATION),
        (errors.PAUSED, errors.STATE),
        (errors.ALREADY_INITIALIZED, errors.STATE),
        (errors.REENTRANT_CALL, errors.STATE),
        (errors.INSUFFICIENT_FEE, errors.RESOURCE),
        (errors.CLONE_FAILED, errors.RESOURCE),
        (ERR_OVER, errors.RESOURCE),
    ],
)
def test_category_of(tag, family):
    assert errors.category_of(tag) == family


def test_unknown_tags_have_no_category():
    assert errors.category_of(b"SomethingElse") is None


def test_only_paused_is_retryable_without_action():
    assert errors.is_retryable_later(errors.PAUSED)
    assert not errors.is_retryable_later(errors.INSUFFICIENT_BALANCE)
    assert not errors.is_retryable_later(errors.UNAUTHORIZED)


def test_clone_failed_tag_matches_the_host():
    from ledger_vm.errors import CLONE_FAILED

    assert errors.CLONE_FAILED == CLONE_FAILED


def test_checked_math():
    assert u256_add(U256_MAX - 1, 1) == U256_MAX
    assert u256_sub(5, 5) == 0
    assert try_sub_u256(3, 4) is None
    assert try_sub_u256(4, 3) == 1

    with pytest.raises(Revert) as ei:
        u256_add(U256_MAX, 1)
    assert ei.value.reason == ERR_OVER

    with pytest.raises(Revert) as ei:
        u256_sub(0, 1)
    assert ei.value.reason == ERR_UNDER


def test_is_u256_rejects_bools_and_out_of_range():
    assert is_u256(0) and is_u256(U256_MAX)
    assert not is_u256(True)
    assert not is_u256(-1)
    assert not is_u256(U256_MAX + 1)
    assert not is_u256(1.0)


def test_account_predicates():
    addr = b"\x11" * 20
    assert is_account(addr)
    assert not is_account(ZERO_ADDRESS)
    assert is_address_or_null(ZERO_ADDRESS)
    assert not is_address_or_null(b"\x11" * 19)
    assert not is_account(bytearray(addr))


@pytest.mark.parametrize("bad", [-1, 19, True, "6", None])
def test_require_decimals_rejects(bad):
    with pytest.raises(Revert) as ei:
        require_decimals(bad)
    assert ei.value.reason == errors.INVALID_PARAMETER


def test_builtin_interfaces_are_registered():
    from contracts import interfaces

    assert {"FungibleToken", "TokenFactory"} <= set(interfaces.list_interfaces())
    assert interfaces.event_names("FungibleToken") == ["Transfer", "Approval"]
    assert "create_token" in interfaces.function_names("TokenFactory")

    with pytest.raises(interfaces.InterfacesError):
        interfaces.register_interface(interfaces.FUNGIBLE_TOKEN)
    with pytest.raises(interfaces.InterfacesError):
        interfaces.get_interface("NoSuchThing")

    entry = next(e for e in interfaces.get_abi("FungibleToken") if e["name"] == "transfer_from")
    assert entry["type"] == "function"
    assert [i["name"] for i in entry["inputs"]] == ["owner", "to", "amount"]
    assert all(hasattr(interfaces, n) for n in interfaces.__all__)


def test_missing_functions_respects_all():
    import types

    from contracts import interfaces

    mod = types.ModuleType("half_token")
    exec("def name():\n    return b''\n\ndef symbol():\n    return b''\n__all__ = ['name']\n", mod.__dict__)
    missing = interfaces.missing_functions(mod, "FungibleToken")
    assert "name" not in missing
    assert "symbol" in missing
    assert "transfer_from" in missing
