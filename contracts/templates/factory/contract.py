"""
Token factory (clone deployer)

Deploys one ledger template at construction and then stamps out clones of
it on demand. Each `create_token` call:

  1. checks the factory is not paused and the caller has room left
     (at most 100 tokens per creator)
  2. collects the deployment fee, either in native value attached to the
     call or, when a fee token is configured, by pulling it from the caller
     through that token's allowance
  3. clones the template and initializes the clone with the caller as
     creator
  4. records the clone in the registry and emits TokenCreated

All mutating entry points run under a single reentrancy latch, because fee
collection and clone initialization both call out of the factory before its
own bookkeeping is done.

Public ABI:
- create_token(name, symbol, decimals, initial_supply, pauser=ZERO) -> bytes
- set_deployment_fee(new_fee)                      (owner)
- transfer_ownership(new_owner)                    (owner)
- withdraw_fees(to=None) -> int                    (owner)
- withdraw_fee_token(to=None) -> int               (owner)
- emergency_withdraw_token(token, to, amount)      (owner)
- pause() / unpause() / transfer_pauser(new)       (pauser)
- template() owner() fee_token() deployment_fee() pauser() paused()
- get_total_tokens() get_token_at_index(i) get_tokens_paginated(offset, limit)
- get_tokens_by_creator(c) get_creator_token_count(c) is_deployed_token(a)
- max_tokens_per_creator()
"""

from typing import Optional

from ledger_vm.stdlib import abi, calls, code, env, events, storage, treasury

from contracts.stdlib import access, control, errors, registry
from contracts.stdlib.control import pausable
from contracts.stdlib.math import is_u256
from contracts.stdlib.token import ZERO_ADDRESS, is_account, is_address_or_null

LEDGER_TEMPLATE = "contracts.templates.ledger.contract"
DEFAULT_MAX_INITIAL_SUPPLY = 10**30

# --- Storage keys ---
KEY_FEE = b"factory:fee"

# --- Immutables ---
IMM_TEMPLATE = b"template"
IMM_FEE_TOKEN = b"fee_token"

GUARD = b"factory"

__all__ = [
    "create_token",
    "set_deployment_fee",
    "transfer_ownership",
    "withdraw_fees",
    "withdraw_fee_token",
    "emergency_withdraw_token",
    "pause",
    "unpause",
    "transfer_pauser",
    "template",
    "owner",
    "fee_token",
    "deployment_fee",
    "pauser",
    "paused",
    "get_total_tokens",
    "get_token_at_index",
    "get_tokens_paginated",
    "get_tokens_by_creator",
    "get_creator_token_count",
    "is_deployed_token",
    "max_tokens_per_creator",
]


def construct(
    caller: bytes,
    fee_token: bytes = ZERO_ADDRESS,
    deployment_fee: int = 0,
    pauser: Optional[bytes] = None,
    max_initial_supply: int = DEFAULT_MAX_INITIAL_SUPPLY,
) -> None:
    if not is_address_or_null(fee_token):
        abi.revert(errors.INVALID_PARAMETER)
    if fee_token != ZERO_ADDRESS and not code.is_contract(fee_token):
        abi.revert(errors.INVALID_PARAMETER)
    if not is_u256(deployment_fee):
        abi.revert(errors.INVALID_PARAMETER)

    access.init_owner(caller)
    pausable.init_pauser(caller if pauser is None else pauser)
    storage.set_int(KEY_FEE, deployment_fee)

    tmpl = calls.create(LEDGER_TEMPLATE, max_initial_supply)
    code.set_immutable(IMM_TEMPLATE, tmpl)
    code.set_immutable(IMM_FEE_TOKEN, fee_token)


# --- Deployment ---


def _collect_fee(caller: bytes) -> None:
    fee = deployment_fee()
    attached = env.value()
    ft = fee_token()

    if ft == ZERO_ADDRESS:
        if attached < fee:
            abi.revert(errors.INSUFFICIENT_FEE)
        if attached > fee:
            abi.revert(errors.INVALID_PARAMETER)
        if fee:
            events.emit(b"DeploymentFeeCollected", {"payer": caller, "token": ZERO_ADDRESS, "amount": fee})
        return

    if attached:
        abi.revert(errors.INVALID_PARAMETER)
    if fee == 0:
        return
    ok, allowed = calls.try_view(ft, "allowance", caller, env.self_address())
    if not ok or not is_u256(allowed):
        abi.revert(errors.FEE_TRANSFER_FAILED)
    if allowed < fee:
        abi.revert(errors.INSUFFICIENT_ALLOWANCE)
    ok, ret = calls.try_call(ft, "transfer_from", caller, env.self_address(), fee)
    if not ok or ret is not True:
        abi.revert(errors.FEE_TRANSFER_FAILED)
    events.emit(b"DeploymentFeeCollected", {"payer": caller, "token": ft, "amount": fee})


def create_token(
    caller: bytes,
    name: bytes,
    symbol: bytes,
    decimals: int,
    initial_supply: int,
    pauser: bytes = ZERO_ADDRESS,
) -> bytes:
    """
    @notice Deploy and initialize a new ledger clone owned by the caller.
    @return token Address of the clone.
    """
    control.guard_enter(GUARD)
    try:
        pausable.require_not_paused()
        registry.require_capacity(caller)
        _collect_fee(caller)

        token = calls.clone(template())
        calls.call(token, "initialize", name, symbol, decimals, initial_supply, caller, pauser)
        registry.record(token, caller)

        events.emit(
            b"TokenCreated",
            {
                "token": token,
                "creator": caller,
                "pauser": pauser,
                "name": name,
                "symbol": symbol,
                "decimals": decimals,
                "initial_supply": initial_supply,
                "timestamp": env.timestamp(),
            },
        )
        return token
    finally:
        control.guard_exit(GUARD)


# --- Owner administration ---


def set_deployment_fee(caller: bytes, new_fee: int) -> None:
    access.require_owner(caller)
    control.require_not_entered(GUARD)
    if not is_u256(new_fee):
        abi.revert(errors.INVALID_PARAMETER)
    old = deployment_fee()
    storage.set_int(KEY_FEE, new_fee)
    events.emit(b"DeploymentFeeUpdated", {"old": old, "new": new_fee})


def transfer_ownership(caller: bytes, new_owner: bytes) -> None:
    access.transfer_ownership(caller, new_owner)


def _recipient(caller: bytes, to: Optional[bytes]) -> bytes:
    to = caller if to is None else to
    if not is_account(to):
        abi.revert(errors.INVALID_ACCOUNT)
    return to


def withdraw_fees(caller: bytes, to: Optional[bytes] = None) -> int:
    """Send the factory's whole native balance to `to` (the owner by default)."""
    control.guard_enter(GUARD)
    try:
        access.require_owner(caller)
        to = _recipient(caller, to)
        amount = treasury.balance()
        if amount and not treasury.try_transfer(to, amount):
            abi.revert(errors.TRANSFER_FAILED)
        events.emit(b"FeesWithdrawn", {"to": to, "amount": amount})
        return amount
    finally:
        control.guard_exit(GUARD)


def _send_token(token: bytes, to: bytes, amount: int) -> None:
    ok, ret = calls.try_call(token, "transfer", to, amount)
    if not ok or ret is not True:
        abi.revert(errors.TRANSFER_FAILED)


def withdraw_fee_token(caller: bytes, to: Optional[bytes] = None) -> int:
    """Send the factory's whole fee-token balance to `to` (the owner by default)."""
    control.guard_enter(GUARD)
    try:
        access.require_owner(caller)
        ft = fee_token()
        if ft == ZERO_ADDRESS:
            abi.revert(errors.INVALID_PARAMETER)
        to = _recipient(caller, to)
        ok, amount = calls.try_view(ft, "balance_of", env.self_address())
        if not ok or not is_u256(amount):
            abi.revert(errors.TRANSFER_FAILED)
        if amount:
            _send_token(ft, to, amount)
        events.emit(b"FeeTokenWithdrawn", {"to": to, "amount": amount})
        return amount
    finally:
        control.guard_exit(GUARD)


def emergency_withdraw_token(caller: bytes, token: bytes, to: bytes, amount: int) -> None:
    """Rescue `amount` of any token the factory holds."""
    control.guard_enter(GUARD)
    try:
        access.require_owner(caller)
        if not is_account(token) or not code.is_contract(token) or not is_u256(amount) or amount == 0:
            abi.revert(errors.INVALID_PARAMETER)
        to = _recipient(caller, to)
        _send_token(token, to, amount)
        events.emit(b"EmergencyWithdrawal", {"token": token, "to": to, "amount": amount})
    finally:
        control.guard_exit(GUARD)


# --- Pause switch ---


def pause(caller: bytes) -> None:
    pausable.pause(caller)


def unpause(caller: bytes) -> None:
    pausable.unpause(caller)


def transfer_pauser(caller: bytes, new_pauser: bytes) -> None:
    pausable.transfer_pauser(caller, new_pauser)


# --- Views ---


def template() -> bytes:
    return code.get_immutable(IMM_TEMPLATE)


def owner() -> bytes:
    return access.get_owner() or ZERO_ADDRESS


def fee_token() -> bytes:
    return code.get_immutable(IMM_FEE_TOKEN)


def deployment_fee() -> int:
    return storage.get_int(KEY_FEE)


def pauser() -> bytes:
    return pausable.get_pauser()


def paused() -> bool:
    return pausable.is_paused()


def get_total_tokens() -> int:
    return registry.total()


def get_token_at_index(index: int) -> bytes:
    return registry.at(index)


def get_tokens_paginated(offset: int, limit: int):
    tokens, total = registry.slice(offset, limit)
    return tokens, total


def get_tokens_by_creator(creator: bytes) -> list:
    return registry.by_creator(creator)


def get_creator_token_count(creator: bytes) -> int:
    return registry.creator_count(creator)


def is_deployed_token(token: bytes) -> bool:
    return registry.is_known(token)


def max_tokens_per_creator() -> int:
    return registry.MAX_PER_CREATOR
