"""
Ledger (clone template)

One fungible-token ledger. The factory deploys a single instance of this
module as its template and stamps out clones that share its code and
immutables but keep their own storage. Each clone is initialized exactly
once, by the factory that deployed the template.

Lifecycle:
- construct(max_initial_supply)   runs once for the template; records the
                                  deploying factory and the supply ceiling
- initialize(...)                 factory-only, one shot, on each clone
- transfer/approve/...            holders and spenders, once active

Public ABI:
- initialize(name, symbol, decimals, initial_supply, creator, pauser=ZERO) -> bool
- transfer(to, amount) -> bool
- approve(spender, amount) -> bool
- transfer_from(owner, to, amount) -> bool
- increase_allowance(spender, added) -> bool
- decrease_allowance(spender, subtracted) -> bool
- pause() / unpause() / transfer_pauser(new_pauser)
- name() symbol() decimals() total_supply() balance_of(a) allowance(o, s)
- creator() initialized() factory() pauser() paused() max_initial_supply()

Events:
- b"Transfer"          {from, to, value}
- b"Approval"          {owner, spender, value}
- b"TokenInitialized"  {name, symbol, decimals, initial_supply, creator, pauser}
- b"Paused" / b"Unpaused" / b"PauserTransferred"
"""

from ledger_vm.stdlib import abi, code, events, storage

from contracts.stdlib import errors
from contracts.stdlib.control import pausable
from contracts.stdlib.math import is_u256
from contracts.stdlib.token import ZERO_ADDRESS, is_account, is_address_or_null
from contracts.stdlib.token import fungible

# --- Storage keys ---
KEY_STATE = b"ledger:state"
KEY_CREATOR = b"ledger:creator"

# Lifecycle tags stored under KEY_STATE (absent means uninitialized).
STATE_ACTIVE = b"active"

# --- Immutables (shared with clones) ---
IMM_FACTORY = b"factory"
IMM_MAX_SUPPLY = b"max_supply"

DEFAULT_MAX_INITIAL_SUPPLY = 10**30

EVT_TOKEN_INITIALIZED = b"TokenInitialized"

__all__ = [
    "initialize",
    "transfer",
    "approve",
    "transfer_from",
    "increase_allowance",
    "decrease_allowance",
    "pause",
    "unpause",
    "transfer_pauser",
    "name",
    "symbol",
    "decimals",
    "total_supply",
    "balance_of",
    "allowance",
    "creator",
    "initialized",
    "factory",
    "pauser",
    "paused",
    "max_initial_supply",
]


def construct(caller: bytes, max_initial_supply: int = DEFAULT_MAX_INITIAL_SUPPLY) -> None:
    abi.require(is_u256(max_initial_supply) and max_initial_supply > 0, errors.INVALID_PARAMETER)
    code.set_immutable(IMM_FACTORY, caller)
    code.set_immutable(IMM_MAX_SUPPLY, max_initial_supply.to_bytes(32, "big"))


def _is_active() -> bool:
    return storage.get(KEY_STATE) == STATE_ACTIVE


def _require_active() -> None:
    if not _is_active():
        abi.revert(errors.NOT_INITIALIZED)


def _require_mutable() -> None:
    _require_active()
    pausable.require_not_paused()


# --- Initialization ---


def initialize(
    caller: bytes,
    name: bytes,
    symbol: bytes,
    decimals: int,
    initial_supply: int,
    creator: bytes,
    pauser: bytes = ZERO_ADDRESS,
) -> bool:
    """
    @notice One-shot setup of a clone. Only the deploying factory may call it.
    @param creator Receives the whole initial supply.
    @param pauser  Account allowed to pause this ledger; null means never.
    """
    if caller != factory():
        abi.revert(errors.UNAUTHORIZED)
    if storage.get(KEY_STATE):
        abi.revert(errors.ALREADY_INITIALIZED)
    if not is_account(creator):
        abi.revert(errors.INVALID_PARAMETER)
    if not is_u256(initial_supply) or initial_supply == 0 or initial_supply > max_initial_supply():
        abi.revert(errors.INVALID_PARAMETER)
    if not is_address_or_null(pauser):
        abi.revert(errors.INVALID_PARAMETER)

    fungible.set_metadata(name, symbol, decimals)
    storage.set(KEY_CREATOR, creator)
    pausable.init_pauser(pauser)
    storage.set(KEY_STATE, STATE_ACTIVE)

    fungible.update(ZERO_ADDRESS, creator, initial_supply)
    events.emit(
        EVT_TOKEN_INITIALIZED,
        {
            "name": name,
            "symbol": symbol,
            "decimals": decimals,
            "initial_supply": initial_supply,
            "creator": creator,
            "pauser": pauser,
        },
    )
    return True


# --- Token operations ---


def transfer(caller: bytes, to: bytes, amount: int) -> bool:
    _require_mutable()
    return fungible.transfer(caller, to, amount)


def approve(caller: bytes, spender: bytes, amount: int) -> bool:
    _require_mutable()
    return fungible.approve(caller, spender, amount)


def transfer_from(caller: bytes, owner: bytes, to: bytes, amount: int) -> bool:
    _require_mutable()
    return fungible.transfer_from(caller, owner, to, amount)


def increase_allowance(caller: bytes, spender: bytes, added: int) -> bool:
    _require_mutable()
    return fungible.increase_allowance(caller, spender, added)


def decrease_allowance(caller: bytes, spender: bytes, subtracted: int) -> bool:
    _require_mutable()
    return fungible.decrease_allowance(caller, spender, subtracted)


# --- Pause switch ---


def pause(caller: bytes) -> None:
    _require_active()
    pausable.pause(caller)


def unpause(caller: bytes) -> None:
    _require_active()
    pausable.unpause(caller)


def transfer_pauser(caller: bytes, new_pauser: bytes) -> None:
    _require_active()
    pausable.transfer_pauser(caller, new_pauser)


# --- Views ---


def name() -> bytes:
    return fungible.name()


def symbol() -> bytes:
    return fungible.symbol()


def decimals() -> int:
    return fungible.decimals()


def total_supply() -> int:
    return fungible.total_supply()


def balance_of(account: bytes) -> int:
    return fungible.balance_of(account)


def allowance(owner: bytes, spender: bytes) -> int:
    return fungible.allowance(owner, spender)


def creator() -> bytes:
    return storage.get(KEY_CREATOR) or ZERO_ADDRESS


def initialized() -> bool:
    return _is_active()


def factory() -> bytes:
    return code.get_immutable(IMM_FACTORY)


def pauser() -> bytes:
    return pausable.get_pauser()


def paused() -> bool:
    return pausable.is_paused()


def max_initial_supply() -> int:
    return int.from_bytes(code.get_immutable(IMM_MAX_SUPPLY), "big")
