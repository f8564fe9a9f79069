"""
ledger_vm.state.accounts — Account records.

An Account holds:

- nonce:     allocation counter used to derive addresses of contracts it creates
- balance:   native value (u256)
- code:      the ContractCode a contract account executes (None for plain accounts)
- delegate:  for clones, the template address whose code every call runs

A clone has `delegate` set and `code` unset: the engine resolves its code
through the template, so the template's code and immutables are shared while
the clone's storage stays its own.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover
    from ledger_vm.runtime.loader import ContractCode

U256_MAX = (1 << 256) - 1
MAX_NONCE = (1 << 64) - 1


def _ensure_range(name: str, value: int, cap: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    if value > cap:
        raise OverflowError(f"{name} exceeds {cap.bit_length()}-bit range")
    return value


@dataclass
class Account:
    """
    Invariants:
    - nonce fits in 64 bits, balance in 256 bits
    - at most one of `code` / `delegate` is set
    """
    nonce: int = 0
    balance: int = 0
    code: Optional["ContractCode"] = None
    delegate: Optional[bytes] = None

    def __post_init__(self) -> None:
        _ensure_range("nonce", self.nonce, MAX_NONCE)
        _ensure_range("balance", self.balance, U256_MAX)
        if self.code is not None and self.delegate is not None:
            raise ValueError("account cannot carry both code and a delegate")

    @property
    def is_contract(self) -> bool:
        return self.code is not None or self.delegate is not None

    @property
    def is_claimed(self) -> bool:
        """
        True once the address has been used (nonzero nonce) or holds code.
        A bare native balance does not claim an address: value sent to a
        not-yet-deployed contract address stays with the contract created there.
        """
        return self.nonce > 0 or self.is_contract

    def copy(self) -> "Account":
        # ContractCode is shared by reference; it is immutable once deployed.
        return replace(self)

    def credit(self, amount: int) -> None:
        self.balance = _ensure_range("balance", self.balance + amount, U256_MAX)

    def debit(self, amount: int) -> None:
        if amount > self.balance:
            raise ValueError("insufficient native balance")
        self.balance -= amount

    def set_nonce(self, value: int) -> None:
        """Set nonce explicitly (used by tests/genesis tooling)."""
        self.nonce = _ensure_range("nonce", value, MAX_NONCE)

    def increment_nonce(self) -> None:
        self.nonce = _ensure_range("nonce", self.nonce + 1, MAX_NONCE)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nonce": self.nonce,
            "balance": self.balance,
            "code_hash": None if self.code is None else "0x" + self.code.code_hash.hex(),
            "delegate": None if self.delegate is None else "0x" + self.delegate.hex(),
        }


__all__ = ["Account", "U256_MAX", "MAX_NONCE"]
