"""
ledger_vm.runtime — the engine plus the contract-facing host APIs.
"""

from .context import ADDRESS_LEN, ZERO_ADDRESS, BlockEnv, ContextError, Frame, derive_address, to_address
from .engine import Engine
from .loader import ContractCode, load_code

__all__ = [
    "ADDRESS_LEN",
    "ZERO_ADDRESS",
    "BlockEnv",
    "ContextError",
    "Frame",
    "derive_address",
    "to_address",
    "Engine",
    "ContractCode",
    "load_code",
]
