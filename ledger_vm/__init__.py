"""
ledger_vm — a small deterministic host for Python contracts.

    from ledger_vm import Engine

    eng = Engine()
    factory = eng.deploy(owner, "contracts.templates.factory.contract")
    token = eng.call(alice, factory, "create_token", b"Coin", b"COIN", 18, 1000)
    eng.view(token, "balance_of", alice)
"""

from .errors import Revert, VmError
from .runtime import ZERO_ADDRESS, BlockEnv, Engine
from .types import CallResult, LogEvent, TxStatus
from .version import __version__

__all__ = [
    "__version__",
    "Engine",
    "BlockEnv",
    "ZERO_ADDRESS",
    "VmError",
    "Revert",
    "CallResult",
    "LogEvent",
    "TxStatus",
]
