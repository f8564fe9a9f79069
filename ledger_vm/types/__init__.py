"""Value types shared by the engine, receipts and tests."""

from .events import LogEvent
from .result import CallResult
from .status import TxStatus

__all__ = ["LogEvent", "CallResult", "TxStatus"]
