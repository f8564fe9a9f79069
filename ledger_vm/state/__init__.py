"""Account records and the checkpointing write journal."""

from .accounts import Account, MAX_NONCE
from .journal import Journal

__all__ = ["Account", "MAX_NONCE", "Journal"]
