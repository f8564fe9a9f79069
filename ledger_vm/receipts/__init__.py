"""Canonical receipt encoding and logs commitment."""

from .encoding import receipt_from_cbor, receipt_to_cbor
from .logs_hash import compute_logs_root, hash_log_leaf

__all__ = ["receipt_to_cbor", "receipt_from_cbor", "compute_logs_root", "hash_log_leaf"]
