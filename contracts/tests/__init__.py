"""Tests for the contract standard library, the ledger template and the clone factory."""
