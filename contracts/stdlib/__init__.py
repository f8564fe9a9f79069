# -*- coding: utf-8 -*-
"""
contracts.stdlib
================

Reusable building blocks for Python contracts:

- ``errors``   stable revert tags and their families
- ``math``     u256 guards and checked arithmetic
- ``token``    fungible ledger (balances, allowances, Transfer/Approval)
- ``access``   single-owner model
- ``control``  reentrancy latch and pause switch
- ``registry`` append-only address registry with per-creator lists

Everything here runs inside a contract frame and talks to the host only
through ``ledger_vm.stdlib``.
"""
from __future__ import annotations

__all__ = ["access", "control", "errors", "math", "registry", "token"]
