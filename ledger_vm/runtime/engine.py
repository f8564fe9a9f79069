"""
ledger_vm.runtime.engine — deterministic host for Python contracts.

The Engine owns the world state (accounts, storage, events) behind a
checkpointing Journal and executes contract entry points on a frame stack.

Execution model
---------------
* Every top-level call (`deploy`, `call`, `execute`) runs under its own
  journal checkpoint. A failure anywhere in the call chain that is not
  handled by a `try_call` discards every write, including emitted events.
* Nested calls (contract → contract) push a frame and open a nested
  checkpoint; a failing nested call unwinds only its own writes before the
  error propagates to the calling frame.
* Mutating top-level calls are serialized by an engine-wide lock, so no two
  calls ever interleave.
* The caller address is authenticated by the host: entry points whose first
  parameter is `caller` receive the address of the immediate calling
  account (the sender for top-level calls, the calling contract otherwise).

Clones
------
`clone(template)` allocates a fresh address whose account only records the
template as its delegate. Calls to the clone run the template's code (and see
the template's immutables) against the clone's own storage and balance.

Public API
----------
- deploy(sender, source, *args, value=0) -> address
- call(sender, to, fn, *args, value=0) -> return value   (raises VmError)
- execute(sender, to, fn, *args, value=0) -> CallResult  (never raises VmError)
- view(to, fn, *args) -> return value                    (read-only)
- fund / balance_of / nonce_of / set_nonce / code_at / delegate_of /
  storage_at / storage_items / advance / logs / receipts
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

from ledger_vm import logging as vlog
from ledger_vm.config import VMConfig, load_config
from ledger_vm.errors import (
    CLONE_FAILED,
    CallDepthExceeded,
    ContractFault,
    InsufficientFunds,
    Revert,
    StaticCallViolation,
    UnknownFunction,
    VmError,
    failure_reason,
)
from ledger_vm.state import MAX_NONCE, Account, Journal
from ledger_vm.types import CallResult, LogEvent, TxStatus

from .context import (
    _ACTIVE,
    ZERO_ADDRESS,
    BlockEnv,
    ContextError,
    Frame,
    derive_address,
    to_address,
    to_hex,
)
from .loader import CONSTRUCT, RECEIVE, ContractCode, ContractSource, load_code, takes_caller

log = vlog.get_logger(__name__)


def _no_constructor() -> None:
    return None


class Engine:
    """
    In-memory contract host.

    Parameters
    ----------
    config : VMConfig | None
        Limits and defaults; `load_config()` when omitted.
    block : BlockEnv | None
        Initial block environment; height 1 at the configured genesis
        timestamp when omitted.
    """

    def __init__(self, config: Optional[VMConfig] = None, block: Optional[BlockEnv] = None) -> None:
        self.config = config or load_config()
        self.block = block or BlockEnv(
            height=1,
            timestamp=self.config.genesis_timestamp,
            chain_id=self.config.chain_id,
        )
        self._journal = Journal()
        self._frames: List[Frame] = []
        self._receipts: List[CallResult] = []
        self._lock = threading.RLock()

    # ------------------------------------------------------------------ #
    # Host-side state access
    # ------------------------------------------------------------------ #

    @property
    def journal(self) -> Journal:
        return self._journal

    @property
    def logs(self) -> List[LogEvent]:
        """All committed events, oldest first."""
        return self._journal.committed_logs()

    @property
    def receipts(self) -> List[CallResult]:
        return list(self._receipts)

    def fund(self, addr: bytes, amount: int) -> None:
        """Credit native value to `addr` out of thin air (genesis/test helper)."""
        addr = to_address(addr)
        with self._host_write():
            self._journal.account_for_write(addr).credit(amount)

    def balance_of(self, addr: bytes) -> int:
        acc = self._journal.get_account(to_address(addr))
        return 0 if acc is None else acc.balance

    def nonce_of(self, addr: bytes) -> int:
        acc = self._journal.get_account(to_address(addr))
        return 0 if acc is None else acc.nonce

    def set_nonce(self, addr: bytes, nonce: int) -> None:
        addr = to_address(addr)
        with self._host_write():
            self._journal.account_for_write(addr).set_nonce(nonce)

    def code_at(self, addr: bytes) -> Optional[ContractCode]:
        """Code executed by calls to `addr` (the template's code for clones)."""
        acc = self._journal.get_account(to_address(addr))
        if acc is None or not acc.is_contract:
            return None
        return self._resolve_code(bytes(addr), acc)

    def delegate_of(self, addr: bytes) -> Optional[bytes]:
        acc = self._journal.get_account(to_address(addr))
        return None if acc is None else acc.delegate

    def storage_at(self, addr: bytes, key: bytes) -> bytes:
        return self._journal.storage_get(to_address(addr), key)

    def storage_items(self, addr: bytes) -> Iterator[Tuple[bytes, bytes]]:
        return self._journal.storage_items(to_address(addr))

    def advance(self, seconds: Optional[int] = None, blocks: int = 1) -> BlockEnv:
        """Move to a later block. Defaults to `blocks * block_time` seconds."""
        if seconds is None:
            seconds = blocks * self.config.block_time
        with self._lock:
            self.block = self.block.next(seconds=seconds, blocks=blocks)
        return self.block

    # ------------------------------------------------------------------ #
    # Top-level calls
    # ------------------------------------------------------------------ #

    def deploy(self, sender: bytes, source: ContractSource, *args: Any, value: int = 0) -> bytes:
        """Deploy a contract and run its constructor. Returns the new address."""
        sender = self._check_sender(sender)

        def run() -> bytes:
            addr = self._allocate(sender)
            self._construct(sender, addr, load_code(source), args, value, depth=0)
            return addr

        result, err = self._apply(sender, ZERO_ADDRESS, CONSTRUCT, run)
        if err is not None:
            raise err
        return result.return_value

    def call(self, sender: bytes, to: bytes, fn: str, *args: Any, value: int = 0) -> Any:
        """Invoke `fn` on `to` as `sender`. Raises the VmError on failure."""
        result, err = self._call(sender, to, fn, args, value)
        if err is not None:
            raise err
        return result.return_value

    def execute(self, sender: bytes, to: bytes, fn: str, *args: Any, value: int = 0) -> CallResult:
        """Like `call` but reports failures in the returned CallResult."""
        result, _ = self._call(sender, to, fn, args, value)
        return result

    def view(self, to: bytes, fn: str, *args: Any) -> Any:
        """Read-only call. Any state write fails with StaticCallViolation."""
        to = to_address(to)
        with self._lock:
            self._require_host_context()
            token = _ACTIVE.set(self)
            self._journal.begin()
            try:
                code = self._code_for(to)
                frame = Frame(address=to, caller=ZERO_ADDRESS, code=code, fn=fn, read_only=True)
                return self._enter(frame, code.entry(fn, address=to), args)
            finally:
                self._journal.revert()
                _ACTIVE.reset(token)

    def _call(
        self, sender: bytes, to: bytes, fn: str, args: Sequence[Any], value: int
    ) -> Tuple[CallResult, Optional[VmError]]:
        sender = self._check_sender(sender)
        to = to_address(to)

        def run() -> Any:
            code = self._code_for(to)
            frame = Frame(address=to, caller=sender, code=code, fn=fn, value=value)
            return self._enter(frame, code.entry(fn, address=to), args)

        return self._apply(sender, to, fn, run)

    def _apply(
        self, sender: bytes, to: bytes, fn: str, run: Callable[[], Any]
    ) -> Tuple[CallResult, Optional[VmError]]:
        with self._lock:
            self._require_host_context()
            token = _ACTIVE.set(self)
            self._journal.begin()
            try:
                with vlog.trace_scope(height=self.block.height, chain_id=self.block.chain_id):
                    log.debug("call", extra={"sender": sender, "to": to, "fn": fn})
                    try:
                        ret = run()
                    except VmError as err:
                        self._journal.revert()
                        result = CallResult(
                            sender=sender,
                            to=to,
                            fn=fn,
                            status=TxStatus.REVERT if isinstance(err, Revert) else TxStatus.FAULT,
                            error=err.to_dict(),
                        )
                        log.warning(
                            "call failed",
                            extra={"sender": sender, "to": to, "fn": fn, "code": err.code, "reason": failure_reason(err)},
                        )
                        self._receipts.append(result)
                        return result, err
                    except BaseException:
                        self._journal.revert()
                        raise
                    logs = tuple(self._journal.pending_logs())
                    self._journal.commit()
            finally:
                _ACTIVE.reset(token)

            if fn == CONSTRUCT:
                to = ret
            result = CallResult(sender=sender, to=to, fn=fn, status=TxStatus.SUCCESS, return_value=ret, logs=logs)
            self._receipts.append(result)
            return result, None

    # ------------------------------------------------------------------ #
    # Frame machinery (used by the contract-facing APIs)
    # ------------------------------------------------------------------ #

    def current_frame(self) -> Frame:
        if not self._frames:
            raise ContextError("no contract frame is active")
        return self._frames[-1]

    def _enter(
        self,
        frame: Frame,
        f: Callable,
        args: Sequence[Any],
        setup: Optional[Callable[[], None]] = None,
    ) -> Any:
        if frame.depth >= self.config.max_call_depth:
            raise CallDepthExceeded(frame.depth, self.config.max_call_depth)
        self._frames.append(frame)
        self._journal.begin()
        try:
            if setup is not None:
                setup()
            if frame.value:
                self._move_value(frame.caller, frame.address, frame.value)
            call_args = (frame.caller, *args) if takes_caller(f) else tuple(args)
            try:
                ret = f(*call_args)
            except VmError:
                raise
            except Exception as exc:
                if not self.config.strict_mode:
                    raise
                raise ContractFault(exc, address=frame.address, fn=frame.fn) from exc
        except BaseException:
            self._journal.revert()
            raise
        else:
            self._journal.commit()
            return ret
        finally:
            self._frames.pop()

    def nested_call(self, to: bytes, fn: str, args: Sequence[Any], *, value: int = 0, read_only: bool = False) -> Any:
        parent = self.current_frame()
        to = to_address(to)
        read_only = read_only or parent.read_only
        if value and read_only:
            raise StaticCallViolation("value")
        code = self._code_for(to)
        frame = Frame(
            address=to,
            caller=parent.address,
            code=code,
            fn=fn,
            value=value,
            read_only=read_only,
            depth=parent.depth + 1,
        )
        return self._enter(frame, code.entry(fn, address=to), args)

    def try_nested_call(
        self, to: bytes, fn: str, args: Sequence[Any], *, value: int = 0, read_only: bool = False
    ) -> Tuple[bool, Any]:
        try:
            return True, self.nested_call(to, fn, args, value=value, read_only=read_only)
        except VmError as err:
            return False, failure_reason(err)

    def nested_create(self, source: ContractSource, args: Sequence[Any], *, value: int = 0) -> bytes:
        parent = self._writable_frame("create")
        addr = self._allocate(parent.address)
        self._construct(parent.address, addr, load_code(source), args, value, depth=parent.depth + 1)
        return addr

    def nested_clone(self, template: bytes) -> bytes:
        parent = self._writable_frame("clone")
        template = to_address(template)
        tacc = self._journal.get_account(template)
        if tacc is None or not tacc.is_contract:
            raise UnknownFunction("clone template has no code", address=template)
        if tacc.delegate is not None:
            template = tacc.delegate
        addr = self._allocate(parent.address)
        self._journal.account_for_write(addr).delegate = template
        log.debug("clone allocated", extra={"clone": addr, "template": template, "deployer": parent.address})
        return addr

    def transfer_value(self, to: bytes, amount: int) -> None:
        """Send native value from the current contract to `to`."""
        parent = self._writable_frame("transfer")
        to = to_address(to)
        acc = self._journal.get_account(to)
        if acc is not None and acc.is_contract:
            code = self._resolve_code(to, acc)
            hook = code.hook(RECEIVE)
            if hook is None:
                raise UnknownFunction("contract does not accept native value", address=to, fn=RECEIVE)
            frame = Frame(
                address=to,
                caller=parent.address,
                code=code,
                fn=RECEIVE,
                value=amount,
                depth=parent.depth + 1,
            )
            self._enter(frame, hook, ())
            return
        self._move_value(parent.address, to, amount)

    def try_transfer_value(self, to: bytes, amount: int) -> bool:
        self._writable_frame("transfer")
        self._journal.begin()
        try:
            self.transfer_value(to, amount)
        except VmError as err:
            self._journal.revert()
            log.debug("value transfer rejected", extra={"to": to, "amount": amount, "code": err.code})
            return False
        self._journal.commit()
        return True

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _construct(
        self,
        deployer: bytes,
        addr: bytes,
        code: ContractCode,
        args: Sequence[Any],
        value: int,
        *,
        depth: int,
    ) -> None:
        ctor = code.hook(CONSTRUCT)
        if ctor is None and args:
            raise UnknownFunction("contract has no constructor", address=addr, fn=CONSTRUCT)

        def install() -> None:
            self._journal.account_for_write(addr).code = code

        frame = Frame(
            address=addr,
            caller=deployer,
            code=code,
            fn=CONSTRUCT,
            value=value,
            depth=depth,
            constructing=True,
        )
        self._enter(frame, ctor or _no_constructor, args, setup=install)
        code.sealed = True
        log.info(
            "contract deployed",
            extra={"address": addr, "deployer": deployer, "contract_module": code.name, "code_hash": code.code_hash},
        )

    def _allocate(self, deployer: bytes) -> bytes:
        acc = self._journal.account_for_write(deployer)
        if acc.nonce >= MAX_NONCE:
            raise Revert(CLONE_FAILED, message="deployer nonce exhausted", data={"deployer": to_hex(deployer)})
        addr = derive_address(deployer, acc.nonce)
        acc.increment_nonce()
        existing = self._journal.get_account(addr)
        if existing is not None and existing.is_claimed:
            raise Revert(CLONE_FAILED, message="address collision", data={"address": to_hex(addr)})
        return addr

    def _code_for(self, addr: bytes) -> ContractCode:
        acc = self._journal.get_account(addr)
        if acc is None or not acc.is_contract:
            raise UnknownFunction("no code at address", address=addr)
        return self._resolve_code(addr, acc)

    def _resolve_code(self, addr: bytes, acc: Account) -> ContractCode:
        if acc.code is not None:
            return acc.code
        tacc = self._journal.get_account(acc.delegate)
        if tacc is None or tacc.code is None:
            raise UnknownFunction("clone delegate has no code", address=addr)
        return tacc.code

    def _move_value(self, src: bytes, dst: bytes, amount: int) -> None:
        if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
            raise ValueError("value must be a non-negative int")
        if amount == 0:
            return
        payer = self._journal.account_for_write(src)
        if payer.balance < amount:
            raise InsufficientFunds(address=src, balance=payer.balance, amount=amount)
        payer.debit(amount)
        self._journal.account_for_write(dst).credit(amount)

    def _writable_frame(self, op: str) -> Frame:
        frame = self.current_frame()
        if frame.read_only:
            raise StaticCallViolation(op)
        return frame

    def _check_sender(self, sender: bytes) -> bytes:
        sender = to_address(sender)
        if sender == ZERO_ADDRESS:
            raise ContextError("the null account cannot send calls")
        return sender

    def _require_host_context(self) -> None:
        if _ACTIVE.get() is not None:
            raise ContextError("host API used from inside a contract call")

    def _host_write(self) -> "_HostWrite":
        return _HostWrite(self)


class _HostWrite:
    """Context manager committing a host-side state edit atomically."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def __enter__(self) -> None:
        self._engine._lock.acquire()
        try:
            self._engine._require_host_context()
        except BaseException:
            self._engine._lock.release()
            raise
        self._engine._journal.begin()

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is None:
                self._engine._journal.commit()
            else:
                self._engine._journal.revert()
        finally:
            self._engine._lock.release()


__all__ = ["Engine"]
