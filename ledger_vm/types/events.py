"""
ledger_vm.types.events — the record of one emitted contract event.

`LogEvent` is what the journal stores and what receipts carry: the emitting
contract address, the event name, and its validated arguments in emission
order. Argument values are restricted to bytes, int, bool, str and None by
`runtime.events_api`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class LogEvent:
    address: bytes
    name: bytes
    args: Mapping[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.args[key]

    @property
    def name_str(self) -> str:
        return self.name.decode("utf-8", "replace")

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form: bytes render as 0x-hex."""

        def enc(v: Any) -> Any:
            if isinstance(v, (bytes, bytearray)):
                return "0x" + bytes(v).hex()
            return v

        return {
            "address": "0x" + self.address.hex(),
            "name": self.name_str,
            "args": {k: enc(v) for k, v in self.args.items()},
        }


__all__ = ["LogEvent"]
