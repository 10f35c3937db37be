#!/usr/bin/env python3
"""
bottleup_node.bottleup_runtime.credit
-------------------------------------

Fungible credit ledger seen by the redemption engine.

The real token ledger lives outside this node; the runtime only needs:
- transfer(to, amount) -> bool   (may also raise TransferError)
- balance_of(account) -> int

InMemoryCreditLedger is the dev / test implementation:
- transfers are paid out of a treasury account
- the treasury is funded with deposit()
- amounts are integers in the smallest denomination
"""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import Any, Dict, Protocol, runtime_checkable

from .errors import TransferError

TREASURY_ACCOUNT = "@bottleup_treasury"


@runtime_checkable
class CreditLedger(Protocol):
    def transfer(self, to: str, amount: int) -> bool:
        ...

    def balance_of(self, account: str) -> int:
        ...


class InMemoryCreditLedger:
    def __init__(self, treasury: str = TREASURY_ACCOUNT, initial_treasury: int = 0):
        self.treasury = treasury
        self.accounts: Dict[str, int] = defaultdict(int)
        self._lock = threading.Lock()
        if initial_treasury:
            self.deposit(treasury, initial_treasury)

    # ---------- Core ----------
    def deposit(self, account: str, amount: int) -> None:
        amount = int(amount)
        if amount < 0:
            raise ValueError("deposit amount must be >= 0")
        with self._lock:
            self.accounts[account] += amount

    def balance_of(self, account: str) -> int:
        with self._lock:
            return int(self.accounts.get(account, 0))

    def transfer(self, to: str, amount: int) -> bool:
        amount = int(amount)
        if amount <= 0:
            raise TransferError("transfer amount must be positive")
        with self._lock:
            if self.accounts[self.treasury] < amount:
                return False
            self.accounts[self.treasury] -= amount
            self.accounts[to] += amount
            return True

    # ---------- Persistence ----------
    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return {"treasury": self.treasury, "accounts": dict(self.accounts)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InMemoryCreditLedger":
        led = cls(treasury=data.get("treasury") or TREASURY_ACCOUNT)
        for acct, bal in (data.get("accounts") or {}).items():
            led.accounts[str(acct)] = int(bal)
        return led


__all__ = ["CreditLedger", "InMemoryCreditLedger", "TREASURY_ACCOUNT"]
