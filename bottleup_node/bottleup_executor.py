from __future__ import annotations

"""
BottleUp Executor

Owns the node-level wiring around the recycling ledger:

- config (bottleup_config.yaml + ENV)
- AccessGate (owner + admins)
- credit ledger (in-memory treasury for dev / tests)
- RecyclingLedger (the state machine)
- optional AtomicLedgerStore snapshotting after every successful mutation

API routers and the CLI import the module-level `executor`.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

from . import config as node_config
from .bottleup_runtime.access import AccessGate
from .bottleup_runtime.accounts import Profile
from .bottleup_runtime.atomic_store import AtomicLedgerStore
from .bottleup_runtime.credit import InMemoryCreditLedger
from .bottleup_runtime.errors import InvalidQuantity
from .bottleup_runtime.ledger import RecyclingLedger
from .bottleup_runtime.redemption import RedemptionReceipt
from .bottleup_runtime.submissions import Submission

log = logging.getLogger(__name__)

# Repo root = parent of the package directory (bottleup_node/)
PROJECT_ROOT = Path(__file__).resolve().parent.parent

T = TypeVar("T")


class BottleUpExecutor:
    def __init__(self, cfg: Optional[Dict[str, Any]] = None, *, store: Optional[AtomicLedgerStore] = None) -> None:
        self.cfg = cfg if cfg is not None else node_config.load_config(str(PROJECT_ROOT))
        self._lock = threading.RLock()
        self.degraded = False

        if store is None and node_config.get_persistence_driver(self.cfg) == "json":
            store = AtomicLedgerStore(
                node_config.get_data_dir(self.cfg),
                keep_backups=node_config.get_keep_backups(self.cfg),
            )
        self.store = store

        self._build(self.store.load() if self.store else None)

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def _build(self, snapshot: Optional[Dict[str, Any]]) -> None:
        snap = snapshot or {}

        if snap.get("access"):
            self.gate = AccessGate.from_dict(snap["access"])
        else:
            self.gate = AccessGate(
                owner=node_config.get_owner(self.cfg),
                admins=node_config.get_admins(self.cfg),
            )

        if snap.get("credit"):
            self.credit = InMemoryCreditLedger.from_dict(snap["credit"])
        else:
            self.credit = InMemoryCreditLedger(
                treasury=node_config.get_treasury_account(self.cfg),
                initial_treasury=node_config.get_initial_treasury(self.cfg),
            )

        self.ledger = RecyclingLedger.from_dict(
            snap.get("ledger"),
            self.gate,
            self.credit,
            exchange_rate=node_config.get_exchange_rate(self.cfg),
            denomination=node_config.get_denomination(self.cfg),
        )
        log.info(
            "ledger ready: %d accounts, owner=%s, exchange_rate=%d",
            len(self.ledger.registry), self.gate.owner, self.ledger.exchange_rate,
        )

    def reset_state(self) -> None:
        """Drop all state and rebuild from config. Used by tests and dev tooling."""
        with self._lock:
            self._build(None)
            self.save()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "access": self.gate.to_dict(),
            "credit": self.credit.to_dict(),
            "ledger": self.ledger.to_dict(),
        }

    def save(self) -> None:
        if self.store is None:
            return
        with self._lock:
            self.store.save(self.snapshot())

    def _mutate(self, fn: Callable[..., T], *args: Any) -> T:
        if self.store is None:
            return fn(*args)

        # mutation and its snapshot are one step, so a save never sees a
        # redeem without its transfer
        with self._lock:
            out = fn(*args)
            try:
                self.save()
            except OSError:
                # already applied, possibly paid out: keep the result, flag the node
                self.degraded = True
                log.exception("snapshot save failed after %s; running degraded", getattr(fn, "__name__", fn))
            else:
                self.degraded = False
        return out

    # ------------------------------------------------------------------
    # Mutations (persisted)
    # ------------------------------------------------------------------

    def register(self, identity: str, display_name: str) -> Profile:
        return self._mutate(self.ledger.register, identity, display_name)

    def submit(self, identity: str, quantity: int) -> int:
        return self._mutate(self.ledger.submit, identity, quantity)

    def verify(self, caller: str, identity: str, index: int) -> Submission:
        return self._mutate(self.ledger.verify, caller, identity, index)

    def redeem(self, identity: str) -> RedemptionReceipt:
        return self._mutate(self.ledger.redeem, identity)

    def add_admin(self, caller: str, target: str) -> None:
        self._mutate(self.gate.add_admin, caller, target)

    def remove_admin(self, caller: str, target: str) -> None:
        self._mutate(self.gate.remove_admin, caller, target)

    def fund_treasury(self, caller: str, amount: int) -> int:
        """Owner/admin tops up the reward pool. Returns the new treasury balance."""
        self.gate.require_privileged(caller, action="fund_treasury")
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidQuantity("funding amount must be a positive integer", {"amount": amount})
        self._mutate(self.credit.deposit, self.credit.treasury, amount)
        log.info("treasury funded by %s: +%d", caller, amount)
        return self.credit.balance_of(self.credit.treasury)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def profile(self, identity: str) -> Profile:
        return self.ledger.profile(identity)

    def submissions(self, identity: str) -> List[Submission]:
        return self.ledger.submissions(identity)

    def top_n(self, n: int) -> List[Profile]:
        return self.ledger.top_n(n)


executor = BottleUpExecutor()

__all__ = ["BottleUpExecutor", "executor", "PROJECT_ROOT"]
