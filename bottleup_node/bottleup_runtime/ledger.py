"""
bottleup_node/bottleup_runtime/ledger.py
----------------------------------------

RecyclingLedger: the single owner of all recycling state.

Wires the components together, leaves first:

    AccountRegistry -> SubmissionLedger -> RedemptionEngine -> LeaderboardQuery
                           ^
                      AccessGate (external capability check)

Public entrypoints used by the executor, the API routers and the CLI:

    register(identity, display_name)
    is_registered(identity) / profile(identity)
    submit(identity, quantity) -> index
    verify(caller, identity, index)
    submissions(identity)
    redeem(identity) -> RedemptionReceipt
    top_n(n)

Production invariants (checked by audit()):

- total_redeemed <= total_verified <= total_submitted for every profile
- sum(quantity of verified + redeemed submissions) == total_verified
- sum(quantity of all submissions) == total_submitted
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .access import AccessGate
from .accounts import AccountRecord, AccountRegistry, Profile
from .credit import CreditLedger
from .leaderboard import LeaderboardQuery
from .redemption import DENOMINATION, EXCHANGE_RATE, RedemptionEngine, RedemptionReceipt
from .submissions import Submission, SubmissionLedger, SubmissionStatus

log = logging.getLogger(__name__)


class RecyclingLedger:
    def __init__(
        self,
        gate: AccessGate,
        credit: CreditLedger,
        *,
        exchange_rate: int = EXCHANGE_RATE,
        denomination: int = DENOMINATION,
    ) -> None:
        self.gate = gate
        self.credit = credit
        self.registry = AccountRegistry()
        self.submission_ledger = SubmissionLedger(self.registry, gate)
        self.engine = RedemptionEngine(
            self.registry, credit, exchange_rate=exchange_rate, denomination=denomination
        )
        self.leaderboard = LeaderboardQuery(self.registry)

    @property
    def exchange_rate(self) -> int:
        return self.engine.exchange_rate

    @property
    def denomination(self) -> int:
        return self.engine.denomination

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def register(self, identity: str, display_name: str) -> Profile:
        return self.registry.register(identity, display_name)

    def is_registered(self, identity: str) -> bool:
        return self.registry.is_registered(identity)

    def profile(self, identity: str) -> Profile:
        return self.registry.get_profile(identity)

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------

    def submit(self, identity: str, quantity: int) -> int:
        return self.submission_ledger.submit(identity, quantity)

    def verify(self, caller: str, identity: str, index: int) -> Submission:
        return self.submission_ledger.verify(caller, identity, index)

    def submissions(self, identity: str) -> List[Submission]:
        return self.submission_ledger.submissions(identity)

    # ------------------------------------------------------------------
    # Redemption / ranking
    # ------------------------------------------------------------------

    def redeem(self, identity: str) -> RedemptionReceipt:
        return self.engine.redeem(identity)

    def top_n(self, n: int) -> List[Profile]:
        return self.leaderboard.top_n(n)

    # ------------------------------------------------------------------
    # Audit
    # ------------------------------------------------------------------

    def audit(self) -> bool:
        """Integrity check over every account. Logs and returns False on drift."""
        ok = True
        for rec in self.registry.records():
            with rec.lock:
                p = rec.profile
                verified = sum(
                    s.quantity
                    for s in rec.submissions
                    if s.status in (SubmissionStatus.VERIFIED, SubmissionStatus.REDEEMED)
                )
                submitted = sum(s.quantity for s in rec.submissions)
                if not (0 <= p.total_redeemed <= p.total_verified <= p.total_submitted):
                    log.error("[ledger.audit] counter order broken for %s: %s", p.identity, p)
                    ok = False
                if verified != p.total_verified or submitted != p.total_submitted:
                    log.error(
                        "[ledger.audit] totals drift for %s: verified=%d/%d submitted=%d/%d",
                        p.identity, verified, p.total_verified, submitted, p.total_submitted,
                    )
                    ok = False
        return ok

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        accounts = []
        for rec in self.registry.records():
            with rec.lock:
                accounts.append(
                    {
                        "profile": rec.profile.to_dict(),
                        "submissions": [s.to_dict() for s in rec.submissions],
                    }
                )
        return {
            "exchange_rate": self.exchange_rate,
            "denomination": self.denomination,
            "accounts": accounts,
        }

    @classmethod
    def from_dict(
        cls,
        data: Optional[Dict[str, Any]],
        gate: AccessGate,
        credit: CreditLedger,
        *,
        exchange_rate: int = EXCHANGE_RATE,
        denomination: int = DENOMINATION,
    ) -> "RecyclingLedger":
        ledger = cls(gate, credit, exchange_rate=exchange_rate, denomination=denomination)
        for item in (data or {}).get("accounts", []):
            prof = item.get("profile") or {}
            rec = AccountRecord(
                profile=Profile(
                    identity=str(prof["identity"]),
                    display_name=str(prof.get("display_name", "")),
                    total_submitted=int(prof.get("total_submitted", 0)),
                    total_verified=int(prof.get("total_verified", 0)),
                    total_redeemed=int(prof.get("total_redeemed", 0)),
                    credit_balance=int(prof.get("credit_balance", 0)),
                ),
                submissions=[Submission.from_dict(s) for s in item.get("submissions", [])],
            )
            ledger.registry._restore(rec)
        if not ledger.audit():
            raise ValueError("ledger snapshot failed integrity audit")
        return ledger


__all__ = ["RecyclingLedger"]
