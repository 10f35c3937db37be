"""
bottleup_node/bottleup_runtime/submissions.py
---------------------------------------------

Per-account submission sequences.

Status only ever moves forward:

    pending -> verified -> redeemed

submit() is the only writer that appends; verify() is the only writer that
moves pending -> verified (a single trusted action, gated by AccessGate).
The verified -> redeemed step belongs to the redemption engine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List

from .access import AccessGate
from .accounts import AccountRegistry
from .errors import AlreadyVerified, InvalidIndex, InvalidQuantity

log = logging.getLogger(__name__)


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REDEEMED = "redeemed"


@dataclass
class Submission:
    quantity: int
    status: SubmissionStatus = SubmissionStatus.PENDING

    def snapshot(self) -> "Submission":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {"quantity": int(self.quantity), "status": self.status.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Submission":
        return cls(quantity=int(data["quantity"]), status=SubmissionStatus(data.get("status", "pending")))


def _valid_quantity(quantity: Any) -> bool:
    return isinstance(quantity, int) and not isinstance(quantity, bool) and quantity > 0


class SubmissionLedger:
    def __init__(self, registry: AccountRegistry, gate: AccessGate) -> None:
        self.registry = registry
        self.gate = gate

    def submit(self, identity: str, quantity: int) -> int:
        """Append a pending submission. Returns its index in the sequence."""
        rec = self.registry.record(identity)
        if not _valid_quantity(quantity):
            raise InvalidQuantity(
                "quantity must be a positive integer", {"identity": identity, "quantity": quantity}
            )

        with rec.lock:
            rec.submissions.append(Submission(quantity=quantity))
            rec.profile.total_submitted += quantity
            index = len(rec.submissions) - 1

        log.info("submission %s#%d: %d pending", identity, index, quantity)
        return index

    def verify(self, caller: str, identity: str, index: int) -> Submission:
        self.gate.require_privileged(caller, action="verify")
        rec = self.registry.record(identity)

        with rec.lock:
            if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(rec.submissions):
                raise InvalidIndex(
                    f"no submission {index!r} for {identity!r}",
                    {"identity": identity, "index": index, "count": len(rec.submissions)},
                )
            sub = rec.submissions[index]
            if sub.status is not SubmissionStatus.PENDING:
                raise AlreadyVerified(
                    f"submission {index} is already {sub.status.value}",
                    {"identity": identity, "index": index, "status": sub.status.value},
                )
            sub.status = SubmissionStatus.VERIFIED
            rec.profile.total_verified += sub.quantity
            out = sub.snapshot()

        log.info("submission %s#%d verified by %s (+%d)", identity, index, caller, out.quantity)
        return out

    def submissions(self, identity: str) -> List[Submission]:
        rec = self.registry.record(identity)
        with rec.lock:
            return [s.snapshot() for s in rec.submissions]


__all__ = ["Submission", "SubmissionLedger", "SubmissionStatus"]
