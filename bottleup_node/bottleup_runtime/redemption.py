"""
bottleup_node/bottleup_runtime/redemption.py
--------------------------------------------

Converts verified-but-unredeemed quantity into credit.

    redeemable = total_verified - total_redeemed
    units      = redeemable // exchange_rate
    total_redeemed += units * exchange_rate     (remainder stays pending)
    credit_balance += units
    transfer(identity, units * denomination)

Production invariants:

- The whole redeem runs under the identity's lock, including the external
  transfer, so submit/verify/redeem on one account cannot interleave.
- If the transfer fails (falsy result or TransferError) both counter
  increases are rolled back and TransferFailed is raised. There is never
  credit without a matching transfer, nor a transfer without credit.
- On success every verified submission of the account becomes redeemed,
  including ones whose quantity is still part of the remainder.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict

from .accounts import AccountRegistry
from .credit import CreditLedger
from .errors import InsufficientQuantity, TransferError, TransferFailed
from .submissions import SubmissionStatus

log = logging.getLogger(__name__)

# Quantity units per credit unit.
EXCHANGE_RATE: int = 10

# Smallest external denominations per credit unit (18-decimal token).
DENOMINATION: int = 10**18


@dataclass(frozen=True)
class RedemptionReceipt:
    identity: str
    units: int
    quantity_redeemed: int
    amount: int
    remainder: int
    submissions_redeemed: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class RedemptionEngine:
    def __init__(
        self,
        registry: AccountRegistry,
        credit: CreditLedger,
        exchange_rate: int = EXCHANGE_RATE,
        denomination: int = DENOMINATION,
    ) -> None:
        if int(exchange_rate) < 1:
            raise ValueError("exchange_rate must be >= 1")
        if int(denomination) < 1:
            raise ValueError("denomination must be >= 1")
        self.registry = registry
        self.credit = credit
        self.exchange_rate = int(exchange_rate)
        self.denomination = int(denomination)

    def redeemable(self, identity: str) -> int:
        return self.registry.get_profile(identity).redeemable

    def redeem(self, identity: str) -> RedemptionReceipt:
        rec = self.registry.record(identity)

        with rec.lock:
            profile = rec.profile
            redeemable = profile.redeemable
            if redeemable < self.exchange_rate:
                raise InsufficientQuantity(
                    f"{redeemable} redeemable, {self.exchange_rate} needed per credit",
                    {"identity": identity, "redeemable": redeemable, "exchange_rate": self.exchange_rate},
                )

            units = redeemable // self.exchange_rate
            quantity = units * self.exchange_rate
            amount = units * self.denomination

            profile.total_redeemed += quantity
            profile.credit_balance += units

            reason = "transfer_rejected"
            committed = False
            try:
                committed = bool(self.credit.transfer(identity, amount))
            except TransferError as e:
                reason = str(e) or reason
            except Exception:
                log.exception("credit transfer raised for %s; redemption rolled back", identity)
                raise
            finally:
                if not committed:
                    self._rollback(profile, quantity, units)

            if not committed:
                log.warning("redeem %s failed: %s (units=%d)", identity, reason, units)
                raise TransferFailed(
                    f"credit transfer of {amount} to {identity!r} failed: {reason}",
                    {"identity": identity, "units": units, "amount": amount},
                )

            advanced = 0
            for sub in rec.submissions:
                if sub.status is SubmissionStatus.VERIFIED:
                    sub.status = SubmissionStatus.REDEEMED
                    advanced += 1

            receipt = RedemptionReceipt(
                identity=identity,
                units=units,
                quantity_redeemed=quantity,
                amount=amount,
                remainder=profile.redeemable,
                submissions_redeemed=advanced,
            )

        log.info("redeemed %s: %d units (%d qty, remainder %d)", identity, units, quantity, receipt.remainder)
        return receipt

    @staticmethod
    def _rollback(profile, quantity: int, units: int) -> None:
        profile.total_redeemed -= quantity
        profile.credit_balance -= units


__all__ = ["DENOMINATION", "EXCHANGE_RATE", "RedemptionEngine", "RedemptionReceipt"]
