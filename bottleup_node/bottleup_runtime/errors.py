from __future__ import annotations

"""
bottleup_node/bottleup_runtime/errors.py
----------------------------------------

Error taxonomy for the recycling ledger.

Every failure raised by the runtime is a LedgerError subclass carrying:

- code        : short, stable snake_case identifier (used as HTTP detail)
- status_code : HTTP status the API layer should answer with
- ctx         : optional structured context for logs

Nothing here is retried by the runtime; callers decide retry policy.
"""

from typing import Any, Dict, Optional


class LedgerError(RuntimeError):
    code: str = "ledger_error"
    status_code: int = 400

    def __init__(self, message: str = "", ctx: Optional[Dict[str, Any]] = None):
        super().__init__(message or self.code)
        self.ctx: Dict[str, Any] = dict(ctx or {})

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": False, "error": self.code, "message": str(self), "ctx": self.ctx}


class AlreadyRegistered(LedgerError):
    code = "already_registered"
    status_code = 409


class NotRegistered(LedgerError):
    code = "not_registered"
    status_code = 404


class InvalidQuantity(LedgerError):
    code = "invalid_quantity"


class Unauthorized(LedgerError):
    code = "unauthorized"
    status_code = 403


class InvalidIndex(LedgerError):
    code = "invalid_index"
    status_code = 404


class AlreadyVerified(LedgerError):
    code = "already_verified"
    status_code = 409


class InsufficientQuantity(LedgerError):
    code = "insufficient_quantity"
    status_code = 409


class TransferFailed(LedgerError):
    code = "transfer_failed"
    status_code = 502


class InvalidCount(LedgerError):
    code = "invalid_count"


class InvalidTarget(LedgerError):
    code = "invalid_target"


class NotAnAdmin(LedgerError):
    code = "not_an_admin"
    status_code = 404


class TransferError(RuntimeError):
    """
    Raised by a credit ledger implementation when a transfer cannot be made.

    The redemption engine converts this into TransferFailed after rolling
    back its own counters.
    """


__all__ = [
    "LedgerError",
    "AlreadyRegistered",
    "NotRegistered",
    "InvalidQuantity",
    "Unauthorized",
    "InvalidIndex",
    "AlreadyVerified",
    "InsufficientQuantity",
    "TransferFailed",
    "InvalidCount",
    "InvalidTarget",
    "NotAnAdmin",
    "TransferError",
]
