"""
BottleUp runtime: the recycling ledger state machine.

Importing this package is side-effect free; the node wiring (config,
executor, HTTP) lives one level up in bottleup_node.
"""

from .access import AccessGate
from .accounts import AccountRegistry, Profile
from .atomic_store import AtomicLedgerStore
from .credit import CreditLedger, InMemoryCreditLedger, TREASURY_ACCOUNT
from .errors import (
    AlreadyRegistered,
    AlreadyVerified,
    InsufficientQuantity,
    InvalidCount,
    InvalidIndex,
    InvalidQuantity,
    InvalidTarget,
    LedgerError,
    NotAnAdmin,
    NotRegistered,
    TransferError,
    TransferFailed,
    Unauthorized,
)
from .leaderboard import LeaderboardQuery, rank_profiles
from .ledger import RecyclingLedger
from .redemption import DENOMINATION, EXCHANGE_RATE, RedemptionEngine, RedemptionReceipt
from .submissions import Submission, SubmissionLedger, SubmissionStatus

__all__ = [
    "AccessGate",
    "AccountRegistry",
    "AtomicLedgerStore",
    "AlreadyRegistered",
    "AlreadyVerified",
    "CreditLedger",
    "DENOMINATION",
    "EXCHANGE_RATE",
    "InMemoryCreditLedger",
    "InsufficientQuantity",
    "InvalidCount",
    "InvalidIndex",
    "InvalidQuantity",
    "InvalidTarget",
    "LeaderboardQuery",
    "LedgerError",
    "NotAnAdmin",
    "NotRegistered",
    "Profile",
    "RecyclingLedger",
    "RedemptionEngine",
    "RedemptionReceipt",
    "Submission",
    "SubmissionLedger",
    "SubmissionStatus",
    "TREASURY_ACCOUNT",
    "TransferError",
    "TransferFailed",
    "Unauthorized",
    "rank_profiles",
]
