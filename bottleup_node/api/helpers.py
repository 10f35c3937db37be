"""
Shared helpers for the HTTP routers.

Runtime errors are translated here so every LedgerError kind reaches the
client as a distinct (status_code, detail) pair.
"""

from __future__ import annotations

import logging
from typing import Callable, List, TypeVar

from fastapi import HTTPException
from pydantic import BaseModel

from bottleup_node.bottleup_runtime.accounts import Profile
from bottleup_node.bottleup_runtime.errors import LedgerError

logger = logging.getLogger("bottleup.api")

T = TypeVar("T")


class ProfileOut(BaseModel):
    identity: str
    display_name: str
    total_submitted: int
    total_verified: int
    total_redeemed: int
    credit_balance: int

    @classmethod
    def from_profile(cls, p: Profile) -> "ProfileOut":
        return cls(**p.to_dict())


def profiles_out(profiles: List[Profile]) -> List[ProfileOut]:
    return [ProfileOut.from_profile(p) for p in profiles]


def http_error(e: LedgerError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.code)


def call_ledger(fn: Callable[..., T], *args) -> T:
    """Run a runtime call, mapping LedgerError to HTTPException."""
    try:
        return fn(*args)
    except LedgerError as e:
        logger.info("%s rejected: %s", getattr(fn, "__name__", "call"), e.code)
        raise http_error(e) from e
