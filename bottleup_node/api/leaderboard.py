"""
API: /leaderboard

    GET /leaderboard/top?n=3   -> top-n accounts by verified quantity

Read-only. n must be between 1 and the number of registered accounts.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Query

from bottleup_node.api.helpers import call_ledger, profiles_out
from bottleup_node.bottleup_executor import executor

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("/top")
def top(n: int = Query(..., description="How many accounts to return.")) -> Dict[str, Any]:
    """Top-n accounts by verified quantity; ties keep registration order."""
    ranked = call_ledger(executor.top_n, n)
    return {
        "ok": True,
        "n": n,
        "top": [dict(rank=i + 1, **p.model_dump()) for i, p in enumerate(profiles_out(ranked))],
    }
