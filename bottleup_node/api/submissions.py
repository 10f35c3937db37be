"""
API: /submissions

    POST /submissions          -> caller submits a batch of bottles
    POST /submissions/verify   -> owner/admin marks a pending batch collected
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter
from pydantic import BaseModel

from bottleup_node.api.helpers import call_ledger
from bottleup_node.bottleup_executor import executor

router = APIRouter(prefix="/submissions", tags=["submissions"])


class SubmitReq(BaseModel):
    user_id: str
    quantity: int


class VerifyReq(BaseModel):
    caller: str
    user_id: str
    index: int


@router.post("")
def submit(payload: SubmitReq) -> Dict[str, Any]:
    index = call_ledger(executor.submit, payload.user_id, payload.quantity)
    return {"ok": True, "user_id": payload.user_id, "index": index}


@router.post("/verify")
def verify(payload: VerifyReq) -> Dict[str, Any]:
    sub = call_ledger(executor.verify, payload.caller, payload.user_id, payload.index)
    return {
        "ok": True,
        "user_id": payload.user_id,
        "index": payload.index,
        "quantity": sub.quantity,
        "status": sub.status.value,
    }
