"""
API: /accounts

Registration and public profile / submission reads.
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter
from pydantic import BaseModel, Field

from bottleup_node.api.helpers import ProfileOut, call_ledger
from bottleup_node.bottleup_executor import executor

router = APIRouter(prefix="/accounts", tags=["accounts"])


class RegisterReq(BaseModel):
    user_id: str = Field(..., description="Caller identity (e.g. an address).")
    display_name: str = Field(..., description="Public name, immutable after registration.")


class SubmissionOut(BaseModel):
    index: int
    quantity: int
    status: str


@router.post("/register")
def register(payload: RegisterReq) -> Dict[str, Any]:
    profile = call_ledger(executor.register, payload.user_id, payload.display_name)
    return {"ok": True, "profile": ProfileOut.from_profile(profile).model_dump()}


@router.get("/{user_id}", response_model=ProfileOut)
def get_profile(user_id: str) -> ProfileOut:
    return ProfileOut.from_profile(call_ledger(executor.profile, user_id))


@router.get("/{user_id}/submissions", response_model=List[SubmissionOut])
def list_submissions(user_id: str) -> List[SubmissionOut]:
    """Full ordered submission sequence, unfiltered."""
    subs = call_ledger(executor.submissions, user_id)
    return [
        SubmissionOut(index=i, quantity=s.quantity, status=s.status.value)
        for i, s in enumerate(subs)
    ]
