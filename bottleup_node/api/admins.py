"""
API: /admins

Owner-level admin management. The owner is not listed as an admin but
always passes the admin check.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter
from pydantic import BaseModel

from bottleup_node.api.helpers import call_ledger
from bottleup_node.bottleup_executor import executor

router = APIRouter(prefix="/admins", tags=["admins"])


class AdminChange(BaseModel):
    caller: str
    target: str


@router.get("")
def list_admins() -> Dict[str, Any]:
    return {"ok": True, "owner": executor.gate.owner, "admins": executor.gate.admins()}


@router.get("/{user_id}")
def admin_status(user_id: str) -> Dict[str, Any]:
    gate = executor.gate
    return {
        "ok": True,
        "user_id": user_id,
        "is_owner": gate.is_owner(user_id),
        "is_admin": gate.is_admin(user_id),
    }


@router.post("/add")
def add_admin(payload: AdminChange) -> Dict[str, Any]:
    call_ledger(executor.add_admin, payload.caller, payload.target)
    return {"ok": True, "admins": executor.gate.admins()}


@router.post("/remove")
def remove_admin(payload: AdminChange) -> Dict[str, Any]:
    call_ledger(executor.remove_admin, payload.caller, payload.target)
    return {"ok": True, "admins": executor.gate.admins()}
