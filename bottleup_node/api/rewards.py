"""
bottleup_node/api/rewards.py
---------------------------------
Redemption and credit views.

Endpoints:

    POST /rewards/redeem
        -> convert the caller's verified quantity into credit

    GET  /rewards/balance/{account_id}
        -> external credit balance (smallest denomination)

    GET  /rewards/params
        -> exchange rate / denomination / treasury balance

    POST /rewards/fund
        -> owner/admin tops up the treasury that pays redemptions
"""

from typing import Any, Dict

from fastapi import APIRouter
from pydantic import BaseModel, Field

from bottleup_node.api.helpers import call_ledger
from bottleup_node.bottleup_executor import executor

router = APIRouter(prefix="/rewards", tags=["rewards"])


class RedeemReq(BaseModel):
    user_id: str


class FundReq(BaseModel):
    caller: str
    amount: int = Field(..., description="Amount in the smallest denomination.")


class RewardsParamsResponse(BaseModel):
    ok: bool = True
    exchange_rate: int = Field(..., description="Bottles per credit unit.")
    denomination: int = Field(..., description="External base units per credit unit.")
    treasury_account: str
    treasury_balance: int


@router.post("/redeem")
def redeem(payload: RedeemReq) -> Dict[str, Any]:
    receipt = call_ledger(executor.redeem, payload.user_id)
    return {"ok": True, **receipt.to_dict()}


@router.get("/balance/{account_id}")
def get_balance(account_id: str) -> Dict[str, Any]:
    return {
        "ok": True,
        "account_id": account_id,
        "balance": int(executor.credit.balance_of(account_id)),
    }


@router.get("/params", response_model=RewardsParamsResponse)
def rewards_params() -> RewardsParamsResponse:
    treasury = executor.credit.treasury
    return RewardsParamsResponse(
        exchange_rate=executor.ledger.exchange_rate,
        denomination=executor.ledger.denomination,
        treasury_account=treasury,
        treasury_balance=executor.credit.balance_of(treasury),
    )


@router.post("/fund")
def fund(payload: FundReq) -> Dict[str, Any]:
    balance = call_ledger(executor.fund_treasury, payload.caller, payload.amount)
    return {"ok": True, "treasury_balance": balance}
