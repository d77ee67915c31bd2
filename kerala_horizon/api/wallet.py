"""
Wallet routes - balance, top-ups and payments.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..models.user import UserProfile
from ..models.wallet import AddMoneyRequest, CardPayRequest, PayRequest, UpiPayRequest, VerifyPaymentRequest
from ..services.wallet import get_wallet_service
from .deps import get_current_user, ok

router = APIRouter(prefix="/api/wallet", tags=["wallet"])


@router.get("/balance")
async def get_balance(user: UserProfile = Depends(get_current_user)):
    return ok(get_wallet_service().balance(user.uid))


@router.post("/add-money")
async def add_money(request: AddMoneyRequest, user: UserProfile = Depends(get_current_user)):
    order = get_wallet_service().add_money(user.uid, request)
    return ok(order, message="Payment order created")


@router.post("/verify-payment")
async def verify_payment(request: VerifyPaymentRequest, user: UserProfile = Depends(get_current_user)):
    result = get_wallet_service().verify_payment(user.uid, request.transaction_id, request.payment_signature)
    return ok(result, message="Payment verified successfully")


@router.post("/pay")
async def pay(request: PayRequest, user: UserProfile = Depends(get_current_user)):
    result = get_wallet_service().pay(user.uid, request)
    return ok(result, message="Payment successful")


@router.get("/transactions")
async def list_transactions(
    category: Optional[str] = None,
    type: Optional[str] = Query(None, pattern="^(credit|debit)$"),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user: UserProfile = Depends(get_current_user),
):
    transactions, pagination = get_wallet_service().list_transactions(
        user.uid, category, type, start_date, end_date, limit, offset
    )
    return ok({"transactions": transactions, "pagination": pagination})


@router.post("/upi/pay")
async def pay_with_upi(request: UpiPayRequest, user: UserProfile = Depends(get_current_user)):
    """Start a UPI payment; the app opens the returned upi:// link."""
    return ok(get_wallet_service().pay_upi(user.uid, request), message="UPI payment initiated")


@router.post("/card/pay")
async def pay_with_card(request: CardPayRequest, user: UserProfile = Depends(get_current_user)):
    return ok(get_wallet_service().pay_card(user.uid, request), message="Card payment initiated")


@router.get("/payment-methods")
async def payment_methods(user: UserProfile = Depends(get_current_user)):
    return ok({"payment_methods": get_wallet_service().payment_methods(user.uid)})
