"""
Wallet Service - balances, top-ups and payments.

Top-ups are two-step: ``add_money`` records a pending credit and returns an
order id, then ``verify_payment`` checks the gateway signature over the order
and transaction ids before crediting the wallet.
"""
import hashlib
import hmac
import logging
import threading
import uuid
from datetime import date, datetime
from typing import Optional
from urllib.parse import urlencode

from ..config import settings
from ..core.errors import NotFoundError, ValidationError
from ..models.wallet import (
    AddMoneyRequest,
    CardPayRequest,
    PaymentMethod,
    PayRequest,
    Transaction,
    TransactionStatus,
    TransactionType,
    UpiPayRequest,
    Wallet,
)
from .store import Database, db

logger = logging.getLogger(__name__)

RECENT_TRANSACTIONS = 10


class InsufficientFundsError(ValidationError):
    details_key = "data"


def sign_payment(order_id: str, transaction_id: str, secret: Optional[str] = None) -> str:
    """HMAC-SHA256 signature the payment gateway returns for a completed order."""
    key = (secret or settings.payment_secret).encode("utf-8")
    message = f"{order_id}|{transaction_id}".encode("utf-8")
    return hmac.new(key, message, hashlib.sha256).hexdigest()


class WalletService:
    """Wallet balances and the transactions that move them."""

    def __init__(self, database: Database = db):
        self.wallets = database.collection("wallets")
        self.transactions = database.collection("transactions")
        self.users = database.collection("users")
        self._lock = threading.RLock()

    def get_or_create_wallet(self, user_id: str) -> Wallet:
        with self._lock:
            wallet = self.wallets.get(user_id)
            if wallet is None:
                wallet = self.wallets.set(user_id, Wallet(user_id=user_id))
                logger.info(f"Created wallet for {user_id}")
            return wallet

    def balance(self, user_id: str) -> dict:
        wallet = self.get_or_create_wallet(user_id)
        recent = self._user_transactions(user_id)[:RECENT_TRANSACTIONS]
        return {"wallet": wallet, "recent_transactions": recent}

    def _user_transactions(self, user_id: str) -> list[Transaction]:
        return sorted(
            self.transactions.where(user_id=user_id),
            key=lambda t: t.created_at,
            reverse=True,
        )

    def _adjust_balance(self, user_id: str, delta: float) -> Wallet:
        """Apply a balance change; callers hold the lock."""
        wallet = self.get_or_create_wallet(user_id)
        new_balance = round(wallet.balance + delta, 2)
        if new_balance < 0:
            raise InsufficientFundsError("Insufficient wallet balance", details={
                "required": -delta,
                "available": wallet.balance,
                "shortfall": round(-delta - wallet.balance, 2),
            })
        return self.wallets.update(user_id, balance=new_balance, updated_at=datetime.now())

    # -- top-ups ----------------------------------------------------------

    def add_money(self, user_id: str, request: AddMoneyRequest) -> dict:
        """Create a payment order and a pending credit transaction."""
        self.get_or_create_wallet(user_id)
        order_id = f"order_{uuid.uuid4().hex[:14]}"

        metadata = {"type": "wallet_topup"}
        if request.payment_details.upi_id:
            metadata["upi_id"] = request.payment_details.upi_id
        if request.payment_details.card_number:
            metadata["card_last4"] = request.payment_details.card_number[-4:]

        transaction = Transaction(
            user_id=user_id,
            type=TransactionType.CREDIT,
            amount=request.amount,
            status=TransactionStatus.PENDING,
            payment_method=request.payment_method,
            description="Wallet top-up",
            category="wallet",
            order_id=order_id,
            metadata=metadata,
        )
        self.transactions.add(transaction.id, transaction)
        logger.info(f"Payment order {order_id} created for {user_id}")
        return {
            "order_id": order_id,
            "amount": request.amount,
            "currency": transaction.currency,
            "transaction_id": transaction.id,
        }

    def verify_payment(self, user_id: str, transaction_id: Optional[str], signature: Optional[str]) -> dict:
        if not transaction_id or not signature:
            raise ValidationError("Transaction ID and payment signature are required")

        with self._lock:
            transaction = self.transactions.get(transaction_id)
            if transaction is None or transaction.user_id != user_id:
                raise NotFoundError("Transaction not found")
            if transaction.status != TransactionStatus.PENDING:
                raise ValidationError("Transaction already processed")

            expected = sign_payment(transaction.order_id or "", transaction.id)
            if not hmac.compare_digest(expected, signature):
                logger.warning(f"Invalid payment signature for transaction {transaction_id}")
                raise ValidationError("Invalid payment signature")

            wallet = self._adjust_balance(user_id, transaction.amount)
            self.transactions.update(
                transaction_id,
                status=TransactionStatus.COMPLETED,
                completed_at=datetime.now(),
            )

        logger.info(f"Wallet of {user_id} credited with {transaction.amount}")
        return {"transaction_id": transaction_id, "amount": transaction.amount, "new_balance": wallet.balance}

    # -- payments ---------------------------------------------------------

    def pay(self, user_id: str, request: PayRequest) -> dict:
        """Pay from the wallet balance."""
        with self._lock:
            if self.wallets.get(user_id) is None:
                raise NotFoundError("Wallet not found")
            wallet = self._adjust_balance(user_id, -request.amount)
            transaction = Transaction(
                user_id=user_id,
                type=TransactionType.DEBIT,
                amount=request.amount,
                status=TransactionStatus.COMPLETED,
                payment_method=PaymentMethod.WALLET,
                description=request.description,
                category=request.category.value,
                recipient_id=request.recipient_id,
                metadata=request.metadata,
                completed_at=datetime.now(),
            )
            self.transactions.add(transaction.id, transaction)

        return {
            "transaction_id": transaction.id,
            "amount": request.amount,
            "new_balance": wallet.balance,
            "description": request.description,
        }

    def pay_upi(self, user_id: str, request: UpiPayRequest) -> dict:
        if not request.upi_id or not request.amount or not request.description:
            raise ValidationError("UPI ID, amount, and description are required")

        transaction = Transaction(
            user_id=user_id,
            type=TransactionType.DEBIT,
            amount=request.amount,
            status=TransactionStatus.PENDING,
            payment_method=PaymentMethod.UPI,
            description=request.description,
            category=request.category.value,
            upi_id=request.upi_id,
        )
        self.transactions.add(transaction.id, transaction)
        query = urlencode({
            "pa": request.upi_id,
            "pn": "Kerala Horizon",
            "am": f"{request.amount:.2f}",
            "cu": "INR",
            "tn": request.description,
        })
        return {"transaction_id": transaction.id, "upi_url": f"upi://pay?{query}", "status": "pending"}

    def pay_card(self, user_id: str, request: CardPayRequest) -> dict:
        if not (request.card_number and request.expiry_date and request.cvv) or not request.amount or not request.description:
            raise ValidationError("Card details, amount, and description are required")

        digits = "".join(ch for ch in request.card_number if ch.isdigit())
        if len(digits) < 12:
            raise ValidationError("Invalid card number")

        transaction = Transaction(
            user_id=user_id,
            type=TransactionType.DEBIT,
            amount=request.amount,
            status=TransactionStatus.PROCESSING,
            payment_method=PaymentMethod.CARD,
            description=request.description,
            category=request.category.value,
            card_last4=digits[-4:],
        )
        self.transactions.add(transaction.id, transaction)
        return {"transaction_id": transaction.id, "status": "processing", "card_last4": transaction.card_last4}

    # -- history ----------------------------------------------------------

    def list_transactions(
        self,
        user_id: str,
        category: Optional[str] = None,
        type: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Transaction], dict]:
        transactions = self._user_transactions(user_id)
        if category:
            transactions = [t for t in transactions if t.category == category]
        if type:
            transactions = [t for t in transactions if t.type.value == type]
        if start_date:
            transactions = [t for t in transactions if t.created_at.date() >= start_date]
        if end_date:
            transactions = [t for t in transactions if t.created_at.date() <= end_date]

        total = len(transactions)
        return transactions[offset:offset + limit], {
            "total": total,
            "limit": limit,
            "offset": offset,
            "has_more": total > offset + limit,
        }

    def payment_methods(self, user_id: str) -> list[dict]:
        wallet = self.get_or_create_wallet(user_id)
        methods = [{"id": "wallet", "type": "wallet", "name": "Wallet Balance", "balance": wallet.balance}]
        user = self.users.get(user_id)
        if user is not None and user.upi_id:
            methods.append({"id": "upi_primary", "type": "upi", "upi_id": user.upi_id, "is_primary": True})
        return methods


# Global wallet service
wallet_service = WalletService()


def get_wallet_service() -> WalletService:
    return wallet_service
