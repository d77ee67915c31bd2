"""Tests for the wallet service."""
import pytest
from pydantic import ValidationError as PydanticValidationError

from kerala_horizon.core.errors import NotFoundError, ValidationError
from kerala_horizon.models.wallet import (
    AddMoneyRequest,
    CardPayRequest,
    PayRequest,
    SpendCategory,
    UpiPayRequest,
)
from kerala_horizon.services.store import Database
from kerala_horizon.services.wallet import InsufficientFundsError, WalletService, sign_payment


@pytest.fixture
def wallet():
    return WalletService(database=Database())


def _top_up(service: WalletService, user_id: str, amount: float) -> dict:
    order = service.add_money(user_id, AddMoneyRequest(
        amount=amount,
        payment_method="upi",
        payment_details={"upi_id": "anita@okaxis"},
    ))
    signature = sign_payment(order["order_id"], order["transaction_id"])
    return service.verify_payment(user_id, order["transaction_id"], signature)


class TestTopUp:
    """Test adding money."""

    def test_new_wallet_is_empty(self, wallet):
        result = wallet.balance("u1")
        assert result["wallet"].balance == 0
        assert result["wallet"].currency == "INR"
        assert result["recent_transactions"] == []

    def test_add_money_creates_pending_credit(self, wallet):
        order = wallet.add_money("u1", AddMoneyRequest(
            amount=500,
            payment_method="card",
            payment_details={"card_number": "4111111111111111", "expiry_date": "12/30", "cvv": "123"},
        ))
        transaction = wallet.transactions.get(order["transaction_id"])
        assert transaction.status == "pending"
        assert transaction.metadata["card_last4"] == "1111"
        assert wallet.balance("u1")["wallet"].balance == 0

    def test_amount_limits(self):
        with pytest.raises(PydanticValidationError):
            AddMoneyRequest(amount=50, payment_method="upi", payment_details={"upi_id": "a@b"})
        with pytest.raises(PydanticValidationError):
            AddMoneyRequest(amount=60000, payment_method="upi", payment_details={"upi_id": "a@b"})

    def test_upi_needs_upi_id(self):
        with pytest.raises(PydanticValidationError):
            AddMoneyRequest(amount=500, payment_method="upi", payment_details={})

    def test_verify_credits_wallet(self, wallet):
        result = _top_up(wallet, "u1", 1000)
        assert result["new_balance"] == 1000
        assert wallet.balance("u1")["recent_transactions"][0].status == "completed"

    def test_bad_signature_rejected(self, wallet):
        order = wallet.add_money("u1", AddMoneyRequest(
            amount=1000, payment_method="upi", payment_details={"upi_id": "anita@okaxis"},
        ))
        with pytest.raises(ValidationError, match="Invalid payment signature"):
            wallet.verify_payment("u1", order["transaction_id"], "forged")
        assert wallet.balance("u1")["wallet"].balance == 0

    def test_signature_over_own_transaction_only(self, wallet):
        order = wallet.add_money("u1", AddMoneyRequest(
            amount=1000, payment_method="upi", payment_details={"upi_id": "anita@okaxis"},
        ))
        signature = sign_payment("order_other", order["transaction_id"])
        with pytest.raises(ValidationError):
            wallet.verify_payment("u1", order["transaction_id"], signature)

    def test_cannot_verify_twice(self, wallet):
        order = wallet.add_money("u1", AddMoneyRequest(
            amount=1000, payment_method="upi", payment_details={"upi_id": "anita@okaxis"},
        ))
        signature = sign_payment(order["order_id"], order["transaction_id"])
        wallet.verify_payment("u1", order["transaction_id"], signature)
        with pytest.raises(ValidationError, match="already processed"):
            wallet.verify_payment("u1", order["transaction_id"], signature)
        assert wallet.balance("u1")["wallet"].balance == 1000

    def test_verify_requires_fields_and_known_transaction(self, wallet):
        with pytest.raises(ValidationError):
            wallet.verify_payment("u1", None, "sig")
        with pytest.raises(NotFoundError):
            wallet.verify_payment("u1", "missing", "sig")


class TestPayments:
    """Test paying from the wallet and external methods."""

    def test_pay_debits(self, wallet):
        _top_up(wallet, "u1", 1000)
        result = wallet.pay("u1", PayRequest(amount=400, description="Houseboat", category=SpendCategory.STAY))
        assert result["new_balance"] == 600

    def test_insufficient_funds(self, wallet):
        _top_up(wallet, "u1", 200)
        with pytest.raises(InsufficientFundsError) as exc_info:
            wallet.pay("u1", PayRequest(amount=500, description="Dinner", category=SpendCategory.FOOD))
        assert exc_info.value.status_code == 400
        assert exc_info.value.details == {"required": 500, "available": 200, "shortfall": 300}
        assert wallet.balance("u1")["wallet"].balance == 200

    def test_pay_without_wallet(self, wallet):
        with pytest.raises(NotFoundError):
            wallet.pay("u1", PayRequest(amount=10, description="Tea", category=SpendCategory.FOOD))

    def test_upi_payment_link(self, wallet):
        result = wallet.pay_upi("u1", UpiPayRequest(upi_id="shop@upi", amount=250, description="Spices"))
        assert result["status"] == "pending"
        assert result["upi_url"].startswith("upi://pay?pa=shop%40upi")
        assert "am=250.00" in result["upi_url"]

    def test_card_payment_keeps_last_four(self, wallet):
        result = wallet.pay_card("u1", CardPayRequest(
            card_number="4111 1111 1111 4242", expiry_date="12/30", cvv="123", amount=900, description="Sarees",
        ))
        assert result["card_last4"] == "4242"
        stored = wallet.transactions.get(result["transaction_id"])
        assert stored.status == "processing"
        assert "1111 1111" not in stored.model_dump_json()

    def test_transactions_filter(self, wallet):
        _top_up(wallet, "u1", 1000)
        wallet.pay("u1", PayRequest(amount=100, description="Bus", category=SpendCategory.TRANSPORT))
        wallet.pay("u1", PayRequest(amount=200, description="Lunch", category=SpendCategory.FOOD))

        debits, pagination = wallet.list_transactions("u1", type="debit")
        assert pagination["total"] == 2
        food, _ = wallet.list_transactions("u1", category="food")
        assert [t.description for t in food] == ["Lunch"]

    def test_payment_methods_lists_wallet_first(self, wallet):
        _top_up(wallet, "u1", 300)
        methods = wallet.payment_methods("u1")
        assert methods[0] == {"id": "wallet", "type": "wallet", "name": "Wallet Balance", "balance": 300}
