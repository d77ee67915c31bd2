"""
Wallet models - balances and transactions.
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import datetime
from enum import Enum
import uuid


class TransactionType(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class PaymentMethod(str, Enum):
    UPI = "upi"
    CARD = "card"
    NETBANKING = "netbanking"
    WALLET = "wallet"


class SpendCategory(str, Enum):
    TRANSPORT = "transport"
    STAY = "stay"
    FOOD = "food"
    SHOPPING = "shopping"
    OTHER = "other"


class Wallet(BaseModel):
    user_id: str
    balance: float = 0.0
    currency: str = "INR"
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class Transaction(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    type: TransactionType
    amount: float = Field(..., gt=0)
    currency: str = "INR"
    status: TransactionStatus
    payment_method: PaymentMethod
    description: str
    category: str
    order_id: Optional[str] = None
    recipient_id: Optional[str] = None
    upi_id: Optional[str] = None
    card_last4: Optional[str] = None
    metadata: dict = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None


class PaymentDetails(BaseModel):
    upi_id: Optional[str] = None
    card_number: Optional[str] = None
    expiry_date: Optional[str] = None
    cvv: Optional[str] = None


class AddMoneyRequest(BaseModel):
    amount: float = Field(..., ge=100, le=50000)
    payment_method: PaymentMethod
    payment_details: PaymentDetails

    @model_validator(mode="after")
    def check_details(self):
        details = self.payment_details
        if self.payment_method == PaymentMethod.UPI and not details.upi_id:
            raise ValueError("payment_details.upi_id is required for UPI payments")
        if self.payment_method == PaymentMethod.CARD and not (
            details.card_number and details.expiry_date and details.cvv
        ):
            raise ValueError("card_number, expiry_date and cvv are required for card payments")
        return self


class VerifyPaymentRequest(BaseModel):
    transaction_id: Optional[str] = None
    payment_signature: Optional[str] = None


class PayRequest(BaseModel):
    amount: float = Field(..., ge=1)
    description: str = Field(..., min_length=1, max_length=200)
    category: SpendCategory
    recipient_id: Optional[str] = None
    metadata: dict = Field(default_factory=dict)


class UpiPayRequest(BaseModel):
    upi_id: Optional[str] = None
    amount: Optional[float] = Field(None, gt=0)
    description: Optional[str] = None
    category: SpendCategory = SpendCategory.OTHER


class CardPayRequest(BaseModel):
    card_number: Optional[str] = None
    expiry_date: Optional[str] = None
    cvv: Optional[str] = None
    amount: Optional[float] = Field(None, gt=0)
    description: Optional[str] = None
    category: SpendCategory = SpendCategory.OTHER
