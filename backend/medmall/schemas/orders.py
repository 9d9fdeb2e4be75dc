"""Request/response schemas for order items, payments and refunds."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from medmall.schemas.common import CamelModel, Money, UTCDatetime


class OrderItemResponse(CamelModel):
    id: uuid.UUID
    order_id: uuid.UUID
    product_id: uuid.UUID
    product_spec_id: Optional[uuid.UUID] = None
    quantity: int
    unit_price: Money
    subtotal: Money
    created_at: datetime
    updated_at: datetime


# ── Payments ──────────────────────────────────────────────────────────────

class PaymentCreate(CamelModel):
    """Body for POST /api/payments."""
    order_id: uuid.UUID
    pay_method: str = Field(default="WeChat", max_length=30)
    amount: Money = Decimal("0")
    pay_time: Optional[UTCDatetime] = None
    pay_txn_id: Optional[str] = Field(default=None, max_length=100)
    pay_channel_raw: Optional[str] = None


class PaymentResponse(CamelModel):
    id: uuid.UUID
    order_id: uuid.UUID
    pay_method: str
    amount: Money
    pay_time: Optional[datetime] = None
    pay_txn_id: Optional[str] = None
    pay_channel_raw: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ── Refunds ───────────────────────────────────────────────────────────────

class RefundCreate(CamelModel):
    """
    Body for POST /api/refunds.

    initiatedAt may be omitted, null or 0001-01-01T00:00:00; the server then
    stamps the creation time.
    """
    order_id: uuid.UUID
    order_item_id: Optional[uuid.UUID] = None
    amount: Money = Decimal("0")
    reason: Optional[str] = Field(default=None, max_length=200)
    status: str = Field(default="Pending", max_length=30)
    refund_method: Optional[str] = Field(default=None, max_length=50)
    channel_refund_no: Optional[str] = Field(default=None, max_length=100)
    initiated_at: Optional[UTCDatetime] = None
    completed_at: Optional[UTCDatetime] = None


class RefundUpdate(CamelModel):
    """Body for PUT /api/refunds/{id}. Status is copied as-is."""
    status: str = Field(default="Pending", max_length=30)
    refund_method: Optional[str] = Field(default=None, max_length=50)
    channel_refund_no: Optional[str] = Field(default=None, max_length=100)
    completed_at: Optional[UTCDatetime] = None


class RefundResponse(CamelModel):
    id: uuid.UUID
    order_id: uuid.UUID
    order_item_id: Optional[uuid.UUID] = None
    amount: Money
    reason: Optional[str] = None
    status: str
    refund_method: Optional[str] = None
    channel_refund_no: Optional[str] = None
    initiated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
