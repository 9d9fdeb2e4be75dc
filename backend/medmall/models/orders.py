"""
MedMall Back Office - Order Ledger Models
==========================================

What:  ORM models for order line items, payments and refunds.
Who:   Used by the order services and by Alembic.

The `orders` and `products` tables belong to the ordering service; rows here
reference them by indexed UUID only.

Status columns are free-form strings. Values seen in practice:
    Refund.status:      Pending / Processing / Success / Failed
    Payment.pay_method: WeChat / Alipay / Offline
No transition rules are enforced here.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from medmall.database import Base
from medmall.models.base import TimestampMixin, UTCDateTime, UUIDPrimaryKeyMixin


class OrderItem(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """One line of an order: product, optional spec, quantity and prices."""

    __tablename__ = "order_items"

    order_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    product_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    product_spec_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    subtotal: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=Decimal("0"))


class Payment(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A payment captured against an order."""

    __tablename__ = "payments"

    order_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    pay_method: Mapped[str] = mapped_column(String(30), nullable=False, default="WeChat")
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    pay_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    # Channel transaction number
    pay_txn_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    # Raw gateway callback payload
    pay_channel_raw: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Refund(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A refund against an order, optionally scoped to a single line item."""

    __tablename__ = "refunds"

    order_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    order_item_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    reason: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="Pending")
    # WeChat / Alipay / OriginalRoute
    refund_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    channel_refund_no: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    initiated_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
