"""Tests for order items, payments and refunds."""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from medmall.models.orders import OrderItem
from medmall.models.base import utcnow
from medmall.schemas.orders import PaymentCreate, RefundCreate, RefundUpdate
from medmall.services.order_service import order_item_service, payment_service, refund_service


class TestOrderItems:
    @pytest.mark.asyncio
    async def test_lists_items_of_one_order(self, db_session):
        order_id = uuid.uuid4()
        now = utcnow()
        for quantity in (1, 2):
            db_session.add(
                OrderItem(
                    order_id=order_id,
                    product_id=uuid.uuid4(),
                    quantity=quantity,
                    unit_price=Decimal("5.00"),
                    subtotal=Decimal("5.00") * quantity,
                    created_at=now,
                    updated_at=now,
                )
            )
        db_session.add(
            OrderItem(order_id=uuid.uuid4(), product_id=uuid.uuid4(), created_at=now, updated_at=now)
        )
        await db_session.flush()

        items, total = await order_item_service.list_items(db_session, order_id=order_id)

        assert total == 2
        assert {i.quantity for i in items} == {1, 2}


class TestPayments:
    @pytest.mark.asyncio
    async def test_most_recent_pay_time_first_and_unpaid_last(self, db_session):
        order_id = uuid.uuid4()
        base = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)
        await payment_service.create(db_session, PaymentCreate(order_id=order_id, pay_txn_id="pending"))
        await payment_service.create(
            db_session, PaymentCreate(order_id=order_id, pay_time=base, pay_txn_id="early")
        )
        await payment_service.create(
            db_session,
            PaymentCreate(order_id=order_id, pay_time=base + timedelta(hours=2), pay_txn_id="late"),
        )

        items, _ = await payment_service.list_items(db_session, order_id=order_id)

        assert [p.pay_txn_id for p in items] == ["late", "early", "pending"]

    @pytest.mark.asyncio
    async def test_defaults_pay_method(self, db_session):
        payment = await payment_service.create(
            db_session, PaymentCreate(order_id=uuid.uuid4(), amount=Decimal("99.00"))
        )
        assert payment.pay_method == "WeChat"


class TestRefunds:
    @pytest.mark.asyncio
    async def test_missing_initiated_at_defaults_to_creation_time(self, db_session):
        refund = await refund_service.create(db_session, RefundCreate(order_id=uuid.uuid4()))

        assert refund.initiated_at == refund.created_at

    @pytest.mark.asyncio
    async def test_zero_value_initiated_at_defaults_to_creation_time(self, db_session):
        payload = RefundCreate.model_validate(
            {"orderId": str(uuid.uuid4()), "initiatedAt": "0001-01-01T00:00:00"}
        )

        refund = await refund_service.create(db_session, payload)

        assert refund.initiated_at == refund.created_at
        assert refund.initiated_at.year > 1

    @pytest.mark.asyncio
    async def test_explicit_initiated_at_is_kept(self, db_session):
        initiated = datetime(2024, 2, 29, 12, 30, tzinfo=timezone.utc)

        refund = await refund_service.create(
            db_session, RefundCreate(order_id=uuid.uuid4(), initiated_at=initiated)
        )

        assert refund.initiated_at == initiated

    @pytest.mark.asyncio
    async def test_update_touches_only_settlement_fields(self, db_session):
        refund = await refund_service.create(
            db_session,
            RefundCreate(order_id=uuid.uuid4(), amount=Decimal("20.00"), reason="damaged box"),
        )
        completed = datetime(2024, 6, 2, tzinfo=timezone.utc)

        updated = await refund_service.update(
            db_session,
            refund.id,
            RefundUpdate(status="Completed", refund_method="Original", completed_at=completed),
        )

        assert updated.status == "Completed"
        assert updated.refund_method == "Original"
        assert updated.completed_at == completed
        assert updated.amount == Decimal("20.00")
        assert updated.reason == "damaged box"

    @pytest.mark.asyncio
    async def test_newest_first(self, db_session):
        order_id = uuid.uuid4()
        first = await refund_service.create(db_session, RefundCreate(order_id=order_id))
        first.created_at = utcnow() - timedelta(minutes=5)
        second = await refund_service.create(db_session, RefundCreate(order_id=order_id))
        await db_session.flush()

        items, total = await refund_service.list_items(db_session, order_id=order_id)

        assert total == 2
        assert [r.id for r in items] == [second.id, first.id]
