"""Tests for carriers, shipments and tracking events."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from medmall.exceptions import NotFoundError, ValidationError
from medmall.schemas.shipping import (
    ShipCompanyInput,
    ShipmentCreate,
    ShipmentTrackCreate,
    ShipmentUpdate,
)
from medmall.services.shipping_service import (
    ship_company_service,
    shipment_service,
    shipment_track_service,
)


async def make_carrier(db, code="SF"):
    return await ship_company_service.create(
        db, ShipCompanyInput(name=f"{code} Express", code=code)
    )


async def make_shipment(db, carrier_id, order_id=None, tracking_no="SF100200300"):
    return await shipment_service.create(
        db,
        ShipmentCreate(
            order_id=order_id or uuid.uuid4(),
            ship_company_id=carrier_id,
            tracking_no=tracking_no,
        ),
    )


class TestShipmentList:
    @pytest.mark.asyncio
    async def test_loads_carrier_and_tracks_eagerly(self, db_session):
        carrier = await make_carrier(db_session)
        shipment = await make_shipment(db_session, carrier.id)
        base = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
        for hours, text in ((0, "Picked up"), (5, "In transit"), (20, "Delivered")):
            await shipment_track_service.create(
                db_session,
                ShipmentTrackCreate(
                    shipment_id=shipment.id,
                    status_text=text,
                    occurred_at=base + timedelta(hours=hours),
                ),
            )
        db_session.expunge_all()

        items, total = await shipment_service.list_items(db_session, order_id=shipment.order_id)

        assert total == 1
        loaded = items[0]
        # Lazy loading would fail under AsyncSession; these are populated up front.
        assert loaded.ship_company.code == "SF"
        assert [t.status_text for t in loaded.tracks] == ["Delivered", "In transit", "Picked up"]

    @pytest.mark.asyncio
    async def test_filters_by_order(self, db_session):
        carrier = await make_carrier(db_session)
        order_id = uuid.uuid4()
        await make_shipment(db_session, carrier.id, order_id=order_id, tracking_no="A1")
        await make_shipment(db_session, carrier.id, order_id=order_id, tracking_no="A2")
        await make_shipment(db_session, carrier.id, tracking_no="B1")

        items, total = await shipment_service.list_items(db_session, order_id=order_id)

        assert total == 2
        assert {s.tracking_no for s in items} == {"A1", "A2"}


class TestShipmentWrites:
    @pytest.mark.asyncio
    async def test_update_keeps_order_id(self, db_session):
        carrier = await make_carrier(db_session)
        other = await make_carrier(db_session, code="YTO")
        shipment = await make_shipment(db_session, carrier.id)
        order_id = shipment.order_id

        updated = await shipment_service.update(
            db_session,
            shipment.id,
            ShipmentUpdate(
                ship_company_id=other.id,
                tracking_no="YT900",
                package_index=2,
                status="Shipped",
            ),
        )

        assert updated.order_id == order_id
        assert updated.ship_company_id == other.id
        assert updated.package_index == 2
        assert updated.status == "Shipped"

    @pytest.mark.asyncio
    async def test_unknown_carrier_is_rejected(self, db_session):
        with pytest.raises(ValidationError):
            await make_shipment(db_session, uuid.uuid4())

    @pytest.mark.asyncio
    async def test_delete_removes_tracks(self, db_session):
        carrier = await make_carrier(db_session)
        shipment = await make_shipment(db_session, carrier.id)
        await shipment_track_service.create(
            db_session, ShipmentTrackCreate(shipment_id=shipment.id, status_text="Picked up")
        )
        db_session.expunge_all()

        await shipment_service.delete(db_session, shipment.id)

        tracks, total = await shipment_track_service.list_items(db_session, shipment_id=shipment.id)
        assert total == 0
        assert tracks == []


class TestShipmentTracks:
    @pytest.mark.asyncio
    async def test_zero_value_occurred_at_defaults_to_now(self, db_session):
        carrier = await make_carrier(db_session)
        shipment = await make_shipment(db_session, carrier.id)
        payload = ShipmentTrackCreate.model_validate(
            {"shipmentId": str(shipment.id), "occurredAt": "0001-01-01T00:00:00"}
        )

        track = await shipment_track_service.create(db_session, payload)

        assert track.occurred_at == track.created_at

    @pytest.mark.asyncio
    async def test_missing_occurred_at_defaults_to_now(self, db_session):
        carrier = await make_carrier(db_session)
        shipment = await make_shipment(db_session, carrier.id)

        track = await shipment_track_service.create(
            db_session, ShipmentTrackCreate(shipment_id=shipment.id)
        )

        assert track.occurred_at == track.created_at

    @pytest.mark.asyncio
    async def test_delete_unknown_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await shipment_track_service.delete(db_session, uuid.uuid4())


class TestShipCompanies:
    @pytest.mark.asyncio
    async def test_listed_by_name(self, db_session):
        await ship_company_service.create(db_session, ShipCompanyInput(name="ZTO", code="ZTO"))
        await ship_company_service.create(db_session, ShipCompanyInput(name="EMS", code="EMS"))

        items, _ = await ship_company_service.list_items(db_session)

        assert [c.name for c in items] == ["EMS", "ZTO"]

    @pytest.mark.asyncio
    async def test_carrier_in_use_cannot_be_deleted(self, db_session):
        carrier = await make_carrier(db_session)
        await make_shipment(db_session, carrier.id)
        db_session.expunge_all()

        with pytest.raises(ValidationError):
            await ship_company_service.delete(db_session, carrier.id)
