"""
MedMall Back Office - Logistics Services
=========================================

What:  Carriers, shipments and shipment tracking events.
Who:   Called by the /api/shipcompanies, /api/shipments and
       /api/shipmenttracks routes.

Loading strategy:
    The shipment list eager-loads each shipment's carrier and tracking events
    with selectinload (one extra SELECT per relationship, not one per row).
    Async sessions cannot lazy-load, so anything serialized from a shipment
    outside the list must not touch those relationships.
"""

from datetime import datetime

from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from medmall.models.shipping import ShipCompany, Shipment, ShipmentTrack
from medmall.services.base import ResourceService, is_unset


class ShipCompanyService(ResourceService[ShipCompany]):
    model = ShipCompany
    resource_name = "ship company"
    update_fields = ("name", "code", "contact_url", "phone", "is_enabled")

    def ordering(self):
        return (ShipCompany.name,)


class ShipmentService(ResourceService[Shipment]):
    model = Shipment
    resource_name = "shipment"
    update_fields = (
        "ship_company_id",
        "tracking_no",
        "package_index",
        "shipped_at",
        "delivered_at",
        "status",
    )

    def base_query(self) -> Select:
        return select(Shipment).options(
            selectinload(Shipment.ship_company),
            selectinload(Shipment.tracks),
        )

    def ordering(self):
        return (Shipment.created_at.desc(),)


class ShipmentTrackService(ResourceService[ShipmentTrack]):
    model = ShipmentTrack
    resource_name = "shipment track"

    def ordering(self):
        return (ShipmentTrack.occurred_at.desc(),)

    def prepare_new(self, entity: ShipmentTrack, now: datetime) -> None:
        if is_unset(entity.occurred_at):
            entity.occurred_at = now


ship_company_service = ShipCompanyService()
shipment_service = ShipmentService()
shipment_track_service = ShipmentTrackService()
