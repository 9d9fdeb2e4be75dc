"""
MedMall Back Office - Logistics Models
=======================================

What:  ORM models for carriers, shipments (parcels) and tracking events.

Relationships:
    ShipCompany 1 ──< Shipment 1 ──< ShipmentTrack

    - A carrier referenced by shipments cannot be deleted (ON DELETE RESTRICT).
    - Deleting a shipment deletes its tracks (ON DELETE CASCADE). The ORM side
      uses passive_deletes so the async session never lazy-loads tracks just
      to delete them.
    - An order can ship in several parcels; package_index orders them.

Shipment.status values seen in practice: Pending / Shipped / InTransit /
Delivered / Exception. Transitions are not validated.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from medmall.database import Base
from medmall.models.base import TimestampMixin, UTCDateTime, UUIDPrimaryKeyMixin, utcnow


class ShipCompany(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A logistics carrier that shipments can be handed to."""

    __tablename__ = "ship_companies"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[str] = mapped_column(String(20), nullable=False)
    contact_url: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # The database refuses to delete a carrier that still has shipments.
    shipments: Mapped[List["Shipment"]] = relationship(
        back_populates="ship_company",
        passive_deletes="all",
    )


class Shipment(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """One parcel of an order, handed to a carrier under a tracking number."""

    __tablename__ = "shipments"

    order_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    ship_company_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("ship_companies.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    tracking_no: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    package_index: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    shipped_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    delivered_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="Pending")

    ship_company: Mapped[ShipCompany] = relationship(back_populates="shipments")
    tracks: Mapped[List["ShipmentTrack"]] = relationship(
        back_populates="shipment",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ShipmentTrack.occurred_at.desc()",
    )


class ShipmentTrack(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A single tracking event reported by the carrier for a shipment."""

    __tablename__ = "shipment_tracks"

    shipment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("shipments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status_text: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    occurred_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    # Carrier webhook body as received
    raw_payload: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    shipment: Mapped[Shipment] = relationship(back_populates="tracks")
