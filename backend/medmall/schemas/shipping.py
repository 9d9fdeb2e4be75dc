"""
Request/response schemas for carriers, shipments and tracking events.

The shipment list returns ShipmentDetailResponse, which nests the carrier and
the tracking events loaded alongside each shipment. Create and update return
the flat ShipmentResponse.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from medmall.schemas.common import CamelModel, UTCDatetime

# Same shape the admin UI validates against before submitting
CONTACT_URL_PATTERN = r"^(https?://)?([\da-z.-]+)\.([a-z.]{2,6})([/\w .-]*)*/?$"


# ── Ship Companies ────────────────────────────────────────────────────────

class ShipCompanyInput(CamelModel):
    """Body for POST and PUT /api/shipcompanies."""
    name: str = Field(min_length=1, max_length=100)
    code: str = Field(min_length=1, max_length=20)
    contact_url: Optional[str] = Field(default=None, max_length=200, pattern=CONTACT_URL_PATTERN)
    phone: Optional[str] = Field(default=None, max_length=50)
    is_enabled: bool = True


class ShipCompanyResponse(CamelModel):
    id: uuid.UUID
    name: str
    code: str
    contact_url: Optional[str] = None
    phone: Optional[str] = None
    is_enabled: bool
    created_at: datetime
    updated_at: datetime


# ── Shipment Tracks ───────────────────────────────────────────────────────

class ShipmentTrackCreate(CamelModel):
    """
    Body for POST /api/shipmenttracks.

    occurredAt may be omitted, null or 0001-01-01T00:00:00; the server then
    stamps the creation time.
    """
    shipment_id: uuid.UUID
    status_text: Optional[str] = Field(default=None, max_length=200)
    location: Optional[str] = Field(default=None, max_length=100)
    occurred_at: Optional[UTCDatetime] = None
    raw_payload: Optional[str] = None


class ShipmentTrackResponse(CamelModel):
    id: uuid.UUID
    shipment_id: uuid.UUID
    status_text: Optional[str] = None
    location: Optional[str] = None
    occurred_at: datetime
    raw_payload: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ── Shipments ─────────────────────────────────────────────────────────────

class ShipmentUpdate(CamelModel):
    """Body for PUT /api/shipments/{id}. Status is copied as-is."""
    ship_company_id: uuid.UUID
    tracking_no: str = Field(min_length=1, max_length=100)
    package_index: int = 1
    shipped_at: Optional[UTCDatetime] = None
    delivered_at: Optional[UTCDatetime] = None
    status: str = Field(default="Pending", max_length=30)


class ShipmentCreate(ShipmentUpdate):
    """Body for POST /api/shipments."""
    order_id: uuid.UUID


class ShipmentResponse(CamelModel):
    id: uuid.UUID
    order_id: uuid.UUID
    ship_company_id: uuid.UUID
    tracking_no: str
    package_index: int
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    status: str
    created_at: datetime
    updated_at: datetime


class ShipmentDetailResponse(ShipmentResponse):
    ship_company: Optional[ShipCompanyResponse] = None
    tracks: List[ShipmentTrackResponse] = Field(default_factory=list)
