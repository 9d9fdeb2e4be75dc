"""
Shipment tracking event routes: /api/shipmenttracks.

    GET    /api/shipmenttracks?shipmentId=   list, latest event first
    POST   /api/shipmenttracks               create; occurredAt defaults to now
    DELETE /api/shipmenttracks/{id}          204, or 404

Tracking events are immutable once recorded; there is no update.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from medmall.database import get_db_session
from medmall.schemas.common import ErrorResponse, ItemList
from medmall.schemas.shipping import ShipmentTrackCreate, ShipmentTrackResponse
from medmall.security import require_permission
from medmall.services.shipping_service import shipment_track_service

router = APIRouter(
    prefix="/api/shipmenttracks",
    tags=["Shipment Tracks"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not allowed", "model": ErrorResponse},
    },
)


@router.get(
    "",
    response_model=ItemList[ShipmentTrackResponse],
    dependencies=[Depends(require_permission("shipment-tracks.view"))],
    summary="List tracking events",
)
async def list_shipment_tracks(
    shipment_id: Optional[uuid.UUID] = Query(default=None, alias="shipmentId"),
    db: AsyncSession = Depends(get_db_session),
):
    items, total = await shipment_track_service.list_items(db, shipment_id=shipment_id)
    return {"items": items, "total": total}


@router.post(
    "",
    response_model=ShipmentTrackResponse,
    responses={400: {"description": "Unknown shipment", "model": ErrorResponse}},
    dependencies=[Depends(require_permission("shipment-tracks.create"))],
    summary="Record a tracking event",
)
async def create_shipment_track(
    body: ShipmentTrackCreate,
    db: AsyncSession = Depends(get_db_session),
):
    return await shipment_track_service.create(db, body)


@router.delete(
    "/{track_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Tracking event not found", "model": ErrorResponse}},
    dependencies=[Depends(require_permission("shipment-tracks.delete"))],
    summary="Delete a tracking event",
)
async def delete_shipment_track(
    track_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await shipment_track_service.delete(db, track_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
