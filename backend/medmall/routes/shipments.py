"""
MedMall Back Office - Shipment Routes
======================================

What:  CRUD for /api/shipments (one row per parcel).
How:   The list nests each shipment's carrier and tracking events, loaded
       eagerly by shipment_service; create and update return the flat
       shipment without relations.

Endpoints:
    GET    /api/shipments?orderId=   list with shipCompany + tracks, newest first
    POST   /api/shipments            create
    PUT    /api/shipments/{id}       update shipCompanyId, trackingNo,
                                     packageIndex, shippedAt, deliveredAt, status
    DELETE /api/shipments/{id}       204 (tracks are deleted with it), or 404
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from medmall.database import get_db_session
from medmall.schemas.common import ErrorResponse, ItemList
from medmall.schemas.shipping import (
    ShipmentCreate,
    ShipmentDetailResponse,
    ShipmentResponse,
    ShipmentUpdate,
)
from medmall.security import require_permission
from medmall.services.shipping_service import shipment_service

router = APIRouter(
    prefix="/api/shipments",
    tags=["Shipments"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not allowed", "model": ErrorResponse},
    },
)

NOT_FOUND = {404: {"description": "Shipment not found", "model": ErrorResponse}}


@router.get(
    "",
    response_model=ItemList[ShipmentDetailResponse],
    dependencies=[Depends(require_permission("shipments.view"))],
    summary="List shipments with carrier and tracking events",
)
async def list_shipments(
    order_id: Optional[uuid.UUID] = Query(default=None, alias="orderId"),
    db: AsyncSession = Depends(get_db_session),
):
    items, total = await shipment_service.list_items(db, order_id=order_id)
    return {"items": items, "total": total}


@router.post(
    "",
    response_model=ShipmentResponse,
    responses={400: {"description": "Unknown carrier", "model": ErrorResponse}},
    dependencies=[Depends(require_permission("shipments.create"))],
    summary="Create a shipment",
)
async def create_shipment(
    body: ShipmentCreate,
    db: AsyncSession = Depends(get_db_session),
):
    return await shipment_service.create(db, body)


@router.put(
    "/{shipment_id}",
    response_model=ShipmentResponse,
    responses=NOT_FOUND,
    dependencies=[Depends(require_permission("shipments.update"))],
    summary="Update a shipment",
)
async def update_shipment(
    shipment_id: uuid.UUID,
    body: ShipmentUpdate,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Overwrite the shipment's mutable fields.

    status is stored as sent; no transition rules are checked.
    """
    return await shipment_service.update(db, shipment_id, body)


@router.delete(
    "/{shipment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=NOT_FOUND,
    dependencies=[Depends(require_permission("shipments.delete"))],
    summary="Delete a shipment",
)
async def delete_shipment(
    shipment_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await shipment_service.delete(db, shipment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
