"""
Refund routes: /api/refunds.

    GET  /api/refunds?orderId=   list, newest first
    POST /api/refunds            create; initiatedAt defaults to now
    PUT  /api/refunds/{id}       update status, refundMethod, channelRefundNo,
                                 completedAt

Refunds are never deleted through this API.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from medmall.database import get_db_session
from medmall.schemas.common import ErrorResponse, ItemList
from medmall.schemas.orders import RefundCreate, RefundResponse, RefundUpdate
from medmall.security import require_permission
from medmall.services.order_service import refund_service

router = APIRouter(
    prefix="/api/refunds",
    tags=["Refunds"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not allowed", "model": ErrorResponse},
    },
)


@router.get(
    "",
    response_model=ItemList[RefundResponse],
    dependencies=[Depends(require_permission("refunds.view"))],
    summary="List refunds",
)
async def list_refunds(
    order_id: Optional[uuid.UUID] = Query(default=None, alias="orderId"),
    db: AsyncSession = Depends(get_db_session),
):
    items, total = await refund_service.list_items(db, order_id=order_id)
    return {"items": items, "total": total}


@router.post(
    "",
    response_model=RefundResponse,
    dependencies=[Depends(require_permission("refunds.create"))],
    summary="Create a refund",
    description=(
        "Creates a refund record. When initiatedAt is omitted, null or "
        "0001-01-01T00:00:00 the server stamps the creation time."
    ),
)
async def create_refund(
    body: RefundCreate,
    db: AsyncSession = Depends(get_db_session),
):
    return await refund_service.create(db, body)


@router.put(
    "/{refund_id}",
    response_model=RefundResponse,
    responses={404: {"description": "Refund not found", "model": ErrorResponse}},
    dependencies=[Depends(require_permission("refunds.update"))],
    summary="Update a refund",
)
async def update_refund(
    refund_id: uuid.UUID,
    body: RefundUpdate,
    db: AsyncSession = Depends(get_db_session),
):
    return await refund_service.update(db, refund_id, body)
