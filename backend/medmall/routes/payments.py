"""
Payment routes: /api/payments.

    GET  /api/payments?orderId=   list, most recent payTime first
    POST /api/payments            record a payment
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from medmall.database import get_db_session
from medmall.schemas.common import ErrorResponse, ItemList
from medmall.schemas.orders import PaymentCreate, PaymentResponse
from medmall.security import require_permission
from medmall.services.order_service import payment_service

router = APIRouter(
    prefix="/api/payments",
    tags=["Payments"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not allowed", "model": ErrorResponse},
    },
)


@router.get(
    "",
    response_model=ItemList[PaymentResponse],
    dependencies=[Depends(require_permission("payments.view"))],
    summary="List payments",
)
async def list_payments(
    order_id: Optional[uuid.UUID] = Query(default=None, alias="orderId"),
    db: AsyncSession = Depends(get_db_session),
):
    items, total = await payment_service.list_items(db, order_id=order_id)
    return {"items": items, "total": total}


@router.post(
    "",
    response_model=PaymentResponse,
    responses={400: {"description": "Constraint violation", "model": ErrorResponse}},
    dependencies=[Depends(require_permission("payments.create"))],
    summary="Record a payment",
)
async def create_payment(
    body: PaymentCreate,
    db: AsyncSession = Depends(get_db_session),
):
    """Stores the payment with a server-assigned id and timestamps."""
    return await payment_service.create(db, body)
