"""Order item routes: read-only list at /api/orderitems."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from medmall.database import get_db_session
from medmall.schemas.common import ErrorResponse, ItemList
from medmall.schemas.orders import OrderItemResponse
from medmall.security import require_permission
from medmall.services.order_service import order_item_service

router = APIRouter(
    prefix="/api/orderitems",
    tags=["Order Items"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not allowed", "model": ErrorResponse},
    },
)


@router.get(
    "",
    response_model=ItemList[OrderItemResponse],
    dependencies=[Depends(require_permission("order-items.view"))],
    summary="List order items, optionally for one order",
)
async def list_order_items(
    order_id: Optional[uuid.UUID] = Query(default=None, alias="orderId"),
    db: AsyncSession = Depends(get_db_session),
):
    items, total = await order_item_service.list_items(db, order_id=order_id)
    return {"items": items, "total": total}
