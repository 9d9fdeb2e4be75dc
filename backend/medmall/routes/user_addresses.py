"""
User address routes: /api/useraddresses.

    GET    /api/useraddresses?userId=   list, default addresses first
    POST   /api/useraddresses           create
    PUT    /api/useraddresses/{id}      update consignee, phone, province, city,
                                        district, addressLine, isDefault
    DELETE /api/useraddresses/{id}      204, or 404
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from medmall.database import get_db_session
from medmall.schemas.address import UserAddressCreate, UserAddressResponse, UserAddressUpdate
from medmall.schemas.common import ErrorResponse, ItemList
from medmall.security import require_permission
from medmall.services.address_service import user_address_service

router = APIRouter(
    prefix="/api/useraddresses",
    tags=["User Addresses"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not allowed", "model": ErrorResponse},
    },
)

NOT_FOUND = {404: {"description": "Address not found", "model": ErrorResponse}}


@router.get(
    "",
    response_model=ItemList[UserAddressResponse],
    dependencies=[Depends(require_permission("user-addresses.view"))],
    summary="List delivery addresses",
)
async def list_user_addresses(
    user_id: Optional[uuid.UUID] = Query(default=None, alias="userId"),
    db: AsyncSession = Depends(get_db_session),
):
    items, total = await user_address_service.list_items(db, user_id=user_id)
    return {"items": items, "total": total}


@router.post(
    "",
    response_model=UserAddressResponse,
    dependencies=[Depends(require_permission("user-addresses.create"))],
    summary="Create a delivery address",
)
async def create_user_address(
    body: UserAddressCreate,
    db: AsyncSession = Depends(get_db_session),
):
    return await user_address_service.create(db, body)


@router.put(
    "/{address_id}",
    response_model=UserAddressResponse,
    responses=NOT_FOUND,
    dependencies=[Depends(require_permission("user-addresses.update"))],
    summary="Update a delivery address",
)
async def update_user_address(
    address_id: uuid.UUID,
    body: UserAddressUpdate,
    db: AsyncSession = Depends(get_db_session),
):
    return await user_address_service.update(db, address_id, body)


@router.delete(
    "/{address_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=NOT_FOUND,
    dependencies=[Depends(require_permission("user-addresses.delete"))],
    summary="Delete a delivery address",
)
async def delete_user_address(
    address_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await user_address_service.delete(db, address_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
