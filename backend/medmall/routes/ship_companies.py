"""
Carrier routes: /api/shipcompanies.

    GET    /api/shipcompanies          list by name
    POST   /api/shipcompanies          create
    PUT    /api/shipcompanies/{id}     update name, code, contactUrl, phone, isEnabled
    DELETE /api/shipcompanies/{id}     204; 400 while shipments still use it; 404
"""

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from medmall.database import get_db_session
from medmall.schemas.common import ErrorResponse, ItemList
from medmall.schemas.shipping import ShipCompanyInput, ShipCompanyResponse
from medmall.security import require_permission
from medmall.services.shipping_service import ship_company_service

router = APIRouter(
    prefix="/api/shipcompanies",
    tags=["Ship Companies"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not allowed", "model": ErrorResponse},
    },
)

NOT_FOUND = {404: {"description": "Carrier not found", "model": ErrorResponse}}


@router.get(
    "",
    response_model=ItemList[ShipCompanyResponse],
    dependencies=[Depends(require_permission("ship-companies.view"))],
    summary="List carriers",
)
async def list_ship_companies(db: AsyncSession = Depends(get_db_session)):
    items, total = await ship_company_service.list_items(db)
    return {"items": items, "total": total}


@router.post(
    "",
    response_model=ShipCompanyResponse,
    dependencies=[Depends(require_permission("ship-companies.create"))],
    summary="Create a carrier",
)
async def create_ship_company(
    body: ShipCompanyInput,
    db: AsyncSession = Depends(get_db_session),
):
    return await ship_company_service.create(db, body)


@router.put(
    "/{company_id}",
    response_model=ShipCompanyResponse,
    responses=NOT_FOUND,
    dependencies=[Depends(require_permission("ship-companies.update"))],
    summary="Update a carrier",
)
async def update_ship_company(
    company_id: uuid.UUID,
    body: ShipCompanyInput,
    db: AsyncSession = Depends(get_db_session),
):
    return await ship_company_service.update(db, company_id, body)


@router.delete(
    "/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        **NOT_FOUND,
        400: {"description": "Carrier still referenced by shipments", "model": ErrorResponse},
    },
    dependencies=[Depends(require_permission("ship-companies.delete"))],
    summary="Delete a carrier",
)
async def delete_ship_company(
    company_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await ship_company_service.delete(db, company_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
