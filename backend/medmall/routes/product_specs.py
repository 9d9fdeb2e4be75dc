"""
Product spec routes: /api/productspecs.

    GET    /api/productspecs?productId=    list, oldest first
    POST   /api/productspecs               create
    PUT    /api/productspecs/{id}          update specName, specCode, price,
                                           stock, weight, isDefault
    DELETE /api/productspecs/{id}          204, or 404
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from medmall.database import get_db_session
from medmall.schemas.catalog import ProductSpecCreate, ProductSpecResponse, ProductSpecUpdate
from medmall.schemas.common import ErrorResponse, ItemList
from medmall.security import require_permission
from medmall.services.catalog_service import product_spec_service

router = APIRouter(
    prefix="/api/productspecs",
    tags=["Product Specs"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not allowed", "model": ErrorResponse},
    },
)

NOT_FOUND = {404: {"description": "Spec not found", "model": ErrorResponse}}


@router.get(
    "",
    response_model=ItemList[ProductSpecResponse],
    dependencies=[Depends(require_permission("product-specs.view"))],
    summary="List product specs",
)
async def list_product_specs(
    product_id: Optional[uuid.UUID] = Query(default=None, alias="productId"),
    db: AsyncSession = Depends(get_db_session),
):
    items, total = await product_spec_service.list_items(db, product_id=product_id)
    return {"items": items, "total": total}


@router.post(
    "",
    response_model=ProductSpecResponse,
    dependencies=[Depends(require_permission("product-specs.create"))],
    summary="Create a product spec",
)
async def create_product_spec(
    body: ProductSpecCreate,
    db: AsyncSession = Depends(get_db_session),
):
    return await product_spec_service.create(db, body)


@router.put(
    "/{spec_id}",
    response_model=ProductSpecResponse,
    responses=NOT_FOUND,
    dependencies=[Depends(require_permission("product-specs.update"))],
    summary="Update a product spec",
)
async def update_product_spec(
    spec_id: uuid.UUID,
    body: ProductSpecUpdate,
    db: AsyncSession = Depends(get_db_session),
):
    return await product_spec_service.update(db, spec_id, body)


@router.delete(
    "/{spec_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=NOT_FOUND,
    dependencies=[Depends(require_permission("product-specs.delete"))],
    summary="Delete a product spec",
)
async def delete_product_spec(
    spec_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await product_spec_service.delete(db, spec_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
