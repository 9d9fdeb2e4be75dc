"""
MedMall Back Office - Product Category Routes
=============================================

What:  Full CRUD for /api/productcategories.
How:   Thin handlers: parse query/body, call product_category_service, return
       the entity. Authorization runs in route dependencies before the body.

Endpoints:
    GET    /api/productcategories          paged list (page=1, pageSize=20)
    GET    /api/productcategories/{id}     single category or 404
    POST   /api/productcategories          create
    PUT    /api/productcategories/{id}     update name, code, sortOrder, isEnabled
    DELETE /api/productcategories/{id}     204, or 404
"""

import uuid

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from medmall.database import get_db_session
from medmall.schemas.catalog import ProductCategoryInput, ProductCategoryResponse
from medmall.schemas.common import ErrorResponse, PagedList
from medmall.security import require_permission
from medmall.services.catalog_service import product_category_service

router = APIRouter(
    prefix="/api/productcategories",
    tags=["Product Categories"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not allowed", "model": ErrorResponse},
    },
)

NOT_FOUND = {404: {"description": "Category not found", "model": ErrorResponse}}


@router.get(
    "",
    response_model=PagedList[ProductCategoryResponse],
    dependencies=[Depends(require_permission("product-categories.view"))],
    summary="List product categories by sort order",
)
async def list_product_categories(
    response: Response,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, alias="pageSize"),
    db: AsyncSession = Depends(get_db_session),
):
    """
    Page through categories ordered by sortOrder.

    `total` counts every category regardless of the page requested.
    pageSize has no upper bound.
    """
    items, total = await product_category_service.list_page(db, page=page, page_size=page_size)
    response.headers["X-Total-Count"] = str(total)
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get(
    "/{category_id}",
    response_model=ProductCategoryResponse,
    responses=NOT_FOUND,
    dependencies=[Depends(require_permission("product-categories.view"))],
    summary="Get a product category",
)
async def get_product_category(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
):
    return await product_category_service.get(db, category_id)


@router.post(
    "",
    response_model=ProductCategoryResponse,
    dependencies=[Depends(require_permission("product-categories.create"))],
    summary="Create a product category",
)
async def create_product_category(
    body: ProductCategoryInput,
    db: AsyncSession = Depends(get_db_session),
):
    return await product_category_service.create(db, body)


@router.put(
    "/{category_id}",
    response_model=ProductCategoryResponse,
    responses=NOT_FOUND,
    dependencies=[Depends(require_permission("product-categories.update"))],
    summary="Update a product category",
)
async def update_product_category(
    category_id: uuid.UUID,
    body: ProductCategoryInput,
    db: AsyncSession = Depends(get_db_session),
):
    return await product_category_service.update(db, category_id, body)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=NOT_FOUND,
    dependencies=[Depends(require_permission("product-categories.delete"))],
    summary="Delete a product category",
)
async def delete_product_category(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await product_category_service.delete(db, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
