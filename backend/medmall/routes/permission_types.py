"""
MedMall Back Office - Permission Type Dictionary Routes
========================================================

What:  Read-only lookup of permission types for the permission editor.

Endpoints:
    GET /api/permissiontypedictionaries/all
        Active entries for dropdowns: id, name, code, description, sortOrder.
    GET /api/permissiontypedictionaries?keyword=&page=1&pageSize=100
        Paged admin list including inactive entries.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from medmall.database import get_db_session
from medmall.schemas.common import ErrorResponse, PagedList
from medmall.schemas.permission_type import PermissionTypeListItem, PermissionTypeOption
from medmall.security import require_permission
from medmall.services.permission_type_service import permission_type_service

router = APIRouter(
    prefix="/api/permissiontypedictionaries",
    tags=["Permission Types"],
    dependencies=[Depends(require_permission("permissiontype.view"))],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not allowed", "model": ErrorResponse},
    },
)


@router.get(
    "/all",
    response_model=List[PermissionTypeOption],
    summary="All active permission types",
)
async def list_permission_type_options(db: AsyncSession = Depends(get_db_session)):
    return await permission_type_service.list_options(db)


@router.get(
    "",
    response_model=PagedList[PermissionTypeListItem],
    summary="Search permission types",
)
async def search_permission_types(
    response: Response,
    keyword: Optional[str] = Query(default=None, description="Substring of name, code or description"),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=100, ge=1, alias="pageSize"),
    db: AsyncSession = Depends(get_db_session),
):
    """
    Page through permission types ordered by sortOrder, then name.

    pageSize is not capped; a caller can request the whole table.
    """
    items, total = await permission_type_service.search(
        db, keyword=keyword, page=page, page_size=page_size
    )
    response.headers["X-Total-Count"] = str(total)
    return {"items": items, "total": total, "page": page, "page_size": page_size}
