"""
MedMall Back Office - Permission Type Dictionary Service
=========================================================

What:  Read-only access to the permission type lookup, plus the reference
       data seed.
Who:   Called by the /api/permissiontypedictionaries routes and by the
       application lifespan (seeding).

Queries:
    list_options()  active rows only, sort_order then name, no pagination.
                    Inactive rows are filtered out, never deleted.
    search()        optional keyword matched as a substring of name, code or
                    description; inactive rows included; offset/limit pages.
                    Case sensitivity follows the database collation.
"""

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from medmall.models.base import utcnow
from medmall.models.permission_type import PermissionTypeDictionary
from medmall.services.base import ResourceService

logger = logging.getLogger(__name__)

# (name, code, description), seeded with sort_order 1..n
DEFAULT_PERMISSION_TYPES = (
    ("View", "view", "Allows the user to view data"),
    ("Search", "search", "Allows the user to search data"),
    ("Create", "create", "Allows the user to create new data"),
    ("Edit", "update", "Allows the user to modify data"),
    ("Delete", "delete", "Allows the user to delete data"),
    ("Export", "export", "Allows the user to export data"),
    ("Import", "import", "Allows the user to import data"),
)


class PermissionTypeService(ResourceService[PermissionTypeDictionary]):
    model = PermissionTypeDictionary
    resource_name = "permission type"

    def ordering(self):
        return (PermissionTypeDictionary.sort_order, PermissionTypeDictionary.name)

    async def list_options(self, db: AsyncSession) -> List[PermissionTypeDictionary]:
        query = (
            select(PermissionTypeDictionary)
            .where(PermissionTypeDictionary.is_active.is_(True))
            .order_by(*self.ordering())
        )
        with self._translate_errors("list"):
            result = await db.execute(query)
            return list(result.scalars().all())

    async def search(
        self,
        db: AsyncSession,
        keyword: Optional[str],
        page: int,
        page_size: int,
    ) -> Tuple[List[PermissionTypeDictionary], int]:
        query = select(PermissionTypeDictionary)
        if keyword:
            query = query.where(
                or_(
                    PermissionTypeDictionary.name.contains(keyword, autoescape=True),
                    PermissionTypeDictionary.code.contains(keyword, autoescape=True),
                    PermissionTypeDictionary.description.contains(keyword, autoescape=True),
                )
            )
        return await self.list_page(db, page=page, page_size=page_size, query=query)

    async def seed_defaults(self, db: AsyncSession) -> int:
        """
        Insert the standard permission types when the table is empty.

        Returns the number of rows inserted (0 when data already exists).
        """
        existing = (
            await db.execute(select(func.count()).select_from(PermissionTypeDictionary))
        ).scalar_one()
        if existing:
            return 0

        now = utcnow()
        for sort_order, (name, code, description) in enumerate(DEFAULT_PERMISSION_TYPES, start=1):
            db.add(
                PermissionTypeDictionary(
                    id=uuid.uuid4(),
                    name=name,
                    code=code,
                    description=description,
                    sort_order=sort_order,
                    is_active=True,
                    created_at=now,
                    updated_at=now,
                )
            )
        with self._translate_errors("seed"):
            await db.flush()

        logger.info("Seeded %d permission types", len(DEFAULT_PERMISSION_TYPES))
        return len(DEFAULT_PERMISSION_TYPES)


permission_type_service = PermissionTypeService()


async def seed_permission_types(db: AsyncSession) -> int:
    return await permission_type_service.seed_defaults(db)
