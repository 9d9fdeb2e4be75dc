"""
MedMall Back Office - Resource Service Base
============================================

What:  The list / page / get / create / update / delete template every
       resource service is built from.
How:   A subclass names its ORM model, its update allow-list and its list
       ordering; the base class runs the queries against the request's
       AsyncSession and translates data-layer failures into app exceptions.
Who:   Subclassed by the per-resource services; called by route handlers.

Write semantics:
    create  - server assigns id, created_at and updated_at (equal at creation);
              client values for those fields never reach the entity.
    update  - copies exactly the allow-listed fields from the payload, then
              stamps updated_at. id, created_at and every other column keep
              their stored values. Status-like fields are copied verbatim.
    delete  - hard delete.

    Services flush (never commit); get_db_session commits at the end of the
    request. Concurrent updates to the same row are last-write-wins.
"""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Any, ClassVar, Generic, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from medmall.database import Base
from medmall.exceptions import DatabaseError, NotFoundError, ValidationError
from medmall.models.base import utcnow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# Zero value clients send for "not set" datetimes
ZERO_DATETIME = datetime(1, 1, 1)

# LIMIT/OFFSET are signed 64-bit on every supported backend
MAX_SQL_INT = 2**63 - 1


def is_unset(value: Optional[datetime]) -> bool:
    """True for None and for the 0001-01-01T00:00:00 zero value."""
    return value is None or value.replace(tzinfo=None) == ZERO_DATETIME


class ResourceService(Generic[ModelT]):
    """
    Generic CRUD operations for one ORM model.

    Subclasses set:
        model:          ORM class
        resource_name:  label used in NotFound messages and logs
        update_fields:  allow-list copied by update()
    and may override ordering() and base_query().
    """

    model: ClassVar[Type[Base]]
    resource_name: ClassVar[str] = "resource"
    update_fields: ClassVar[Tuple[str, ...]] = ()

    # ── Query building ────────────────────────────────────────────────────

    def ordering(self) -> Sequence[Any]:
        return ()

    def base_query(self) -> Select:
        return select(self.model)

    def _filtered(self, query: Select, filters: dict) -> Select:
        # None means "no filter" for every optional parent-id parameter
        for field, value in filters.items():
            if value is not None:
                query = query.where(getattr(self.model, field) == value)
        return query

    @contextmanager
    def _translate_errors(self, action: str) -> Iterator[None]:
        """Map SQLAlchemy failures onto the application's exception hierarchy."""
        try:
            yield
        except IntegrityError as e:
            logger.warning(
                "Constraint violation on %s %s: %s", action, self.resource_name, e.orig
            )
            raise ValidationError(
                message=f"The {self.resource_name} violates a data constraint "
                        f"(duplicate code or missing/unknown reference)",
                context={"resource": self.resource_name, "action": action},
            ) from e
        except SQLAlchemyError as e:
            logger.error(
                "Database error on %s %s: %s", action, self.resource_name, e, exc_info=True
            )
            raise DatabaseError(
                context={"resource": self.resource_name, "action": action,
                         "error_type": type(e).__name__},
            ) from e

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_items(self, db: AsyncSession, **filters: Any) -> Tuple[List[ModelT], int]:
        """
        Unpaginated list with optional equality filters.

        Returns (items, total) where total == len(items).
        """
        query = self._filtered(self.base_query(), filters).order_by(*self.ordering())
        with self._translate_errors("list"):
            result = await db.execute(query)
            items = list(result.scalars().all())
        return items, len(items)

    async def list_page(
        self,
        db: AsyncSession,
        page: int,
        page_size: int,
        query: Optional[Select] = None,
        **filters: Any,
    ) -> Tuple[List[ModelT], int]:
        """
        Offset/limit page.

        Returns (items, total) where total counts every row matching the
        filters regardless of the requested page. page_size has no upper
        bound here; callers control it. A page that starts beyond the
        largest SQL offset is empty.
        """
        query = self._filtered(query if query is not None else self.base_query(), filters)
        count_query = select(func.count()).select_from(query.order_by(None).subquery())
        offset = (page - 1) * page_size
        page_query = (
            query.order_by(*self.ordering())
            .offset(offset)
            .limit(min(page_size, MAX_SQL_INT))
        )
        with self._translate_errors("page"):
            total = (await db.execute(count_query)).scalar_one()
            if offset > MAX_SQL_INT:
                return [], total
            result = await db.execute(page_query)
            items = list(result.scalars().all())
        return items, total

    async def get(self, db: AsyncSession, entity_id: uuid.UUID) -> ModelT:
        """Load one row by primary key or raise NotFoundError."""
        with self._translate_errors("get"):
            entity = await db.get(self.model, entity_id)
        if entity is None:
            raise NotFoundError(resource=self.resource_name, resource_id=str(entity_id))
        return entity

    # ── Writes ────────────────────────────────────────────────────────────

    def prepare_new(self, entity: ModelT, now: datetime) -> None:
        """Hook for resource-specific defaults applied on create."""

    async def create(self, db: AsyncSession, payload: BaseModel) -> ModelT:
        data = payload.model_dump()
        entity = self.model(**data)

        now = utcnow()
        entity.id = uuid.uuid4()
        entity.created_at = now
        entity.updated_at = now
        self.prepare_new(entity, now)

        with self._translate_errors("create"):
            db.add(entity)
            await db.flush()

        logger.info("Created %s %s", self.resource_name, entity.id)
        return entity

    async def update(
        self, db: AsyncSession, entity_id: uuid.UUID, payload: BaseModel
    ) -> ModelT:
        entity = await self.get(db, entity_id)

        for field in self.update_fields:
            setattr(entity, field, getattr(payload, field))
        self._touch(entity)

        with self._translate_errors("update"):
            await db.flush()

        logger.info("Updated %s %s", self.resource_name, entity_id)
        return entity

    async def delete(self, db: AsyncSession, entity_id: uuid.UUID) -> None:
        entity = await self.get(db, entity_id)
        with self._translate_errors("delete"):
            await db.delete(entity)
            await db.flush()
        logger.info("Deleted %s %s", self.resource_name, entity_id)

    @staticmethod
    def _touch(entity: Any) -> None:
        # updated_at must strictly advance even if the clock has not ticked
        now = utcnow()
        previous = entity.updated_at
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        entity.updated_at = now
