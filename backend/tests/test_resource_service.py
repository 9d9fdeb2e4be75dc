"""
Tests for the generic resource service (create/update/delete/list/page).

Exercised through concrete services against the per-test SQLite database.
"""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from medmall.exceptions import NotFoundError, ValidationError
from medmall.models.base import utcnow
from medmall.schemas.catalog import ProductCategoryInput, ProductSpecCreate
from medmall.services import base as service_base
from medmall.services.base import ZERO_DATETIME, is_unset
from medmall.services.catalog_service import product_category_service, product_spec_service


def category(code: str, sort_order: int = 0) -> ProductCategoryInput:
    return ProductCategoryInput(name=f"Category {code}", code=code, sort_order=sort_order)


class TestIsUnset:
    def test_none_is_unset(self):
        assert is_unset(None)

    def test_zero_value_is_unset_naive_and_aware(self):
        assert is_unset(ZERO_DATETIME)
        assert is_unset(ZERO_DATETIME.replace(tzinfo=timezone.utc))

    def test_real_datetime_is_set(self):
        assert not is_unset(datetime(2024, 3, 1, tzinfo=timezone.utc))


class TestCreate:
    @pytest.mark.asyncio
    async def test_assigns_fresh_ids_and_equal_timestamps(self, db_session):
        first = await product_category_service.create(db_session, category("rx"))
        second = await product_category_service.create(db_session, category("otc"))

        assert isinstance(first.id, uuid.UUID)
        assert first.id != second.id
        assert first.created_at == first.updated_at
        assert first.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_duplicate_code_is_a_validation_error(self, db_session):
        await product_category_service.create(db_session, category("dup"))

        with pytest.raises(ValidationError):
            await product_category_service.create(db_session, category("dup"))


class TestUpdate:
    @pytest.mark.asyncio
    async def test_copies_allow_list_only(self, db_session):
        product_id = uuid.uuid4()
        spec = await product_spec_service.create(
            db_session,
            ProductSpecCreate(product_id=product_id, spec_name="10 tablets", price=Decimal("9.90")),
        )
        created_at = spec.created_at

        payload = ProductSpecCreate(
            product_id=uuid.uuid4(),
            spec_name="20 tablets",
            spec_code="T20",
            price=Decimal("17.50"),
            stock=40,
            is_default=True,
        )
        updated = await product_spec_service.update(db_session, spec.id, payload)

        assert updated.product_id == product_id
        assert updated.created_at == created_at
        assert updated.spec_name == "20 tablets"
        assert updated.spec_code == "T20"
        assert updated.price == Decimal("17.50")
        assert updated.stock == 40
        assert updated.is_default is True

    @pytest.mark.asyncio
    async def test_updated_at_strictly_advances(self, db_session):
        entity = await product_category_service.create(db_session, category("adv"))
        before = entity.updated_at

        updated = await product_category_service.update(db_session, entity.id, category("adv", 5))

        assert updated.updated_at > before
        assert updated.sort_order == 5

    @pytest.mark.asyncio
    async def test_updated_at_advances_when_clock_stands_still(self, db_session, monkeypatch):
        entity = await product_category_service.create(db_session, category("frozen"))
        frozen = entity.updated_at
        monkeypatch.setattr(service_base, "utcnow", lambda: frozen)

        updated = await product_category_service.update(db_session, entity.id, category("frozen"))

        assert updated.updated_at == frozen + timedelta(microseconds=1)

    @pytest.mark.asyncio
    async def test_unknown_id_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await product_category_service.update(db_session, uuid.uuid4(), category("ghost"))


class TestDelete:
    @pytest.mark.asyncio
    async def test_removes_row(self, db_session):
        entity = await product_category_service.create(db_session, category("gone"))

        await product_category_service.delete(db_session, entity.id)

        with pytest.raises(NotFoundError):
            await product_category_service.get(db_session, entity.id)

    @pytest.mark.asyncio
    async def test_unknown_id_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await product_category_service.delete(db_session, uuid.uuid4())
        assert exc_info.value.context["resource"] == "product category"


class TestPaging:
    @pytest.mark.asyncio
    async def test_last_page_holds_the_remainder(self, db_session):
        for i in range(45):
            await product_category_service.create(db_session, category(f"c{i:02d}", sort_order=i))

        items, total = await product_category_service.list_page(db_session, page=3, page_size=20)

        assert total == 45
        assert [c.sort_order for c in items] == [40, 41, 42, 43, 44]

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, db_session):
        for i in range(3):
            await product_category_service.create(db_session, category(f"p{i}"))

        items, total = await product_category_service.list_page(db_session, page=5, page_size=20)

        assert items == []
        assert total == 3

    @pytest.mark.asyncio
    async def test_offset_wider_than_64_bits_is_empty(self, db_session):
        await product_category_service.create(db_session, category("huge"))

        items, total = await product_category_service.list_page(db_session, page=10**19, page_size=20)

        assert items == []
        assert total == 1

    @pytest.mark.asyncio
    async def test_page_size_wider_than_64_bits_returns_everything(self, db_session):
        for i in range(3):
            await product_category_service.create(db_session, category(f"w{i}", sort_order=i))

        items, total = await product_category_service.list_page(db_session, page=1, page_size=10**19)

        assert [c.code for c in items] == ["w0", "w1", "w2"]
        assert total == 3

    @pytest.mark.asyncio
    async def test_orders_by_sort_order(self, db_session):
        await product_category_service.create(db_session, category("b", sort_order=2))
        await product_category_service.create(db_session, category("a", sort_order=1))

        items, _ = await product_category_service.list_page(db_session, page=1, page_size=20)

        assert [c.code for c in items] == ["a", "b"]


class TestList:
    @pytest.mark.asyncio
    async def test_filter_by_parent_and_oldest_first(self, db_session):
        product_id = uuid.uuid4()
        older = await product_spec_service.create(
            db_session, ProductSpecCreate(product_id=product_id, spec_name="small")
        )
        older.created_at = utcnow() - timedelta(days=1)
        newer = await product_spec_service.create(
            db_session, ProductSpecCreate(product_id=product_id, spec_name="large")
        )
        await product_spec_service.create(
            db_session, ProductSpecCreate(product_id=uuid.uuid4(), spec_name="other")
        )
        await db_session.flush()

        items, total = await product_spec_service.list_items(db_session, product_id=product_id)

        assert total == 2
        assert [s.id for s in items] == [older.id, newer.id]

    @pytest.mark.asyncio
    async def test_no_filter_returns_everything(self, db_session):
        for name in ("a", "b", "c"):
            await product_spec_service.create(
                db_session, ProductSpecCreate(product_id=uuid.uuid4(), spec_name=name)
            )

        items, total = await product_spec_service.list_items(db_session, product_id=None)

        assert total == 3
        assert len(items) == 3
