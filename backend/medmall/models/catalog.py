"""
MedMall Back Office - Catalog Models
=====================================

What:  ORM models for the `product_categories` and `product_specs` tables.
Who:   Used by the catalog services and by Alembic.

Table notes:
    - product_categories.code is unique; name is indexed for lookups.
    - product_specs.product_id references the products table owned by the
      catalog service, so it is an indexed UUID without a foreign key here.
    - Money and weight columns are DECIMAL(18,2).
"""

import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, Index, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from medmall.database import Base
from medmall.models.base import TimestampMixin, UUIDPrimaryKeyMixin


class ProductCategory(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A product category shown in the mall navigation, ordered by sort_order."""

    __tablename__ = "product_categories"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("ix_product_categories_code", "code", unique=True),
        Index("ix_product_categories_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<ProductCategory(id={self.id}, code='{self.code}')>"


class ProductSpec(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A purchasable variant of a product: its own price, stock and weight."""

    __tablename__ = "product_specs"

    product_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    spec_name: Mapped[str] = mapped_column(String(100), nullable=False)
    spec_code: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Used for shipping cost estimates; optional
    weight: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 2), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<ProductSpec(id={self.id}, spec_name='{self.spec_name}')>"
