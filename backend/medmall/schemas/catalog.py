"""
Request/response schemas for product categories and product specs.

Create schemas carry every client-settable column; update schemas carry only
the fields an update may overwrite. Unknown keys (including id, createdAt and
updatedAt) are ignored on input.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from medmall.schemas.common import CamelModel, Money


# ── Product Categories ────────────────────────────────────────────────────

class ProductCategoryInput(CamelModel):
    """Body for POST and PUT /api/productcategories."""
    name: str = Field(min_length=1, max_length=100)
    code: str = Field(min_length=1, max_length=50)
    sort_order: int = 0
    is_enabled: bool = True


class ProductCategoryResponse(CamelModel):
    id: uuid.UUID
    name: str
    code: str
    sort_order: int
    is_enabled: bool
    created_at: datetime
    updated_at: datetime


# ── Product Specs ─────────────────────────────────────────────────────────

class ProductSpecUpdate(CamelModel):
    """Body for PUT /api/productspecs/{id}."""
    spec_name: str = Field(min_length=1, max_length=100)
    spec_code: Optional[str] = Field(default=None, max_length=100)
    price: Money = Decimal("0")
    stock: int = 0
    weight: Optional[Money] = None
    is_default: bool = False


class ProductSpecCreate(ProductSpecUpdate):
    """Body for POST /api/productspecs."""
    product_id: uuid.UUID


class ProductSpecResponse(CamelModel):
    id: uuid.UUID
    product_id: uuid.UUID
    spec_name: str
    spec_code: Optional[str] = None
    price: Money
    stock: int
    weight: Optional[Money] = None
    is_default: bool
    created_at: datetime
    updated_at: datetime
