"""Request/response schemas for user delivery addresses."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from medmall.schemas.common import CamelModel


class UserAddressUpdate(CamelModel):
    """Body for PUT /api/useraddresses/{id}."""
    consignee: str = Field(min_length=1, max_length=50)
    phone: str = Field(min_length=1, max_length=30)
    province: Optional[str] = Field(default=None, max_length=50)
    city: Optional[str] = Field(default=None, max_length=50)
    district: Optional[str] = Field(default=None, max_length=50)
    address_line: Optional[str] = Field(default=None, max_length=200)
    is_default: bool = False


class UserAddressCreate(UserAddressUpdate):
    """Body for POST /api/useraddresses."""
    user_id: uuid.UUID


class UserAddressResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    consignee: str
    phone: str
    province: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    address_line: Optional[str] = None
    is_default: bool
    created_at: datetime
    updated_at: datetime
