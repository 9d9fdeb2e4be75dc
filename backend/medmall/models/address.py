"""ORM model for user delivery addresses."""

import uuid
from typing import Optional

from sqlalchemy import Boolean, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from medmall.database import Base
from medmall.models.base import TimestampMixin, UUIDPrimaryKeyMixin


class UserAddress(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    A delivery address belonging to a platform user.

    Several addresses per user may carry is_default; listing puts them first.
    """

    __tablename__ = "user_addresses"

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    consignee: Mapped[str] = mapped_column(String(50), nullable=False)
    phone: Mapped[str] = mapped_column(String(30), nullable=False)
    province: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    district: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    address_line: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
