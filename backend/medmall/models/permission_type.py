"""
MedMall Back Office - Permission Type Dictionary Model
=======================================================

What:  Lookup table of permission verbs (view, search, create, update, ...)
       that the admin UI combines with resource keys to build permission codes.
How:   Rows are retired by clearing is_active, never deleted; the dropdown
       lookup filters on is_active.
"""

from typing import Optional

from sqlalchemy import Boolean, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from medmall.database import Base
from medmall.models.base import TimestampMixin, UUIDPrimaryKeyMixin


class PermissionTypeDictionary(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "permission_type_dictionaries"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("ix_permission_type_dictionaries_code", "code", unique=True),
    )

    def __repr__(self) -> str:
        return f"<PermissionTypeDictionary(code='{self.code}', active={self.is_active})>"
