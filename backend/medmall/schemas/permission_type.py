"""
Projections of the permission type dictionary.

The dropdown lookup returns the reduced PermissionTypeOption; the paged admin
list returns PermissionTypeListItem, which adds the active flag and audit
timestamps.
"""

import uuid
from datetime import datetime
from typing import Optional

from medmall.schemas.common import CamelModel


class PermissionTypeOption(CamelModel):
    id: uuid.UUID
    name: str
    code: str
    description: Optional[str] = None
    sort_order: int


class PermissionTypeListItem(PermissionTypeOption):
    is_active: bool
    created_at: datetime
    updated_at: datetime
