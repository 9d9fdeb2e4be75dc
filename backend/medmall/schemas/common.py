"""
MedMall Back Office - Shared Schema Building Blocks
====================================================

What:  Base model, field types and response envelopes used by every resource.
How:   All API models speak camelCase JSON (the admin frontend's convention)
       while Python code uses snake_case names; snake_case is accepted on
       input as well.

Envelopes:
    ItemList[T]   {"items": [...], "total": n}
    PagedList[T]  {"items": [...], "total": n, "page": p, "pageSize": s}
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError:
        # 0001-01-01 with a positive offset has no UTC representation
        return value.replace(tzinfo=timezone.utc)


UTCDatetime = Annotated[datetime, AfterValidator(ensure_utc)]

CENT = Decimal("0.01")


def format_money(value: Decimal) -> str:
    """Exact two-place decimal string; 18 digits do not fit a float."""
    return str(value.quantize(CENT))


# DECIMAL(18,2) columns; rendered as strings like "12.50"
Money = Annotated[
    Decimal,
    Field(max_digits=18, decimal_places=2),
    PlainSerializer(format_money, return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


T = TypeVar("T")


class ItemList(CamelModel, Generic[T]):
    """Unpaginated list envelope."""
    items: List[T]
    total: int = Field(description="Number of items returned")


class PagedList(CamelModel, Generic[T]):
    """Offset/limit page envelope; total counts every matching row."""
    items: List[T]
    total: int = Field(description="Number of rows matching the filters")
    page: int
    page_size: int


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "shipment with ID '...' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
