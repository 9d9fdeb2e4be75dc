"""
ORM models. Importing this package registers every table on Base.metadata,
which Alembic and the test fixtures rely on.
"""

from medmall.models.address import UserAddress
from medmall.models.catalog import ProductCategory, ProductSpec
from medmall.models.orders import OrderItem, Payment, Refund
from medmall.models.permission_type import PermissionTypeDictionary
from medmall.models.shipping import ShipCompany, Shipment, ShipmentTrack

__all__ = [
    "OrderItem",
    "Payment",
    "PermissionTypeDictionary",
    "ProductCategory",
    "ProductSpec",
    "Refund",
    "ShipCompany",
    "Shipment",
    "ShipmentTrack",
    "UserAddress",
]
