"""Create MedMall back office tables

Revision ID: 001
Revises: None
Create Date: 2024-06-01 00:00:00.000000+00:00

What:  Creates the ten back office tables and their indexes.
How:   Timestamps are TIMESTAMP WITH TIME ZONE; money is NUMERIC(18, 2).
       order_id, product_id and user_id point at tables owned by other
       services and carry no foreign key. shipments.ship_company_id
       restricts carrier deletion; shipment_tracks cascade with their
       shipment.

Rollback: downgrade() drops every table (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.Uuid(), nullable=False, primary_key=True)


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _money(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.Numeric(18, 2), nullable=nullable)


def upgrade() -> None:
    op.create_table(
        "product_categories",
        _id(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_product_categories_code", "product_categories", ["code"], unique=True)
    op.create_index("ix_product_categories_name", "product_categories", ["name"])

    op.create_table(
        "product_specs",
        _id(),
        sa.Column("product_id", sa.Uuid(), nullable=False),
        sa.Column("spec_name", sa.String(100), nullable=False),
        sa.Column("spec_code", sa.String(100), nullable=True),
        _money("price"),
        sa.Column("stock", sa.Integer(), nullable=False, server_default=sa.text("0")),
        _money("weight", nullable=True),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_product_specs_product_id", "product_specs", ["product_id"])

    op.create_table(
        "order_items",
        _id(),
        sa.Column("order_id", sa.Uuid(), nullable=False),
        sa.Column("product_id", sa.Uuid(), nullable=False),
        sa.Column("product_spec_id", sa.Uuid(), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default=sa.text("1")),
        _money("unit_price"),
        _money("subtotal"),
        *_timestamps(),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])

    op.create_table(
        "payments",
        _id(),
        sa.Column("order_id", sa.Uuid(), nullable=False),
        sa.Column("pay_method", sa.String(30), nullable=False, server_default="WeChat"),
        _money("amount"),
        sa.Column("pay_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("pay_txn_id", sa.String(100), nullable=True),
        sa.Column("pay_channel_raw", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_payments_order_id", "payments", ["order_id"])

    op.create_table(
        "refunds",
        _id(),
        sa.Column("order_id", sa.Uuid(), nullable=False),
        sa.Column("order_item_id", sa.Uuid(), nullable=True),
        _money("amount"),
        sa.Column("reason", sa.String(200), nullable=True),
        sa.Column("status", sa.String(30), nullable=False, server_default="Pending"),
        sa.Column("refund_method", sa.String(50), nullable=True),
        sa.Column("channel_refund_no", sa.String(100), nullable=True),
        sa.Column("initiated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_refunds_order_id", "refunds", ["order_id"])

    op.create_table(
        "ship_companies",
        _id(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column("contact_url", sa.String(200), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("is_enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    op.create_table(
        "shipments",
        _id(),
        sa.Column("order_id", sa.Uuid(), nullable=False),
        sa.Column(
            "ship_company_id",
            sa.Uuid(),
            sa.ForeignKey("ship_companies.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("tracking_no", sa.String(100), nullable=False),
        sa.Column("package_index", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("shipped_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("delivered_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(30), nullable=False, server_default="Pending"),
        *_timestamps(),
    )
    op.create_index("ix_shipments_order_id", "shipments", ["order_id"])
    op.create_index("ix_shipments_ship_company_id", "shipments", ["ship_company_id"])
    op.create_index("ix_shipments_tracking_no", "shipments", ["tracking_no"])

    op.create_table(
        "shipment_tracks",
        _id(),
        sa.Column(
            "shipment_id",
            sa.Uuid(),
            sa.ForeignKey("shipments.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status_text", sa.String(200), nullable=True),
        sa.Column("location", sa.String(100), nullable=True),
        sa.Column("occurred_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("raw_payload", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_shipment_tracks_shipment_id", "shipment_tracks", ["shipment_id"])

    op.create_table(
        "user_addresses",
        _id(),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("consignee", sa.String(50), nullable=False),
        sa.Column("phone", sa.String(30), nullable=False),
        sa.Column("province", sa.String(50), nullable=True),
        sa.Column("city", sa.String(50), nullable=True),
        sa.Column("district", sa.String(50), nullable=True),
        sa.Column("address_line", sa.String(200), nullable=True),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_user_addresses_user_id", "user_addresses", ["user_id"])

    op.create_table(
        "permission_type_dictionaries",
        _id(),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("description", sa.String(200), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index(
        "ix_permission_type_dictionaries_code",
        "permission_type_dictionaries",
        ["code"],
        unique=True,
    )


def downgrade() -> None:
    # Children before parents.
    op.drop_table("permission_type_dictionaries")
    op.drop_table("user_addresses")
    op.drop_table("shipment_tracks")
    op.drop_table("shipments")
    op.drop_table("ship_companies")
    op.drop_table("refunds")
    op.drop_table("payments")
    op.drop_table("order_items")
    op.drop_table("product_specs")
    op.drop_table("product_categories")
