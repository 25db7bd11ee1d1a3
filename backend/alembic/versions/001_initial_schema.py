"""Initial database schema - restaurants, staff, tables, orders, shift logs, settings, categorised catalogues

Revision ID: 001_initial
Revises: None
Create Date: 2025-02-07
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _restaurant_fk() -> sa.Column:
    return sa.Column(
        "restaurant_id",
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    # --- Restaurants ---
    op.create_table(
        "restaurants",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(50), nullable=False, unique=True),
        sa.Column("address", sa.Text),
        sa.Column("phone", sa.String(20)),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )
    op.create_index("ix_restaurants_code", "restaurants", ["code"])

    # --- Staff ---
    op.create_table(
        "staff",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20)),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.text("true")),
        _restaurant_fk(),
        *_timestamps(),
    )
    op.create_index("ix_staff_email", "staff", ["email"])
    op.create_index("ix_staff_role", "staff", ["role"])
    op.create_index("ix_staff_restaurant_id", "staff", ["restaurant_id"])

    # --- Tables (current_order_id FK added after orders exists) ---
    op.create_table(
        "tables",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("table_number", sa.Integer, nullable=False),
        sa.Column("capacity", sa.Integer, nullable=False, server_default=sa.text("4")),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'free'")),
        sa.Column("version", sa.Integer, nullable=False, server_default=sa.text("1")),
        sa.Column("current_order_id", postgresql.UUID(as_uuid=True)),
        _restaurant_fk(),
        *_timestamps(),
        sa.UniqueConstraint("restaurant_id", "table_number", name="uq_tables_restaurant_number"),
    )
    op.create_index("ix_tables_status", "tables", ["status"])
    op.create_index("ix_tables_restaurant_id", "tables", ["restaurant_id"])

    # --- Orders ---
    op.create_table(
        "orders",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("order_source", sa.String(20), nullable=False, server_default=sa.text("'pos'")),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("subtotal", sa.Numeric(12, 2), nullable=False, server_default=sa.text("0.00")),
        sa.Column("total_amount", sa.Numeric(12, 2)),
        sa.Column("payment_method", sa.String(20)),
        sa.Column("order_time", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True)),
        sa.Column("cancelled_at", sa.DateTime(timezone=True)),
        sa.Column("refunded_at", sa.DateTime(timezone=True)),
        sa.Column("version", sa.Integer, nullable=False, server_default=sa.text("1")),
        _restaurant_fk(),
        sa.Column("table_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("tables.id", ondelete="SET NULL")),
        sa.Column("created_by", postgresql.UUID(as_uuid=True), sa.ForeignKey("staff.id", ondelete="SET NULL")),
        *_timestamps(),
    )
    op.create_index("ix_orders_status", "orders", ["status"])
    op.create_index("ix_orders_table_id", "orders", ["table_id"])
    op.create_index(
        "ix_orders_restaurant_source_time", "orders", ["restaurant_id", "order_source", "order_time"]
    )

    op.create_foreign_key(
        "fk_tables_current_order", "tables", "orders",
        ["current_order_id"], ["id"], ondelete="SET NULL",
    )

    # --- Order Items ---
    op.create_table(
        "order_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("menu_item_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("position", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("name", sa.String(255)),
        sa.Column("order_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])

    # --- Shift Logs ---
    op.create_table(
        "shift_logs",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True)),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("notes", sa.Text),
        sa.Column("staff_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("staff.id", ondelete="CASCADE"), nullable=False),
        _restaurant_fk(),
        *_timestamps(),
    )
    op.create_index("ix_shift_logs_start_time", "shift_logs", ["start_time"])
    op.create_index("ix_shift_logs_staff_id", "shift_logs", ["staff_id"])
    op.create_index("ix_shift_logs_restaurant_id", "shift_logs", ["restaurant_id"])

    # --- Restaurant Settings ---
    op.create_table(
        "restaurant_settings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("currency", sa.String(3), nullable=False, server_default=sa.text("'INR'")),
        sa.Column("tax_rate", sa.Numeric(5, 2), nullable=False, server_default=sa.text("0.00")),
        sa.Column("service_charge_rate", sa.Numeric(5, 2), nullable=False, server_default=sa.text("0.00")),
        sa.Column("timezone", sa.String(64), nullable=False, server_default=sa.text("'UTC'")),
        sa.Column("receipt_footer", sa.Text),
        sa.Column("preferences", postgresql.JSONB, nullable=False, server_default=sa.text("'{}'::jsonb")),
        _restaurant_fk(),
        *_timestamps(),
        sa.UniqueConstraint("restaurant_id", name="uq_restaurant_settings_restaurant_id"),
    )

    # --- Categorised catalogues ---
    op.create_table(
        "menu_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        _restaurant_fk(),
        *_timestamps(),
    )
    op.create_table(
        "expenses",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("description", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        _restaurant_fk(),
        *_timestamps(),
    )
    op.create_table(
        "inventory_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("unit", sa.String(20)),
        _restaurant_fk(),
        *_timestamps(),
    )
    op.create_table(
        "suppliers",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(20)),
        _restaurant_fk(),
        *_timestamps(),
    )
    for table in ("menu_items", "expenses", "inventory_items", "suppliers"):
        op.create_index(f"ix_{table}_restaurant_id", table, ["restaurant_id"])
        op.create_index(f"ix_{table}_category", table, ["category"])


def downgrade() -> None:
    op.drop_table("suppliers")
    op.drop_table("inventory_items")
    op.drop_table("expenses")
    op.drop_table("menu_items")
    op.drop_table("restaurant_settings")
    op.drop_table("shift_logs")
    op.drop_table("order_items")
    op.drop_constraint("fk_tables_current_order", "tables", type_="foreignkey")
    op.drop_table("orders")
    op.drop_table("tables")
    op.drop_table("staff")
    op.drop_table("restaurants")
