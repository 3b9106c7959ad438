"""initial_inventory_tables

Revision ID: initial_inventory
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "initial_inventory"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ITEM_CATEGORY = sa.Enum(
    "Medication", "Equipment", "Supplies",
    name="item_category_enum", native_enum=False, length=20,
)
ACTION_KIND = sa.Enum(
    "Check In", "Check Out", "Use", "Transfer", "Remove All",
    name="action_kind_enum", native_enum=False, length=20,
)
ALERT_TYPE = sa.Enum(
    "Low Stock", "15-Day Expiry Warning", "7-Day Expiry Warning",
    name="alert_type_enum", native_enum=False, length=40,
)


def upgrade() -> None:
    op.create_table(
        "inventory_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("item_id", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", ITEM_CATEGORY, nullable=False),
        sa.Column("quantity", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("min_quantity", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        sa.Column("location", sa.String(length=255), server_default=sa.text("''"), nullable=False),
        sa.Column("last_scanned", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_inventory_items_item_id"), "inventory_items", ["item_id"], unique=True
    )

    op.create_table(
        "inventory_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("item_fk", sa.Integer(), nullable=True),
        sa.Column("item_id", sa.String(length=50), nullable=False),
        sa.Column("item_name", sa.String(length=255), nullable=False),
        sa.Column("category", ITEM_CATEGORY, nullable=False),
        sa.Column("action", ACTION_KIND, nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("case_id", sa.String(length=50), nullable=True),
        sa.Column("user", sa.String(length=255), nullable=False),
        sa.Column(
            "action_date",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["item_fk"], ["inventory_items.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_inventory_history_item_fk"), "inventory_history", ["item_fk"])
    op.create_index(op.f("ix_inventory_history_item_id"), "inventory_history", ["item_id"])

    op.create_table(
        "notification_log",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("item_fk", sa.Integer(), nullable=True),
        sa.Column("alert_type", ALERT_TYPE, nullable=False),
        sa.Column("item_id_at_alert", sa.String(length=50), nullable=False),
        sa.Column("item_name", sa.String(length=255), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("expiry_date_at_alert", sa.Date(), nullable=True),
        sa.Column("details", sa.String(length=1000), nullable=True),
        sa.Column("is_read", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["item_fk"], ["inventory_items.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_notification_log_item_fk"), "notification_log", ["item_fk"])

    op.create_table(
        "export_log",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "format",
            sa.Enum("CSV", name="export_format_enum", native_enum=False, length=10),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.Enum("Success", "Failed", name="export_status_enum", native_enum=False, length=10),
            nullable=False,
        ),
        sa.Column("details", sa.String(length=1000), nullable=True),
        sa.Column("user", sa.String(length=255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("export_log")
    op.drop_index(op.f("ix_notification_log_item_fk"), table_name="notification_log")
    op.drop_table("notification_log")
    op.drop_index(op.f("ix_inventory_history_item_id"), table_name="inventory_history")
    op.drop_index(op.f("ix_inventory_history_item_fk"), table_name="inventory_history")
    op.drop_table("inventory_history")
    op.drop_index(op.f("ix_inventory_items_item_id"), table_name="inventory_items")
    op.drop_table("inventory_items")
