"""sales

Revision ID: 7f6a2d8b4e19
Revises: 2c9f4e7d1a85
Create Date: 2026-10-05 11:05:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "7f6a2d8b4e19"
down_revision = "2c9f4e7d1a85"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "sales",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("store_id", sa.Integer(), nullable=False),
        sa.Column("invoice_type_id", sa.String(length=10), nullable=False),
        sa.Column("invoice_number", sa.String(length=50), nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=True),
        sa.Column("subtotal", sa.Numeric(12, 2), nullable=False),
        sa.Column("discount_total", sa.Numeric(12, 2), nullable=False),
        sa.Column("tax_total", sa.Numeric(12, 2), nullable=False),
        sa.Column("total", sa.Numeric(12, 2), nullable=False),
        sa.Column("payment_method", sa.String(length=50), nullable=False),
        sa.Column("payment_status", sa.String(length=7), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("synced_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_sales"),
        sa.ForeignKeyConstraint(
            ["store_id"], ["stores.id"], name="fk_sales_store_id_stores"
        ),
        sa.ForeignKeyConstraint(
            ["invoice_type_id"],
            ["invoice_types.code"],
            name="fk_sales_invoice_type_id_invoice_types",
        ),
        sa.UniqueConstraint(
            "store_id", "invoice_number", name="uq_sales_store_invoice_number"
        ),
    )
    op.create_index("ix_sales_store_type", "sales", ["store_id", "invoice_type_id"])
    op.create_index("ix_sales_created_at", "sales", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_sales_created_at", table_name="sales")
    op.drop_index("ix_sales_store_type", table_name="sales")
    op.drop_table("sales")
