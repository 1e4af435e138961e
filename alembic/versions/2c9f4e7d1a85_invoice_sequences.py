"""invoice sequences per store

Revision ID: 2c9f4e7d1a85
Revises: 8e3b5f1a6c72
Create Date: 2026-10-05 10:40:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "2c9f4e7d1a85"
down_revision = "8e3b5f1a6c72"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "invoice_sequences",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("store_id", sa.Integer(), nullable=False),
        sa.Column("invoice_type_id", sa.String(length=10), nullable=False),
        sa.Column("current_number", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_invoice_sequences"),
        sa.ForeignKeyConstraint(
            ["store_id"], ["stores.id"], name="fk_invoice_sequences_store_id_stores"
        ),
        sa.ForeignKeyConstraint(
            ["invoice_type_id"],
            ["invoice_types.code"],
            name="fk_invoice_sequences_invoice_type_id_invoice_types",
        ),
        sa.UniqueConstraint(
            "store_id", "invoice_type_id", name="uq_invoice_sequences_store_type"
        ),
        sa.CheckConstraint(
            "current_number >= 0",
            name="ck_invoice_sequences_current_number_non_negative",
        ),
    )


def downgrade() -> None:
    op.drop_table("invoice_sequences")
