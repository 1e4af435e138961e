"""stores and invoice types

Revision ID: 4a1d7c9e2b30
Revises:
Create Date: 2026-10-05 10:00:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "4a1d7c9e2b30"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "stores",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_stores"),
    )
    op.create_table(
        "invoice_types",
        sa.Column("code", sa.String(length=10), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("code", name="pk_invoice_types"),
    )


def downgrade() -> None:
    op.drop_table("invoice_types")
    op.drop_table("stores")
