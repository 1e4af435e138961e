"""seed invoice types

Revision ID: 8e3b5f1a6c72
Revises: 4a1d7c9e2b30
Create Date: 2026-10-05 10:20:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "8e3b5f1a6c72"
down_revision = "4a1d7c9e2b30"
branch_labels = None
depends_on = None


INVOICE_TYPES = [
    ("B01", "Crédito Fiscal", "Facturas con valor fiscal"),
    ("B02", "Consumo", "Facturas de consumidor final"),
    ("B14", "Regímenes Especiales", None),
    ("B15", "Gubernamental", None),
]


def upgrade() -> None:
    conn = op.get_bind()
    for code, name, description in INVOICE_TYPES:
        exists = conn.execute(
            sa.text("SELECT 1 FROM invoice_types WHERE code = :code LIMIT 1"),
            {"code": code},
        ).fetchone()
        if exists:
            continue
        conn.execute(
            sa.text(
                "INSERT INTO invoice_types (code, name, description) "
                "VALUES (:code, :name, :description)"
            ),
            {"code": code, "name": name, "description": description},
        )


def downgrade() -> None:
    conn = op.get_bind()
    conn.execute(
        sa.text(
            "DELETE FROM invoice_types WHERE code IN ('B01', 'B02', 'B14', 'B15')"
        )
    )
