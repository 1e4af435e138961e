from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class InvoiceType(Base):
    """Fiscal receipt series, e.g. B01 (credito fiscal) or B02 (consumo)."""

    __tablename__ = "invoice_types"

    code: Mapped[str] = mapped_column(String(10), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
