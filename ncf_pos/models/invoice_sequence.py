from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow


class InvoiceSequence(Base):
    """Last issued number for one (store, invoice type) pair.

    ``current_number`` holds the last number handed out, so the next invoice
    is ``current_number + 1``. It is only ever moved forward by an atomic
    ``UPDATE ... RETURNING``; manual edits are bounded by the sales history.
    """

    __tablename__ = "invoice_sequences"
    __table_args__ = (
        UniqueConstraint(
            "store_id", "invoice_type_id", name="uq_invoice_sequences_store_type"
        ),
        CheckConstraint("current_number >= 0", name="current_number_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id"), nullable=False)
    invoice_type_id: Mapped[str] = mapped_column(
        String(10), ForeignKey("invoice_types.code"), nullable=False
    )
    current_number: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow
    )
