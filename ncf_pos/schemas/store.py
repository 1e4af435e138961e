from datetime import datetime

from pydantic import BaseModel, Field

from .invoice_sequence import InvoiceSequenceRead


class StoreCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    invoice_type_codes: list[str] | None = None
    initial_number: int = Field(default=0, ge=0)


class StoreRead(BaseModel):
    id: int
    name: str
    created_at: datetime
    invoice_sequences: list[InvoiceSequenceRead]
