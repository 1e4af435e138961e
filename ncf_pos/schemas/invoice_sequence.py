from datetime import datetime

from pydantic import BaseModel, Field, computed_field

from ..services.invoice_numbers import format_invoice_number


class InvoiceSequenceRead(BaseModel):
    id: int
    store_id: int
    invoice_type_id: str
    current_number: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def next_invoice_number(self) -> str:
        return format_invoice_number(self.invoice_type_id, self.current_number + 1)


class InvoiceSequenceUpdate(BaseModel):
    current_number: int = Field(ge=0)


class InvoiceSequenceProvision(BaseModel):
    invoice_type_codes: list[str] | None = None
    initial_number: int = Field(default=0, ge=0)


class InvoiceNumberRead(BaseModel):
    store_id: int
    invoice_type_id: str
    invoice_number: str


class SequenceReconcile(BaseModel):
    local_number: int = Field(ge=0)


class SequenceReconcileRead(BaseModel):
    invoice_type_id: str
    current_number: int
    advanced: bool


class SequenceAuditRead(BaseModel):
    invoice_type_id: str
    current_number: int
    max_historical: int
    behind: bool
    repaired: bool

    model_config = {"from_attributes": True}
