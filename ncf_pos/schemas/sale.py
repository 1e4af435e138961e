from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from ..models import PaymentStatusEnum


class SaleCreate(BaseModel):
    invoice_type_id: str
    customer_id: int | None = None
    subtotal: Decimal = Field(ge=0)
    discount_total: Decimal = Field(default=Decimal("0.00"), ge=0)
    tax_total: Decimal = Field(default=Decimal("0.00"), ge=0)
    payment_method: str
    payment_status: PaymentStatusEnum = PaymentStatusEnum.PAID


class OfflineSaleCreate(SaleCreate):
    invoice_number: str
    created_at: datetime | None = None


class SaleRead(BaseModel):
    id: int
    store_id: int
    invoice_type_id: str
    invoice_number: str
    customer_id: int | None
    subtotal: Decimal
    discount_total: Decimal
    tax_total: Decimal
    total: Decimal
    payment_method: str
    payment_status: PaymentStatusEnum
    created_at: datetime
    synced_at: datetime | None

    model_config = {"from_attributes": True}


class OfflineSaleSyncRead(BaseModel):
    sale: SaleRead
    created: bool
    current_number: int
