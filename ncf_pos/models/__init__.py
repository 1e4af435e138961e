from .base import Base
from .invoice_sequence import InvoiceSequence
from .invoice_type import InvoiceType
from .sale import PaymentStatusEnum, Sale
from .store import Store

__all__ = [
    "Base",
    "InvoiceSequence",
    "InvoiceType",
    "PaymentStatusEnum",
    "Sale",
    "Store",
]
