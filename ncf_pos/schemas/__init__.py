from .invoice_sequence import (
    InvoiceNumberRead,
    InvoiceSequenceProvision,
    InvoiceSequenceRead,
    InvoiceSequenceUpdate,
    SequenceAuditRead,
    SequenceReconcile,
    SequenceReconcileRead,
)
from .sale import OfflineSaleCreate, OfflineSaleSyncRead, SaleCreate, SaleRead
from .store import StoreCreate, StoreRead

__all__ = [
    "InvoiceNumberRead",
    "InvoiceSequenceProvision",
    "InvoiceSequenceRead",
    "InvoiceSequenceUpdate",
    "OfflineSaleCreate",
    "OfflineSaleSyncRead",
    "SaleCreate",
    "SaleRead",
    "SequenceAuditRead",
    "SequenceReconcile",
    "SequenceReconcileRead",
    "StoreCreate",
    "StoreRead",
]
