from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import (
    InvoiceNumberRead,
    InvoiceSequenceProvision,
    InvoiceSequenceRead,
    InvoiceSequenceUpdate,
    SequenceAuditRead,
    SequenceReconcile,
    SequenceReconcileRead,
)
from ..services import invoice_sequences as sequences_service
from ..services import sales as sales_service

router = APIRouter(prefix="/stores/{store_id}/invoice-sequences")


@router.get("", response_model=list[InvoiceSequenceRead])
def list_sequences(
    store_id: int, db: Session = Depends(get_db)
) -> list[InvoiceSequenceRead]:
    return sequences_service.list_sequences(db, store_id)


@router.post("", response_model=list[InvoiceSequenceRead], status_code=201)
def provision_sequences(
    store_id: int,
    payload: InvoiceSequenceProvision,
    db: Session = Depends(get_db),
) -> list[InvoiceSequenceRead]:
    return sequences_service.provision_store(
        db, store_id, payload.invoice_type_codes, payload.initial_number
    )


@router.get("/audit", response_model=list[SequenceAuditRead])
def audit_sequences(
    store_id: int, db: Session = Depends(get_db)
) -> list[SequenceAuditRead]:
    return sequences_service.audit_store(db, store_id)


@router.post("/audit", response_model=list[SequenceAuditRead])
def repair_sequences(
    store_id: int, db: Session = Depends(get_db)
) -> list[SequenceAuditRead]:
    """Advance every counter that is behind the store's sales history."""
    return sequences_service.audit_store(db, store_id, repair=True)


@router.get("/max-issued", response_model=dict[str, int])
def max_issued(store_id: int, db: Session = Depends(get_db)) -> dict[str, int]:
    return sequences_service.max_issued_numbers(db, store_id)


@router.get("/{invoice_type_code}/next", response_model=InvoiceNumberRead)
def peek_next(
    store_id: int, invoice_type_code: str, db: Session = Depends(get_db)
) -> InvoiceNumberRead:
    return InvoiceNumberRead(
        store_id=store_id,
        invoice_type_id=invoice_type_code,
        invoice_number=sequences_service.peek_next(db, store_id, invoice_type_code),
    )


@router.post(
    "/{invoice_type_code}/issue", response_model=InvoiceNumberRead, status_code=201
)
def issue_next(
    store_id: int, invoice_type_code: str, db: Session = Depends(get_db)
) -> InvoiceNumberRead:
    return InvoiceNumberRead(
        store_id=store_id,
        invoice_type_id=invoice_type_code,
        invoice_number=sequences_service.issue_next(db, store_id, invoice_type_code),
    )


@router.put("/{invoice_type_code}", response_model=InvoiceSequenceRead)
def set_counter(
    store_id: int,
    invoice_type_code: str,
    payload: InvoiceSequenceUpdate,
    db: Session = Depends(get_db),
) -> InvoiceSequenceRead:
    return sequences_service.set_counter(
        db, store_id, invoice_type_code, payload.current_number
    )


@router.post("/{invoice_type_code}/reconcile", response_model=SequenceReconcileRead)
def reconcile(
    store_id: int,
    invoice_type_code: str,
    payload: SequenceReconcile,
    db: Session = Depends(get_db),
) -> SequenceReconcileRead:
    current, advanced = sales_service.reconcile_counter(
        db, store_id, invoice_type_code, payload.local_number
    )
    return SequenceReconcileRead(
        invoice_type_id=invoice_type_code, current_number=current, advanced=advanced
    )
