"""Invoice sequence allocation.

One counter row per (store, invoice type). Every write is a single
``UPDATE ... RETURNING`` so concurrent cashiers never read the same value,
and validation that depends on the sales history runs inside the same
transaction as the write it guards.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import case, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..models import InvoiceSequence, InvoiceType, Sale, Store
from ..models.base import utcnow
from .exceptions import (
    ConcurrencyConflict,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .invoice_numbers import extract_numeric_suffix, format_invoice_number

logger = logging.getLogger(__name__)


@dataclass
class SequenceAudit:
    invoice_type_id: str
    current_number: int
    max_historical: int
    behind: bool
    repaired: bool = False


def _pair(store_id: int, invoice_type_code: str) -> tuple:
    return (
        InvoiceSequence.store_id == store_id,
        InvoiceSequence.invoice_type_id == invoice_type_code,
    )


def _not_found(store_id: int, invoice_type_code: str) -> NotFoundError:
    return NotFoundError(
        f"No invoice sequence for type {invoice_type_code} in store {store_id}."
    )


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Invoice sequence %s failed on commit", action)
        raise PersistenceError(f"Could not save invoice sequence ({action}).") from exc


def get_sequence(
    db: Session, store_id: int, invoice_type_code: str
) -> InvoiceSequence:
    sequence = db.execute(
        select(InvoiceSequence).where(*_pair(store_id, invoice_type_code))
    ).scalar_one_or_none()
    if sequence is None:
        raise _not_found(store_id, invoice_type_code)
    return sequence


def list_sequences(db: Session, store_id: int) -> list[InvoiceSequence]:
    return list(
        db.scalars(
            select(InvoiceSequence)
            .where(InvoiceSequence.store_id == store_id)
            .order_by(InvoiceSequence.invoice_type_id)
        )
    )


def peek_next(db: Session, store_id: int, invoice_type_code: str) -> str:
    """Number the next sale of this type would get. Does not write."""
    current = db.execute(
        select(InvoiceSequence.current_number).where(
            *_pair(store_id, invoice_type_code)
        )
    ).scalar_one_or_none()
    if current is None:
        raise _not_found(store_id, invoice_type_code)
    return format_invoice_number(invoice_type_code, current + 1)


def issue_next(
    db: Session, store_id: int, invoice_type_code: str, *, commit: bool = True
) -> str:
    """Increment the counter and return the formatted new number.

    With ``commit=False`` the increment stays in the caller's transaction and
    is undone if the caller rolls back.
    """
    stmt = (
        update(InvoiceSequence)
        .where(*_pair(store_id, invoice_type_code))
        .values(
            current_number=InvoiceSequence.current_number + 1,
            updated_at=utcnow(),
        )
        .returning(InvoiceSequence.current_number)
        .execution_options(synchronize_session=False)
    )
    try:
        number = db.execute(stmt).scalar_one_or_none()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(
            "Issuing invoice number failed store=%s type=%s",
            store_id,
            invoice_type_code,
        )
        raise PersistenceError("Could not issue an invoice number.") from exc

    if number is None:
        if commit:
            db.rollback()
        raise _not_found(store_id, invoice_type_code)

    if commit:
        _commit(db, "issue")
    formatted = format_invoice_number(invoice_type_code, number)
    logger.info("Issued invoice number %s for store %s", formatted, store_id)
    return formatted


def max_historical_number(db: Session, store_id: int, invoice_type_code: str) -> int:
    """Highest numeric suffix among the store's sales of this type, or 0."""
    numbers = db.scalars(
        select(Sale.invoice_number).where(
            Sale.store_id == store_id, Sale.invoice_type_id == invoice_type_code
        )
    )
    highest = 0
    for invoice_number in numbers:
        value = extract_numeric_suffix(invoice_number)
        if value is not None and value > highest:
            highest = value
    return highest


def max_issued_numbers(db: Session, store_id: int) -> dict[str, int]:
    rows = db.execute(
        select(Sale.invoice_type_id, Sale.invoice_number).where(
            Sale.store_id == store_id
        )
    ).all()
    highest: dict[str, int] = {}
    for invoice_type_id, invoice_number in rows:
        value = extract_numeric_suffix(invoice_number)
        if value is None:
            continue
        if value > highest.get(invoice_type_id, 0):
            highest[invoice_type_id] = value
    return highest


def set_counter(
    db: Session, store_id: int, invoice_type_code: str, current_number: int
) -> InvoiceSequence:
    """Administrative override of the last issued number.

    The new value is written first and the history is scanned while the row
    is locked; a value below the highest issued number is rolled back.
    """
    if current_number < 0:
        raise ValidationError("Invoice sequence number cannot be negative.")

    stmt = (
        update(InvoiceSequence)
        .where(*_pair(store_id, invoice_type_code))
        .values(current_number=current_number, updated_at=utcnow())
        .returning(InvoiceSequence.id)
        .execution_options(synchronize_session=False)
    )
    try:
        sequence_id = db.execute(stmt).scalar_one_or_none()
        if sequence_id is None:
            db.rollback()
            raise _not_found(store_id, invoice_type_code)
        max_historical = max_historical_number(db, store_id, invoice_type_code)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Setting invoice sequence failed")
        raise PersistenceError("Could not update the invoice sequence.") from exc

    if current_number < max_historical:
        db.rollback()
        logger.warning(
            "Rejected sequence override store=%s type=%s value=%s max=%s",
            store_id,
            invoice_type_code,
            current_number,
            max_historical,
        )
        raise ValidationError(
            f"Cannot set next number below {max_historical + 1}. Invoices "
            "already exist up to "
            f"{format_invoice_number(invoice_type_code, max_historical)}."
        )

    _commit(db, "override")
    sequence = db.get(InvoiceSequence, sequence_id, populate_existing=True)
    logger.info(
        "Invoice sequence %s for store %s set to %s",
        invoice_type_code,
        store_id,
        current_number,
    )
    return sequence


def advance_to(
    db: Session,
    store_id: int,
    invoice_type_code: str,
    number: int,
    *,
    commit: bool = True,
) -> int:
    """Raise the counter to ``number`` if it is behind. Never lowers it."""
    if number < 0:
        raise ValidationError("Invoice sequence number cannot be negative.")
    stmt = (
        update(InvoiceSequence)
        .where(*_pair(store_id, invoice_type_code))
        .values(
            current_number=case(
                (InvoiceSequence.current_number < number, number),
                else_=InvoiceSequence.current_number,
            ),
            updated_at=utcnow(),
        )
        .returning(InvoiceSequence.current_number)
        .execution_options(synchronize_session=False)
    )
    try:
        current = db.execute(stmt).scalar_one_or_none()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Advancing invoice sequence failed")
        raise PersistenceError("Could not advance the invoice sequence.") from exc

    if current is None:
        if commit:
            db.rollback()
        raise _not_found(store_id, invoice_type_code)
    if commit:
        _commit(db, "advance")
    return current


def audit_store(
    db: Session, store_id: int, repair: bool = False
) -> list[SequenceAudit]:
    """Compare every counter of a store against its sales history."""
    highest = max_issued_numbers(db, store_id)
    report: list[SequenceAudit] = []
    for sequence in list_sequences(db, store_id):
        max_historical = highest.get(sequence.invoice_type_id, 0)
        report.append(
            SequenceAudit(
                invoice_type_id=sequence.invoice_type_id,
                current_number=sequence.current_number,
                max_historical=max_historical,
                behind=sequence.current_number < max_historical,
            )
        )

    lagging = [entry for entry in report if entry.behind]
    for entry in lagging:
        logger.warning(
            "Invoice sequence %s for store %s is behind history (%s < %s)",
            entry.invoice_type_id,
            store_id,
            entry.current_number,
            entry.max_historical,
        )
    if repair and lagging:
        for entry in lagging:
            entry.current_number = advance_to(
                db,
                store_id,
                entry.invoice_type_id,
                entry.max_historical,
                commit=False,
            )
            entry.repaired = True
        _commit(db, "repair")
    return report


def provision_store(
    db: Session,
    store_id: int,
    invoice_type_codes: list[str] | None = None,
    initial_number: int = 0,
) -> list[InvoiceSequence]:
    """Create the missing counters for a store. Existing rows are untouched."""
    if initial_number < 0:
        raise ValidationError("Invoice sequence number cannot be negative.")
    if db.get(Store, store_id) is None:
        raise NotFoundError(f"Store {store_id} not found.")

    codes = list(dict.fromkeys(invoice_type_codes or settings.default_invoice_types))
    known = set(
        db.scalars(select(InvoiceType.code).where(InvoiceType.code.in_(codes)))
    )
    unknown = [code for code in codes if code not in known]
    if unknown:
        raise ValidationError(f"Unknown invoice types: {', '.join(unknown)}.")

    existing = {sequence.invoice_type_id for sequence in list_sequences(db, store_id)}
    created = 0
    for code in codes:
        if code in existing:
            continue
        db.add(
            InvoiceSequence(
                store_id=store_id,
                invoice_type_id=code,
                current_number=initial_number,
            )
        )
        created += 1

    if created:
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise ConcurrencyConflict(
                f"Invoice sequences for store {store_id} were provisioned concurrently."
            ) from exc
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Provisioning invoice sequences failed")
            raise PersistenceError("Could not provision invoice sequences.") from exc
        logger.info("Provisioned %s invoice sequences for store %s", created, store_id)
    return list_sequences(db, store_id)
