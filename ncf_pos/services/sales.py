"""Sale recording.

Online sales take their number from the store counter inside the same
transaction as the insert. Sales made on a disconnected terminal arrive
already numbered and push the counter forward instead.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Sale
from ..models.base import utcnow
from ..schemas import OfflineSaleCreate, SaleCreate
from . import invoice_sequences
from .exceptions import (
    ConcurrencyConflict,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .invoice_numbers import format_invoice_number, split_invoice_number

logger = logging.getLogger(__name__)


@dataclass
class OfflineSyncResult:
    sale: Sale
    created: bool
    current_number: int


def _decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def _money(value) -> Decimal:
    return _decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _totals(payload: SaleCreate) -> dict[str, Decimal]:
    subtotal = _money(payload.subtotal)
    discount_total = _money(payload.discount_total)
    tax_total = _money(payload.tax_total)
    if discount_total > subtotal:
        raise ValidationError("Discount cannot exceed the subtotal.")
    return {
        "subtotal": subtotal,
        "discount_total": discount_total,
        "tax_total": tax_total,
        "total": _money(subtotal - discount_total + tax_total),
    }


def _sale_kwargs(store_id: int, payload: SaleCreate) -> dict:
    return {
        "store_id": store_id,
        "invoice_type_id": payload.invoice_type_id,
        "customer_id": payload.customer_id,
        "payment_method": payload.payment_method,
        "payment_status": payload.payment_status,
        **_totals(payload),
    }


def _same_sale(existing: Sale, values: dict, payload: OfflineSaleCreate) -> bool:
    fields = (
        "invoice_type_id",
        "customer_id",
        "subtotal",
        "discount_total",
        "tax_total",
        "total",
        "payment_method",
    )
    if any(getattr(existing, field) != values[field] for field in fields):
        return False
    if payload.created_at is not None:
        return existing.created_at == _naive_utc(payload.created_at)
    return True


def get_sale(db: Session, store_id: int, sale_id: int) -> Sale:
    sale = db.get(Sale, sale_id)
    if sale is None or sale.store_id != store_id:
        raise NotFoundError(f"Sale {sale_id} not found.")
    return sale


def list_sales(
    db: Session, store_id: int, invoice_type_code: str | None = None
) -> list[Sale]:
    query = select(Sale).where(Sale.store_id == store_id)
    if invoice_type_code:
        query = query.where(Sale.invoice_type_id == invoice_type_code)
    return list(db.scalars(query.order_by(Sale.created_at.desc(), Sale.id.desc())))


def create_sale(db: Session, store_id: int, payload: SaleCreate) -> Sale:
    """Issue the next invoice number and record the sale atomically.

    Nothing is persisted unless both the counter increment and the insert
    succeed, so a failed sale never consumes a number.
    """
    values = _sale_kwargs(store_id, payload)
    try:
        invoice_number = invoice_sequences.issue_next(
            db, store_id, payload.invoice_type_id, commit=False
        )
    except NotFoundError:
        db.rollback()
        raise
    sale = Sale(invoice_number=invoice_number, **values)
    try:
        db.add(sale)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(
            "Invoice number %s already used in store %s", invoice_number, store_id
        )
        raise ConcurrencyConflict(
            f"Invoice number {invoice_number} is already in use; retry the sale."
        ) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Sale creation failed store=%s", store_id)
        raise PersistenceError("Could not save the sale.") from exc

    db.refresh(sale)
    logger.info("Sale %s recorded as %s", sale.id, invoice_number)
    return sale


def record_offline_sale(
    db: Session, store_id: int, payload: OfflineSaleCreate
) -> OfflineSyncResult:
    """Accept a sale numbered on a disconnected terminal.

    Re-sending an already synced sale is a no-op. A different sale under a
    number the store already used is a conflict; the terminal must renumber.
    """
    parsed = split_invoice_number(payload.invoice_number)
    if parsed is None:
        raise ValidationError(
            f"Invoice number {payload.invoice_number!r} has no numeric suffix."
        )
    prefix, number = parsed
    if prefix != payload.invoice_type_id:
        raise ValidationError(
            f"Invoice number {payload.invoice_number} does not belong to type "
            f"{payload.invoice_type_id}."
        )
    if payload.invoice_number != format_invoice_number(prefix, number):
        raise ValidationError(
            f"Invoice number {payload.invoice_number!r} is not in canonical form "
            f"{format_invoice_number(prefix, number)}."
        )
    values = _sale_kwargs(store_id, payload)

    existing = db.execute(
        select(Sale).where(
            Sale.store_id == store_id, Sale.invoice_number == payload.invoice_number
        )
    ).scalar_one_or_none()
    if existing is not None:
        if not _same_sale(existing, values, payload):
            logger.warning(
                "Offline sale %s collides with sale %s in store %s",
                payload.invoice_number,
                existing.id,
                store_id,
            )
            raise ConcurrencyConflict(
                f"Invoice number {payload.invoice_number} already belongs to "
                "another sale; renumber the offline sale."
            )
        logger.info(
            "Offline sale %s already synced for store %s",
            payload.invoice_number,
            store_id,
        )
        current = invoice_sequences.get_sequence(
            db, store_id, payload.invoice_type_id
        ).current_number
        return OfflineSyncResult(sale=existing, created=False, current_number=current)

    try:
        current = invoice_sequences.advance_to(
            db, store_id, payload.invoice_type_id, number, commit=False
        )
    except NotFoundError:
        db.rollback()
        raise
    sale = Sale(
        invoice_number=payload.invoice_number,
        synced_at=utcnow(),
        **values,
    )
    if payload.created_at is not None:
        sale.created_at = _naive_utc(payload.created_at)
    try:
        db.add(sale)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConcurrencyConflict(
            f"Invoice number {payload.invoice_number} was synced concurrently; "
            "retry the sync."
        ) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Offline sale sync failed store=%s", store_id)
        raise PersistenceError("Could not save the offline sale.") from exc

    db.refresh(sale)
    logger.info(
        "Offline sale %s synced for store %s, sequence at %s",
        sale.invoice_number,
        store_id,
        current,
    )
    return OfflineSyncResult(sale=sale, created=True, current_number=current)


def reconcile_counter(
    db: Session, store_id: int, invoice_type_code: str, local_number: int
) -> tuple[int, bool]:
    """Bring the server counter up to a terminal's local counter.

    Returns the authoritative counter value and whether it moved. The
    terminal adopts the returned value when the server is ahead.
    """
    before = invoice_sequences.get_sequence(
        db, store_id, invoice_type_code
    ).current_number
    current = invoice_sequences.advance_to(
        db, store_id, invoice_type_code, local_number
    )
    advanced = current > before
    if advanced:
        logger.info(
            "Sequence %s for store %s advanced from %s to %s by terminal",
            invoice_type_code,
            store_id,
            before,
            current,
        )
    return current, advanced
