import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Store
from . import invoice_sequences
from .exceptions import NotFoundError, PersistenceError, ServiceError, ValidationError

logger = logging.getLogger(__name__)


def get_store(db: Session, store_id: int) -> Store:
    store = db.get(Store, store_id)
    if store is None:
        raise NotFoundError(f"Store {store_id} not found.")
    return store


def create_store(
    db: Session,
    name: str,
    invoice_type_codes: list[str] | None = None,
    initial_number: int = 0,
) -> Store:
    """Register a store together with its invoice counters.

    The store row is only flushed until the counters are in place, so a
    rejected type list leaves no store behind.
    """
    name = name.strip()
    if not name:
        raise ValidationError("Store name is required.")

    store = Store(name=name)
    db.add(store)
    try:
        db.flush()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Creating store failed")
        raise PersistenceError("Could not create the store.") from exc

    try:
        invoice_sequences.provision_store(
            db, store.id, invoice_type_codes, initial_number
        )
    except ServiceError:
        db.rollback()
        raise
    logger.info("Created store %s (%s)", store.id, name)
    return store
