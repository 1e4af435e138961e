from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Store
from ..schemas import InvoiceSequenceRead, StoreCreate, StoreRead
from ..services import invoice_sequences as sequences_service
from ..services import stores as stores_service

router = APIRouter(prefix="/stores")


def _store_read(db: Session, store: Store) -> StoreRead:
    return StoreRead(
        id=store.id,
        name=store.name,
        created_at=store.created_at,
        invoice_sequences=[
            InvoiceSequenceRead.model_validate(sequence)
            for sequence in sequences_service.list_sequences(db, store.id)
        ],
    )


@router.post("", response_model=StoreRead, status_code=201)
def create_store(payload: StoreCreate, db: Session = Depends(get_db)) -> StoreRead:
    store = stores_service.create_store(
        db, payload.name, payload.invoice_type_codes, payload.initial_number
    )
    return _store_read(db, store)


@router.get("/{store_id}", response_model=StoreRead)
def get_store(store_id: int, db: Session = Depends(get_db)) -> StoreRead:
    return _store_read(db, stores_service.get_store(db, store_id))
