from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import OfflineSaleCreate, OfflineSaleSyncRead, SaleCreate, SaleRead
from ..services import sales as sales_service

router = APIRouter(prefix="/stores/{store_id}/sales")


@router.get("", response_model=list[SaleRead])
def list_sales(
    store_id: int,
    invoice_type: str | None = None,
    db: Session = Depends(get_db),
) -> list[SaleRead]:
    return sales_service.list_sales(db, store_id, invoice_type)


@router.post("", response_model=SaleRead, status_code=201)
def create_sale(
    store_id: int, payload: SaleCreate, db: Session = Depends(get_db)
) -> SaleRead:
    return sales_service.create_sale(db, store_id, payload)


@router.post("/sync", response_model=OfflineSaleSyncRead)
def sync_offline_sale(
    store_id: int, payload: OfflineSaleCreate, db: Session = Depends(get_db)
) -> OfflineSaleSyncRead:
    result = sales_service.record_offline_sale(db, store_id, payload)
    return OfflineSaleSyncRead(
        sale=SaleRead.model_validate(result.sale),
        created=result.created,
        current_number=result.current_number,
    )


@router.get("/{sale_id}", response_model=SaleRead)
def get_sale(store_id: int, sale_id: int, db: Session = Depends(get_db)) -> SaleRead:
    return sales_service.get_sale(db, store_id, sale_id)
