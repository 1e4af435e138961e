from __future__ import annotations

from .db import SessionLocal
from .models import InvoiceType


SEED_INVOICE_TYPES = [
    {
        "code": "B01",
        "name": "Crédito Fiscal",
        "description": "Facturas con valor fiscal",
    },
    {
        "code": "B02",
        "name": "Consumo",
        "description": "Facturas de consumidor final",
    },
    {"code": "B14", "name": "Regímenes Especiales", "description": None},
    {"code": "B15", "name": "Gubernamental", "description": None},
]


def seed_invoice_types(session_factory=SessionLocal) -> int:
    created = 0
    with session_factory() as session:
        for entry in SEED_INVOICE_TYPES:
            exists = session.get(InvoiceType, entry["code"])
            if exists:
                continue
            session.add(InvoiceType(**entry))
            created += 1
        if created:
            session.commit()
    return created


def main() -> None:
    created = seed_invoice_types()
    print(f"Seeded invoice types: {created}")


if __name__ == "__main__":
    main()
