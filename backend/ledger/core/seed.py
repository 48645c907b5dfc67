"""Reference data for the ledger store.

The rows below are the catalog, suppliers, units and receipts the store
ships with. Ids are fixed so receipts can reference them; afterwards the
id counters are moved past the highest seeded id.
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.models.material import Material, UnitOfMeasure
from ledger.models.receipt import Receipt
from ledger.models.supplier import Supplier

logger = logging.getLogger(__name__)


MATERIAL_SEED = [
    {"material_id": 5, "class_code": "LKM", "group_code": "KRASK", "material_name": "Краска акриловая белая"},
    {"material_id": 6, "class_code": "DEREV", "group_code": "BRUS", "material_name": "Брус сосновый 50x50x3000"},
    {"material_id": 7, "class_code": "METALL", "group_code": "ARM", "material_name": "Арматура строительная d12"},
    {"material_id": 8, "class_code": "ELEKTR", "group_code": "KAB", "material_name": "Кабель ВВГ-Пнг(А)-LS 3x2.5"},
]

UNIT_SEED = [
    (5, "литры"),
    (6, "штуки"),
    (6, "метры"),
    (7, "тонны"),
    (7, "метры"),
    (8, "метры"),
]

SUPPLIER_SEED = [
    {
        "supplier_id": 1,
        "name": 'ООО "СтройМастер"',
        "tax_id": "7701001001",
        "legal_address_city": "Москва",
        "legal_address_street": "ул. Ленина, д. 10",
        "bank_account_number": "40702810100000001001",
    },
    {
        "supplier_id": 2,
        "name": 'АО "МеталлСнаб"',
        "tax_id": "5002002002",
        "legal_address_city": "Санкт-Петербург",
        "legal_address_street": "Невский пр-т, д. 5",
        "bank_account_number": "40702810200000002002",
    },
    {
        "supplier_id": 3,
        "name": "ИП Иванов А.В.",
        "tax_id": "2703003003",
        "legal_address_city": "Казань",
        "legal_address_street": "ул. Пушкина, д. 1",
        "bank_account_number": "40702810300000003003",
    },
]

RECEIPT_SEED = [
    {
        "order_number": 4,
        "date": date(2025, 11, 1),
        "supplier_id": 1,
        "document_code": "ПРИХ1",
        "document_number": "125",
        "material_id": 5,
        "material_account": "10.01",
        "unit_of_measure_code": "литры",
        "quantity": Decimal("500.000"),
        "unit_price": Decimal("550.50"),
    },
    {
        "order_number": 5,
        "date": date(2025, 11, 5),
        "supplier_id": 2,
        "document_code": "ПРИХ2",
        "document_number": "0098",
        "material_id": 7,
        "material_account": "10.02",
        "unit_of_measure_code": "тонны",
        "quantity": Decimal("5.500"),
        "unit_price": Decimal("75000.00"),
    },
    {
        "order_number": 6,
        "date": date(2025, 11, 10),
        "supplier_id": 3,
        "document_code": "ПРИХ3",
        "document_number": "10/11",
        "material_id": 8,
        "material_account": "10.01",
        "unit_of_measure_code": "метры",
        "quantity": Decimal("1200.000"),
        "unit_price": Decimal("95.20"),
    },
]

# Last value handed out by each PostgreSQL sequence after seeding
SEQUENCE_SEED = {
    "material_catalog_material_id_seq": 8,
    "storage_units_order_number_seq": 6,
    "suppliers_supplier_id_seq": 3,
}


async def seed_reference_data(session: AsyncSession) -> dict[str, int]:
    """Load the reference rows into an empty store.

    Does nothing when the catalog already has materials.

    Returns:
        Number of rows inserted per table
    """
    existing = await session.execute(select(func.count()).select_from(Material))
    if existing.scalar_one():
        logger.info("Material catalog is not empty, skipping seed")
        return {"materials": 0, "units": 0, "suppliers": 0, "receipts": 0}

    session.add_all(Material(**row) for row in MATERIAL_SEED)
    session.add_all(Supplier(**row) for row in SUPPLIER_SEED)
    await session.flush()
    session.add_all(
        UnitOfMeasure(material_id=material_id, unit_name=unit_name)
        for material_id, unit_name in UNIT_SEED
    )
    await session.flush()
    session.add_all(Receipt(**row) for row in RECEIPT_SEED)
    await session.flush()

    # Explicit ids do not advance PostgreSQL sequences; SQLite's
    # AUTOINCREMENT table is updated by the inserts themselves.
    if session.bind.dialect.name == "postgresql":
        for sequence, value in SEQUENCE_SEED.items():
            await session.execute(
                text("SELECT pg_catalog.setval(CAST(CAST(:seq AS TEXT) AS regclass), :value, true)"),
                {"seq": f"public.{sequence}", "value": value},
            )

    await session.commit()
    session.expunge_all()

    stats = {
        "materials": len(MATERIAL_SEED),
        "units": len(UNIT_SEED),
        "suppliers": len(SUPPLIER_SEED),
        "receipts": len(RECEIPT_SEED),
    }
    logger.info(f"Seeded reference data: {stats}")
    return stats
