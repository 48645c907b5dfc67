"""Tests for the read-only ReportService over the reference data."""

from datetime import date

import pytest

from ledger.core.exceptions import NotFound
from ledger.repositories.receipt_repository import ReceiptRepository
from ledger.repositories.supplier_repository import SupplierRepository
from ledger.services.reports import ReportService


@pytest.mark.asyncio
async def test_supplier_name_by_tax_id(seeded_session):
    reports = ReportService(seeded_session)

    assert await reports.supplier_name_by_tax_id("7701001001") == 'ООО "СтройМастер"'
    with pytest.raises(NotFound):
        await reports.supplier_name_by_tax_id("0000000000")


@pytest.mark.asyncio
async def test_suppliers_by_bank_city_and_counts(seeded_session):
    suppliers = SupplierRepository(seeded_session)
    await suppliers.update(1, bank_address_city="Москва")
    await suppliers.update(2, bank_address_city="Москва")
    await suppliers.update(3, bank_address_city="Казань")
    reports = ReportService(seeded_session)

    served = await reports.suppliers_by_bank_city("Москва")
    assert served == [
        {"name": 'ООО "СтройМастер"', "tax_id": "7701001001"},
        {"name": 'АО "МеталлСнаб"', "tax_id": "5002002002"},
    ]
    assert await reports.supplier_count_per_bank() == [
        {"bank_address_city": "Москва", "supplier_count": 2},
        {"bank_address_city": "Казань", "supplier_count": 1},
    ]


@pytest.mark.asyncio
async def test_bank_counts_skip_missing_city(seeded_session):
    assert await ReportService(seeded_session).supplier_count_per_bank() == []


@pytest.mark.asyncio
async def test_materials_by_group(seeded_session):
    reports = ReportService(seeded_session)

    assert await reports.materials_by_group("ARM") == [
        {"material_name": "Арматура строительная d12", "class_code": "METALL"}
    ]
    assert await reports.materials_by_group("NONE") == []


@pytest.mark.asyncio
async def test_total_spent(seeded_session):
    reports = ReportService(seeded_session)

    first_week = await reports.total_spent(date(2025, 11, 1), date(2025, 11, 5))
    assert float(first_week) == pytest.approx(275250.0 + 412500.0)

    november = await reports.total_spent(date(2025, 11, 1), date(2025, 11, 30))
    assert float(november) == pytest.approx(801990.0)

    assert await reports.total_spent(date(2024, 1, 1), date(2024, 12, 31)) == 0


@pytest.mark.asyncio
async def test_stock_value(seeded_session):
    stock = await ReportService(seeded_session).stock_value()

    assert [row["material_name"] for row in stock] == [
        "Арматура строительная d12",
        "Краска акриловая белая",
        "Кабель ВВГ-Пнг(А)-LS 3x2.5",
    ]
    assert float(stock[0]["total_quantity"]) == pytest.approx(5.5)
    assert float(stock[0]["total_value"]) == pytest.approx(412500.0)
    assert float(stock[2]["total_value"]) == pytest.approx(114240.0)


@pytest.mark.asyncio
async def test_supplier_share(seeded_session):
    receipts = ReceiptRepository(seeded_session)
    # A second delivery of reinforcement bar, from supplier 1
    await receipts.record(
        date=date(2025, 11, 12),
        supplier_id=1,
        material_id=7,
        unit_of_measure_code="тонны",
        quantity="5.5",
        unit_price="25000",
    )
    reports = ReportService(seeded_session)

    assert await reports.supplier_share(2, "ARM") == pytest.approx(0.75)
    assert await reports.supplier_share(1, "ARM") == pytest.approx(0.25)
    assert await reports.supplier_share(3, "ARM") == pytest.approx(0.0)
    assert await reports.supplier_share(1, "BRUS") is None


@pytest.mark.asyncio
async def test_monthly_load(seeded_session):
    await ReceiptRepository(seeded_session).record(
        date=date(2025, 12, 3),
        material_id=8,
        unit_of_measure_code="метры",
        quantity=100,
        unit_price=100,
    )
    reports = ReportService(seeded_session)

    load = await reports.monthly_load(2025)
    assert [row["month"] for row in load] == [11, 12]
    assert float(load[0]["monthly_value"]) == pytest.approx(801990.0)
    assert float(load[1]["monthly_value"]) == pytest.approx(10000.0)
    assert await reports.monthly_load(2024) == []


@pytest.mark.asyncio
async def test_order_bank_info(seeded_session):
    await SupplierRepository(seeded_session).update(2, bank_address_city="Санкт-Петербург")
    reports = ReportService(seeded_session)

    info = await reports.order_bank_info(5)
    assert info["bank_address_city"] == "Санкт-Петербург"
    assert float(info["total_amount"]) == pytest.approx(412500.0)

    with pytest.raises(NotFound):
        await reports.order_bank_info(99)
