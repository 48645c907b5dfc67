"""REST API endpoints for read-only reports.

Paths are kept as the reporting clients already call them.
"""

import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.core.database import get_db
from ledger.schemas.report import (
    BankSupplierCount,
    InventoryValue,
    MaterialAssortment,
    MonthlyLoad,
    OrderBankInfo,
    SupplierBankInfo,
    SupplierName,
    SupplierShare,
    TotalAmount,
)
from ledger.services.reports import ReportService

router = APIRouter(prefix="/api", tags=["reports"])


@router.get("/suppliers/by-tax/{tax_id}", response_model=SupplierName)
async def get_supplier_name_by_tax(tax_id: str, db: AsyncSession = Depends(get_db)):
    name = await ReportService(db).supplier_name_by_tax_id(tax_id)
    return SupplierName(name=name)


@router.get("/suppliers/by-bank-city/{city}", response_model=list[SupplierBankInfo])
async def get_suppliers_by_bank_city(city: str, db: AsyncSession = Depends(get_db)):
    return await ReportService(db).suppliers_by_bank_city(city)


@router.get("/analytics/bank-supplier-count", response_model=list[BankSupplierCount])
async def get_suppliers_per_bank(db: AsyncSession = Depends(get_db)):
    return await ReportService(db).supplier_count_per_bank()


@router.get("/materials/by-group/{group_code}", response_model=list[MaterialAssortment])
async def get_materials_by_group(group_code: str, db: AsyncSession = Depends(get_db)):
    return await ReportService(db).materials_by_group(group_code)


@router.get("/finance/total-spent", response_model=TotalAmount)
async def get_total_spent_by_period(
    start: datetime.date,
    end: datetime.date,
    db: AsyncSession = Depends(get_db),
):
    total = await ReportService(db).total_spent(start, end)
    return TotalAmount(total_amount=float(total))


@router.get("/inventory/stock-value", response_model=list[InventoryValue])
async def get_current_inventory_value(db: AsyncSession = Depends(get_db)):
    return await ReportService(db).stock_value()


@router.get(
    "/analytics/supplier-share/{supplier_id}/{group_code}",
    response_model=SupplierShare,
)
async def get_supplier_share(
    supplier_id: int, group_code: str, db: AsyncSession = Depends(get_db)
):
    share = await ReportService(db).supplier_share(supplier_id, group_code)
    return SupplierShare(supplier_share=share)


@router.get("/inventory/monthly-load/{year}", response_model=list[MonthlyLoad])
async def get_monthly_load(year: int, db: AsyncSession = Depends(get_db)):
    return await ReportService(db).monthly_load(year)


@router.get("/orders/{order_number}/bank-info", response_model=OrderBankInfo)
async def get_bank_info_by_order(order_number: int, db: AsyncSession = Depends(get_db)):
    return await ReportService(db).order_bank_info(order_number)
