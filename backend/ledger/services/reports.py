"""Read-only analytics over the ledger store.

Nothing here writes. Money values are
``quantity * unit_price`` summed over receipts and returned as Decimal.
"""

import datetime
import logging
from decimal import Decimal
from typing import Any

from sqlalchemy import extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.core.exceptions import NotFound
from ledger.models.material import Material
from ledger.models.receipt import Receipt
from ledger.models.supplier import Supplier
from ledger.repositories.supplier_repository import SupplierRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _amount():
    return Receipt.quantity * Receipt.unit_price


def _decimal(value: Any) -> Decimal:
    """Normalise driver output (Decimal, float or None) to Decimal."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class ReportService:
    """Analytical queries over suppliers, catalog and receipts."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def supplier_name_by_tax_id(self, tax_id: str) -> str:
        """Name of the supplier with this tax id.

        Raises:
            NotFound: If no supplier has the tax id
        """
        supplier = await SupplierRepository(self.session).get_by_tax_id(tax_id)
        if supplier is None:
            raise NotFound(f"Supplier with tax id {tax_id} not found")
        return supplier.name

    async def suppliers_by_bank_city(self, city: str) -> list[dict[str, Any]]:
        """Suppliers served by the bank in ``city``."""
        result = await self.session.execute(
            select(Supplier.name, Supplier.tax_id)
            .where(Supplier.bank_address_city == city)
            .order_by(Supplier.supplier_id)
        )
        return [{"name": row.name, "tax_id": row.tax_id} for row in result]

    async def supplier_count_per_bank(self) -> list[dict[str, Any]]:
        """How many suppliers each bank serves, busiest bank first."""
        supplier_count = func.count(Supplier.supplier_id).label("supplier_count")
        result = await self.session.execute(
            select(Supplier.bank_address_city, supplier_count)
            .where(Supplier.bank_address_city.is_not(None))
            .group_by(Supplier.bank_address_city)
            .order_by(supplier_count.desc(), Supplier.bank_address_city)
        )
        return [
            {"bank_address_city": row.bank_address_city, "supplier_count": row.supplier_count}
            for row in result
        ]

    async def materials_by_group(self, group_code: str) -> list[dict[str, Any]]:
        """Assortment of one material group."""
        result = await self.session.execute(
            select(Material.material_name, Material.class_code)
            .where(Material.group_code == group_code)
            .order_by(Material.material_id)
        )
        return [
            {"material_name": row.material_name, "class_code": row.class_code}
            for row in result
        ]

    async def total_spent(self, start: datetime.date, end: datetime.date) -> Decimal:
        """Money paid for receipts dated within [start, end]."""
        result = await self.session.execute(
            select(func.sum(_amount())).where(Receipt.date.between(start, end))
        )
        return _decimal(result.scalar_one())

    async def stock_value(self) -> list[dict[str, Any]]:
        """Received quantity and its value per material, most valuable first."""
        total_quantity = func.sum(Receipt.quantity).label("total_quantity")
        total_value = func.sum(_amount()).label("total_value")
        result = await self.session.execute(
            select(Material.material_name, total_quantity, total_value)
            .select_from(Receipt)
            .join(Material, Receipt.material_id == Material.material_id)
            .group_by(Material.material_name)
            .order_by(total_value.desc())
        )
        return [
            {
                "material_name": row.material_name,
                "total_quantity": _decimal(row.total_quantity),
                "total_value": _decimal(row.total_value),
            }
            for row in result
        ]

    async def supplier_share(self, supplier_id: int, group_code: str) -> float | None:
        """Fraction of a material group's receipt value that came from one supplier.

        Returns None when nothing was received in the group.
        """
        group_query = (
            select(func.sum(_amount()))
            .select_from(Receipt)
            .join(Material, Receipt.material_id == Material.material_id)
            .where(Material.group_code == group_code)
        )
        group_total = _decimal((await self.session.execute(group_query)).scalar_one())
        if group_total == ZERO:
            logger.debug(f"No receipts in group {group_code}, share undefined")
            return None

        supplier_total = _decimal(
            (
                await self.session.execute(group_query.where(Receipt.supplier_id == supplier_id))
            ).scalar_one()
        )
        return float(supplier_total / group_total)

    async def monthly_load(self, year: int) -> list[dict[str, Any]]:
        """Receipt value per month of ``year``; months without receipts are omitted."""
        month = extract("month", Receipt.date).label("month")
        monthly_value = func.sum(_amount()).label("monthly_value")
        result = await self.session.execute(
            select(month, monthly_value)
            .where(extract("year", Receipt.date) == year)
            .group_by(month)
            .order_by(month)
        )
        return [
            {"month": int(row.month), "monthly_value": _decimal(row.monthly_value)}
            for row in result
        ]

    async def order_bank_info(self, order_number: int) -> dict[str, Any]:
        """The paying bank and amount of one receipt.

        Raises:
            NotFound: If the receipt does not exist or has no supplier
        """
        result = await self.session.execute(
            select(Supplier.bank_address_city, _amount().label("total_amount"))
            .select_from(Receipt)
            .join(Supplier, Receipt.supplier_id == Supplier.supplier_id)
            .where(Receipt.order_number == order_number)
        )
        row = result.one_or_none()
        if row is None:
            raise NotFound(f"Order {order_number} not found")
        return {
            "bank_address_city": row.bank_address_city,
            "total_amount": _decimal(row.total_amount),
        }
