"""Repository for stock receipts (the ``storage_units`` table)."""

import datetime
import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, List, Optional

from sqlalchemy import delete, select

from ledger.core.exceptions import ConstraintViolation, NotFound
from ledger.models.material import Material, UnitOfMeasure
from ledger.models.receipt import ACCOUNTING_FIELDS, Receipt
from ledger.models.supplier import Supplier
from ledger.repositories.base import BaseRepository, clean_optional

logger = logging.getLogger(__name__)

# numeric(10,3) and numeric(10,2)
QUANTITY_EXP = Decimal("0.001")
PRICE_EXP = Decimal("0.01")
QUANTITY_LIMIT = Decimal("10") ** 7
PRICE_LIMIT = Decimal("10") ** 8


def _to_decimal(field: str, value: Any, exp: Decimal, limit: Decimal) -> Decimal:
    """Coerce to the column's scale, rounding half up like the database does."""
    if value is None:
        raise ConstraintViolation(f"{field} is required")
    if isinstance(value, bool):
        raise ConstraintViolation(f"{field} must be a number, got {value!r}")
    try:
        number = Decimal(str(value)).quantize(exp, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        raise ConstraintViolation(f"{field} must be a number, got {value!r}")
    if not number.is_finite() or abs(number) >= limit:
        raise ConstraintViolation(f"{field} is out of range: {value!r}")
    return number


class ReceiptRepository(BaseRepository):
    """Records incoming stock and reads it back.

    A receipt must name a material, a unit registered for that material
    and, if given, an existing supplier. Quantity must be positive and the
    unit price non-negative, both checked after rounding to column scale.
    """

    async def record(
        self,
        date: datetime.date,
        material_id: int,
        unit_of_measure_code: str,
        quantity: Any,
        unit_price: Any,
        supplier_id: Optional[int] = None,
        **accounting: Optional[str],
    ) -> Receipt:
        """Record a stock receipt.

        Args:
            date: Document date
            material_id: Catalog id of the received material
            unit_of_measure_code: Unit the quantity is expressed in; must be
                registered for the material
            quantity: Received amount, > 0 (numeric(10,3))
            unit_price: Price per unit, >= 0 (numeric(10,2))
            supplier_id: Delivering supplier, optional
            **accounting: balance_sheet_account, document_code,
                document_number, material_account

        Returns:
            Created Receipt with its generated order_number

        Raises:
            ConstraintViolation: Missing field, quantity <= 0, unit_price < 0
            NotFound: Unknown supplier or material, or unregistered unit pair
        """
        unknown = set(accounting) - set(ACCOUNTING_FIELDS)
        if unknown:
            self._fail(ConstraintViolation(f"Unknown receipt field(s): {', '.join(sorted(unknown))}"))
        if date is None:
            self._fail(ConstraintViolation("date is required"))
        if material_id is None:
            self._fail(ConstraintViolation("material_id is required"))
        unit_code = clean_optional(unit_of_measure_code)
        if unit_code is None:
            self._fail(ConstraintViolation("unit_of_measure_code is required"))

        try:
            qty = _to_decimal("quantity", quantity, QUANTITY_EXP, QUANTITY_LIMIT)
            price = _to_decimal("unit_price", unit_price, PRICE_EXP, PRICE_LIMIT)
        except ConstraintViolation as e:
            self._fail(e)
        if qty <= 0:
            self._fail(
                ConstraintViolation(
                    f"quantity must be greater than 0, got {qty}",
                    "storage_units_quantity_check",
                )
            )
        if price < 0:
            self._fail(
                ConstraintViolation(
                    f"unit_price must not be negative, got {price}",
                    "storage_units_unit_price_check",
                )
            )

        await self._check_references(supplier_id, material_id, unit_code)

        receipt = Receipt(
            date=date,
            supplier_id=supplier_id,
            material_id=material_id,
            unit_of_measure_code=unit_code,
            quantity=qty,
            unit_price=price,
            **{key: clean_optional(value) for key, value in accounting.items()},
        )
        self.session.add(receipt)
        await self._commit()
        await self.session.refresh(receipt)
        logger.info(
            f"Recorded receipt {receipt.order_number}: material {material_id}, "
            f"{qty} {unit_code} @ {price}"
        )
        return receipt

    async def get(self, order_number: int) -> Optional[Receipt]:
        result = await self.session.execute(
            select(Receipt).where(Receipt.order_number == order_number)
        )
        return result.scalar_one_or_none()

    async def require(self, order_number: int) -> Receipt:
        """Get a receipt by order number.

        Raises:
            NotFound: If no such receipt exists
        """
        receipt = await self.get(order_number)
        if receipt is None:
            self._fail(NotFound(f"Receipt {order_number} not found"))
        return receipt

    async def list_all(
        self,
        start: Optional[datetime.date] = None,
        end: Optional[datetime.date] = None,
    ) -> List[Receipt]:
        """List receipts ordered by order number, optionally within [start, end]."""
        query = select(Receipt).order_by(Receipt.order_number)
        if start is not None:
            query = query.where(Receipt.date >= start)
        if end is not None:
            query = query.where(Receipt.date <= end)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_for_material(self, material_id: int) -> List[Receipt]:
        result = await self.session.execute(
            select(Receipt)
            .where(Receipt.material_id == material_id)
            .order_by(Receipt.order_number)
        )
        return list(result.scalars().all())

    async def list_for_supplier(self, supplier_id: int) -> List[Receipt]:
        result = await self.session.execute(
            select(Receipt)
            .where(Receipt.supplier_id == supplier_id)
            .order_by(Receipt.order_number)
        )
        return list(result.scalars().all())

    async def delete(self, order_number: int) -> None:
        """Delete a receipt. Nothing references receipts, so this never blocks.

        Raises:
            NotFound: If the receipt does not exist
        """
        await self.require(order_number)
        await self._execute(
            delete(Receipt)
            .where(Receipt.order_number == order_number)
            .execution_options(synchronize_session=False),
            deleting=True,
        )
        await self._commit(deleting=True)
        self.session.expunge_all()
        logger.info(f"Deleted receipt {order_number}")

    async def _check_references(
        self, supplier_id: Optional[int], material_id: int, unit_code: str
    ) -> None:
        if supplier_id is not None:
            found = await self.session.execute(
                select(Supplier.supplier_id).where(Supplier.supplier_id == supplier_id)
            )
            if found.scalar_one_or_none() is None:
                self._fail(
                    NotFound(f"Supplier {supplier_id} not found", "storage_units_supplier_id_fkey")
                )

        found = await self.session.execute(
            select(Material.material_id).where(Material.material_id == material_id)
        )
        if found.scalar_one_or_none() is None:
            self._fail(
                NotFound(f"Material {material_id} not found", "storage_units_material_id_fkey")
            )

        found = await self.session.execute(
            select(UnitOfMeasure.unit_name).where(
                UnitOfMeasure.material_id == material_id,
                UnitOfMeasure.unit_name == unit_code,
            )
        )
        if found.scalar_one_or_none() is None:
            self._fail(
                NotFound(
                    f"Unit '{unit_code}' is not registered for material {material_id}",
                    "storage_units_material_id_unit_of_measure_code_fkey",
                )
            )
