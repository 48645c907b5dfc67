"""Repository for suppliers."""

import logging
from typing import Any, List, Optional

from sqlalchemy import delete, select

from ledger.core.exceptions import (
    ConstraintViolation,
    NotFound,
    ReferentialBlock,
    UniquenessViolation,
)
from ledger.models.receipt import Receipt
from ledger.models.supplier import SUPPLIER_FIELDS, Supplier
from ledger.repositories.base import BaseRepository, clean_optional

logger = logging.getLogger(__name__)

# Unique columns and the constraint that guards each
_UNIQUE_FIELDS = {
    "tax_id": "suppliers_tax_id_key",
    "bank_account_number": "suppliers_bank_account_number_key",
}


class SupplierRepository(BaseRepository):
    """Repository for Supplier database operations.

    tax_id and bank_account_number are unique across suppliers when set;
    blank values are stored as NULL and never collide. A supplier cannot be
    deleted while receipts reference it.
    """

    async def create(
        self,
        name: str,
        tax_id: Optional[str] = None,
        bank_account_number: Optional[str] = None,
        **address: Optional[str],
    ) -> Supplier:
        """Create a new supplier.

        Args:
            name: Supplier name (required)
            tax_id: Taxpayer id, unique when present
            bank_account_number: Settlement account, unique when present
            **address: legal_address_* and bank_address_* fields

        Returns:
            Created Supplier with its generated id

        Raises:
            ConstraintViolation: If the name is blank or an unknown field is given
            UniquenessViolation: If tax_id or bank_account_number is taken
        """
        values = self._clean_fields(
            dict(address, name=name, tax_id=tax_id, bank_account_number=bank_account_number)
        )
        if values["name"] is None:
            self._fail(ConstraintViolation("Supplier name is required"))
        await self._check_unique(values)

        supplier = Supplier(**values)
        self.session.add(supplier)
        await self._commit()
        await self.session.refresh(supplier)
        logger.info(f"Created supplier {supplier.supplier_id} '{supplier.name}'")
        return supplier

    async def get(self, supplier_id: int) -> Optional[Supplier]:
        result = await self.session.execute(
            select(Supplier).where(Supplier.supplier_id == supplier_id)
        )
        return result.scalar_one_or_none()

    async def require(self, supplier_id: int) -> Supplier:
        """Get a supplier by id.

        Raises:
            NotFound: If no such supplier exists
        """
        supplier = await self.get(supplier_id)
        if supplier is None:
            self._fail(NotFound(f"Supplier {supplier_id} not found"))
        return supplier

    async def get_by_tax_id(self, tax_id: str) -> Optional[Supplier]:
        result = await self.session.execute(
            select(Supplier).where(Supplier.tax_id == tax_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self, bank_address_city: Optional[str] = None) -> List[Supplier]:
        query = select(Supplier).order_by(Supplier.supplier_id)
        if bank_address_city is not None:
            query = query.where(Supplier.bank_address_city == bank_address_city)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update(self, supplier_id: int, **fields: Optional[str]) -> Supplier:
        """Update supplier fields.

        Only the keyword arguments given are written; passing None or a
        blank string clears an optional field.

        Raises:
            NotFound: If the supplier does not exist
            ConstraintViolation: If the name would become blank
            UniquenessViolation: If the new tax_id or account is taken
        """
        supplier = await self.require(supplier_id)
        values = self._clean_fields(fields)
        if "name" in values and values["name"] is None:
            self._fail(ConstraintViolation("Supplier name is required"))
        await self._check_unique(values, exclude_id=supplier_id)

        for key, value in values.items():
            setattr(supplier, key, value)

        await self._commit()
        await self.session.refresh(supplier)
        return supplier

    async def delete(self, supplier_id: int) -> None:
        """Delete a supplier.

        Raises:
            NotFound: If the supplier does not exist
            ReferentialBlock: If any receipt references the supplier
        """
        await self.require(supplier_id)

        receipts = await self._count_receipts(Receipt.supplier_id == supplier_id)
        if receipts:
            self._fail(
                ReferentialBlock(
                    f"Supplier {supplier_id} is referenced by {receipts} receipt(s)",
                    "storage_units_supplier_id_fkey",
                )
            )

        await self._execute(
            delete(Supplier)
            .where(Supplier.supplier_id == supplier_id)
            .execution_options(synchronize_session=False),
            deleting=True,
        )
        await self._commit(deleting=True)
        self.session.expunge_all()
        logger.info(f"Deleted supplier {supplier_id}")

    def _clean_fields(self, fields: dict[str, Any]) -> dict[str, Optional[str]]:
        unknown = set(fields) - set(SUPPLIER_FIELDS)
        if unknown:
            self._fail(ConstraintViolation(f"Unknown supplier field(s): {', '.join(sorted(unknown))}"))
        return {key: clean_optional(value) for key, value in fields.items()}

    async def _check_unique(
        self, values: dict[str, Optional[str]], exclude_id: Optional[int] = None
    ) -> None:
        for field, constraint in _UNIQUE_FIELDS.items():
            value = values.get(field)
            if value is None:
                continue
            column = getattr(Supplier, field)
            query = select(Supplier.supplier_id).where(column == value)
            if exclude_id is not None:
                query = query.where(Supplier.supplier_id != exclude_id)
            result = await self.session.execute(query.limit(1))
            if result.scalar_one_or_none() is not None:
                self._fail(
                    UniquenessViolation(
                        f"Another supplier already has {field} '{value}'", constraint
                    )
                )
