"""Repository for the material catalog and its units of measure."""

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update

from ledger.core.exceptions import (
    ConstraintViolation,
    NotFound,
    ReferentialBlock,
    UniquenessViolation,
)
from ledger.models.material import MATERIAL_FIELDS, Material, UnitOfMeasure
from ledger.models.receipt import Receipt
from ledger.repositories.base import BaseRepository, clean_optional

logger = logging.getLogger(__name__)


class MaterialRepository(BaseRepository):
    """Catalog maintenance: materials and the units they may be received in.

    Deleting a material takes its unit rows with it but is refused while
    any receipt references the material. Renaming a unit carries the new
    name over to every receipt recorded in that unit.
    """

    async def create(
        self,
        material_name: str,
        class_code: Optional[str] = None,
        group_code: Optional[str] = None,
    ) -> Material:
        """Add a material to the catalog.

        Args:
            material_name: Display name (required)
            class_code: Classification code (e.g., "LKM")
            group_code: Group code (e.g., "KRASK")

        Returns:
            Created Material with its generated id

        Raises:
            ConstraintViolation: If the name is blank
        """
        name = clean_optional(material_name)
        if name is None:
            self._fail(ConstraintViolation("material_name is required"))

        material = Material(
            material_name=name,
            class_code=clean_optional(class_code),
            group_code=clean_optional(group_code),
        )
        self.session.add(material)
        await self._commit()
        await self.session.refresh(material)
        logger.info(f"Created material {material.material_id} '{material.material_name}'")
        return material

    async def get(self, material_id: int) -> Optional[Material]:
        """Get a material by id, or None."""
        result = await self.session.execute(
            select(Material).where(Material.material_id == material_id)
        )
        return result.scalar_one_or_none()

    async def require(self, material_id: int) -> Material:
        """Get a material by id.

        Raises:
            NotFound: If no such material exists
        """
        material = await self.get(material_id)
        if material is None:
            self._fail(NotFound(f"Material {material_id} not found"))
        return material

    async def list_all(self, group_code: Optional[str] = None) -> List[Material]:
        """List catalog entries ordered by id, optionally for one group."""
        query = select(Material).order_by(Material.material_id)
        if group_code is not None:
            query = query.where(Material.group_code == group_code)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update(self, material_id: int, **fields: Optional[str]) -> Material:
        """Update catalog fields.

        Only the keyword arguments given are written; passing None or a
        blank string clears a code.

        Raises:
            NotFound: If the material does not exist
            ConstraintViolation: If the name would become blank or a field
                is unknown
        """
        unknown = set(fields) - set(MATERIAL_FIELDS)
        if unknown:
            self._fail(ConstraintViolation(f"Unknown material field(s): {', '.join(sorted(unknown))}"))
        values = {key: clean_optional(value) for key, value in fields.items()}
        if "material_name" in values and values["material_name"] is None:
            self._fail(ConstraintViolation("material_name is required"))

        material = await self.require(material_id)
        for key, value in values.items():
            setattr(material, key, value)

        await self._commit()
        await self.session.refresh(material)
        return material

    async def delete(self, material_id: int) -> None:
        """Delete a material together with its units of measure.

        Raises:
            NotFound: If the material does not exist
            ReferentialBlock: If any receipt references the material
        """
        await self.require(material_id)

        receipts = await self._count_receipts(Receipt.material_id == material_id)
        if receipts:
            self._fail(
                ReferentialBlock(
                    f"Material {material_id} is referenced by {receipts} receipt(s)",
                    "storage_units_material_id_fkey",
                )
            )

        await self._execute(
            delete(Material)
            .where(Material.material_id == material_id)
            .execution_options(synchronize_session=False),
            deleting=True,
        )
        await self._commit(deleting=True)
        self.session.expunge_all()
        logger.info(f"Deleted material {material_id}")

    # ------------------------------------------------------------------
    # Units of measure
    # ------------------------------------------------------------------

    async def get_unit(self, material_id: int, unit_name: str) -> Optional[UnitOfMeasure]:
        result = await self.session.execute(
            select(UnitOfMeasure).where(
                UnitOfMeasure.material_id == material_id,
                UnitOfMeasure.unit_name == unit_name,
            )
        )
        return result.scalar_one_or_none()

    async def list_units(self, material_id: int) -> List[UnitOfMeasure]:
        """List the units a material may be received in.

        Raises:
            NotFound: If the material does not exist
        """
        await self.require(material_id)
        result = await self.session.execute(
            select(UnitOfMeasure)
            .where(UnitOfMeasure.material_id == material_id)
            .order_by(UnitOfMeasure.unit_name)
        )
        return list(result.scalars().all())

    async def add_unit(self, material_id: int, unit_name: str) -> UnitOfMeasure:
        """Register a unit a material may be received in.

        Args:
            material_id: Catalog id of the material
            unit_name: Unit label (e.g., "литры")

        Returns:
            Created UnitOfMeasure

        Raises:
            ConstraintViolation: If the unit name is blank
            NotFound: If the material does not exist
            UniquenessViolation: If the pair is already registered
        """
        name = clean_optional(unit_name)
        if name is None:
            self._fail(ConstraintViolation("unit_name is required"))

        await self.require(material_id)
        if await self.get_unit(material_id, name) is not None:
            self._fail(
                UniquenessViolation(
                    f"Unit '{name}' is already registered for material {material_id}",
                    "units_of_measure_pkey",
                )
            )

        unit = UnitOfMeasure(material_id=material_id, unit_name=name)
        self.session.add(unit)
        await self._commit()
        # The material's cached unit list is stale now
        self.session.expunge_all()
        logger.info(f"Registered unit '{name}' for material {material_id}")
        return await self.get_unit(material_id, name)

    async def rename_unit(
        self, material_id: int, old_unit_name: str, new_unit_name: str
    ) -> UnitOfMeasure:
        """Rename a unit; receipts recorded in it follow the new name.

        The cascade is done by the composite foreign key
        (ON UPDATE CASCADE) in the same statement as the rename.

        Raises:
            ConstraintViolation: If the new name is blank
            NotFound: If the old pair is not registered
            UniquenessViolation: If the new pair is already registered
        """
        new_name = clean_optional(new_unit_name)
        if new_name is None:
            self._fail(ConstraintViolation("unit_name is required"))

        unit = await self.get_unit(material_id, old_unit_name)
        if unit is None:
            self._fail(
                NotFound(f"Unit '{old_unit_name}' is not registered for material {material_id}")
            )
        if new_name == old_unit_name:
            return unit
        if await self.get_unit(material_id, new_name) is not None:
            self._fail(
                UniquenessViolation(
                    f"Unit '{new_name}' is already registered for material {material_id}",
                    "units_of_measure_pkey",
                )
            )

        affected = await self._count_receipts(
            Receipt.material_id == material_id,
            Receipt.unit_of_measure_code == old_unit_name,
        )
        await self._execute(
            update(UnitOfMeasure)
            .where(
                UnitOfMeasure.material_id == material_id,
                UnitOfMeasure.unit_name == old_unit_name,
            )
            .values(unit_name=new_name)
            .execution_options(synchronize_session=False)
        )
        await self._commit()
        # Identity map still holds the old key and the old receipt codes
        self.session.expunge_all()
        logger.info(
            f"Renamed unit '{old_unit_name}' -> '{new_name}' for material {material_id} "
            f"({affected} receipt(s) updated)"
        )
        return await self.get_unit(material_id, new_name)

    async def delete_unit(self, material_id: int, unit_name: str) -> None:
        """Remove a unit from a material.

        Raises:
            NotFound: If the pair is not registered
            ReferentialBlock: If receipts were recorded in this unit
        """
        unit = await self.get_unit(material_id, unit_name)
        if unit is None:
            self._fail(
                NotFound(f"Unit '{unit_name}' is not registered for material {material_id}")
            )

        receipts = await self._count_receipts(
            Receipt.material_id == material_id,
            Receipt.unit_of_measure_code == unit_name,
        )
        if receipts:
            self._fail(
                ReferentialBlock(
                    f"Unit '{unit_name}' of material {material_id} is used by {receipts} receipt(s)",
                    "storage_units_material_id_unit_of_measure_code_fkey",
                )
            )

        await self.session.delete(unit)
        await self._commit(deleting=True)
        self.session.expunge_all()
        logger.info(f"Removed unit '{unit_name}' from material {material_id}")
