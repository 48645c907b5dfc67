# backend/ledger/models/material.py
from sqlalchemy import ForeignKey, Integer, PrimaryKeyConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ledger.core.database import Base


class Material(Base):
    """Catalog entry for a material that can be received into storage."""
    __tablename__ = "material_catalog"
    __table_args__ = {"sqlite_autoincrement": True}

    material_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    class_code: Mapped[str | None] = mapped_column(String(50), nullable=True)  # e.g., "LKM"
    group_code: Mapped[str | None] = mapped_column(String(50), nullable=True)  # e.g., "KRASK"
    material_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Unit rows go with the material; the database does the cascade
    units: Mapped[list["UnitOfMeasure"]] = relationship(
        back_populates="material",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="UnitOfMeasure.unit_name",
    )

    @property
    def unit_names(self) -> list[str]:
        return [unit.unit_name for unit in self.units]

    def __repr__(self):
        return f"<Material(material_id={self.material_id}, material_name='{self.material_name}')>"


class UnitOfMeasure(Base):
    """A unit a given material may legitimately be received in."""
    __tablename__ = "units_of_measure"
    __table_args__ = (
        PrimaryKeyConstraint("material_id", "unit_name", name="units_of_measure_pkey"),
    )

    material_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(
            "material_catalog.material_id",
            name="units_of_measure_material_id_fkey",
            ondelete="CASCADE",
        ),
        nullable=False,
    )
    unit_name: Mapped[str] = mapped_column(String(50), nullable=False)  # e.g., "литры"

    material: Mapped[Material] = relationship(back_populates="units")

    def __repr__(self):
        return f"<UnitOfMeasure(material_id={self.material_id}, unit_name='{self.unit_name}')>"


# Catalog columns writable through MaterialRepository.update()
MATERIAL_FIELDS = ("material_name", "class_code", "group_code")
