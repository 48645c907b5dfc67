# backend/ledger/models/receipt.py
import datetime
from decimal import Decimal
from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    ForeignKeyConstraint,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column
from ledger.core.database import Base


class Receipt(Base):
    """A stock-receipt line: a quantity of one material taken into storage.

    Stored in ``storage_units``. The (material_id, unit_of_measure_code)
    pair must be a registered unit of the material; renaming the unit
    rewrites the code here, deleting a referenced unit is refused.
    """
    __tablename__ = "storage_units"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="storage_units_quantity_check"),
        CheckConstraint("unit_price >= 0", name="storage_units_unit_price_check"),
        ForeignKeyConstraint(
            ["material_id", "unit_of_measure_code"],
            ["units_of_measure.material_id", "units_of_measure.unit_name"],
            name="storage_units_material_id_unit_of_measure_code_fkey",
            onupdate="CASCADE",
            ondelete="RESTRICT",
        ),
        {"sqlite_autoincrement": True},
    )

    order_number: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    supplier_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey(
            "suppliers.supplier_id",
            name="storage_units_supplier_id_fkey",
            ondelete="RESTRICT",
        ),
        nullable=True,
    )
    balance_sheet_account: Mapped[str | None] = mapped_column(String(50), nullable=True)
    document_code: Mapped[str | None] = mapped_column(String(50), nullable=True)  # e.g., "ПРИХ1"
    document_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    material_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey(
            "material_catalog.material_id",
            name="storage_units_material_id_fkey",
            ondelete="RESTRICT",
        ),
        nullable=True,
    )
    material_account: Mapped[str | None] = mapped_column(String(50), nullable=True)  # e.g., "10.01"
    unit_of_measure_code: Mapped[str] = mapped_column(String(50), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(10, 3), nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    @property
    def total_amount(self) -> Decimal:
        return self.quantity * self.unit_price

    def __repr__(self):
        return (
            f"<Receipt(order_number={self.order_number}, material_id={self.material_id}, "
            f"quantity={self.quantity} {self.unit_of_measure_code})>"
        )


# Optional bookkeeping columns accepted by record()
ACCOUNTING_FIELDS = (
    "balance_sheet_account",
    "document_code",
    "document_number",
    "material_account",
)
