# backend/ledger/models/supplier.py
from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from ledger.core.database import Base


class Supplier(Base):
    """A vendor that delivers materials, with its legal and bank details."""
    __tablename__ = "suppliers"
    __table_args__ = (
        UniqueConstraint("tax_id", name="suppliers_tax_id_key"),
        UniqueConstraint("bank_account_number", name="suppliers_bank_account_number_key"),
        {"sqlite_autoincrement": True},
    )

    supplier_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    tax_id: Mapped[str | None] = mapped_column(String(12), nullable=True)

    legal_address_zip: Mapped[str | None] = mapped_column(String(10), nullable=True)
    legal_address_city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    legal_address_street: Mapped[str | None] = mapped_column(String(100), nullable=True)
    legal_address_house: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # The bank city doubles as the bank identity in the reports
    bank_address_zip: Mapped[str | None] = mapped_column(String(10), nullable=True)
    bank_address_city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    bank_address_street: Mapped[str | None] = mapped_column(String(100), nullable=True)
    bank_address_house: Mapped[str | None] = mapped_column(String(20), nullable=True)

    bank_account_number: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self):
        return f"<Supplier(supplier_id={self.supplier_id}, name='{self.name}')>"


# Columns callers may set on create/update, in table order
SUPPLIER_FIELDS = (
    "name",
    "tax_id",
    "legal_address_zip",
    "legal_address_city",
    "legal_address_street",
    "legal_address_house",
    "bank_address_zip",
    "bank_address_city",
    "bank_address_street",
    "bank_address_house",
    "bank_account_number",
)
