# backend/ledger/schemas/report.py
from pydantic import BaseModel


class SupplierName(BaseModel):
    name: str


class SupplierBankInfo(BaseModel):
    name: str
    tax_id: str | None


class BankSupplierCount(BaseModel):
    bank_address_city: str | None
    supplier_count: int


class MaterialAssortment(BaseModel):
    material_name: str
    class_code: str | None


# Money and quantities are floats here, as the report consumers expect
class TotalAmount(BaseModel):
    total_amount: float


class InventoryValue(BaseModel):
    material_name: str
    total_quantity: float
    total_value: float


class SupplierShare(BaseModel):
    supplier_share: float | None


class MonthlyLoad(BaseModel):
    month: int
    monthly_value: float


class OrderBankInfo(BaseModel):
    bank_address_city: str | None
    total_amount: float
