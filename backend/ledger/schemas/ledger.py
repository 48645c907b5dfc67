# backend/ledger/schemas/ledger.py
import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field


class MaterialCreate(BaseModel):
    material_name: str = Field(..., min_length=1, max_length=255)
    class_code: str | None = Field(default=None, max_length=50)
    group_code: str | None = Field(default=None, max_length=50)


class MaterialUpdate(BaseModel):
    material_name: str | None = Field(default=None, min_length=1, max_length=255)
    class_code: str | None = Field(default=None, max_length=50)
    group_code: str | None = Field(default=None, max_length=50)


class MaterialResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    material_id: int
    class_code: str | None
    group_code: str | None
    material_name: str
    unit_names: list[str] = []


class UnitCreate(BaseModel):
    unit_name: str = Field(..., min_length=1, max_length=50)


class UnitRename(BaseModel):
    new_unit_name: str = Field(..., min_length=1, max_length=50)


class UnitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    material_id: int
    unit_name: str


class SupplierFields(BaseModel):
    tax_id: str | None = Field(default=None, max_length=12)
    legal_address_zip: str | None = Field(default=None, max_length=10)
    legal_address_city: str | None = Field(default=None, max_length=100)
    legal_address_street: str | None = Field(default=None, max_length=100)
    legal_address_house: str | None = Field(default=None, max_length=20)
    bank_address_zip: str | None = Field(default=None, max_length=10)
    bank_address_city: str | None = Field(default=None, max_length=100)
    bank_address_street: str | None = Field(default=None, max_length=100)
    bank_address_house: str | None = Field(default=None, max_length=20)
    bank_account_number: str | None = Field(default=None, max_length=50)


class SupplierCreate(SupplierFields):
    name: str = Field(..., min_length=1, max_length=255)


class SupplierUpdate(SupplierFields):
    # Only fields present in the request body are written
    name: str | None = Field(default=None, min_length=1, max_length=255)


class SupplierResponse(SupplierFields):
    model_config = ConfigDict(from_attributes=True)

    supplier_id: int
    name: str


class ReceiptCreate(BaseModel):
    date: datetime.date
    supplier_id: int | None = None
    material_id: int
    unit_of_measure_code: str = Field(..., min_length=1, max_length=50)
    quantity: Decimal = Field(..., description="Received amount, must be > 0")
    unit_price: Decimal = Field(..., description="Price per unit, must be >= 0")
    balance_sheet_account: str | None = Field(default=None, max_length=50)
    document_code: str | None = Field(default=None, max_length=50)
    document_number: str | None = Field(default=None, max_length=50)
    material_account: str | None = Field(default=None, max_length=50)


class ReceiptResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_number: int
    date: datetime.date
    supplier_id: int | None
    balance_sheet_account: str | None
    document_code: str | None
    document_number: str | None
    material_id: int | None
    material_account: str | None
    unit_of_measure_code: str
    quantity: Decimal
    unit_price: Decimal


class MessageResponse(BaseModel):
    message: str
