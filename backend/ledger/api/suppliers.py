"""REST API endpoints for suppliers."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.core.database import get_db
from ledger.repositories.supplier_repository import SupplierRepository
from ledger.schemas.ledger import (
    MessageResponse,
    SupplierCreate,
    SupplierResponse,
    SupplierUpdate,
)

router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


@router.post("", response_model=SupplierResponse, status_code=status.HTTP_201_CREATED)
async def create_supplier(req: SupplierCreate, db: AsyncSession = Depends(get_db)):
    return await SupplierRepository(db).create(**req.model_dump())


@router.get("", response_model=list[SupplierResponse])
async def list_suppliers(db: AsyncSession = Depends(get_db)):
    return await SupplierRepository(db).list_all()


@router.get("/{supplier_id}", response_model=SupplierResponse)
async def get_supplier(supplier_id: int, db: AsyncSession = Depends(get_db)):
    return await SupplierRepository(db).require(supplier_id)


@router.patch("/{supplier_id}", response_model=SupplierResponse)
async def update_supplier(
    supplier_id: int, req: SupplierUpdate, db: AsyncSession = Depends(get_db)
):
    repo = SupplierRepository(db)
    return await repo.update(supplier_id, **req.model_dump(exclude_unset=True))


@router.delete("/{supplier_id}", response_model=MessageResponse)
async def delete_supplier(supplier_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a supplier; refused while receipts reference it."""
    await SupplierRepository(db).delete(supplier_id)
    return MessageResponse(message=f"Supplier {supplier_id} deleted")
