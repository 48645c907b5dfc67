"""REST API endpoints for the material catalog and units of measure."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.core.database import get_db
from ledger.repositories.material_repository import MaterialRepository
from ledger.schemas.ledger import (
    MaterialCreate,
    MaterialResponse,
    MaterialUpdate,
    MessageResponse,
    UnitCreate,
    UnitRename,
    UnitResponse,
)

router = APIRouter(prefix="/api/materials", tags=["materials"])


@router.post("", response_model=MaterialResponse, status_code=status.HTTP_201_CREATED)
async def create_material(req: MaterialCreate, db: AsyncSession = Depends(get_db)):
    repo = MaterialRepository(db)
    return await repo.create(
        material_name=req.material_name,
        class_code=req.class_code,
        group_code=req.group_code,
    )


@router.get("", response_model=list[MaterialResponse])
async def list_materials(group_code: str | None = None, db: AsyncSession = Depends(get_db)):
    return await MaterialRepository(db).list_all(group_code=group_code)


@router.get("/{material_id}", response_model=MaterialResponse)
async def get_material(material_id: int, db: AsyncSession = Depends(get_db)):
    return await MaterialRepository(db).require(material_id)


@router.patch("/{material_id}", response_model=MaterialResponse)
async def update_material(
    material_id: int, req: MaterialUpdate, db: AsyncSession = Depends(get_db)
):
    """Update catalog fields; an empty string clears a code."""
    repo = MaterialRepository(db)
    return await repo.update(material_id, **req.model_dump(exclude_unset=True))


@router.delete("/{material_id}", response_model=MessageResponse)
async def delete_material(material_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a material and its units; refused while receipts reference it."""
    await MaterialRepository(db).delete(material_id)
    return MessageResponse(message=f"Material {material_id} deleted")


@router.get("/{material_id}/units", response_model=list[UnitResponse])
async def list_units(material_id: int, db: AsyncSession = Depends(get_db)):
    return await MaterialRepository(db).list_units(material_id)


@router.post(
    "/{material_id}/units",
    response_model=UnitResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_unit(material_id: int, req: UnitCreate, db: AsyncSession = Depends(get_db)):
    return await MaterialRepository(db).add_unit(material_id, req.unit_name)


@router.put("/{material_id}/units/{unit_name}", response_model=UnitResponse)
async def rename_unit(
    material_id: int,
    unit_name: str,
    req: UnitRename,
    db: AsyncSession = Depends(get_db),
):
    """Rename a unit; receipts recorded in it are updated too."""
    repo = MaterialRepository(db)
    return await repo.rename_unit(material_id, unit_name, req.new_unit_name)


@router.delete("/{material_id}/units/{unit_name}", response_model=MessageResponse)
async def delete_unit(material_id: int, unit_name: str, db: AsyncSession = Depends(get_db)):
    await MaterialRepository(db).delete_unit(material_id, unit_name)
    return MessageResponse(message=f"Unit '{unit_name}' removed from material {material_id}")
