"""REST API endpoints for stock receipts."""

import datetime

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.core.database import get_db
from ledger.repositories.receipt_repository import ReceiptRepository
from ledger.schemas.ledger import MessageResponse, ReceiptCreate, ReceiptResponse

router = APIRouter(prefix="/api/receipts", tags=["receipts"])


@router.post("", response_model=ReceiptResponse, status_code=status.HTTP_201_CREATED)
async def record_receipt(req: ReceiptCreate, db: AsyncSession = Depends(get_db)):
    """Record incoming stock.

    The unit must be registered for the material; quantity must be
    positive and unit price non-negative.
    """
    return await ReceiptRepository(db).record(**req.model_dump())


@router.get("", response_model=list[ReceiptResponse])
async def list_receipts(
    start: datetime.date | None = None,
    end: datetime.date | None = None,
    db: AsyncSession = Depends(get_db),
):
    return await ReceiptRepository(db).list_all(start=start, end=end)


@router.get("/{order_number}", response_model=ReceiptResponse)
async def get_receipt(order_number: int, db: AsyncSession = Depends(get_db)):
    return await ReceiptRepository(db).require(order_number)


@router.delete("/{order_number}", response_model=MessageResponse)
async def delete_receipt(order_number: int, db: AsyncSession = Depends(get_db)):
    await ReceiptRepository(db).delete(order_number)
    return MessageResponse(message=f"Receipt {order_number} deleted")
