"""Repository layer for database operations.

This module provides the repository classes that implement the ledger
store's reads and all-or-nothing writes.
"""

from ledger.repositories.material_repository import MaterialRepository
from ledger.repositories.supplier_repository import SupplierRepository
from ledger.repositories.receipt_repository import ReceiptRepository

__all__ = [
    "MaterialRepository",
    "SupplierRepository",
    "ReceiptRepository",
]
