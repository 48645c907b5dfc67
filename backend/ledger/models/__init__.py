# Database models
from ledger.models.material import Material, UnitOfMeasure
from ledger.models.supplier import Supplier
from ledger.models.receipt import Receipt

__all__ = [
    "Material",
    "UnitOfMeasure",
    "Supplier",
    "Receipt",
]
