"""Error taxonomy of the ledger store.

Every rejected write surfaces as one of these, never as a raw driver error:

    LedgerError
    ├── ConstraintViolation
    │   ├── UniquenessViolation
    │   └── NotFound
    └── ReferentialBlock
"""

from sqlalchemy.exc import IntegrityError


class LedgerError(Exception):
    """Base class for ledger store errors."""

    def __init__(self, message: str, constraint: str | None = None):
        super().__init__(message)
        self.message = message
        self.constraint = constraint


class ConstraintViolation(LedgerError):
    """A check, required-field or reference rule rejected the write."""


class UniquenessViolation(ConstraintViolation):
    """A unique key (tax_id, bank account, unit pair) already exists."""


class NotFound(ConstraintViolation):
    """A referenced material, supplier, unit pair or receipt does not exist."""


class ReferentialBlock(LedgerError):
    """A delete was refused because dependent rows still exist."""


# PostgreSQL SQLSTATE codes of the integrity_constraint_violation class
_PG_UNIQUE = "23505"
_PG_FOREIGN_KEY = "23503"
_PG_CHECK = "23514"
_PG_NOT_NULL = "23502"


def _driver_errors(orig):
    # The async adapters wrap the driver exception and chain the original
    yield orig
    cause = getattr(orig, "__cause__", None)
    if cause is not None:
        yield cause


def _sqlstate(orig) -> str | None:
    for error in _driver_errors(orig):
        for attr in ("sqlstate", "pgcode"):
            code = getattr(error, attr, None)
            if code:
                return str(code)
    return None


def _constraint_name(orig) -> str | None:
    for error in _driver_errors(orig):
        name = getattr(error, "constraint_name", None)
        if name is None:
            # psycopg keeps diagnostics on .diag
            name = getattr(getattr(error, "diag", None), "constraint_name", None)
        if name:
            return name
    return None


def translate_integrity_error(exc: IntegrityError, deleting: bool = False) -> LedgerError:
    """Map a driver integrity error onto the ledger taxonomy.

    Args:
        exc: The error raised by SQLAlchemy on flush or commit
        deleting: True when the failed statement was a DELETE, so a
            foreign key failure means dependents exist rather than a
            dangling reference

    Returns:
        The matching LedgerError (not raised)
    """
    orig = exc.orig if exc.orig is not None else exc
    text = str(orig)
    code = _sqlstate(orig)
    constraint = _constraint_name(orig)

    if code == _PG_UNIQUE or "UNIQUE constraint failed" in text:
        return UniquenessViolation(f"Duplicate value: {text}", constraint)
    if code == _PG_FOREIGN_KEY or "FOREIGN KEY constraint failed" in text:
        if deleting:
            return ReferentialBlock(f"Row is still referenced: {text}", constraint)
        return NotFound(f"Referenced row does not exist: {text}", constraint)
    if code in (_PG_CHECK, _PG_NOT_NULL) or "constraint failed" in text:
        return ConstraintViolation(f"Constraint violated: {text}", constraint)
    return ConstraintViolation(text, constraint)
