"""Shared plumbing for ledger repositories."""

import logging
from typing import NoReturn

from sqlalchemy import func, select
from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.core.exceptions import (
    ConstraintViolation,
    LedgerError,
    translate_integrity_error,
)
from ledger.models.receipt import Receipt

logger = logging.getLogger(__name__)


class BaseRepository:
    """Base for repositories that write through an AsyncSession.

    Each public write is one unit of work: checks run in the session's
    transaction, then a single commit. A failed pre-check raises before
    anything is written; a write the database rejects is rolled back.
    """

    def __init__(self, session: AsyncSession):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _commit(self, deleting: bool = False) -> None:
        await self._guard(self.session.commit(), deleting)

    async def _execute(self, statement, deleting: bool = False):
        """Execute a bulk statement; constraint failures become ledger errors."""
        return await self._guard(self.session.execute(statement), deleting)

    async def _guard(self, awaitable, deleting: bool):
        # Immediate constraints fire on the statement, deferred ones on commit
        try:
            return await awaitable
        except IntegrityError as e:
            await self.session.rollback()
            error = translate_integrity_error(e, deleting=deleting)
            logger.warning(f"Write rejected by database: {error.message}")
            raise error from e
        except DataError as e:
            await self.session.rollback()
            logger.warning(f"Write rejected by database: {e.orig}")
            raise ConstraintViolation(f"Invalid value: {e.orig}") from e

    def _fail(self, error: LedgerError) -> NoReturn:
        # Pre-checks run before anything is added to the session, so there
        # is nothing to roll back and loaded objects stay usable.
        logger.warning(error.message)
        raise error

    async def _count_receipts(self, *criteria) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Receipt).where(*criteria)
        )
        return result.scalar_one()


def clean_optional(value: str | None) -> str | None:
    """Strip a free-text field, mapping blank input to NULL."""
    if value is None:
        return None
    value = value.strip()
    return value or None
