# backend/ledger/core/init_db.py
import asyncio
import logging
import sys
from ledger.core.config import settings
from ledger.core.database import async_session, engine, Base
from ledger.core.seed import seed_reference_data
# Import all models to register them with Base
import ledger.models  # noqa: F401

logger = logging.getLogger(__name__)


async def init_db(seed: bool | None = None):
    """Create missing tables and optionally load the reference data."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if seed is None:
        seed = settings.SEED_ON_STARTUP
    if seed:
        async with async_session() as session:
            await seed_reference_data(session)


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    asyncio.run(init_db(seed="--seed" in sys.argv[1:]))
