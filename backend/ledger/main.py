# backend/ledger/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ledger.core.config import settings
from ledger.core.exceptions import (
    ConstraintViolation,
    LedgerError,
    NotFound,
    ReferentialBlock,
    UniquenessViolation,
)
from ledger.core.init_db import init_db
from ledger.api import materials, receipts, reports, suppliers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Material Procurement Ledger API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Most specific first: NotFound and UniquenessViolation are ConstraintViolations
_STATUS_BY_ERROR = (
    (NotFound, 404),
    (UniquenessViolation, 409),
    (ReferentialBlock, 409),
    (ConstraintViolation, 422),
)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    status_code = 400
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = code
            break
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": exc.message},
    )


@app.on_event("startup")
async def startup():
    await init_db()
    logger.info("Ledger store ready")


# Report paths share prefixes with the CRUD routers and must match first
app.include_router(reports.router)
app.include_router(materials.router)
app.include_router(suppliers.router)
app.include_router(receipts.router)


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
