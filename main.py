"""Main entrypoint and application factory for the Finance Visualizer API.

This module initializes the FastAPI application, configures logging, creates the transactions table on startup,
and exposes the Scalar API reference endpoint for interactive OpenAPI documentation. It also includes the main
entrypoint for running the app with Uvicorn.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from scalar_fastapi import get_scalar_api_reference
from sqlalchemy.exc import SQLAlchemyError

from app.api.routes import router
from app.core.db import dispose_engine, init_db
from app.core.settings import get_settings
from app.core.utils import get_logger


# --- Logging Setup ---
def setup_logging() -> None:
    """Configure logging to file and console, and ensure the log directory exists."""
    settings = get_settings()
    log_path = Path(settings.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logger = get_logger("finance-visualizer")
    logger.setLevel(settings.log_level.upper())
    # Add file handler for persistent logs (not colorized)
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(file_handler)
    logger.propagate = False


setup_logging()
logger = get_logger("finance-visualizer.main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan event handler to create the transactions table and release the engine on shutdown."""
    _ = app  # Silence unused argument warning
    try:
        init_db()
    except SQLAlchemyError:
        logger.exception("Failed to create transactions table")
        raise
    yield
    dispose_engine()


app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="Finance Visualizer API",
    description="""
    The Finance Visualizer API records income and expense transactions and serves monthly summaries for charting.

    **Endpoints:**
    - `GET /transactions`: List all transactions, most recent first.
    - `POST /transactions`: Create a transaction. Returns its `id`.
    - `PUT /transactions?id=<id>`: Replace a transaction.
    - `DELETE /transactions?id=<id>`: Delete a transaction.
    - `GET /transactions/monthly`: Income, expenses and net per month.
    - `GET /transactions/summary`: Overall totals and counts.
    - `GET /categories`: Suggested categories per transaction type.
    - `GET /health`: Health check endpoint.
    - `GET /scalar`: Interactive Scalar OpenAPI documentation.
    """,
    version="1.0.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests (e.g. unparseable JSON) as 400 with a single message."""
    details = "; ".join(f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors())
    logger.warning(f"Rejected request to {request.url.path}: {details}")
    return JSONResponse(status_code=400, content={"detail": f"Invalid request: {details}"})


@app.get("/scalar", include_in_schema=False)
async def scalar_docs() -> HTMLResponse:
    """Return Scalar API reference."""
    return get_scalar_api_reference(openapi_url=app.openapi_url, title=app.title)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("main:app", host=settings.server_host, port=settings.server_port, reload=True)
