import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator
from pythonjsonlogger import jsonlogger

from concertinfo.config import settings
from concertinfo.database import init_db
from concertinfo.routers import concerts, imports

# Configure JSON structured logging
handler = logging.StreamHandler(sys.stdout)
formatter = jsonlogger.JsonFormatter(
    fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
    rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
)
handler.setFormatter(formatter)
logging.root.handlers = [handler]
logging.root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

# Suppress verbose logs from external libraries
logging.getLogger("playwright").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("asyncio").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting concertinfo")
    await init_db()
    yield
    logger.info("Shutting down concertinfo")


app = FastAPI(title="concertinfo", lifespan=lifespan)

# Add Prometheus metrics instrumentation
Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=True,
    excluded_handlers=["/health", "/metrics"],
).instrument(app).expose(app, endpoint="/metrics")


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}


app.include_router(concerts.router)
app.include_router(imports.router)
