"""FastAPI application exposing the scanner over HTTP."""

import asyncio
import logging
from functools import lru_cache

from fastapi import FastAPI, HTTPException

from . import __version__
from .config import ScanConfig
from .engine import run_scan
from .errors import ScannerError
from .models import ScanReport, ScanRequest
from .registry import PatternRegistry

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Stack Scanner",
    description="Secret and stack misconfiguration scanning for local project directories",
    version=__version__,
)


@lru_cache(maxsize=1)
def get_registry() -> PatternRegistry:
    """Built-in catalog, loaded once per process."""
    return PatternRegistry.from_catalog()


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/scan", response_model=ScanReport)
async def scan(request: ScanRequest) -> ScanReport:
    """Scan a directory on the server's filesystem."""
    try:
        config = ScanConfig.from_env(
            profiles=tuple(request.profiles) if request.profiles is not None else None,
            exclude=tuple(request.exclude),
            max_file_size=request.max_file_size,
            workers=request.workers,
        )
        report = await asyncio.to_thread(run_scan, request.path, config, get_registry())
    except ScannerError as e:
        logger.warning(f"Scan of {request.path} rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Scan of {request.path} finished with {report.summary.total} findings")
    return report
