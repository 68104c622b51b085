#!/usr/bin/env python3
"""
VIN Gateway HTTP Server

Exposes the offline VIN decoder over a small REST API so phones, shop
tools and other services can check VINs without bundling the tables.

Features:
- Check digit validation
- World manufacturer lookup from the VIN or a bare WMI
- Model year decode with an optional 30-year cycle anchor

Usage:
    python -m vin_gateway.server --port 8327

Then:
    curl http://localhost:8327/vin/1HGCM82633A004352
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from vin_gateway import __version__
from vin_gateway.vin_decoder import (
    decode_vin,
    get_model_year_from_char,
    get_world_manufacturer,
    is_valid_vin,
)
from vin_gateway.wmi import wmi_table_loaded

logger = logging.getLogger(__name__)


# =============================================================================
# Pydantic Models
# =============================================================================

class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    wmi_loaded: bool

class VinResponse(BaseModel):
    vin: str
    valid: bool
    wmi: str
    manufacturer: str
    model_year: int  # 0 = unknown
    check_digit: str
    expected_check_digit: Optional[str] = None

class ValidityResponse(BaseModel):
    vin: str
    valid: bool

class ManufacturerResponse(BaseModel):
    prefix: str
    manufacturer: str

class ModelYearResponse(BaseModel):
    code: str
    model_year: int


# =============================================================================
# FastAPI App
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    logger.info(f"VIN Gateway {__version__} starting...")
    yield
    logger.info("VIN Gateway stopped")

app = FastAPI(
    title="VIN Gateway",
    description="Offline VIN validation, manufacturer and model year decode",
    version=__version__,
    lifespan=lifespan
)

# Read-only API, safe to call from any origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


# =============================================================================
# Endpoints
# =============================================================================

@app.get("/health", response_model=HealthResponse)
async def health():
    """Liveness check."""
    return HealthResponse(version=__version__, wmi_loaded=wmi_table_loaded())


@app.get("/vin/{vin}", response_model=VinResponse)
async def read_vin(vin: str, start_year: int = Query(0, ge=0)):
    """
    Decode a VIN.

    Invalid VINs are not an error: they come back with ``valid=false`` and
    whatever fields could still be decoded.
    """
    info = decode_vin(vin, start_year)
    return VinResponse(**info.to_dict())


@app.get("/vin/{vin}/valid", response_model=ValidityResponse)
async def check_vin(vin: str):
    """Check digit validation only."""
    vin = vin.strip().upper()
    return ValidityResponse(vin=vin, valid=is_valid_vin(vin))


@app.get("/wmi/{prefix}", response_model=ManufacturerResponse)
async def read_manufacturer(prefix: str):
    """Look up the manufacturer for a WMI (2-3 chars) or a full VIN."""
    wmi = prefix.strip().upper()[:3]
    manufacturer = get_world_manufacturer(wmi)
    if not manufacturer:
        raise HTTPException(status_code=404, detail=f"Unknown manufacturer prefix '{wmi}'")
    return ManufacturerResponse(prefix=wmi, manufacturer=manufacturer)


@app.get("/year/{code}", response_model=ModelYearResponse)
async def read_model_year(code: str, start_year: int = Query(0, ge=0)):
    """Decode a single model year code (the 10th VIN character)."""
    code = code.strip().upper()
    if len(code) != 1:
        raise HTTPException(status_code=400, detail="Year code must be a single character")

    year = get_model_year_from_char(code, start_year)
    if not year:
        raise HTTPException(status_code=404, detail=f"'{code}' is not a model year code")
    return ModelYearResponse(code=code, model_year=year)


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="VIN Gateway")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8327, help="Port to listen on")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
