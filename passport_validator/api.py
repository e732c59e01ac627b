"""
Passport Validator — FastAPI Server
===================================

RESTful API for validating passport batches.

Endpoints:
    POST /validate          Validate a batch posted as JSON text
    POST /validate/file     Upload a batch file for validation
    GET  /health            Health check / readiness probe

Run:
    uvicorn passport_validator.api:app --reload          # Dev (http://localhost:8000)
    uvicorn passport_validator.api:app --host 0.0.0.0    # Production
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, UploadFile
from pydantic import BaseModel, Field

from . import __version__
from .config import Settings
from .exceptions import PassportError
from .models import BatchReport, ValidationMode
from .pipeline import PassportBatchPipeline


# ─── Application Lifespan (load settings) ───────────────────────────

_settings: Settings | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load settings from the environment on startup."""
    global _settings  # noqa: PLW0603
    _settings = Settings.from_env()
    yield
    _settings = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Passport Validator API",
    description=(
        "Batch parsing and validation of passport records. "
        "Blank-line separated key:value records, presence-only or full "
        "format/range validation, every violation reported."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class ValidateRequest(BaseModel):
    """Request body for the /validate endpoint."""

    batch_text: str = Field(
        ...,
        description="Passport records, separated by blank lines.",
        json_schema_extra={
            "example": (
                "ecl:gry pid:860033327 eyr:2020 hcl:#fffffd\n"
                "byr:1937 iyr:2017 cid:147 hgt:183cm\n"
            )
        },
    )
    mode: Optional[ValidationMode] = Field(
        default=None,
        description="simplified or full; defaults to PASSPORT_VALIDATION_MODE.",
    )


class HealthResponse(BaseModel):
    status: str
    version: str
    default_mode: ValidationMode


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_settings() -> Settings:
    if _settings is None:
        raise HTTPException(status_code=503, detail="Settings not loaded")
    return _settings


def _run(text: str, mode: ValidationMode) -> BatchReport:
    """Run the pipeline, turning read failures into a 422."""
    try:
        return PassportBatchPipeline(mode).run_text(text)
    except PassportError as exc:
        raise HTTPException(
            status_code=422,
            detail={"code": exc.code, "message": exc.message, "details": exc.details},
        ) from exc


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/validate",
    summary="Validate a passport batch from text",
    tags=["Validation"],
    responses={
        422: {"description": "Batch contains an unparsable line"},
        503: {"description": "Settings not yet loaded"},
    },
)
def validate_batch(request: ValidateRequest) -> BatchReport:
    """Parse and validate every passport in the posted batch.

    Returns per-passport verdicts plus **valid_count**, the number of
    passports with no violations.
    """
    settings = _get_settings()
    return _run(request.batch_text, request.mode or settings.validation_mode)


@app.post(
    "/validate/file",
    summary="Validate a passport batch from an uploaded file",
    tags=["Validation"],
    responses={
        413: {"description": "File too large"},
        400: {"description": "File is not valid UTF-8 text"},
        422: {"description": "Batch contains an unparsable line"},
        503: {"description": "Settings not yet loaded"},
    },
)
async def validate_batch_file(
    file: UploadFile, mode: Optional[ValidationMode] = None
) -> BatchReport:
    """Upload a text file of passport records for validation."""
    settings = _get_settings()
    if file.size and file.size > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="File too large")

    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="File too large")
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 encoded text")

    return await asyncio.to_thread(_run, text, mode or settings.validation_mode)


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Settings not yet loaded"}},
)
def health_check() -> HealthResponse:
    """Returns service status and configuration info."""
    settings = _get_settings()
    return HealthResponse(
        status="healthy",
        version=__version__,
        default_mode=settings.validation_mode,
    )
