"""
Runtime settings, read from the environment (and a local .env file).

    PASSPORT_VALIDATION_MODE    simplified | full       (default: full)
    PASSPORT_LOG_LEVEL          logging level name       (default: INFO)
    PASSPORT_MAX_UPLOAD_BYTES   API upload size limit    (default: 1 MiB)
"""

from __future__ import annotations

import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .models import ValidationMode


class Settings(BaseModel):
    """Validated runtime configuration."""

    validation_mode: ValidationMode = ValidationMode.FULL
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    max_upload_bytes: int = Field(default=1_048_576, gt=0)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Build settings from ``environ`` (defaults to os.environ after .env).

        Raises:
            pydantic.ValidationError: a variable holds an unusable value.
        """
        if environ is None:
            load_dotenv()
            environ = dict(os.environ)

        values: dict[str, str] = {}
        if "PASSPORT_VALIDATION_MODE" in environ:
            values["validation_mode"] = environ["PASSPORT_VALIDATION_MODE"].strip().lower()
        if "PASSPORT_LOG_LEVEL" in environ:
            values["log_level"] = environ["PASSPORT_LOG_LEVEL"].strip().upper()
        if "PASSPORT_MAX_UPLOAD_BYTES" in environ:
            values["max_upload_bytes"] = environ["PASSPORT_MAX_UPLOAD_BYTES"].strip()
        return cls.model_validate(values)
