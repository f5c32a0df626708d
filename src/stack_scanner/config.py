"""Scan settings: defaults, environment overrides and explicit flags."""

import os
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError

ENV_PREFIX = "STACK_SCANNER_"

# Setting name -> environment variable
ENV_VARS = {
    "max_file_size": f"{ENV_PREFIX}MAX_FILE_SIZE",
    "workers": f"{ENV_PREFIX}WORKERS",
    "match_timeout": f"{ENV_PREFIX}MATCH_TIMEOUT",
}


class OutputFormat(str, Enum):
    """Report output formats."""

    text = "text"
    json = "json"


class ScanConfig(BaseModel):
    """Settings for one scan."""

    max_file_size: int = Field(default=1024 * 1024, gt=0, description="Skip files larger than this many bytes")
    workers: int = Field(default_factory=lambda: os.cpu_count() or 1, ge=1, description="Worker threads")
    exclude: tuple[str, ...] = Field(default=(), description="Extra glob exclusions")
    profiles: Optional[tuple[str, ...]] = Field(
        default=None, description="Forced profiles; None means auto-detect"
    )
    match_timeout: float = Field(default=2.0, gt=0, description="Seconds per (file, rule) pair")
    output_format: OutputFormat = Field(default=OutputFormat.text)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "ScanConfig":
        """Build settings from STACK_SCANNER_* variables, then explicit overrides.

        Overrides set to None are ignored so unset CLI flags fall through to
        the environment and then to the defaults.

        Raises:
            ConfigError: a value fails validation.
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {
            name: environ[var] for name, var in ENV_VARS.items() if environ.get(var)
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigError(f"invalid settings: {e}") from e
