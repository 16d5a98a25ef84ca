"""User configuration for the command line and web layers.

Settings are merged from defaults, a ``.depscoutrc`` JSON file (project
directory first, home directory as fallback) and ``DEPSCOUT_*`` environment
variables, later sources winning.
"""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

import structlog
from pydantic import BaseModel, Field, ValidationError

log = structlog.get_logger("depscout")

RC_FILENAME = ".depscoutrc"


class Settings(BaseModel):
    """Runtime settings."""

    api_url: str = "https://api-dev.vulnify.io"
    api_key: str | None = None
    timeout: float = Field(default=30.0, gt=0)
    max_depth: int = Field(default=3, ge=0)
    output_format: Literal["table", "json", "summary"] = "table"
    generate_report: bool = True
    report_filename: str = "depscout-report.json"


# Environment variable -> settings field
ENV_VARS = {
    "DEPSCOUT_API_KEY": "api_key",
    "DEPSCOUT_API_URL": "api_url",
    "DEPSCOUT_TIMEOUT": "timeout",
    "DEPSCOUT_MAX_DEPTH": "max_depth",
    "DEPSCOUT_OUTPUT": "output_format",
}


def _read_rc_file(path: Path) -> dict | None:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        log.warning("config.invalid_rc_file", path=str(path), error=str(e))
        return None
    if not isinstance(data, dict):
        log.warning("config.invalid_rc_file", path=str(path), error="expected a JSON object")
        return None
    return data


def _apply(settings: Settings, values: dict, source: str) -> Settings:
    """Validate ``values`` over ``settings``; drop the whole source if invalid."""
    merged = settings.model_dump() | {k: v for k, v in values.items() if k in Settings.model_fields}
    try:
        return Settings.model_validate(merged)
    except ValidationError as e:
        log.warning("config.invalid_values", source=source, error=str(e))
        return settings


def load_settings(
    cwd: Path | None = None,
    home: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from rc files and the environment."""
    cwd = Path.cwd() if cwd is None else Path(cwd)
    home = Path.home() if home is None else Path(home)
    environ = os.environ if environ is None else environ

    settings = Settings()

    for rc_path in (cwd / RC_FILENAME, home / RC_FILENAME):
        rc_values = _read_rc_file(rc_path)
        if rc_values is not None:
            settings = _apply(settings, rc_values, str(rc_path))
            break

    for env_name, field_name in ENV_VARS.items():
        value = environ.get(env_name)
        if value:
            settings = _apply(settings, {field_name: value}, env_name)

    return settings
