"""Configuration management for gkectl.

Settings are loaded from the following sources, later ones winning:
1. Built-in defaults
2. A YAML configuration file
3. Environment variables (a ``.env`` file is honoured)
"""
import os
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from dotenv import load_dotenv
from jsonschema import validate, ValidationError as SchemaValidationError
from pydantic import BaseModel, Field, ValidationError, field_validator

from gkectl.exceptions import PreconditionError
from gkectl.models import (
    DEFAULT_MACHINE_TYPE,
    DEFAULT_NODE_COUNT,
    DEFAULT_REGION,
    DEFAULT_SCOPES,
    DEFAULT_SERVICES,
)

logger = logging.getLogger("gkectl.config")

# Load environment variables from .env file if it exists
load_dotenv()

DEFAULT_CONFIG_PATHS = [
    Path("~/.config/gkectl/config.yaml"),
    Path("gkectl.yaml"),
]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "project": {"type": ["string", "null"]},
        "gcloud": {"type": "string"},
        "cluster": {
            "type": "object",
            "properties": {
                "region": {"type": "string"},
                "machine_type": {"type": "string"},
                "node_count": {"type": "integer", "minimum": 1},
                "team": {"type": "string"},
                "created_by": {"type": "string"},
                "services": {"type": "array", "items": {"type": "string"}},
                "scopes": {"type": "array", "items": {"type": "string"}, "minItems": 1},
            },
            "additionalProperties": False,
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {"type": "string"},
                "file": {"type": ["string", "null"]},
                "max_size_mb": {"type": "integer", "minimum": 1},
                "backup_count": {"type": "integer", "minimum": 0},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}


class ClusterSettings(BaseModel):
    """Defaults and fixed policy applied to every cluster."""
    region: str = Field(default=DEFAULT_REGION, description="Region used when -r is omitted")
    machine_type: str = Field(default=DEFAULT_MACHINE_TYPE, description="Machine type used when -m is omitted")
    node_count: int = Field(default=DEFAULT_NODE_COUNT, ge=1, description="Node count used when -a is omitted")
    team: str = Field(default="fe-presale", description="Value of the team label")
    created_by: str = Field(default="gkectl", description="Value of the created-by label")
    services: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SERVICES),
        description="Services enabled before a cluster is created",
    )
    scopes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SCOPES),
        description="OAuth scopes attached to cluster nodes",
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    file: Optional[str] = Field(default=None, description="Path to log file (if None, logs to stderr only)")
    max_size_mb: int = Field(default=10, ge=1, description="Maximum log file size in MB before rotation")
    backup_count: int = Field(default=3, ge=0, description="Number of backup log files to keep")

    @field_validator('level')
    @classmethod
    def check_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {v!r}")
        return level


class Settings(BaseModel):
    """gkectl settings."""
    project: Optional[str] = Field(default=None, description="Project to operate in; falls back to the gcloud default")
    gcloud: str = Field(default="gcloud", description="gcloud executable")
    cluster: ClusterSettings = Field(default_factory=ClusterSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    source: Optional[str] = Field(default=None, exclude=True)

    @field_validator('project')
    @classmethod
    def blank_project_is_unset(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> 'Settings':
        """Load settings from a YAML file and the environment.

        Args:
            config_path: Explicit configuration file; it must exist when given

        Raises:
            PreconditionError: If the file is missing, unreadable or invalid
        """
        path = _find_config_file(config_path)
        data: Dict[str, Any] = {}
        if path is not None:
            data = _load_config_file(path)
            logger.debug(f"Loaded configuration from {path}")

        data = _apply_env_overrides(data)
        try:
            settings = cls(**data)
        except ValidationError as e:
            raise PreconditionError(f"Invalid configuration: {e}") from e
        settings.source = str(path) if path else None
        return settings


def _find_config_file(config_path: Optional[Union[str, Path]]) -> Optional[Path]:
    explicit = config_path or os.getenv("GKECTL_CONFIG")
    if explicit:
        path = Path(explicit).expanduser().absolute()
        if not path.exists():
            raise PreconditionError(f"Configuration file not found: {path}")
        return path

    for candidate in DEFAULT_CONFIG_PATHS:
        path = candidate.expanduser().absolute()
        if path.exists():
            return path
    return None


def _load_config_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise PreconditionError(f"Could not read configuration file {path}: {e}") from e

    try:
        validate(instance=data, schema=CONFIG_SCHEMA)
    except SchemaValidationError as ve:
        raise PreconditionError(f"Invalid configuration file {path}: {ve.message}") from ve
    return data


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay environment variables on top of file settings."""
    data = dict(data)
    logging_data = dict(data.get("logging") or {})

    project = os.getenv("GKECTL_PROJECT") or os.getenv("CLOUDSDK_CORE_PROJECT")
    if project:
        data["project"] = project
    if os.getenv("GKECTL_GCLOUD"):
        data["gcloud"] = os.environ["GKECTL_GCLOUD"]
    if os.getenv("GKECTL_LOG_LEVEL"):
        logging_data["level"] = os.environ["GKECTL_LOG_LEVEL"]
    if os.getenv("GKECTL_LOG_FILE"):
        logging_data["file"] = os.environ["GKECTL_LOG_FILE"]

    if logging_data:
        data["logging"] = logging_data
    return data
