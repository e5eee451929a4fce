"""
Settings loader for the roadmap tracker.

Reads config/roadmap.yaml, then lets environment variables (optionally from
a .env file) override individual values:
- ROADMAP_DB_PATH
- ROADMAP_USER
- ROADMAP_LOG_LEVEL
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


# Default locations (relative to project root)
PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "roadmap.yaml"
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"

ENV_OVERRIDES = {
    "ROADMAP_DB_PATH": "db_path",
    "ROADMAP_USER": "user_id",
    "ROADMAP_LOG_LEVEL": "log_level",
}

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class RoadmapSettings(BaseModel):
    db_path: Path = Path("data/roadmap.db")
    user_id: Optional[str] = None
    initial_visible_steps: int = Field(default=5, ge=1)
    steps_per_load: int = Field(default=5, ge=1)
    log_level: str = "INFO"

    @field_validator('log_level')
    @classmethod
    def log_level_known(cls, v):
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


def load_settings(
    config_path: Path | None = None,
    env_file: Path | None = None,
) -> RoadmapSettings:
    """
    Load settings from YAML and environment.

    Args:
        config_path: Optional YAML file (default: config/roadmap.yaml); a
            missing file means defaults
        env_file: Optional .env file loaded before reading the environment

    Returns:
        Validated RoadmapSettings

    Raises:
        ValueError: If the YAML file does not contain a mapping
        yaml.YAMLError: If YAML parsing fails
    """
    load_dotenv(env_file or DEFAULT_ENV_FILE)

    data: dict[str, Any] = {}
    file_path = config_path or DEFAULT_CONFIG_PATH
    if file_path.exists():
        with open(file_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file must contain a mapping: {file_path}")
        data.update(loaded)

    for env_name, field in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            data[field] = value

    return RoadmapSettings(**data)


def configure_logging(level: str = "INFO"):
    """Set up root logging the same way the scripts do."""
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)
