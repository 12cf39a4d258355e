"""Settings for the core profiler, loaded from YAML and the environment."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field

DEFAULT_CONFIG_FILE = 'profiler-config.yaml'
ENV_PREFIX = 'PROFILER_'


class ProfilerSettings(BaseModel):
    """Host settings read by actions and services through the runner."""

    wc_version: str = Field("", description="Store version reported with analytics events")
    home_url: str = Field("/wp-admin/admin.php?page=wc-admin", description="Redirect target on completion")
    options_path: str = Field("profiler-options.yaml", description="YAML file backing the option store")
    countries_path: Optional[str] = Field(None, description="YAML country list (default: bundled data)")
    loader_seconds: float = Field(3.0, ge=0, description="How long loader steps are shown")
    verbose: bool = Field(False, description="Echo side effects to stdout")
    log_level: str = Field("INFO", description="Root log level")


def _env_overrides() -> dict:
    """Collect PROFILER_* variables that name a settings field."""
    overrides = {}
    for name in ProfilerSettings.model_fields:
        value = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            overrides[name] = value
    return overrides


def load_settings(path: Optional[Union[str, Path]] = None) -> ProfilerSettings:
    """Load settings from a YAML file, then apply PROFILER_* environment overrides.

    Args:
        path: Config file (default: ./profiler-config.yaml, skipped if absent)

    Returns:
        Validated ProfilerSettings

    Raises:
        FileNotFoundError: If an explicit ``path`` does not exist
    """
    data = {}
    config_file = Path(path) if path is not None else Path.cwd() / DEFAULT_CONFIG_FILE

    if config_file.exists():
        with open(config_file, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        # Accept both a flat file and one nested under 'profiler:'
        data.update(loaded.get('profiler', loaded))
    elif path is not None:
        raise FileNotFoundError(f"Config file not found: {config_file}")

    data.update(_env_overrides())
    return ProfilerSettings(**data)
