# ABOUTME: Configuration management for cebenv
# ABOUTME: Reads environment settings and the local .elasticbeanstalk state file

"""Configuration management for cebenv."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from cebenv.utils.eb_exceptions import ConfigurationError

DEFAULT_LOCAL_CONFIG_PATH = Path(".elasticbeanstalk") / "config.yml"


def _first_env(environ: Mapping[str, str], *names: str) -> str | None:
    for name in names:
        value = environ.get(name)
        if value:
            return value
    return None


@dataclass
class Settings:
    """Process-wide settings taken from environment variables."""

    local_config_path: Path = DEFAULT_LOCAL_CONFIG_PATH
    s3_bucket: str | None = None  # Explicit source bundle bucket, skips auto-discovery
    debug: bool = False

    @property
    def saved_configs_dir(self) -> Path:
        """Directory the eb CLI keeps saved configurations in."""
        return self.local_config_path.parent / "saved_configs"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``aws_eb_local_config_path``, ``aws_s3_bucket`` and ``CEBENV_DEBUG``."""
        environ = os.environ if environ is None else environ

        local_config_path = _first_env(environ, "aws_eb_local_config_path", "AWS_EB_LOCAL_CONFIG_PATH")
        return cls(
            local_config_path=Path(local_config_path) if local_config_path else DEFAULT_LOCAL_CONFIG_PATH,
            s3_bucket=_first_env(environ, "aws_s3_bucket", "AWS_S3_BUCKET"),
            debug=bool(environ.get("CEBENV_DEBUG")),
        )


@dataclass
class LocalConfig:
    """The parts of ``.elasticbeanstalk/config.yml`` this tool reads."""

    application_name: str
    environment_name: str | None = None
    path: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Path | None = None) -> "LocalConfig":
        """Create local config from a parsed config.yml document."""
        application_name = (data.get("global") or {}).get("application_name")
        if not application_name:
            raise ConfigurationError(f"'global.application_name' is missing from {path or 'the local config'}")

        branch_defaults = data.get("branch-defaults") or {}
        environment_name = (branch_defaults.get("main") or {}).get("environment")

        return cls(application_name=application_name, environment_name=environment_name, path=path)

    @classmethod
    def load(cls, path: str | Path = DEFAULT_LOCAL_CONFIG_PATH) -> "LocalConfig":
        """Load the local config file. It is never written back."""
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Local Elastic Beanstalk config not found: {path}. Run 'eb init' first.")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Local Elastic Beanstalk config is not a mapping: {path}")

        return cls.from_dict(data, path=path)
