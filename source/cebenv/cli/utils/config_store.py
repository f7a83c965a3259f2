# ABOUTME: Saved configuration storage backed by the eb CLI
# ABOUTME: Fetches and stores saved configurations with 'eb config get' and 'eb config put'

"""Configuration store for Elastic Beanstalk saved configurations."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

import yaml

from cebenv.utils.eb_exceptions import SubprocessOutputError, ValidationError

from .runner import Runner, run

logger = logging.getLogger(__name__)

SAVED_AT_PREFIX = "Configuration saved at"
SAVED_CONFIG_SUFFIX = ".cfg.yml"


@dataclass
class SavedConfiguration:
    """A saved configuration document and the local file it lives in."""

    name: str
    path: Path
    settings: dict[str, Any]


class ConfigurationStore(Protocol):
    """Where saved configurations are read from and written to."""

    def get(self, name: str) -> SavedConfiguration: ...

    def put(self, name: str, document: dict[str, Any]) -> Path: ...


def parse_config_get_output(output: str) -> Path:
    """
    Extract the file path from ``eb config get`` output.

    The expected output is a single line such as
    ``Configuration saved at: /project/.elasticbeanstalk/saved_configs/base.cfg.yml``.

    Raises:
        SubprocessOutputError: the output has another shape or the file is missing
    """
    label, separator, value = output.strip().partition(":")
    path_text = value.strip()

    if not separator or label.strip() != SAVED_AT_PREFIX or not path_text:
        raise SubprocessOutputError(f"Unexpected output from 'eb config get': {output.strip()}", output=output)

    path = Path(path_text)
    if not path.exists():
        raise SubprocessOutputError(f"Saved configuration file does not exist: {path}", output=output)

    return path


def load_document(path: str | Path) -> dict[str, Any]:
    """Read a saved configuration YAML file."""
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class EbCliConfigurationStore:
    """ConfigurationStore that shells out to the eb CLI."""

    def __init__(self, saved_configs_dir: str | Path, runner: Runner = run):
        """
        Args:
            saved_configs_dir: The project's ``.elasticbeanstalk/saved_configs`` directory
            runner: Executes an argument list and returns stdout
        """
        self.saved_configs_dir = Path(saved_configs_dir)
        self.runner = runner

    def get(self, name: str) -> SavedConfiguration:
        """Download a saved configuration and load it."""
        output = self.runner(["eb", "config", "get", name])
        path = parse_config_get_output(output)
        settings = load_document(path)
        if not isinstance(settings, dict):
            raise SubprocessOutputError(f"Saved configuration is not a mapping: {path}", output=output)
        return SavedConfiguration(name=name, path=path, settings=settings)

    def put(self, name: str, document: dict[str, Any]) -> Path:
        """
        Write a document to ``<saved_configs>/<name>.cfg.yml`` and upload it.

        ``eb config put`` has no tagging support, so saved configurations are
        stored untagged.
        """
        if not name:
            raise ValidationError("Missing configuration name.")

        self.saved_configs_dir.mkdir(parents=True, exist_ok=True)
        dest = self.saved_configs_dir / f"{name}{SAVED_CONFIG_SUFFIX}"
        with open(dest, "w", encoding="utf-8") as f:
            yaml.safe_dump(document, f, default_flow_style=False, sort_keys=False)

        logger.debug("Wrote %s, running eb config put", dest)
        self.runner(["eb", "config", "put", name])
        return dest
