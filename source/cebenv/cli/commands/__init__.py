# ABOUTME: Commands module for the cebenv CLI
# ABOUTME: Contains all CLI command implementations

"""CLI commands for cebenv."""

from .app_deploy import AppDeployCommand
from .app_upload import AppUploadCommand
from .clone import CloneCommand
from .config_clone import ConfigCloneCommand
from .config_show import ConfigShowCommand
from .deploy import DeployCommand

__all__ = [
    "CloneCommand",
    "DeployCommand",
    "ConfigCloneCommand",
    "ConfigShowCommand",
    "AppUploadCommand",
    "AppDeployCommand",
]
