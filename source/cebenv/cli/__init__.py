# ABOUTME: CLI module for cebenv
# ABOUTME: Provides the command-line interface for uploading, cloning and deploying

"""Command-line interface for cebenv."""

import logging
import sys

from cleo.application import Application

from cebenv import __version__
from cebenv.config import Settings

from .commands.app_deploy import AppDeployCommand
from .commands.app_upload import AppUploadCommand
from .commands.clone import CloneCommand
from .commands.config_clone import ConfigCloneCommand
from .commands.config_show import ConfigShowCommand
from .commands.deploy import DeployCommand


def configure_logging(settings: Settings) -> None:
    """Send log records to stderr; debug output only when CEBENV_DEBUG is set."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    if settings.debug:
        # botocore is very chatty at DEBUG
        logging.getLogger("botocore").setLevel(logging.INFO)


def create_application() -> Application:
    """Create the CLI application."""
    application = Application("cebenv", __version__)

    # Add commands
    application.add(CloneCommand())
    application.add(DeployCommand())
    application.add(ConfigCloneCommand())
    application.add(ConfigShowCommand())
    application.add(AppUploadCommand())
    application.add(AppDeployCommand())

    return application


def main():
    """Main entry point for the CLI."""
    configure_logging(Settings.from_env())
    application = create_application()
    application.run()


if __name__ == "__main__":
    main()
