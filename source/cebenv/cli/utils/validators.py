# ABOUTME: Input validation functions for CLI commands
# ABOUTME: Validates configuration template names and KEY=VALUE option values

"""Input validators for CLI commands."""

import re

from cebenv.utils.eb_exceptions import ValidationError

# https://docs.aws.amazon.com/elasticbeanstalk/latest/api/API_CreateConfigurationTemplate.html
TEMPLATE_NAME_MAX_LENGTH = 100
TEMPLATE_NAME_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")


def is_valid_template_name(name: str | None) -> bool:
    """Validate a configuration template name.

    Only alphanumeric characters, hyphens and underscores, under 100 characters.
    """
    if not name:
        return False

    return len(name) < TEMPLATE_NAME_MAX_LENGTH and TEMPLATE_NAME_PATTERN.fullmatch(name) is not None


def parse_assignment(text: str) -> tuple[str, str]:
    """Split a ``KEY=VALUE`` option value on the first ``=``."""
    key, separator, value = text.partition("=")
    key = key.strip()
    if not separator or not key:
        raise ValidationError(f"Expected KEY=VALUE, got '{text}'")
    return key, value.strip()


def missing_options(command, names: list[str]) -> list[str]:
    """Return the ``--options`` among ``names`` that were not given to a cleo command."""
    return [f"--{name}" for name in names if not command.option(name)]
