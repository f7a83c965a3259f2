# ABOUTME: Saved configuration lookup, platform selection and cloning
# ABOUTME: Clones an Elastic Beanstalk saved configuration under a new name

"""Configuration-clone workflow."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cebenv.utils.eb_exceptions import NameConflictError, NotFoundError, ValidationError

from .beanstalk import BeanstalkManager
from .config_store import ConfigurationStore, load_document
from .interactive import Ask, Page, select_one_paged
from .validators import is_valid_template_name, parse_assignment

logger = logging.getLogger(__name__)

# Creation/modification timestamps a clone must not inherit
METADATA_KEY = "EnvironmentConfigurationMetadata"


@dataclass
class ClonedConfiguration:
    """A configuration persisted under its new name."""

    name: str
    path: Path
    settings: dict[str, Any]

    @property
    def platform_arn(self) -> str | None:
        return (self.settings.get("Platform") or {}).get("PlatformArn")


def get_saved_configuration(
    manager: BeanstalkManager, application_name: str, template_name: str
) -> dict[str, Any] | None:
    """Describe a saved configuration, or None if no template has that name."""
    try:
        return manager.describe_configuration_settings(application_name, template_name=template_name)
    except NotFoundError as e:
        # "No Configuration Template named '<app>/<name>' found."
        if f"'{application_name}/{template_name}'" in e.message:
            return None
        raise


def get_environment_configuration(
    manager: BeanstalkManager, application_name: str, environment_name: str
) -> dict[str, Any] | None:
    """Describe the configuration currently used by an environment."""
    return manager.describe_configuration_settings(application_name, environment_name=environment_name)


def find_saved_configuration(
    manager: BeanstalkManager, application_name: str, template_name: str = None, environment_name: str = None
) -> dict[str, Any]:
    """
    Find a configuration by template name, falling back to an environment name.

    Raises:
        ValidationError: neither name was given
        NotFoundError: nothing matched
    """
    if template_name:
        config = get_saved_configuration(manager, application_name, template_name)
    elif environment_name:
        config = get_environment_configuration(manager, application_name, environment_name)
    else:
        raise ValidationError("Require at least a configuration template name or an environment name.")

    if not config:
        raise NotFoundError(f"Configuration '{template_name or environment_name}' not found.", application_name)
    return config


def select_platform_arn(manager: BeanstalkManager, platform_name: str = None, ask: Ask = None) -> str | None:
    """Let the user pick a platform ARN from platforms whose name contains ``platform_name``."""

    def fetch_page(token: str | None) -> Page | None:
        summaries, next_token = manager.list_platform_versions(platform_name, token)
        arns = [summary["PlatformArn"] for summary in summaries if summary.get("PlatformArn")]
        if not arns:
            return None
        return Page(options=arns, next_token=next_token)

    return select_one_paged("Choose one:", fetch_page, ask=ask)


def resolve_platform_identifier(
    manager: BeanstalkManager, platform_arn: str = None, platform_hint: str = None, ask: Ask = None
) -> str | None:
    """Return the explicit ARN, an interactively chosen one for a hint, or None."""
    if platform_arn:
        return platform_arn
    if platform_hint:
        return select_platform_arn(manager, platform_hint, ask=ask)
    return None


def apply_overrides(document: dict[str, Any], overrides: Iterable[str]) -> dict[str, Any]:
    """
    Set dotted-path values in place, e.g. ``Platform.PlatformArn=arn:...``.

    Intermediate mappings are created as needed. Values are kept as strings.
    """
    for entry in overrides:
        path, value = parse_assignment(entry)
        *parents, leaf = path.split(".")

        target = document
        for key in parents:
            child = target.get(key)
            if not isinstance(child, dict):
                child = target[key] = {}
            target = child
        target[leaf] = value

    return document


def clone_configuration(
    manager: BeanstalkManager,
    store: ConfigurationStore,
    application_name: str,
    source_name: str,
    target_name: str,
    platform_arn: str = None,
    overrides: Iterable[str] = None,
    tags: dict[str, str] = None,
) -> ClonedConfiguration:
    """
    Clone a saved configuration under a new name.

    The source is fetched from the store, stripped of its metadata block,
    optionally given a new platform ARN and dotted overrides, then stored
    under ``target_name``.

    Raises:
        ValidationError: target_name is not a valid template name
        NameConflictError: target_name is already used by the application
    """
    if tags:
        logger.warning("Tagging saved configurations is not supported; ignoring tags %s", tags)

    if not is_valid_template_name(target_name):
        raise ValidationError(
            f"Invalid configuration name '{target_name}'. "
            "Only alphanumeric characters, hyphens (-) and underscores (_) are permitted.",
            application_name,
        )

    if get_saved_configuration(manager, application_name, target_name):
        raise NameConflictError(
            f"The configuration name '{target_name}' is already used.",
            template_name=target_name,
            application_name=application_name,
        )

    source = store.get(source_name)
    document = source.settings
    document.pop(METADATA_KEY, None)

    if platform_arn:
        platform = document.get("Platform")
        if not isinstance(platform, dict):
            platform = document["Platform"] = {}
        platform["PlatformArn"] = platform_arn

    if overrides:
        apply_overrides(document, overrides)

    dest = store.put(target_name, document)
    logger.info("Cloned configuration %s to %s (%s)", source_name, target_name, dest)

    return ClonedConfiguration(name=target_name, path=dest, settings=load_document(dest))
