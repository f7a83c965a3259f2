# ABOUTME: Environment launch and version update operations
# ABOUTME: Launches environments from cloned configurations or redeploys a version label

"""Environment workflow."""

import logging
from collections.abc import Iterable
from typing import Any

from .beanstalk import BeanstalkManager
from .config_store import ConfigurationStore
from .tags import to_tag_list
from .templates import clone_configuration

logger = logging.getLogger(__name__)


def launch_from_template(
    manager: BeanstalkManager,
    store: ConfigurationStore,
    application_name: str,
    environment_name: str,
    source_name: str,
    template_name: str,
    version_label: str,
    platform_arn: str = None,
    overrides: Iterable[str] = None,
    tags: dict[str, str] = None,
) -> dict[str, Any]:
    """
    Clone ``source_name`` into ``template_name`` and launch an environment from it.

    Cloning always runs first; if it fails no environment is created.
    Tags are applied to the environment only.
    """
    clone_configuration(
        manager,
        store,
        application_name,
        source_name,
        template_name,
        platform_arn=platform_arn,
        overrides=overrides,
    )

    params = {
        "ApplicationName": application_name,
        "EnvironmentName": environment_name,
        # CNAMEPrefix omitted: Elastic Beanstalk assigns a random domain
        "TemplateName": template_name,
        "VersionLabel": version_label,
    }
    if tags:
        params["Tags"] = to_tag_list(tags)

    logger.info("Creating environment %s from %s", environment_name, template_name)
    return manager.create_environment(**params)


def update_version(manager: BeanstalkManager, environment_name: str, version_label: str) -> dict[str, Any]:
    """Deploy ``version_label`` to an existing environment.

    The label is not checked here; Elastic Beanstalk rejects unknown labels.
    """
    logger.info("Updating environment %s to version %s", environment_name, version_label)
    return manager.update_environment(environment_name, version_label)
