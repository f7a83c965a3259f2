# ABOUTME: Shared pytest fixtures for cebenv tests
# ABOUTME: Provides mocked AWS clients, a fake eb CLI runner and local config files

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import yaml
from botocore.exceptions import ClientError

from cebenv.cli.utils.beanstalk import BeanstalkManager

APPLICATION = "my-app"


def template_not_found(application_name: str, template_name: str) -> ClientError:
    """The error Elastic Beanstalk returns for an unknown configuration template."""
    return ClientError(
        {
            "Error": {
                "Code": "InvalidParameterValue",
                "Message": f"No Configuration Template named '{application_name}/{template_name}' found.",
            }
        },
        "DescribeConfigurationSettings",
    )


class FakeEbCli:
    """Stands in for the eb CLI: serves saved configs from a directory and records every call."""

    def __init__(self, saved_configs_dir: Path, sources: dict = None):
        self.saved_configs_dir = saved_configs_dir
        self.sources = sources or {}
        self.calls: list[list[str]] = []

    def __call__(self, args) -> str:
        args = list(args)
        self.calls.append(args)

        if args[:3] == ["eb", "config", "get"]:
            name = args[3]
            self.saved_configs_dir.mkdir(parents=True, exist_ok=True)
            path = self.saved_configs_dir / f"{name}.cfg.yml"
            path.write_text(yaml.safe_dump(self.sources[name]))
            return f"Configuration saved at: {path}\n"

        if args[:3] == ["eb", "config", "put"]:
            return ""

        raise AssertionError(f"unexpected command {args}")


@pytest.fixture
def eb_client():
    def missing_template(**kwargs):
        raise template_not_found(kwargs["ApplicationName"], kwargs.get("TemplateName", ""))

    client = MagicMock()
    # No saved configuration exists unless a test says otherwise
    client.describe_configuration_settings.side_effect = missing_template
    return client


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def manager(eb_client, s3_client):
    return BeanstalkManager(eb_client=eb_client, s3_client=s3_client)


@pytest.fixture
def saved_configs_dir(tmp_path):
    return tmp_path / ".elasticbeanstalk" / "saved_configs"


@pytest.fixture
def source_document():
    return {
        "EnvironmentConfigurationMetadata": {
            "DateCreated": "1700000000000",
            "DateModified": "1700000000000",
        },
        "Platform": {"PlatformArn": "arn:old"},
        "OptionSettings": {"aws:autoscaling:asg": {"MinSize": "1"}},
    }


@pytest.fixture
def fake_eb(saved_configs_dir, source_document):
    return FakeEbCli(saved_configs_dir, {"base-config": source_document})


@pytest.fixture
def local_config_file(tmp_path):
    path = tmp_path / ".elasticbeanstalk" / "config.yml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(
            {
                "branch-defaults": {"main": {"environment": "my-app-prod"}},
                "global": {"application_name": APPLICATION, "default_region": "us-east-1"},
            }
        )
    )
    return path
