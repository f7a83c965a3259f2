# ABOUTME: Tests for the cebenv command-line commands
# ABOUTME: Drives commands through cleo's CommandTester with mocked AWS clients and eb CLI

import json
from io import StringIO
from unittest.mock import patch

import pytest
import yaml
from botocore.exceptions import ClientError
from cleo.testers.command_tester import CommandTester
from rich.console import Console

from cebenv.cli import create_application
from cebenv.cli.commands import ConfigCloneCommand
from cebenv.cli.utils.aws import report_error
from cebenv.cli.utils.config_store import EbCliConfigurationStore
from cebenv.utils.eb_exceptions import RegistrationError

APPLICATION = "my-app"


@pytest.fixture
def application():
    return create_application()


@pytest.fixture
def local_project(monkeypatch, local_config_file):
    monkeypatch.setenv("aws_eb_local_config_path", str(local_config_file))
    monkeypatch.delenv("aws_s3_bucket", raising=False)
    monkeypatch.delenv("AWS_S3_BUCKET", raising=False)
    return local_config_file


def _command_tester(application, name):
    return CommandTester(application.find(name))


class TestApplication:
    """Command registration"""

    def test_all_commands_registered(self, application):
        for name in ["clone", "deploy", "config:clone", "config:show", "app:upload", "app:deploy"]:
            assert application.has(name), name

    def test_config_clone_alias(self, application):
        assert isinstance(application.find("cfg:clone"), ConfigCloneCommand)


class TestAppDeployCommand:
    """app:deploy against the default environment"""

    def test_updates_default_environment(self, application, local_project, manager, eb_client):
        eb_client.update_environment.return_value = {"EnvironmentName": "my-app-prod", "VersionLabel": "v2"}

        with patch("cebenv.cli.commands.app_deploy.create_manager", return_value=manager):
            status = _command_tester(application, "app:deploy").execute("--version-label v2")

        assert status == 0
        eb_client.update_environment.assert_called_once_with(EnvironmentName="my-app-prod", VersionLabel="v2")

    def test_missing_version_label(self, application, local_project, eb_client):
        assert _command_tester(application, "app:deploy").execute("") == 1
        eb_client.update_environment.assert_not_called()

    def test_filepath_requires_product(self, application, local_project, manager, eb_client, tmp_path):
        with patch("cebenv.cli.commands.app_deploy.create_manager", return_value=manager):
            status = _command_tester(application, "app:deploy").execute(f"--version-label v2 --filepath {tmp_path / 'a.zip'}")

        assert status == 1
        eb_client.update_environment.assert_not_called()

    def test_missing_local_config(self, application, monkeypatch, tmp_path):
        monkeypatch.setenv("aws_eb_local_config_path", str(tmp_path / "nowhere" / "config.yml"))

        assert _command_tester(application, "app:deploy").execute("--version-label v2") == 1

    def test_provider_error_exit_code(self, application, local_project, manager, eb_client):
        eb_client.update_environment.side_effect = ClientError(
            {"Error": {"Code": "InvalidParameterValue", "Message": "No Application Version named 'v2' found."}},
            "UpdateEnvironment",
        )

        with patch("cebenv.cli.commands.app_deploy.create_manager", return_value=manager):
            assert _command_tester(application, "app:deploy").execute("--version-label v2") == 1


class TestConfigCloneCommand:
    """config:clone through a fake eb CLI"""

    def test_clone(self, application, local_project, manager, fake_eb, saved_configs_dir):
        store = EbCliConfigurationStore(saved_configs_dir, runner=fake_eb)

        with (
            patch("cebenv.cli.commands.config_clone.create_manager", return_value=manager),
            patch("cebenv.cli.commands.config_clone.EbCliConfigurationStore", return_value=store),
        ):
            status = _command_tester(application, "cfg:clone").execute(
                "--from base-config --save-as new-config --platform-arn arn:new "
                "--set OptionSettings.aws:autoscaling:asg.MaxSize=4"
            )

        assert status == 0
        saved = yaml.safe_load((saved_configs_dir / "new-config.cfg.yml").read_text())
        assert saved["Platform"]["PlatformArn"] == "arn:new"
        assert saved["OptionSettings"]["aws:autoscaling:asg"]["MaxSize"] == "4"
        assert "EnvironmentConfigurationMetadata" not in saved

    def test_missing_options(self, application, local_project, fake_eb):
        assert _command_tester(application, "config:clone").execute("--from base-config") == 1
        assert fake_eb.calls == []

    def test_invalid_name(self, application, local_project, manager, fake_eb, saved_configs_dir):
        store = EbCliConfigurationStore(saved_configs_dir, runner=fake_eb)

        with (
            patch("cebenv.cli.commands.config_clone.create_manager", return_value=manager),
            patch("cebenv.cli.commands.config_clone.EbCliConfigurationStore", return_value=store),
        ):
            status = _command_tester(application, "config:clone").execute("--from base-config --save-as bad.name")

        assert status == 1
        assert fake_eb.calls == []


class TestDeployCommand:
    """Full upload, clone and launch flow"""

    def test_deploy(self, application, local_project, manager, eb_client, s3_client, fake_eb, saved_configs_dir, tmp_path):
        bundle = tmp_path / "app.zip"
        bundle.write_bytes(b"zip")
        store = EbCliConfigurationStore(saved_configs_dir, runner=fake_eb)
        eb_client.describe_application_versions.return_value = {
            "ApplicationVersions": [{"VersionLabel": "v2", "SourceBundle": {"S3Bucket": "bundles", "S3Key": "2-app.zip"}}]
        }
        eb_client.describe_applications.return_value = {"Applications": [{"Versions": []}]}
        eb_client.create_application_version.return_value = {"ApplicationVersion": {"VersionLabel": "v3"}}
        eb_client.create_environment.return_value = {"EnvironmentName": "node-xyz-test", "Status": "Launching"}

        with (
            patch("cebenv.cli.commands.deploy.create_manager", return_value=manager),
            patch("cebenv.cli.commands.deploy.EbCliConfigurationStore", return_value=store),
        ):
            status = _command_tester(application, "deploy").execute(
                f"--version-label v3 --filepath {bundle} --product XYZ --from base-config "
                "--save-as new-config --env-name node-xyz-test"
            )

        assert status == 0
        # No aws_s3_bucket set: the latest version's bucket is reused
        assert s3_client.put_object.call_args.kwargs["Bucket"] == "bundles"
        assert s3_client.put_object.call_args.kwargs["Tagging"] == "Product=XYZ"
        # Environment tag falls back to --product
        assert eb_client.create_environment.call_args.kwargs["Tags"] == [{"Key": "Product", "Value": "XYZ"}]
        assert eb_client.create_environment.call_args.kwargs["TemplateName"] == "new-config"

    def test_existing_version_is_rejected(
        self, application, local_project, monkeypatch, manager, eb_client, s3_client, tmp_path
    ):
        monkeypatch.setenv("aws_s3_bucket", "bundles")
        bundle = tmp_path / "app.zip"
        bundle.write_bytes(b"zip")
        eb_client.describe_applications.return_value = {"Applications": [{"Versions": ["v3"]}]}

        with patch("cebenv.cli.commands.deploy.create_manager", return_value=manager):
            status = _command_tester(application, "deploy").execute(
                f"--version-label v3 --filepath {bundle} --product XYZ --from base-config "
                "--save-as new-config --env-name node-xyz-test"
            )

        assert status == 1
        s3_client.put_object.assert_not_called()
        eb_client.create_environment.assert_not_called()

    def test_invalid_target_name_stops_before_upload(
        self, application, local_project, monkeypatch, manager, eb_client, s3_client, fake_eb, tmp_path
    ):
        monkeypatch.setenv("aws_s3_bucket", "bundles")
        bundle = tmp_path / "app.zip"
        bundle.write_bytes(b"zip")

        with patch("cebenv.cli.commands.deploy.create_manager", return_value=manager) as create_manager:
            status = _command_tester(application, "deploy").execute(
                f"--version-label v3 --filepath {bundle} --product XYZ --from base-config "
                "--save-as bad.name --env-name node-xyz-test"
            )

        assert status == 1
        create_manager.assert_not_called()
        s3_client.put_object.assert_not_called()
        eb_client.create_application_version.assert_not_called()
        assert fake_eb.calls == []


class TestCloneCommand:
    """clone: configuration copy followed by an environment launch"""

    def test_clones_then_launches_with_tags(
        self, application, local_project, manager, eb_client, s3_client, fake_eb, saved_configs_dir
    ):
        store = EbCliConfigurationStore(saved_configs_dir, runner=fake_eb)
        launched_after = []

        def create_environment(**params):
            launched_after.append(list(fake_eb.calls))
            return {"EnvironmentName": params["EnvironmentName"], "Status": "Launching"}

        eb_client.create_environment.side_effect = create_environment

        with (
            patch("cebenv.cli.commands.clone.create_manager", return_value=manager),
            patch("cebenv.cli.commands.clone.EbCliConfigurationStore", return_value=store),
        ):
            status = _command_tester(application, "clone").execute(
                "--version-label v1 --from base-config --save-as qa-config --env-name my-app-qa --product 'XYZ Test'"
            )

        assert status == 0
        # The configuration was stored before the environment was requested
        assert launched_after == [[["eb", "config", "get", "base-config"], ["eb", "config", "put", "qa-config"]]]
        assert eb_client.create_environment.call_args.kwargs["Tags"] == [{"Key": "Product", "Value": "XYZ Test"}]
        saved = yaml.safe_load((saved_configs_dir / "qa-config.cfg.yml").read_text())
        assert "Tags" not in saved
        s3_client.put_object.assert_not_called()
        eb_client.create_application_version.assert_not_called()

    def test_invalid_target_name(self, application, local_project, fake_eb, eb_client):
        with patch("cebenv.cli.commands.clone.create_manager") as create_manager:
            status = _command_tester(application, "clone").execute(
                "--version-label v1 --from base-config --save-as 'bad name' --env-name my-app-qa --product XYZ"
            )

        assert status == 1
        create_manager.assert_not_called()
        assert fake_eb.calls == []


class TestAppUploadCommand:
    """app:upload treats an existing label as success"""

    def test_existing_label_succeeds(
        self, application, local_project, monkeypatch, manager, eb_client, s3_client, tmp_path, capsys
    ):
        monkeypatch.setenv("aws_s3_bucket", "bundles")
        bundle = tmp_path / "app.zip"
        bundle.write_bytes(b"zip")
        eb_client.describe_applications.return_value = {"Applications": [{"Versions": ["v1"]}]}

        with patch("cebenv.cli.commands.app_upload.create_manager", return_value=manager):
            status = _command_tester(application, "app:upload").execute(
                f"--version-label v1 --filepath {bundle} --product XYZ"
            )

        assert status == 0
        assert "already exists" in capsys.readouterr().out
        s3_client.put_object.assert_not_called()

    def test_new_label_is_uploaded(
        self, application, local_project, monkeypatch, manager, eb_client, s3_client, tmp_path
    ):
        monkeypatch.setenv("aws_s3_bucket", "bundles")
        bundle = tmp_path / "app.zip"
        bundle.write_bytes(b"zip")
        eb_client.describe_applications.return_value = {"Applications": [{"Versions": []}]}
        eb_client.create_application_version.return_value = {"ApplicationVersion": {"VersionLabel": "v2"}}

        with patch("cebenv.cli.commands.app_upload.create_manager", return_value=manager):
            status = _command_tester(application, "app:upload").execute(
                f"--version-label v2 --filepath {bundle} --product XYZ"
            )

        assert status == 0
        assert s3_client.put_object.call_args.kwargs["Bucket"] == "bundles"
        eb_client.create_application_version.assert_called_once()


class TestConfigShowCommand:
    """config:show for saved and live configurations"""

    def _settings(self, eb_client, **entry):
        eb_client.describe_configuration_settings.side_effect = None
        eb_client.describe_configuration_settings.return_value = {"ConfigurationSettings": [entry]}

    def test_named_template(self, application, local_project, manager, eb_client):
        self._settings(eb_client, ApplicationName=APPLICATION, TemplateName="base-config")

        with patch("cebenv.cli.commands.config_show.create_manager", return_value=manager):
            status = _command_tester(application, "config:show").execute("--name base-config --env-name ignored")

        assert status == 0
        eb_client.describe_configuration_settings.assert_called_once_with(
            ApplicationName=APPLICATION, TemplateName="base-config"
        )

    def test_defaults_to_local_environment(self, application, local_project, manager, eb_client):
        self._settings(eb_client, ApplicationName=APPLICATION, EnvironmentName="my-app-prod")

        with patch("cebenv.cli.commands.config_show.create_manager", return_value=manager):
            status = _command_tester(application, "config:show").execute("")

        assert status == 0
        eb_client.describe_configuration_settings.assert_called_once_with(
            ApplicationName=APPLICATION, EnvironmentName="my-app-prod"
        )

    def test_json_output(self, application, local_project, manager, eb_client, capsys):
        self._settings(eb_client, ApplicationName=APPLICATION, TemplateName="base-config", PlatformArn="arn:old")

        with patch("cebenv.cli.commands.config_show.create_manager", return_value=manager):
            status = _command_tester(application, "config:show").execute("--name base-config --json")

        assert status == 0
        out = capsys.readouterr().out
        assert json.loads(out) == {"ApplicationName": APPLICATION, "TemplateName": "base-config", "PlatformArn": "arn:old"}

    def test_missing_template(self, application, local_project, manager, capsys):
        with patch("cebenv.cli.commands.config_show.create_manager", return_value=manager):
            status = _command_tester(application, "config:show").execute("--name nope")

        assert status == 1
        assert "not found" in capsys.readouterr().out


class TestReportError:
    """Error rendering shared by every command"""

    def test_provider_errors(self):
        console = Console(file=StringIO(), width=200)

        assert report_error(console, ClientError({"Error": {"Code": "Throttling", "Message": "Slow down"}}, "Op")) == 1
        assert "AWS error" in console.file.getvalue()

    def test_registration_cleanup_hint(self):
        console = Console(file=StringIO(), width=200)
        error = RegistrationError("Failed to register", s3_bucket="bundles", s3_key="1-app.zip")

        assert report_error(console, error) == 1
        assert "aws s3 rm s3://bundles/1-app.zip" in console.file.getvalue()
