# ABOUTME: app:deploy command to roll the default environment to a version
# ABOUTME: Optionally uploads a bundle first, then updates the environment from config.yml

"""App deploy command - Deploy a version to the current environment."""

from botocore.exceptions import BotoCoreError, ClientError
from cleo.commands.command import Command
from cleo.helpers import option
from rich.console import Console

from cebenv.cli.utils.aws import aws_options, create_manager, report_error
from cebenv.cli.utils.display import display_environment, display_upload_result
from cebenv.cli.utils.environments import update_version
from cebenv.cli.utils.upload import upload_application
from cebenv.cli.utils.validators import missing_options
from cebenv.config import LocalConfig, Settings
from cebenv.utils.eb_exceptions import BeanstalkError, VersionExistsError


class AppDeployCommand(Command):
    name = "app:deploy"
    description = "Upload an application ZIP file (optional) and deploy it to the current environment (from 'eb list')"

    options = [
        option("version-label", description="Application version label (e.g. v1.2.3)", flag=False),
        option("filepath", description="Path to the application ZIP file to upload first", flag=False),
        option("product", description="Tag 'Product' for the application version. Required with --filepath", flag=False),
        option("skip-if-exist", description="Skip the upload if the application version already exists", flag=True),
        *aws_options(),
    ]

    def handle(self) -> int:
        """Execute the app:deploy command."""
        console = Console()

        missing = missing_options(self, ["version-label"])
        if missing:
            console.print(f"[red]Missing required option(s): {', '.join(missing)}[/red]")
            return 1

        version_label = self.option("version-label")
        filepath = self.option("filepath")
        if filepath and not self.option("product"):
            console.print("[red]The --product option is required when --filepath is provided.[/red]")
            return 1

        try:
            settings = Settings.from_env()
            local_config = LocalConfig.load(settings.local_config_path)
            if not local_config.environment_name:
                console.print(
                    f"[red]No default environment in {settings.local_config_path}. Run 'eb use <environment>' first.[/red]"
                )
                return 1

            manager = create_manager(self.option("region"), self.option("aws-profile"))

            if filepath:
                with console.status(f"Uploading {filepath}..."):
                    uploaded = upload_application(
                        manager,
                        local_config.application_name,
                        filepath,
                        version_label,
                        explicit_bucket=settings.s3_bucket,
                        tags={"Product": self.option("product")},
                        allow_existing=self.option("skip-if-exist"),
                    )
                display_upload_result(console, uploaded, version_label)

            with console.status(f"Updating {local_config.environment_name}..."):
                environment = update_version(manager, local_config.environment_name, version_label)
        except VersionExistsError as e:
            console.print(f"[red]Error: {e.message}[/red]")
            console.print("Remove the --filepath option or add --skip-if-exist.")
            return 1
        except (BeanstalkError, ClientError, BotoCoreError) as e:
            return report_error(console, e)

        console.print(f"[green]✓ Deploying {version_label} to '{local_config.environment_name}'[/green]")
        display_environment(console, environment)
        return 0
