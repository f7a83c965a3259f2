# ABOUTME: Deploy command for the full upload, clone and launch flow
# ABOUTME: Uploads a bundle, clones a saved configuration and launches a new environment

"""Deploy command - Upload a bundle and launch an environment from a cloned configuration."""

from botocore.exceptions import BotoCoreError, ClientError
from cleo.commands.command import Command
from cleo.helpers import option
from rich.console import Console
from rich.panel import Panel

from cebenv.cli.utils.aws import aws_options, create_manager, report_error
from cebenv.cli.utils.config_store import EbCliConfigurationStore
from cebenv.cli.utils.display import display_environment, display_upload_result
from cebenv.cli.utils.environments import launch_from_template
from cebenv.cli.utils.templates import resolve_platform_identifier
from cebenv.cli.utils.upload import upload_application
from cebenv.cli.utils.validators import is_valid_template_name, missing_options
from cebenv.config import LocalConfig, Settings
from cebenv.utils.eb_exceptions import BeanstalkError, VersionExistsError


class DeployCommand(Command):
    name = "deploy"
    description = "Upload an application ZIP file, clone a saved configuration and launch a new environment"

    options = [
        option("version-label", description="Application version label (e.g. v1.2.3)", flag=False),
        option("filepath", description="Path to the application ZIP file (e.g. ./build/v1.2.3.zip)", flag=False),
        option("product", description="Tag 'Product' for the application version", flag=False),
        option("skip-if-exist", description="Skip the upload if the application version already exists", flag=True),
        option("platform-arn", description="Explicit platform ARN to use. See also --platform", flag=False),
        option("platform", description="Platform name to select an ARN from (e.g. 'Node.js 20')", flag=False),
        option("from", description="Saved configuration name to clone (from 'eb config list')", flag=False),
        option("save-as", description="Name for the new configuration", flag=False),
        option("env-name", description="Name of the environment to launch with the new configuration", flag=False),
        option("env-product", description="Tag 'Product' for the environment. Defaults to --product", flag=False),
        option("set", description="Override a setting, e.g. Platform.PlatformArn=arn:...", flag=False, multiple=True),
        *aws_options(),
    ]

    help = """Example:

  cebenv deploy --version-label v1.2.3 --filepath ./build/app.zip --product XYZ \\
    --platform 'Node.js 20' --from base-config --save-as new-config \\
    --env-name node-xyz-test --env-product 'XYZ Test'"""

    def handle(self) -> int:
        """Execute the deploy command."""
        console = Console()

        missing = missing_options(self, ["version-label", "filepath", "product", "from", "save-as", "env-name"])
        if missing:
            console.print(f"[red]Missing required option(s): {', '.join(missing)}[/red]")
            return 1

        if not is_valid_template_name(self.option("save-as")):
            console.print(
                f"[red]Invalid configuration name '{self.option('save-as')}'. "
                "Only alphanumeric characters, hyphens (-) and underscores (_) are permitted.[/red]"
            )
            return 1

        version_label = self.option("version-label")
        product = self.option("product")

        console.print(
            Panel.fit(
                f"[bold cyan]Deploying {version_label} to {self.option('env-name')}[/bold cyan]\n\n"
                f"Bundle: {self.option('filepath')}\n"
                f"Configuration: {self.option('from')} → {self.option('save-as')}",
                border_style="cyan",
                padding=(1, 2),
            )
        )

        try:
            settings = Settings.from_env()
            local_config = LocalConfig.load(settings.local_config_path)
            manager = create_manager(self.option("region"), self.option("aws-profile"))
            store = EbCliConfigurationStore(settings.saved_configs_dir)

            # Step 1: upload
            with console.status(f"Uploading {self.option('filepath')}..."):
                uploaded = upload_application(
                    manager,
                    local_config.application_name,
                    self.option("filepath"),
                    version_label,
                    explicit_bucket=settings.s3_bucket,
                    tags={"Product": product},
                    allow_existing=self.option("skip-if-exist"),
                )
            display_upload_result(console, uploaded, version_label)

            # Step 2: clone + launch
            platform_arn = resolve_platform_identifier(manager, self.option("platform-arn"), self.option("platform"))
            with console.status("Cloning configuration and creating environment..."):
                environment = launch_from_template(
                    manager,
                    store,
                    local_config.application_name,
                    self.option("env-name"),
                    self.option("from"),
                    self.option("save-as"),
                    version_label,
                    platform_arn=platform_arn,
                    overrides=self.option("set"),
                    tags={"Product": self.option("env-product") or product},
                )
        except VersionExistsError as e:
            console.print(f"[red]Error: {e.message}[/red]")
            console.print("Use the 'clone' command instead or add --skip-if-exist.")
            return 1
        except (BeanstalkError, ClientError, BotoCoreError) as e:
            return report_error(console, e)

        console.print(f"[green]✓ Environment '{self.option('env-name')}' is launching[/green]")
        display_environment(console, environment)
        return 0
