# ABOUTME: Clone command to launch a new environment from a cloned configuration
# ABOUTME: Clones a saved configuration and creates an environment running a given version

"""Clone command - Clone a saved configuration and launch an environment from it."""

from botocore.exceptions import BotoCoreError, ClientError
from cleo.commands.command import Command
from cleo.helpers import option
from rich.console import Console
from rich.panel import Panel

from cebenv.cli.utils.aws import aws_options, create_manager, report_error
from cebenv.cli.utils.config_store import EbCliConfigurationStore
from cebenv.cli.utils.display import display_environment
from cebenv.cli.utils.environments import launch_from_template
from cebenv.cli.utils.templates import resolve_platform_identifier
from cebenv.cli.utils.validators import is_valid_template_name, missing_options
from cebenv.config import LocalConfig, Settings
from cebenv.utils.eb_exceptions import BeanstalkError


class CloneCommand(Command):
    name = "clone"
    description = "Clone a saved configuration (optionally changing the platform ARN) and launch a new environment"

    options = [
        option("version-label", description="Application version label (e.g. v1.2.3)", flag=False),
        option("platform-arn", description="Explicit platform ARN to use. See also --platform", flag=False),
        option("platform", description="Platform name to select an ARN from (e.g. 'Node.js 20')", flag=False),
        option("from", description="Saved configuration name to clone (from 'eb config list')", flag=False),
        option("save-as", description="Name for the new configuration", flag=False),
        option("env-name", description="Name of the environment to launch with the new configuration", flag=False),
        option("product", description="Tag 'Product' for the environment", flag=False),
        option("set", description="Override a setting, e.g. Platform.PlatformArn=arn:...", flag=False, multiple=True),
        *aws_options(),
    ]

    help = """Example:

  cebenv clone --version-label v1.2.3 --platform 'Node.js 20' --from base-config \\
    --save-as new-config --env-name node-xyz-test --product 'XYZ Test'"""

    def handle(self) -> int:
        """Execute the clone command."""
        console = Console()

        missing = missing_options(self, ["version-label", "from", "save-as", "env-name", "product"])
        if missing:
            console.print(f"[red]Missing required option(s): {', '.join(missing)}[/red]")
            return 1

        if not is_valid_template_name(self.option("save-as")):
            console.print(
                f"[red]Invalid configuration name '{self.option('save-as')}'. "
                "Only alphanumeric characters, hyphens (-) and underscores (_) are permitted.[/red]"
            )
            return 1

        console.print(
            Panel.fit(
                f"[bold cyan]Launching {self.option('env-name')}[/bold cyan]\n\n"
                f"Configuration: {self.option('from')} → {self.option('save-as')}\n"
                f"Version: {self.option('version-label')}",
                border_style="cyan",
                padding=(1, 2),
            )
        )

        try:
            settings = Settings.from_env()
            local_config = LocalConfig.load(settings.local_config_path)
            manager = create_manager(self.option("region"), self.option("aws-profile"))
            store = EbCliConfigurationStore(settings.saved_configs_dir)

            platform_arn = resolve_platform_identifier(manager, self.option("platform-arn"), self.option("platform"))

            with console.status("Cloning configuration and creating environment..."):
                environment = launch_from_template(
                    manager,
                    store,
                    local_config.application_name,
                    self.option("env-name"),
                    self.option("from"),
                    self.option("save-as"),
                    self.option("version-label"),
                    platform_arn=platform_arn,
                    overrides=self.option("set"),
                    tags={"Product": self.option("product")},
                )
        except (BeanstalkError, ClientError, BotoCoreError) as e:
            return report_error(console, e)

        console.print(f"[green]✓ Environment '{self.option('env-name')}' is launching[/green]")
        display_environment(console, environment)
        return 0
