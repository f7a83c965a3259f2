# ABOUTME: config:clone command to copy a saved configuration
# ABOUTME: Clones a saved configuration under a new name with an optional platform override

"""Config clone command - Clone a saved configuration."""

from botocore.exceptions import BotoCoreError, ClientError
from cleo.commands.command import Command
from cleo.helpers import option
from rich.console import Console

from cebenv.cli.utils.aws import aws_options, create_manager, report_error
from cebenv.cli.utils.config_store import EbCliConfigurationStore
from cebenv.cli.utils.display import display_cloned_configuration
from cebenv.cli.utils.templates import clone_configuration, resolve_platform_identifier
from cebenv.cli.utils.validators import missing_options
from cebenv.config import LocalConfig, Settings
from cebenv.utils.eb_exceptions import BeanstalkError


class ConfigCloneCommand(Command):
    name = "config:clone"
    aliases = ["cfg:clone"]
    description = "Clone a saved configuration, optionally changing its platform ARN"

    options = [
        option("from", description="Saved configuration name to clone (from 'eb config list')", flag=False),
        option("save-as", description="Name for the new configuration", flag=False),
        option("platform-arn", description="Explicit platform ARN to use. See also --platform", flag=False),
        option("platform", description="Platform name to select an ARN from (e.g. 'Node.js 20')", flag=False),
        option(
            "product",
            description="Tag 'Product' for the configuration (not supported by eb, ignored with a warning)",
            flag=False,
        ),
        option("set", description="Override a setting, e.g. Platform.PlatformArn=arn:...", flag=False, multiple=True),
        *aws_options(),
    ]

    def handle(self) -> int:
        """Execute the config:clone command."""
        console = Console()

        missing = missing_options(self, ["from", "save-as"])
        if missing:
            console.print(f"[red]Missing required option(s): {', '.join(missing)}[/red]")
            return 1

        tags = {"Product": self.option("product")} if self.option("product") else None

        try:
            settings = Settings.from_env()
            local_config = LocalConfig.load(settings.local_config_path)
            manager = create_manager(self.option("region"), self.option("aws-profile"))
            store = EbCliConfigurationStore(settings.saved_configs_dir)

            platform_arn = resolve_platform_identifier(manager, self.option("platform-arn"), self.option("platform"))

            with console.status(f"Cloning configuration {self.option('from')}..."):
                cloned = clone_configuration(
                    manager,
                    store,
                    local_config.application_name,
                    self.option("from"),
                    self.option("save-as"),
                    platform_arn=platform_arn,
                    overrides=self.option("set"),
                    tags=tags,
                )
        except (BeanstalkError, ClientError, BotoCoreError) as e:
            return report_error(console, e)

        console.print(f"[green]✓ Configuration '{cloned.name}' saved[/green]")
        display_cloned_configuration(console, cloned)
        return 0
