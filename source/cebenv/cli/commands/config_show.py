# ABOUTME: config:show command to inspect configuration settings
# ABOUTME: Displays a saved configuration or the live configuration of an environment

"""Config show command - Show saved or live configuration settings."""

from botocore.exceptions import BotoCoreError, ClientError
from cleo.commands.command import Command
from cleo.helpers import option
from rich.console import Console

from cebenv.cli.utils.aws import aws_options, create_manager, report_error
from cebenv.cli.utils.display import display_configuration_settings, to_json
from cebenv.cli.utils.templates import find_saved_configuration
from cebenv.config import LocalConfig, Settings
from cebenv.utils.eb_exceptions import BeanstalkError


class ConfigShowCommand(Command):
    name = "config:show"
    description = "Show a saved configuration, or the configuration an environment is running"

    options = [
        option("name", description="Saved configuration name", flag=False),
        option("env-name", description="Environment name. Defaults to the one in config.yml", flag=False),
        option("json", description="Output in JSON format", flag=True),
        *aws_options(),
    ]

    def handle(self) -> int:
        """Execute the config:show command."""
        console = Console()

        try:
            settings = Settings.from_env()
            local_config = LocalConfig.load(settings.local_config_path)
            manager = create_manager(self.option("region"), self.option("aws-profile"))

            template_name = self.option("name")
            environment_name = None if template_name else self.option("env-name") or local_config.environment_name

            config = find_saved_configuration(
                manager,
                local_config.application_name,
                template_name=template_name,
                environment_name=environment_name,
            )
        except (BeanstalkError, ClientError, BotoCoreError) as e:
            return report_error(console, e)

        if self.option("json"):
            console.print(to_json(config), markup=False)
        else:
            display_configuration_settings(console, config)
        return 0
