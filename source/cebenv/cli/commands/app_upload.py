# ABOUTME: app:upload command to register a new application version
# ABOUTME: Uploads an application ZIP file to S3 and creates the version

"""App upload command - Upload an application bundle."""

from botocore.exceptions import BotoCoreError, ClientError
from cleo.commands.command import Command
from cleo.helpers import option
from rich.console import Console

from cebenv.cli.utils.aws import aws_options, create_manager, report_error
from cebenv.cli.utils.display import display_upload_result
from cebenv.cli.utils.upload import upload_application
from cebenv.cli.utils.validators import missing_options
from cebenv.config import LocalConfig, Settings
from cebenv.utils.eb_exceptions import BeanstalkError


class AppUploadCommand(Command):
    name = "app:upload"
    description = "Upload an application ZIP file"

    options = [
        option("version-label", description="Application version label (e.g. v1.2.3)", flag=False),
        option("filepath", description="Path to the application ZIP file (e.g. ./build/v1.2.3.zip)", flag=False),
        option("product", description="Tag 'Product' for the application version", flag=False),
        *aws_options(),
    ]

    def handle(self) -> int:
        """Execute the app:upload command."""
        console = Console()

        missing = missing_options(self, ["version-label", "filepath", "product"])
        if missing:
            console.print(f"[red]Missing required option(s): {', '.join(missing)}[/red]")
            return 1

        version_label = self.option("version-label")

        try:
            settings = Settings.from_env()
            local_config = LocalConfig.load(settings.local_config_path)
            manager = create_manager(self.option("region"), self.option("aws-profile"))

            with console.status(f"Uploading {self.option('filepath')}..."):
                # Nothing runs after the upload, so an existing version is not an error here
                uploaded = upload_application(
                    manager,
                    local_config.application_name,
                    self.option("filepath"),
                    version_label,
                    explicit_bucket=settings.s3_bucket,
                    tags={"Product": self.option("product")},
                    allow_existing=True,
                )
        except (BeanstalkError, ClientError, BotoCoreError) as e:
            return report_error(console, e)

        display_upload_result(console, uploaded, version_label)
        return 0
