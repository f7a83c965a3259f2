# ABOUTME: AWS session helpers shared by cebenv commands
# ABOUTME: Builds the Elastic Beanstalk manager and reports command errors consistently

"""AWS utilities for CLI commands."""

from botocore.exceptions import BotoCoreError, ClientError
from cleo.helpers import option
from rich.console import Console

from cebenv.utils.eb_exceptions import BeanstalkError, RegistrationError

from .beanstalk import BeanstalkManager


def aws_options() -> list:
    """Options every command accepts for the boto3 session."""
    return [
        option("region", description="AWS region (defaults to the AWS CLI configuration)", flag=False),
        option("aws-profile", description="AWS profile to use", flag=False),
    ]


def create_manager(region: str = None, profile: str = None) -> BeanstalkManager:
    """Create the Elastic Beanstalk manager for a command."""
    return BeanstalkManager(region=region, profile=profile)


def report_error(console: Console, error: BeanstalkError | ClientError | BotoCoreError) -> int:
    """Print an error raised by a workflow and return the exit code."""
    if isinstance(error, RegistrationError):
        console.print(f"[red]{error.message}[/red]")
        if error.get_cleanup_command():
            console.print(f"Run: [cyan]{error.get_cleanup_command()}[/cyan]")
    elif isinstance(error, BeanstalkError):
        console.print(f"[red]Error: {error.message}[/red]")
    else:
        console.print(f"[red]AWS error: {error}[/red]")
    return 1
