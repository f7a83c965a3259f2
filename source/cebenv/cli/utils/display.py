# ABOUTME: Shared display utilities for consistent output formatting
# ABOUTME: Renders upload results, cloned configurations and environment descriptions

"""Shared display utilities for consistent output formatting across commands."""

import json
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from .templates import ClonedConfiguration
from .upload import UploadResult


def _table() -> Table:
    table = Table(box=box.SIMPLE)
    table.add_column("Setting", style="dim")
    table.add_column("Value")
    return table


def display_upload_result(console: Console, result: UploadResult | None, version_label: str) -> None:
    """Show where a bundle went, or that the version already existed."""
    if result is None:
        console.print(f"[yellow]Application version '{version_label}' already exists, upload skipped.[/yellow]")
        return

    table = _table()
    table.add_row("Version Label", result.version_label or version_label)
    table.add_row("Source Bundle", f"s3://{result.s3_bucket}/{result.s3_key}")
    table.add_row("Status", result.version.get("Status", "N/A"))
    console.print(table)


def display_cloned_configuration(console: Console, cloned: ClonedConfiguration) -> None:
    """Show a cloned saved configuration."""
    table = _table()
    table.add_row("Configuration", cloned.name)
    table.add_row("Local File", str(cloned.path))
    table.add_row("Platform ARN", cloned.platform_arn or "N/A")
    console.print(table)


def display_environment(console: Console, environment: dict[str, Any]) -> None:
    """Show the description returned by CreateEnvironment/UpdateEnvironment."""
    table = _table()
    for key in ("EnvironmentName", "EnvironmentId", "ApplicationName", "VersionLabel", "TemplateName", "Status"):
        if environment.get(key):
            table.add_row(key, str(environment[key]))
    if environment.get("CNAME"):
        table.add_row("CNAME", environment["CNAME"])
    console.print(table)


def display_configuration_settings(console: Console, settings: dict[str, Any]) -> None:
    """Show a DescribeConfigurationSettings entry, one row per option."""
    summary = _table()
    for key in ("ApplicationName", "TemplateName", "EnvironmentName", "PlatformArn", "SolutionStackName"):
        if settings.get(key):
            summary.add_row(key, str(settings[key]))
    console.print(summary)

    options = Table(box=box.SIMPLE)
    options.add_column("Namespace", style="cyan")
    options.add_column("Option")
    options.add_column("Value")
    for entry in settings.get("OptionSettings") or []:
        options.add_row(entry.get("Namespace", ""), entry.get("OptionName", ""), str(entry.get("Value", "")))
    console.print(options)


def to_json(data: Any) -> str:
    """Serialize an API response for --json output (datetimes become strings)."""
    return json.dumps(data, indent=2, default=str)
