# ABOUTME: Elastic Beanstalk and S3 manager using boto3 SDK
# ABOUTME: Wraps the describe/create/update calls used by the cebenv workflows

"""Elastic Beanstalk manager for boto3-based operations."""

import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError

from cebenv.utils.eb_exceptions import NotFoundError, ProviderError

logger = logging.getLogger(__name__)

# Message fragments Elastic Beanstalk uses for missing templates/environments
NOT_FOUND_MARKERS = (
    "No Configuration Template named",
    "No Environment found",
    "No Application named",
)


class BeanstalkManager:
    """
    Centralized Elastic Beanstalk and S3 operations.

    Every method issues exactly one API call and translates botocore
    ClientErrors into cebenv exceptions.
    """

    def __init__(self, region: str = None, profile: str = None, eb_client=None, s3_client=None):
        """
        Initialize Elastic Beanstalk manager.

        Args:
            region: Optional AWS region, defaults to the session's region
            profile: Optional AWS profile name
            eb_client: Pre-built elasticbeanstalk client (tests)
            s3_client: Pre-built s3 client (tests)
        """
        self.region = region
        self.profile = profile
        self._session = None
        self._eb_client = eb_client
        self._s3_client = s3_client

    @property
    def session(self):
        """Lazy-loaded boto3 session."""
        if not self._session:
            kwargs = {}
            if self.region:
                kwargs["region_name"] = self.region
            if self.profile:
                kwargs["profile_name"] = self.profile
            self._session = boto3.Session(**kwargs)
        return self._session

    @property
    def eb_client(self):
        """Lazy-loaded Elastic Beanstalk client."""
        if not self._eb_client:
            self._eb_client = self.session.client("elasticbeanstalk")
        return self._eb_client

    @property
    def s3_client(self):
        """Lazy-loaded S3 client for source bundles."""
        if not self._s3_client:
            self._s3_client = self.session.client("s3")
        return self._s3_client

    def _call(self, client, operation: str, **params) -> dict[str, Any]:
        logger.debug("%s(%s)", operation, ", ".join(sorted(params)))
        try:
            return getattr(client, operation)(**params)
        except ClientError as e:
            error_code = e.response["Error"].get("Code", "")
            error_message = e.response["Error"].get("Message", str(e))

            if any(marker in error_message for marker in NOT_FOUND_MARKERS):
                raise NotFoundError(error_message) from e
            raise ProviderError(f"{operation} failed: {error_message}", error_code=error_code, operation=operation) from e

    # Applications and versions

    def describe_application(self, application_name: str) -> dict[str, Any] | None:
        """Describe one application, or None if it does not exist."""
        response = self._call(self.eb_client, "describe_applications", ApplicationNames=[application_name])
        applications = response.get("Applications") or []
        return applications[0] if applications else None

    def describe_application_versions(self, application_name: str) -> list[dict[str, Any]]:
        """List registered versions, most recent first."""
        response = self._call(self.eb_client, "describe_application_versions", ApplicationName=application_name)
        return response.get("ApplicationVersions") or []

    def create_application_version(
        self,
        application_name: str,
        version_label: str,
        s3_bucket: str,
        s3_key: str,
        tags: list[dict[str, str]] = None,
    ) -> dict[str, Any] | None:
        """Register a version for an uploaded bundle. Returns the ApplicationVersion description."""
        params = {
            "ApplicationName": application_name,
            "VersionLabel": version_label,
            "SourceBundle": {"S3Bucket": s3_bucket, "S3Key": s3_key},
        }
        if tags:
            params["Tags"] = tags

        response = self._call(self.eb_client, "create_application_version", **params)
        return response.get("ApplicationVersion")

    def put_object(self, bucket: str, key: str, body: bytes, tagging: str = None) -> dict[str, Any]:
        """Store a source bundle in S3."""
        params = {"Bucket": bucket, "Key": key, "Body": body}
        if tagging:
            params["Tagging"] = tagging
        return self._call(self.s3_client, "put_object", **params)

    # Configuration templates

    def describe_configuration_settings(
        self, application_name: str, template_name: str = None, environment_name: str = None
    ) -> dict[str, Any] | None:
        """
        Describe the settings of a saved configuration or a running environment.

        Raises:
            NotFoundError: the template or environment does not exist
        """
        params = {"ApplicationName": application_name}
        if template_name:
            params["TemplateName"] = template_name
        if environment_name:
            params["EnvironmentName"] = environment_name

        response = self._call(self.eb_client, "describe_configuration_settings", **params)
        settings = response.get("ConfigurationSettings") or []
        return settings[0] if settings else None

    def list_platform_versions(
        self, platform_name: str = None, next_token: str = None
    ) -> tuple[list[dict[str, Any]], str | None]:
        """List one page of platform versions, optionally filtered by a name fragment."""
        params = {}
        if platform_name:
            params["Filters"] = [{"Type": "PlatformName", "Operator": "contains", "Values": [platform_name]}]
        if next_token:
            params["NextToken"] = next_token

        response = self._call(self.eb_client, "list_platform_versions", **params)
        return response.get("PlatformSummaryList") or [], response.get("NextToken")

    # Environments

    def create_environment(self, **params) -> dict[str, Any]:
        """Launch a new environment."""
        return self._call(self.eb_client, "create_environment", **params)

    def update_environment(self, environment_name: str, version_label: str) -> dict[str, Any]:
        """Deploy a version label to an existing environment."""
        return self._call(
            self.eb_client, "update_environment", EnvironmentName=environment_name, VersionLabel=version_label
        )
