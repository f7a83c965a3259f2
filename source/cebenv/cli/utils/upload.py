# ABOUTME: Application bundle upload and version registration
# ABOUTME: Uploads a ZIP to S3 and registers it as an Elastic Beanstalk application version

"""Upload workflow for application versions."""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cebenv.utils.eb_exceptions import (
    ConfigurationError,
    RegistrationError,
    SourceBundleNotFoundError,
    VersionExistsError,
)

from .beanstalk import BeanstalkManager
from .tags import to_tag_list, to_tag_query

logger = logging.getLogger(__name__)


@dataclass
class UploadResult:
    """Result of a successful upload and registration."""

    s3_bucket: str
    s3_key: str
    version: dict[str, Any]

    @property
    def version_label(self) -> str:
        return self.version.get("VersionLabel", "")


def resolve_bucket(manager: BeanstalkManager, application_name: str, explicit_bucket: str = None) -> str:
    """
    Find the S3 bucket for source bundles.

    An explicit bucket wins. Otherwise reuse the bucket of the most recently
    registered version of the application.

    Raises:
        ConfigurationError: neither source yields a bucket
    """
    if explicit_bucket:
        return explicit_bucket

    versions = manager.describe_application_versions(application_name)
    bucket = (versions[0].get("SourceBundle") or {}).get("S3Bucket") if versions else None
    if not bucket:
        raise ConfigurationError(
            f"No S3 bucket found for application '{application_name}'. Set the 'aws_s3_bucket' environment variable.",
            application_name,
        )

    logger.debug("Using bucket %s from the latest version of %s", bucket, application_name)
    return bucket


def version_exists(manager: BeanstalkManager, application_name: str, version_label: str) -> bool:
    """Check if a version label is already registered for the application."""
    application = manager.describe_application(application_name)
    if not application:
        return False
    return version_label in (application.get("Versions") or [])


def upload_to_s3(
    manager: BeanstalkManager, filepath: str | Path, bucket: str, s3_key: str = None, tags: dict[str, str] = None
) -> str:
    """Upload a local file and return the S3 key it was stored under."""
    path = Path(filepath)
    if not path.exists():
        raise SourceBundleNotFoundError(f"File not found: {path}", str(path))

    key = s3_key or f"{int(time.time() * 1000)}-{path.name}"
    manager.put_object(bucket, key, path.read_bytes(), tagging=to_tag_query(tags) if tags else None)

    logger.debug("Uploaded %s to s3://%s/%s", path, bucket, key)
    return key


def upload_if_absent(
    manager: BeanstalkManager,
    filepath: str | Path,
    bucket: str,
    application_name: str,
    version_label: str,
    tags: dict[str, str] = None,
    s3_key: str = None,
) -> UploadResult | None:
    """
    Upload a bundle and register it, unless the version label already exists.

    Returns:
        UploadResult, or None when the version exists (nothing is uploaded)

    Raises:
        SourceBundleNotFoundError: the local file does not exist
        RegistrationError: the bundle was uploaded but no version came back;
            the orphaned object is left in S3 for manual cleanup
    """
    if not Path(filepath).exists():
        raise SourceBundleNotFoundError(f"File not found: {filepath}", str(filepath))

    if version_exists(manager, application_name, version_label):
        logger.info("Application version %s already exists, skipping upload", version_label)
        return None

    key = upload_to_s3(manager, filepath, bucket, s3_key=s3_key, tags=tags)

    version = manager.create_application_version(
        application_name,
        version_label,
        bucket,
        key,
        tags=to_tag_list(tags) if tags else None,
    )
    if not version:
        raise RegistrationError(
            f"Failed to create application version '{version_label}'. "
            f"The bundle was uploaded as s3://{bucket}/{key} and must be deleted manually if no longer needed.",
            s3_bucket=bucket,
            s3_key=key,
            application_name=application_name,
        )

    return UploadResult(s3_bucket=bucket, s3_key=key, version=version)


def upload_application(
    manager: BeanstalkManager,
    application_name: str,
    filepath: str | Path,
    version_label: str,
    explicit_bucket: str = None,
    tags: dict[str, str] = None,
    allow_existing: bool = False,
) -> UploadResult | None:
    """
    Resolve the bucket and upload a bundle for the given version label.

    Args:
        allow_existing: When False, an existing version label raises
            VersionExistsError instead of returning None

    Raises:
        VersionExistsError: the version exists and allow_existing is False
    """
    bucket = resolve_bucket(manager, application_name, explicit_bucket)
    result = upload_if_absent(manager, filepath, bucket, application_name, version_label, tags=tags)

    if result is None and not allow_existing:
        raise VersionExistsError(
            f"The application version label '{version_label}' already exists.",
            version_label=version_label,
            application_name=application_name,
        )
    return result
