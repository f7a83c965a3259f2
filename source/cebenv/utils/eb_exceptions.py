# ABOUTME: Custom exception classes for Elastic Beanstalk operations
# ABOUTME: Provides structured error handling for boto3 and eb CLI calls

"""Custom exceptions for Elastic Beanstalk operations."""


class BeanstalkError(Exception):
    """Base exception for all Elastic Beanstalk operations."""

    def __init__(self, message: str, application_name: str = None):
        self.message = message
        self.application_name = application_name
        super().__init__(self.message)


class ValidationError(BeanstalkError):
    """Raised when a name or an option value is malformed."""

    pass


class NameConflictError(BeanstalkError):
    """Raised when a configuration template name is already in use."""

    def __init__(self, message: str, template_name: str = None, application_name: str = None):
        super().__init__(message, application_name)
        self.template_name = template_name


class NotFoundError(BeanstalkError):
    """Raised when a saved configuration or environment does not exist."""

    pass


class SubprocessError(BeanstalkError):
    """Raised when an external command exits non-zero or cannot be started."""

    def __init__(self, message: str, command: str = None, stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.stderr = stderr


class SubprocessOutputError(BeanstalkError):
    """Raised when an external command prints something we cannot parse."""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class ConfigurationError(BeanstalkError):
    """Raised when a required local or environment setting is missing."""

    pass


class SourceBundleNotFoundError(BeanstalkError, FileNotFoundError):
    """Raised when the application bundle to upload is not on disk."""

    def __init__(self, message: str, filepath: str = None):
        super().__init__(message)
        self.filepath = filepath


class RegistrationError(BeanstalkError):
    """Raised when the bundle was uploaded but the version was not registered."""

    def __init__(self, message: str, s3_bucket: str = None, s3_key: str = None, application_name: str = None):
        super().__init__(message, application_name)
        self.s3_bucket = s3_bucket
        self.s3_key = s3_key

    def get_cleanup_command(self) -> str:
        """Get the AWS CLI command to remove the orphaned bundle."""
        if self.s3_bucket and self.s3_key:
            return f"aws s3 rm s3://{self.s3_bucket}/{self.s3_key}"
        return ""


class VersionExistsError(BeanstalkError):
    """Raised when a version label already exists and skipping was not allowed."""

    def __init__(self, message: str, version_label: str = None, application_name: str = None):
        super().__init__(message, application_name)
        self.version_label = version_label


class ProviderError(BeanstalkError):
    """Raised for any other error reported by Elastic Beanstalk or S3."""

    def __init__(self, message: str, error_code: str = None, operation: str = None):
        super().__init__(message)
        self.error_code = error_code
        self.operation = operation
