class MonitorError(Exception):
    """Base exception for the CloudWatch monitor."""

    pass


class ConfigurationError(MonitorError):
    """Raised when a setting is missing or invalid."""

    pass


class IdentityResolutionError(MonitorError):
    """Raised when the instance metadata or describe lookup fails."""

    pass


class CollectionError(MonitorError):
    """Raised when local resources cannot be enumerated."""

    pass


class SubmissionError(MonitorError):
    """Raised when CloudWatch rejects or cannot receive metric data."""

    pass


class AlarmProvisioningError(MonitorError):
    """Raised when an alarm cannot be built or deployed."""

    pass
