class ReportingError(Exception):
    """Base class for errors raised by the reporting layer itself."""


class ValidationError(ReportingError):
    """An argument was rejected before any database access."""


class AccessDenied(ReportingError):
    """The caller's permission level does not unlock the requested data."""

    def __init__(self, message: str, required_level: int, level=None):
        super().__init__(message)
        self.required_level = required_level
        self.level = level
