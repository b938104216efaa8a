class SiteliftProjectError(Exception):
    """Raised when no sitelift project is found in the current or parent directories."""


class ConfigurationError(Exception):
    """Raised when a website configuration is invalid. Never retried."""


class MissingStateError(Exception):
    """Raised when an operation needs an infrastructure output that was not published yet."""


class OperationError(Exception):
    """Raised when a transport-level operation (upload, delete, invalidate...) fails."""

    def __init__(self, operation: str, target: str, reason: str):
        self.operation = operation
        self.target = target
        self.reason = reason
        super().__init__(f"Failed to {operation} '{target}': {reason}")
