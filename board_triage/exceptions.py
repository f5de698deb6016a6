"""Custom exception hierarchy for board-triage.

Exception Hierarchy:
    BoardTriageError (base)
    ├── ConfigurationError
    └── StoreError

The pure triage functions (classification, planning, roster resolution,
comment rendering) never raise; every failure a run can hit is either a
configuration problem detected before the first store call, or a store
round-trip that failed.

Example Usage:
    >>> from board_triage.exceptions import ConfigurationError
    >>> try:
    ...     settings = TriageSettings.from_env()
    ... except ConfigurationError as e:
    ...     print(e.message)
"""


class BoardTriageError(Exception):
    """Base exception for all board-triage errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(BoardTriageError):
    """Configuration-related errors.

    Raised before any store access when a required input is missing or a
    configuration file cannot be read or validated.

    Examples:
        - Store endpoint or service credential not set
        - Owner identifier not set
        - Invalid YAML syntax in a configuration file
    """

    pass


class StoreError(BoardTriageError):
    """A round-trip to the record store failed.

    Covers transport failures, non-2xx responses (permission, constraint
    violation, missing relation) and bodies that cannot be decoded. The
    triage run is aborted on the first one; there is no retry.

    Attributes:
        operation: Store operation that failed (e.g. "insert_subtasks")
        status_code: HTTP status code, if a response was received
        response_text: Response body text, if a response was received
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        status_code: int | None = None,
        response_text: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            operation: Store operation that failed
            status_code: HTTP status code (if applicable)
            response_text: Response body text (if applicable)
        """
        self.operation = operation
        self.status_code = status_code
        self.response_text = response_text

        full_message = message
        if operation:
            full_message = f"{operation}: {full_message}"
        if status_code:
            full_message = f"{full_message} (HTTP {status_code})"

        super().__init__(full_message)
        # Preserve original message
        self.message = message
