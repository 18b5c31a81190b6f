"""Custom exceptions for work item fetching.

This module defines the exception hierarchy raised by the integrations
package itself:
- IssueFetchError: Base exception for fetch failures raised here
- InvalidTrackerHostError: Tracker host does not have the expected shape
- InvalidWorkItemResponseError: Response body is JSON but not an object

Transport errors (httpx.HTTPError) and JSON syntax errors
(json.JSONDecodeError) are not wrapped; they reach the caller unchanged.
"""

from __future__ import annotations


class IssueFetchError(Exception):
    """Base exception for work item fetch failures.

    All integration-level exceptions inherit from this class,
    enabling catch-all error handling when needed.
    """

    pass


class InvalidTrackerHostError(IssueFetchError, ValueError):
    """Raised when the tracker host does not match the expected URL shape.

    The expected shape is "scheme://host/collection/project/" (trailing
    slash included). Raised before any network access.

    Attributes:
        host: The rejected host string
    """

    def __init__(self, host: str, message: str | None = None) -> None:
        """Initialize InvalidTrackerHostError.

        Args:
            host: The rejected host string
            message: Optional custom message (auto-generated if not provided)
        """
        self.host = host
        if message is None:
            message = f"Wrong host for issue tracker provided: [{host}]"
        super().__init__(message)


class InvalidWorkItemResponseError(IssueFetchError, ValueError):
    """Raised when the response body parses as JSON but is not an object.

    Attributes:
        issue_id: The work item that was requested
        body_type: Name of the JSON type that was received
    """

    def __init__(self, issue_id: str, body_type: str, message: str | None = None) -> None:
        self.issue_id = issue_id
        self.body_type = body_type
        if message is None:
            message = f"Work item {issue_id}: expected a JSON object, got {body_type}"
        super().__init__(message)
