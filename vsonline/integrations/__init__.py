"""Visual Studio Online work item integration.

This package contains:
- tracker: Host validation and edit/REST URL derivation
- models: Typed response decode and the normalized IssueRecord
- auth: Credentials (NoAuth, BasicAuth, TokenAuth)
- cache: Cache collaborators and the cache-or-fetch helper
- fetcher: IssueFetcher
- exceptions: Integration exception hierarchy
"""

from vsonline.integrations.auth import (
    AuthenticationManager,
    BasicAuth,
    Credentials,
    NoAuth,
    TokenAuth,
)
from vsonline.integrations.cache import (
    FileBasedIssueCache,
    InMemoryIssueCache,
    IssueCache,
    create_cache,
    get_from_cache_or_fetch,
)
from vsonline.integrations.exceptions import (
    InvalidTrackerHostError,
    InvalidWorkItemResponseError,
    IssueFetchError,
)
from vsonline.integrations.fetcher import IssueFetcher
from vsonline.integrations.models import IssueRecord, WorkItemPayload
from vsonline.integrations.tracker import TrackerLocation, derive_edit_url

__all__ = [
    # Fetcher
    "IssueFetcher",
    # Models
    "IssueRecord",
    "WorkItemPayload",
    "TrackerLocation",
    "derive_edit_url",
    # Credentials
    "AuthenticationManager",
    "Credentials",
    "NoAuth",
    "BasicAuth",
    "TokenAuth",
    # Cache
    "IssueCache",
    "InMemoryIssueCache",
    "FileBasedIssueCache",
    "create_cache",
    "get_from_cache_or_fetch",
    # Exceptions
    "IssueFetchError",
    "InvalidTrackerHostError",
    "InvalidWorkItemResponseError",
]
