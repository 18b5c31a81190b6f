"""Work item fetcher for Visual Studio Online trackers.

IssueFetcher turns (host, id, credentials) into an IssueRecord:

    host validated -> cache lookup by edit URL -> on miss: GET REST URL,
    parse JSON, decode, build record, store in cache

Resource Management:
    The fetcher creates an httpx.Client lazily when none is injected and
    closes only a client it created. Use as a context manager:

        with IssueFetcher() as fetcher:
            record = fetcher.fetch_issue(host, "42", TokenAuth("..."))

Errors:
    InvalidTrackerHostError is raised before any I/O. httpx.HTTPError and
    json.JSONDecodeError from the request reach the caller unchanged; no
    request is retried.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from vsonline.integrations.auth import Credentials, to_httpx_auth
from vsonline.integrations.cache import InMemoryIssueCache, IssueCache, get_from_cache_or_fetch
from vsonline.integrations.exceptions import InvalidWorkItemResponseError
from vsonline.integrations.models import IssueRecord, WorkItemPayload
from vsonline.integrations.tracker import TrackerLocation, derive_edit_url

logger = logging.getLogger(__name__)


class IssueFetcher:
    """Fetches and caches work items from a Visual Studio Online tracker.

    Attributes:
        _cache: Cache collaborator keyed by edit URL
        _http_client: HTTP client (injected or created lazily)
        _owns_client: Whether close() should close _http_client
        _timeout_seconds: Optional request timeout; None keeps the httpx default
    """

    def __init__(
        self,
        cache: IssueCache | None = None,
        http_client: httpx.Client | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            cache: Cache collaborator (defaults to an unbounded in-memory cache)
            http_client: Optional shared HTTP client; never closed by the fetcher
            timeout_seconds: Optional per-request timeout
        """
        self._cache = cache if cache is not None else InMemoryIssueCache()
        self._http_client = http_client
        self._owns_client = http_client is None
        self._timeout_seconds = timeout_seconds

    @property
    def cache(self) -> IssueCache:
        return self._cache

    def get_url(self, host: str, issue_id: str) -> str:
        """Browser link for a work item; also the cache key."""
        return derive_edit_url(host, issue_id)

    def fetch_issue(
        self,
        host: str,
        issue_id: str,
        credentials: Credentials | None = None,
    ) -> IssueRecord:
        """Fetch a work item, using the cache when possible.

        Args:
            host: Tracker host, "scheme://host/collection/project/"
            issue_id: Work item identifier
            credentials: Credentials, or None for anonymous access

        Returns:
            The normalized record

        Raises:
            InvalidTrackerHostError: If host has the wrong shape (no I/O performed)
            InvalidWorkItemResponseError: If the body is JSON but not an object
            httpx.HTTPError: For transport failures and non-success statuses
            json.JSONDecodeError: If the body is not valid JSON
        """
        location = TrackerLocation.parse(host)
        cache_key = self.get_url(host, issue_id)
        rest_url = location.rest_url(issue_id)

        return get_from_cache_or_fetch(
            self._cache,
            cache_key,
            lambda: self._fetch(rest_url, issue_id, credentials),
        )

    def _fetch(
        self,
        rest_url: str,
        issue_id: str,
        credentials: Credentials | None,
    ) -> IssueRecord:
        response = self._execute_request(rest_url, credentials)
        body: Any = response.json()
        if not isinstance(body, dict):
            raise InvalidWorkItemResponseError(issue_id, type(body).__name__)
        payload = WorkItemPayload.from_json(body)
        return IssueRecord.from_payload(payload, issue_id)

    def _execute_request(self, url: str, credentials: Credentials | None) -> httpx.Response:
        """Perform the GET request.

        Raises:
            httpx.HTTPStatusError: If the response status is not successful
            httpx.HTTPError: For other transport failures
        """
        kwargs: dict[str, Any] = {"headers": {"Accept": "application/json"}}
        auth = to_httpx_auth(credentials)
        if auth is not None:
            kwargs["auth"] = auth
        if self._timeout_seconds is not None:
            kwargs["timeout"] = httpx.Timeout(self._timeout_seconds)

        logger.debug(f"GET {url}")
        response = self._get_client().get(url, **kwargs)
        response.raise_for_status()
        return response

    def _get_client(self) -> httpx.Client:
        if self._http_client is None:
            self._http_client = httpx.Client()
        return self._http_client

    def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    def __enter__(self) -> IssueFetcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = [
    "IssueFetcher",
]
