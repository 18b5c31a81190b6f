"""Data models for work items.

This module defines the typed decode of the work item REST response and
the normalized IssueRecord handed to callers.

The response is decoded once into WorkItemPayload. Any missing or
malformed container or field becomes None; only the top-level body has
to be a JSON object.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

# Names of the normalized record fields
SUMMARY_FIELD = "summary"
STATE_FIELD = "state"
TYPE_FIELD = "type"
HREF_FIELD = "href"

# Work item type that marks a record as a feature request (exact match)
FEATURE_TYPE = "Feature"

# Response containers
_CONTAINER_FIELDS = "fields"
_CONTAINER_LINKS = "_links"
_CONTAINER_HTML = "html"

# Keys inside the "fields" container
_FIELD_TITLE = "System.Title"
_FIELD_STATE = "System.State"
_FIELD_TYPE = "System.WorkItemType"
_FIELD_HREF = "href"


def _container(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    """Return a nested object, or an empty mapping if absent or not an object."""
    value = data.get(name)
    if isinstance(value, Mapping):
        return value
    return {}


def _string_field(data: Mapping[str, Any], name: str) -> str | None:
    """Return a string field, or None if absent or not a string."""
    value = data.get(name)
    if isinstance(value, str):
        return value
    return None


@dataclass(frozen=True)
class WorkItemPayload:
    """The subset of a work item REST response this package consumes.

    Attributes:
        id: Top-level "id", stringified (None if absent)
        title: fields["System.Title"]
        state: fields["System.State"]
        work_item_type: fields["System.WorkItemType"]
        html_href: _links.html.href
    """

    id: str | None = None
    title: str | None = None
    state: str | None = None
    work_item_type: str | None = None
    html_href: str | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> WorkItemPayload:
        """Decode a parsed response body.

        Args:
            data: The response body as a JSON object

        Returns:
            Decoded payload; absent values are None
        """
        fields = _container(data, _CONTAINER_FIELDS)
        html = _container(_container(data, _CONTAINER_LINKS), _CONTAINER_HTML)

        raw_id = data.get("id")
        return cls(
            id=str(raw_id) if raw_id is not None else None,
            title=_string_field(fields, _FIELD_TITLE),
            state=_string_field(fields, _FIELD_STATE),
            work_item_type=_string_field(fields, _FIELD_TYPE),
            html_href=_string_field(html, _FIELD_HREF),
        )


@dataclass(frozen=True)
class IssueRecord:
    """Normalized work item returned to callers.

    Attributes:
        id: Work item identifier
        fields: Read-only mapping of summary, state, type and href
        resolved: Whether the work item is resolved
        feature_request: True when the work item type is exactly "Feature"
        url: Browser link reported by the tracker (same value as fields["href"])
    """

    id: str
    fields: Mapping[str, str | None] = field(default_factory=dict, hash=False)
    resolved: bool = False
    feature_request: bool = False
    url: str | None = None

    def __post_init__(self) -> None:
        # Freeze a private copy so callers cannot mutate a cached record
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def from_payload(cls, payload: WorkItemPayload, issue_id: str) -> IssueRecord:
        """Build a record from a decoded response.

        Args:
            payload: Decoded work item response
            issue_id: Requested identifier, used when the response has no id

        Returns:
            Normalized IssueRecord
        """
        return cls(
            id=payload.id if payload.id is not None else issue_id,
            fields={
                SUMMARY_FIELD: payload.title,
                STATE_FIELD: payload.state,
                TYPE_FIELD: payload.work_item_type,
                HREF_FIELD: payload.html_href,
            },
            # TODO: derive from the state category once the API version exposes it
            resolved=False,
            feature_request=payload.work_item_type == FEATURE_TYPE,
            url=payload.html_href,
        )

    @property
    def summary(self) -> str | None:
        return self.fields.get(SUMMARY_FIELD)

    @property
    def state(self) -> str | None:
        return self.fields.get(STATE_FIELD)

    @property
    def type(self) -> str | None:
        return self.fields.get(TYPE_FIELD)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "fields": dict(self.fields),
            "resolved": self.resolved,
            "feature_request": self.feature_request,
            "url": self.url,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IssueRecord:
        """Rebuild a record produced by to_dict().

        Raises:
            KeyError: If "id" is missing
            TypeError: If "fields" is not a mapping
        """
        return cls(
            id=data["id"],
            fields=dict(data.get("fields") or {}),
            resolved=bool(data.get("resolved", False)),
            feature_request=bool(data.get("feature_request", False)),
            url=data.get("url"),
        )


__all__ = [
    "FEATURE_TYPE",
    "HREF_FIELD",
    "STATE_FIELD",
    "SUMMARY_FIELD",
    "TYPE_FIELD",
    "IssueRecord",
    "WorkItemPayload",
]
