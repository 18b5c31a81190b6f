"""Tracker location parsing and URL derivation.

A tracker host is configured as "scheme://host/collection/project/", e.g.
https://account.visualstudio.com/DefaultCollection/MyProject/. Two URLs are
derived from it:

- the edit URL, the browser link for a work item, which also serves as the
  cache key:  {host}_workitems/edit/{id}
- the REST URL, which drops the project segment:
  {origin}/{collection}/_apis/wit/workitems/{id}?$expand=all&api-version=1.0

See:
http://www.visualstudio.com/en-us/integrate/reference/reference-vso-work-item-work-items-vsi#byids
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from vsonline.integrations.exceptions import InvalidTrackerHostError

# REST API version sent with every request
API_VERSION = "1.0"

URL_TEMPLATE_GET_ISSUE = (
    "{origin}/{collection}/_apis/wit/workitems/{issue_id}?$expand=all&api-version={api_version}"
)

EDIT_URL_PATH = "_workitems/edit/"

# origin / collection / project /
# Matched against the whole host; no whitespace anywhere.
# The collection may span several segments; the project is always the last one.
_HOST_PATTERN = re.compile(r"(https?://[^/\s]+)/(\S+)/([^/\s]+)/")


def derive_edit_url(host: str, issue_id: str) -> str:
    """Build the browser link for a work item.

    Pure concatenation, no validation: the host is expected to end with "/".

    Args:
        host: Tracker host, "scheme://host/collection/project/"
        issue_id: Work item identifier

    Returns:
        The edit URL, e.g. https://acct.visualstudio.com/coll/proj/_workitems/edit/42
    """
    return f"{host}{EDIT_URL_PATH}{issue_id}"


@dataclass(frozen=True)
class TrackerLocation:
    """A validated tracker host split into its components.

    Attributes:
        host: The original host string
        origin: Scheme and authority only (no path)
        collection: Collection segment(s)
        project: Project segment
    """

    host: str
    origin: str
    collection: str
    project: str

    @classmethod
    def parse(cls, host: str) -> TrackerLocation:
        """Parse a tracker host string.

        Args:
            host: Tracker host, "scheme://host/collection/project/"

        Returns:
            Parsed TrackerLocation

        Raises:
            InvalidTrackerHostError: If the host does not match the expected shape
        """
        match = _HOST_PATTERN.fullmatch(host)
        if not match:
            raise InvalidTrackerHostError(host)
        origin, collection, project = match.groups()
        return cls(host=host, origin=origin, collection=collection, project=project)

    def edit_url(self, issue_id: str) -> str:
        """Browser link for a work item on this tracker."""
        return derive_edit_url(self.host, issue_id)

    def rest_url(self, issue_id: str, api_version: str = API_VERSION) -> str:
        """REST endpoint for a single work item on this tracker."""
        return URL_TEMPLATE_GET_ISSUE.format(
            origin=self.origin,
            collection=self.collection,
            issue_id=issue_id,
            api_version=api_version,
        )


__all__ = [
    "API_VERSION",
    "EDIT_URL_PATH",
    "URL_TEMPLATE_GET_ISSUE",
    "TrackerLocation",
    "derive_edit_url",
]
