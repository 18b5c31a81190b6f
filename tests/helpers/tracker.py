"""Fake tracker serving canned work item responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

HOST = "https://acct.visualstudio.com/coll/proj/"


def work_item_body(
    work_item_id: Any = 42,
    title: str = "Add login page",
    state: str = "Active",
    work_item_type: str = "Feature",
    href: str = "https://acct.visualstudio.com/web/wi.aspx?id=42",
) -> dict[str, Any]:
    """Build a work item response body in the REST API's shape."""
    return {
        "id": work_item_id,
        "rev": 3,
        "fields": {
            "System.Title": title,
            "System.State": state,
            "System.WorkItemType": work_item_type,
            "System.AreaPath": "proj",
        },
        "_links": {
            "self": {"href": "https://acct.visualstudio.com/coll/_apis/wit/workItems/42"},
            "html": {"href": href},
        },
        "url": "https://acct.visualstudio.com/coll/_apis/wit/workItems/42",
    }


@dataclass
class FakeTracker:
    """Serves canned responses through httpx.MockTransport and records requests."""

    status_code: int = 200
    body: Any = field(default_factory=work_item_body)
    content: bytes | None = None
    error: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.body)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    @property
    def call_count(self) -> int:
        return len(self.requests)
