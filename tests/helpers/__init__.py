"""Test helper utilities for the VSONLINE project."""

from tests.helpers.tracker import HOST, FakeTracker, work_item_body

__all__ = ["HOST", "FakeTracker", "work_item_body"]
