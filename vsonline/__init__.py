"""VSOnline Issues - work item lookup for Visual Studio Online trackers.

This package fetches a single work item from a Visual Studio Online
(Azure DevOps) REST API and normalizes it into an IssueRecord, caching
results by the work item's edit URL.
"""

import logging

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
]
