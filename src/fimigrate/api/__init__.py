"""fimigrate.api -- document service transport and endpoint wrappers.

* :mod:`.rate_limit` -- token bucket rate limiter.
* :mod:`.retries` -- retry decision logic and exponential backoff.
* :mod:`.transport` -- HTTP transport with auth, retries, and rate limiting.
* :mod:`.documents` -- document endpoints.
* :mod:`.options` -- option endpoints (notice flags).
"""

from __future__ import annotations

from .documents import DocumentAPI
from .options import OptionAPI
from .rate_limit import TokenBucket
from .retries import compute_backoff, should_retry
from .transport import Transport

__all__ = [
    "DocumentAPI",
    "OptionAPI",
    "TokenBucket",
    "Transport",
    "compute_backoff",
    "should_retry",
]
