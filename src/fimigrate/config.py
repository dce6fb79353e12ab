"""Configuration for fimigrate.

:class:`MigrationConfig` is a plain dataclass that captures every tuneable
knob used by the batch controller, the migration driver and the REST
transport.  One instance is shared by all of them.

Two module-level constants define the defaults that most sites never change:

* :data:`DEFAULT_DOC_TYPES` -- document types scanned for duplicate images.
* :data:`IMAGE_BLOCK_KINDS` -- block kinds that identify as image blocks.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_DOC_TYPES: list[str] = ["post", "recipe"]
"""Document types included in the eligible set."""

IMAGE_BLOCK_KINDS: frozenset[str] = frozenset({"image", "core/image"})
"""Block kinds treated as image blocks.  ``core/image`` is the name the
block editor gives to its image block; ``image`` is the bare form."""

DEFAULT_PAGE_SIZE: int = 20

DEFAULT_PAGE_DELAY_SECONDS: float = 0.5


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class MigrationConfig:
    """Complete configuration for a migration run.

    Every parameter has a default so that an in-memory run needs no
    configuration at all; talking to a remote store needs ``base_url``
    and ``token``.

    Parameters
    ----------
    token:
        API token sent as a bearer credential.  Never logged.
    base_url:
        API root URL of the document service.
    doc_types:
        Document types included in the eligible set.
    page_size:
        Number of documents requested per page by the migration driver.
    page_delay_seconds:
        Pause between two page requests issued by the migration driver.
    image_block_kinds:
        Block kinds that qualify as image blocks.
    retry_max_attempts:
        Maximum number of attempts per request for retryable HTTP errors.
    retry_base_delay:
        Base delay (seconds) for exponential backoff.
    retry_max_delay:
        Upper cap (seconds) on computed backoff delay.
    retry_jitter:
        Scale backoff intervals randomly to 50-100 % of their value.
    rate_limit_rps:
        Target requests per second for client-side pacing (token bucket).
    timeout_seconds:
        HTTP request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    metrics:
        Optional :class:`~fimigrate.observability.MetricsHook` backend.
    debug_dump_payload:
        Write the (redacted) request/response of every API call to *stderr*.
    """

    # ── Core ────────────────────────────────────────────────────────────
    token: str = ""

    base_url: str = "http://localhost:8080/api"

    # ── Batch ───────────────────────────────────────────────────────────
    doc_types: list[str] = field(default_factory=lambda: list(DEFAULT_DOC_TYPES))

    page_size: int = DEFAULT_PAGE_SIZE

    page_delay_seconds: float = DEFAULT_PAGE_DELAY_SECONDS

    image_block_kinds: frozenset[str] = IMAGE_BLOCK_KINDS

    # ── Retry & rate ────────────────────────────────────────────────────
    retry_max_attempts: int = 5

    retry_base_delay: float = 1.0

    retry_max_delay: float = 60.0

    retry_jitter: bool = True

    rate_limit_rps: float = 5.0

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        parsed = urlparse(self.base_url)
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API token, or target localhost for testing."
            )

        if not self.doc_types:
            raise ValueError("doc_types must name at least one document type")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")
        if self.page_delay_seconds < 0:
            raise ValueError(f"page_delay_seconds must be >= 0, got {self.page_delay_seconds}")
        if self.retry_max_attempts < 1:
            raise ValueError(f"retry_max_attempts must be >= 1, got {self.retry_max_attempts}")
        if self.retry_base_delay < 0:
            raise ValueError(f"retry_base_delay must be >= 0, got {self.retry_base_delay}")
        if self.retry_max_delay < 0:
            raise ValueError(f"retry_max_delay must be >= 0, got {self.retry_max_delay}")
        if self.rate_limit_rps <= 0:
            raise ValueError(f"rate_limit_rps must be > 0, got {self.rate_limit_rps}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")

        self.image_block_kinds = frozenset(self.image_block_kinds)

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"MigrationConfig({', '.join(parts)})"
