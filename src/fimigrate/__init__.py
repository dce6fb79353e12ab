"""fimigrate -- remove body images that duplicate a document's featured image.

A document whose first image block shows the same image as its featured
image displays that image twice.  fimigrate scans the published documents
that have a featured image, page by page, and removes that first image
block where it matches, leaving everything else untouched.  Running it
again is harmless.

Public re-exports
-----------------

* **Block tree:** :func:`locate_first_image`, :func:`remove_first_image`
* **Policy:** :func:`decide`, :func:`migrate_document`
* **Batching:** :class:`BatchController`, :class:`MigrationRunner`
* **Configuration:** :class:`MigrationConfig`
* **Errors:** Every :class:`FimError` subclass and :class:`ErrorCode`
* **Models:** Blocks, documents, outcomes and results

Usage::

    from fimigrate import BatchController, MigrationRunner
    from fimigrate.store import InMemoryDocumentStore, InMemoryNoticeFlags

    controller = BatchController(InMemoryDocumentStore(docs), InMemoryNoticeFlags())
    summary = MigrationRunner(controller, delay=0).run()
"""

from __future__ import annotations

from fimigrate.batch import BatchController, next_state
from fimigrate.blocks import locate_first_image, remove_first_image
from fimigrate.config import IMAGE_BLOCK_KINDS, MigrationConfig
from fimigrate.decision import decide, migrate_document
from fimigrate.errors import (
    ErrorCode,
    FimAuthError,
    FimConflictError,
    FimError,
    FimNetworkError,
    FimNotFoundError,
    FimPermissionError,
    FimRetryExhaustedError,
    FimStoreError,
    FimValidationError,
    FimWriteError,
)
from fimigrate.models import (
    BlockNode,
    BlockTree,
    CountResult,
    Document,
    DocumentFilter,
    DocumentStatus,
    MigrationOutcome,
    NoticeState,
    PageResult,
    RunSummary,
    SkipReason,
)
from fimigrate.runner import MigrationRunner, Progress

__version__ = "1.0.0"

__all__ = [
    # Block tree
    "locate_first_image",
    "remove_first_image",
    # Policy
    "decide",
    "migrate_document",
    # Batching
    "BatchController",
    "MigrationRunner",
    "Progress",
    "next_state",
    # Configuration
    "MigrationConfig",
    "IMAGE_BLOCK_KINDS",
    # Errors
    "ErrorCode",
    "FimError",
    "FimValidationError",
    "FimAuthError",
    "FimPermissionError",
    "FimNotFoundError",
    "FimConflictError",
    "FimRetryExhaustedError",
    "FimNetworkError",
    "FimStoreError",
    "FimWriteError",
    # Models
    "BlockNode",
    "BlockTree",
    "Document",
    "DocumentFilter",
    "DocumentStatus",
    "MigrationOutcome",
    "SkipReason",
    "NoticeState",
    "CountResult",
    "PageResult",
    "RunSummary",
]
