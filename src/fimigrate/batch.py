"""Batch controller: drives the migration over pages of documents.

Each call is self-contained.  ``process_page`` carries its own
``offset`` / ``limit``; the caller sequences pages by passing
``offset + processed`` to the next call.  The only state that survives
between calls is the pair of persisted notice flags.

Page lifecycle::

    Idle -> Counting -> PageFetch -> PageProcess -> PageFetch | Complete

A page is the last one when the store returns fewer documents than were
requested.  Each listed document is read again by id before the decision,
so a document deleted since the listing is skipped as not found.
Re-processing a page is harmless: a document whose duplicate image was
already removed no longer matches and is skipped.
"""

from __future__ import annotations

import time
from typing import Any

from fimigrate.config import MigrationConfig
from fimigrate.decision import migrate_document
from fimigrate.models import (
    WRITE_FAILED_PREFIX,
    CountResult,
    Document,
    DocumentFilter,
    MigrationOutcome,
    NoticeState,
    PageResult,
)
from fimigrate.observability import get_logger, resolve_metrics
from fimigrate.store.base import DocumentStore, NoticeFlags

log = get_logger("fimigrate.batch")


def next_state(state: NoticeState, fetched: int, limit: int) -> NoticeState:
    """Return the notice flags after a page of *fetched* documents.

    A short page (``fetched < limit``) means the eligible set is
    exhausted: the migration is complete and the notice is hidden.  A
    ``limit`` of zero is a terminal empty page.
    """
    if limit == 0 or fetched < limit:
        return NoticeState(notice_visible=False, migration_complete=True)
    return state


def format_log_line(document: Document, outcome: MigrationOutcome) -> str:
    if outcome.migrated:
        return f"✓ Migrated document #{document.id}: {document.title}"
    return f"- Skipped document #{document.id}: {outcome.reason}"


class BatchController:
    """Count and process pages of eligible documents.

    Parameters
    ----------
    store:
        Where documents are read from and written to.
    flags:
        Where the notice flags are persisted.
    config:
        Migration configuration (document types, image kinds, page size,
        metrics backend).
    """

    def __init__(
        self,
        store: DocumentStore,
        flags: NoticeFlags,
        config: MigrationConfig | None = None,
    ) -> None:
        self._store = store
        self._flags = flags
        self._config = config or MigrationConfig()
        self._metrics = resolve_metrics(self._config.metrics)
        self._selection = DocumentFilter(doc_types=tuple(self._config.doc_types))

    @property
    def selection(self) -> DocumentFilter:
        return self._selection

    @property
    def config(self) -> MigrationConfig:
        return self._config

    def count(self) -> CountResult:
        """Return the number of eligible documents.

        Used for progress reporting only; completion is decided by
        :meth:`process_page`.
        """
        total = self._store.count(self._selection)
        log.info(
            "Eligible documents counted",
            extra={"extra_fields": {"op": "count", "total": total}},
        )
        return CountResult(total=total)

    def process_page(self, offset: int, limit: int | None = None) -> PageResult:
        """Fetch and process one page of eligible documents.

        Parameters
        ----------
        offset:
            Index of the first document of the page in the eligible set.
        limit:
            Page size.  Defaults to :attr:`MigrationConfig.page_size`.
            Zero is an immediately terminal empty page.

        Returns
        -------
        PageResult
            Per-page counters, one log line per document, and the notice
            flags after this page.

        Raises
        ------
        FimError
            When the store cannot be read.  No partial result is
            reported; the caller may retry the same offset.
        """
        if limit is None:
            limit = self._config.page_size
        t0 = time.monotonic()
        state = self._flags.load()

        documents: list[Document] = []
        if limit > 0:
            documents = self._store.fetch_page(self._selection, offset, limit)

        result = PageResult(processed=len(documents))
        for document in documents:
            # Decide on the stored copy; the page listing may be stale.
            current = self._store.get(document.id)
            outcome = migrate_document(current, self._store, self._config.image_block_kinds)
            self._record(result, document, outcome)

        new_state = next_state(state, len(documents), limit)
        if new_state != state:
            self._flags.save(new_state)
        result.state = new_state
        result.complete = limit == 0 or len(documents) < limit

        elapsed_ms = (time.monotonic() - t0) * 1000
        self._metrics.timing("fimigrate.page_duration_ms", elapsed_ms)
        log.info(
            "Page processed",
            extra={"extra_fields": self._page_fields(offset, limit, result)},
        )
        return result

    # -- internals ---------------------------------------------------------

    def _record(
        self,
        result: PageResult,
        document: Document,
        outcome: MigrationOutcome,
    ) -> None:
        if outcome.migrated:
            result.migrated += 1
            self._metrics.increment("fimigrate.documents_migrated_total")
        else:
            result.skipped += 1
            self._metrics.increment(
                "fimigrate.documents_skipped_total",
                tags={"reason": _reason_tag(outcome.reason)},
            )
        result.log.append(format_log_line(document, outcome))

    @staticmethod
    def _page_fields(offset: int, limit: int, result: PageResult) -> dict[str, Any]:
        return {
            "op": "process_page",
            "offset": offset,
            "limit": limit,
            "processed": result.processed,
            "migrated": result.migrated,
            "skipped": result.skipped,
            "complete": result.complete,
        }


def _reason_tag(reason: str) -> str:
    # Write failures carry free text; collapse them to one tag value.
    if reason.startswith(WRITE_FAILED_PREFIX):
        return "write_failed"
    return reason.replace(" ", "_")
