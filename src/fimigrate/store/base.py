"""Collaborator interfaces consumed by the batch controller.

The controller never talks to a database or an HTTP API directly; it
works against these two protocols.  Implementations live beside this
module (:mod:`.memory`, :mod:`.http`).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from fimigrate.models import BlockTree, Document, DocumentFilter, NoticeState


@runtime_checkable
class DocumentStore(Protocol):
    """Read and write access to the document collection.

    ``count`` and ``fetch_page`` failures are raised as
    :class:`~fimigrate.errors.FimError` and abort the page.  A
    ``write_body`` failure is raised the same way but only skips the
    document being written.
    """

    def count(self, selection: DocumentFilter) -> int:
        """Return the number of documents matching *selection*."""
        ...

    def fetch_page(
        self,
        selection: DocumentFilter,
        offset: int,
        limit: int,
    ) -> list[Document]:
        """Return up to *limit* matching documents starting at *offset*.

        Ordering must be stable between calls.
        """
        ...

    def get(self, document_id: Any) -> Document | None:
        """Return one document, or ``None`` when it does not exist."""
        ...

    def write_body(self, document_id: Any, body: BlockTree) -> None:
        """Replace the body of a document."""
        ...


@runtime_checkable
class NoticeFlags(Protocol):
    """Persistence for the two batch flags."""

    def load(self) -> NoticeState:
        ...

    def save(self, state: NoticeState) -> None:
        ...

    def clear(self) -> None:
        """Delete both flags."""
        ...
