"""In-memory store implementations.

Used by the test suite and for dry runs against an exported document
set.  Documents are kept ordered by id so that page offsets are stable,
matching what the REST service guarantees.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any

from fimigrate.errors import FimNotFoundError, FimWriteError
from fimigrate.models import BlockTree, Document, DocumentFilter, NoticeState


class InMemoryDocumentStore:
    """A :class:`~fimigrate.store.base.DocumentStore` backed by a dict.

    Parameters
    ----------
    documents:
        Initial documents.  They are copied; the caller's objects are
        never modified.
    """

    def __init__(self, documents: Iterable[Document] = ()) -> None:
        self._documents: dict[Any, Document] = {}
        self.writes: list[tuple[Any, BlockTree]] = []
        for doc in documents:
            self.add(doc)

    def add(self, document: Document) -> None:
        self._documents[document.id] = copy.deepcopy(document)

    def _ordered(self, selection: DocumentFilter) -> list[Document]:
        matching = [d for d in self._documents.values() if selection.matches(d)]
        return sorted(matching, key=lambda d: d.id)

    def count(self, selection: DocumentFilter) -> int:
        return len(self._ordered(selection))

    def fetch_page(
        self,
        selection: DocumentFilter,
        offset: int,
        limit: int,
    ) -> list[Document]:
        page = self._ordered(selection)[offset:offset + limit]
        return [copy.deepcopy(d) for d in page]

    def get(self, document_id: Any) -> Document | None:
        doc = self._documents.get(document_id)
        return copy.deepcopy(doc) if doc is not None else None

    def write_body(self, document_id: Any, body: BlockTree) -> None:
        doc = self._documents.get(document_id)
        if doc is None:
            raise FimWriteError(
                message=f"document {document_id} does not exist",
                context={"document_id": document_id},
                cause=FimNotFoundError(f"document {document_id} not found"),
            )
        doc.body = list(body)
        self.writes.append((document_id, list(body)))


class InMemoryNoticeFlags:
    """A :class:`~fimigrate.store.base.NoticeFlags` held in process memory."""

    def __init__(self, state: NoticeState | None = None) -> None:
        self.state: NoticeState = state or NoticeState()
        self.saves: int = 0

    def load(self) -> NoticeState:
        return self.state

    def save(self, state: NoticeState) -> None:
        self.state = state
        self.saves += 1

    def clear(self) -> None:
        self.state = NoticeState()
