"""Store implementations over the document service REST API."""

from __future__ import annotations

from typing import Any

from fimigrate.api import DocumentAPI, OptionAPI
from fimigrate.errors import FimError, FimNotFoundError, FimStoreError, FimWriteError
from fimigrate.models import (
    BlockTree,
    Document,
    DocumentFilter,
    NoticeState,
    tree_to_list,
)

NOTICE_OPTION = "fim_show_migration_notice"
COMPLETE_OPTION = "fim_migration_complete"


def _to_document(data: Any, operation: str) -> Document:
    """Build a :class:`Document`, raising :class:`FimStoreError` on a malformed record."""
    try:
        return Document.from_dict(data)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        doc_id = data.get("id") if isinstance(data, dict) else None
        raise FimStoreError(
            message=f"Malformed document record {doc_id!r}: {exc!r}",
            context={"operation": operation, "document_id": doc_id},
            cause=exc,
        ) from exc


class HttpDocumentStore:
    """A :class:`~fimigrate.store.base.DocumentStore` over :class:`DocumentAPI`.

    Read failures are wrapped in :class:`FimStoreError`; write failures in
    :class:`FimWriteError`.  The original transport error is kept as the
    cause.
    """

    def __init__(self, api: DocumentAPI) -> None:
        self._api = api

    def count(self, selection: DocumentFilter) -> int:
        try:
            return self._api.count(selection)
        except FimError as exc:
            raise FimStoreError(
                message=f"Failed to count documents: {exc.message}",
                context={"operation": "count"},
                cause=exc,
            ) from exc

    def fetch_page(
        self,
        selection: DocumentFilter,
        offset: int,
        limit: int,
    ) -> list[Document]:
        try:
            raw = self._api.list_page(selection, offset, limit)
        except FimError as exc:
            raise FimStoreError(
                message=f"Failed to fetch documents: {exc.message}",
                context={"operation": "fetch_page", "offset": offset, "limit": limit},
                cause=exc,
            ) from exc
        return [_to_document(item, "fetch_page") for item in raw]

    def get(self, document_id: Any) -> Document | None:
        try:
            data = self._api.retrieve(document_id)
        except FimNotFoundError:
            return None
        except FimError as exc:
            raise FimStoreError(
                message=f"Failed to retrieve document {document_id}: {exc.message}",
                context={"operation": "get"},
                cause=exc,
            ) from exc
        return _to_document(data, "get")

    def write_body(self, document_id: Any, body: BlockTree) -> None:
        try:
            self._api.update_blocks(document_id, tree_to_list(body))
        except FimError as exc:
            raise FimWriteError(
                message=exc.message,
                context={"document_id": document_id},
                cause=exc,
            ) from exc


class HttpNoticeFlags:
    """A :class:`~fimigrate.store.base.NoticeFlags` stored as two site options."""

    def __init__(self, api: OptionAPI) -> None:
        self._api = api

    def load(self) -> NoticeState:
        return NoticeState(
            notice_visible=bool(self._api.get(NOTICE_OPTION, False)),
            migration_complete=bool(self._api.get(COMPLETE_OPTION, False)),
        )

    def save(self, state: NoticeState) -> None:
        self._api.set(NOTICE_OPTION, state.notice_visible)
        self._api.set(COMPLETE_OPTION, state.migration_complete)

    def clear(self) -> None:
        self._api.delete(NOTICE_OPTION)
        self._api.delete(COMPLETE_OPTION)
