"""Tests for fimigrate/store/memory.py."""

from __future__ import annotations

import pytest

from fimigrate.errors import FimWriteError
from fimigrate.models import BlockNode, Document, DocumentFilter, NoticeState
from fimigrate.store import DocumentStore, InMemoryDocumentStore, InMemoryNoticeFlags, NoticeFlags


class TestInMemoryDocumentStore:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryDocumentStore(), DocumentStore)

    def test_pages_ordered_by_id(self):
        store = InMemoryDocumentStore(
            Document(id=i, featured_image_id=1, body=[]) for i in (5, 2, 9, 1)
        )
        page = store.fetch_page(DocumentFilter(), 1, 2)
        assert [d.id for d in page] == [2, 5]

    def test_filter_applied(self):
        store = InMemoryDocumentStore([
            Document(id=1, featured_image_id=1, body=[]),
            Document(id=2, featured_image_id=None, body=[]),
            Document(id=3, featured_image_id=1, status="private", body=[]),
            Document(id=4, featured_image_id=1, doc_type="page", body=[]),
        ])
        assert store.count(DocumentFilter()) == 1

    def test_caller_documents_not_modified(self):
        original = Document(id=1, featured_image_id=1, body=[BlockNode("image", {"id": 1})])
        store = InMemoryDocumentStore([original])
        store.write_body(1, [])
        assert len(original.body) == 1
        assert store.get(1).body == []

    def test_get_missing(self):
        assert InMemoryDocumentStore().get(3) is None

    def test_write_missing_raises(self):
        with pytest.raises(FimWriteError):
            InMemoryDocumentStore().write_body(3, [])


class TestInMemoryNoticeFlags:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryNoticeFlags(), NoticeFlags)

    def test_save_load_clear(self):
        flags = InMemoryNoticeFlags()
        flags.save(NoticeState(notice_visible=True))
        assert flags.load() == NoticeState(notice_visible=True)
        flags.clear()
        assert flags.load() == NoticeState()
