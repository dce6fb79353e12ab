"""Tests for the wire translation of fimigrate/models.py."""

from __future__ import annotations

import pytest

from fimigrate.models import (
    BlockNode,
    Document,
    DocumentFilter,
    MigrationOutcome,
    PageResult,
    SkipReason,
)


class TestDocumentFromDict:
    def test_featured_media_alias(self):
        doc = Document.from_dict({"id": 3, "featured_media": 12, "blocks": []})
        assert doc.featured_image_id == 12
        assert doc.has_featured_image

    def test_zero_featured_image_is_unset(self):
        doc = Document.from_dict({"id": 3, "featured_image_id": 0, "blocks": []})
        assert doc.featured_image_id is None
        assert not doc.has_featured_image

    @pytest.mark.parametrize(
        "featured, expected",
        [("7", 7), (7.0, 7), (7.5, None), ("5.5", None), ("abc", None), (None, None)],
    )
    def test_featured_id_parsing(self, featured, expected):
        doc = Document.from_dict({"id": 3, "featured_media": featured, "blocks": []})
        assert doc.featured_image_id == expected

    def test_rendered_title(self):
        doc = Document.from_dict({"id": 3, "title": {"rendered": "Hello"}})
        assert doc.title == "Hello"

    def test_null_blocks_is_legacy(self):
        doc = Document.from_dict({"id": 3, "blocks": None})
        assert doc.body is None
        assert not doc.is_structured

    def test_empty_blocks_is_structured(self):
        doc = Document.from_dict({"id": 3, "blocks": []})
        assert doc.body == []
        assert doc.is_structured

    def test_blocks_parsed(self):
        doc = Document.from_dict({
            "id": 3,
            "type": "recipe",
            "blocks": [{"blockName": "core/image", "attrs": {"id": 4}, "innerBlocks": []}],
        })
        assert doc.doc_type == "recipe"
        assert doc.body == [BlockNode("core/image", {"id": 4})]

    def test_to_dict(self):
        doc = Document(id=1, title="T", featured_image_id=None, body=None)
        assert doc.to_dict() == {
            "id": 1,
            "title": "T",
            "status": "publish",
            "type": "post",
            "featured_image_id": 0,
            "blocks": None,
        }


class TestDocumentFilter:
    def test_matches_published_with_image(self):
        selection = DocumentFilter()
        assert selection.matches(Document(id=1, featured_image_id=5))

    def test_rejects_draft(self):
        selection = DocumentFilter()
        assert not selection.matches(Document(id=1, status="draft", featured_image_id=5))

    def test_rejects_missing_image(self):
        assert not DocumentFilter().matches(Document(id=1))

    def test_image_requirement_optional(self):
        assert DocumentFilter(has_featured_image=False).matches(Document(id=1))

    def test_rejects_other_type(self):
        assert not DocumentFilter().matches(Document(id=1, featured_image_id=5, doc_type="page"))

    def test_to_params(self):
        params = DocumentFilter(doc_types=("post",)).to_params()
        assert params == {"status": "publish", "has_featured_image": "true", "type": "post"}


class TestResults:
    def test_skip_uses_reason_text(self):
        outcome = MigrationOutcome.skip(SkipReason.NO_FEATURED_IMAGE)
        assert outcome.migrated is False
        assert outcome.reason == "no featured image"
        assert outcome.new_body is None

    def test_page_result_to_dict(self):
        result = PageResult(processed=2, log=["a", "b"], migrated=1, skipped=1, complete=True)
        assert result.to_dict() == {
            "processed": 2,
            "log": ["a", "b"],
            "stats": {"migrated": 1, "skipped": 1},
        }
