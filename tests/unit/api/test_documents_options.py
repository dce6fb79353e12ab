"""Tests for fimigrate/api/documents.py and fimigrate/api/options.py."""

from __future__ import annotations

from unittest.mock import MagicMock

from fimigrate.api import DocumentAPI, OptionAPI
from fimigrate.errors import FimNotFoundError
from fimigrate.models import DocumentFilter


def _transport(return_value=None) -> MagicMock:
    transport = MagicMock()
    transport.request.return_value = return_value if return_value is not None else {}
    return transport


class TestDocumentAPI:
    def test_count(self):
        transport = _transport({"total": 42})
        assert DocumentAPI(transport).count(DocumentFilter()) == 42
        transport.request.assert_called_once_with(
            "GET",
            "/documents/count",
            params={"status": "publish", "has_featured_image": "true", "type": "post,recipe"},
        )

    def test_count_missing_total_is_zero(self):
        assert DocumentAPI(_transport({})).count(DocumentFilter()) == 0

    def test_list_page(self):
        transport = _transport({"results": [{"id": 1}, {"id": 2}]})
        rows = DocumentAPI(transport).list_page(DocumentFilter(doc_types=("post",)), 40, 20)
        assert rows == [{"id": 1}, {"id": 2}]
        _, kwargs = transport.request.call_args
        assert kwargs["params"] == {
            "status": "publish",
            "has_featured_image": "true",
            "type": "post",
            "offset": 40,
            "limit": 20,
            "orderby": "id",
            "order": "asc",
        }

    def test_retrieve(self):
        transport = _transport({"id": 7})
        assert DocumentAPI(transport).retrieve(7) == {"id": 7}
        transport.request.assert_called_once_with("GET", "/documents/7")

    def test_update_blocks(self):
        transport = _transport({"id": 7})
        blocks = [{"blockName": "core/paragraph", "attrs": {}, "innerBlocks": []}]
        DocumentAPI(transport).update_blocks(7, blocks)
        transport.request.assert_called_once_with(
            "PATCH", "/documents/7", json={"blocks": blocks},
        )


class TestOptionAPI:
    def test_get_value(self):
        transport = _transport({"value": True})
        assert OptionAPI(transport).get("fim_migration_complete") is True
        transport.request.assert_called_once_with("GET", "/options/fim_migration_complete")

    def test_get_unset_returns_default(self):
        transport = MagicMock()
        transport.request.side_effect = FimNotFoundError("no option")
        assert OptionAPI(transport).get("x", default=False) is False

    def test_set(self):
        transport = _transport()
        OptionAPI(transport).set("fim_show_migration_notice", True)
        transport.request.assert_called_once_with(
            "PUT", "/options/fim_show_migration_notice", json={"value": True},
        )

    def test_delete_missing_is_ignored(self):
        transport = MagicMock()
        transport.request.side_effect = FimNotFoundError("no option")
        OptionAPI(transport).delete("x")
