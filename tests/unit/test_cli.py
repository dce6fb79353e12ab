"""Tests for fimigrate/cli.py using click's CliRunner.

The backend is replaced with in-memory stores so no HTTP is involved.
"""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from fimigrate import cli
from fimigrate.errors import FimStoreError
from fimigrate.models import BlockNode, Document, NoticeState
from fimigrate.store import InMemoryDocumentStore, InMemoryNoticeFlags


def dup_doc(doc_id: int) -> Document:
    return Document(
        id=doc_id,
        title=f"Post {doc_id}",
        featured_image_id=doc_id,
        body=[BlockNode("core/image", {"id": doc_id})],
    )


@pytest.fixture
def backend(monkeypatch):
    store = InMemoryDocumentStore(dup_doc(i) for i in range(1, 6))
    flags = InMemoryNoticeFlags(NoticeState(notice_visible=True))
    backend = cli.Backend(store=store, flags=flags)
    monkeypatch.setattr(cli, "build_backend", lambda config: backend)
    return backend


def invoke(*args, input=None):
    return CliRunner().invoke(cli.main, list(args), input=input)


class TestCommands:
    def test_count(self, backend):
        result = invoke("count")
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"total": 5}

    def test_page(self, backend):
        result = invoke("page", "--offset", "0", "--limit", "2")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["processed"] == 2
        assert data["stats"] == {"migrated": 2, "skipped": 0}
        assert data["log"][0] == "✓ Migrated document #1: Post 1"

    def test_run_with_yes(self, backend):
        result = invoke("run", "--yes", "--page-size", "2", "--delay", "0")
        assert result.exit_code == 0, result.output
        assert "Progress: 5/5 (100%)" in result.output
        assert "Migration complete!" in result.output
        assert "Successfully migrated 5 documents. 0 documents skipped." in result.output
        assert backend.flags.state.migration_complete is True

    def test_run_declined(self, backend):
        result = invoke("run", input="n\n")
        assert result.exit_code == 1
        assert backend.store.writes == []

    def test_run_stopped_early(self, backend):
        result = invoke("run", "--yes", "--page-size", "2", "--delay", "0", "--max-pages", "1")
        assert result.exit_code == 0, result.output
        assert "resume with --offset 2" in result.output

    def test_status(self, backend):
        result = invoke("status")
        assert json.loads(result.output) == {
            "notice_visible": True,
            "migration_complete": False,
            "show_notice": True,
        }

    def test_dismiss_install_uninstall(self, backend):
        assert invoke("dismiss").exit_code == 0
        assert backend.flags.state.notice_visible is False
        assert invoke("install").exit_code == 0
        assert backend.flags.state.notice_visible is True
        assert invoke("uninstall").exit_code == 0
        assert backend.flags.state == NoticeState()


class TestErrors:
    def test_store_error_reported(self, monkeypatch):
        class _Broken(InMemoryDocumentStore):
            def count(self, selection):
                raise FimStoreError("Failed to count documents: offline")

        backend = cli.Backend(store=_Broken(), flags=InMemoryNoticeFlags())
        monkeypatch.setattr(cli, "build_backend", lambda config: backend)
        result = invoke("count")
        assert result.exit_code == 1
        assert "Error: Failed to count documents: offline" in result.output

    def test_insecure_base_url_rejected(self, backend):
        result = invoke("--base-url", "http://cms.example.com/api", "count")
        assert result.exit_code == 2
        assert "insecure HTTP" in result.output

    def test_doc_types_option(self, monkeypatch):
        seen = {}

        def fake_backend(config):
            seen["types"] = config.doc_types
            return cli.Backend(store=InMemoryDocumentStore(), flags=InMemoryNoticeFlags())

        monkeypatch.setattr(cli, "build_backend", fake_backend)
        assert invoke("--type", "recipe", "count").exit_code == 0
        assert seen["types"] == ["recipe"]
