"""Shared test fixtures for the fimigrate test suite."""

from __future__ import annotations

import pytest

from fimigrate.config import MigrationConfig
from fimigrate.models import BlockNode, Document
from fimigrate.store import InMemoryDocumentStore, InMemoryNoticeFlags


@pytest.fixture
def config() -> MigrationConfig:
    """Default test configuration with a dummy token and no page delay."""
    return MigrationConfig(token="test_token_1234", page_delay_seconds=0.0)


@pytest.fixture
def flags() -> InMemoryNoticeFlags:
    return InMemoryNoticeFlags()


@pytest.fixture
def sample_documents() -> list[Document]:
    """Five eligible documents covering every decision branch."""
    return [
        Document(id=1, title="Duplicate hero", featured_image_id=5, body=[
            BlockNode("core/image", {"id": 5}),
            BlockNode("core/paragraph", {"content": "x"}),
        ]),
        Document(id=2, title="Different image", featured_image_id=7, body=[
            BlockNode("core/image", {"id": 5}),
        ]),
        Document(id=3, title="Text only", featured_image_id=5, body=[
            BlockNode("core/paragraph", {"content": "x"}),
        ]),
        Document(id=4, title="Classic editor", featured_image_id=5, body=None),
        Document(id=5, title="Nested hero", featured_image_id=9, body=[
            BlockNode("core/columns", children=[
                BlockNode("core/column", children=[BlockNode("core/image", {"id": 9})]),
            ]),
        ]),
    ]


@pytest.fixture
def store(sample_documents: list[Document]) -> InMemoryDocumentStore:
    return InMemoryDocumentStore(sample_documents)
