"""Document store and notice flag implementations."""

from __future__ import annotations

from .base import DocumentStore, NoticeFlags
from .http import HttpDocumentStore, HttpNoticeFlags
from .memory import InMemoryDocumentStore, InMemoryNoticeFlags

__all__ = [
    "DocumentStore",
    "HttpDocumentStore",
    "HttpNoticeFlags",
    "InMemoryDocumentStore",
    "InMemoryNoticeFlags",
    "NoticeFlags",
]
