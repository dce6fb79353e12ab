"""Public data models for fimigrate.

This module contains the block tree types, the document record, every
result type, and the notice state record referenced by the public API
surface.  All types are plain dataclasses with no behaviour beyond wire
translation (``from_dict`` / ``to_dict``) and structural equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class DocumentStatus(str, Enum):
    """Publication status of a document.  Only ``PUBLISH`` is eligible."""

    PUBLISH = "publish"
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    FUTURE = "future"


class SkipReason(str, Enum):
    """Why a document was left untouched.

    Checks are evaluated in the order listed; the first failing check
    determines the reason.
    """

    NOT_FOUND = "not found"
    NO_FEATURED_IMAGE = "no featured image"
    NO_STRUCTURED_BLOCKS = "no structured blocks"
    NO_IMAGE_BLOCKS = "no image blocks found"
    IMAGE_MISMATCH = "first image does not match featured image"


MIGRATED_REASON = "successfully migrated"

WRITE_FAILED_PREFIX = "failed to update document: "


# ---------------------------------------------------------------------------
# Block tree
# ---------------------------------------------------------------------------

AttributeValue = Union[int, float, str, bool, None, list, dict]
"""Attribute bag values: scalars or nested JSON structures."""


@dataclass(frozen=True)
class BlockNode:
    """A typed node in a document body.

    Attributes
    ----------
    kind:
        Block type identifier (``"core/image"``, ``"core/group"``,
        ``"core/paragraph"``, or any opaque string).
    attributes:
        Block-type-specific attribute bag.  Image blocks carry the
        referenced image under ``"id"``.
    children:
        Nested blocks, in order.  Empty for leaf blocks.
    extra:
        Wire keys this model does not interpret (``innerHTML``,
        ``innerContent``, ...).  Carried through untouched so that a
        document can be written back in the shape it was read.
    """

    kind: str
    attributes: dict[str, AttributeValue] = field(default_factory=dict)
    children: list[BlockNode] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BlockNode:
        """Build a node from a parsed-block dict.

        Accepts the editor's parsed shape (``blockName`` / ``attrs`` /
        ``innerBlocks``) as well as ``kind`` / ``attributes`` /
        ``children``.  Missing or ``null`` attributes and children are
        treated as empty.
        """
        kind = data.get("blockName", data.get("kind"))
        attrs = data.get("attrs", data.get("attributes")) or {}
        raw_children = data.get("innerBlocks", data.get("children")) or []
        known = {"blockName", "kind", "attrs", "attributes", "innerBlocks", "children"}
        return cls(
            kind=kind if kind is not None else "",
            attributes=dict(attrs),
            children=[cls.from_dict(c) for c in raw_children],
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the editor's parsed-block shape for this node."""
        out: dict[str, Any] = {
            "blockName": self.kind or None,
            "attrs": dict(self.attributes),
            "innerBlocks": [c.to_dict() for c in self.children],
        }
        out.update(self.extra)
        return out


BlockTree = list[BlockNode]
"""A document body: an ordered forest of blocks."""


def tree_from_list(data: list[dict[str, Any]]) -> BlockTree:
    return [BlockNode.from_dict(d) for d in data]


def tree_to_list(tree: BlockTree) -> list[dict[str, Any]]:
    return [node.to_dict() for node in tree]


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

def _featured_id(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        featured = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if isinstance(value, float) and value != featured:
        return None
    return featured or None


@dataclass
class Document:
    """A document read from the store.

    Attributes
    ----------
    id:
        Store-assigned identifier.
    title:
        Display title, used only in log lines.
    status:
        Publication status (``"publish"``, ``"draft"``, ...).
    featured_image_id:
        Identifier of the featured image, or ``None`` when unset.
    body:
        Parsed block tree, or ``None`` when the body is unstructured
        legacy text.
    doc_type:
        Document type (``"post"``, ``"recipe"``, ...).
    """

    id: Any
    title: str = ""
    status: str = DocumentStatus.PUBLISH.value
    featured_image_id: int | None = None
    body: BlockTree | None = None
    doc_type: str = "post"

    @property
    def has_featured_image(self) -> bool:
        return bool(self.featured_image_id)

    @property
    def is_structured(self) -> bool:
        return self.body is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Document:
        """Build a document from the document service's JSON shape.

        ``featured_media`` is accepted as an alias of
        ``featured_image_id``; ``0`` or a value that is not an integer
        means no featured image.
        """
        featured = data.get("featured_image_id", data.get("featured_media"))
        blocks = data.get("blocks")
        status = data.get("status", DocumentStatus.PUBLISH.value)
        title = data.get("title", "")
        if isinstance(title, dict):
            title = title.get("rendered", title.get("raw", ""))
        return cls(
            id=data["id"],
            title=title,
            status=status,
            featured_image_id=_featured_id(featured),
            body=tree_from_list(blocks) if blocks is not None else None,
            doc_type=data.get("type", "post"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "type": self.doc_type,
            "featured_image_id": self.featured_image_id or 0,
            "blocks": tree_to_list(self.body) if self.body is not None else None,
        }


@dataclass(frozen=True)
class DocumentFilter:
    """Selection of the eligible document set.

    Attributes
    ----------
    status:
        Required publication status.
    has_featured_image:
        Restrict to documents with a featured image set.
    doc_types:
        Document types to include.
    """

    status: str = DocumentStatus.PUBLISH.value
    has_featured_image: bool = True
    doc_types: tuple[str, ...] = ("post", "recipe")

    def matches(self, document: Document) -> bool:
        if document.status != self.status:
            return False
        if self.has_featured_image and not document.has_featured_image:
            return False
        return document.doc_type in self.doc_types

    def to_params(self) -> dict[str, Any]:
        """Query-string form used by the REST document API."""
        return {
            "status": self.status,
            "has_featured_image": "true" if self.has_featured_image else "false",
            "type": ",".join(self.doc_types),
        }


# ---------------------------------------------------------------------------
# Per-document outcome
# ---------------------------------------------------------------------------

@dataclass
class MigrationOutcome:
    """Result of evaluating (and possibly migrating) one document.

    Attributes
    ----------
    migrated:
        ``True`` when the duplicate image was removed (or, for a pure
        decision, would be removed).
    reason:
        One :class:`SkipReason` value, :data:`MIGRATED_REASON`, or a
        write-failure message.
    new_body:
        The body to persist.  Set only when ``migrated`` is ``True``.
    """

    migrated: bool
    reason: str
    new_body: BlockTree | None = None

    @classmethod
    def skip(cls, reason: SkipReason | str) -> MigrationOutcome:
        return cls(migrated=False, reason=reason.value if isinstance(reason, SkipReason) else reason)


# ---------------------------------------------------------------------------
# Batch state and responses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NoticeState:
    """The two persisted batch flags.

    Attributes
    ----------
    notice_visible:
        Whether the operator should be prompted to run the migration.
    migration_complete:
        Set once the whole eligible set has been scanned.
    """

    notice_visible: bool = False
    migration_complete: bool = False


@dataclass
class CountResult:
    """Response of the ``count`` operation."""

    total: int

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total}


@dataclass
class PageResult:
    """Response of the ``process_page`` operation.

    Attributes
    ----------
    processed:
        Number of documents fetched and evaluated in this page.
    log:
        One line per document, in fetch order.
    migrated:
        Documents migrated in this page.
    skipped:
        Documents skipped in this page.
    complete:
        ``True`` when this page was the last one.
    state:
        Notice flags after this page.
    """

    processed: int
    log: list[str] = field(default_factory=list)
    migrated: int = 0
    skipped: int = 0
    complete: bool = False
    state: NoticeState = field(default_factory=NoticeState)

    def to_dict(self) -> dict[str, Any]:
        return {
            "processed": self.processed,
            "log": list(self.log),
            "stats": {"migrated": self.migrated, "skipped": self.skipped},
        }


@dataclass
class RunSummary:
    """Aggregate of a full driver run across pages.

    Attributes
    ----------
    total:
        Eligible document count reported at the start of the run.
    processed:
        Documents processed across all pages.
    migrated:
        Documents migrated across all pages.
    skipped:
        Documents skipped across all pages.
    pages:
        Number of ``process_page`` calls issued.
    complete:
        Whether the final page reported completion.
    log:
        Every per-document log line, in order.
    """

    total: int = 0
    processed: int = 0
    migrated: int = 0
    skipped: int = 0
    pages: int = 0
    complete: bool = False
    log: list[str] = field(default_factory=list)
