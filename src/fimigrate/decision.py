"""Per-document migration policy.

:func:`decide` is pure: it looks at a document and says whether its first
image block duplicates the featured image, and if so what the body looks
like without it.  :func:`migrate_document` applies that decision through a
:class:`~fimigrate.store.base.DocumentStore`.

Checks are evaluated in order and the first failing one names the skip
reason:

1. the document exists;
2. it has a featured image;
3. its body is a block tree rather than legacy text;
4. the tree holds an image block;
5. the first image block references the featured image.
"""

from __future__ import annotations

from collections.abc import Collection

from fimigrate.blocks import image_id_of, locate_first_image, remove_first_image
from fimigrate.config import IMAGE_BLOCK_KINDS
from fimigrate.errors import FimError
from fimigrate.models import (
    MIGRATED_REASON,
    WRITE_FAILED_PREFIX,
    Document,
    MigrationOutcome,
    SkipReason,
)
from fimigrate.observability import get_logger
from fimigrate.store.base import DocumentStore

log = get_logger("fimigrate.decision")


def decide(
    document: Document | None,
    image_kinds: Collection[str] = IMAGE_BLOCK_KINDS,
) -> MigrationOutcome:
    """Decide whether *document* should be migrated.

    Returns a skip outcome with the first failing check's reason, or a
    migrated outcome carrying the new body.  Nothing is written.
    """
    if document is None:
        return MigrationOutcome.skip(SkipReason.NOT_FOUND)

    if not document.featured_image_id:
        return MigrationOutcome.skip(SkipReason.NO_FEATURED_IMAGE)

    if document.body is None:
        return MigrationOutcome.skip(SkipReason.NO_STRUCTURED_BLOCKS)

    first_image = locate_first_image(document.body, image_kinds)
    if first_image is None:
        return MigrationOutcome.skip(SkipReason.NO_IMAGE_BLOCKS)

    if image_id_of(first_image) != document.featured_image_id:
        return MigrationOutcome.skip(SkipReason.IMAGE_MISMATCH)

    return MigrationOutcome(
        migrated=True,
        reason=MIGRATED_REASON,
        new_body=remove_first_image(document.body, image_kinds),
    )


def migrate_document(
    document: Document | None,
    store: DocumentStore,
    image_kinds: Collection[str] = IMAGE_BLOCK_KINDS,
) -> MigrationOutcome:
    """Decide on *document* and persist the new body when it qualifies.

    A write rejected by the store is not an error for the caller: the
    document is reported as skipped with the store's message as reason.
    """
    outcome = decide(document, image_kinds)
    if not outcome.migrated or document is None or outcome.new_body is None:
        return outcome

    try:
        store.write_body(document.id, outcome.new_body)
    except FimError as exc:
        log.warning(
            "Document write failed",
            extra={
                "extra_fields": {
                    "op": "write_body",
                    "document_id": document.id,
                    "error_code": exc.code,
                    "error": exc.message,
                }
            },
        )
        return MigrationOutcome.skip(f"{WRITE_FAILED_PREFIX}{exc.message}")

    return outcome
