"""Find the first image block of a document body.

Traversal is depth-first, pre-order: a node is checked before its
children, and siblings are visited left to right.  The first qualifying
node wins.
"""

from __future__ import annotations

from collections.abc import Collection

from fimigrate.config import IMAGE_BLOCK_KINDS
from fimigrate.models import BlockNode, BlockTree

from .tree import is_image_block


def locate_first_image(
    tree: BlockTree,
    image_kinds: Collection[str] = IMAGE_BLOCK_KINDS,
) -> BlockNode | None:
    """Return the first image block of *tree*, or ``None``.

    Parameters
    ----------
    tree:
        The document body.  Not modified.
    image_kinds:
        Block kinds that identify as image blocks.

    Returns
    -------
    BlockNode or None
        The first node whose kind is an image kind and whose ``id``
        attribute is usable.  Image blocks without an ``id`` (external
        URLs, placeholders) are passed over.
    """
    for node in tree:
        if is_image_block(node, image_kinds):
            return node
        if node.children:
            found = locate_first_image(node.children, image_kinds)
            if found is not None:
                return found
    return None
