"""Remove the first image block of a document body.

The remover is copy-on-write: it never mutates its input.  Exactly one
image block is removed per call, the same one :func:`locate_first_image`
returns for the same tree.  Every sibling that is not on the path to the
removed node is returned as the same object, and containers emptied by
the removal are kept.
"""

from __future__ import annotations

from collections.abc import Collection

from fimigrate.config import IMAGE_BLOCK_KINDS
from fimigrate.models import BlockNode, BlockTree

from .tree import is_image_block, with_children, without_child


def remove_first_image(
    tree: BlockTree,
    image_kinds: Collection[str] = IMAGE_BLOCK_KINDS,
) -> BlockTree:
    """Return *tree* without its first image block.

    Each node is checked before its children and siblings are visited
    left to right.  A qualifying node is dropped from its parent's
    children; otherwise the scan descends into the node, and the first
    subtree that reports a change ends the scan.

    Parameters
    ----------
    tree:
        The document body.  Not modified.
    image_kinds:
        Block kinds that identify as image blocks.

    Returns
    -------
    list[BlockNode]
        A new list when a block was removed; *tree* itself when it holds
        no image block.
    """
    for index, node in enumerate(tree):
        if is_image_block(node, image_kinds):
            return tree[:index] + tree[index + 1:]
        if node.children:
            updated = _remove_below(node, image_kinds)
            if updated is not None:
                return tree[:index] + [updated] + tree[index + 1:]
    return tree


def _remove_below(node: BlockNode, image_kinds: Collection[str]) -> BlockNode | None:
    """Return a copy of *node* with its first image descendant removed.

    Returns ``None`` when no descendant qualifies.
    """
    children = node.children
    for index, child in enumerate(children):
        if is_image_block(child, image_kinds):
            return without_child(node, index)
        if child.children:
            updated = _remove_below(child, image_kinds)
            if updated is not None:
                return with_children(
                    node, children[:index] + [updated] + children[index + 1:],
                )
    return None
