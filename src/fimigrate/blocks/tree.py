"""Block tree helpers shared by the locator and the remover.

Both passes must agree on what an image block is, so the qualification
rule lives here: a node qualifies when its kind is one of the configured
image kinds and its ``id`` attribute resolves to an image identifier.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Collection, Iterator
from typing import Any

from fimigrate.config import IMAGE_BLOCK_KINDS
from fimigrate.models import BlockNode, BlockTree


def image_id_of(node: BlockNode) -> int | str | None:
    """Return the image identifier of *node*, or ``None``.

    Integer-like strings (``"42"``) are normalised to ``int`` so that a
    block written by an older editor still compares equal to the
    featured image id.  Any other string (``"--5"``) is kept as text and
    so never equals an integer featured id.  Booleans are never
    identifiers.
    """
    value: Any = node.attributes.get("id")
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            return int(stripped)
        except ValueError:
            return stripped
    return None


def is_image_block(
    node: BlockNode,
    image_kinds: Collection[str] = IMAGE_BLOCK_KINDS,
) -> bool:
    return node.kind in image_kinds and image_id_of(node) is not None


def iter_blocks(tree: BlockTree) -> Iterator[BlockNode]:
    """Yield every node of *tree* in depth-first pre-order."""
    for node in tree:
        yield node
        if node.children:
            yield from iter_blocks(node.children)


def count_image_blocks(
    tree: BlockTree,
    image_kinds: Collection[str] = IMAGE_BLOCK_KINDS,
) -> int:
    return sum(1 for node in iter_blocks(tree) if is_image_block(node, image_kinds))


def without_child(node: BlockNode, index: int) -> BlockNode:
    """Return a copy of *node* with the child at *index* removed.

    When the node carries an ``innerContent`` list (the editor's
    serialisation skeleton, with one ``None`` slot per child), the slot
    of the removed child is dropped as well so the skeleton stays in
    step with ``children``.
    """
    children = node.children[:index] + node.children[index + 1:]
    extra = node.extra
    skeleton = extra.get("innerContent")
    if isinstance(skeleton, list):
        slot = -1
        trimmed: list[Any] = []
        for part in skeleton:
            if part is None:
                slot += 1
                if slot == index:
                    continue
            trimmed.append(part)
        extra = {**extra, "innerContent": trimmed}
    return dataclasses.replace(node, children=children, extra=extra)


def with_children(node: BlockNode, children: BlockTree) -> BlockNode:
    return dataclasses.replace(node, children=children)
