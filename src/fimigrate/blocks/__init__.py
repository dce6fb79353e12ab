"""Block tree search and removal.

* :func:`locate_first_image` -- first image block in pre-order.
* :func:`remove_first_image` -- copy of a tree without that block.
"""

from __future__ import annotations

from .locate import locate_first_image
from .remove import remove_first_image
from .tree import count_image_blocks, image_id_of, is_image_block, iter_blocks

__all__ = [
    "count_image_blocks",
    "image_id_of",
    "is_image_block",
    "iter_blocks",
    "locate_first_image",
    "remove_first_image",
]
