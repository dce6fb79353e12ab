"""Tests for fimigrate/blocks/tree.py and the BlockNode wire shape."""

from __future__ import annotations

import pytest

from fimigrate.blocks import count_image_blocks, image_id_of, is_image_block, iter_blocks
from fimigrate.models import BlockNode, tree_from_list, tree_to_list


class TestImageIdOf:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (5, 5),
            ("5", 5),
            (" 12 ", 12),
            (7.0, 7),
            ("abc", "abc"),
            ("--5", "--5"),
            ("\u00b2", "\u00b2"),
            ("5.5", "5.5"),
        ],
    )
    def test_usable_ids(self, value, expected):
        assert image_id_of(BlockNode("image", {"id": value})) == expected

    @pytest.mark.parametrize("value", [None, True, False, "", "  ", 7.5, [1], {"id": 1}])
    def test_unusable_ids(self, value):
        assert image_id_of(BlockNode("image", {"id": value})) is None

    def test_missing_id(self):
        assert image_id_of(BlockNode("image")) is None


class TestIsImageBlock:
    def test_requires_kind_and_id(self):
        assert is_image_block(BlockNode("image", {"id": 1}))
        assert not is_image_block(BlockNode("image"))
        assert not is_image_block(BlockNode("paragraph", {"id": 1}))


class TestIterBlocks:
    def test_preorder(self):
        tree = [
            BlockNode("a", children=[BlockNode("b", children=[BlockNode("c")]), BlockNode("d")]),
            BlockNode("e"),
        ]
        assert [n.kind for n in iter_blocks(tree)] == ["a", "b", "c", "d", "e"]

    def test_count_image_blocks(self):
        tree = [
            BlockNode("image", {"id": 1}),
            BlockNode("group", children=[BlockNode("image", {"id": 2}), BlockNode("image")]),
        ]
        assert count_image_blocks(tree) == 2


class TestBlockNodeWireShape:
    def test_editor_shape_round_trip(self):
        raw = {
            "blockName": "core/image",
            "attrs": {"id": 5, "sizeSlug": "large"},
            "innerBlocks": [],
            "innerHTML": "<figure></figure>",
            "innerContent": ["<figure></figure>"],
        }
        assert BlockNode.from_dict(raw).to_dict() == raw

    def test_alternative_keys_accepted(self):
        node = BlockNode.from_dict({
            "kind": "group",
            "attributes": {"tag": "div"},
            "children": [{"kind": "image", "attributes": {"id": 2}}],
        })
        assert node.kind == "group"
        assert node.attributes == {"tag": "div"}
        assert node.children[0].attributes == {"id": 2}

    def test_null_attrs_and_children_are_empty(self):
        node = BlockNode.from_dict({"blockName": "core/image", "attrs": None, "innerBlocks": None})
        assert node.attributes == {}
        assert node.children == []

    def test_freeform_block_name_survives(self):
        raw = {"blockName": None, "attrs": {}, "innerBlocks": [], "innerHTML": "\n"}
        assert tree_to_list(tree_from_list([raw])) == [raw]

    def test_extra_ignored_for_equality(self):
        a = BlockNode.from_dict({"blockName": "p", "innerHTML": "<p>a</p>"})
        b = BlockNode.from_dict({"blockName": "p", "innerHTML": "<p>b</p>"})
        assert a == b
