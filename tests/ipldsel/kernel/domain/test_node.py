"""Tests for node inspection helpers."""

from ipldsel.kernel.domain.node import (
    Block,
    NodeKind,
    cid_text,
    element_at,
    is_link,
    is_mapping,
    is_sequence,
    kind_of,
    lookup,
    slice_of,
)
from ipldsel.stdlib.adapters.codecs import create_block, default_codec_registry


class TestKindOf:
    """Classification of decoded nodes."""

    def test_structural_kinds(self) -> None:
        assert kind_of({"a": 1}) is NodeKind.MAPPING
        assert kind_of([1, 2]) is NodeKind.SEQUENCE
        assert kind_of("text") is NodeKind.SCALAR
        assert kind_of(None) is NodeKind.SCALAR
        assert kind_of(b"\x00") is NodeKind.SCALAR

    def test_cid_is_a_link(self) -> None:
        cid = create_block({"leaf": True}).cid
        assert kind_of(cid) is NodeKind.LINK
        assert is_link(cid)
        assert not is_mapping(cid)
        assert not is_sequence(cid)

    def test_string_that_looks_like_a_cid_is_not_a_link(self) -> None:
        assert not is_link(str(create_block({"leaf": True}).cid))


class TestLookup:
    def test_present_key(self) -> None:
        assert lookup({"a": 1}, "a") == (True, 1)

    def test_present_key_holding_none(self) -> None:
        assert lookup({"a": None}, "a") == (True, None)

    def test_absent_key(self) -> None:
        assert lookup({"a": 1}, "b") == (False, None)

    def test_non_mapping(self) -> None:
        assert lookup([1, 2], "0") == (False, None)
        assert lookup("abc", "a") == (False, None)


class TestElementAt:
    def test_in_range(self) -> None:
        assert element_at(["a", "b"], 1) == (True, "b")

    def test_out_of_range(self) -> None:
        assert element_at(["a", "b"], 2) == (False, None)

    def test_negative_index_is_not_python_indexing(self) -> None:
        assert element_at(["a", "b"], -1) == (False, None)

    def test_non_sequence(self) -> None:
        assert element_at({"0": "a"}, 0) == (False, None)


class TestSliceOf:
    def test_slice(self) -> None:
        assert slice_of([0, 1, 2, 3], 1, 3) == [1, 2]

    def test_open_end(self) -> None:
        assert slice_of([0, 1, 2], 1, None) == [1, 2]

    def test_empty_slice(self) -> None:
        assert slice_of([0, 1], 5, None) == []

    def test_non_sequence(self) -> None:
        assert slice_of({"a": 1}, 0, 1) is None


class TestBlock:
    def test_codec_comes_from_the_identifier(self) -> None:
        block = create_block({"x": 1})
        assert block.codec == "dag-cbor"
        assert str(block) == str(block.cid)

    def test_blocks_are_immutable_values(self) -> None:
        block = create_block({"x": 1})
        assert block == Block(cid=block.cid, data=block.data)


class TestCidText:
    def test_decoded_links_use_the_same_text_as_created_blocks(self) -> None:
        leaf = create_block({"name": "leaf"})
        parent = create_block({"child": leaf.cid})

        link = default_codec_registry().decode(parent)["child"]

        assert link == leaf.cid
        assert cid_text(link) == str(leaf.cid)
        assert cid_text(link).startswith("bafy")

    def test_block_text(self) -> None:
        block = create_block({"x": 1})
        assert str(block) == cid_text(block.cid)
