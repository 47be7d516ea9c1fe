"""Tests for the ipldsel exception hierarchy."""

from __future__ import annotations

import pytest

from ipldsel.kernel.exceptions import (
    BlockNotFoundError,
    ConfigurationError,
    DecodeError,
    InvalidSelectorError,
    IpldSelError,
    ResolveError,
)


class TestIpldSelError:
    def test_basic_creation(self) -> None:
        error = IpldSelError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert isinstance(error, Exception)

    @pytest.mark.parametrize(
        "error",
        [
            InvalidSelectorError("selectPath", "bad"),
            BlockNotFoundError("bafy"),
            DecodeError("raw", "bad"),
            ConfigurationError("store", "bad"),
            ResolveError("s3", "bad"),
        ],
    )
    def test_everything_is_an_ipldsel_error(self, error) -> None:
        assert isinstance(error, IpldSelError)


class TestInvalidSelectorError:
    def test_message_with_value(self) -> None:
        error = InvalidSelectorError("selectArrayAll", "value must be null", value=3)

        assert str(error) == "Invalid selector 'selectArrayAll': value must be null (got 3)"
        assert error.selector == "selectArrayAll"
        assert error.value == 3

    def test_message_without_value(self) -> None:
        assert str(InvalidSelectorError("document", "empty")) == (
            "Invalid selector 'document': empty"
        )


class TestBlockNotFoundError:
    def test_store_is_named(self) -> None:
        error = BlockNotFoundError("bafyabc", store="memory")

        assert str(error) == "Block 'bafyabc' not found in memory"
        assert error.cid == "bafyabc"

    def test_without_store(self) -> None:
        assert str(BlockNotFoundError("bafyabc")) == "Block 'bafyabc' not found"


class TestDecodeError:
    def test_with_cid(self) -> None:
        error = DecodeError("dag-cbor", "truncated", cid="bafyabc")

        assert "bafyabc" in str(error)
        assert error.codec == "dag-cbor"
        assert error.reason == "truncated"


class TestConfigurationError:
    def test_fields(self) -> None:
        error = ConfigurationError("store", "path is required")

        assert error.component == "store"
        assert "path is required" in str(error)
