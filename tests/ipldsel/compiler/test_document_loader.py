"""Tests for reading selector documents from files."""

import json

import pytest

from ipldsel.compiler.document_loader import load_document, read_document
from ipldsel.kernel.domain.selectors import ArrayAllSelector, PathSelector
from ipldsel.kernel.exceptions import InvalidSelectorError
from ipldsel.stdlib.adapters.codecs import create_block


@pytest.fixture
def root() -> str:
    return str(create_block({"name": "root"}).cid)


class TestLoadDocument:
    def test_json(self, tmp_path, root) -> None:
        path = tmp_path / "query.json"
        path.write_text(
            json.dumps(
                {
                    "cidRootedSelector": {
                        "root": root,
                        "selectors": [{"selectPath": "items"}, {"selectArrayAll": None}],
                    }
                }
            )
        )

        document = load_document(path)

        assert str(document.root) == root
        assert document.program == (PathSelector(field="items"), ArrayAllSelector())

    def test_yaml(self, tmp_path, root) -> None:
        path = tmp_path / "query.yaml"
        path.write_text(
            f"""cidRootedSelector:
  root: {root}
  selectors:
    - selectPath: items
    - selectArrayAll: null
"""
        )

        document = load_document(str(path))

        assert document.program == (PathSelector(field="items"), ArrayAllSelector())

    def test_unparseable(self, tmp_path) -> None:
        path = tmp_path / "query.json"
        path.write_text("{")

        with pytest.raises(InvalidSelectorError) as exc_info:
            load_document(path)
        assert "cannot parse json" in str(exc_info.value)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(OSError):
            load_document(tmp_path / "missing.json")


class TestReadDocument:
    def test_yaml_text(self) -> None:
        assert read_document("a: 1", format="yaml") == {"a": 1}

    def test_bad_yaml(self) -> None:
        with pytest.raises(InvalidSelectorError):
            read_document("a: [1", format="yaml")
