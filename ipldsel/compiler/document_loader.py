"""Loading selector documents from files.

JSON is the native format; YAML is accepted for hand-written documents and
parses into the same structure.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from ipldsel.kernel.domain.document import RootSelectorDocument, parse_document
from ipldsel.kernel.exceptions import InvalidSelectorError
from ipldsel.kernel.logging import get_logger

logger = get_logger(__name__)


def read_document(text: str, *, format: str = "json") -> Any:
    """Parse document text without validating its structure."""
    try:
        if format in ("yaml", "yml"):
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidSelectorError("document", f"cannot parse {format}: {e}") from e


def load_document(path: str | Path) -> RootSelectorDocument:
    """Read and validate a selector document file.

    Raises
    ------
    OSError
        If the file cannot be read
    InvalidSelectorError
        If the file is not a valid selector document
    """
    path = Path(path)
    format = "yaml" if path.suffix in (".yaml", ".yml") else "json"
    logger.debug("Loading selector document from {path}", path=path)
    raw = read_document(path.read_text(encoding="utf-8"), format=format)
    return parse_document(raw)
