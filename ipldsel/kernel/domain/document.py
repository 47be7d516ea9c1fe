"""Root selector documents: the externally supplied query.

Document format (JSON or YAML)::

    {
        "cidRootedSelector": {
            "root": "bafyreib...",
            "selectors": [{"selectPath": "child"}]
        }
    }

The whole document, including every nested instruction, is validated here,
before the traversal fetches anything.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from multiformats import CID
from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic import ValidationError as PydanticValidationError

from ipldsel.kernel.domain.node import cid_text
from ipldsel.kernel.domain.selectors import SelectorProgram, build_program, program_to_raw
from ipldsel.kernel.exceptions import InvalidSelectorError

CID_ROOTED_SELECTOR = "cidRootedSelector"


class CidRootedSelectorSpec(BaseModel):
    """Pydantic representation of the ``cidRootedSelector`` body."""

    model_config = ConfigDict(extra="forbid")

    root: StrictStr = Field(description="Identifier of the block the traversal starts at")
    selectors: list[Any] | None = Field(default=None, description="Selector program")


@dataclass(frozen=True, slots=True)
class RootSelectorDocument:
    """A validated query: where to start and what to apply.

    Attributes
    ----------
    root:
        Identifier of the first block to fetch.
    program:
        Immutable selector program; empty and absent are treated alike.
    """

    root: CID
    program: SelectorProgram = ()

    def to_raw(self) -> dict[str, Any]:
        return {
            CID_ROOTED_SELECTOR: {
                "root": cid_text(self.root),
                "selectors": program_to_raw(self.program),
            }
        }


def parse_document(data: Any) -> RootSelectorDocument:
    """Validate a raw selector document.

    Raises
    ------
    InvalidSelectorError
        If the document does not have exactly one root field, the root field
        is unknown, the root identifier is malformed, or any instruction is
        invalid.
    """
    if not isinstance(data, Mapping) or len(data) != 1:
        raise InvalidSelectorError(
            "document", "the selector document needs to have a single root field"
        )

    [(kind, body)] = data.items()
    if kind != CID_ROOTED_SELECTOR:
        raise InvalidSelectorError(
            str(kind), f"unknown selector document type. Available: {CID_ROOTED_SELECTOR}"
        )

    try:
        spec = CidRootedSelectorSpec.model_validate(body)
    except PydanticValidationError as e:
        reasons = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}" for err in e.errors()
        )
        raise InvalidSelectorError(CID_ROOTED_SELECTOR, reasons) from e

    try:
        root = CID.decode(spec.root)
    except Exception as e:  # multiformats raises several error types
        raise InvalidSelectorError(CID_ROOTED_SELECTOR, f"malformed root identifier: {e}") from e

    return RootSelectorDocument(root=root, program=build_program(spec.selectors))
