"""Selector grammar: traversal instructions and their parse rules.

Every instruction is a single-key tagged record, e.g. ``{"selectPath": "child"}``.
The set of variants is closed; :func:`build_selector` is the only way to turn a
raw record into a :class:`Selector`.

Example document fragment::

    [
        {"selectPath": "entries"},
        {"selectArrayAll": null},
        {"selectRecursive": {"follow": [{"selectPath": "next"}], "depthLimit": 3}}
    ]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic import ValidationError as PydanticValidationError

from ipldsel.kernel.domain.node import Node, element_at, is_sequence, lookup, slice_of
from ipldsel.kernel.exceptions import InvalidSelectorError

SelectorProgram = tuple["Selector", ...]


@dataclass(frozen=True, slots=True)
class Match:
    """Result of a selector matching a node.

    Attributes
    ----------
    node:
        Primary node (or link) to continue with.
    siblings:
        Additional nodes found at the same step, visited later in order.
    """

    node: Node
    siblings: tuple[Node, ...] = ()


class Selector(BaseModel, ABC):
    """Base class for one traversal instruction."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    tag: ClassVar[str]

    @abstractmethod
    def visit(self, node: Node) -> Match | None:
        """Apply the instruction to ``node``; ``None`` means no match."""

    @abstractmethod
    def to_raw(self) -> dict[str, Any]:
        """Return the single-key record this selector was built from."""

    @classmethod
    @abstractmethod
    def from_raw(cls, value: Any) -> Selector:
        """Build the selector from the value stored under its tag."""


def _validate(model: type[BaseModel], tag: str, data: Any) -> Any:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        reasons = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}" for err in e.errors()
        )
        raise InvalidSelectorError(tag, reasons) from e


class PathSelector(Selector):
    """Follow one field of a mapping."""

    tag: ClassVar[str] = "selectPath"

    field: StrictStr

    @classmethod
    def from_raw(cls, value: Any) -> PathSelector:
        return _validate(cls, cls.tag, {"field": value})

    def visit(self, node: Node) -> Match | None:
        found, value = lookup(node, self.field)
        return Match(value) if found else None

    def to_raw(self) -> dict[str, Any]:
        return {self.tag: self.field}


class ArrayAllSelector(Selector):
    """Visit every element of a sequence, first one now and the rest later."""

    tag: ClassVar[str] = "selectArrayAll"

    @classmethod
    def from_raw(cls, value: Any) -> ArrayAllSelector:
        if value is not None:
            raise InvalidSelectorError(cls.tag, "value must be null", value)
        return cls()

    def visit(self, node: Node) -> Match | None:
        if not is_sequence(node) or len(node) == 0:
            return None
        return Match(node[0], tuple(node[1:]))

    def to_raw(self) -> dict[str, Any]:
        return {self.tag: None}


class ArrayPositionSelector(Selector):
    """Follow the element at a fixed position of a sequence."""

    tag: ClassVar[str] = "selectArrayPosition"

    index: StrictInt

    @classmethod
    def from_raw(cls, value: Any) -> ArrayPositionSelector:
        return _validate(cls, cls.tag, {"index": value})

    def visit(self, node: Node) -> Match | None:
        found, value = element_at(node, self.index)
        return Match(value) if found else None

    def to_raw(self) -> dict[str, Any]:
        return {self.tag: self.index}


class ArraySliceSelector(Selector):
    """Visit a contiguous range of a sequence (Python slice semantics)."""

    tag: ClassVar[str] = "selectArraySlice"

    start: StrictInt = 0
    end: StrictInt | None = None

    @classmethod
    def from_raw(cls, value: Any) -> ArraySliceSelector:
        if not isinstance(value, Mapping):
            raise InvalidSelectorError(cls.tag, "value must be a mapping with start/end", value)
        return _validate(cls, cls.tag, dict(value))

    def visit(self, node: Node) -> Match | None:
        elements = slice_of(node, self.start, self.end)
        if not elements:
            return None
        return Match(elements[0], tuple(elements[1:]))

    def to_raw(self) -> dict[str, Any]:
        params: dict[str, Any] = {"start": self.start}
        if self.end is not None:
            params["end"] = self.end
        return {self.tag: params}


class _RecursiveParams(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    follow: list[Any] = Field(min_length=1)
    depth_limit: StrictInt | None = Field(default=None, ge=0, alias="depthLimit")


class RecursiveSelector(Selector):
    """Repeat an inner program, descending until it stops matching.

    The traversal engine drives the repetition; ``visit`` only marks the node
    where the recursion is entered.
    """

    tag: ClassVar[str] = "selectRecursive"

    follow: tuple[Selector, ...]
    depth_limit: int | None = None

    @classmethod
    def from_raw(cls, value: Any) -> RecursiveSelector:
        if not isinstance(value, Mapping):
            raise InvalidSelectorError(cls.tag, "value must be a mapping with 'follow'", value)
        params = _validate(_RecursiveParams, cls.tag, dict(value))
        follow = build_program(params.follow, allow_recursive=False)
        return cls(follow=follow, depth_limit=params.depth_limit)

    def visit(self, node: Node) -> Match | None:
        return Match(node)

    def to_raw(self) -> dict[str, Any]:
        params: dict[str, Any] = {"follow": [s.to_raw() for s in self.follow]}
        if self.depth_limit is not None:
            params["depthLimit"] = self.depth_limit
        return {self.tag: params}


SELECTOR_TYPES: dict[str, type[Selector]] = {
    cls.tag: cls
    for cls in (
        PathSelector,
        ArrayAllSelector,
        ArrayPositionSelector,
        ArraySliceSelector,
        RecursiveSelector,
    )
}


def build_selector(raw: Any, *, allow_recursive: bool = True) -> Selector:
    """Build a selector from a single-key tagged record.

    Raises
    ------
    InvalidSelectorError
        If the record does not have exactly one key, the tag is unknown, or a
        recursive selector appears where recursion is not allowed.
    """
    if not isinstance(raw, Mapping):
        raise InvalidSelectorError("instruction", "must be a single-key mapping", raw)
    if len(raw) != 1:
        keys = ", ".join(map(str, raw)) or "none"
        raise InvalidSelectorError("instruction", f"expected exactly one field, got: {keys}")

    [(tag, value)] = raw.items()
    selector_type = SELECTOR_TYPES.get(tag)
    if selector_type is None:
        raise InvalidSelectorError(
            str(tag), f"unknown selector. Available: {', '.join(SELECTOR_TYPES)}"
        )
    if selector_type is RecursiveSelector and not allow_recursive:
        raise InvalidSelectorError(tag, "recursive selectors cannot be nested inside 'follow'")
    return selector_type.from_raw(value)


def build_program(raw: Sequence[Any] | None, *, allow_recursive: bool = True) -> SelectorProgram:
    """Build an immutable selector program from a list of raw records."""
    if raw is None:
        return ()
    if isinstance(raw, str | bytes) or not isinstance(raw, Sequence):
        raise InvalidSelectorError("selectors", "must be a list of instructions", raw)
    return tuple(build_selector(item, allow_recursive=allow_recursive) for item in raw)


def program_to_raw(program: SelectorProgram) -> list[dict[str, Any]]:
    return [selector.to_raw() for selector in program]
