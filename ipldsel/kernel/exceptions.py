"""Core exception hierarchy for ipldsel.

All ipldsel exceptions inherit from IpldSelError for easy exception handling.
"No match" and "unresolved" are deliberately absent: they are normal traversal
outcomes, not failures.
"""

from __future__ import annotations

# ============================================================================
# Base Exception
# ============================================================================


class IpldSelError(Exception):
    """Base exception for all ipldsel errors.

    Catch this to handle all ipldsel errors.
    """

    pass


# ============================================================================
# Selector Errors
# ============================================================================


class InvalidSelectorError(IpldSelError):
    """Raised when a selector document or instruction is malformed.

    Covers zero or several discriminant keys, unknown tags, nested recursion
    and structurally invalid parameters. Always raised before any block is
    fetched for the offending instruction.

    Examples
    --------
    Example usage::

        raise InvalidSelectorError("selectArrayAll", "value must be null", value=3)
    """

    def __init__(self, selector: str, reason: str, value: object = None) -> None:
        """Initialize invalid selector error.

        Args
        ----
            selector: Tag or location of the offending selector
            reason: Explanation of what's wrong
            value: The invalid value (optional)
        """
        if value is not None:
            msg = f"Invalid selector '{selector}': {reason} (got {value!r})"
        else:
            msg = f"Invalid selector '{selector}': {reason}"
        super().__init__(msg)
        self.selector = selector
        self.reason = reason
        self.value = value


# ============================================================================
# Block Errors
# ============================================================================


def _cid_text(cid: object) -> str:
    from multiformats import CID

    from ipldsel.kernel.domain.node import cid_text

    return cid_text(cid) if isinstance(cid, CID) else str(cid)


class BlockNotFoundError(IpldSelError):
    """Raised when a referenced block is absent from the block store.

    Fatal for the traversal: blocks emitted before the failing fetch remain a
    valid prefix of the output.
    """

    def __init__(self, cid: object, store: str | None = None) -> None:
        msg = f"Block '{_cid_text(cid)}' not found"
        if store:
            msg += f" in {store}"
        super().__init__(msg)
        self.cid = cid
        self.store = store


class DecodeError(IpldSelError):
    """Raised when block bytes cannot be decoded into a node."""

    def __init__(self, codec: str, reason: str, cid: object = None) -> None:
        if cid is not None:
            msg = f"Cannot decode block '{_cid_text(cid)}' with codec '{codec}': {reason}"
        else:
            msg = f"Cannot decode block with codec '{codec}': {reason}"
        super().__init__(msg)
        self.codec = codec
        self.reason = reason
        self.cid = cid


# ============================================================================
# Configuration & Resolution Errors
# ============================================================================


class ConfigurationError(IpldSelError):
    """Raised when configuration is invalid or missing.

    Examples
    --------
    Example usage::

        raise ConfigurationError("store", "path is required for the flatfs adapter")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the component with invalid configuration
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


class ResolveError(IpldSelError):
    """Raised when an adapter alias or module path cannot be resolved."""

    def __init__(self, kind: str, reason: str) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"Cannot resolve '{kind}': {reason}")
