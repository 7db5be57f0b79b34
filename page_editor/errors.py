"""Exception taxonomy raised by the page editor core.

Every error below is fatal: the core never catches them, and the hosting
application is expected to treat them as a failed render. They signal either
corrupt upstream data or a feature that does not exist yet.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ


class EditorError(RuntimeError):
    """Base class for failures raised while building editor state."""


class UnimplementedVariantError(EditorError):
    """Raised when a known but unsupported element variant is encountered."""


class InvariantViolationError(EditorError):
    """Raised when a record lacks a field the data contract guarantees."""


class UnknownReferenceError(EditorError, LookupError):
    """Raised when an id or component kind cannot be resolved."""


class MissingRequiredStyleError(EditorError):
    """Raised when the default text style is required but not defined."""


class ExhaustivenessError(EditorError, AssertionError):
    """Raised when a tag falls outside its closed variant set."""


class CycleDetectedError(EditorError):
    """Raised when spread styles reference each other in a loop."""

    def __init__(self, path: cabc.Sequence[str]) -> None:
        self.path = tuple(path)
        chain = " -> ".join(self.path)
        super().__init__(f"Spread styles form a cycle: {chain}")


def assert_never(value: object) -> typ.NoReturn:
    """Fail for a value that a closed ``match`` should never reach."""
    msg = f"Unhandled variant: {value!r}"
    raise ExhaustivenessError(msg)


__all__ = [
    "CycleDetectedError",
    "EditorError",
    "ExhaustivenessError",
    "InvariantViolationError",
    "MissingRequiredStyleError",
    "UnimplementedVariantError",
    "UnknownReferenceError",
    "assert_never",
]
