"""Utility helpers shared by the snapshot loader and the style compiler."""

from __future__ import annotations

import collections.abc as cabc
import logging
import re
import typing as typ

from .models import SnapshotError

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class _Identified(typ.Protocol):
    @property
    def id(self) -> str: ...


RecordT = typ.TypeVar("RecordT", bound=_Identified)


def build_index(records: cabc.Iterable[RecordT]) -> dict[str, RecordT]:
    """Map every record's ``id`` to the record itself.

    Duplicate ids are not reported: a later record silently replaces an
    earlier one with the same id.

    Examples
    --------
    >>> from page_editor.snapshot import ColorValue, build_index
    >>> index = build_index([ColorValue(id="red", r=255, g=0, b=0)])
    >>> index["red"].r
    255
    """
    index = {record.id: record for record in records}
    logger.debug("indexed %d records", len(index))
    return index


def _to_snake(name: str) -> str:
    """Convert a camelCase field name to snake_case."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def _to_camel(name: str) -> str:
    """Convert a snake_case attribute name to camelCase."""
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _ref_id(value: object) -> str | None:
    """Return the id carried by a reference given as ``{id: ...}`` or a bare id."""
    match value:
        case None:
            return None
        case str():
            return value
        case {"id": str() as ref}:
            return ref
        case _:
            msg = f"Expected a reference id, got {value!r}."
            raise SnapshotError(msg)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require(payload: cabc.Mapping[str, typ.Any], key: str, what: str) -> typ.Any:
    """Return ``payload[key]`` or raise SnapshotError naming the record kind."""
    value = payload.get(key)
    if value is None:
        msg = f"{what} is missing '{key}'."
        raise SnapshotError(msg)
    return value


__all__ = [
    "RecordT",
    "_optional_str",
    "_ref_id",
    "_require",
    "_to_camel",
    "_to_snake",
    "build_index",
]
