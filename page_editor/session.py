"""Editing session state and the command-dispatch interface.

An :class:`EditorSession` owns the two derived views of a snapshot:

* the document value, assembled once when the session starts and afterwards
  changed only through dispatched actions, and
* the resolved style sheets, recomputed whenever the style or primitive value
  collections change.

Collaborators that issue edits (menus, breadcrumbs, keyboard handlers)
receive ``session.dispatch`` as their :class:`Dispatcher`.

Examples
--------
>>> from page_editor.session import EditorSession, SetTextStyle
>>> session = EditorSession.from_snapshot(snapshot)  # doctest: +SKIP
>>> session.dispatch(SetTextStyle(style_id="heading"))  # doctest: +SKIP
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import logging
import typing as typ

from .document.assembler import build_document_value
from .document.selection import Range, block_style_id, set_text_style, toggle_mark
from .errors import InvariantViolationError, MissingRequiredStyleError, assert_never
from .render import ComponentRenderer, MarkType
from .settings import EditorSettings
from .snapshot.helpers import build_index
from .styles.sheets import StyleSheetCache, text_styles

if typ.TYPE_CHECKING:
    from .document.models import ComponentNode, DocumentValue
    from .snapshot.models import (
        BorderValue,
        ColorValue,
        Component,
        DimensionValue,
        Element,
        Snapshot,
        Style,
    )
    from .styles.models import ResolvedStyleEntry
    from .styles.sheets import TextStyle

logger = logging.getLogger(__name__)


class ActionType(enum.StrEnum):
    """Wire names of the actions accepted by :meth:`EditorSession.dispatch`."""

    FOCUS = "focus"
    UPDATE = "update"
    TOGGLE_MARK = "toggleMark"
    SET_TEXT_STYLE = "setTextStyle"
    MOVE_TO_ANCHOR = "moveToAnchor"


@dc.dataclass(slots=True, frozen=True)
class Focus:
    """Give the editing surface keyboard focus."""


@dc.dataclass(slots=True, frozen=True)
class Update:
    """Replace the document value, optionally moving the selection."""

    value: DocumentValue
    selection: Range | None = None


@dc.dataclass(slots=True, frozen=True)
class ToggleMark:
    """Toggle a text mark over the current selection."""

    mark: MarkType


@dc.dataclass(slots=True, frozen=True)
class SetTextStyle:
    """Apply a style to the blocks of the current selection."""

    style_id: str


@dc.dataclass(slots=True, frozen=True)
class MoveToAnchor:
    """Collapse an expanded selection onto its anchor."""


EditorAction: typ.TypeAlias = Focus | Update | ToggleMark | SetTextStyle | MoveToAnchor


class Dispatcher(typ.Protocol):
    """Callable that applies editor actions."""

    def __call__(self, action: EditorAction) -> None: ...


def parse_action(payload: cabc.Mapping[str, typ.Any]) -> EditorAction:
    """Build an action from its ``{"type": ..., ...}`` wire form.

    ``update`` actions carry an in-memory document value and cannot be
    decoded from plain data; pass an :class:`Update` directly instead.
    """
    match payload:
        case {"type": ActionType.FOCUS}:
            return Focus()
        case {"type": ActionType.TOGGLE_MARK, "mark": str() as mark}:
            return ToggleMark(mark=MarkType(mark))
        case {"type": ActionType.SET_TEXT_STYLE, "styleId": str() as style_id}:
            return SetTextStyle(style_id=style_id)
        case {"type": ActionType.MOVE_TO_ANCHOR}:
            return MoveToAnchor()
        case _:
            msg = f"Cannot decode editor action {dict(payload)!r}."
            raise ValueError(msg)


class EditorSession:
    """Hold the document and style sheets for one page being edited."""

    def __init__(
        self, snapshot: Snapshot, settings: EditorSettings | None = None
    ) -> None:
        """Start a session from a complete snapshot.

        Parameters
        ----------
        snapshot : Snapshot
            Snapshot whose page and web collections are all present.
        settings : EditorSettings, optional
            Session policy; defaults to :class:`EditorSettings` defaults.

        Raises
        ------
        InvariantViolationError
            If the snapshot is incomplete. Use :meth:`from_snapshot` to get
            ``None`` instead.
        """
        page = snapshot.page
        if page is None or not page.web.is_complete:
            msg = "Cannot start an editing session from an incomplete snapshot."
            raise InvariantViolationError(msg)
        self.settings = settings or EditorSettings()
        self.page_id = page.id
        self.title = page.draft_title or page.title
        self.components_by_id: dict[str, Component] = build_index(snapshot.components)
        self.elements: list[Element] = list(page.web.elements or [])
        self.styles: list[Style] = list(page.web.styles or [])
        self.border_values: list[BorderValue] = list(page.web.border_values or [])
        self.color_values: list[ColorValue] = list(page.web.color_values or [])
        self.dimension_values: list[DimensionValue] = list(
            page.web.dimension_values or []
        )
        self.value: DocumentValue = build_document_value(
            page.element_id, self.elements, self.components_by_id
        )
        self.selection: Range | None = None
        self.is_focused = False
        self.document_changed = False
        self._sheet_cache = StyleSheetCache()

    @classmethod
    def from_snapshot(
        cls, snapshot: Snapshot, settings: EditorSettings | None = None
    ) -> EditorSession | None:
        """Return a session, or ``None`` when the snapshot has nothing to edit."""
        if not snapshot.is_complete:
            logger.debug("snapshot incomplete; no session started")
            return None
        return cls(snapshot, settings)

    @property
    def styles_by_id(self) -> dict[str, Style]:
        return build_index(self.styles)

    @property
    def style_sheets(self) -> cabc.Mapping[str, ResolvedStyleEntry]:
        """Return resolved style sheets, rebuilt only after their inputs change."""
        return self._sheet_cache.get(
            self.styles, self.border_values, self.color_values, self.dimension_values
        )

    @property
    def renderer(self) -> ComponentRenderer:
        """Return a renderer bound to the current style sheets."""
        return ComponentRenderer(
            self.components_by_id,
            self.style_sheets,
            supported=self.settings.supported_components,
            marker=self.settings.style_prop_marker,
        )

    def replace_web_data(
        self,
        *,
        styles: cabc.Sequence[Style] | None = None,
        border_values: cabc.Sequence[BorderValue] | None = None,
        color_values: cabc.Sequence[ColorValue] | None = None,
        dimension_values: cabc.Sequence[DimensionValue] | None = None,
        elements: cabc.Sequence[Element] | None = None,
    ) -> None:
        """Swap in newer snapshot collections.

        Style and primitive value changes show up in the next
        :attr:`style_sheets` read. New elements are stored but the document
        value is not rebuilt from them; it only changes through dispatch.
        """
        if styles is not None:
            self.styles = list(styles)
        if border_values is not None:
            self.border_values = list(border_values)
        if color_values is not None:
            self.color_values = list(color_values)
        if dimension_values is not None:
            self.dimension_values = list(dimension_values)
        if elements is not None:
            self.elements = list(elements)
            logger.debug("elements replaced; document value kept as is")

    def is_void(self, block: ComponentNode) -> bool:
        """Return True when ``block`` renders a void component."""
        component = self.components_by_id.get(block.type_id)
        return component is not None and component.name in self.settings.void_components

    def select(self, selection: Range | None) -> None:
        """Move the selection."""
        self.selection = selection

    def dispatch(self, action: EditorAction) -> None:
        """Apply ``action`` to the session state."""
        logger.debug("dispatch %s", type(action).__name__)
        match action:
            case Focus():
                self.is_focused = True
            case Update(value=value, selection=selection):
                if value is not self.value:
                    self.document_changed = True
                self.value = value
                if selection is not None:
                    self.selection = selection
            case ToggleMark(mark=mark):
                if self.selection is None:
                    return
                toggle_mark(self.value.root, self.selection, mark)
            case SetTextStyle(style_id=style_id):
                if self.selection is None:
                    return
                set_text_style(
                    self.value.root,
                    self.selection,
                    style_id,
                    self.is_void,
                    marker=self.settings.style_prop_marker,
                )
                self.document_changed = True
            case MoveToAnchor():
                if self.selection is None or self.selection.is_collapsed:
                    return
                self.selection = Range.collapsed(self.selection.anchor)
                self.is_focused = True
            case _:
                assert_never(action)

    def text_styles(self) -> list[TextStyle]:
        """Return the styles applicable to text, sorted by name."""
        return text_styles(self.style_sheets, sort_locale=self.settings.sort_locale)

    def style_for_hotkey(self, slot: int) -> str | None:
        """Return the id of the text style bound to hotkey ``slot``, if any."""
        if not 0 <= slot < self.settings.hotkey_style_slots:
            return None
        styles = self.text_styles()
        if slot >= len(styles):
            return None
        return styles[slot].id

    def default_text_style_id(self) -> str:
        """Return the id of the default text style.

        Raises
        ------
        MissingRequiredStyleError
            If no text style carries the configured default name.
        """
        name = self.settings.text_style_name
        for style in self.text_styles():
            if style.name == name:
                return style.id
        msg = f"App must have a text style named '{name}'."
        raise MissingRequiredStyleError(msg)

    @staticmethod
    def node_text_style_id(node: ComponentNode) -> str:
        """Return the style id applied to ``node``, or ``""``."""
        return block_style_id(node)


__all__ = [
    "ActionType",
    "Dispatcher",
    "EditorAction",
    "EditorSession",
    "Focus",
    "MoveToAnchor",
    "SetTextStyle",
    "ToggleMark",
    "Update",
    "parse_action",
]
