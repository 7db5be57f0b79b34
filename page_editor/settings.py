"""Load editor settings YAML into a typed dataclass.

Settings tune the few policy choices the editor core makes: which style is
the default text style, how style-typed props are recognised, which catalog
components can be rendered, and how the CLI logs.

Examples
--------
>>> from page_editor.settings import load_settings
>>> load_settings(None).text_style_name
'text'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from ruamel.yaml import YAML

from ._constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_STYLE_PROP_MARKER,
    DEFAULT_SUPPORTED_COMPONENTS,
    DEFAULT_TEXT_STYLE_NAME,
    HOTKEY_STYLE_SLOTS,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class SettingsError(ValueError):
    """Raised when the settings file is invalid."""


@dc.dataclass(slots=True)
class EditorSettings:
    """Policy knobs for an editing session."""

    text_style_name: str = DEFAULT_TEXT_STYLE_NAME
    style_prop_marker: str = DEFAULT_STYLE_PROP_MARKER
    supported_components: tuple[str, ...] = DEFAULT_SUPPORTED_COMPONENTS
    void_components: tuple[str, ...] = ()
    hotkey_style_slots: int = HOTKEY_STYLE_SLOTS
    sort_locale: str | None = None
    log_level: str = DEFAULT_LOG_LEVEL


def _string_tuple(value: object, key: str) -> tuple[str, ...]:
    match value:
        case str():
            return (value,)
        case cabc.Sequence():
            return tuple(str(item) for item in value)
        case _:
            msg = f"Setting '{key}' must be a string or a list of strings."
            raise SettingsError(msg)


def _build_settings(payload: cabc.Mapping[str, typ.Any]) -> EditorSettings:
    """Build EditorSettings from a mapping, keeping defaults for absent keys."""
    base = EditorSettings()
    slots = payload.get("hotkey_style_slots", base.hotkey_style_slots)
    if not isinstance(slots, int) or slots < 0:
        msg = "Setting 'hotkey_style_slots' must be a non-negative integer."
        raise SettingsError(msg)
    log_level = str(payload.get("log_level", base.log_level)).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        msg = f"Setting 'log_level' names unknown level '{log_level}'."
        raise SettingsError(msg)
    sort_locale = payload.get("sort_locale", base.sort_locale)
    if sort_locale is not None and not isinstance(sort_locale, str):
        msg = "Setting 'sort_locale' must be a locale name."
        raise SettingsError(msg)
    return EditorSettings(
        text_style_name=str(payload.get("text_style_name", base.text_style_name)),
        style_prop_marker=str(payload.get("style_prop_marker", base.style_prop_marker)),
        supported_components=_string_tuple(
            payload.get("supported_components", base.supported_components),
            "supported_components",
        ),
        void_components=_string_tuple(
            payload.get("void_components", base.void_components), "void_components"
        ),
        hotkey_style_slots=slots,
        sort_locale=sort_locale,
        log_level=log_level,
    )


def load_settings(path: Path | None) -> EditorSettings:
    """Load editor settings from ``path``, or return defaults.

    Parameters
    ----------
    path : Path or None
        YAML settings file. ``None`` or a missing file yields the defaults.

    Returns
    -------
    EditorSettings
        Settings with every absent key filled from the defaults. Unknown keys
        are ignored.

    Raises
    ------
    SettingsError
        If the YAML document is not a mapping or a value has the wrong type.
    """
    if path is None or not path.exists():
        if path is not None:
            logger.debug("settings file %s not found; using defaults", path)
        return EditorSettings()

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level settings structure must be a mapping."
        raise SettingsError(msg)
    return _build_settings(loaded)


__all__ = ["EditorSettings", "SettingsError", "load_settings"]
