"""Cyclopts CLI entrypoint for inspecting page editor snapshots.

The ``page-editor`` console script loads a snapshot exported from the data
layer and prints what the editor core derives from it: the assembled
document tree, the resolved style sheets, or the text styles offered in the
style menu. It is mainly a debugging aid for snapshot authors.

Examples
--------
Print the document tree of a snapshot:

>>> from page_editor.cli import main
>>> main()  # doctest: +SKIP

Print one resolved style sheet:

>>> from page_editor.cli import app
>>> app(["styles", "--snapshot", "snapshot.json", "--style", "heading"])  # doctest: +SKIP
"""

from __future__ import annotations

import json
import locale
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .errors import EditorError
from .session import EditorSession
from .settings import EditorSettings, SettingsError, load_settings
from .snapshot import SnapshotError, load_snapshot

DEFAULT_SNAPSHOT = Path("snapshot.json")
DEFAULT_SETTINGS = Path("config/editor.yaml")

app = App(name="page-editor", config=cyclopts.config.Env("EDITOR_", command=False))  # type: ignore[unknown-argument]

SnapshotOption = typ.Annotated[
    Path, Parameter(help="Path to the snapshot file", env_var="EDITOR_SNAPSHOT")
]
SettingsOption = typ.Annotated[
    Path, Parameter(help="Path to editor settings", env_var="EDITOR_SETTINGS")
]
LogLevelOption = typ.Annotated[
    str | None, Parameter(help="Override the logging level", env_var="EDITOR_LOG_LEVEL")
]


def _fail(exc: Exception) -> typ.NoReturn:
    """Report ``exc`` on stderr and exit with a non-zero status."""
    print(f"error: {exc}", file=sys.stderr)
    raise SystemExit(1) from exc


def _configure(settings_path: Path, log_level: str | None) -> EditorSettings:
    """Load settings and configure logging from them."""
    try:
        settings = load_settings(settings_path)
    except SettingsError as exc:
        _fail(exc)
    level_name = (log_level or settings.log_level).upper()
    if not isinstance(logging.getLevelName(level_name), int):
        _fail(SettingsError(f"Unknown log level '{level_name}'."))
    logging.basicConfig(
        level=level_name,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return settings


def _open_session(snapshot_path: Path, settings: EditorSettings) -> EditorSession:
    """Load the snapshot and start a session, exiting when there is none."""
    try:
        session = EditorSession.from_snapshot(load_snapshot(snapshot_path), settings)
    except (EditorError, SnapshotError, FileNotFoundError) as exc:
        _fail(exc)
    if session is None:
        _fail(ValueError(f"Snapshot '{snapshot_path}' has no complete page."))
    return session


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, sort_keys=False))


@app.command(help="Print the document tree assembled from a snapshot.")
def document(
    *,
    snapshot: SnapshotOption = DEFAULT_SNAPSHOT,
    settings: SettingsOption = DEFAULT_SETTINGS,
    log_level: LogLevelOption = None,
) -> None:
    """Print the assembled document value as JSON.

    Parameters
    ----------
    snapshot : Path, optional
        Snapshot file to load (overridable via ``EDITOR_SNAPSHOT``).
    settings : Path, optional
        Editor settings YAML; defaults apply when the file is missing.
    log_level : str or None, optional
        Logging level overriding the settings file.
    """
    session = _open_session(snapshot, _configure(settings, log_level))
    _print_json(session.value.to_json())


@app.command(help="Print resolved style sheets.")
def styles(
    *,
    snapshot: SnapshotOption = DEFAULT_SNAPSHOT,
    style: typ.Annotated[
        str | None, Parameter(help="Only print this style id")
    ] = None,
    settings: SettingsOption = DEFAULT_SETTINGS,
    log_level: LogLevelOption = None,
) -> None:
    """Print every resolved style sheet, or only ``style``, as JSON."""
    session = _open_session(snapshot, _configure(settings, log_level))
    try:
        sheets = session.style_sheets
    except EditorError as exc:
        _fail(exc)
    if style is None:
        _print_json({style_id: entry.to_json() for style_id, entry in sheets.items()})
        return
    if style not in sheets:
        _fail(LookupError(f"Unknown style '{style}'."))
    _print_json(sheets[style].to_json())


@app.command(help="List the text styles offered by the style menu.")
def text_styles(
    *,
    snapshot: SnapshotOption = DEFAULT_SNAPSHOT,
    settings: SettingsOption = DEFAULT_SETTINGS,
    log_level: LogLevelOption = None,
) -> None:
    """Print one ``name (id)`` line per text style, in menu order."""
    session = _open_session(snapshot, _configure(settings, log_level))
    try:
        entries = session.text_styles()
    except (EditorError, locale.Error) as exc:
        _fail(exc)
    for entry in entries:
        print(f"{entry.name} ({entry.id})")


def main() -> None:
    """Invoke the Cyclopts application behind the ``page-editor`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
