"""Transformation core of a visual page editor.

The package turns a flat, relational snapshot of design data into the two
structures an editing surface needs: a hierarchical document tree built from
the element list, and render-ready style sheets compiled from style records
and their spread styles.

Exports
-------
- ``EditorSession``: Session state combining the document and style sheets.
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from page_editor import EditorSession
>>> from page_editor.snapshot import parse_snapshot
>>> EditorSession.from_snapshot(parse_snapshot({"components": []})) is None
True
"""

from __future__ import annotations

from .cli import app, main
from .session import EditorSession

__all__ = ["EditorSession", "app", "main"]
