"""Common literal values used across page_editor.

Keeping these in one place lets settings defaults, the session and tests
agree on the same names.

Examples
--------
>>> from page_editor import _constants
>>> _constants.DEFAULT_TEXT_STYLE_NAME
'text'
>>> "View" in _constants.DEFAULT_SUPPORTED_COMPONENTS
True
"""

DEFAULT_TEXT_STYLE_NAME = "text"
DEFAULT_STYLE_PROP_MARKER = "STYLE"
DEFAULT_SUPPORTED_COMPONENTS = ("View", "Text")
DEFAULT_LOG_LEVEL = "WARNING"
HOTKEY_STYLE_SLOTS = 10
