"""Compile and cascade page styles into render-ready style sheets."""

from .cascade import resolve_all_styles, resolve_style
from .compiler import FieldKind, compile_style_bodies, compile_style_body
from .models import (
    CascadeResult,
    FrozenPropertyBag,
    PropertyBag,
    ResolvedStyleEntry,
    freeze_bag,
)
from .sheets import StyleSheetCache, TextStyle, build_style_sheets, text_styles
from .values import resolve_borders, resolve_colors, resolve_dimensions

__all__ = [
    "CascadeResult",
    "FieldKind",
    "FrozenPropertyBag",
    "PropertyBag",
    "ResolvedStyleEntry",
    "StyleSheetCache",
    "TextStyle",
    "build_style_sheets",
    "compile_style_bodies",
    "compile_style_body",
    "freeze_bag",
    "resolve_all_styles",
    "resolve_borders",
    "resolve_colors",
    "resolve_dimensions",
    "resolve_style",
    "text_styles",
]
