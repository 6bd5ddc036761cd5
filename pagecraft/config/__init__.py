"""Load and validate the section registry configuration for the page editor.

This subpackage starts from the built-in registry of section types, page
layouts and seed collections, merges any overrides found in a
``pagecraft.yaml`` file, and produces strongly typed dataclasses
(:class:`EditorConfig`, :class:`LayoutConfig`, :class:`SectionTypeConfig`)
that the registry and editor session consume. The primary entry point is
:func:`load_editor_config`.

Examples
--------
>>> from pathlib import Path
>>> from pagecraft.config import load_editor_config
>>> config = load_editor_config(Path("pagecraft.yaml"))  # doctest: +SKIP
>>> config.get_layout("contact").optional  # doctest: +SKIP
['header', 'businessInfo', 'richText', 'faq']
"""

from .loader import load_editor_config
from .models import EditorConfig, EditorConfigError, LayoutConfig, SectionTypeConfig

__all__ = [
    "EditorConfig",
    "EditorConfigError",
    "LayoutConfig",
    "SectionTypeConfig",
    "load_editor_config",
]
