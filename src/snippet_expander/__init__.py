"""
snippet_expander
================

Does: Root package initializer for the alias expansion / shortcut search project.
Returns: Exposes the `expansion` subpackage; the public API lives there.
Used by: All imports starting from `snippet_expander.*` and the `snippet-demo` CLI.
"""

__all__: list[str] = []
__docformat__ = "google"
__version__ = "0.1.0"
