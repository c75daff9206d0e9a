"""Utility helpers shared across Folio."""

from folio.utils.paths import safe_path_join, slugify

__all__ = ["safe_path_join", "slugify"]
