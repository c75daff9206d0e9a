"""Folio: editorial tooling for a Markdown article corpus."""

__version__ = "0.1.0"
