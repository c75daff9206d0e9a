"""Centralized exceptions for Folio."""


class FolioError(Exception):
    """Base exception for all Folio errors."""


class PathTraversalError(FolioError):
    """Raised when a path would escape its intended directory."""
