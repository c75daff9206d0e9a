"""Exceptions for reading and modifying the post corpus."""

from __future__ import annotations

from folio.exceptions import FolioError


class CorpusError(FolioError):
    """Base class for corpus errors."""


class DocumentNotFoundError(CorpusError):
    """Raised when a post or draft cannot be found."""

    def __init__(self, doc_type: str, identifier: str) -> None:
        self.doc_type = doc_type
        self.identifier = identifier
        super().__init__(f"No {doc_type} with slug '{identifier}' found.")


class InvalidPostFilenameError(CorpusError):
    """Raised when a post filename does not follow ``YYYY-MM-DD-slug.md``."""

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"Invalid post filename '{filename}': {reason}")


class MissingMetadataError(CorpusError):
    """Raised when required front matter keys are missing."""

    def __init__(self, identifier: str, missing_keys: list[str]) -> None:
        self.identifier = identifier
        self.missing_keys = missing_keys
        super().__init__(f"'{identifier}' is missing required front matter keys: {', '.join(missing_keys)}")


class DraftExistsError(CorpusError):
    """Raised when a draft would overwrite an existing file."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"A draft already exists at '{path}'.")


class UniqueFilenameError(CorpusError):
    """Raised when a unique filename cannot be generated after a set number of attempts."""

    def __init__(self, base_slug: str, attempts: int) -> None:
        self.base_slug = base_slug
        self.attempts = attempts
        super().__init__(f"Could not generate a unique filename for slug '{base_slug}' after {attempts} attempts.")


class FilesystemOperationError(CorpusError):
    """Base exception for file I/O errors."""

    def __init__(self, path: str, original_exception: Exception, message: str | None = None) -> None:
        self.path = path
        self.original_exception = original_exception
        if message is None:
            message = f"An error occurred at path: {self.path}. Original error: {original_exception}"
        super().__init__(message)


class DirectoryCreationError(FilesystemOperationError):
    """Raised when creating a directory fails."""

    def __init__(self, path: str, original_exception: Exception) -> None:
        message = f"Failed to create directory at: {path}. Original error: {original_exception}"
        super().__init__(path, original_exception, message=message)


class FileWriteError(FilesystemOperationError):
    """Raised when writing or moving a file fails."""

    def __init__(self, path: str, original_exception: Exception) -> None:
        message = f"Failed to write file to: {path}. Original error: {original_exception}"
        super().__init__(path, original_exception, message=message)
