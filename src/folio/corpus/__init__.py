"""The post corpus: posts, drafts and the files they live in."""

from folio.corpus.drafts import create_draft, demote_post, promote_draft
from folio.corpus.exceptions import (
    CorpusError,
    DocumentNotFoundError,
    DraftExistsError,
    InvalidPostFilenameError,
    MissingMetadataError,
    UniqueFilenameError,
)
from folio.corpus.models import Document, DocumentType, Draft, Post, PostMetadata
from folio.corpus.store import Corpus, LoadProblem, load_post

__all__ = [
    "Corpus",
    "CorpusError",
    "Document",
    "DocumentNotFoundError",
    "DocumentType",
    "Draft",
    "DraftExistsError",
    "InvalidPostFilenameError",
    "LoadProblem",
    "MissingMetadataError",
    "Post",
    "PostMetadata",
    "UniqueFilenameError",
    "create_draft",
    "demote_post",
    "load_post",
    "promote_draft",
]
