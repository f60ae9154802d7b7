"""Core domain for gitsnip."""

from .errors import (
    FetchError,
    GitSnipError,
    PathNotFoundError,
    ResolutionError,
    StorageError,
    TransportError,
    ValidationError,
)
from .keys import KeyDeriver
from .materializer import Materializer, Workspace
from .models import (
    FetchSummary,
    ResolvedCommit,
    Selector,
    SelectorKind,
    SnippetRecord,
    SnippetRequest,
)
from .resolver import ReferenceResolver
from .service import SnippetService

__all__ = [
    "FetchError",
    "FetchSummary",
    "GitSnipError",
    "KeyDeriver",
    "Materializer",
    "PathNotFoundError",
    "ReferenceResolver",
    "ResolutionError",
    "ResolvedCommit",
    "Selector",
    "SelectorKind",
    "SnippetRecord",
    "SnippetRequest",
    "SnippetService",
    "StorageError",
    "TransportError",
    "ValidationError",
    "Workspace",
]
