"""Directory-content management engine: list, sort, create, rename, delete and import."""

from dirkeeper._backend import Backend
from dirkeeper._config import BrowserConfig
from dirkeeper._dispatch import Dispatcher
from dirkeeper._errors import (
    AlreadyExists,
    BatchError,
    DirKeeperError,
    EnumerationError,
    InvalidPassword,
    MutationError,
    NamingExhausted,
    NotFound,
    PermissionDenied,
)
from dirkeeper._listing import list_directory
from dirkeeper._models import BatchReport, Entry, EventKind, SortKey, StateEvent
from dirkeeper._mutator import BulkMutator
from dirkeeper._naming import resolve_unique_path, sanitize_name, sanitize_path
from dirkeeper._services import ArchiveService, CertificateImporter
from dirkeeper._sorting import sort_entries, type_label
from dirkeeper._state import DirectoryState
from dirkeeper.backends._local import LocalBackend

__version__ = "0.1.0"

__all__ = [
    # Core
    "DirectoryState",
    "BulkMutator",
    "Dispatcher",
    "Backend",
    "LocalBackend",
    # Components
    "list_directory",
    "sort_entries",
    "type_label",
    "resolve_unique_path",
    "sanitize_name",
    "sanitize_path",
    # Models
    "Entry",
    "SortKey",
    "BatchReport",
    "EventKind",
    "StateEvent",
    # Collaborators
    "CertificateImporter",
    "ArchiveService",
    # Config
    "BrowserConfig",
    # Errors
    "DirKeeperError",
    "NotFound",
    "AlreadyExists",
    "PermissionDenied",
    "EnumerationError",
    "MutationError",
    "BatchError",
    "NamingExhausted",
    "InvalidPassword",
    # Version
    "__version__",
]
