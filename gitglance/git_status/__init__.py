"""Repository status classification for gitglance."""

from .classifier import GitStatus, ScanState, classify
from .divergence import Divergence, detect_divergence, has_unpushed_commits
from .references import ReferencePair, ReferenceResolution, ResolutionError, resolve_references
from .repository import list_candidate_directories, open_repository
from .status_entries import StatusEntry, StatusFlag, query_status

__all__ = [
    'GitStatus',
    'ScanState',
    'classify',
    'Divergence',
    'detect_divergence',
    'has_unpushed_commits',
    'ReferencePair',
    'ReferenceResolution',
    'ResolutionError',
    'resolve_references',
    'list_candidate_directories',
    'open_repository',
    'StatusEntry',
    'StatusFlag',
    'query_status'
]
