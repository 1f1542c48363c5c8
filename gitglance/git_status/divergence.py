"""Detection of local commits that differ from the configured upstream."""

from enum import Enum

from git import Repo

from .references import ResolutionError, resolve_references


class Divergence(Enum):
    """Outcome of comparing the current branch with its upstream."""
    NO_HEAD = "no_head"
    DETACHED = "detached"
    BRANCH_NOT_FOUND = "branch_not_found"
    NO_UPSTREAM = "no_upstream"
    RESOLUTION_FAILED = "resolution_failed"
    IN_SYNC = "in_sync"
    DIVERGES = "diverges"

    @property
    def determined(self) -> bool:
        return self in (Divergence.IN_SYNC, Divergence.DIVERGES)


_FROM_RESOLUTION_ERROR = {
    ResolutionError.NO_HEAD: Divergence.NO_HEAD,
    ResolutionError.NO_BRANCH_NAME: Divergence.DETACHED,
    ResolutionError.BRANCH_NOT_FOUND: Divergence.BRANCH_NOT_FOUND,
    ResolutionError.NO_UPSTREAM: Divergence.NO_UPSTREAM,
    ResolutionError.REF_RESOLUTION_FAILED: Divergence.RESOLUTION_FAILED,
}


def detect_divergence(repo: Repo) -> Divergence:
    """Compare the current branch tip with its upstream tip."""
    resolution = resolve_references(repo)
    if not resolution.success:
        return _FROM_RESOLUTION_ERROR[resolution.error]

    return Divergence.DIVERGES if resolution.pair.differs else Divergence.IN_SYNC


def has_unpushed_commits(repo: Repo) -> bool:
    """
    Return True when the current branch and its upstream point at different commits.

    Any case where divergence cannot be determined (no commits, detached
    HEAD, no upstream, unresolvable reference) is reported as False. The
    direction is not distinguished: ahead, behind and diverged all count.
    """
    return detect_divergence(repo) is Divergence.DIVERGES
