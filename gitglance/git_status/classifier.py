"""Single-verdict status classification of a repository."""

import logging
from enum import Enum
from typing import Callable, Iterable

from git import Repo

from .divergence import has_unpushed_commits
from .status_entries import MODIFIED_FLAGS, STAGED_FLAGS, StatusEntry, query_status


class GitStatus(Enum):
    """The one status reported for a repository."""
    NO_CHANGES = "no_changes"
    MODIFIED = "modified"
    STAGED = "staged"
    UNPUSHED_COMMITS = "unpushed_commits"


class ScanState(Enum):
    """States of the per-entry classification scan."""
    SCANNING = "scanning"
    STAGED_FOUND = "staged_found"
    MODIFIED_FOUND = "modified_found"
    UNPUSHED_FOUND = "unpushed_found"
    CLEAN = "clean"

    @property
    def is_final(self) -> bool:
        return self is not ScanState.SCANNING


_VERDICTS = {
    ScanState.STAGED_FOUND: GitStatus.STAGED,
    ScanState.MODIFIED_FOUND: GitStatus.MODIFIED,
    ScanState.UNPUSHED_FOUND: GitStatus.UNPUSHED_COMMITS,
    ScanState.CLEAN: GitStatus.NO_CHANGES,
}


def step(entry: StatusEntry, diverged: Callable[[], bool]) -> ScanState:
    """
    Apply the precedence policy to one status entry.

    Index changes win over working-tree changes, which win over
    divergence. ``diverged`` is only called when the entry matches
    neither, so it runs once per such entry.
    """
    if entry.intersects(STAGED_FLAGS):
        return ScanState.STAGED_FOUND
    if entry.intersects(MODIFIED_FLAGS):
        return ScanState.MODIFIED_FOUND
    if diverged():
        return ScanState.UNPUSHED_FOUND
    return ScanState.SCANNING


def scan(entries: Iterable[StatusEntry], diverged: Callable[[], bool],
         check_clean_divergence: bool = False) -> ScanState:
    """
    Run the scan state machine over ``entries`` until a final state.

    With no entries at all the divergence check is skipped and the
    result is CLEAN, unless ``check_clean_divergence`` is set.
    """
    state = ScanState.SCANNING
    seen_entry = False

    for entry in entries:
        seen_entry = True
        state = step(entry, diverged)
        if state.is_final:
            return state

    if not seen_entry and check_clean_divergence and diverged():
        return ScanState.UNPUSHED_FOUND
    return ScanState.CLEAN


def classify(repo: Repo, check_clean_divergence: bool = False) -> GitStatus:
    """
    Classify ``repo`` into exactly one GitStatus.

    Raises:
        StatusQueryError: if the repository status could not be read
    """
    logger = logging.getLogger('gitglance.git_status')

    entries = query_status(repo)
    state = scan(entries, lambda: has_unpushed_commits(repo), check_clean_divergence)
    verdict = _VERDICTS[state]

    logger.debug(f"{repo.working_dir}: {state.value} -> {verdict.value}")
    return verdict
