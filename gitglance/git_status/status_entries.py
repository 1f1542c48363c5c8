"""Working-tree and index status entries read through GitPython."""

import logging
from dataclasses import dataclass
from enum import Flag, auto
from typing import List

from git import Repo, GitCommandError

from ..errors import StatusQueryError


class StatusFlag(Flag):
    """Change flags for a single status entry."""
    NONE = 0
    INDEX_NEW = auto()
    INDEX_MODIFIED = auto()
    INDEX_DELETED = auto()
    INDEX_RENAMED = auto()
    INDEX_TYPECHANGE = auto()
    WT_NEW = auto()
    WT_MODIFIED = auto()
    WT_DELETED = auto()
    WT_RENAMED = auto()
    WT_TYPECHANGE = auto()
    CONFLICTED = auto()


STAGED_FLAGS = StatusFlag.INDEX_NEW | StatusFlag.INDEX_MODIFIED | StatusFlag.INDEX_DELETED
MODIFIED_FLAGS = StatusFlag.WT_MODIFIED | StatusFlag.WT_DELETED

_INDEX_CODES = {
    "A": StatusFlag.INDEX_NEW,
    "C": StatusFlag.INDEX_NEW,
    "M": StatusFlag.INDEX_MODIFIED,
    "D": StatusFlag.INDEX_DELETED,
    "R": StatusFlag.INDEX_RENAMED,
    "T": StatusFlag.INDEX_TYPECHANGE,
}

_WORKTREE_CODES = {
    "A": StatusFlag.WT_NEW,
    "M": StatusFlag.WT_MODIFIED,
    "D": StatusFlag.WT_DELETED,
    "R": StatusFlag.WT_RENAMED,
    "T": StatusFlag.WT_TYPECHANGE,
}

_UNMERGED_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}

# Index + worktree, untracked files included, untracked directories recursed,
# no rename detection.
STATUS_ARGS = ("--porcelain=v1", "-z", "--untracked-files=all", "--no-renames")

# Keeps `git status` from taking index.lock to write back a refreshed index.
STATUS_ENV = {"GIT_OPTIONAL_LOCKS": "0"}


@dataclass(frozen=True)
class StatusEntry:
    """One changed path and its change flags."""
    path: str
    flags: StatusFlag

    def intersects(self, flags: StatusFlag) -> bool:
        return bool(self.flags & flags)


def flags_for_code(code: str) -> StatusFlag:
    """Translate a two-letter porcelain ``XY`` code into status flags."""
    if code == "??":
        return StatusFlag.WT_NEW
    if code in _UNMERGED_CODES:
        return StatusFlag.CONFLICTED

    flags = StatusFlag.NONE
    flags |= _INDEX_CODES.get(code[0], StatusFlag.NONE)
    flags |= _WORKTREE_CODES.get(code[1], StatusFlag.NONE)
    return flags


def parse_porcelain(output: str) -> List[StatusEntry]:
    """
    Parse ``git status --porcelain=v1 -z`` output.

    Records are NUL separated and look like ``XY path``. Rename and copy
    records are followed by an extra record holding the original path.
    """
    entries: List[StatusEntry] = []
    records = output.split("\0")
    index = 0

    while index < len(records):
        record = records[index]
        index += 1
        if len(record) < 4:
            continue

        code, path = record[:2], record[3:]
        if code[0] in "RC" or code[1] in "RC":
            index += 1

        entries.append(StatusEntry(path=path, flags=flags_for_code(code)))

    return entries


def query_status(repo: Repo) -> List[StatusEntry]:
    """
    Return the ordered status entries of ``repo``.

    Raises:
        StatusQueryError: if git could not report the repository status
    """
    logger = logging.getLogger('gitglance.git_status')

    try:
        output = repo.git.status(*STATUS_ARGS, env=STATUS_ENV)
    except GitCommandError as e:
        raise StatusQueryError(str(repo.working_dir or repo.git_dir), str(e).strip()) from e

    entries = parse_porcelain(output)
    logger.debug(f"{len(entries)} status entries in {repo.working_dir}")
    return entries
