"""Resolution of the current branch and its upstream to commit ids."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from git import Repo, GitCommandError
from git.exc import BadName, BadObject


class ResolutionError(Enum):
    """Reasons a branch/upstream pair could not be resolved."""
    NO_HEAD = "no_head"
    NO_BRANCH_NAME = "no_branch_name"
    BRANCH_NOT_FOUND = "branch_not_found"
    NO_UPSTREAM = "no_upstream"
    REF_RESOLUTION_FAILED = "ref_resolution_failed"


@dataclass(frozen=True)
class ReferencePair:
    """Local branch reference and its upstream, both resolved to commit ids."""
    local_name: str
    local_id: str
    upstream_name: str
    upstream_id: str

    @property
    def differs(self) -> bool:
        return self.local_id != self.upstream_id


@dataclass
class ReferenceResolution:
    """Result of resolving the current branch and its upstream."""
    success: bool
    message: str
    pair: Optional[ReferencePair] = None
    error: Optional[ResolutionError] = None


def _failure(error: ResolutionError, message: str) -> ReferenceResolution:
    logging.getLogger('gitglance.git_status').debug(f"Reference resolution failed ({error.value}): {message}")
    return ReferenceResolution(success=False, message=message, error=error)


def resolve_commit_id(repo: Repo, refname: str) -> str:
    """
    Resolve a full reference name such as ``refs/heads/main`` to a commit id.

    Raises:
        ValueError: if the name is empty, malformed or does not resolve
    """
    if not refname:
        raise ValueError("empty reference name")
    try:
        return repo.rev_parse(refname).hexsha
    except (BadName, BadObject, GitCommandError, ValueError) as e:
        raise ValueError(f"cannot resolve {refname}: {e}") from e


def resolve_upstream_name(repo: Repo, branch_name: str) -> str:
    """
    Ask git for the full name of ``branch_name``'s upstream.

    Unlike ``Head.tracking_branch()`` this follows git's own rules, so a
    branch tracking a local branch (``branch.<name>.remote = .``) yields
    ``refs/heads/<merge>`` and custom fetch refspecs are honoured.

    Raises:
        ValueError: if git cannot name the upstream
    """
    try:
        name = repo.git.rev_parse("--symbolic-full-name", f"{branch_name}@{{upstream}}")
    except GitCommandError as e:
        raise ValueError(f"cannot resolve upstream of {branch_name}: {str(e).strip()}") from e
    if not name:
        raise ValueError(f"cannot resolve upstream of {branch_name}")
    return name.strip()


def resolve_references(repo: Repo) -> ReferenceResolution:
    """
    Resolve the checked-out branch and its configured upstream.

    This is a pure read: nothing in the repository is changed. Failures
    are returned, never raised.
    """
    head = repo.head
    if not head.is_valid():
        return _failure(ResolutionError.NO_HEAD, "HEAD does not point at a commit")

    if head.is_detached:
        return _failure(ResolutionError.NO_BRANCH_NAME, "HEAD is detached")

    try:
        branch_name = head.reference.name
    except (TypeError, ValueError) as e:
        return _failure(ResolutionError.NO_BRANCH_NAME, f"cannot read branch name: {e}")

    try:
        local_branch = repo.heads[branch_name]
    except IndexError:
        return _failure(ResolutionError.BRANCH_NOT_FOUND, f"local branch '{branch_name}' not found")

    if local_branch.tracking_branch() is None:
        return _failure(ResolutionError.NO_UPSTREAM, f"branch '{branch_name}' has no upstream configured")

    try:
        upstream_name = resolve_upstream_name(repo, branch_name)
        local_id = resolve_commit_id(repo, local_branch.path)
        upstream_id = resolve_commit_id(repo, upstream_name)
    except ValueError as e:
        return _failure(ResolutionError.REF_RESOLUTION_FAILED, str(e))

    pair = ReferencePair(
        local_name=local_branch.path,
        local_id=local_id,
        upstream_name=upstream_name,
        upstream_id=upstream_id
    )
    return ReferenceResolution(
        success=True,
        message=f"{pair.local_name} -> {pair.upstream_name}",
        pair=pair
    )
