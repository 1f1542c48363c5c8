"""Helpers for building throwaway git repositories in tests."""

from pathlib import Path
from typing import Optional

from git import Actor, Repo
from git.objects import Commit

TEST_ACTOR = Actor("gitglance tests", "tests@example.com")


def init_repo(path: Path) -> Repo:
    """Create an empty repository at ``path`` with a local identity configured."""
    path.mkdir(parents=True, exist_ok=True)
    repo = Repo.init(path)
    with repo.config_writer() as writer:
        writer.set_value("user", "name", TEST_ACTOR.name)
        writer.set_value("user", "email", TEST_ACTOR.email)
    return repo


def write_file(repo: Repo, name: str, content: str) -> Path:
    """Write ``content`` to ``name`` inside the working tree."""
    file_path = Path(repo.working_tree_dir) / name
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content)
    return file_path


def commit_file(repo: Repo, name: str, content: str, message: Optional[str] = None) -> Commit:
    """Write, stage and commit a single file."""
    write_file(repo, name, content)
    repo.index.add([name])
    return repo.index.commit(message or f"Add {name}", author=TEST_ACTOR, committer=TEST_ACTOR)


def stage_file(repo: Repo, name: str, content: str) -> None:
    """Write and stage a file without committing it."""
    write_file(repo, name, content)
    repo.index.add([name])


def set_upstream(repo: Repo, commit: Optional[Commit] = None, remote: str = "origin") -> str:
    """
    Point the current branch's upstream at ``commit`` (default: HEAD).

    The remote-tracking ref is written directly, no remote needs to exist.
    Returns the remote-tracking ref name.
    """
    branch = repo.active_branch.name
    target = commit or repo.head.commit
    tracking_ref = f"refs/remotes/{remote}/{branch}"

    repo.git.update_ref(tracking_ref, target.hexsha)
    configure_tracking(repo, remote)
    return tracking_ref


def configure_tracking(repo: Repo, remote: str = "origin") -> None:
    """
    Configure the current branch to track ``remote`` without creating any ref.

    The remote gets the fetch refspec a clone would have, so git can map
    the merge ref to its remote-tracking ref.
    """
    branch = repo.active_branch.name
    with repo.config_writer() as writer:
        writer.set_value(f'remote "{remote}"', "url", str(repo.git_dir))
        writer.set_value(f'remote "{remote}"', "fetch", f"+refs/heads/*:refs/remotes/{remote}/*")
        writer.set_value(f'branch "{branch}"', "remote", remote)
        writer.set_value(f'branch "{branch}"', "merge", f"refs/heads/{branch}")


def track_local_branch(repo: Repo, upstream: str) -> None:
    """Make the current branch track the local branch ``upstream``."""
    repo.git.branch("--set-upstream-to", upstream)


def make_clean_repo(path: Path) -> Repo:
    """Repository with one commit and a clean working tree."""
    repo = init_repo(path)
    commit_file(repo, "README.md", "# test\n", "Initial commit")
    return repo
