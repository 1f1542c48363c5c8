"""Directory enumeration and repository opening."""

import logging
from pathlib import Path
from typing import List, Optional

from git import Repo, InvalidGitRepositoryError, NoSuchPathError


def list_candidate_directories(root: Path) -> List[Path]:
    """
    Return the immediate subdirectories of ``root``, sorted by name.

    Files are ignored. Symlinks to directories count as directories.

    Raises:
        FileNotFoundError, PermissionError, NotADirectoryError, OSError:
            if ``root`` cannot be listed
    """
    directories = [entry for entry in root.iterdir() if entry.is_dir()]
    return sorted(directories, key=lambda entry: entry.name)


def open_repository(path: Path) -> Optional[Repo]:
    """
    Open ``path`` as a repository root.

    Returns None when ``path`` is not itself a repository. Parent
    directories are not searched.
    """
    logger = logging.getLogger('gitglance.git_status')

    try:
        return Repo(path, search_parent_directories=False)
    except (InvalidGitRepositoryError, NoSuchPathError):
        logger.debug(f"Skipping {path}: not a git repository")
        return None
