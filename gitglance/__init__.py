"""
gitglance - a one-command status overview of many git checkouts.

Scans the immediate subdirectories of a folder and reports which
repositories have unpushed commits, staged changes or modifications.
"""

__version__ = "1.0.0"
__description__ = "Report which git repositories under a directory need attention"

from .cli import main

__all__ = ["main"]
