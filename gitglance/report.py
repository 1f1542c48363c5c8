"""Aggregation of per-repository verdicts into a printable report."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List

from .errors import StatusQueryError, error_handler
from .git_status import GitStatus, classify, open_repository
from .performance import get_performance_logger

ALL_GOOD = "All good!"

# Buckets are printed in this order, each under its header.
BUCKET_HEADERS = (
    (GitStatus.UNPUSHED_COMMITS, "Unpushed commits:"),
    (GitStatus.STAGED, "Staged changes:"),
    (GitStatus.MODIFIED, "Modified:"),
)


@dataclass
class Report:
    """Repository paths bucketed by verdict, in enumeration order."""
    buckets: Dict[GitStatus, List[str]] = field(
        default_factory=lambda: {status: [] for status, _ in BUCKET_HEADERS}
    )
    clean_count: int = 0
    failures: List[str] = field(default_factory=list)

    def add(self, path: str, status: GitStatus) -> None:
        if status is GitStatus.NO_CHANGES:
            self.clean_count += 1
        else:
            self.buckets[status].append(path)

    @property
    def all_good(self) -> bool:
        return not self.failures and not any(self.buckets.values())


def aggregate(candidates: Iterable[Path], check_clean_divergence: bool = False) -> Report:
    """
    Classify every candidate directory and bucket the results.

    Directories that are not repositories are skipped. Repositories whose
    status cannot be read are recorded as failures and left out of every
    bucket.
    """
    logger = logging.getLogger('gitglance.scan')
    performance = get_performance_logger()
    report = Report()

    for candidate in candidates:
        repo = open_repository(candidate)
        if repo is None:
            continue

        path = str(candidate)
        with repo:
            try:
                with performance.time_operation("classify", context={'repository': path}):
                    status = classify(repo, check_clean_divergence)
            except StatusQueryError as e:
                error_handler.handle_status_error(e, {'repository_path': path})
                report.failures.append(path)
                continue

        logger.info(f"{path}: {status.value}")
        report.add(path, status)

    return report


def render_report(report: Report) -> str:
    """Render ``report`` as plain text."""
    lines: List[str] = [f"Could not check status for {path}" for path in report.failures]

    if report.all_good:
        return ALL_GOOD

    for status, header in BUCKET_HEADERS:
        paths = report.buckets[status]
        if not paths:
            continue
        if lines:
            lines.append("")
        lines.append(header)
        lines.extend(f"  - {path}" for path in paths)

    return "\n".join(lines)
