"""Command line entry point for gitglance."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import Config, DefaultDirectoryStore, load_configuration
from .errors import error_handler
from .git_status import list_candidate_directories
from .platform import normalize_path
from .report import aggregate, render_report

USAGE = "Usage: gg [PATH_TO_DIRECTORY]"

EXIT_OK = 0
EXIT_ATTENTION = 1
EXIT_ERROR = 2


def setup_logging(config: Config) -> None:
    """Configure logging to stderr so the report on stdout stays clean."""
    class StructuredFormatter(logging.Formatter):
        def format(self, record):
            if hasattr(record, 'operation'):
                record.msg = f"[{record.operation}] {record.msg}"
            return super().format(record)

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr
    )

    loggers = [
        'gitglance.init',
        'gitglance.config',
        'gitglance.scan',
        'gitglance.git_status',
        'gitglance.error_handler',
        'gitglance.performance'
    ]

    formatter = StructuredFormatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(getattr(logging, config.log_level))

        if not logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gg",
        usage="gg [-h] [-v] [--set-default PATH | --show-default] [PATH]",
        description="Report which git repositories under a directory have unpushed commits, "
                    "staged changes or modifications."
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Directory whose immediate subdirectories are scanned. "
             "Defaults to the stored default directory."
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--set-default",
        metavar="PATH",
        help="Remember PATH as the directory to scan when none is given."
    )
    group.add_argument(
        "--show-default",
        action="store_true",
        help="Print the stored default directory."
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details to stderr."
    )
    return parser


def scan_directory(root: Path, check_clean_divergence: bool = False) -> int:
    """Scan ``root``, print the report and return the exit code."""
    logger = logging.getLogger('gitglance.scan')

    try:
        candidates = list_candidate_directories(root)
    except OSError as e:
        response = error_handler.handle_directory_error(e, {'directory': str(root)})
        print(response.message)
        return EXIT_ERROR

    logger.debug(f"Scanning {len(candidates)} directories under {root}")
    report = aggregate(candidates, check_clean_divergence)
    print(render_report(report))

    return EXIT_OK if report.all_good else EXIT_ATTENTION


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the ``gg`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_configuration()
    except ValueError as e:
        print(error_handler.handle_configuration_error(e).message)
        return EXIT_ERROR

    if args.verbose:
        config.log_level = "DEBUG"
    setup_logging(config)
    init_logger = logging.getLogger('gitglance.init')

    store = DefaultDirectoryStore(config.default_directory_file)

    if args.set_default is not None:
        if args.path:
            parser.error("PATH cannot be combined with --set-default")
        if not args.set_default.strip():
            parser.error("--set-default requires a non-empty PATH")
        directory = normalize_path(args.set_default)
        store.write_default(directory)
        print(f"Default directory set to {directory}")
        return EXIT_OK

    if args.show_default:
        default = store.read_default()
        print(default if default else "No default directory set.")
        return EXIT_OK

    if args.path:
        root = Path(args.path)
    else:
        root = store.read_default()
        if root is None:
            print(USAGE)
            return EXIT_ERROR
        init_logger.info(f"Using default directory {root}")

    return scan_directory(root, config.report_clean_divergence)


if __name__ == "__main__":
    sys.exit(main())
