#!/usr/bin/env python3
"""
dupcrawl CLI — Command line interface for duplicate file detection.
Crawls a directory, hashes every file found and prints groups of identical files.
Read-only: nothing is moved, renamed or deleted.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from dupcrawl.core.models import DuplicateGroup, HashError, SearchParams, SortOrder, DigestAlgorithm
from dupcrawl.commands import DuplicateSearchCommand, SearchResult
from dupcrawl.utils.convert_utils import ConvertUtils
from dupcrawl.aliases import (
    SORT_ALIASES, SORT_CHOICES, SORT_HELP_TEXT,
    ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    SAMPLING_HELP_TEXT, EPILOG_TEXT
)

MAX_ERRORS_SHOWN = 5


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self._last_stage: Optional[str] = None

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupcrawl",
            description="dupcrawl — find duplicate files by (sampled) content digest",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Required arguments
        parser.add_argument(
            "--input", "-i",
            required=True,
            type=str,
            help="Root directory to search for duplicates"
        )

        # Crawl options
        parser.add_argument(
            "--max-depth", "-d",
            default=-1,
            type=int,
            metavar='',
            help="Directory levels to enter (1 = only files directly in the root). "
                 "Default: -1 (unlimited)"
        )
        parser.add_argument(
            "--follow-symlinks", "-L",
            action="store_true",
            help="Follow symbolic links to files and directories (skipped by default)"
        )

        # Hash options
        parser.add_argument(
            "--buffer-size", "-b",
            default="64K",
            type=str,
            metavar='',
            help="Bytes read per chunk (e.g., 64K, 1M). Default: 64K"
        )
        parser.add_argument(
            "--sample-threshold", "-t",
            default="100M",
            type=str,
            metavar='',
            help=SAMPLING_HELP_TEXT
        )
        parser.add_argument(
            "--sample-rate", "-r",
            default=100,
            type=int,
            metavar='',
            help="Number of evenly spaced samples read from a large file. "
                 "0 or less reads the whole file. Default: 100"
        )
        parser.add_argument(
            "--batch-size", "-j",
            default=32,
            type=int,
            metavar='',
            help="Maximum number of files hashed at the same time. Default: 32"
        )
        parser.add_argument(
            "--algorithm",
            choices=ALGORITHM_CHOICES,
            default="md5",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )

        # Output options
        parser.add_argument(
            "--sort",
            choices=SORT_CHOICES,
            default="size",
            type=str,
            help=SORT_HELP_TEXT
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Print only the paths of duplicate groups, separated by blank lines"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress and detailed statistics"
        )
        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.quiet and args.verbose:
            self.error_exit("--quiet and --verbose cannot be used together")

        root_path = Path(args.input)
        if not root_path.exists():
            self.error_exit(f"Directory not found: {args.input}")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.input}")

        for option, value, allow_zero in (("--buffer-size", args.buffer_size, False),
                                          ("--sample-threshold", args.sample_threshold, True)):
            if not ConvertUtils.is_valid_size_format(value, allow_zero=allow_zero):
                self.error_exit(f"Invalid size format for {option}: '{value}'")

        if args.batch_size < 1:
            self.error_exit("--batch-size must be at least 1")

        if args.follow_symlinks:
            self.warning("Following symlinks can report one file under several paths")

    def create_params(self, args: argparse.Namespace) -> SearchParams:
        """Create SearchParams from CLI arguments."""
        try:
            return SearchParams.from_human_readable(
                root_dir=args.input,
                max_depth=args.max_depth,
                follow_symlinks=args.follow_symlinks,
                buffer_size_str=args.buffer_size,
                sample_threshold_str=args.sample_threshold,
                sample_rate=args.sample_rate,
                batch_size=args.batch_size,
                sort_order=SORT_ALIASES.get(args.sort, SortOrder.SIZE),
                algorithm=ALGORITHM_ALIASES.get(args.algorithm, DigestAlgorithm.MD5),
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if self._last_stage is not None and stage != self._last_stage:
            sys.stderr.write("\n")
        self._last_stage = stage

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files found...")
        sys.stderr.flush()

    @staticmethod
    def stopped_flag() -> bool:
        """Check if operation should stop (placeholder for signal handling)."""
        return False

    def run_search(self, params: SearchParams) -> SearchResult:
        """Execute the search workflow."""
        command = DuplicateSearchCommand()
        if self.verbose:
            print(f"Hashing with {params.hashing.algorithm.display_name}, "
                  f"sampling files above {ConvertUtils.bytes_to_human(params.hashing.sample_threshold)}",
                  file=sys.stderr)

        try:
            result = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
                stopped_flag=self.stopped_flag
            )
        except OSError as e:
            self.error_exit(f"Cannot crawl {params.root_dir}: {e}")

        if self.verbose:
            sys.stderr.write("\n")
            print("\n" + result.stats.print_summary(), file=sys.stderr)

        return result

    def output_results(self, groups: List[DuplicateGroup]) -> None:
        """Print duplicate groups in the order produced by the core."""
        if self.quiet:
            for group in groups:
                for path in group.paths:
                    print(path)
                print()
            return

        if not groups:
            print("No duplicate groups found.")
            return

        total_files = sum(g.duplicate_count for g in groups)
        print(f"Found {len(groups)} duplicate groups ({total_files} files)\n")

        for idx, group in enumerate(groups, 1):
            size_str = f" | Size: {ConvertUtils.bytes_to_human(group.size)}" if group.size is not None else ""
            print(f"📁 Group {idx}{size_str} | Files: {group.duplicate_count}")
            for path in group.paths:
                print(f"   {path}")
            print()

    def output_errors(self, errors: List[HashError]) -> None:
        """Report files that could not be hashed. Never hides the duplicate report."""
        if not errors:
            return

        print(f"⚠️  Could not hash {len(errors)} file(s):", file=sys.stderr)
        shown = errors if self.verbose else errors[:MAX_ERRORS_SHOWN]
        for error in shown:
            print(f"  • {error.path}: {error.reason}", file=sys.stderr)
        if len(errors) > len(shown):
            print(f"  ...and {len(errors) - len(shown)} more files", file=sys.stderr)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if args.debug:
            logging.getLogger().setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)

        if self.verbose:
            print(f"Scanning directory: {params.root_dir}", file=sys.stderr)

        result = self.run_search(params)
        self.output_results(result.groups)
        self.output_errors(result.errors)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds "
                  f"({result.files_scanned} files scanned)", file=sys.stderr)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
