#!/usr/bin/env python3
"""
dupefinder CLI — command line interface for duplicate file detection and removal.
Groups are printed as soon as the engine confirms them.
All deletions are safe: files are moved to the system trash, never erased.
"""
from __future__ import annotations
import argparse
import logging
import signal
import sys
import os
import threading
import time
from typing import List, Optional

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import send2trash  # noqa: F401
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash  # noqa: F401
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from dupefinder.core.deduplicator import DeduplicatorImpl
from dupefinder.core.errors import RootNotFoundError
from dupefinder.core.models import DisposalOutcome, DuplicateGroup, HashAlgorithmName, KeepStrategy, ScanParams
from dupefinder.services.duplicate_service import DuplicateService
from dupefinder.services.file_service import FileService
from dupefinder.utils.convert_utils import ConvertUtils

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

EPILOG_TEXT = """
Examples:
  # List duplicate groups under ./photos
  %(prog)s --root ./photos

  # Include files down to 1 byte, use the fast partial digest
  %(prog)s -r ./photos -m 1 --partial-hash xxh64

  # Preview which files would be trashed, keeping the oldest copy
  %(prog)s -r ./photos --delete --keep oldest --dry-run

  # Trash duplicates without asking
  %(prog)s -r ./photos --delete --force
"""


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.cancel_event = threading.Event()
        self.deduplicator = DeduplicatorImpl()

    @staticmethod
    def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupefinder",
            description="dupefinder - Find byte-identical files and move extras to trash",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=EPILOG_TEXT
        )
        parser.add_argument(
            "--root", "-r",
            required=True,
            type=str,
            help="Root directory to scan for duplicates"
        )
        parser.add_argument(
            "--min-size", "-m",
            default="1KB",
            type=str,
            help="Ignore files smaller than this (e.g., 1, 500KB, 1MB). Default: 1KB"
        )
        parser.add_argument(
            "--partial-hash",
            choices=[a.value for a in HashAlgorithmName],
            default=HashAlgorithmName.SHA256.value,
            help="Digest used on the first 4 KiB of each candidate. Default: sha256"
        )
        parser.add_argument(
            "--keep",
            choices=[k.value for k in KeepStrategy],
            default=KeepStrategy.NEWEST.value,
            help="Which copy to keep with --delete. Default: newest"
        )
        parser.add_argument(
            "--delete",
            action="store_true",
            help="After the scan, move all but one file of every group to trash"
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="With --delete: show what would be trashed without touching anything"
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="With --delete: do not ask for confirmation"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show debug logging, progress and statistics"
        )
        return parser.parse_args(argv)

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams.from_human_readable(
                root_dir=os.path.abspath(args.root),
                min_size_str=args.min_size,
                partial_hash_algorithm=args.partial_hash,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if total:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def _handle_sigint(self, signum, frame) -> None:
        if self.cancel_event.is_set():
            raise KeyboardInterrupt
        self.cancel_event.set()
        self.warning("Cancelling scan... (press Ctrl+C again to abort)")

    def run_scan(self, params: ScanParams) -> List[DuplicateGroup]:
        """Run the scan, printing each group as soon as it is confirmed."""
        groups: List[DuplicateGroup] = []
        previous_handler = None
        if threading.current_thread() is threading.main_thread():
            previous_handler = signal.signal(signal.SIGINT, self._handle_sigint)
        try:
            stream = self.deduplicator.scan(
                params,
                stopped_flag=self.cancel_event.is_set,
                progress_callback=self.progress_callback if self.verbose else None
            )
            for group in stream:
                groups.append(group)
                self.print_group(len(groups), group)
        except RootNotFoundError as e:
            self.error_exit(str(e))
        finally:
            if previous_handler is not None:
                signal.signal(signal.SIGINT, previous_handler)

        if self.verbose:
            sys.stderr.write("\n")
            print(f"\n{self.deduplicator.stats.print_summary()}")
        return groups

    def print_group(self, idx: int, group: DuplicateGroup) -> None:
        if self.quiet:
            return
        print(
            f"\n📁 Group {idx} | Size: {ConvertUtils.bytes_to_human(group.size)}"
            f" | Files: {group.count} | Wasted: {ConvertUtils.bytes_to_human(group.wasted_bytes)}"
        )
        for file in group.files:
            print(f"   {file.path} ({ConvertUtils.timestamp_to_human(file.last_modified)})")

    def print_summary(self, groups: List[DuplicateGroup]) -> None:
        if self.quiet:
            return
        if not groups:
            print("No duplicate groups found.")
            return
        total_files = sum(g.count for g in groups)
        wasted = ConvertUtils.bytes_to_human(DuplicateService.total_wasted_bytes(groups))
        print(f"\nFound {len(groups)} duplicate groups ({total_files} files, {wasted} reclaimable)")

    def execute_delete(self, groups: List[DuplicateGroup], strategy: KeepStrategy,
                       dry_run: bool = False, force: bool = False) -> int:
        """Keep one file per group, trash the rest. Returns the exit code."""
        if not groups:
            return 0

        print()
        files_to_delete: List[str] = []
        for idx, group in enumerate(groups, 1):
            keeper, others = DuplicateService.split_group(group, strategy)
            print(f"📁 Group {idx} | Size: {ConvertUtils.bytes_to_human(group.size)} | Files: {group.count}")
            print(f"   [KEEP] {keeper.path}")
            for file in others:
                print(f"   [DEL]  {file.path}")
                files_to_delete.append(file.path)

        space_saved = ConvertUtils.bytes_to_human(DuplicateService.total_wasted_bytes(groups))
        print("=" * 60)
        print(f"Would keep {len(groups)} files and move {len(files_to_delete)} files to trash ({space_saved})")

        if dry_run:
            print("ℹ️  No files were deleted. This was a dry run simulation.")
            return 0

        if not force:
            response = input(f"Are you sure you want to move {len(files_to_delete)} files to trash? [y/N]: ")
            if response.strip().lower() not in ("y", "yes"):
                print("Deletion cancelled by user.")
                return 0

        results = FileService.dispose_many(files_to_delete)
        moved = sum(1 for _, outcome in results if outcome == DisposalOutcome.SUCCESS)
        for path, outcome in results:
            if outcome == DisposalOutcome.NOT_FOUND:
                self.warning(f"Already gone, skipped: {path}")
            elif outcome == DisposalOutcome.FAILED:
                self.warning(f"Could not move to trash: {path}")

        print(f"Moved {moved} of {len(files_to_delete)} files to trash.")
        return 0 if all(outcome != DisposalOutcome.FAILED for _, outcome in results) else 1

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> None:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Main entry point. Returns the process exit code."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        logging.basicConfig(
            level=logging.DEBUG if self.verbose else logging.ERROR,
            format=LOG_FORMAT
        )

        params = self.create_params(args)
        if not self.quiet:
            print(f"Scanning {params.root_dir} ...")
        if self.verbose:
            print(f"  Min size: {ConvertUtils.bytes_to_human(params.min_size_bytes)}"
                  f" | Partial hash: {params.partial_hash_algorithm.display_name}"
                  f" | Keep: {KeepStrategy(args.keep).display_name}")

        groups = self.run_scan(params)
        self.print_summary(groups)

        if self.cancel_event.is_set():
            self.warning("Scan cancelled; results above are incomplete.")
            return 130

        code = 0
        if args.delete:
            code = self.execute_delete(groups, KeepStrategy(args.keep), dry_run=args.dry_run, force=args.force)

        if self.verbose:
            print(f"\n✅ Completed in {time.time() - self.start_time:.2f} seconds")
        return code


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        sys.exit(app.run())
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
