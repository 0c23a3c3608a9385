#!/usr/bin/env python3
"""
EcoClean CLI — find temporary files, remove duplicates among them, or delete them all.
Deletion is permanent unless --trash is given. Every destructive action shows a preview
and asks for confirmation first (skip with --force).
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
    from send2trash import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    print("\nOr install the package:", file=sys.stderr)
    print("   pip install ecoclean", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from ecoclean.core.models import CleanupMode, CleanupParams, FileRecord, SurvivorPolicy
from ecoclean.commands import CleanupCommand
from ecoclean.config import load_config
from ecoclean.interactive import ConsoleConfirmer, InteractiveMenu, render_files, render_report
from ecoclean.utils.convert_utils import ConvertUtils
from ecoclean.aliases import (
    ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    POLICY_ALIASES, POLICY_CHOICES, POLICY_HELP_TEXT,
    EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="ecoclean",
            description="EcoClean — temporary file and duplicate cleaner",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "directory",
            nargs="?",
            default=None,
            help="Directory to clean. Replaces CLEAN_DIRS from the configuration.\n"
                 "Default: configured directories, or the current directory"
        )

        # Configuration
        parser.add_argument(
            "--config", "-c",
            default=None,
            type=str,
            metavar='',
            help="Configuration file. Default: ./ecoclean.conf if it exists"
        )
        parser.add_argument(
            "--log-file", "-l",
            default=None,
            type=str,
            metavar='',
            dest="log_file",
            help="Report log receiving one line per deletion batch"
        )
        parser.add_argument(
            "--extensions", "-x",
            nargs="+",
            default=[],
            type=str,
            metavar='',
            help="Patterns (space separated) to match, e.g. '*.tmp' .bak log.\n"
                 "Default: TEMP_EXTENSIONS from the configuration, or *.tmp *.log *.bak"
        )

        # Duplicate detection
        parser.add_argument(
            "--algorithm", "-a",
            choices=ALGORITHM_CHOICES,
            default="sha256",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--keep", "-k",
            choices=POLICY_CHOICES,
            default="first-seen",
            type=str,
            help=POLICY_HELP_TEXT
        )
        parser.add_argument(
            "--workers", "-w",
            default=1,
            type=int,
            metavar='',
            help="Threads used to hash files. Default: 1"
        )

        # Actions
        actions = parser.add_mutually_exclusive_group()
        actions.add_argument(
            "--list",
            action="store_true",
            help="List matching temporary files and exit"
        )
        actions.add_argument(
            "--clean",
            action="store_true",
            help="Delete every matching temporary file"
        )
        actions.add_argument(
            "--dedup",
            action="store_true",
            help="Delete duplicate temporary files, keeping one copy per group"
        )

        parser.add_argument(
            "--trash",
            action="store_true",
            help="Move files to the system trash instead of deleting them permanently"
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip confirmation prompt when used with --clean or --dedup (for automation/scripts)"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show debug logging and progress"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        destructive = args.clean or args.dedup

        if args.force and not destructive:
            self.error_exit("--force can only be used with --clean or --dedup")

        # Prevent interactive confirmation in non-TTY environments
        if destructive and not args.force:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation when piping output or running in scripts."
                )

        if args.workers < 1:
            self.error_exit("--workers must be at least 1")

        if args.directory:
            target = Path(args.directory).expanduser()
            if not target.exists():
                self.warning(f"Directory not found: {args.directory}")
            elif not target.is_dir():
                self.warning(f"Path is not a directory: {args.directory}")

    def create_params(self, args: argparse.Namespace) -> CleanupParams:
        """Merge configuration file values and CLI arguments."""
        try:
            config = load_config(args.config)
        except (OSError, UnicodeDecodeError) as e:
            self.error_exit(f"Cannot read configuration: {e}")

        if self.verbose and config.source:
            print(f"Using configuration: {config.source}")

        directories: List[str] = [args.directory] if args.directory else config.directories
        patterns: List[str] = args.extensions or config.extensions
        policy = POLICY_ALIASES.get(args.keep, SurvivorPolicy.FIRST_SEEN)

        try:
            return CleanupParams(
                directories=directories,
                patterns=patterns,
                log_file=args.log_file or config.log_file,
                algorithm=args.algorithm,
                policy=policy,
                use_trash=args.trash,
                workers=args.workers
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
            sys.stderr.flush()
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
            sys.stderr.flush()

    def output_files(self, records: List[FileRecord]) -> None:
        """Print matching files with their total size."""
        total = 0
        for record in records:
            try:
                total += record.size
            except OSError:
                continue
        if not self.quiet:
            print(f"\nTemporary files found: {len(records)} ({ConvertUtils.bytes_to_human(total)})")
        render_files(records)

    def run_action(self, command: CleanupCommand, records: List[FileRecord],
                   mode: CleanupMode, force: bool) -> None:
        """Run one deletion batch non-interactively (except for the confirmation prompt)."""
        plan = command.plan(
            mode,
            records,
            progress_callback=self.progress_callback if self.verbose else None
        )
        if self.verbose:
            sys.stderr.write("\n")

        report = command.execute(
            plan,
            ConsoleConfirmer(force=force),
            progress_callback=self.progress_callback if self.verbose else None
        )
        if self.verbose and report.result:
            sys.stderr.write("\n")

        render_report(report)

        if report.result and report.result.interrupted:
            sys.exit(130)

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
        if self.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)
        command = CleanupCommand(params)

        if not self.quiet:
            print(f"Scanning: {', '.join(params.directories)}")
            print(f"Patterns: {' '.join(params.patterns)}")

        records = command.scan(progress_callback=self.progress_callback if self.verbose else None)
        if self.verbose:
            sys.stderr.write("\n")

        # Nothing to do is a valid terminal state, not an error
        if not records:
            print("No temporary files found.")
            return

        if args.list:
            self.output_files(records)
        elif args.clean:
            self.run_action(command, records, CleanupMode.TEMP_FILES, args.force)
        elif args.dedup:
            self.run_action(command, records, CleanupMode.DUPLICATES, args.force)
        else:
            InteractiveMenu(command, ConsoleConfirmer()).run()

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
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
