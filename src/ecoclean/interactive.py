"""
Console interaction for EcoClean: the main menu, deletion previews and confirmation prompts.
"""
import sys
from typing import Callable, List, Optional

from ecoclean.commands import CleanupCommand, CleanupPlan, CleanupReport
from ecoclean.core.interfaces import Confirmer
from ecoclean.core.models import CleanupMode, FileRecord, OperationState
from ecoclean.utils.convert_utils import ConvertUtils

YES_ANSWERS = ("y", "yes")


def _size_or_zero(record: FileRecord) -> int:
    try:
        return record.size
    except OSError:
        return 0


def render_files(records: List[FileRecord], printer: Callable[..., None] = print) -> None:
    for record in records:
        printer(f"   {record.path} [{ConvertUtils.bytes_to_human(_size_or_zero(record))}]")


def render_plan(plan: CleanupPlan, printer: Callable[..., None] = print) -> None:
    """Preview of a batch: every file that would be deleted, and what is kept."""
    printer()
    if plan.mode == CleanupMode.DUPLICATES:
        kept = set(plan.resolution.survivor_paths) if plan.resolution else set()
        for idx, members in enumerate(plan.duplicate_groups.values(), 1):
            size_str = ConvertUtils.bytes_to_human(_size_or_zero(members[0]))
            printer(f"📁 Group {idx} | Size: {size_str} | Files: {len(members)}")
            printer("-" * 60)
            for record in members:
                if record.path in kept:
                    printer(f"   [KEEP] {record.path}")
            for record in members:
                if record.path not in kept:
                    printer(f"   [DEL]  {record.path}")
            printer()
    else:
        printer("The following temporary files will be deleted:")
        render_files(plan.to_delete, printer)
        printer()

    total = sum(_size_or_zero(r) for r in plan.to_delete)
    printer("=" * 60)
    printer(f"Summary: {ConvertUtils.pluralize(len(plan.to_delete), 'file')} to delete, "
            f"{ConvertUtils.bytes_to_human(total)} to free")


def render_report(report: CleanupReport, printer: Callable[..., None] = print,
                  error_printer: Optional[Callable[..., None]] = None) -> None:
    """Final count summary of a batch, including per-file failures."""
    error_printer = error_printer or (lambda msg: print(msg, file=sys.stderr))

    if report.state == OperationState.CANCELLED:
        printer("Operation cancelled.")
        return

    if report.result is None:
        if report.plan.mode == CleanupMode.DUPLICATES:
            printer("No duplicate files found.")
        else:
            printer("No temporary files found.")
        return

    result = report.result
    if result.failures:
        error_printer(f"⚠️  Failed to delete {ConvertUtils.pluralize(len(result.failures), 'file')}:")
        for path, error in result.failures[:5]:
            error_printer(f"  • {path}: {error}")
        if len(result.failures) > 5:
            error_printer(f"  ...and {len(result.failures) - 5} more files")
    if result.interrupted:
        error_printer("⚠️  Deletion interrupted, remaining files were left in place.")

    if report.log_line is None:
        error_printer("⚠️  Report log could not be written, this batch is not recorded.")

    printer(f"✅ {report.summary}")

    if report.plan.mode == CleanupMode.DUPLICATES and report.plan.resolution:
        printer("Files remaining after duplicate removal:")
        render_files(report.plan.resolution.survivors, printer)


class ConsoleConfirmer(Confirmer):
    """Shows the deletion preview and asks `[y/N]`. With force=True it never asks."""

    def __init__(self, force: bool = False, input_func: Optional[Callable[[str], str]] = None,
                 printer: Callable[..., None] = print):
        self.force = force
        self.input_func = input_func or input
        self.printer = printer

    def confirm(self, plan: CleanupPlan) -> bool:
        render_plan(plan, self.printer)
        self.printer()

        if self.force:
            self.printer("⚠️  WARNING: --force flag skips confirmation. Proceeding with deletion...")
            return True

        try:
            response = self.input_func(
                f"Are you sure you want to delete {ConvertUtils.pluralize(len(plan.to_delete), 'file')}? [y/N]: "
            )
        except EOFError:
            return False
        return response.strip().lower() in YES_ANSWERS


class InteractiveMenu:
    """Main menu loop. Every option rescans, so it always reflects the disk."""

    OPTIONS = [
        "Show temporary files",
        "Detect and delete duplicates",
        "Delete all temporary files",
        "Exit",
    ]

    def __init__(self, command: CleanupCommand, confirmer: Confirmer,
                 input_func: Optional[Callable[[str], str]] = None, printer: Callable[..., None] = print):
        self.command = command
        self.confirmer = confirmer
        self.input_func = input_func or input
        self.printer = printer
        self.reports: List[CleanupReport] = []

    def run(self) -> None:
        while True:
            self.printer()
            for idx, option in enumerate(self.OPTIONS, 1):
                self.printer(f"{idx}) {option}")
            try:
                choice = self.input_func("Select an option: ").strip()
            except EOFError:
                self.printer()
                choice = "4"

            if choice == "1":
                self.show_temp_files()
            elif choice == "2":
                self.process_duplicates()
            elif choice == "3":
                self.remove_all_temp_files()
            elif choice == "4":
                self.printer("Exiting...")
                return
            else:
                self.printer("Invalid option. Try again.")

    def show_temp_files(self) -> List[FileRecord]:
        records = self.command.scan()
        if not records:
            self.printer("No temporary files found.")
        else:
            self.printer("Temporary files found:")
            render_files(records, self.printer)
        return records

    def process_duplicates(self) -> Optional[CleanupReport]:
        records = self.command.scan()
        if not records:
            self.printer("No temporary files found to check for duplicates.")
            return None

        self.printer("The following files will be checked for duplicates:")
        render_files(records, self.printer)
        plan = self.command.plan(CleanupMode.DUPLICATES, records)
        return self._execute(plan)

    def remove_all_temp_files(self) -> Optional[CleanupReport]:
        records = self.command.scan()
        if not records:
            self.printer("No temporary files found.")
            return None
        plan = self.command.plan(CleanupMode.TEMP_FILES, records)
        return self._execute(plan)

    def _execute(self, plan: CleanupPlan) -> CleanupReport:
        report = self.command.execute(plan, self.confirmer)
        render_report(report, self.printer)
        self.reports.append(report)
        return report
