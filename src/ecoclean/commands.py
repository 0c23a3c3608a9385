"""
Unified command orchestrator for cleanup operations.
This is the SINGLE source of truth for business logic — used by the CLI and the interactive menu.

Every destructive operation goes through an explicit state machine:

    IDLE → AWAITING_CONFIRMATION → EXECUTING → DONE
                                 ↘ CANCELLED

Confirmation is an injected capability, so tests substitute a scripted source for the console.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Callable, Iterable

from ecoclean.core.models import (
    CleanupMode, CleanupParams, DeletionResult, FileRecord, HashGroups,
    OperationState, Resolution,
)
from ecoclean.core.interfaces import Confirmer, SummaryLogger
from ecoclean.core.scanner import FileScannerImpl
from ecoclean.core.hasher import HasherImpl, create_algorithm
from ecoclean.core.grouper import FileGrouperImpl
from ecoclean.core.resolver import DuplicateResolverImpl
from ecoclean.core.deleter import DeleterImpl
from ecoclean.services.file_service import FileService
from ecoclean.services.report_logger import ReportLogger, NullReportLogger
from ecoclean.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


@dataclass
class CleanupPlan:
    """What a batch would delete, computed before asking for confirmation."""
    mode: CleanupMode
    candidates: List[FileRecord]
    to_delete: List[FileRecord]
    groups: HashGroups = field(default_factory=dict)
    resolution: Optional[Resolution] = None

    @property
    def delete_paths(self) -> List[str]:
        return [r.path for r in self.to_delete]

    @property
    def duplicate_groups(self) -> HashGroups:
        return {k: v for k, v in self.groups.items() if len(v) > 1}

    @property
    def is_empty(self) -> bool:
        return not self.to_delete


@dataclass
class CleanupReport:
    """Final outcome of one execute() call."""
    state: OperationState
    plan: CleanupPlan
    result: Optional[DeletionResult] = None
    summary: Optional[str] = None
    log_line: Optional[str] = None

    @property
    def deleted_count(self) -> int:
        return self.result.stats.deleted_count if self.result else 0

    @property
    def bytes_freed(self) -> int:
        return self.result.stats.bytes_freed if self.result else 0


class ScriptedConfirmer(Confirmer):
    """
    Answers confirmations from a fixed sequence; the last answer repeats.
    Scripted confirmation source for tests and automation that drive CleanupCommand directly.
    """

    def __init__(self, answers: Iterable[bool]):
        self.answers = list(answers) or [False]
        self.calls: List[CleanupPlan] = []

    def confirm(self, plan: CleanupPlan) -> bool:
        self.calls.append(plan)
        index = min(len(self.calls), len(self.answers)) - 1
        return self.answers[index]


class CleanupCommand:
    """
    Orchestrates the cleanup workflow:
    1. Scan the configured roots for files matching the extension patterns
    2. Build a plan (all matches, or the non-survivors of each duplicate group)
    3. Ask the confirmer, delete, and append the summary to the report log

    Usage:
        params = CleanupParams(directories=["/tmp/build"])
        command = CleanupCommand(params)
        plan = command.plan(CleanupMode.DUPLICATES)
        report = command.execute(plan, confirmer)
    """

    def __init__(
            self,
            params: CleanupParams,
            report_logger: Optional[SummaryLogger] = None,
            remover: Optional[Callable[[str], None]] = None
    ):
        self.params = params
        self.report_logger = report_logger or (
            ReportLogger(params.log_file) if params.log_file else NullReportLogger()
        )
        # Algorithm is selected once here, not per file
        hasher = HasherImpl(create_algorithm(params.algorithm))
        self._scanner = FileScannerImpl(
            root_dirs=params.directories,
            patterns=params.patterns,
            excluded_paths=params.excluded_paths
        )
        self._grouper = FileGrouperImpl(hasher, workers=params.workers)
        self._resolver = DuplicateResolverImpl(params.policy)
        self._deleter = DeleterImpl(remover or FileService.get_remover(params.use_trash))
        self._state = OperationState.IDLE

    @property
    def state(self) -> OperationState:
        return self._state

    def scan(
            self,
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> List[FileRecord]:
        """Files under the configured roots that match the extension patterns."""
        return self._scanner.scan(stopped_flag=stopped_flag, progress_callback=progress_callback)

    def plan(
            self,
            mode: CleanupMode,
            records: Optional[List[FileRecord]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> CleanupPlan:
        """
        Compute what `mode` would delete. Nothing is touched on disk.

        Args:
            mode: TEMP_FILES deletes every match, DUPLICATES only non-survivors
            records: Result of a previous scan; a fresh scan is made when omitted
        """
        self._state = OperationState.IDLE
        candidates = records if records is not None else self.scan(stopped_flag, progress_callback)

        if mode == CleanupMode.TEMP_FILES:
            return CleanupPlan(mode=mode, candidates=list(candidates), to_delete=list(candidates))

        groups = self._grouper.group_by_content_hash(
            candidates,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )
        resolution = self._resolver.resolve(groups)
        logger.debug(
            f"Resolved {len(groups)} hash groups: {len(resolution.survivors)} survivors, "
            f"{len(resolution.to_delete)} duplicates"
        )
        return CleanupPlan(
            mode=mode,
            candidates=list(candidates),
            to_delete=list(resolution.to_delete),
            groups=groups,
            resolution=resolution
        )

    def execute(
            self,
            plan: CleanupPlan,
            confirmer: Confirmer,
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> CleanupReport:
        """
        Confirm and run one deletion batch.

        An empty plan finishes as DONE without asking. A declined confirmation finishes
        as CANCELLED: nothing is deleted and nothing is logged.
        """
        if plan.is_empty:
            self._state = OperationState.DONE
            return CleanupReport(state=self._state, plan=plan)

        self._state = OperationState.AWAITING_CONFIRMATION
        if not confirmer.confirm(plan):
            self._state = OperationState.CANCELLED
            logger.debug(f"{plan.mode.display_name} cancelled by user")
            return CleanupReport(state=self._state, plan=plan)

        self._state = OperationState.EXECUTING
        result = self._deleter.delete(
            plan.delete_paths,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )

        summary = self.summarize(plan.mode, result)
        # Files are already removed, so a log failure only loses the log line
        try:
            log_line = self.report_logger.append_summary(summary)
        except OSError as e:
            logger.warning(f"Could not write report log: {e}")
            log_line = None
        self._state = OperationState.DONE
        return CleanupReport(
            state=self._state,
            plan=plan,
            result=result,
            summary=summary,
            log_line=log_line
        )

    @staticmethod
    def summarize(mode: CleanupMode, result: DeletionResult) -> str:
        """One-line human-readable summary of a finished batch."""
        stats = result.stats
        parts = [
            f"{mode.display_name}: {ConvertUtils.pluralize(stats.deleted_count, 'file')} deleted",
            f"{ConvertUtils.bytes_to_human(stats.bytes_freed)} freed ({stats.bytes_freed} bytes)",
        ]
        if result.failures:
            parts.append(f"{len(result.failures)} failed")
        if result.interrupted:
            parts.append("interrupted")
        return ", ".join(parts)
