"""
Structured telemetry for registry patch operations.

This module records one event per patcher invocation so that a run can be
inspected afterwards:
- which registry files were touched
- which dialect strategy matched
- whether the write was skipped because nothing changed
- which backups were taken and which patches failed
"""
import json
import logging
import threading
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class TelemetryLevel(Enum):
    """Telemetry verbosity levels."""
    INFO = "info"
    DEBUG = "debug"


class PatchOutcome(Enum):
    """What happened to a registry file."""
    APPLIED = "applied"                  # Entry inserted and file rewritten
    ALREADY_PRESENT = "already_present"  # Idempotence short-circuit
    UNCHANGED = "unchanged"              # Strategy matched but content identical
    FAILED = "failed"                    # Converted to a warning


@dataclass
class PatchEvent:
    """
    A single telemetry event describing one registry patch.

    Attributes:
        timestamp: ISO 8601 timestamp of event
        patcher: Patcher name (e.g., "sidebar")
        path: Registry file path
        outcome: PatchOutcome value
        strategy: Dialect strategy that matched, if any
        changed: Whether the file was rewritten
        backup: Path of the backup taken, if any
        warning: Warning text for failed patches
    """
    timestamp: str
    patcher: str
    path: str
    outcome: str
    strategy: str = ""
    changed: bool = False
    backup: Optional[str] = None
    warning: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for logging."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def to_json(self) -> str:
        """Convert event to JSON string."""
        return json.dumps(self.to_dict(), default=str, ensure_ascii=False)

    def to_keyvalue(self) -> str:
        """Convert event to key=value format."""
        return " ".join(f"{key}={value}" for key, value in self.to_dict().items())


@dataclass
class PatchStats:
    """Aggregated patch statistics for a run."""
    total_patches: int = 0
    files_written: int = 0
    backups_taken: int = 0
    failures: int = 0
    outcomes_by_type: Dict[str, int] = field(default_factory=dict)
    strategies_used: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_patches": self.total_patches,
            "files_written": self.files_written,
            "backups_taken": self.backups_taken,
            "failures": self.failures,
            "outcomes_by_type": self.outcomes_by_type,
            "strategies_used": self.strategies_used,
        }


class TelemetryRecorder:
    """
    Records and emits structured telemetry for patch operations.

    Features:
    - Structured logging in JSON or key=value format
    - Configurable verbosity (info/debug)
    - Optional in-memory statistics collection
    - Thread-safe operation
    """

    def __init__(
        self,
        level: TelemetryLevel = TelemetryLevel.INFO,
        format_json: bool = True,
        collect_stats: bool = False,
    ):
        """
        Initialize telemetry recorder.

        Args:
            level: Logging verbosity level
            format_json: If True, log as JSON; otherwise use key=value
            collect_stats: If True, collect in-memory statistics
        """
        self.level = level
        self.format_json = format_json
        self.collect_stats = collect_stats

        self._stats = PatchStats()
        self._stats_lock = threading.Lock()

        self._events: List[PatchEvent] = []
        self._events_lock = threading.Lock()

    def record(self, event: PatchEvent) -> None:
        """
        Record a telemetry event.

        Args:
            event: Event to record
        """
        log_message = event.to_json() if self.format_json else event.to_keyvalue()

        if self.level == TelemetryLevel.DEBUG:
            logger.debug(log_message)
        elif event.outcome in (PatchOutcome.APPLIED.value, PatchOutcome.FAILED.value):
            # Only writes and failures are interesting at INFO
            logger.info(log_message)
        else:
            logger.debug(log_message)

        if self.collect_stats:
            with self._stats_lock:
                self._stats.total_patches += 1
                if event.changed:
                    self._stats.files_written += 1
                if event.backup:
                    self._stats.backups_taken += 1
                if event.outcome == PatchOutcome.FAILED.value:
                    self._stats.failures += 1
                self._stats.outcomes_by_type[event.outcome] = (
                    self._stats.outcomes_by_type.get(event.outcome, 0) + 1
                )
                if event.strategy:
                    self._stats.strategies_used[event.strategy] = (
                        self._stats.strategies_used.get(event.strategy, 0) + 1
                    )

        with self._events_lock:
            self._events.append(event)

    def get_stats(self) -> PatchStats:
        """Get current statistics snapshot."""
        with self._stats_lock:
            return PatchStats(
                total_patches=self._stats.total_patches,
                files_written=self._stats.files_written,
                backups_taken=self._stats.backups_taken,
                failures=self._stats.failures,
                outcomes_by_type=self._stats.outcomes_by_type.copy(),
                strategies_used=self._stats.strategies_used.copy(),
            )

    def reset_stats(self) -> None:
        with self._stats_lock:
            self._stats = PatchStats()

    def get_events(self) -> List[PatchEvent]:
        """Get all recorded events."""
        with self._events_lock:
            return self._events.copy()

    def clear_events(self) -> None:
        with self._events_lock:
            self._events.clear()


_global_recorder: Optional[TelemetryRecorder] = None
_recorder_lock = threading.Lock()


def get_recorder() -> TelemetryRecorder:
    """
    Get the global telemetry recorder instance.

    Creates a default recorder if none exists.
    """
    global _global_recorder

    if _global_recorder is None:
        with _recorder_lock:
            if _global_recorder is None:
                _global_recorder = TelemetryRecorder()

    return _global_recorder


def set_recorder(recorder: TelemetryRecorder) -> None:
    """
    Set the global telemetry recorder instance.

    Args:
        recorder: Recorder instance to use globally
    """
    global _global_recorder

    with _recorder_lock:
        _global_recorder = recorder


def create_event(
    patcher: str,
    path: str,
    outcome: PatchOutcome,
    strategy: str = "",
    changed: bool = False,
    backup: Optional[str] = None,
    warning: Optional[str] = None,
) -> PatchEvent:
    """
    Helper to create a patch event with current timestamp.

    Args:
        patcher: Patcher name
        path: Registry file path
        outcome: What happened to the file
        strategy: Dialect strategy that matched
        changed: Whether the file was rewritten
        backup: Backup path, if one was taken
        warning: Warning text for failures

    Returns:
        PatchEvent ready for recording
    """
    return PatchEvent(
        timestamp=datetime.now(timezone.utc).isoformat(),
        patcher=patcher,
        path=str(path),
        outcome=outcome.value,
        strategy=strategy,
        changed=changed,
        backup=backup,
        warning=warning,
    )
