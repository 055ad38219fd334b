"""
Unit tests for telemetry module.

Tests verify:
- Structured event creation with required fields
- JSON and key=value formatting
- Statistics collection and aggregation
- Thread-safe recorder operations
- Event history for testing
"""
import json
import logging
import threading

from shuri.core.telemetry import (
    PatchEvent,
    PatchOutcome,
    PatchStats,
    TelemetryLevel,
    TelemetryRecorder,
    create_event,
    get_recorder,
    set_recorder,
)


class TestPatchEvent:
    """Test PatchEvent data structure and serialization."""

    def test_event_to_dict(self):
        """Test event serialization to dictionary."""
        event = PatchEvent(
            timestamp="2025-10-15T09:05:00.123Z",
            patcher="sidebar",
            path="docs/.vuepress/config.js",
            outcome="applied",
            strategy="sibling-section",
            changed=True,
            backup="docs/.vuepress/config.js.bak",
        )

        result = event.to_dict()

        assert result["timestamp"] == "2025-10-15T09:05:00.123Z"
        assert result["patcher"] == "sidebar"
        assert result["path"] == "docs/.vuepress/config.js"
        assert result["outcome"] == "applied"
        assert result["strategy"] == "sibling-section"
        assert result["changed"] is True
        assert result["backup"] == "docs/.vuepress/config.js.bak"
        assert "warning" not in result

    def test_event_to_json(self):
        """Test event serialization to JSON string."""
        event = PatchEvent(
            timestamp="2025-10-15T09:05:00.123Z",
            patcher="reference-list",
            path="docs/components/README.md",
            outcome="failed",
            warning="section '## Índice de Componentes' not found",
        )

        parsed = json.loads(event.to_json())

        assert parsed["patcher"] == "reference-list"
        assert parsed["outcome"] == "failed"
        assert parsed["warning"].startswith("section '## Índice")

    def test_event_to_keyvalue(self):
        """Test event serialization to key=value format."""
        event = PatchEvent(
            timestamp="2025-10-15T09:05:00.123Z",
            patcher="barrel",
            path="src/components/index.js",
            outcome="already_present",
            strategy="already-present",
        )

        result = event.to_keyvalue()

        assert "patcher=barrel" in result
        assert "outcome=already_present" in result
        assert "changed=False" in result
        assert "backup=" not in result


class TestPatchStats:
    """Test PatchStats aggregation."""

    def test_stats_initialization(self):
        """Test stats start at zero."""
        stats = PatchStats()

        assert stats.total_patches == 0
        assert stats.files_written == 0
        assert stats.backups_taken == 0
        assert stats.failures == 0
        assert stats.outcomes_by_type == {}
        assert stats.strategies_used == {}

    def test_stats_to_dict(self):
        stats = PatchStats(total_patches=3, files_written=2, failures=1)
        stats.outcomes_by_type = {"applied": 2, "failed": 1}

        result = stats.to_dict()

        assert result["total_patches"] == 3
        assert result["files_written"] == 2
        assert result["failures"] == 1
        assert result["outcomes_by_type"] == {"applied": 2, "failed": 1}


class TestTelemetryRecorder:
    """Test TelemetryRecorder logging and statistics."""

    def test_recorder_initialization(self):
        """Test recorder default initialization."""
        recorder = TelemetryRecorder()

        assert recorder.level == TelemetryLevel.INFO
        assert recorder.format_json is True
        assert recorder.collect_stats is False

    def test_recorder_collects_stats(self):
        """Test statistics collection enabled."""
        recorder = TelemetryRecorder(collect_stats=True)

        recorder.record(create_event("sidebar", "config.js", PatchOutcome.APPLIED,
                                     strategy="existing-section", changed=True, backup="config.js.bak"))
        recorder.record(create_event("barrel", "index.js", PatchOutcome.ALREADY_PRESENT,
                                     strategy="already-present"))
        recorder.record(create_event("reference-list", "README.md", PatchOutcome.FAILED,
                                     warning="section not found"))

        stats = recorder.get_stats()

        assert stats.total_patches == 3
        assert stats.files_written == 1
        assert stats.backups_taken == 1
        assert stats.failures == 1
        assert stats.outcomes_by_type == {"applied": 1, "already_present": 1, "failed": 1}
        assert stats.strategies_used == {"existing-section": 1, "already-present": 1}

    def test_recorder_without_stats(self):
        recorder = TelemetryRecorder()

        recorder.record(create_event("barrel", "index.js", PatchOutcome.APPLIED, changed=True))

        assert recorder.get_stats().total_patches == 0
        assert len(recorder.get_events()) == 1

    def test_info_level_logs_writes_only(self, caplog):
        """Test only applied and failed patches are logged at INFO."""
        recorder = TelemetryRecorder(format_json=False)

        with caplog.at_level(logging.INFO, logger="shuri.core.telemetry"):
            recorder.record(create_event("barrel", "index.js", PatchOutcome.APPLIED, changed=True))
            recorder.record(create_event("sidebar", "config.js", PatchOutcome.UNCHANGED))

        messages = [r.getMessage() for r in caplog.records]
        assert len(messages) == 1
        assert "patcher=barrel" in messages[0]

    def test_recorder_reset_and_clear(self):
        """Test statistics reset and event history clearing."""
        recorder = TelemetryRecorder(collect_stats=True)
        recorder.record(create_event("barrel", "index.js", PatchOutcome.APPLIED, changed=True))

        recorder.reset_stats()
        recorder.clear_events()

        assert recorder.get_stats().total_patches == 0
        assert recorder.get_events() == []

    def test_recorder_thread_safety(self):
        """Test concurrent recording from multiple threads."""
        recorder = TelemetryRecorder(collect_stats=True)

        def record_events(count: int):
            for i in range(count):
                recorder.record(create_event("barrel", f"index-{i}.js", PatchOutcome.APPLIED, changed=True))

        threads = [threading.Thread(target=record_events, args=(10,)) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert recorder.get_stats().total_patches == 100
        assert recorder.get_stats().files_written == 100
        assert len(recorder.get_events()) == 100


class TestHelperFunctions:
    """Test module-level helper functions."""

    def test_create_event_with_timestamp(self):
        """Test create_event generates an ISO 8601 UTC timestamp."""
        event = create_event("sidebar", "config.js", PatchOutcome.UNCHANGED)

        assert "T" in event.timestamp
        assert "+00:00" in event.timestamp
        assert event.outcome == "unchanged"

    def test_get_recorder_singleton(self):
        assert get_recorder() is get_recorder()

    def test_set_recorder_custom(self):
        """Test set_recorder allows custom instance."""
        custom_recorder = TelemetryRecorder(level=TelemetryLevel.DEBUG, format_json=False)

        set_recorder(custom_recorder)
        try:
            assert get_recorder() is custom_recorder
        finally:
            # Reset to default for other tests
            set_recorder(TelemetryRecorder())
