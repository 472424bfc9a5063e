"""Tests for tracker wiring."""

from datetime import date
from pathlib import Path

from compliance_tracker.app import build_store, create_tracker
from compliance_tracker.config import StoreConfig, TrackerConfig
from compliance_tracker.persistence import JsonFileStore, MemoryStore
from compliance_tracker.reminders import LoggingReminderDispatcher


class TestBuildStore:
    """Tests for backend selection."""

    def test_memory(self) -> None:
        assert isinstance(build_store(TrackerConfig(store=StoreConfig(backend="memory"))), MemoryStore)

    def test_file(self, tmp_path: Path) -> None:
        store = build_store(TrackerConfig(store=StoreConfig(data_dir=tmp_path)))

        assert isinstance(store, JsonFileStore)
        assert store.path == tmp_path / "compliance-store.json"


class TestCreateTracker:
    """Tests for create_tracker."""

    def test_profile_updates_reach_registry(self) -> None:
        tracker = create_tracker(store=MemoryStore(), clock=lambda: date(2024, 1, 1))

        tracker.profiles.update(registration_date=date(2023, 12, 1))

        assert len(tracker.registry.compliance_items) == 8

    def test_restart_restores_state(self, tmp_path: Path) -> None:
        config = TrackerConfig(store=StoreConfig(data_dir=tmp_path))
        clock = lambda: date(2024, 1, 1)  # noqa: E731
        tracker = create_tracker(config, clock=clock)
        tracker.profiles.update(registration_date=date(2023, 12, 1))
        tracker.registry.mark_compliance_completed("pan-registration")
        loan = tracker.registry.add_loan_repayment("Loan", date(2024, 1, 10), 1000, "monthly")

        restarted = create_tracker(config, clock=clock)

        assert restarted.registry.get_compliance_item("pan-registration").status.value == "completed"
        assert restarted.registry.loan_repayments == [loan]
        assert restarted.registry.upcoming_deadlines == tracker.registry.upcoming_deadlines

    def test_config_limits_applied(self) -> None:
        config = TrackerConfig()
        config.deadlines.upcoming_limit = 1
        config.deadlines.reminder_offsets = (1,)
        dispatcher = LoggingReminderDispatcher()

        tracker = create_tracker(config, store=MemoryStore(), dispatcher=dispatcher)

        assert tracker.registry.upcoming_limit == 1
        assert tracker.reminders.offsets == (1,)
