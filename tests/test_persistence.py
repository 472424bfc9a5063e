"""Tests for key-value store adapters."""

import json
import os
from pathlib import Path

import pytest

from compliance_tracker.exceptions import StoreError
from compliance_tracker.persistence import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    StoreKey,
    load_json,
    save_json,
)


class TestMemoryStore:
    """Tests for MemoryStore."""

    def test_get_set_remove(self) -> None:
        store = MemoryStore()

        assert store.get("a") is None
        store.set("a", "1")
        assert store.get("a") == "1"
        store.remove("a")
        assert store.get("a") is None

    def test_remove_missing_is_noop(self) -> None:
        MemoryStore().remove("missing")

    def test_initial_copied(self) -> None:
        initial = {"a": "1"}
        store = MemoryStore(initial)
        store.set("b", "2")

        assert initial == {"a": "1"}
        assert store.snapshot() == {"a": "1", "b": "2"}

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemoryStore(), KeyValueStore)


class TestJsonFileStore:
    """Tests for JsonFileStore."""

    def test_persists_across_instances(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "store.json"
        JsonFileStore(path).set("businessInfo", '{"name": "Shop"}')

        assert JsonFileStore(path).get("businessInfo") == '{"name": "Shop"}'

    def test_document_format(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        store = JsonFileStore(path, pretty=True)
        store.set("a", "1")
        store.set("b", "2")
        store.remove("a")

        assert json.loads(path.read_text(encoding="utf-8")) == {"b": "2"}

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        store = JsonFileStore(tmp_path / "store.json")
        store.set("a", "1")

        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    def test_corrupt_file_starts_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")

        assert JsonFileStore(path).get("a") is None

    def test_non_object_starts_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")

        assert JsonFileStore(path).get("a") is None

    def test_non_string_values_dropped(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text('{"a": "1", "b": 2}', encoding="utf-8")
        store = JsonFileStore(path)

        assert store.get("a") == "1"
        assert store.get("b") is None

    def test_rejects_non_string(self, tmp_path: Path) -> None:
        with pytest.raises(StoreError):
            JsonFileStore(tmp_path / "store.json").set("a", 1)

    def test_unwritable_location(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        store = JsonFileStore(blocker / "store.json")

        with pytest.raises(StoreError):
            store.set("a", "1")

    def test_failed_set_keeps_previous_value(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A write that never reaches disk is not visible to readers either."""
        path = tmp_path / "store.json"
        store = JsonFileStore(path)
        store.set("a", "1")

        def refuse(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", refuse)

        with pytest.raises(StoreError):
            store.set("a", "2")
        with pytest.raises(StoreError):
            store.set("b", "3")
        with pytest.raises(StoreError):
            store.remove("a")

        assert store.get("a") == "1"
        assert store.get("b") is None
        assert json.loads(path.read_text(encoding="utf-8")) == {"a": "1"}


class TestJsonHelpers:
    """Tests for load_json/save_json."""

    def test_round_trip(self) -> None:
        store = MemoryStore()
        save_json(store, StoreKey.COMPLIANCE_STATUSES, {"pan-registration": "completed"})

        assert store.get("complianceStatuses") == '{"pan-registration": "completed"}'
        assert load_json(store, StoreKey.COMPLIANCE_STATUSES, {}) == {"pan-registration": "completed"}

    def test_missing_returns_default(self) -> None:
        assert load_json(MemoryStore(), StoreKey.LOAN_REPAYMENTS, []) == []

    def test_corrupt_returns_default(self) -> None:
        store = MemoryStore({"loanRepayments": "[{broken"})

        assert load_json(store, StoreKey.LOAN_REPAYMENTS, []) == []

    def test_wrong_shape_returns_default(self) -> None:
        store = MemoryStore({"loanRepayments": '{"id": "x"}'})

        assert load_json(store, StoreKey.LOAN_REPAYMENTS, []) == []

    def test_unencodable_raises(self) -> None:
        with pytest.raises(StoreError):
            save_json(MemoryStore(), "key", {"value": object()})
