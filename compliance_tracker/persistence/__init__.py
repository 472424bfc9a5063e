"""Persistent key-value store adapters."""

from compliance_tracker.persistence.base import KeyValueStore, StoreKey, load_json, save_json
from compliance_tracker.persistence.json_file import JsonFileStore
from compliance_tracker.persistence.memory import MemoryStore

__all__ = ["JsonFileStore", "KeyValueStore", "MemoryStore", "StoreKey", "load_json", "save_json"]
