"""Configuration management for compliance-tracker."""

from dataclasses import dataclass, field
from pathlib import Path

from compliance_tracker.exceptions import ConfigurationError

STORE_BACKENDS = ("file", "memory")
LOG_FORMATS = ("standard", "json")


@dataclass
class StoreConfig:
    """Persistent store configuration."""

    backend: str = "file"
    data_dir: Path = field(default_factory=lambda: Path("instance"))
    filename: str = "compliance-store.json"

    @property
    def path(self) -> Path:
        """Full path of the JSON store file."""
        return self.data_dir / self.filename


@dataclass
class DeadlineConfig:
    """Windows used when ranking and reminding about deadlines."""

    upcoming_limit: int = 5
    soon_window_days: int = 14
    reminder_window_days: int = 30
    reminder_offsets: tuple[int, ...] = (7, 3, 0)


@dataclass
class TrackerConfig:
    """Main configuration for compliance-tracker."""

    store: StoreConfig = field(default_factory=StoreConfig)
    deadlines: DeadlineConfig = field(default_factory=DeadlineConfig)
    log_level: str = "INFO"
    log_format: str = "standard"
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.store.backend not in STORE_BACKENDS:
            raise ConfigurationError(
                f"Unknown store backend {self.store.backend!r}, expected one of {STORE_BACKENDS}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"Unknown log format {self.log_format!r}, expected one of {LOG_FORMATS}"
            )
        if self.deadlines.upcoming_limit < 0:
            raise ConfigurationError("upcoming_limit must not be negative")

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        """Create config from environment variables."""
        import os

        store = StoreConfig(
            backend=os.getenv("COMPLIANCE_STORE_BACKEND", "file"),
            data_dir=Path(os.getenv("COMPLIANCE_DATA_DIR", "instance")).expanduser(),
            filename=os.getenv("COMPLIANCE_STORE_FILE", "compliance-store.json"),
        )

        deadlines = DeadlineConfig(
            upcoming_limit=_env_int("COMPLIANCE_UPCOMING_LIMIT", 5),
            soon_window_days=_env_int("COMPLIANCE_SOON_DAYS", 14),
            reminder_window_days=_env_int("COMPLIANCE_REMINDER_WINDOW_DAYS", 30),
            reminder_offsets=_env_offsets("COMPLIANCE_REMINDER_OFFSETS", (7, 3, 0)),
        )

        return cls(
            store=store,
            deadlines=deadlines,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            seed=_env_int("SEED", None),
        )


def _env_int(name: str, default: int | None) -> int | None:
    import os

    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _env_offsets(name: str, default: tuple[int, ...]) -> tuple[int, ...]:
    import os

    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        offsets = tuple(int(part) for part in raw.split(",") if part.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a comma-separated list of days, got {raw!r}") from exc
    if any(offset < 0 for offset in offsets):
        raise ConfigurationError(f"{name} must not contain negative offsets")
    return offsets
