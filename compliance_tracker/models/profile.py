"""Business profile model."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date

from compliance_tracker.dates.arithmetic import parse_date
from compliance_tracker.exceptions import InvalidProfileError
from compliance_tracker.models.enums import BusinessType


@dataclass
class BusinessProfile:
    """Identity and attributes of the onboarded business.

    ``registration_date`` drives every statutory deadline; while it is
    ``None`` no compliance items can be derived.
    """

    name: str = ""
    email: str = ""
    phone: str = ""
    type: BusinessType = BusinessType.PHYSICAL_GOODS
    registration_date: date | None = None
    turnover: int = 0  # Annual, NPR
    has_vat: bool = False

    def __post_init__(self) -> None:
        for name in ("name", "email", "phone"):
            if not isinstance(getattr(self, name), str):
                raise InvalidProfileError(f"Profile {name} must be text, got {getattr(self, name)!r}")
        try:
            self.type = BusinessType(self.type)
        except ValueError as exc:
            raise InvalidProfileError(f"Unknown business type {self.type!r}") from exc
        try:
            self.registration_date = parse_date(self.registration_date)
        except ValueError as exc:
            raise InvalidProfileError(f"Invalid registration date {self.registration_date!r}") from exc
        if isinstance(self.turnover, bool) or not isinstance(self.turnover, int):
            raise InvalidProfileError(f"Turnover must be an integer, got {self.turnover!r}")
        if self.turnover < 0:
            raise InvalidProfileError("Turnover must not be negative")
        if not isinstance(self.has_vat, bool):
            raise InvalidProfileError(f"has_vat must be true or false, got {self.has_vat!r}")

    @property
    def is_complete(self) -> bool:
        """Whether the contact details required by onboarding are filled in."""
        return all(value.strip() for value in (self.name, self.email, self.phone))

    def replace(self, **changes: object) -> BusinessProfile:
        """Return a copy with ``changes`` applied."""
        known = {f.name for f in dataclasses.fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise InvalidProfileError(f"Unknown profile field(s): {', '.join(unknown)}")
        return dataclasses.replace(self, **changes)
