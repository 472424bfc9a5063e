"""Record codecs between domain dataclasses and persisted JSON values.

Persisted records use camelCase field names (``loanName``, ``nextDueDate`` ...)
so stores exported from the web dashboard load unchanged.
"""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from compliance_tracker.dates.arithmetic import parse_date
from compliance_tracker.models import BusinessProfile, LoanRepayment, VehicleRenewal

# Field names that do not follow the plain snake_case -> camelCase rule
_FIELD_ALIASES = {"has_vat": "hasVAT", "requires_vat": "requiresVAT"}


def camel_case(name: str) -> str:
    """Convert a dataclass field name to its persisted key."""
    if name in _FIELD_ALIASES:
        return _FIELD_ALIASES[name]
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def to_record(obj: Any) -> dict:
    """Convert a flat dataclass to a persisted record with camelCase keys.

    Uses ``dataclasses.fields()`` + ``getattr`` rather than ``asdict()`` so
    payload objects are not deep-copied.
    """
    if not is_dataclass(obj):
        raise TypeError(f"Expected a dataclass instance, got {type(obj).__name__}")
    return {camel_case(f.name): serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def _required_date(record: dict, key: str) -> date:
    value = parse_date(record.get(key))
    if value is None:
        raise ValueError(f"Missing date field {key!r}")
    return value


def profile_from_record(record: dict) -> BusinessProfile:
    """Build a :class:`BusinessProfile` from a persisted ``businessInfo`` record.

    Values are passed through unconverted so the model rejects wrong types
    (``"false"`` for ``hasVAT``, ``6.5e6`` for ``turnover``).
    """
    defaults = BusinessProfile()
    return BusinessProfile(
        name=record.get("name", defaults.name),
        email=record.get("email", defaults.email),
        phone=record.get("phone", defaults.phone),
        type=record.get("type", defaults.type),
        registration_date=record.get("registrationDate"),
        turnover=record.get("turnover", defaults.turnover),
        has_vat=record.get("hasVAT", defaults.has_vat),
    )


def loan_from_record(record: dict) -> LoanRepayment:
    """Build a :class:`LoanRepayment` from a persisted record."""
    return LoanRepayment(
        id=str(record["id"]),
        loan_name=str(record["loanName"]),
        start_date=_required_date(record, "startDate"),
        amount=record["amount"],
        frequency=record["frequency"],
        next_due_date=_required_date(record, "nextDueDate"),
        status=record.get("status", "pending"),
    )


def vehicle_from_record(record: dict) -> VehicleRenewal:
    """Build a :class:`VehicleRenewal` from a persisted record."""
    return VehicleRenewal(
        id=str(record["id"]),
        vehicle_name=str(record["vehicleName"]),
        registration_number=str(record.get("registrationNumber", "")),
        last_renewal_date=_required_date(record, "lastRenewalDate"),
        next_renewal_date=_required_date(record, "nextRenewalDate"),
        status=record.get("status", "pending"),
    )
