"""Tests for domain models."""

from datetime import date
from decimal import Decimal

import pytest

from compliance_tracker.exceptions import InvalidObligationError, InvalidProfileError
from compliance_tracker.models import (
    BusinessProfile,
    BusinessType,
    ComplianceItem,
    Deadline,
    LoanRepayment,
    ObligationKind,
    ObligationStatus,
    Priority,
    RepaymentFrequency,
    VehicleRenewal,
)


class TestEnums:
    """Tests for enum values."""

    def test_business_type_values(self) -> None:
        assert BusinessType.PHYSICAL_GOODS.value == "physical-goods"
        assert BusinessType("service-based") is BusinessType.SERVICE_BASED

    def test_frequency_months(self) -> None:
        assert RepaymentFrequency.MONTHLY.months == 1
        assert RepaymentFrequency.QUARTERLY.months == 3
        assert RepaymentFrequency.HALF_YEARLY.months == 6
        assert RepaymentFrequency.ANNUALLY.months == 12

    def test_str_enum_compares_to_value(self) -> None:
        assert ObligationStatus.COMPLETED == "completed"


class TestBusinessProfile:
    """Tests for BusinessProfile."""

    def test_defaults(self) -> None:
        profile = BusinessProfile()

        assert profile.type is BusinessType.PHYSICAL_GOODS
        assert profile.registration_date is None
        assert profile.turnover == 0
        assert not profile.has_vat
        assert not profile.is_complete

    def test_type_coerced(self) -> None:
        assert BusinessProfile(type="combined").type is BusinessType.COMBINED

    def test_unknown_type(self) -> None:
        with pytest.raises(InvalidProfileError):
            BusinessProfile(type="retail")

    def test_negative_turnover(self) -> None:
        with pytest.raises(InvalidProfileError):
            BusinessProfile(turnover=-1)

    def test_non_integer_turnover(self) -> None:
        with pytest.raises(InvalidProfileError):
            BusinessProfile(turnover=1.5)
        with pytest.raises(InvalidProfileError):
            BusinessProfile(turnover=True)

    def test_registration_date_text_parsed(self) -> None:
        assert BusinessProfile(registration_date="2024-01-01").registration_date == date(2024, 1, 1)

    @pytest.mark.parametrize("value", ["garbage", 20240101, "2024-13-01"])
    def test_invalid_registration_date(self, value: object) -> None:
        with pytest.raises(InvalidProfileError, match="registration date"):
            BusinessProfile(registration_date=value)

    @pytest.mark.parametrize("value", ["false", 1, None])
    def test_has_vat_must_be_bool(self, value: object) -> None:
        with pytest.raises(InvalidProfileError, match="has_vat"):
            BusinessProfile(has_vat=value)

    @pytest.mark.parametrize("field", ["name", "email", "phone"])
    def test_contact_fields_must_be_text(self, field: str) -> None:
        with pytest.raises(InvalidProfileError, match=field):
            BusinessProfile(**{field: 5})

    def test_is_complete(self, sample_profile: BusinessProfile) -> None:
        assert sample_profile.is_complete
        assert not sample_profile.replace(phone="  ").is_complete

    def test_replace(self, sample_profile: BusinessProfile) -> None:
        updated = sample_profile.replace(turnover=7_000_000)

        assert updated.turnover == 7_000_000
        assert sample_profile.turnover == 1_000_000

    def test_replace_unknown_field(self, sample_profile: BusinessProfile) -> None:
        with pytest.raises(InvalidProfileError, match="address"):
            sample_profile.replace(address="Kathmandu")


class TestLoanRepayment:
    """Tests for LoanRepayment."""

    def _loan(self, **overrides) -> LoanRepayment:
        values = dict(
            id="loan-001",
            loan_name="Working Capital Loan",
            start_date=date(2024, 1, 15),
            amount="25000",
            frequency="monthly",
            next_due_date=date(2024, 1, 15),
        )
        values.update(overrides)
        return LoanRepayment(**values)

    def test_coercion(self) -> None:
        loan = self._loan()

        assert loan.amount == Decimal("25000")
        assert loan.frequency is RepaymentFrequency.MONTHLY
        assert loan.status is ObligationStatus.PENDING

    def test_float_amount(self) -> None:
        assert self._loan(amount=1500.5).amount == Decimal("1500.5")

    @pytest.mark.parametrize("amount", ["0", "-10", "abc", "NaN", "Infinity"])
    def test_invalid_amount(self, amount: str) -> None:
        with pytest.raises(InvalidObligationError):
            self._loan(amount=amount)

    def test_empty_name(self) -> None:
        with pytest.raises(InvalidObligationError):
            self._loan(loan_name="  ")

    def test_unknown_frequency(self) -> None:
        with pytest.raises(InvalidObligationError):
            self._loan(frequency="weekly")


class TestVehicleRenewal:
    """Tests for VehicleRenewal."""

    def test_create(self) -> None:
        vehicle = VehicleRenewal(
            id="veh-001",
            vehicle_name="Delivery Van",
            registration_number="Ba 2 Pa 1234",
            last_renewal_date=date(2023, 6, 1),
            next_renewal_date=date(2024, 6, 1),
        )

        assert vehicle.status is ObligationStatus.PENDING

    def test_empty_name(self) -> None:
        with pytest.raises(InvalidObligationError):
            VehicleRenewal("veh-001", "", "Ba 2 Pa 1234", date(2023, 6, 1), date(2024, 6, 1))

    def test_unknown_status(self) -> None:
        with pytest.raises(InvalidObligationError):
            VehicleRenewal("veh-001", "Van", "", date(2023, 6, 1), date(2024, 6, 1), status="done")


class TestDeadline:
    """Tests for the Deadline wrapper."""

    def _deadline(self, kind: ObligationKind, item_id: str) -> Deadline:
        payload = ComplianceItem(
            id=item_id,
            category="Registration",
            title="PAN Registration",
            description="",
            due_date=date(2024, 1, 1),
        )
        return Deadline(
            kind=kind,
            id=item_id,
            title="x",
            category="y",
            due_date=date(2024, 1, 1),
            status=ObligationStatus.PENDING,
            priority=Priority.NORMAL,
            payload=payload,
        )

    def test_display_id_compliance(self) -> None:
        assert self._deadline(ObligationKind.COMPLIANCE, "pan-registration").display_id == "pan-registration"

    def test_display_id_prefixed(self) -> None:
        assert self._deadline(ObligationKind.LOAN, "abc").display_id == "loan-abc"
        assert self._deadline(ObligationKind.VEHICLE, "abc").display_id == "vehicle-abc"
