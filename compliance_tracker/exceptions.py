"""Custom exception hierarchy for compliance-tracker."""


class ComplianceTrackerError(Exception):
    """Base exception for all compliance-tracker errors."""


class ConfigurationError(ComplianceTrackerError):
    """Raised when configuration is invalid or missing."""


class StoreError(ComplianceTrackerError):
    """Raised when the persistent store cannot be written."""


class CalendarConversionError(ComplianceTrackerError, ValueError):
    """Raised when a Bikram Sambat date cannot be converted (strict mode only)."""


class InvalidObligationError(ComplianceTrackerError, ValueError):
    """Raised when a loan repayment or vehicle renewal is built from invalid data."""


class InvalidProfileError(ComplianceTrackerError, ValueError):
    """Raised when a business profile update names an unknown field or bad value."""
