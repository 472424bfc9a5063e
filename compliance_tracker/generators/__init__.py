"""Sample data generators for demos and manual testing."""

from compliance_tracker.generators.sample import SampleDataGenerator

__all__ = ["SampleDataGenerator"]
