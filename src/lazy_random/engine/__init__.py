"""Engine module - runtime and tooling layer.

Contains:
- Fixture Engine: Renders profiles and named generators
- Validation Engine: Reports problem templates and checks output schemas
"""

from lazy_random.engine.fixture_engine import (
    FixtureEngine,
    GeneratedDataset,
    GeneratedRecord,
    GenerationResult,
)
from lazy_random.engine.validation_engine import ValidationEngine, ValidationResult

__all__ = [
    "FixtureEngine",
    "GeneratedDataset",
    "GeneratedRecord",
    "GenerationResult",
    "ValidationEngine",
    "ValidationResult",
]
