"""lazy-random - Composable lazy generators for synthetic test and demo data.

Generators are deferred producers built from a small algebra: leaf
generators for numbers, picks and sequences; combinators that assemble
arrays, objects and strings from other generators; and procedural series
for chart-like data. Profiles describe whole fixtures in YAML.
"""

__version__ = "0.1.0"

from lazy_random.generators.base import Thunk, ConstantThunk, unwrap
from lazy_random.generators.random_gen import Random
from lazy_random.datasets.base import Datasets
from lazy_random.profiles.base import Profile
from lazy_random.engine.fixture_engine import FixtureEngine
from lazy_random.engine.validation_engine import ValidationEngine
from lazy_random.utils.helpers import parse_date

__all__ = [
    "Thunk",
    "ConstantThunk",
    "unwrap",
    "Random",
    "Datasets",
    "Profile",
    "FixtureEngine",
    "ValidationEngine",
    "parse_date",
]
