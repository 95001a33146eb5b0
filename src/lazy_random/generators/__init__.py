"""Generators module - the lazy generator algebra.

Generators are Thunks produced by the factories on Random:
- Leaf generators: number, float, item, sequence
- Structural combinators: array, object, join, transform, constant
- Procedural series: mountains, wave
- Dates and lookups: date, country, first_name, last_name
"""

from lazy_random.generators.base import Thunk, ConstantThunk, Value, unwrap
from lazy_random.generators.random_gen import Random
from lazy_random.generators.registry import (
    GeneratorRegistry,
    GeneratorSpec,
    get_global_generator_registry,
)

__all__ = [
    "Thunk",
    "ConstantThunk",
    "Value",
    "unwrap",
    "Random",
    "GeneratorRegistry",
    "GeneratorSpec",
    "get_global_generator_registry",
]
