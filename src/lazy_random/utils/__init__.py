"""Utility functions for lazy-random."""

from lazy_random.utils.helpers import (
    generate_seed,
    parse_date,
    from_timestamp,
    flatten_args,
    flatten_dict,
)

__all__ = [
    "generate_seed",
    "parse_date",
    "from_timestamp",
    "flatten_args",
    "flatten_dict",
]
