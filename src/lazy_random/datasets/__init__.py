"""Datasets module - lookup tables for the name and place generators.

Tables are plain lists of strings. They can be:
- Left at the built-in defaults
- Loaded from YAML files
- Built from a Faker locale
"""

from lazy_random.datasets.base import Datasets
from lazy_random.datasets.loader import DatasetLoader, load_datasets

__all__ = [
    "Datasets",
    "DatasetLoader",
    "load_datasets",
]
