"""Profiles module - the configuration layer.

Profiles are YAML-backed fixture definitions that specify:
- A record template built from generator calls
- Record count and random seed
- Lookup tables
- Output settings

Templates are compiled into generators by the TemplateCompiler.
"""

from lazy_random.profiles.base import Profile, ProfileBuilder, OutputConfig, OutputFormat
from lazy_random.profiles.compiler import TemplateCompiler, TRANSFORMS
from lazy_random.profiles.loader import ProfileLoader, load_profile

__all__ = [
    "Profile",
    "ProfileBuilder",
    "OutputConfig",
    "OutputFormat",
    "TemplateCompiler",
    "TRANSFORMS",
    "ProfileLoader",
    "load_profile",
]
