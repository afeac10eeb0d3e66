"""Presentation CLI exports."""
from .lookup_command import BuildCommand, LookupCommand, run_build, run_lookup

__all__ = [
    "BuildCommand",
    "LookupCommand",
    "run_build",
    "run_lookup",
]
