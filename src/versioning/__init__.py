"""Manifest version parsing."""

from .errors import (
    EmptyVersionError,
    MalformedVersionError,
    NonNumericComponentError,
    UnknownSuffixError,
    VersionError,
)
from .models import Version
from .parser import parse_version

__all__ = [
    "Version",
    "parse_version",
    "VersionError",
    "EmptyVersionError",
    "MalformedVersionError",
    "UnknownSuffixError",
    "NonNumericComponentError",
]
