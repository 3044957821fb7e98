"""Version string parsing for the manifest "version" field.

Grammar: ["v"] DIGITS "." DIGITS "." DIGITS ["-" SUFFIX]

SUFFIX is matched verbatim against the tokens in
Constants.VERSION_SUFFIX_TOKENS; qualifiers such as "alpha3" are not accepted.
"""

from typing import List

from constants import Constants
from .errors import (
    EmptyVersionError,
    MalformedVersionError,
    NonNumericComponentError,
    UnknownSuffixError,
)
from .models import Version


def _parse_component(index: int, value: str) -> int:
    """Parse one dot-separated component (1-based index for error reporting).

    Components must fit a signed 64-bit integer.
    """
    if not (value.isascii() and value.isdigit()):
        raise NonNumericComponentError(index, value)
    try:
        number = int(value, 10)
    except ValueError:
        raise NonNumericComponentError(index, value) from None
    if number > Constants.VERSION_COMPONENT_MAX:
        raise NonNumericComponentError(index, value)
    return number


def parse_version(raw: str) -> Version:
    """Parse a manifest version string.

    Args:
        raw: Version string such as "1.0.2", "v2.0.4-p" or "1.0.0-RC".

    Returns:
        Parsed Version.

    Raises:
        EmptyVersionError: raw is empty.
        MalformedVersionError: raw is too short, has more than one suffix
            segment, or does not have exactly three dot-separated parts.
        UnknownSuffixError: the suffix is not a recognized token.
        NonNumericComponentError: a component is not a base-10 integer.
    """
    if raw == "":
        raise EmptyVersionError()

    if len(raw) < Constants.VERSION_MIN_LENGTH:
        raise MalformedVersionError(raw)

    value = raw[1:] if raw.startswith("v") else raw
    segments = value.split("-")
    if len(segments) > 2:
        raise MalformedVersionError(raw)

    suffix = None
    if len(segments) == 2:
        suffix = Constants.VERSION_SUFFIX_TOKENS.get(segments[1])
        if suffix is None:
            raise UnknownSuffixError(segments[1])

    parts: List[str] = segments[0].split(".")
    if len(parts) != 3:
        raise MalformedVersionError(raw)

    major, minor, micro = (_parse_component(i, p) for i, p in enumerate(parts, start=1))
    return Version.with_suffix(major, minor, micro, suffix)
