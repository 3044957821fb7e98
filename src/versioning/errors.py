"""Version parsing errors."""

from constants import Constants


class VersionError(ValueError):
    """Base class for version string parse failures."""


class EmptyVersionError(VersionError):
    """Raised when the version string is empty."""

    def __init__(self):
        super().__init__("version is empty")


class MalformedVersionError(VersionError):
    """Raised when the version does not follow [v]X.Y.Z[-suffix]."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"version must be in the format {Constants.VERSION_FORMAT}")


class UnknownSuffixError(VersionError):
    """Raised when the suffix after '-' is not a recognized token."""

    def __init__(self, suffix: str):
        self.suffix = suffix
        super().__init__(f"unknown version suffix '{suffix}'")


class NonNumericComponentError(VersionError):
    """Raised when major, minor or micro is not a base-10 integer.

    Attributes:
        index: 1-based position of the offending component.
        value: Its literal text.
    """

    def __init__(self, index: int, value: str):
        self.index = index
        self.value = value
        super().__init__(f"part {index} ('{value}') of the version must be a number")
