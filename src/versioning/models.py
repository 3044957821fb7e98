"""Data models for manifest versions."""

from dataclasses import dataclass
from functools import total_ordering
from typing import Optional, Tuple

import semantic_version

from constants import VersionSuffix

# Release order of suffixes relative to the final release (None).
_SUFFIX_RANK = {
    VersionSuffix.DEV: 0,
    VersionSuffix.ALPHA: 1,
    VersionSuffix.BETA: 2,
    VersionSuffix.RC: 3,
    None: 4,
    VersionSuffix.PATCH: 5,
}


@total_ordering
@dataclass(frozen=True)
class Version:
    """Parsed manifest version.

    At most one of the suffix flags is set; none set means a final release.
    """
    major: int
    minor: int
    micro: int

    is_dev: bool = False
    is_patch: bool = False
    is_alpha: bool = False
    is_beta: bool = False
    is_rc: bool = False

    def __post_init__(self):
        flags = (self.is_dev, self.is_patch, self.is_alpha, self.is_beta, self.is_rc)
        if sum(1 for f in flags if f) > 1:
            raise ValueError("at most one version suffix flag may be set")

    @classmethod
    def with_suffix(cls, major: int, minor: int, micro: int,
                    suffix: Optional[VersionSuffix] = None) -> "Version":
        """Build a Version with the flag matching suffix set."""
        return cls(
            major,
            minor,
            micro,
            is_dev=suffix is VersionSuffix.DEV,
            is_patch=suffix is VersionSuffix.PATCH,
            is_alpha=suffix is VersionSuffix.ALPHA,
            is_beta=suffix is VersionSuffix.BETA,
            is_rc=suffix is VersionSuffix.RC,
        )

    @property
    def suffix(self) -> Optional[VersionSuffix]:
        """Return the suffix, or None for a final release."""
        if self.is_dev:
            return VersionSuffix.DEV
        if self.is_patch:
            return VersionSuffix.PATCH
        if self.is_alpha:
            return VersionSuffix.ALPHA
        if self.is_beta:
            return VersionSuffix.BETA
        if self.is_rc:
            return VersionSuffix.RC
        return None

    def has_suffix(self) -> bool:
        """Return True when any suffix flag is set."""
        return self.suffix is not None

    def _sort_key(self) -> Tuple[int, int, int, int]:
        return (self.major, self.minor, self.micro, _SUFFIX_RANK[self.suffix])

    def __lt__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.micro}"
        if self.suffix is None:
            return base
        return f"{base}-{self.suffix.value}"

    def to_semantic(self) -> semantic_version.Version:
        """Convert to a semantic_version.Version for constraint matching.

        dev/alpha/beta/RC become prerelease tags; patch becomes build metadata.
        """
        prerelease = ()
        build = ()
        suffix = self.suffix
        if suffix is VersionSuffix.PATCH:
            build = (suffix.value,)
        elif suffix is not None:
            prerelease = (suffix.value,)
        return semantic_version.Version(
            major=self.major,
            minor=self.minor,
            patch=self.micro,
            prerelease=prerelease,
            build=build,
        )
