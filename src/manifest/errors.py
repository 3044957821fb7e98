"""Findings and reports produced while loading and checking a manifest."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, List, Optional

if TYPE_CHECKING:
    from .models import Config


class ManifestDecodeError(ValueError):
    """Raised when manifest data is not a JSON object."""


@dataclass
class ConfigError:
    """One finding about a manifest.

    If critical is True, callers are expected to stop processing the manifest.
    """
    msg: str
    critical: bool = False

    def __str__(self) -> str:
        if self.critical:
            return f"<critical> {self.msg}"
        return self.msg


@dataclass
class ConfigErrors:
    """Ordered findings for a single manifest."""
    config: Optional["Config"] = None
    errors: List[ConfigError] = field(default_factory=list)
    # Rendered instead of config.path when no usable config exists.
    source: str = ""

    @classmethod
    def of(cls, *errors: ConfigError, config: Optional["Config"] = None,
           source: str = "") -> "ConfigErrors":
        """Create a report from the passed findings."""
        return cls(config=config, errors=list(errors), source=source)

    @property
    def path(self) -> str:
        """Path of the manifest the findings concern."""
        if self.config is not None and self.config.path:
            return self.config.path
        return self.source

    def add(self, error: ConfigError) -> None:
        """Append a finding."""
        self.errors.append(error)

    def has_critical(self) -> bool:
        """Return True if any finding is critical."""
        return any(e.critical for e in self.errors)

    @property
    def critical(self) -> List[ConfigError]:
        return [e for e in self.errors if e.critical]

    @property
    def non_critical(self) -> List[ConfigError]:
        return [e for e in self.errors if not e.critical]

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[ConfigError]:
        return iter(self.errors)

    def __str__(self) -> str:
        return "".join(f"config {self.path}: {e}\n" for e in self.errors)
