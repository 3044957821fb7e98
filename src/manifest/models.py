"""Data models for composer.json manifests.

Field descriptions follow https://getcomposer.org/doc/04-schema.md.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from constants import Constants, RepositoryTypes
from versioning.models import Version
from .errors import ConfigError, ConfigErrors, ManifestDecodeError

Check = Callable[["Config"], Optional[ConfigError]]


def _expect(value: Any, kind: type, key: str) -> Any:
    """Return value if it has the JSON type the key requires."""
    if not isinstance(value, kind):
        raise ManifestDecodeError(
            f"cannot unmarshal {type(value).__name__} into field {key} of type {kind.__name__}"
        )
    return value


def _string_map(value: Any, key: str) -> Dict[str, str]:
    mapping = _expect(value, dict, key)
    for k, v in mapping.items():
        _expect(v, str, f"{key}.{k}")
    return dict(mapping)


@dataclass
class Autoload:
    """Namespace to folder mapping from an autoload section.

    psr4 keys are namespace prefixes and conventionally end with a backslash.
    """
    psr4: Dict[str, str] = field(default_factory=dict)
    files: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any, key: str = "autoload") -> "Autoload":
        """Build from a decoded autoload object; null yields an empty table."""
        if data is None:
            return cls()
        data = _expect(data, dict, key)
        psr4 = data.get("psr-4")
        files = data.get("files")
        return cls(
            psr4=_string_map(psr4, f"{key}.psr-4") if psr4 is not None else {},
            files=[_expect(f, str, f"{key}.files") for f in _expect(files, list, f"{key}.files")]
            if files is not None else [],
        )

    def psr4_path_for_namespace(self, name: str) -> Optional[str]:
        """Find the psr-4 path for a namespace, or None.

        The namespace does not have to match a key verbatim; the longest key
        that is a prefix of it wins, so "My\\Core\\Utils" picks "My\\Core\\"
        over "My\\".
        """
        # Keys end with a separator, so "My\Core" must match "My\Core\".
        name = name + Constants.NAMESPACE_SEPARATOR

        found_key = ""
        found_path = ""
        for psr_name, psr_path in self.psr4.items():
            if name.startswith(psr_name) and len(psr_name) > len(found_key):
                found_key = psr_name
                found_path = psr_path

        if not found_path:
            return None
        return found_path


@dataclass
class ConfigRepo:
    """One entry of the repositories list."""
    type: str = ""
    url: str = ""
    resolved: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "ConfigRepo":
        data = _expect(data, dict, "repositories")
        return cls(
            type=_expect(data.get("type", ""), str, "repositories.type"),
            url=_expect(data.get("url", ""), str, "repositories.url"),
        )

    @property
    def is_local(self) -> bool:
        return self.type == RepositoryTypes.PATH.value

    def resolve_url(self, path: str) -> "ConfigRepo":
        """Resolve a local dependency path relative to path, in place.

        Already resolved entries and non-local entries are returned as is.
        """
        if self.resolved:
            return self

        # vcs and composer repositories are left as declared.
        if not self.is_local:
            return self

        url = os.path.normpath(os.path.join(path, self.url))
        # Same form on unix-like systems and on windows.
        self.url = url.replace(os.sep, "/")
        self.resolved = True
        return self


@dataclass
class Config:
    """Fields read from composer.json plus the location of the file."""
    # Vendor and project name separated by "/", e.g. "monolog/monolog".
    name: str = ""
    description: str = ""
    # Raw "version" value; X.Y.Z or vX.Y.Z with an optional suffix.
    raw_version: str = ""
    version: Optional[Version] = None
    type: str = ""
    require: Dict[str, str] = field(default_factory=dict)
    require_dev: Dict[str, str] = field(default_factory=dict)
    repositories: List[ConfigRepo] = field(default_factory=list)
    autoload: Autoload = field(default_factory=Autoload)
    autoload_dev: Autoload = field(default_factory=Autoload)

    # Absolute path to the manifest and the folder containing it.
    path: str = ""
    root_dir: str = ""
    checks: List[Check] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> "Config":
        """Map a decoded JSON document onto a Config; unknown keys are ignored.

        Raises:
            ManifestDecodeError: data is not an object or a field has the wrong type.
        """
        data = _expect(data, dict, "manifest")

        def _str(key: str) -> str:
            value = data.get(key)
            return "" if value is None else _expect(value, str, key)

        def _map(key: str) -> Dict[str, str]:
            value = data.get(key)
            return {} if value is None else _string_map(value, key)

        repos = data.get("repositories")
        return cls(
            name=_str("name"),
            description=_str("description"),
            raw_version=_str("version"),
            type=_str("type"),
            require=_map("require"),
            require_dev=_map("require-dev"),
            repositories=[ConfigRepo.from_dict(r) for r in _expect(repos, list, "repositories")]
            if repos is not None else [],
            autoload=Autoload.from_dict(data.get("autoload"), "autoload"),
            autoload_dev=Autoload.from_dict(data.get("autoload-dev"), "autoload-dev"),
        )

    def psr4_path_for_namespace(self, name: str) -> Optional[str]:
        """Find the folder for a namespace in autoload, then autoload-dev.

        The result starts with the name of the folder holding the manifest,
        e.g. "service/src", so it does not match an unrelated "src" deeper in
        some other tree.
        """
        directory = os.path.basename(self.root_dir) or "."

        path = self.autoload.psr4_path_for_namespace(name)
        if path is None:
            path = self.autoload_dev.psr4_path_for_namespace(name)
        if path is None:
            return None
        return f"{directory}/{path}"

    def add_check(self, check: Check) -> None:
        """Register a custom check, see check_config."""
        self.checks.append(check)

    def check_config(self) -> Optional[ConfigErrors]:
        """Run every registered check in order.

        Returns:
            The findings, or None if no check reported anything. Critical
            findings do not stop the remaining checks.
        """
        errors = ConfigErrors(config=self)
        for check in self.checks:
            err = check(self)
            if err is not None:
                errors.add(err)

        if len(errors) == 0:
            return None
        return errors

    def local_repositories(self) -> List[ConfigRepo]:
        return [r for r in self.repositories if r.is_local]

    def resolve_local_repositories(self) -> List[ConfigRepo]:
        """Resolve every local repository against root_dir."""
        return [repo.resolve_url(self.root_dir) for repo in self.local_repositories()]
