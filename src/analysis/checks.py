"""Built-in manifest checks.

Each factory returns a callable suitable for Config.add_check: it takes the
Config and returns a ConfigError, or None when the manifest passes.
"""

from __future__ import annotations

import dataclasses
import os
import re
from typing import Iterable, Optional

import semantic_version

from constants import Constants, VersionSuffix
from manifest.errors import ConfigError
from manifest.models import Check, Config


def require_name(critical: bool = True) -> Check:
    """Name is required for published packages."""
    def check(config: Config) -> Optional[ConfigError]:
        if not config.name:
            return ConfigError(msg="name is required", critical=critical)
        return None
    return check


def name_matches_pattern(pattern: str = Constants.PACKAGE_NAME_PATTERN,
                         critical: bool = False) -> Check:
    """Name must be lowercased vendor/project, as composer requires.

    An empty name is left to require_name.
    """
    regex = re.compile(pattern)

    def check(config: Config) -> Optional[ConfigError]:
        if config.name and not regex.match(config.name):
            return ConfigError(
                msg=f"name '{config.name}' does not match {pattern}",
                critical=critical,
            )
        return None
    return check


def require_description(critical: bool = False) -> Check:
    def check(config: Config) -> Optional[ConfigError]:
        if not config.description.strip():
            return ConfigError(msg="description is required", critical=critical)
        return None
    return check


def require_version(critical: bool = False) -> Check:
    """Version must be present and parseable."""
    def check(config: Config) -> Optional[ConfigError]:
        if config.version is None:
            if config.raw_version:
                msg = f"version '{config.raw_version}' could not be parsed"
            else:
                msg = "version is required"
            return ConfigError(msg=msg, critical=critical)
        return None
    return check


def version_satisfies(spec: str, critical: bool = False) -> Check:
    """Parsed version must match a semantic_version SimpleSpec such as ">=1.0.0".

    Manifests without a parsed version are skipped.

    Raises:
        ValueError: spec is not a valid SimpleSpec.
    """
    simple_spec = semantic_version.SimpleSpec(spec)

    def check(config: Config) -> Optional[ConfigError]:
        if config.version is None:
            return None
        if not simple_spec.match(config.version.to_semantic()):
            return ConfigError(
                msg=f"version {config.version} does not satisfy '{spec}'",
                critical=critical,
            )
        return None
    return check


def forbid_version_suffixes(suffixes: Iterable[str] = ("dev",),
                            critical: bool = False) -> Check:
    """Reject pre-release style versions, e.g. "-dev" in a release branch.

    suffixes are canonical suffix names ("dev", "alpha", "beta", "RC", "patch").

    Raises:
        ValueError: an entry is not a known suffix.
    """
    forbidden = {VersionSuffix(s) for s in suffixes}

    def check(config: Config) -> Optional[ConfigError]:
        if config.version is not None and config.version.suffix in forbidden:
            return ConfigError(
                msg=f"version suffix '{config.version.suffix.value}' is not allowed",
                critical=critical,
            )
        return None
    return check


def require_package(package: str, dev: bool = False, critical: bool = False) -> Check:
    """Package must be listed in require (or require-dev when dev is True)."""
    section = "require-dev" if dev else "require"

    def check(config: Config) -> Optional[ConfigError]:
        deps = config.require_dev if dev else config.require
        if package not in deps:
            return ConfigError(msg=f"{section} must contain '{package}'", critical=critical)
        return None
    return check


def forbid_package(package: str, critical: bool = True) -> Check:
    """Package must not be listed in require."""
    def check(config: Config) -> Optional[ConfigError]:
        if package in config.require:
            return ConfigError(
                msg=f"require must not contain '{package}' ({config.require[package]})",
                critical=critical,
            )
        return None
    return check


def autoload_namespace(namespace: str, critical: bool = False) -> Check:
    """Namespace must resolve through autoload or autoload-dev psr-4."""
    def check(config: Config) -> Optional[ConfigError]:
        if config.psr4_path_for_namespace(namespace) is None:
            return ConfigError(
                msg=f"namespace '{namespace}' is not covered by psr-4 autoload",
                critical=critical,
            )
        return None
    return check


def local_repositories_exist(critical: bool = True) -> Check:
    """Every "path" repository must point to an existing directory.

    Entries are resolved on copies; the config is not modified.
    """
    def check(config: Config) -> Optional[ConfigError]:
        missing = []
        for repo in config.local_repositories():
            resolved = dataclasses.replace(repo).resolve_url(config.root_dir)
            if not os.path.isdir(resolved.url):
                missing.append(resolved.url)
        if missing:
            return ConfigError(
                msg=f"local repositories not found: {', '.join(missing)}",
                critical=critical,
            )
        return None
    return check
