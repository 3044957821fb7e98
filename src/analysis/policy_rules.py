"""Mapping from policy rule types to check factories."""

import logging
import re
from typing import Any, Callable, Dict

from manifest.models import Check
from . import checks

logger = logging.getLogger(__name__)

RuleBuilder = Callable[[Dict[str, Any], bool], Check]


def _flag(rule: Dict[str, Any], key: str, default: bool) -> bool:
    """Return a boolean rule option; quoted values such as "false" are rejected."""
    value = rule.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' must be true or false, got {value!r}")
    return value


def _build_version_satisfies(rule: Dict[str, Any], critical: bool) -> Check:
    spec = rule.get("spec")
    if not isinstance(spec, str) or not spec.strip():
        raise ValueError("version_satisfies rule requires a 'spec' string")
    return checks.version_satisfies(spec.strip(), critical=critical)


def _build_forbid_suffixes(rule: Dict[str, Any], critical: bool) -> Check:
    suffixes = rule.get("suffixes", ["dev"])
    if isinstance(suffixes, str):
        suffixes = [suffixes]
    if not isinstance(suffixes, list) or not all(isinstance(s, str) for s in suffixes):
        raise ValueError("forbid_version_suffixes 'suffixes' must be a string or a list of strings")
    return checks.forbid_version_suffixes(suffixes, critical=critical)


def _build_require_package(rule: Dict[str, Any], critical: bool) -> Check:
    package = rule.get("package")
    if not isinstance(package, str) or not package:
        raise ValueError("require_package rule requires a 'package' string")
    return checks.require_package(package, dev=_flag(rule, "dev", False), critical=critical)


def _build_forbid_package(rule: Dict[str, Any], critical: bool) -> Check:
    package = rule.get("package")
    if not isinstance(package, str) or not package:
        raise ValueError("forbid_package rule requires a 'package' string")
    return checks.forbid_package(package, critical=critical)


def _build_autoload_namespace(rule: Dict[str, Any], critical: bool) -> Check:
    namespace = rule.get("namespace")
    if not isinstance(namespace, str) or not namespace:
        raise ValueError("autoload_namespace rule requires a 'namespace' string")
    return checks.autoload_namespace(namespace, critical=critical)


def _build_name_pattern(rule: Dict[str, Any], critical: bool) -> Check:
    pattern = rule.get("pattern")
    if pattern is None:
        return checks.name_matches_pattern(critical=critical)
    if not isinstance(pattern, str):
        raise ValueError("name_pattern 'pattern' must be a string")
    try:
        return checks.name_matches_pattern(pattern, critical=critical)
    except re.error as exc:
        raise ValueError(f"invalid name pattern '{pattern}': {exc}") from None


class RuleRegistry:
    """Registry of rule builders keyed by rule type.

    Each entry also carries the default severity used when a rule does not
    set "critical".
    """

    def __init__(self):
        self._builders: Dict[str, tuple] = {
            "require_name": (lambda rule, critical: checks.require_name(critical), True),
            "name_pattern": (_build_name_pattern, False),
            "require_description": (lambda rule, critical: checks.require_description(critical), False),
            "require_version": (lambda rule, critical: checks.require_version(critical), False),
            "version_satisfies": (_build_version_satisfies, False),
            "forbid_version_suffixes": (_build_forbid_suffixes, False),
            "require_package": (_build_require_package, False),
            "forbid_package": (_build_forbid_package, True),
            "autoload_namespace": (_build_autoload_namespace, False),
            "local_repositories_exist": (lambda rule, critical: checks.local_repositories_exist(critical), True),
        }

    def build(self, rule: Dict[str, Any]) -> Check:
        """Build a check from a rule mapping such as {"type": "require_name"}.

        Raises:
            ValueError: If the rule type is unknown or the rule is incomplete.
        """
        rule_type = rule.get("type")
        if not isinstance(rule_type, str) or rule_type not in self._builders:
            raise ValueError(f"Unknown rule type: {rule_type}")
        builder, default_critical = self._builders[rule_type]
        critical = _flag(rule, "critical", default_critical)
        return builder(rule, critical)

    def register(self, rule_type: str, builder: RuleBuilder, default_critical: bool = False) -> None:
        """Register a new rule builder."""
        self._builders[rule_type] = (builder, default_critical)

    @property
    def rule_types(self):
        return sorted(self._builders)


# Global registry instance
rule_registry = RuleRegistry()
