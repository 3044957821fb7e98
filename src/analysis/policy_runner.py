"""Policy driven manifest checks.

- Loads a policy mapping from YAML or JSON (a top-level "policy" section wins)
- Builds checks from its "rules" list and registers them on a Config
- Runs the registered checks and logs every finding
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

import yaml

from constants import Constants, _load_yaml_config
from manifest.errors import ConfigErrors
from manifest.models import Check, Config
from .policy_rules import rule_registry

logger = logging.getLogger(__name__)
STG = f"{Constants.ANALYSIS} "


def build_policy_preset(preset_name: Optional[str] = None) -> Dict[str, Any]:
    """Build a built-in policy preset ("default" or "library")."""
    preset = str(preset_name or "default").strip().lower()
    if preset == "library":
        return {
            "rules": [
                {"type": "require_name"},
                {"type": "name_pattern", "critical": True},
                {"type": "require_description", "critical": True},
                {"type": "forbid_version_suffixes", "suffixes": ["dev"]},
                {"type": "local_repositories_exist"},
            ],
        }
    return {
        "rules": [
            {"type": "name_pattern"},
            {"type": "local_repositories_exist"},
        ],
    }


def _extract_policy(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        return {}
    pol = data.get("policy", data)
    return pol if isinstance(pol, dict) else {}


def load_policy(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load policy configuration.

    Args:
        config_path: YAML or JSON file (JSON when the extension is .json). When
            omitted the default locations from constants are searched.

    Returns:
        Policy dict, empty when nothing could be loaded.
    """
    if not config_path:
        return _extract_policy(_load_yaml_config())

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            if config_path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("Failed to load config: %s", exc)
        return {}
    return _extract_policy(data)


def build_checks(policy: Dict[str, Any]) -> List[Check]:
    """Build checks for every valid rule in policy["rules"].

    Unknown or incomplete rules are skipped with a warning.
    """
    built: List[Check] = []
    rules = policy.get("rules") or []
    if not isinstance(rules, list):
        logger.warning("Policy 'rules' must be a list, got %s", type(rules).__name__)
        return built

    for rule in rules:
        if not isinstance(rule, dict):
            logger.warning("Skipping policy rule %r: not a mapping", rule)
            continue
        if rule.get("enabled", True) is False:
            logger.debug("Skipping disabled policy rule %s", rule.get("type"))
            continue
        try:
            built.append(rule_registry.build(rule))
        except ValueError as exc:
            logger.warning("Skipping policy rule %s: %s", rule.get("type"), exc)
    return built


def apply_policy(config: Config, policy: Dict[str, Any]) -> int:
    """Register the policy checks on config; returns how many were added."""
    added = build_checks(policy)
    for check in added:
        config.add_check(check)
    logger.debug("Registered %d policy checks for %s", len(added), config.path)
    return len(added)


def run_checks(config: Config) -> Optional[ConfigErrors]:
    """Run the checks registered on config and log the outcome.

    Returns the same value as Config.check_config.
    """
    errors = config.check_config()
    if errors is None:
        logger.info("%sManifest %s passed %d checks.", STG, config.path, len(config.checks))
        return None

    for err in errors:
        if err.critical:
            logger.warning("%s%s: %s", STG, config.path, err.msg)
        else:
            logger.info("%s%s: %s", STG, config.path, err.msg)
    logger.info(
        "%sManifest %s: %d findings (%d critical).",
        STG, config.path, len(errors), len(errors.critical),
    )
    return errors
