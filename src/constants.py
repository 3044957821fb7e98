"""Constants used in the project."""

import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)


class RepositoryTypes(Enum):
    """Repository entry types understood by the resolver.

    Args:
        Enum (string): Value of the "type" key of a repositories entry.
    """

    PATH = "path"
    VCS = "vcs"
    COMPOSER = "composer"


class VersionSuffix(Enum):
    """Recognized version suffixes, in release order.

    Args:
        Enum (string): Canonical suffix token.
    """

    DEV = "dev"
    ALPHA = "alpha"
    BETA = "beta"
    RC = "RC"
    PATCH = "patch"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    MANIFEST_FILE = "composer.json"
    NAMESPACE_SEPARATOR = "\\"
    VERSION_MIN_LENGTH = 5
    VERSION_COMPONENT_MAX = 2**63 - 1
    VERSION_FORMAT = "[v]X.Y.Z[-suffix]"
    # Accepted tokens; matching is exact and case-sensitive.
    VERSION_SUFFIX_TOKENS = {
        "dev": VersionSuffix.DEV,
        "patch": VersionSuffix.PATCH,
        "p": VersionSuffix.PATCH,
        "alpha": VersionSuffix.ALPHA,
        "a": VersionSuffix.ALPHA,
        "beta": VersionSuffix.BETA,
        "b": VersionSuffix.BETA,
        "RC": VersionSuffix.RC,
    }
    PACKAGE_NAME_PATTERN = r"^[a-z0-9]([_.-]?[a-z0-9]+)*/[a-z0-9](([_.]?|-{0,2})[a-z0-9]+)*$"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ANALYSIS = "[ANALYSIS]"
    ENV_LOG_LEVEL = "MANIFESTGATE_LOG_LEVEL"
    ENV_CONFIG = "MANIFESTGATE_CONFIG"
    DEFAULT_CONFIG_LOCATIONS = [
        os.path.join(".manifestgate", "policy.yml"),
        os.path.join(".manifestgate", "policy.yaml"),
        "manifestgate.yml",
    ]


def _load_yaml_config(base_dir=None):
    """Return the first YAML config found in the default locations, else {}.

    MANIFESTGATE_CONFIG, when set, takes precedence over the default locations.
    """
    candidates = []
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        candidates.append(env_path)
    root = base_dir or os.getcwd()
    candidates.extend(os.path.join(root, p) for p in Constants.DEFAULT_CONFIG_LOCATIONS)

    for path in candidates:
        if not os.path.isfile(path):
            continue
        import yaml  # pylint: disable=import-outside-toplevel

        try:
            with open(path, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Failed to load config %s: %s", path, exc)
            continue
        if isinstance(data, dict):
            logger.debug("Loaded config from %s", path)
            return data
    return {}
