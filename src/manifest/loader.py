"""Load composer.json manifests from files or raw data.

Loading never raises for bad input. Every function returns a (config, errors)
pair where errors is None on success:
- unreadable file or invalid JSON: an empty placeholder Config and a single
  critical finding; the placeholder must not be used.
- invalid version string: a usable Config with version=None and a
  non-critical finding.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Optional, Tuple, Union

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from versioning.errors import VersionError
from versioning.parser import parse_version
from .errors import ConfigError, ConfigErrors, ManifestDecodeError
from .models import Config

logger = logging.getLogger(__name__)

LoadResult = Tuple[Config, Optional[ConfigErrors]]


def _fail(msg: str, source: str) -> LoadResult:
    """Return the placeholder config with one critical finding."""
    return Config(), ConfigErrors.of(ConfigError(msg=msg, critical=True), source=source)


def new_config_from_data(data: Union[bytes, str], config_path: str) -> LoadResult:
    """Build a Config from manifest contents.

    Args:
        data: Raw JSON (bytes are decoded as UTF-8).
        config_path: Path the data was read from; made absolute.

    Returns:
        Tuple of (config, errors or None).
    """
    abs_path = os.path.abspath(config_path)

    try:
        if isinstance(data, (bytes, bytearray)):
            data = data.decode("utf-8")
        config = Config.from_dict(json.loads(data))
    except (UnicodeDecodeError, json.JSONDecodeError, ManifestDecodeError) as exc:
        logger.warning("Failed to decode manifest %s: %s", abs_path, exc)
        return _fail(str(exc), abs_path)

    config_errors = ConfigErrors(config=config)

    try:
        config.version = parse_version(config.raw_version)
    except VersionError as exc:
        logger.info("Manifest %s has no usable version: %s", abs_path, exc)
        config_errors.add(ConfigError(msg=str(exc), critical=False))

    config.path = abs_path
    config.root_dir = os.path.dirname(abs_path)

    if is_debug_enabled(logger):
        logger.debug(
            "Loaded manifest %s (name=%s, version=%s)",
            abs_path, config.name or "<none>", config.version,
            extra=extra_context(event="manifest_loaded", component="loader", path=abs_path),
        )

    if len(config_errors) != 0:
        return config, config_errors
    return config, None


def new_config_from_file(path: Union[str, os.PathLike]) -> LoadResult:
    """Read and build a Config from a file.

    A missing or unreadable file is reported like invalid JSON.
    """
    path = os.fspath(path)
    try:
        with open(path, "rb") as fh:
            data = fh.read()
    except OSError as exc:
        logger.warning("Failed to read manifest %s: %s", path, exc)
        return _fail(str(exc), os.path.abspath(path))
    return new_config_from_data(data, path)


def load_config(source: Union[str, os.PathLike, bytes],
                config_path: Optional[str] = None) -> LoadResult:
    """Load from a path, or from bytes when source is bytes.

    Args:
        source: Manifest path, or raw manifest bytes.
        config_path: Where bytes came from; defaults to composer.json in the
            working directory.
    """
    if isinstance(source, (bytes, bytearray)):
        return new_config_from_data(source, config_path or Constants.MANIFEST_FILE)
    return new_config_from_file(source)
