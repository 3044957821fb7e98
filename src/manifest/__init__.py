"""composer.json manifest package.

- models.py: Config, Autoload (psr-4 lookup) and ConfigRepo (local path resolution)
- errors.py: findings (ConfigError) and reports (ConfigErrors)
- loader.py: building a Config from a file or raw data
"""

from .errors import ConfigError, ConfigErrors, ManifestDecodeError
from .loader import load_config, new_config_from_data, new_config_from_file
from .models import Autoload, Config, ConfigRepo

__all__ = [
    "Autoload",
    "Config",
    "ConfigRepo",
    "ConfigError",
    "ConfigErrors",
    "ManifestDecodeError",
    "load_config",
    "new_config_from_data",
    "new_config_from_file",
]
