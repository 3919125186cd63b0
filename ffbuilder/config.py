import toml
import os
from packaging.version import InvalidVersion, Version

from .cli_logger import logger
from .errors import ConfigurationError

CONFIG_FILE = "ffbuilder.toml"

DEFAULTS = {
    "version": "6.1",
    "profile": "release",
    "prefix": "/usr/local",
}

def load_config(path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    if os.path.exists(config_path):
        logger.info(f"Loading configuration from {config_path}")
        try:
            with open(config_path, "r") as f:
                return toml.load(f)
        except toml.TomlDecodeError as e:
            logger.error(f"Error decoding TOML file at {config_path}: {e}")
            logger.info("Please check the file's format for syntax errors.")
        except IOError as e:
            logger.error(f"Error reading configuration file at {config_path}: {e}")
            logger.info("Please check file permissions.")
    return {}

def save_config(config, path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    logger.info(f"Saving configuration to {config_path}")
    try:
        with open(config_path, "w") as f:
            toml.dump(config, f)
        return True
    except IOError as e:
        logger.error(f"Error saving configuration to {config_path}: {e}")
        logger.info("Please check file permissions and ensure the directory is writable.")
        return False

def build_settings(conf, **overrides):
    """
    Merge the [build] table of ``conf`` with command-line overrides.

    Overrides that are None are ignored. Missing keys fall back to DEFAULTS.
    """
    settings = dict(DEFAULTS)
    settings.update((conf or {}).get("build", {}))
    settings.update({k: v for k, v in overrides.items() if v is not None})
    settings["version"] = validate_version(settings["version"])
    return settings

def validate_version(value):
    try:
        Version(str(value))
    except InvalidVersion:
        raise ConfigurationError(f"Invalid FFmpeg version: {value}") from None
    return str(value)

def parse_feature_list(value):
    """Accept a comma separated string or a list of names."""
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [name.strip() for name in value if name and name.strip()]
