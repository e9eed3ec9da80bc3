# config.py
import os

from dotenv import load_dotenv

# Load environment variables from .env file.
load_dotenv()

_CONFIG: dict | None = None


def load_config():
    """
    Loads configuration from environment variables and returns a dictionary.
    """
    try:
        description_max_chars = int(os.getenv("DESCRIPTION_MAX_CHARS", 400))
    except ValueError:
        # Fallback to default if parsing fails
        description_max_chars = 400

    config = {
        # General Settings
        "DEBUG_MODE": os.getenv("DEBUG_MODE", "False").lower() == "true",
        "DATA_DIR": os.getenv("DATA_DIR", "data"),

        # Database Settings
        "GALL_DB_FILENAME": os.getenv("GALL_DB_FILENAME", "galls.db"),

        # Search Settings
        "DESCRIPTION_MAX_CHARS": description_max_chars,
        "MAX_SEARCH_SESSIONS": int(os.getenv("MAX_SEARCH_SESSIONS", 500)),

        # Web Settings
        "WEB_HOST": os.getenv("WEB_HOST", "0.0.0.0"),
        "WEB_PORT": int(os.getenv("WEB_PORT", 8050)),
        "FLASK_SECRET_KEY": os.getenv("FLASK_SECRET_KEY", "change-me"),
    }
    return config


def get_config() -> dict:
    """
    Returns the cached configuration, merged with runtime settings from YAML.
    """
    global _CONFIG
    if _CONFIG is None:
        from utils.settings import load_settings_yaml

        config = load_config()
        overrides = load_settings_yaml(config["DATA_DIR"])
        config.update({k: v for k, v in overrides.items() if k in config})
        _CONFIG = config
    return _CONFIG


def reset_config() -> None:
    """Drops the cached configuration so the next get_config() reloads it."""
    global _CONFIG
    _CONFIG = None


if __name__ == "__main__":
    # For testing purposes, print the configuration
    from pprint import pprint

    pprint(get_config())
