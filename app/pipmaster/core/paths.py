"""Locations of pipmaster's configuration files.

Package data is never written to disk; only user settings live under
``$XDG_CONFIG_HOME/pipmaster`` (``~/.config/pipmaster`` when unset):

- advisor.toml: AI provider settings
- theme.toml: color overrides
"""

import os
from pathlib import Path

APP_NAME = "pipmaster"


def get_config_dir() -> Path:
    """Directory holding pipmaster's config files. Not created here."""
    # An empty XDG_CONFIG_HOME counts as unset
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / APP_NAME


def get_advisor_config_path() -> Path:
    return get_config_dir() / "advisor.toml"


def get_user_theme_path() -> Path:
    return get_config_dir() / "theme.toml"
