"""
Settings for AssetNav.

Settings are read from a JSON file and merged over built-in defaults:
- Windows: %APPDATA%\\AssetNav\\settings.json
- Elsewhere: ~/.config/assetnav/settings.json

Environment variables take precedence over the file:
- ASSETNAV_SETTINGS: alternate settings file
- ASSETNAV_ROOT: asset root directory
- ASSETNAV_PROJECTS: project registry JSON file
"""

import os
import json
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

ENV_SETTINGS = "ASSETNAV_SETTINGS"
ENV_ROOT = "ASSETNAV_ROOT"
ENV_PROJECTS = "ASSETNAV_PROJECTS"


def default_settings() -> Dict[str, Any]:
    return {
        "asset_root": os.path.join(os.getcwd(), "public", "assets"),
        "files_subdir": "files",
        "public_prefix": "/assets",
        "sidebar_depth": 3,
        "sidebar_exclude": ["RFI"],
        "project_registry": None,
    }


def get_default_settings_path() -> str:
    """Get the default settings file path."""
    if os.name == 'nt':
        config_dir = os.path.join(os.environ.get('APPDATA', ''), 'AssetNav')
    else:
        config_dir = os.path.join(os.path.expanduser('~'), '.config', 'assetnav')
    return os.path.join(config_dir, 'settings.json')


def _merge_settings(defaults: Dict[str, Any], loaded: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge loaded settings with defaults."""
    result = defaults.copy()
    for key, value in loaded.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_settings(result[key], value)
        else:
            result[key] = value
    return result


class Settings:
    """Resolved AssetNav settings."""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self.values = _merge_settings(default_settings(), values or {})
        self._validate()

    def _validate(self):
        """Replace invalid values with defaults."""
        defaults = default_settings()

        depth = self.values.get("sidebar_depth")
        if not isinstance(depth, int) or isinstance(depth, bool) or depth < 0:
            logger.warning(f"Invalid sidebar_depth {depth!r}, using {defaults['sidebar_depth']}")
            self.values["sidebar_depth"] = defaults["sidebar_depth"]

        exclude = self.values.get("sidebar_exclude")
        if not isinstance(exclude, list):
            self.values["sidebar_exclude"] = defaults["sidebar_exclude"]
        else:
            self.values["sidebar_exclude"] = [str(t) for t in exclude if str(t).strip()]

        prefix = self.values.get("public_prefix")
        if not isinstance(prefix, str) or not prefix.startswith("/"):
            self.values["public_prefix"] = defaults["public_prefix"]

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    @property
    def asset_root(self) -> str:
        return os.path.expandvars(os.path.expanduser(self.values["asset_root"]))

    @property
    def files_root(self) -> str:
        return os.path.join(self.asset_root, self.values["files_subdir"])

    @property
    def public_prefix(self) -> str:
        return self.values["public_prefix"].rstrip("/") or "/assets"

    @property
    def sidebar_depth(self) -> int:
        return self.values["sidebar_depth"]

    @property
    def sidebar_exclude(self) -> List[str]:
        return list(self.values["sidebar_exclude"])

    @property
    def project_registry(self) -> Optional[str]:
        return self.values.get("project_registry")


def load_settings(settings_path: Optional[str] = None, root: Optional[str] = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        settings_path: Settings file to read instead of the default location
        root: Asset root that overrides both file and environment

    Returns:
        Settings; a missing or unreadable file leaves the defaults in place
    """
    path = settings_path or os.environ.get(ENV_SETTINGS) or get_default_settings_path()
    loaded: Dict[str, Any] = {}

    try:
        if os.path.exists(path):
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if isinstance(data, dict):
                loaded = data
                logger.info(f"Settings loaded from {path}")
            else:
                logger.warning(f"Ignoring settings file {path}: not a JSON object")
        else:
            logger.debug("No settings file found, using defaults")
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load settings from {path}: {e}")

    env_root = os.environ.get(ENV_ROOT)
    if env_root:
        loaded["asset_root"] = env_root
    env_projects = os.environ.get(ENV_PROJECTS)
    if env_projects:
        loaded["project_registry"] = env_projects
    if root:
        loaded["asset_root"] = root

    return Settings(loaded)
