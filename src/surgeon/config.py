"""Engine configuration loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from surgeon.lib import oj

logger = logging.getLogger(__name__)

# Config file locations
CONFIG_FILENAME = "config.json"
GLOBAL_CONFIG = Path.home() / ".surgeon" / CONFIG_FILENAME
LOCAL_CONFIG_DIR = ".surgeon"

DEFAULT_ABOUT_TEXT = (
    "surgeon: a refactoring engine driven by editor commands.\n"
    "Commands: open, about, setdir, list, params, xrun."
)


@dataclass
class SurgeonConfig:
    """Settings shared by every session in a process."""

    about_text: str = DEFAULT_ABOUT_TEXT
    """Text returned by the about command."""

    diff_suffix: str = ".diff"
    """Suffix appended to a source path to name its patch file."""

    log_level: str = "WARNING"
    """Level for the stderr log handler installed by the CLI."""

    # Wire keys are camelCase, as in protocol replies
    _KEYS = {
        "aboutText": "about_text",
        "diffSuffix": "diff_suffix",
        "logLevel": "log_level",
    }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SurgeonConfig":
        """Create from config dict, ignoring unknown keys."""
        config = cls()
        config.update(data)
        return config

    def update(self, data: dict[str, Any]) -> None:
        """Override settings with the recognised keys in ``data``."""
        known = {f.name for f in fields(self)}
        for key, value in data.items():
            attr = self._KEYS.get(key, key)
            if attr not in known:
                logger.warning(f"Ignoring unknown config key: {key}")
                continue
            if not isinstance(value, str):
                logger.warning(f"Ignoring non-string value for config key {key}")
                continue
            setattr(self, attr, value)

    def to_dict(self) -> dict[str, Any]:
        """Convert to config file format."""
        return {key: getattr(self, attr) for key, attr in self._KEYS.items()}


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        data = oj.loads(path.read_bytes())
    except (OSError, ValueError) as e:
        logger.warning(f"Skipping unreadable config file {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Skipping config file {path}: top level must be an object")
        return {}
    return data


def load_config(working_dir: Path | None = None, global_config: Path | None = None) -> SurgeonConfig:
    """Load settings from global and local config files.

    Global config (~/.surgeon/config.json) is loaded first.
    Local config ({working_dir}/.surgeon/config.json) overrides global.

    Returns:
        The merged configuration.
    """
    config = SurgeonConfig()

    global_path = global_config or GLOBAL_CONFIG
    if global_path.exists():
        config.update(_read_config_file(global_path))

    # Local config overrides global
    if working_dir:
        local_path = working_dir / LOCAL_CONFIG_DIR / CONFIG_FILENAME
        if local_path.exists():
            config.update(_read_config_file(local_path))

    return config
