"""Configuration loading for boxsh."""

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from boxsh.errors import ConfigError
from boxsh.models import BoxshConfig

log = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".boxsh"
CONFIG_FILE = CONFIG_DIR / "config.json"


def config_path() -> Path:
    """Return the config file path, honoring BOXSH_CONFIG."""
    override = os.environ.get("BOXSH_CONFIG", "").strip()
    if override:
        return Path(override).expanduser()
    return CONFIG_FILE


def load_config(path: Path | None = None) -> BoxshConfig:
    """Load configuration from disk, falling back to defaults.

    BOXSH_SANDBOX_TOOL overrides the configured sandbox tool.

    Raises:
        ConfigError: the file exists but can't be read or isn't valid.
    """
    if path is None:
        path = config_path()

    data: dict = {}
    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"cannot read {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a JSON object")
        log.debug("loaded config from %s", path)
    else:
        log.debug("no config at %s, using defaults", path)

    tool = os.environ.get("BOXSH_SANDBOX_TOOL", "").strip()
    if tool:
        data = {**data, "sandbox_tool": tool}

    try:
        return BoxshConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid config in {path}: {e}") from e
