"""ConfigManager — environment profiles, layered config and log level."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from trionorm.config import DEFAULT_CONCURRENCY, DEFAULT_MAX_POINTS_PER_EQUIPMENT
from trionorm.pipeline.options import ProcessingOptions

logger = logging.getLogger(__name__)

# All known configuration keys with defaults
_CONFIG_KEYS: dict[str, dict[str, Any]] = {
    "TRIONORM_ENV": {"default": "development", "description": "Environment profile"},
    "TRIONORM_LOG_LEVEL": {"default": "INFO", "description": "Logging level"},
    "TRIONORM_STRICT_MODE": {"default": "false", "description": "Abort documents on structural parse errors"},
    "TRIONORM_MAX_POINTS": {
        "default": str(DEFAULT_MAX_POINTS_PER_EQUIPMENT),
        "description": "Point count above which a document is flagged",
    },
    "TRIONORM_SKIP_EMPTY": {"default": "true", "description": "Warn about documents without points"},
    "TRIONORM_CONCURRENCY": {
        "default": str(DEFAULT_CONCURRENCY),
        "description": "Documents processed side by side in a batch",
    },
}

_PROFILES: dict[str, dict[str, str]] = {
    "development": {
        "TRIONORM_ENV": "development",
        "TRIONORM_LOG_LEVEL": "DEBUG",
    },
    "production": {
        "TRIONORM_ENV": "production",
        "TRIONORM_LOG_LEVEL": "WARNING",
    },
    "testing": {
        "TRIONORM_ENV": "testing",
        "TRIONORM_LOG_LEVEL": "DEBUG",
        "TRIONORM_STRICT_MODE": "true",
        "TRIONORM_CONCURRENCY": "1",
    },
}

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _as_bool(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


class ConfigManager:
    """Manage trionorm configuration across environments."""

    def generate_env_template(self, project_path: str | Path) -> Path:
        """Create .env.example with all config keys.

        Returns the path to the generated file.
        """
        root = Path(project_path)
        env_path = root / ".env.example"

        lines = ["# trionorm configuration template", "# Copy to .env and fill in values", ""]
        for key, info in _CONFIG_KEYS.items():
            lines.append(f"# {info['description']}")
            lines.append(f"{key}={info['default']}")
            lines.append("")

        env_path.write_text("\n".join(lines), encoding="utf-8")
        return env_path

    def load_config(self, project_path: str | Path) -> dict[str, str]:
        """Load merged config: defaults -> profile -> config.json -> .env -> env vars.

        Returns a flat dict of configuration values.
        """
        root = Path(project_path)
        config: dict[str, str] = {}

        # 1. Defaults
        for key, info in _CONFIG_KEYS.items():
            config[key] = str(info["default"])

        # 2. Profile overrides
        env_name = os.environ.get("TRIONORM_ENV", config["TRIONORM_ENV"])
        config.update(_PROFILES.get(env_name, {}))

        # 3. .trionorm/config.json
        config_json = root / ".trionorm" / "config.json"
        if config_json.is_file():
            try:
                data = json.loads(config_json.read_text(encoding="utf-8"))
                for k, v in data.items():
                    config[k] = str(v).lower() if isinstance(v, bool) else str(v)
            except (json.JSONDecodeError, OSError, AttributeError):
                logger.debug("Could not read config.json", exc_info=True)

        # 4. .env file
        env_file = root / ".env"
        if env_file.is_file():
            try:
                for line in env_file.read_text(encoding="utf-8").splitlines():
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue
                    if "=" in line:
                        k, v = line.split("=", 1)
                        config[k.strip()] = v.strip()
            except OSError:
                logger.debug("Could not read .env", exc_info=True)

        # 5. Environment variables override all
        for key in _CONFIG_KEYS:
            env_val = os.environ.get(key)
            if env_val is not None:
                config[key] = env_val

        return config

    def processing_options(self, config: dict[str, str]) -> ProcessingOptions:
        """Build :class:`ProcessingOptions` from a loaded config.

        Raises
        ------
        ValueError
            If a numeric key does not hold a positive integer.
        """
        defaults = {key: str(info["default"]) for key, info in _CONFIG_KEYS.items()}
        merged = {**defaults, **config}
        try:
            max_points = int(merged["TRIONORM_MAX_POINTS"])
            concurrency = int(merged["TRIONORM_CONCURRENCY"])
        except ValueError as exc:
            raise ValueError(f"Invalid numeric configuration value: {exc}") from exc

        return ProcessingOptions(
            strict_mode=_as_bool(merged["TRIONORM_STRICT_MODE"]),
            max_points_per_equipment=max_points,
            skip_empty_files=_as_bool(merged["TRIONORM_SKIP_EMPTY"]),
            concurrency=concurrency,
        )

    def apply_log_level(self, config: dict[str, str]) -> int:
        """Set the level of the ``trionorm`` logger tree; returns the level used.

        Unknown level names fall back to INFO.
        """
        name = config.get("TRIONORM_LOG_LEVEL", "INFO").upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            logger.debug("Unknown log level %r, using INFO", name)
            level = logging.INFO
        logging.getLogger("trionorm").setLevel(level)
        return level
