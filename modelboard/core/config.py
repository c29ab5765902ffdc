#!/usr/bin/env python3
"""
modelboard Configuration Management

Priority (highest first):
- command line arguments, when explicitly given
- YAML config file
- MODELBOARD_* environment variables (a local .env file is loaded too)
- defaults
"""

import argparse
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger("modelboard.config")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_VARS = {
    "api_url": "MODELBOARD_API_URL",
    "session_cookie": "MODELBOARD_SESSION_COOKIE",
}


@dataclass
class DashboardConfig:
    """Dashboard configuration with defaults"""
    api_url: str = "http://localhost:3000"
    timeout: int = 10
    verify_tls: bool = True
    session_cookie: Optional[str] = None
    is_admin: bool = False
    discard_stale_fetches: bool = True
    log_level: str = "INFO"
    # Web UI
    host: str = "127.0.0.1"
    port: int = 8080

    def __post_init__(self):
        # "info" and "INFO" are the same level
        level = str(self.log_level).upper()
        if level not in LOG_LEVELS:
            logger.warning("Unknown log_level %r, using INFO", self.log_level)
            level = "INFO"
        self.log_level = level

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DashboardConfig":
        """Create config from dictionary, ignoring unknown keys"""
        known_fields = {f.name for f in fields(cls)}
        unknown = set(data) - known_fields
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
        return cls(**{k: v for k, v in data.items() if k in known_fields})

    @classmethod
    def from_file(cls, config_path: Path) -> "DashboardConfig":
        """Load configuration from YAML file, falling back to environment and defaults"""
        load_dotenv()
        data = {
            key: os.environ[env]
            for key, env in ENV_VARS.items()
            if os.environ.get(env)
        }

        if not config_path.exists():
            logger.debug("Config file not found: %s, using defaults", config_path)
            return cls.from_dict(data)

        try:
            with open(config_path, "r") as f:
                data.update(yaml.safe_load(f) or {})
            logger.debug("Loaded config from %s", config_path)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to load config from %s: %s, using defaults", config_path, e)
        return cls.from_dict(data)

    def override_with_args(self, args: argparse.Namespace) -> "DashboardConfig":
        """Override config with command line arguments if provided"""
        # Only override if explicitly provided - preserves config file values
        for name in ("api_url", "log_level", "host", "port"):
            value = getattr(args, name, None)
            if value is not None:
                setattr(self, name, value)
        if getattr(args, "admin", False):
            self.is_admin = True
        return self
