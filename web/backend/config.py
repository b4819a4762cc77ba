#!/usr/bin/env python3
"""
Configuration management for the web application.
"""

import os
from pathlib import Path
from functools import lru_cache

from jobmatch.config_loader import AppConfig, load_config


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent


@lru_cache()
def get_config() -> AppConfig:
    """
    Load configuration once per process.

    Reads CONFIG_PATH (default: config.yaml in the project root) with
    environment overrides applied.
    """
    config_path = os.environ.get("CONFIG_PATH", str(get_project_root() / 'config.yaml'))
    return load_config(config_path)
