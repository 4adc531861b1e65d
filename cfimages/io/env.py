"""
Helpers for loading Cloudflare Images environment configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

CFIMAGES_ENV_FILENAME = "cfimages.env"


def default_env_path() -> Path:
    return Path.home() / CFIMAGES_ENV_FILENAME


def load_env(path: Optional[Union[str, Path]] = None) -> bool:
    """
    Load variables from ``path`` (or ``cfimages.env`` in cwd, then the home
    directory) into ``os.environ`` without overriding values already set.
    """
    if path is not None:
        return load_dotenv(path)
    local_loaded = load_dotenv(CFIMAGES_ENV_FILENAME)
    home_loaded = load_dotenv(default_env_path())
    return local_loaded or home_loaded
