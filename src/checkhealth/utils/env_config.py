"""Environment configuration loader"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import dotenv_values, load_dotenv

from .paths import HealthPaths

logger = logging.getLogger(__name__)

# Default configuration values
DEFAULTS = {
    # Discovery
    'CHECKHEALTH_PATH': '',
    'CHECKHEALTH_NO_DEFAULT_ROOTS': 'false',

    # Logging
    'LOG_LEVEL': 'WARNING',
    'CHECKHEALTH_LOG_FILE': '',

    # UI settings
    'DISABLE_EMOJI': 'false',
}

TRUE_VALUES = ('1', 'true', 'yes', 'on')


def find_env_file() -> Optional[Path]:
    """Find the .env file in standard locations"""
    search_paths = [
        Path.cwd() / '.env',
        HealthPaths.user_env_file(),
    ]

    for path in search_paths:
        if path.is_file():
            return path

    return None


def load_env_file(env_path: Optional[Path] = None) -> Dict[str, str]:
    """Load environment variables from a .env file

    Variables already set in the environment win over the file.

    Args:
        env_path: Optional path to .env file. If None, auto-discovers.

    Returns:
        Dictionary of variables defined in the file
    """
    if env_path is None:
        env_path = find_env_file()

    if env_path is None or not Path(env_path).is_file():
        return {}

    values = {k: v for k, v in dotenv_values(env_path).items() if v is not None}
    load_dotenv(env_path, override=False)
    logger.debug(f"Loaded {len(values)} setting(s) from {env_path}")
    return values


def get_config(key: str, default: Optional[str] = None) -> str:
    """Get configuration value from environment or defaults

    Priority:
    1. Environment variable
    2. Provided default
    3. Built-in default
    """
    return os.environ.get(key, default if default is not None else DEFAULTS.get(key, ''))


def get_config_bool(key: str, default: bool = False) -> bool:
    """Get boolean configuration value"""
    value = os.environ.get(key)
    if value is None:
        value = DEFAULTS.get(key)
    if value is None or value == '':
        return default
    return value.strip().lower() in TRUE_VALUES


def get_search_path(extra_roots: Optional[List[str]] = None,
                    include_defaults: Optional[bool] = None) -> List[str]:
    """
    Build the ordered list of search roots.

    Order: explicit roots (e.g. from the command line), then
    CHECKHEALTH_PATH entries, then the user and system defaults.
    Duplicates keep their first position.

    Args:
        extra_roots: Roots that take priority over everything else
        include_defaults: Override CHECKHEALTH_NO_DEFAULT_ROOTS

    Returns:
        List of root directory strings (not necessarily existing)
    """
    roots: List[str] = []
    roots.extend(extra_roots or [])
    roots.extend(p for p in get_config('CHECKHEALTH_PATH').split(os.pathsep) if p.strip())

    if include_defaults is None:
        include_defaults = not get_config_bool('CHECKHEALTH_NO_DEFAULT_ROOTS')
    if include_defaults:
        roots.extend(str(p) for p in HealthPaths.default_roots())

    unique: List[str] = []
    for root in roots:
        expanded = os.path.expanduser(root.strip())
        if expanded and expanded not in unique:
            unique.append(expanded)
    return unique
