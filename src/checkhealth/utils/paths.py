"""
checkhealth Path Constants

Default search roots for health modules.

IMPORTANT: Always use get_real_user_home() instead of Path.home() when
the path should be in the user's home directory. When checkhealth is run
with sudo, Path.home() returns /root, but the user's health modules live
under /home/<actual_user>.
"""

from pathlib import Path
from typing import List
import os


def get_real_user_home() -> Path:
    """
    Get the real user's home directory, even when running as root via sudo.

    Returns:
        Path to the real user's home directory
    """
    sudo_user = os.environ.get('SUDO_USER')
    if sudo_user and sudo_user != 'root':
        return Path(f'/home/{sudo_user}')

    return Path.home()


class HealthPaths:
    """Well-known checkhealth directories"""

    SYSTEM_ROOT = Path('/usr/share/checkhealth')

    @classmethod
    def user_root(cls) -> Path:
        """Per-user search root (~/.config/checkhealth)"""
        return get_real_user_home() / '.config' / 'checkhealth'

    @classmethod
    def user_env_file(cls) -> Path:
        return cls.user_root() / '.env'

    @classmethod
    def default_roots(cls) -> List[Path]:
        """Default search roots, highest priority first"""
        return [cls.user_root(), cls.SYSTEM_ROOT]
