"""Cross-platform compatibility utilities for gitglance."""

import os
import platform
from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any, Union


class PlatformType(Enum):
    """Supported platform types."""
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    UNKNOWN = "unknown"


class PlatformInfo:
    """Platform information and utilities."""

    def __init__(self):
        """Initialize platform detection."""
        self._platform_type = self._detect_platform()

    def _detect_platform(self) -> PlatformType:
        """Detect the current platform."""
        system = platform.system().lower()

        if system == "windows":
            return PlatformType.WINDOWS
        elif system == "darwin":
            return PlatformType.MACOS
        elif system == "linux":
            return PlatformType.LINUX
        else:
            return PlatformType.UNKNOWN

    @property
    def is_windows(self) -> bool:
        """Check if running on Windows."""
        return self._platform_type == PlatformType.WINDOWS


# Global platform info instance
_platform_info: Optional[PlatformInfo] = None


def get_platform_info() -> PlatformInfo:
    """Get the global platform info instance."""
    global _platform_info
    if _platform_info is None:
        _platform_info = PlatformInfo()
    return _platform_info


def normalize_path(path: Union[str, Path]) -> Path:
    """
    Normalize a path for the current platform.

    Args:
        path: Path to normalize

    Returns:
        Normalized Path object
    """
    if isinstance(path, str):
        path = Path(path)

    # Expand user home directory (~) first, then resolve to absolute path
    return path.expanduser().resolve()


def get_user_config_dir() -> Path:
    """
    Get the per-user configuration directory for gitglance.

    Windows uses %APPDATA%, everything else follows the XDG base
    directory layout with ~/.config as the fallback.
    """
    platform_info = get_platform_info()

    if platform_info.is_windows:
        appdata = os.getenv("APPDATA")
        if appdata:
            return Path(appdata) / "gitglance"
        return Path.home() / "AppData" / "Roaming" / "gitglance"

    xdg_config_home = os.getenv("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home) / "gitglance"
    return Path.home() / ".config" / "gitglance"


def get_platform_specific_defaults() -> Dict[str, Any]:
    """
    Get platform-specific configuration defaults.

    Returns:
        Dictionary of platform-specific defaults
    """
    return {
        'config_dir': get_user_config_dir(),
        'log_level': "WARNING",
        'report_clean_divergence': False
    }
