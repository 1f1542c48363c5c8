"""Configuration management for gitglance."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .platform import get_platform_specific_defaults, get_user_config_dir, normalize_path

load_dotenv()  # Load .env file if it exists


DEFAULT_DIRECTORY_FILENAME = "default_directory"


@dataclass
class Config:
    """Configuration class for gitglance with validation and defaults."""

    # Logging
    log_level: str = "WARNING"

    # Storage for the remembered default directory
    config_dir: Path = field(default_factory=get_user_config_dir)

    # Classification policy
    report_clean_divergence: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.config_dir, str):
            self.config_dir = Path(self.config_dir)
        self.config_dir = normalize_path(self.config_dir)

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_log_levels:
            raise ValueError(f"Invalid log level: {self.log_level}. Must be one of {valid_log_levels}")
        self.log_level = self.log_level.upper()

    @property
    def default_directory_file(self) -> Path:
        """File holding the stored default scan directory."""
        return self.config_dir / DEFAULT_DIRECTORY_FILENAME


class DefaultDirectoryStore:
    """
    Read/write access to the stored default scan directory.

    The store is a single-line text file that is overwritten wholesale on
    write and read wholesale on read. There is no locking.
    """

    def __init__(self, path: Path):
        self.path = path
        self.logger = logging.getLogger('gitglance.config')

    def read_default(self) -> Optional[Path]:
        """Return the stored default directory, or None if nothing is stored."""
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self.logger.debug(f"No default directory stored at {self.path}")
            return None

        value = content.strip()
        if not value:
            return None
        return Path(value)

    def write_default(self, directory: Path) -> None:
        """Store ``directory`` as the default, replacing any previous value."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(f"{directory}\n", encoding="utf-8")
        self.logger.info(f"Stored default directory {directory} in {self.path}")


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").strip().lower() in ("1", "true", "yes", "on")


def load_configuration() -> Config:
    """Load configuration from environment variables with platform-specific defaults."""
    try:
        platform_defaults = get_platform_specific_defaults()

        return Config(
            log_level=os.getenv("GITGLANCE_LOG_LEVEL", platform_defaults['log_level']).upper(),
            config_dir=Path(os.getenv("GITGLANCE_CONFIG_DIR", str(platform_defaults['config_dir']))),
            report_clean_divergence=_env_flag(
                "GITGLANCE_REPORT_CLEAN_DIVERGENCE",
                platform_defaults['report_clean_divergence']
            )
        )
    except (ValueError, TypeError) as e:
        raise ValueError(f"Configuration error: {e}")
