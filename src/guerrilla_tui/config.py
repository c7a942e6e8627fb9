# =============================================================================
# Configuration Management
# =============================================================================
# Handles loading, saving, and validating guerrilla-tui configuration.
#
# XDG Base Directory Compliance (https://specifications.freedesktop.org/basedir-spec/):
#   - Config:  $XDG_CONFIG_HOME/guerrilla-tui/  (default: ~/.config/guerrilla-tui/)
#
# Files:
#   - config.toml: User preferences (polling, rendering, mail domains)
#
# Every setting has a default, so the file is optional. Command-line flags
# override whatever the file says.
# =============================================================================

import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w  # For writing TOML (tomllib is read-only)

from guerrilla_tui.mail.client import DEFAULT_API_URL
from guerrilla_tui.output.printer import DEFAULT_TIME_FORMAT
from guerrilla_tui.rendering.html import ConversionOptions


# =============================================================================
# XDG Directory Management
# =============================================================================

# Application identifier used in all XDG paths
APP_NAME = "guerrilla-tui"


def get_xdg_config_home() -> Path:
    """
    Returns the XDG config directory for guerrilla-tui.

    Respects $XDG_CONFIG_HOME if set, otherwise uses ~/.config/guerrilla-tui/
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base = Path(xdg_config)
    else:
        base = Path.home() / ".config"
    return base / APP_NAME


# =============================================================================
# Configuration Data Structures
# =============================================================================

# Domains that deliver to every Guerrilla Mail inbox. The local part of the
# session address works with any of them.
SHARED_DOMAINS = [
    "@guerrillamailblock.com",
    "@sharklasers.com",
    "@guerrillamail.info",
    "@grr.la",
    "@guerrillamail.biz",
    "@guerrillamail.com",
    "@guerrillamail.de",
    "@guerrillamail.net",
    "@guerrillamail.org",
    "@pokemail.net",
    "@spam4.me",
]

POLL_INTERVAL_MIN = 1
POLL_INTERVAL_MAX = 600


@dataclass
class GeneralConfig:
    """
    General behaviour.

    Attributes:
        poll_interval: Seconds between inbox checks (1-600). Low values are
                       not recommended because of API rate limits.
        show_welcome: Show the service's welcome email instead of filtering it.
    """
    poll_interval: int = 3
    show_welcome: bool = False


@dataclass
class RenderingConfig:
    """
    Configuration for message rendering.

    Attributes:
        show_link_urls: Print link targets after link text in HTML bodies.
        use_list_bullets: Prefix HTML list items with a bullet.
        table_separator: Text placed between HTML table cells.
        time_format: strftime format for message timestamps.
    """
    show_link_urls: bool = True
    use_list_bullets: bool = True
    table_separator: str = "\t"
    time_format: str = DEFAULT_TIME_FORMAT

    def conversion_options(self) -> ConversionOptions:
        """The HTML conversion options these settings describe."""
        return ConversionOptions(
            show_link_urls=self.show_link_urls,
            use_list_bullets=self.use_list_bullets,
            table_separator=self.table_separator,
        )


@dataclass
class MailConfig:
    """
    Configuration for the mail service.

    Attributes:
        api_url: Guerrilla Mail API endpoint.
        domains: "@domain" suffixes combined with the session's local part to
                 list every address that reaches the inbox.
    """
    api_url: str = DEFAULT_API_URL
    domains: list[str] = field(default_factory=lambda: list(SHARED_DOMAINS))


@dataclass
class Config:
    """
    Main configuration container for guerrilla-tui.

    Usage:
        >>> config = Config.load()
        >>> config.general.poll_interval
        3
    """
    general: GeneralConfig = field(default_factory=GeneralConfig)
    rendering: RenderingConfig = field(default_factory=RenderingConfig)
    mail: MailConfig = field(default_factory=MailConfig)

    # -------------------------------------------------------------------------
    # File Paths
    # -------------------------------------------------------------------------

    @staticmethod
    def config_file_path() -> Path:
        """Returns the path to the main config file."""
        return get_xdg_config_home() / "config.toml"

    # -------------------------------------------------------------------------
    # Loading and Saving
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load configuration from a config file.

        If the file doesn't exist, returns default configuration.

        Args:
            path: File to read. Defaults to the XDG config file.

        Returns:
            Loaded Config object. Call validate() before using it.

        Raises:
            ConfigError: If the config file exists but is invalid.
        """
        config_path = path or cls.config_file_path()

        if not config_path.exists():
            # No config file yet - return defaults
            return cls()

        # Load and parse the TOML file
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

        return cls._from_dict(data)

    def save(self, path: Path | None = None) -> Path:
        """
        Save configuration to a config file.

        Creates the parent directory if it doesn't exist.

        Returns:
            The path written.
        """
        config_path = path or self.config_file_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(self._to_dict(), f)

        return config_path

    def validate(self) -> None:
        """
        Check that every setting is in range.

        Raises:
            ConfigError: Describing the first invalid setting.
        """
        interval = self.general.poll_interval
        if (
            isinstance(interval, bool)
            or not isinstance(interval, int)
            or not POLL_INTERVAL_MIN <= interval <= POLL_INTERVAL_MAX
        ):
            raise ConfigError(
                f"poll-interval must be between {POLL_INTERVAL_MIN}-{POLL_INTERVAL_MAX}"
            )

        if not isinstance(self.general.show_welcome, bool):
            raise ConfigError("show_welcome must be true or false")

        rendering = self.rendering
        for name in ("show_link_urls", "use_list_bullets"):
            if not isinstance(getattr(rendering, name), bool):
                raise ConfigError(f"{name} must be true or false")

        if not isinstance(rendering.table_separator, str):
            raise ConfigError("table_separator must be a string")

        if not isinstance(rendering.time_format, str):
            raise ConfigError("time_format must be a string")

        if not isinstance(self.mail.api_url, str) or not self.mail.api_url:
            raise ConfigError("api_url must be a non-empty string")

        for domain in self.mail.domains:
            if not isinstance(domain, str) or not domain.startswith("@"):
                raise ConfigError(f"Invalid domain {domain!r}: domains must start with '@'")

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """
        Create a Config object from a dictionary (parsed TOML).
        """
        config = cls()

        # General settings
        general = data.get("general", {})
        config.general = GeneralConfig(
            poll_interval=general.get("poll_interval", 3),
            show_welcome=general.get("show_welcome", False),
        )

        # Rendering settings
        rendering = data.get("rendering", {})
        config.rendering = RenderingConfig(
            show_link_urls=rendering.get("show_link_urls", True),
            use_list_bullets=rendering.get("use_list_bullets", True),
            table_separator=rendering.get("table_separator", "\t"),
            time_format=rendering.get("time_format", DEFAULT_TIME_FORMAT),
        )

        # Mail settings
        mail = data.get("mail", {})
        config.mail = MailConfig(
            api_url=mail.get("api_url", DEFAULT_API_URL),
            domains=list(mail.get("domains", SHARED_DOMAINS)),
        )

        return config

    def _to_dict(self) -> dict[str, Any]:
        """
        Convert Config to a dictionary for TOML serialization.
        """
        return {
            "general": {
                "poll_interval": self.general.poll_interval,
                "show_welcome": self.general.show_welcome,
            },
            "rendering": {
                "show_link_urls": self.rendering.show_link_urls,
                "use_list_bullets": self.rendering.use_list_bullets,
                "table_separator": self.rendering.table_separator,
                "time_format": self.rendering.time_format,
            },
            "mail": {
                "api_url": self.mail.api_url,
                "domains": list(self.mail.domains),
            },
        }


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(Exception):
    """Raised when there's an error loading, parsing or validating configuration."""
    pass


# =============================================================================
# Utility Functions
# =============================================================================

def print_paths() -> None:
    """
    Print the configuration paths.
    Useful for users wondering where their config is stored.
    """
    print(f"Config:       {get_xdg_config_home()}")
    print(f"Config file:  {Config.config_file_path()}")
