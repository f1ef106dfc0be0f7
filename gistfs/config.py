"""
Configuration management for gistfs.

Handles loading and saving user configuration from:
- XDG config directory: ~/.config/gistfs/config.json
- Fallback: ~/.gistfs/config.json

The GITHUB_TOKEN environment variable, when set, takes precedence over
the token stored in the file.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from gistfs.client import DEFAULT_API_URL, DEFAULT_TIMEOUT, GistClient

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "GITHUB_TOKEN"


@dataclass
class GitHubConfig:
    """GitHub API configuration."""
    api_url: str = DEFAULT_API_URL
    token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    def create_client(self) -> GistClient:
        """Build a GistClient from these settings."""
        return GistClient(api_url=self.api_url, token=self.token, timeout=self.timeout)


@dataclass
class ServerConfig:
    """Web server configuration."""
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class CLIConfig:
    """CLI default options."""
    verbose: bool = False
    color: bool = True
    page_size: int = 0


@dataclass
class GistFSConfig:
    """Main gistfs configuration."""
    github: GitHubConfig = field(default_factory=GitHubConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "github": asdict(self.github),
            "server": asdict(self.server),
            "cli": asdict(self.cli),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GistFSConfig':
        """Create from dictionary."""
        return cls(
            github=GitHubConfig(**data.get("github", {})),
            server=ServerConfig(**data.get("server", {})),
            cli=CLIConfig(**data.get("cli", {})),
        )


def get_config_path() -> Path:
    """
    Get configuration file path.

    Follows XDG Base Directory specification:
    1. $XDG_CONFIG_HOME/gistfs/config.json (usually ~/.config/gistfs/config.json)
    2. Fallback: ~/.gistfs/config.json

    Returns:
        Path to config file
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        config_home = Path(xdg_config_home)
    else:
        config_home = Path.home() / ".config"

    if config_home.exists():
        config_dir = config_home / "gistfs"
    else:
        config_dir = Path.home() / ".gistfs"

    return config_dir / "config.json"


def load_config(apply_env: bool = True) -> GistFSConfig:
    """
    Load configuration from file.

    Args:
        apply_env: Let GITHUB_TOKEN override the stored token. Callers that
            save the result back must pass False.

    Returns:
        GistFSConfig instance with loaded values or defaults
    """
    config_path = get_config_path()
    config = GistFSConfig()

    if config_path.exists():
        try:
            with open(config_path, 'r') as f:
                data = json.load(f)
            config = GistFSConfig.from_dict(data)
        except (json.JSONDecodeError, OSError, TypeError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            logger.warning("Using default configuration")

    env_token = os.environ.get(TOKEN_ENV_VAR)
    if apply_env and env_token:
        config.github.token = env_token

    return config


def save_config(config: GistFSConfig) -> Path:
    """
    Save configuration to file.

    Args:
        config: Configuration to save

    Returns:
        Path the configuration was written to
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)

    logger.info(f"Configuration saved to {config_path}")
    return config_path


def ensure_config_exists() -> Path:
    """
    Ensure configuration file exists, creating with defaults if not.

    Returns:
        Path to config file
    """
    config_path = get_config_path()

    if not config_path.exists():
        save_config(GistFSConfig())
        logger.info(f"Created default configuration at {config_path}")

    return config_path


def update_config(
    # GitHub settings
    github_api_url: Optional[str] = None,
    github_token: Optional[str] = None,
    github_timeout: Optional[float] = None,
    # Server settings
    server_host: Optional[str] = None,
    server_port: Optional[int] = None,
    # CLI settings
    cli_verbose: Optional[bool] = None,
    cli_color: Optional[bool] = None,
    cli_page_size: Optional[int] = None,
) -> GistFSConfig:
    """
    Update configuration.

    Only updates provided values, leaving others unchanged.
    """
    config = load_config(apply_env=False)

    if github_api_url is not None:
        config.github.api_url = github_api_url
    if github_token is not None:
        config.github.token = github_token
    if github_timeout is not None:
        config.github.timeout = github_timeout

    if server_host is not None:
        config.server.host = server_host
    if server_port is not None:
        config.server.port = server_port

    if cli_verbose is not None:
        config.cli.verbose = cli_verbose
    if cli_color is not None:
        config.cli.color = cli_color
    if cli_page_size is not None:
        config.cli.page_size = cli_page_size

    save_config(config)
    return config
