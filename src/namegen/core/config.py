"""Configuration management for namegen."""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

import yaml

from namegen.core.logging import get_logger

logger = get_logger("namegen.config")

OPENROUTER_ENDPOINT = "https://openrouter.ai/api/v1"

_NUMERIC_SETTINGS = {
    "timeout": float,
    "max_retries": int,
    "temperature": float,
    "max_tokens": int,
}


class Config:
    """Configuration manager with hierarchy: CLI args > project config > user config > env > defaults."""

    def __init__(self):
        """Initialize configuration with default values."""
        self.provider: str = "openrouter"
        self.api_key: Optional[str] = None
        self.base_url: Optional[str] = None
        self.ollama_base_url: Optional[str] = None
        self.timeout: float = 30.0
        self.max_retries: int = 1
        self.temperature: float = 0.8
        self.max_tokens: int = 1000
        self.site_url: str = "http://localhost:3000"
        self.app_title: str = "Random Name Finder"
        self.catalog_file: Optional[str] = None
        self.favorites_file: Optional[str] = None
        self.log_level: str = "INFO"
        self.json_logs: bool = False

    @classmethod
    def load(
        cls,
        cli_args: Optional[dict[str, Any]] = None,
        config_file: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Config":
        """
        Load configuration from every source in precedence order.

        Args:
            cli_args: Dictionary of CLI arguments to override config
            config_file: Explicit config file, applied after the project config
            environ: Environment mapping (defaults to os.environ)

        Returns:
            Config instance with loaded values
        """
        config = cls()
        config._load_env(os.environ if environ is None else environ)

        # Load user config (~/.namegen/config.yaml)
        user_config_path = Path.home() / ".namegen" / "config.yaml"
        if user_config_path.exists():
            config._load_file(user_config_path)

        # Load project config (.namegen.yaml in current directory)
        project_config_path = Path.cwd() / ".namegen.yaml"
        if project_config_path.exists():
            config._load_file(project_config_path)

        if config_file is not None:
            config._load_file(Path(config_file))

        if cli_args:
            for key, value in cli_args.items():
                if value is not None and hasattr(config, key):
                    setattr(config, key, value)

        config._check_numbers()
        config.max_retries = max(0, min(config.max_retries, 1))
        return config

    def _check_numbers(self) -> None:
        """Reset numeric settings that do not parse to their defaults."""
        defaults = Config()
        for key, cast in _NUMERIC_SETTINGS.items():
            value = getattr(self, key)
            try:
                if isinstance(value, bool):
                    raise ValueError(f"expected a number, got {value!r}")
                setattr(self, key, cast(value))
            except (TypeError, ValueError):
                fallback = getattr(defaults, key)
                logger.warning(
                    f"Invalid value for {key}: {value!r}; using {fallback}",
                    context={"setting": key},
                )
                setattr(self, key, fallback)

    def _load_env(self, environ: Mapping[str, str]) -> None:
        if environ.get("OPENROUTER_API_KEY"):
            self.api_key = environ["OPENROUTER_API_KEY"]
        if environ.get("OPENROUTER_API_BASE"):
            self.base_url = environ["OPENROUTER_API_BASE"]
        if environ.get("OLLAMA_BASE_URL"):
            self.ollama_base_url = environ["OLLAMA_BASE_URL"]
        if environ.get("NAMEGEN_SITE_URL"):
            self.site_url = environ["NAMEGEN_SITE_URL"]

    def _load_file(self, config_path: Path) -> None:
        """Load configuration from a YAML or JSON file."""
        try:
            content = config_path.read_text(encoding="utf-8")
            if config_path.suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(content)
            elif config_path.suffix == ".json":
                data = json.loads(content)
            else:
                logger.warning(
                    f"Skipping config file with unknown format: {config_path}",
                    context={"path": str(config_path)},
                )
                return
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            logger.warning(
                f"Could not read config file {config_path}: {e}",
                context={"path": str(config_path)},
            )
            return

        if not isinstance(data, dict):
            return

        for key, value in data.items():
            if hasattr(self, key) and value is not None:
                setattr(self, key, value)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "provider": self.provider,
            "api_key": self.api_key,
            "base_url": self.base_url,
            "ollama_base_url": self.ollama_base_url,
            "timeout": self.timeout,
            "max_retries": self.max_retries,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "site_url": self.site_url,
            "app_title": self.app_title,
            "catalog_file": self.catalog_file,
            "favorites_file": self.favorites_file,
            "log_level": self.log_level,
            "json_logs": self.json_logs,
        }

    def save(self, path: Path, format: str = "yaml") -> None:
        """
        Save configuration to file.

        Args:
            path: Path to save config file
            format: Format to save as ('yaml' or 'json')
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        # API keys never go to disk
        data = {k: v for k, v in self.to_dict().items() if v is not None and k != "api_key"}

        if format == "yaml":
            content = yaml.dump(data, default_flow_style=False, sort_keys=False)
        else:
            content = json.dumps(data, indent=2)

        path.write_text(content, encoding="utf-8")

    def get_favorites_path(self) -> Path:
        """Get saved-names file path, creating its directory if needed."""
        if self.favorites_file:
            path = Path(self.favorites_file)
        else:
            path = Path.home() / ".namegen" / "saved_names.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def get_catalog_path(self) -> Optional[Path]:
        """Get the tool catalog path, falling back to ./tools.yaml when present."""
        if self.catalog_file:
            return Path(self.catalog_file)
        default = Path.cwd() / "tools.yaml"
        return default if default.exists() else None
