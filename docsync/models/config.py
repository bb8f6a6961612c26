"""Configuration for the sync system."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml
from dotenv import load_dotenv

DEFAULT_CONFIG_FILENAME = "docsync.yaml"


def parse_tag_list(value: Any) -> list[str]:
    """Normalize a tag setting into a list of names.

    Accepts a comma-separated string (environment / CLI form) or a YAML list.
    Names are kept byte-for-byte; only empty segments are dropped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [name for name in value.split(",") if name]
    return [str(name) for name in value if str(name)]


@dataclass
class SyncConfig:
    """Settings for one sync run."""

    host: str = ""
    import_path: str = ""
    tags: list[str] = field(default_factory=list)
    language: str = "eng"
    username: str = "admin"
    password: str = "admin"
    timeout: float = 30.0
    page_size: int = 100

    @classmethod
    def load(cls, config_path: Path) -> "SyncConfig":
        """Load configuration from YAML file.

        Raises:
            ValueError: If the file is not valid YAML or not a mapping.
        """
        with open(config_path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid config file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Invalid config file {config_path}: expected a mapping")

        # Keys left empty in YAML load as None
        return cls(
            host=str(data.get("host") or ""),
            import_path=str(data.get("import_path") or ""),
            tags=parse_tag_list(data.get("tags")),
            language=str(data.get("language") or "eng"),
            username=str(data.get("username") or "admin"),
            password=str(data.get("password") or "admin"),
            timeout=float(data.get("timeout") or 30.0),
            page_size=int(data.get("page_size") or 100),
        )

    def save(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        data: dict[str, Any] = {
            "host": self.host,
            "import_path": self.import_path,
            "tags": list(self.tags),
            "language": self.language,
            "username": self.username,
            "password": self.password,
            "timeout": self.timeout,
            "page_size": self.page_size,
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def apply_env(self) -> None:
        """Override fields from DOCSYNC_* environment variables (and .env)."""
        load_dotenv()

        self.host = os.getenv("DOCSYNC_HOST") or self.host
        self.import_path = os.getenv("DOCSYNC_IMPORT_PATH") or self.import_path
        self.language = os.getenv("DOCSYNC_LANGUAGE") or self.language
        self.username = os.getenv("DOCSYNC_USERNAME") or self.username
        self.password = os.getenv("DOCSYNC_PASSWORD") or self.password

        env_tags = os.getenv("DOCSYNC_TAGS")
        if env_tags is not None:
            self.tags = parse_tag_list(env_tags)

        env_timeout = os.getenv("DOCSYNC_TIMEOUT")
        if env_timeout:
            try:
                self.timeout = float(env_timeout)
            except ValueError:
                raise ValueError(
                    f"Invalid DOCSYNC_TIMEOUT '{env_timeout}': must be a number of seconds"
                ) from None

    def apply_overrides(self, **overrides: Any) -> None:
        """Apply CLI overrides; ``None`` values are ignored."""
        for key, value in overrides.items():
            if value is None:
                continue
            if key == "tags":
                value = parse_tag_list(value)
            setattr(self, key, value)

    def validate(self) -> None:
        """Check required settings.

        Raises:
            ValueError: If host or import path is missing or malformed.
        """
        self.host = self.host.strip()
        if not self.host:
            raise ValueError(
                "Service host not found. Set DOCSYNC_HOST environment variable, "
                "pass --host, or add 'host' to docsync.yaml."
            )
        if not self.host.startswith(("http://", "https://")):
            raise ValueError(
                f"Invalid host '{self.host}': must start with http:// or https://"
            )
        if not urlparse(self.host).hostname:
            raise ValueError(f"Invalid host '{self.host}': URL must include a hostname")
        self.host = self.host.rstrip("/")

        if not self.import_path:
            raise ValueError(
                "Import path not found. Set DOCSYNC_IMPORT_PATH environment variable, "
                "pass --path, or add 'import_path' to docsync.yaml."
            )


def load_config(config_path: Path | None = None, **overrides: Any) -> SyncConfig:
    """Build a validated config.

    Precedence (highest to lowest): CLI overrides > environment / .env >
    YAML file > built-in defaults.

    Args:
        config_path: YAML file to read (skipped if it does not exist)
        **overrides: CLI values keyed by field name

    Returns:
        Validated SyncConfig
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_FILENAME

    config = SyncConfig.load(config_path) if config_path.exists() else SyncConfig()
    config.apply_env()
    config.apply_overrides(**overrides)
    config.validate()
    return config
