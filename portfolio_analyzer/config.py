"""Configuration utilities for the portfolio analyzer CLI."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse

try:
    import tomllib as tomli  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for older runtimes
    import tomli  # type: ignore[no-redef]
from pydantic import BaseModel, ValidationError, field_validator
from tomli_w import dump as toml_dump

from .constants import API_DEFAULTS, DEFAULT_PROFILE_HOSTS, RETRY_CONFIG
from .utils import validate_url

CONFIG_DIR = Path.home() / ".config" / "portfolio_analyzer"
CONFIG_FILE = CONFIG_DIR / "config.toml"
CONFIG_VERSION = "1.0.0"


class ServerConfig(BaseModel):
    """Endpoints of the GitHub deployment being analysed."""

    api_url: str = "https://api.github.com"
    web_url: str = "https://github.com"
    custom_hosts: list[str] = []

    @field_validator("api_url", "web_url")
    @classmethod
    def validate_http_url(cls, v: str, info) -> str:
        """Validate that URLs use http(s)."""
        validate_url(v, info.field_name)
        return v

    @property
    def profile_hosts(self) -> tuple[str, ...]:
        """Host markers recognised in profile URLs.

        ``github.com`` always counts, followed by the host of ``web_url``
        and any ``custom_hosts``.
        """
        hosts = list(DEFAULT_PROFILE_HOSTS)
        for host in (urlparse(self.web_url).netloc, *self.custom_hosts):
            if host and host not in hosts:
                hosts.append(host)
        return tuple(hosts)


class APIConfig(BaseModel):
    """Configuration for API requests."""

    timeout: int = API_DEFAULTS['timeout']
    max_retries: int = RETRY_CONFIG['max_retries']
    per_page: int = API_DEFAULTS['per_page']
    enable_cache: bool = True
    cache_expire_after: int = API_DEFAULTS['cache_expire_seconds']

    @field_validator("timeout", "per_page", "cache_expire_after")
    @classmethod
    def validate_positive(cls, v: int, info) -> int:
        """Validate that numeric fields are positive."""
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive, got {v}")
        return v

    @field_validator("max_retries")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"max_retries cannot be negative, got {v}")
        return v

    @field_validator("per_page")
    @classmethod
    def validate_single_page(cls, v: int) -> int:
        """GitHub caps a single page at 100 items."""
        if v > 100:
            raise ValueError(f"per_page cannot exceed 100, got {v}")
        return v


@dataclass(slots=True)
class Config:
    """Top-level configuration container."""

    version: str = CONFIG_VERSION
    server: ServerConfig = field(default_factory=ServerConfig)
    api: APIConfig = field(default_factory=APIConfig)

    def _sections(self) -> Dict[str, BaseModel]:
        return {"server": self.server, "api": self.api}

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration data from disk.

        Args:
            path: Optional override for the configuration file path.

        Returns:
            Config: The loaded configuration object, or defaults when the
            file does not exist.

        Raises:
            ValueError: If configuration file is corrupted or invalid.
        """

        path = path or CONFIG_FILE
        if not path.exists():
            return cls()

        try:
            with path.open("rb") as handle:
                raw: Dict[str, Any] = tomli.load(handle)
        except (OSError, tomli.TOMLDecodeError) as exc:
            raise ValueError(f"Failed to parse configuration file: {exc}") from exc

        version = raw.get("version", CONFIG_VERSION)

        try:
            server = ServerConfig(**raw.get("server", {}))
            api = APIConfig(**raw.get("api", {}))
        except ValidationError as exc:
            raise ValueError(f"Invalid configuration: {exc}") from exc

        return cls(version=version, server=server, api=api)

    def dump(self, path: Optional[Path] = None, backup: bool = True) -> None:
        """Persist the configuration to disk.

        Args:
            path: Path to save the configuration file.
            backup: If True and config file exists, create a backup before overwriting.
        """

        path = path or CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)

        if backup and path.exists():
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            backup_path = path.parent / f"{path.stem}.{timestamp}.bak"
            shutil.copy2(path, backup_path)

        payload: Dict[str, Any] = {"version": self.version}
        payload.update({name: section.model_dump() for name, section in self._sections().items()})

        with path.open("wb") as handle:
            toml_dump(payload, handle)

    def to_display_dict(self) -> Dict[str, Any]:
        """Return a serialisable representation for display purposes."""

        return {name: section.model_dump() for name, section in self._sections().items()}

    def _resolve(self, key: str) -> tuple[BaseModel, str]:
        parts = key.split(".")
        if len(parts) != 2:
            raise ValueError(f"Invalid key format '{key}'. Expected format: section.field")

        section, field_name = parts
        sections = self._sections()

        if section not in sections:
            valid_sections = ", ".join(sections.keys())
            raise ValueError(f"Invalid section '{section}'. Valid sections: {valid_sections}")

        config_obj = sections[section]
        if field_name not in type(config_obj).model_fields:
            valid_fields = ", ".join(type(config_obj).model_fields.keys())
            raise ValueError(f"Invalid field '{field_name}' for section '{section}'. Valid fields: {valid_fields}")

        return config_obj, field_name

    def set_value(self, key: str, value: str) -> None:
        """Set a configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., 'api.timeout')
            value: Value to set (converted to the field's type)

        Raises:
            ValueError: If key is invalid or value cannot be converted
        """
        config_obj, field_name = self._resolve(key)
        field_type = type(config_obj).model_fields[field_name].annotation

        try:
            if field_type is int:
                converted_value: Any = int(value)
            elif field_type is bool:
                converted_value = value.lower() in ("true", "1", "yes", "on")
            elif field_type == list[str]:
                converted_value = [item.strip() for item in value.split(",") if item.strip()]
            else:
                converted_value = value
        except (ValueError, TypeError) as exc:
            raise ValueError(f"Cannot convert '{value}' to {field_type} for {key}") from exc

        current_data = config_obj.model_dump()
        current_data[field_name] = converted_value
        try:
            validated_model = type(config_obj).model_validate(current_data)
        except ValidationError as exc:
            error_msg = "; ".join(
                f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in exc.errors()
            )
            raise ValueError(f"Validation error for {key}: {error_msg}") from exc

        for name in type(validated_model).model_fields:
            setattr(config_obj, name, getattr(validated_model, name))

    def get_value(self, key: str) -> Any:
        """Get a configuration value using dot notation.

        Raises:
            ValueError: If key is invalid
        """
        config_obj, field_name = self._resolve(key)
        return getattr(config_obj, field_name)
