"""Compiler settings backed by an optional YAML file."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Mapping

import yaml

from accentforge.errors import AccentForgeError, ErrorCode
from accentforge.themes.constants import COMPONENT_NAMES, DEFAULT_PACKAGE_PREFIX, DEFAULT_THEME_NAME

_PACKAGE_PREFIX_RE = re.compile(r"^[a-z][a-z0-9_]*(?:\.[a-z][a-z0-9_]*)+$")
_KNOWN_KEYS = {
    "default_theme_name",
    "package_prefix",
    "default_components",
    "recipes_dir",
    "output_dir",
    "log_dir",
}


class CompilerSettings:
    """Explicit configuration object, built once at startup and passed around."""

    def __init__(self, values: Mapping[str, Any] | None = None, path: Path | None = None) -> None:
        self._path = path
        self._values: dict[str, Any] = {}
        for key, value in (values or {}).items():
            if key not in _KNOWN_KEYS:
                raise AccentForgeError(
                    ErrorCode.CONFIG_INVALID,
                    message=f"Unknown settings key: {key!r}",
                    details={"path": str(path) if path else "-"},
                )
            setattr(self, key, value)

    @classmethod
    def load(cls, path: Path | None = None) -> CompilerSettings:
        """Load settings from ``path`` (default: the app data config file)."""
        config_path = path or cls.default_config_path()
        if not config_path.exists():
            return cls(path=config_path)
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise AccentForgeError(
                ErrorCode.CONFIG_INVALID,
                message=f"Could not read settings file {config_path}: {exc}",
            ) from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise AccentForgeError(
                ErrorCode.CONFIG_INVALID,
                message=f"Expected a mapping in settings file {config_path}",
            )
        return cls(data, path=config_path)

    @property
    def path(self) -> Path | None:
        return self._path

    def save(self, path: Path | None = None) -> Path:
        """Write the current settings as YAML and return the file path."""
        target = path or self._path or self.default_config_path()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(yaml.dump(self.to_dict(), default_flow_style=False), encoding="utf-8")
        self._path = target
        return target

    def to_dict(self) -> dict[str, Any]:
        return {
            "default_theme_name": self.default_theme_name,
            "package_prefix": self.package_prefix,
            "default_components": list(self.default_components),
            "recipes_dir": str(self.recipes_dir),
            "output_dir": str(self.output_dir),
            "log_dir": str(self.log_dir),
        }

    # -- naming --

    @property
    def default_theme_name(self) -> str:
        return self._values.get("default_theme_name", DEFAULT_THEME_NAME)

    @default_theme_name.setter
    def default_theme_name(self, value: str) -> None:
        cleaned = (value or "").strip() if isinstance(value, str) else ""
        self._values["default_theme_name"] = cleaned or DEFAULT_THEME_NAME

    @property
    def package_prefix(self) -> str:
        return self._values.get("package_prefix", DEFAULT_PACKAGE_PREFIX)

    @package_prefix.setter
    def package_prefix(self, value: str) -> None:
        cleaned = (value or "").strip().lower() if isinstance(value, str) else ""
        if not _PACKAGE_PREFIX_RE.match(cleaned):
            cleaned = DEFAULT_PACKAGE_PREFIX
        self._values["package_prefix"] = cleaned

    # -- components --

    @property
    def default_components(self) -> tuple[str, ...]:
        return self._values.get("default_components", ())

    @default_components.setter
    def default_components(self, value: Any) -> None:
        if isinstance(value, Mapping):
            names = [key for key, enabled in value.items() if enabled]
        elif isinstance(value, (list, tuple)):
            names = list(value)
        else:
            names = []
        self._values["default_components"] = tuple(
            name for name in COMPONENT_NAMES if name in names
        )

    # -- directories --

    @property
    def recipes_dir(self) -> Path:
        return self._values.get("recipes_dir", self.app_data_dir() / "recipes")

    @recipes_dir.setter
    def recipes_dir(self, value: str | Path) -> None:
        self._values["recipes_dir"] = _clean_path(value, self.app_data_dir() / "recipes")

    @property
    def output_dir(self) -> Path:
        return self._values.get("output_dir", self.app_data_dir() / "themes")

    @output_dir.setter
    def output_dir(self, value: str | Path) -> None:
        self._values["output_dir"] = _clean_path(value, self.app_data_dir() / "themes")

    @property
    def log_dir(self) -> Path:
        return self._values.get("log_dir", self.app_data_dir() / "logs")

    @log_dir.setter
    def log_dir(self, value: str | Path) -> None:
        self._values["log_dir"] = _clean_path(value, self.app_data_dir() / "logs")

    # -- helpers --

    @classmethod
    def default_config_path(cls) -> Path:
        return cls.app_data_dir() / "settings.yaml"

    @staticmethod
    def app_data_dir() -> Path:
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "accentforge"


def _clean_path(value: str | Path, default: Path) -> Path:
    if isinstance(value, Path):
        return value
    cleaned = (value or "").strip() if isinstance(value, str) else ""
    return Path(cleaned).expanduser() if cleaned else default
