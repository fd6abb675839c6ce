from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .lib.env import PATHS

_SECTIONS = ("server", "plugin", "output", "defaults")

CONFIG_DEFAULTS: Dict[str, Any] = {
    "game_url": "ws://localhost:8765/game",
    "log_level": "info",
    "remote_host": "0.0.0.0",
    "remote_port": 8765,
    "gateway_url": "ws://127.0.0.1:18789",
    "agent_name": "stardew-farmer",
}


def project_root() -> Path:
    return Path(os.environ.get(PATHS.root_env) or Path.cwd())


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any]
    root: Path

    def _path(self, section: str, key: str, default: str) -> Path:
        value = ((self.raw.get(section) or {}).get(key)) or default
        p = Path(str(value))
        return p if p.is_absolute() else self.root / p

    def _str(self, section: str, key: str, default: str) -> str:
        return str(((self.raw.get(section) or {}).get(key)) or default)

    @property
    def server_dir(self) -> Path:
        return self._path("server", "dir", "mcp-server")

    @property
    def server_binary(self) -> str:
        return self._str("server", "binary", "stardew-mcp")

    @property
    def server_toolchain(self) -> str:
        return self._str("server", "toolchain", "go")

    @property
    def plugin_dir(self) -> Path:
        return self._path("plugin", "dir", "mod/StardewMCP")

    @property
    def plugin_name(self) -> str:
        return self._str("plugin", "name", "StardewMCP")

    @property
    def plugin_build_output(self) -> Path:
        return self._path("plugin", "build_output", "mod/StardewMCP/bin/Release/net6.0")

    @property
    def plugin_toolchain(self) -> str:
        return self._str("plugin", "toolchain", "dotnet")

    @property
    def config_output(self) -> Path:
        return self._path("output", "config", "mcp-server/config.yaml")

    @property
    def log_path(self) -> Path:
        return self._path("output", "log", PATHS.log_default)

    @property
    def config_defaults(self) -> Dict[str, Any]:
        merged = dict(CONFIG_DEFAULTS)
        merged.update(self.raw.get("defaults") or {})
        return merged


def load_installer_config(path: Optional[str] = None) -> InstallerConfig:
    """Load the optional installer.yaml; a missing file means all defaults."""

    root = project_root()
    p = Path(path or os.environ.get(PATHS.config_env) or root / PATHS.config_default)
    if not p.exists():
        return InstallerConfig(raw={}, root=root)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("installer config must be YAML")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{p.name} must contain a mapping/object")

    for section in _SECTIONS:
        value = raw.get(section)
        if value is not None and not isinstance(value, dict):
            raise ValueError(f"{p.name}: section '{section}' must be a mapping, got {type(value).__name__}")

    return InstallerConfig(raw=raw, root=root)
