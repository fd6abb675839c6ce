from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    root_env: str = "STARDEW_MCP_ROOT"
    config_env: str = "STARDEW_MCP_INSTALLER_CONFIG"
    config_default: str = "installer.yaml"
    log_default: str = "logs/stardew-mcp-installer.log"


PATHS = Paths()
