from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import yaml

from .installer_config import CONFIG_DEFAULTS
from .lib.fs import write_text

logger = logging.getLogger(__name__)


def build_config_document(auto_start: bool, defaults: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """The MCP server config. ``auto_start`` is the only field the wizard sets."""

    d = dict(CONFIG_DEFAULTS)
    d.update(defaults or {})

    return {
        "server": {
            "game_url": str(d["game_url"]),
            "auto_start": bool(auto_start),
            "log_level": str(d["log_level"]),
        },
        "remote": {
            "host": str(d["remote_host"]),
            "port": int(d["remote_port"]),
        },
        "openclaw": {
            "gateway_url": str(d["gateway_url"]),
            "token": "",
            "agent_name": str(d["agent_name"]),
        },
    }


def render_config(auto_start: bool, defaults: Optional[Mapping[str, Any]] = None) -> str:
    return yaml.safe_dump(build_config_document(auto_start, defaults), sort_keys=False)


def write_config_file(path: str, auto_start: bool, defaults: Optional[Mapping[str, Any]] = None) -> None:
    write_text(path, render_config(auto_start, defaults))
    logger.info("Config written (auto_start=%s)", auto_start)
