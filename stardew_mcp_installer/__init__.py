"""Stardew MCP Installer (interactive terminal wizard).

Core design goals:
- Single forward pass: welcome, path, options, install
- Background install pipeline with live progress
- Fail-fast steps, config write is best-effort
- Centralized logging
"""

__all__ = []
