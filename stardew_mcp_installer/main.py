from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .installer_config import InstallerConfig, load_installer_config
from .lib.command import CommandRunner
from .lib.detect import detect_game_path
from .logging_utils import configure_logging
from .state import WizardState
from .tui import InstallerApp
from .wizard import WizardMachine, make_thread_launcher

logger = logging.getLogger(__name__)


def build_machine(cfg: InstallerConfig) -> WizardMachine:
    detected = detect_game_path() or ""
    state = WizardState(detected_path=detected, install_path=detected)
    return WizardMachine(state, launcher=make_thread_launcher(cfg, CommandRunner()))


def run() -> int:
    """Run the interactive wizard until the user leaves it."""

    cfg = load_installer_config()
    log_file = configure_logging(cfg)
    logger.debug("Project root: %s (log=%s)", cfg.root, log_file)

    app = InstallerApp(build_machine(cfg))
    app.run()
    return app.return_code or 0


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="stardew-mcp-installer",
        description="Interactive installer for the Stardew MCP server and mod.",
    )
    p.parse_args(argv)

    try:
        return run()
    except Exception as e:
        logger.exception("Installer failed to start")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
