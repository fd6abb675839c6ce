from __future__ import annotations

import logging
import os
from pathlib import Path

from .installer_config import InstallerConfig

logger = logging.getLogger(__name__)

FALLBACK_LOG_NAME = "stardew-mcp-installer.log"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


class InstallerLogHandler(logging.FileHandler):
    """File handler that creates its directory and file on the first record."""

    def __init__(self, path: Path) -> None:
        super().__init__(str(path), encoding="utf-8", delay=True)

    def _open(self):
        Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
        return super()._open()


def _can_create(path: Path) -> bool:
    if path.exists():
        return path.is_file() and os.access(path, os.W_OK)
    ancestor = path.parent
    while not ancestor.exists():
        if ancestor.parent == ancestor:
            return False
        ancestor = ancestor.parent
    return ancestor.is_dir() and os.access(ancestor, os.W_OK)


def configure_logging(cfg: InstallerConfig, level: int = logging.INFO) -> Path:
    """Route all records to the installer's log file.

    The wizard owns the terminal, so there is no console handler. The file is
    not created until something at ``level`` or above is logged; leaving the
    wizard straight away writes nothing. When the configured location cannot
    be created, the log goes to ``FALLBACK_LOG_NAME`` in the working directory.

    Calling it again keeps the first handler and returns its path.
    """

    root = logging.getLogger()
    root.setLevel(level)

    for h in root.handlers:
        if isinstance(h, InstallerLogHandler):
            return Path(h.baseFilename)

    path = cfg.log_path
    if not _can_create(path):
        path = Path.cwd() / FALLBACK_LOG_NAME

    handler = InstallerLogHandler(path)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    root.addHandler(handler)

    logger.debug("Log file %s (configured %s)", handler.baseFilename, cfg.log_path)
    return Path(handler.baseFilename)
