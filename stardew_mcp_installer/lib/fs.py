from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def path_exists(path: str) -> bool:
    if not path:
        return False
    return Path(path).exists()


def copy_tree(src: str, dst: str) -> int:
    """Copy ``src`` recursively into ``dst``; returns the number of files copied."""
    s = Path(src)
    d = Path(dst)
    if not s.exists():
        raise FileNotFoundError(src)

    d.mkdir(parents=True, exist_ok=True)
    copied = 0
    for item in s.rglob("*"):
        rel = item.relative_to(s)
        out = d / rel
        if item.is_dir():
            out.mkdir(parents=True, exist_ok=True)
        else:
            out.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, out)
            copied += 1

    logger.info("Copied %d files %s -> %s", copied, str(s), str(d))
    return copied


def write_text(path: str, content: str) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")
    logger.info("Wrote %s", str(p))
