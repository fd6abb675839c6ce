from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Sequence

from ..errors import CommandError

logger = logging.getLogger(__name__)

OutputSink = Callable[[str], None]

# Lines of tool output kept on a CommandError for the log trail.
_ERROR_TAIL_LINES = 20


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    output: str


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def _forward_to_stdout(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def command_exists(name: str) -> bool:
    return shutil.which(name) is not None


def run_cmd(
    argv: Sequence[str],
    *,
    cwd: str | None = None,
    env: Mapping[str, str] | None = None,
    sink: Optional[OutputSink] = None,
    check: bool = True,
) -> CmdResult:
    """Run a command, streaming its merged stdout/stderr line by line.

    - Always logs the command.
    - Each output line goes to ``sink`` (or this process's stdout).
    - No timeout: a hung tool blocks the caller.
    """

    argv_list = list(argv)
    if not argv_list:
        raise ValueError("argv must not be empty")

    command = argv_list[0]
    logger.info("CMD %s (cwd=%s)", _fmt_argv(argv_list), cwd or ".")

    if not command_exists(command):
        raise CommandError("not found", command=command)

    if cwd is not None and not os.path.isdir(cwd):
        raise NotADirectoryError(f"working directory missing: {cwd}")

    emit = sink or _forward_to_stdout
    lines: list[str] = []

    try:
        p = subprocess.Popen(
            argv_list,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )
    except FileNotFoundError as e:
        raise CommandError("not found", command=command) from e

    with p:
        assert p.stdout is not None
        for raw in p.stdout:
            line = raw.rstrip("\r\n")
            lines.append(line)
            emit(line)
        returncode = p.wait()

    output = "\n".join(lines)
    logger.debug("EXIT %s -> %d", command, returncode)

    if check and returncode != 0:
        tail = "\n".join(lines[-_ERROR_TAIL_LINES:])
        raise CommandError("nonzero exit", command=command, code=returncode, output=tail)

    return CmdResult(argv=argv_list, returncode=returncode, output=output)


class CommandRunner:
    """The process-spawning seam the install steps depend on."""

    def exists(self, command: str) -> bool:
        return command_exists(command)

    def run(
        self,
        command: str,
        args: Sequence[str],
        cwd: str | None,
        sink: Optional[OutputSink] = None,
    ) -> CmdResult:
        return run_cmd([command, *args], cwd=cwd, sink=sink)
