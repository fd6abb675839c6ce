from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Optional, Tuple

LOG_CAP = 100

INFO = "info"
SUCCESS = "success"
ERROR = "error"


class Screen(Enum):
    WELCOME = "welcome"
    PATH_SELECTION = "path_selection"
    OPTIONS = "options"
    INSTALL = "install"


WELCOME_CHOICES = ("Install Everything", "Exit")


@dataclass
class Options:
    gateway: bool = False
    remote: bool = False
    auto_start: bool = False

    def enabled_labels(self) -> list[str]:
        labels = []
        if self.gateway:
            labels.append("OpenClaw Gateway Enabled")
        if self.remote:
            labels.append("Remote Server Enabled")
        if self.auto_start:
            labels.append("Auto-start Agent Enabled")
        return labels


# (attribute, label) in on-screen order.
OPTION_FIELDS = (
    ("gateway", "Enable OpenClaw Gateway"),
    ("remote", "Enable Remote Server Mode"),
    ("auto_start", "Auto-start agent on connect"),
)


@dataclass
class Viewport:
    width: int = 80
    height: int = 24


@dataclass(frozen=True)
class LogEntry:
    level: str
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class PipelineSnapshot:
    running: bool
    done: bool
    fatal_error: Optional[str]
    progress: float
    log_lines: Tuple[LogEntry, ...]
    output_lines: Tuple[str, ...]


class PipelineState:
    """Progress shared between the install thread (writer) and the UI (reader).

    All access goes through the lock; the renderer only sees snapshots.
    """

    def __init__(self, cap: int = LOG_CAP) -> None:
        self._lock = threading.Lock()
        self._running = False
        self._done = False
        self._fatal_error: Optional[str] = None
        self._progress = 0.0
        self._log: Deque[LogEntry] = deque(maxlen=cap)
        self._output: Deque[str] = deque(maxlen=cap)

    def _terminal(self) -> bool:
        return self._done or self._fatal_error is not None

    def start(self) -> None:
        with self._lock:
            if not self._terminal():
                self._running = True

    def append_log(self, level: str, text: str) -> None:
        with self._lock:
            self._log.append(LogEntry(level=level, text=text))

    def append_output(self, text: str) -> None:
        with self._lock:
            self._output.append(text)

    def advance(self, fraction: float) -> None:
        f = min(1.0, max(0.0, float(fraction)))
        with self._lock:
            if f > self._progress:
                self._progress = f

    def fail(self, message: str) -> None:
        with self._lock:
            if self._terminal():
                return
            self._fatal_error = message or "unknown error"
            self._running = False

    def finish(self) -> None:
        with self._lock:
            if self._terminal():
                return
            self._done = True
            self._running = False

    def snapshot(self) -> PipelineSnapshot:
        with self._lock:
            return PipelineSnapshot(
                running=self._running,
                done=self._done,
                fatal_error=self._fatal_error,
                progress=self._progress,
                log_lines=tuple(self._log),
                output_lines=tuple(self._output),
            )


@dataclass
class WizardState:
    screen: Screen = Screen.WELCOME
    selected_choice: int = 0
    install_path: str = ""
    detected_path: str = ""
    options: Options = field(default_factory=Options)
    option_cursor: int = 0
    pipeline: Optional[PipelineState] = None
    viewport: Viewport = field(default_factory=Viewport)
    spinner_frame: int = 0
