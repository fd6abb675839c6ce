from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from .install_steps import build_install_steps
from .installer_config import InstallerConfig
from .pipeline import Runner, StepContext, start_pipeline_thread
from .state import OPTION_FIELDS, WELCOME_CHOICES, Options, PipelineState, Screen, WizardState

logger = logging.getLogger(__name__)


class Outcome(Enum):
    CONTINUE = "continue"
    EXIT = "exit"


@dataclass(frozen=True)
class KeyEvent:
    """A key press, named the way textual names keys ("up", "enter", "ctrl+c", "a")."""

    key: str
    character: Optional[str] = None


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


@dataclass(frozen=True)
class TickEvent:
    pass


Event = Union[KeyEvent, ResizeEvent, TickEvent]

# Starts the install in the background; must not block.
Launcher = Callable[[PipelineState, str, Options], object]

_UP_KEYS = {"up", "w"}
_DOWN_KEYS = {"down", "s"}
_OPTION_HOTKEYS = {"g": "gateway", "r": "remote", "a": "auto_start"}


def make_thread_launcher(config: InstallerConfig, runner: Runner) -> Launcher:
    def _launch(pipeline: PipelineState, install_path: str, options: Options) -> object:
        ctx = StepContext(
            runner=runner,
            config=config,
            install_path=install_path,
            options=options,
            sink=pipeline.append_output,
        )
        return start_pipeline_thread(steps=build_install_steps(), state=pipeline, ctx=ctx)

    return _launch


class WizardMachine:
    """Owns WizardState and applies input events to it.

    The machine never blocks: the only long-running work (the install) is
    handed to ``launcher`` and observed afterwards through ``state.pipeline``.
    """

    def __init__(self, state: WizardState, *, launcher: Launcher) -> None:
        self.state = state
        self._launcher = launcher
        self._install_started = False

    def handle(self, event: Event) -> Outcome:
        if isinstance(event, ResizeEvent):
            self.state.viewport.width = max(0, event.width)
            self.state.viewport.height = max(0, event.height)
            return Outcome.CONTINUE
        if isinstance(event, TickEvent):
            self.state.spinner_frame += 1
            return Outcome.CONTINUE
        return self._handle_key(event)

    def _handle_key(self, event: KeyEvent) -> Outcome:
        key = event.key
        screen = self.state.screen

        if key == "ctrl+c":
            logger.debug("Quit requested on %s", screen.value)
            return Outcome.EXIT
        # "q" is ordinary text while editing the path.
        if key == "q" and screen is not Screen.PATH_SELECTION:
            logger.debug("Quit requested on %s", screen.value)
            return Outcome.EXIT

        if screen is Screen.WELCOME:
            return self._on_welcome(key)
        if screen is Screen.PATH_SELECTION:
            return self._on_path(event)
        if screen is Screen.OPTIONS:
            return self._on_options(key)
        return self._on_install(key)

    def _on_welcome(self, key: str) -> Outcome:
        s = self.state
        if key in _UP_KEYS:
            s.selected_choice = max(0, s.selected_choice - 1)
        elif key in _DOWN_KEYS:
            s.selected_choice = min(len(WELCOME_CHOICES) - 1, s.selected_choice + 1)
        elif key == "enter":
            if s.selected_choice != 0:
                logger.debug("Exit chosen on welcome screen")
                return Outcome.EXIT
            s.install_path = s.detected_path
            s.screen = Screen.PATH_SELECTION
        return Outcome.CONTINUE

    def _on_path(self, event: KeyEvent) -> Outcome:
        s = self.state
        key = event.key
        if key == "enter":
            logger.info("Install path set to %r", s.install_path)
            s.screen = Screen.OPTIONS
        elif key == "tab":
            s.install_path = s.detected_path
        elif key == "backspace":
            s.install_path = s.install_path[:-1]
        elif key == "ctrl+u":
            s.install_path = ""
        elif event.character and event.character.isprintable():
            s.install_path += event.character
        return Outcome.CONTINUE

    def _on_options(self, key: str) -> Outcome:
        s = self.state
        if key == "up":
            s.option_cursor = max(0, s.option_cursor - 1)
        elif key == "down":
            s.option_cursor = min(len(OPTION_FIELDS) - 1, s.option_cursor + 1)
        elif key == "space":
            self._toggle(OPTION_FIELDS[s.option_cursor][0])
        elif key in _OPTION_HOTKEYS:
            self._toggle(_OPTION_HOTKEYS[key])
        elif key == "enter":
            self._begin_install()
        return Outcome.CONTINUE

    def _on_install(self, key: str) -> Outcome:
        pipeline = self.state.pipeline
        if key == "enter" and pipeline is not None and pipeline.snapshot().done:
            return Outcome.EXIT
        return Outcome.CONTINUE

    def _toggle(self, name: str) -> None:
        opts = self.state.options
        setattr(opts, name, not getattr(opts, name))

    def _begin_install(self) -> None:
        if self._install_started or self.state.screen is Screen.INSTALL:
            return
        self._install_started = True

        s = self.state
        s.pipeline = PipelineState()
        s.screen = Screen.INSTALL
        logger.info(
            "Starting install (path=%r, gateway=%s, remote=%s, auto_start=%s)",
            s.install_path,
            s.options.gateway,
            s.options.remote,
            s.options.auto_start,
        )
        self._launcher(s.pipeline, s.install_path, dataclasses.replace(s.options))
