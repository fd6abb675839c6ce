from __future__ import annotations

import logging

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from .render import render
from .wizard import KeyEvent, Outcome, ResizeEvent, TickEvent, WizardMachine

logger = logging.getLogger(__name__)

REFRESH_INTERVAL_S = 0.1


class InstallerApp(App[int]):
    """Full-screen shell around WizardMachine: events in, rendered frames out."""

    CSS = """
    Screen {
        overflow: hidden;
    }
    #frame {
        width: 100%;
        height: 100%;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "wizard_key('ctrl+c')", "Quit", show=False, priority=True),
        Binding("tab", "wizard_key('tab')", "Detected path", show=False, priority=True),
    ]

    ENABLE_COMMAND_PALETTE = False

    def __init__(self, machine: WizardMachine, **kwargs) -> None:
        super().__init__(**kwargs)
        self.machine = machine

    def compose(self) -> ComposeResult:
        yield Static("", id="frame")

    def on_mount(self) -> None:
        self.machine.handle(ResizeEvent(self.size.width, self.size.height))
        self.set_interval(REFRESH_INTERVAL_S, self._on_tick)
        self._redraw()

    def _redraw(self) -> None:
        self.query_one("#frame", Static).update(render(self.machine.state))

    def _dispatch(self, outcome: Outcome) -> None:
        if outcome is Outcome.EXIT:
            self.exit(0)
            return
        self._redraw()

    def _on_tick(self) -> None:
        self._dispatch(self.machine.handle(TickEvent()))

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self._dispatch(self.machine.handle(KeyEvent(event.key, event.character)))

    def on_resize(self, event: events.Resize) -> None:
        self._dispatch(self.machine.handle(ResizeEvent(event.size.width, event.size.height)))

    def action_wizard_key(self, key: str) -> None:
        # Keys textual would otherwise consume (quit, focus cycling).
        self._dispatch(self.machine.handle(KeyEvent(key)))
