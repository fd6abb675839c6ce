"""Wizard screen transitions and the one-shot install trigger."""

import logging
import random

import pytest

from stardew_mcp_installer.state import Screen, WizardState
from stardew_mcp_installer.wizard import KeyEvent, Outcome, ResizeEvent, TickEvent, WizardMachine

DETECTED = "/home/farmer/.steam/steamapps/common/Stardew Valley"


class RecordingLauncher:
    def __init__(self):
        self.calls = []

    def __call__(self, pipeline, install_path, options):
        self.calls.append((pipeline, install_path, options))


@pytest.fixture
def launcher():
    return RecordingLauncher()


@pytest.fixture
def machine(launcher):
    return WizardMachine(WizardState(detected_path=DETECTED), launcher=launcher)


def key(name, character=None):
    return KeyEvent(name, character)


def type_text(machine, text):
    for ch in text:
        machine.handle(KeyEvent(ch, ch))


def to_options(machine):
    machine.handle(key("enter"))
    machine.handle(key("enter"))
    assert machine.state.screen is Screen.OPTIONS


class TestWelcome:
    def test_selection_is_clamped(self, machine):
        rng = random.Random(7)
        for _ in range(500):
            machine.handle(key(rng.choice(["up", "down", "w", "s"])))
            assert 0 <= machine.state.selected_choice <= 1

    def test_does_not_wrap(self, machine):
        machine.handle(key("up"))
        assert machine.state.selected_choice == 0
        machine.handle(key("down"))
        machine.handle(key("down"))
        machine.handle(key("down"))
        assert machine.state.selected_choice == 1

    def test_exit_has_no_side_effects(self, machine, launcher):
        machine.handle(key("down"))
        assert machine.handle(key("enter")) is Outcome.EXIT
        assert launcher.calls == []
        assert machine.state.pipeline is None
        assert machine.state.screen is Screen.WELCOME

    def test_exit_writes_no_log_records(self, machine, caplog):
        caplog.set_level(logging.INFO, logger="stardew_mcp_installer")
        machine.handle(key("down"))
        assert machine.handle(key("enter")) is Outcome.EXIT
        assert caplog.records == []

    def test_install_seeds_path(self, machine):
        assert machine.handle(key("enter")) is Outcome.CONTINUE
        assert machine.state.screen is Screen.PATH_SELECTION
        assert machine.state.install_path == DETECTED


class TestPathSelection:
    def test_edit_and_reset(self, machine):
        machine.handle(key("enter"))
        machine.handle(key("ctrl+u"))
        type_text(machine, "/games/sdq")
        machine.handle(key("backspace"))
        type_text(machine, "v")
        assert machine.state.install_path == "/games/sdv"

        machine.handle(key("tab"))
        assert machine.state.install_path == DETECTED

    def test_q_is_text_here(self, machine):
        machine.handle(key("enter"))
        machine.handle(key("ctrl+u"))
        assert machine.handle(KeyEvent("q", "q")) is Outcome.CONTINUE
        assert machine.state.install_path == "q"

    def test_confirm_does_not_validate(self, machine):
        machine.handle(key("enter"))
        machine.handle(key("ctrl+u"))
        type_text(machine, "/does/not/exist")
        machine.handle(key("enter"))
        assert machine.state.screen is Screen.OPTIONS
        assert machine.state.install_path == "/does/not/exist"


class TestOptions:
    def test_toggles(self, machine):
        to_options(machine)
        machine.handle(key("space"))
        machine.handle(key("down"))
        machine.handle(key("down"))
        machine.handle(key("down"))
        machine.handle(key("space"))
        machine.handle(KeyEvent("r", "r"))

        opts = machine.state.options
        assert (opts.gateway, opts.remote, opts.auto_start) == (True, True, True)

        machine.handle(KeyEvent("g", "g"))
        assert machine.state.options.gateway is False

    def test_confirm_launches_once(self, machine, launcher):
        to_options(machine)
        machine.handle(KeyEvent("a", "a"))
        machine.handle(key("enter"))

        assert machine.state.screen is Screen.INSTALL
        assert len(launcher.calls) == 1
        pipeline, path, options = launcher.calls[0]
        assert pipeline is machine.state.pipeline
        assert path == DETECTED
        assert options.auto_start is True

        for _ in range(3):
            assert machine.handle(key("enter")) is Outcome.CONTINUE
        assert len(launcher.calls) == 1
        assert machine.state.pipeline is pipeline


class TestInstall:
    def _install(self, machine):
        to_options(machine)
        machine.handle(key("enter"))
        return machine.state.pipeline

    def test_enter_exits_after_success(self, machine):
        pipeline = self._install(machine)
        pipeline.start()
        assert machine.handle(key("enter")) is Outcome.CONTINUE
        pipeline.finish()
        assert machine.handle(key("enter")) is Outcome.EXIT

    def test_enter_after_fatal_error_stays(self, machine):
        pipeline = self._install(machine)
        pipeline.start()
        pipeline.fail("ToolchainMissing: go")
        assert machine.handle(key("enter")) is Outcome.CONTINUE
        assert machine.state.screen is Screen.INSTALL


@pytest.mark.parametrize("steps", [0, 1, 2, 3])
def test_ctrl_c_quits_everywhere(machine, steps):
    for _ in range(steps):
        machine.handle(key("enter"))
    assert machine.handle(key("ctrl+c")) is Outcome.EXIT


def test_q_quits_outside_text_field(machine):
    assert machine.handle(KeyEvent("q", "q")) is Outcome.EXIT


def test_resize_keeps_screen(machine):
    machine.handle(key("enter"))
    machine.handle(ResizeEvent(132, 50))
    assert machine.state.screen is Screen.PATH_SELECTION
    assert (machine.state.viewport.width, machine.state.viewport.height) == (132, 50)


def test_tick_advances_spinner(machine):
    machine.handle(TickEvent())
    machine.handle(TickEvent())
    assert machine.state.spinner_frame == 2


@pytest.mark.parametrize("event", [KeyEvent("ctrl+c"), KeyEvent("q", "q")])
def test_quitting_writes_no_log_records(machine, caplog, event):
    caplog.set_level(logging.INFO, logger="stardew_mcp_installer")
    assert machine.handle(event) is Outcome.EXIT
    assert caplog.records == []
