"""State -> frame. Everything here is a pure function of WizardState."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from rich.cells import cell_len
from rich.text import Text

from .state import (
    ERROR,
    OPTION_FIELDS,
    SUCCESS,
    WELCOME_CHOICES,
    PipelineSnapshot,
    Screen,
    Viewport,
    WizardState,
)

Segment = Tuple[str, str]
Line = List[Segment]

TITLE = "bold red"
HEADER = "bold cyan"
NORMAL = "grey85"
INFO_STYLE = "yellow"
OK_STYLE = "green"
ERR_STYLE = "bold red"
DIM = "grey50"
BUTTON = "white on dark_cyan"
BUTTON_FOCUSED = "bold white on red"

SPINNER_FRAMES = ("▱▱▱", "▰▱▱", "▰▰▱", "▰▰▰", "▰▰▱", "▰▱▱")
PROGRESS_WIDTH = 40
OUTPUT_TAIL = 3

_LEVEL_STYLES = {SUCCESS: OK_STYLE, ERROR: ERR_STYLE}

_EMPTY_SNAPSHOT = PipelineSnapshot(
    running=False, done=False, fatal_error=None, progress=0.0, log_lines=(), output_lines=()
)


def _text(s: str, style: str = NORMAL) -> Line:
    return [(s, style)]


def _blank() -> Line:
    return []


def _width(line: Line) -> int:
    return sum(cell_len(s) for s, _ in line)


def progress_bar(fraction: float, width: int = PROGRESS_WIDTH) -> str:
    f = min(1.0, max(0.0, fraction))
    filled = int(round(f * width))
    return "█" * filled + "░" * (width - filled) + f" {int(round(f * 100)):3d}%"


def log_tail_rows(viewport: Viewport) -> int:
    return max(3, min(10, viewport.height - 16))


def _welcome(state: WizardState) -> List[Line]:
    buttons: Line = []
    for i, label in enumerate(WELCOME_CHOICES):
        if i:
            buttons.append(("   ", NORMAL))
        style = BUTTON_FOCUSED if i == state.selected_choice else BUTTON
        buttons.append((f"[ {label} ]", style))

    return [
        _text("🦞 Stardew MCP Installer 🦞", TITLE),
        _text("Lobster Edition"),
        _blank(),
        _text("This installer will set up everything you need:"),
        _blank(),
        _text("  • Build Go MCP Server"),
        _text("  • Build C# Stardew Valley Mod"),
        _text("  • Install mod to your game folder"),
        _text("  • Configure OpenClaw & Remote options"),
        _blank(),
        buttons,
        _blank(),
        _text("Use ↑↓ to select, Enter to confirm, q to quit", DIM),
    ]


def _path(state: WizardState) -> List[Line]:
    detected = state.detected_path or "(not found)"
    return [
        _text("Stardew Valley Location", HEADER),
        _blank(),
        _text(f"Auto-detected: {detected}", INFO_STYLE),
        _blank(),
        [("Path: ", NORMAL), (state.install_path, "bold"), ("█", "blink")],
        _blank(),
        _text("Enter the path where Stardew Valley is installed"),
        _text("Tab: use auto-detected path · Ctrl+U: clear", DIM),
        _blank(),
        _text("Enter: next · Ctrl+C: quit", DIM),
    ]


def _options(state: WizardState) -> List[Line]:
    lines: List[Line] = [_text("Additional Options", HEADER), _blank()]
    hotkeys = {"gateway": "g", "remote": "r", "auto_start": "a"}
    for i, (name, label) in enumerate(OPTION_FIELDS):
        mark = "✓" if getattr(state.options, name) else " "
        pointer = "›" if i == state.option_cursor else " "
        style = "bold" if i == state.option_cursor else NORMAL
        lines.append([(f"{pointer} [{mark}] {label}", style), (f"  ({hotkeys[name]})", DIM)])

    lines += [
        _blank(),
        _text("↑↓ move · Space toggle · Enter: Install Now", DIM),
    ]
    return lines


def _log_lines(snap: PipelineSnapshot, rows: int) -> List[Line]:
    return [_text(entry.text, _LEVEL_STYLES.get(entry.level, INFO_STYLE)) for entry in snap.log_lines[-rows:]]


def _install_failed(snap: PipelineSnapshot, viewport: Viewport) -> List[Line]:
    return [
        _text("Installation Failed", ERR_STYLE),
        _blank(),
        *_log_lines(snap, log_tail_rows(viewport)),
        _blank(),
        _text(f"Error: {snap.fatal_error}", ERR_STYLE),
        _blank(),
        _text("Fix the problem above and run the installer again.", NORMAL),
        _text("q: quit", DIM),
    ]


def _install_done(state: WizardState) -> List[Line]:
    enabled = state.options.enabled_labels() or ["Default Configuration"]
    return [
        _text("🎉 Installation Complete! 🎉", "bold green"),
        _blank(),
        _text("Next Steps:", HEADER),
        _text("  1. Start Stardew Valley through SMAPI"),
        _text("  2. Load your save file"),
        _text("  3. Start the MCP server (mcp-server/stardew-mcp)"),
        _blank(),
        _text("Enabled Options:", HEADER),
        *[_text(f"  • {label}") for label in enabled],
        _blank(),
        _text("[ Exit ]", BUTTON_FOCUSED),
    ]


def _install_running(state: WizardState, snap: PipelineSnapshot) -> List[Line]:
    spinner = SPINNER_FRAMES[state.spinner_frame % len(SPINNER_FRAMES)]
    lines: List[Line] = [
        [("Installing... ", HEADER), (spinner, "cyan")],
        _blank(),
        *_log_lines(snap, log_tail_rows(state.viewport)),
    ]
    if snap.output_lines:
        lines.append(_blank())
        lines += [_text(f"  {line}", DIM) for line in snap.output_lines[-OUTPUT_TAIL:]]
    lines += [_blank(), _text(progress_bar(snap.progress), "cyan")]
    return lines


def _install(state: WizardState) -> List[Line]:
    snap = state.pipeline.snapshot() if state.pipeline is not None else _EMPTY_SNAPSHOT
    if snap.fatal_error:
        return _install_failed(snap, state.viewport)
    if snap.done:
        return _install_done(state)
    return _install_running(state, snap)


def center(lines: Sequence[Line], viewport: Viewport) -> Text:
    """Pad ``lines`` into the middle of the viewport; oversize content is left as is."""

    out = Text()
    top = 0
    left = 0
    if len(lines) < viewport.height:
        top = (viewport.height - len(lines)) // 2
        widest = max((_width(line) for line in lines), default=0)
        left = max(0, (viewport.width - widest) // 2)

    out.append("\n" * top)
    for i, line in enumerate(lines):
        if i:
            out.append("\n")
        if left and line:
            out.append(" " * left)
        for s, style in line:
            out.append(s, style=style)
    return out


_VIEWS = {
    Screen.WELCOME: _welcome,
    Screen.PATH_SELECTION: _path,
    Screen.OPTIONS: _options,
    Screen.INSTALL: _install,
}


def render(state: WizardState) -> Text:
    return center(_VIEWS[state.screen](state), state.viewport)
