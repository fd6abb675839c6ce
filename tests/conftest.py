"""Shared fixtures for installer tests.

- ``FakeRunner`` stands in for CommandRunner and records every build call
- ``repo`` is a project root with a built plugin output
- ``ctx`` wires both into a StepContext targeting a temporary game folder
"""

from pathlib import Path

import pytest

from stardew_mcp_installer.errors import CommandError
from stardew_mcp_installer.installer_config import InstallerConfig
from stardew_mcp_installer.lib.command import CmdResult
from stardew_mcp_installer.pipeline import StepContext
from stardew_mcp_installer.state import Options


class FakeRunner:
    def __init__(self, present=("go", "dotnet"), fail=()):
        self.present = set(present)
        self.fail = set(fail)
        self.calls = []

    def exists(self, command):
        return command in self.present

    def run(self, command, args, cwd, sink=None):
        self.calls.append((command, list(args), cwd))
        if sink is not None:
            sink(f"{command} {' '.join(args)}")
        if command in self.fail:
            raise CommandError("nonzero exit", command=command, code=1, output="compile error")
        return CmdResult(argv=[command, *args], returncode=0, output="")


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    out = root / "mod/StardewMCP/bin/Release/net6.0"
    out.mkdir(parents=True)
    (out / "StardewMCP.dll").write_bytes(b"\x4d\x5a")
    (out / "manifest.json").write_text('{"Name": "StardewMCP"}', encoding="utf-8")
    (out / "assets").mkdir()
    (out / "assets" / "icon.png").write_bytes(b"png")
    return root


@pytest.fixture
def config(repo: Path) -> InstallerConfig:
    return InstallerConfig(raw={}, root=repo)


@pytest.fixture
def game_dir(tmp_path: Path) -> Path:
    d = tmp_path / "Stardew Valley"
    d.mkdir()
    return d


@pytest.fixture
def make_ctx(config, game_dir):
    def _make(runner, *, install_path=None, options=None, sink=None):
        return StepContext(
            runner=runner,
            config=config,
            install_path=str(game_dir) if install_path is None else install_path,
            options=options or Options(),
            sink=sink,
        )

    return _make
