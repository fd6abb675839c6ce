from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import yaml

from .config_file import write_config_file
from .errors import BuildFailed, CommandError, ConfigWriteFailed, InstallFailed, ToolchainMissing
from .lib.fs import copy_tree
from .pipeline import PipelineStep, StepContext

logger = logging.getLogger(__name__)


def plugin_install_dir(install_path: str, plugin_name: str) -> Path:
    return Path(install_path) / "Mods" / plugin_name


def step_10_check_server_toolchain(ctx: StepContext) -> None:
    name = ctx.config.server_toolchain
    if not ctx.runner.exists(name):
        raise ToolchainMissing(name)


def step_20_check_plugin_toolchain(ctx: StepContext) -> None:
    name = ctx.config.plugin_toolchain
    if not ctx.runner.exists(name):
        raise ToolchainMissing(name)


def step_30_build_server(ctx: StepContext) -> None:
    cfg = ctx.config
    try:
        ctx.runner.run(
            cfg.server_toolchain,
            ["build", "-o", cfg.server_binary],
            str(cfg.server_dir),
            ctx.sink,
        )
    except (CommandError, OSError) as e:
        raise BuildFailed("server", e) from e


def step_40_build_plugin(ctx: StepContext) -> None:
    cfg = ctx.config
    try:
        ctx.runner.run(
            cfg.plugin_toolchain,
            ["build", "-c", "Release"],
            str(cfg.plugin_dir),
            ctx.sink,
        )
    except (CommandError, OSError) as e:
        raise BuildFailed("plugin", e) from e


def step_50_install_plugin(ctx: StepContext) -> None:
    if not ctx.install_path.strip():
        raise InstallFailed("no installation path selected")

    dst = plugin_install_dir(ctx.install_path, ctx.config.plugin_name)
    try:
        dst.mkdir(parents=True, exist_ok=True)
        copy_tree(str(ctx.config.plugin_build_output), str(dst))
    except FileNotFoundError as e:
        raise InstallFailed(f"build output missing: {e.filename or e}") from e
    except OSError as e:
        raise InstallFailed(e) from e


def step_60_write_config(ctx: StepContext) -> None:
    try:
        write_config_file(
            str(ctx.config.config_output),
            ctx.options.auto_start,
            ctx.config.config_defaults,
        )
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        # Bad values under installer.yaml "defaults:" land here too.
        raise ConfigWriteFailed(e) from e


def build_install_steps() -> List[PipelineStep]:
    return [
        PipelineStep(
            step_id="10_check_server_toolchain",
            label="Go toolchain check",
            start_message="Checking Go installation...",
            success_message="✓ Go found!",
            action=step_10_check_server_toolchain,
            target_progress=0.15,
        ),
        PipelineStep(
            step_id="20_check_plugin_toolchain",
            label=".NET SDK check",
            start_message="Checking .NET SDK...",
            success_message="✓ .NET found!",
            action=step_20_check_plugin_toolchain,
            target_progress=0.30,
        ),
        PipelineStep(
            step_id="30_build_server",
            label="Go MCP Server build",
            start_message="Building Go MCP Server...",
            success_message="✓ Go MCP Server built!",
            action=step_30_build_server,
            target_progress=0.50,
        ),
        PipelineStep(
            step_id="40_build_plugin",
            label="C# mod build",
            start_message="Building C# Stardew Mod...",
            success_message="✓ C# Mod built!",
            action=step_40_build_plugin,
            target_progress=0.70,
        ),
        PipelineStep(
            step_id="50_install_plugin",
            label="Mod install",
            start_message="Installing mod to Stardew Valley...",
            success_message="✓ Mod installed!",
            action=step_50_install_plugin,
            target_progress=0.85,
        ),
        # Installation already succeeded by this point; a config write failure is only logged.
        PipelineStep(
            step_id="60_write_config",
            label="Configuration",
            start_message="Creating configuration...",
            success_message="✓ Configuration created!",
            action=step_60_write_config,
            target_progress=1.0,
            fatal_on_failure=False,
        ),
    ]
