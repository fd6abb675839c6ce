from __future__ import annotations

from typing import Optional


class InstallerError(Exception):
    """Base class for failures the install pipeline knows how to report."""


class CommandError(InstallerError):
    def __init__(self, reason: str, *, command: str, code: Optional[int] = None, output: str = "") -> None:
        self.reason = reason
        self.command = command
        self.code = code
        self.output = output
        super().__init__(self._format())

    def _format(self) -> str:
        if self.code is not None:
            return f"{self.command}: {self.reason} ({self.code})"
        return f"{self.command}: {self.reason}"


class ToolchainMissing(InstallerError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"ToolchainMissing: {name}")


class BuildFailed(InstallerError):
    def __init__(self, component: str, cause: object) -> None:
        self.component = component
        self.cause = cause
        super().__init__(f"BuildFailed: {component}: {cause}")


class InstallFailed(InstallerError):
    def __init__(self, cause: object) -> None:
        self.cause = cause
        super().__init__(f"InstallFailed: {cause}")


class ConfigWriteFailed(InstallerError):
    def __init__(self, cause: object) -> None:
        self.cause = cause
        super().__init__(f"ConfigWriteFailed: {cause}")
