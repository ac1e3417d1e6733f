"""
Snap and Flatpak refresh steps.

Both are advisory and silently skipped when the tool is not installed.
"""

from __future__ import annotations

from typing import List

from .config import RunConfig
from .steps import Step, StepOutcome


class ToolRefreshStep(Step):
    """Refresh one packaging subsystem if its tool is on PATH."""

    tool = ""
    command: List[str] = []
    message_prefix = ""
    spaced = True

    def execute(self, config: RunConfig) -> StepOutcome:
        prefix = self.message_prefix
        if not self.context.tool_exists(self.tool):
            self.console.warning(f"{prefix}_missing")
            return self.skipped()

        self.console.info(f"updating_{prefix}")
        result = self.runner.run(self.command[0], self.command[1:])
        if not result.ok:
            self.console.warning(f"{prefix}_error")
            return self.failed(result.error)

        self.console.success(f"{prefix}_updated")
        return self.ok()


class SnapStep(ToolRefreshStep):
    name = "snap"
    failure_key = "error_snap"
    tool = "snap"
    command = ["sudo", "snap", "refresh"]
    message_prefix = "snap"

    def enabled(self, config: RunConfig) -> bool:
        return config.update_snap


class FlatpakStep(ToolRefreshStep):
    name = "flatpak"
    failure_key = "error_flatpak"
    tool = "flatpak"
    command = ["flatpak", "update", "-y"]
    message_prefix = "flatpak"

    def enabled(self, config: RunConfig) -> bool:
        return config.update_flatpak
