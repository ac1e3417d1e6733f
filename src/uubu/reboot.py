#!/usr/bin/env python3
"""
uubu Reboot Check

Looks for the reboot-required marker left by Debian/Ubuntu packages and
offers to reboot. The prompt is the only point where a run waits on the
operator.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from .config import REBOOT_MARKER, REBOOT_PACKAGES, RunConfig
from .exceptions import PromptError
from .steps import Step, StepContext, StepOutcome

logger = logging.getLogger(__name__)


class RebootCheckStep(Step):
    """Advisory reboot check with an interactive confirmation."""

    name = "reboot_check"
    failure_key = "error_reboot"

    def __init__(
        self,
        context: StepContext,
        stdin: Optional[TextIO] = None,
        marker: Path = REBOOT_MARKER,
        packages_file: Path = REBOOT_PACKAGES,
    ):
        super().__init__(context)
        self._stdin = stdin
        self.marker = marker
        self.packages_file = packages_file

    def enabled(self, config: RunConfig) -> bool:
        return config.check_reboot_needed

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    def _show_affected_packages(self):
        try:
            packages = self.packages_file.read_text(encoding="utf-8", errors="replace")
        except OSError:
            return
        if packages and not packages.endswith("\n"):
            packages += "\n"
        self.console.info("affected_packages")
        self.console.raw(packages, newline=False)

    def _read_answer(self) -> str:
        try:
            line = self.stdin.readline()
        except (OSError, ValueError) as e:
            raise PromptError(str(e), cause=e) from e
        if not line:
            raise PromptError("end of input")
        return line.strip().lower()

    def execute(self, config: RunConfig) -> StepOutcome:
        if not self.marker.exists():
            self.console.success("no_reboot")
            return self.ok()

        self.console.warning("reboot_required")
        self.console.warning("reboot_message")
        self._show_affected_packages()

        self.console.prompt("reboot_prompt")
        try:
            answer = self._read_answer()
        except PromptError as e:
            return self.failed(e)

        if answer in self.console.catalog.yes_answers():
            self.console.info("rebooting")
            result = self.runner.run("sudo", ["reboot"])
            if not result.ok:
                return self.failed(result.error)
            return self.ok()

        logger.debug(f"Reboot declined with answer {answer!r}")
        self.console.warning("reboot_later")
        return self.ok()
