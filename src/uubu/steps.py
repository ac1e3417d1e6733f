#!/usr/bin/env python3
"""
uubu Pipeline Steps

Common shape of every pipeline step: a step decides whether the run
configuration enables it, executes, and reports a StepOutcome. Steps
never raise for expected failures; the orchestrator applies the
fatal/advisory policy to the outcome.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from .config import RunConfig
from .console import Console
from .runner import CommandRunner, SubprocessRunner, command_exists


class StepStatus(Enum):
    """What happened when a step ran."""
    OK = "ok"
    SKIPPED = "skipped"
    FAILED = "failed"


class Severity(Enum):
    """Tier of a step outcome."""
    FATAL = "fatal"                  # Abort the run, exit non-zero
    ADVISORY = "advisory"            # Warn and continue
    INFORMATIONAL = "informational"  # Expected state, nothing to report


@dataclass
class StepOutcome:
    """Result of a single step."""
    step: str
    status: StepStatus
    severity: Severity = Severity.INFORMATIONAL
    cause: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.status == StepStatus.FAILED

    @property
    def fatal(self) -> bool:
        return self.failed and self.severity == Severity.FATAL


@dataclass
class StepContext:
    """Collaborators shared by all steps."""
    console: Console
    runner: CommandRunner = field(default_factory=SubprocessRunner)
    tool_exists: Callable[[str], bool] = command_exists


class Step:
    """
    Base class for pipeline steps.

    Subclasses set name, fatal and failure_key, and implement execute().
    failure_key is the catalog message the orchestrator shows when the
    step fails; None means the step already reported its own failure.
    """

    name = "step"
    fatal = False
    failure_key: Optional[str] = None
    spaced = False  # Blank line after the step

    def __init__(self, context: StepContext):
        self.context = context

    @property
    def console(self) -> Console:
        return self.context.console

    @property
    def runner(self) -> CommandRunner:
        return self.context.runner

    def enabled(self, config: RunConfig) -> bool:
        return True

    def execute(self, config: RunConfig) -> StepOutcome:
        raise NotImplementedError

    # Outcome helpers

    def ok(self) -> StepOutcome:
        return StepOutcome(self.name, StepStatus.OK)

    def skipped(self) -> StepOutcome:
        return StepOutcome(self.name, StepStatus.SKIPPED)

    def failed(self, cause: Optional[Exception] = None) -> StepOutcome:
        severity = Severity.FATAL if self.fatal else Severity.ADVISORY
        return StepOutcome(self.name, StepStatus.FAILED, severity, cause)
