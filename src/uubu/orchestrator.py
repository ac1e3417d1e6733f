#!/usr/bin/env python3
"""
uubu Orchestrator

Runs the update pipeline in a fixed order:

    privilege_check -> network_check -> [snapshot] -> package_update
        -> [snap] -> [flatpak] -> [reboot_check]

Fatal failures stop the run with a non-zero exit status. Advisory
failures are reported as warnings and the next step runs regardless.
"""

from __future__ import annotations

import logging
import socket
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, TextIO

from .config import REBOOT_MARKER, REBOOT_PACKAGES, TIMESTAMP_FORMAT, RunConfig
from .exceptions import UubuError
from .preflight import NetworkCheck, PrivilegeCheck, effective_uid
from .reboot import RebootCheckStep
from .snapshot import SnapshotStep
from .steps import Step, StepContext, StepOutcome
from .universal import FlatpakStep, SnapStep
from .updater import PackageUpdateStep

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1


def build_pipeline(
    context: StepContext,
    *,
    geteuid: Callable[[], Optional[int]] = effective_uid,
    connect: Callable = socket.create_connection,
    stdin: Optional[TextIO] = None,
    reboot_marker: Path = REBOOT_MARKER,
    reboot_packages: Path = REBOOT_PACKAGES,
    clock: Callable[[], datetime] = datetime.now,
) -> List[Step]:
    """Create the steps of a run, in execution order."""
    return [
        PrivilegeCheck(context, geteuid=geteuid),
        NetworkCheck(context, connect=connect),
        SnapshotStep(context, clock=clock),
        PackageUpdateStep(context),
        SnapStep(context),
        FlatpakStep(context),
        RebootCheckStep(
            context,
            stdin=stdin,
            marker=reboot_marker,
            packages_file=reboot_packages,
        ),
    ]


def describe_cause(cause: Optional[Exception]) -> str:
    if cause is None:
        return ""
    if isinstance(cause, UubuError):
        return cause.message
    return str(cause)


class Orchestrator:
    """Applies the fatal/advisory policy across the pipeline."""

    def __init__(
        self,
        context: StepContext,
        steps: Optional[List[Step]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.context = context
        self.steps = steps if steps is not None else build_pipeline(context, clock=clock)
        self._clock = clock
        self.outcomes: List[StepOutcome] = []

    @property
    def console(self):
        return self.context.console

    def _report(self, step: Step, outcome: StepOutcome):
        if not outcome.failed:
            return
        if isinstance(outcome.cause, UubuError):
            logger.info(f"{step.name} error record: {outcome.cause.to_dict()}")
        if outcome.fatal:
            logger.error(f"{step.name} failed: {outcome.cause}")
            if step.failure_key:
                self.console.error(step.failure_key, describe_cause(outcome.cause))
        else:
            logger.debug(f"{step.name} failed (advisory): {outcome.cause}")
            if step.failure_key:
                self.console.warning(step.failure_key, describe_cause(outcome.cause))

    def run(self, config: RunConfig) -> int:
        """
        Execute every enabled step.

        Returns:
            Process exit status: 0 when the end of the pipeline is
            reached, 1 after a fatal failure.
        """
        self.outcomes = []

        self.console.success("app_title")
        self.console.info("start_time", self._clock().strftime(TIMESTAMP_FORMAT))
        self.console.blank()

        for step in self.steps:
            if not step.enabled(config):
                logger.debug(f"Step {step.name} disabled by configuration")
                continue

            start = time.perf_counter()
            try:
                outcome = step.execute(config)
            except Exception as e:
                logger.exception(f"Unexpected error in step {step.name}")
                outcome = step.failed(e)
            logger.debug(
                f"{step.name} finished with {outcome.status.value} "
                f"in {time.perf_counter() - start:.3f}s"
            )
            self.outcomes.append(outcome)
            self._report(step, outcome)

            if outcome.fatal:
                return EXIT_FATAL

            if step.spaced:
                self.console.blank()

        self.console.success("app_finished")
        self.console.info("end_time", self._clock().strftime(TIMESTAMP_FORMAT))
        return EXIT_OK
