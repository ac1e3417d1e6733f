#!/usr/bin/env python3
"""
uubu Snapshot Step

Creates a Timeshift restore point before the update when requested.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from .config import RunConfig
from .steps import Step, StepContext, StepOutcome

logger = logging.getLogger(__name__)

SNAPSHOT_TOOL = "timeshift"
COMMENT_TIME_FORMAT = "%Y-%m-%d %H:%M"

# Characters a shell would interpret; the comment comes from an editable
# locale file so it must never carry any of them.
UNSAFE_COMMENT_CHARS = frozenset(";|&`$(){}[]<>")


def fallback_comment(timestamp: str) -> str:
    return f"System update snapshot - {timestamp}"


def sanitize_comment(comment: str, timestamp: str) -> str:
    """
    Return the comment unchanged if it is free of shell metacharacters,
    otherwise the fixed fallback comment.
    """
    if any(ch in UNSAFE_COMMENT_CHARS for ch in comment):
        logger.warning(f"Snapshot comment rejected, using fallback: {comment!r}")
        return fallback_comment(timestamp)
    return comment


class SnapshotStep(Step):
    """Timeshift snapshot (non-fatal, skipped when Timeshift is absent)."""

    name = "snapshot"
    failure_key = "error_snapshot"
    spaced = True

    def __init__(self, context: StepContext, clock: Callable[[], datetime] = datetime.now):
        super().__init__(context)
        self._clock = clock

    def enabled(self, config: RunConfig) -> bool:
        return config.create_snapshot

    def build_comment(self) -> str:
        timestamp = self._clock().strftime(COMMENT_TIME_FORMAT)
        return sanitize_comment(self.console.text("before_update", timestamp), timestamp)

    def execute(self, config: RunConfig) -> StepOutcome:
        if not self.context.tool_exists(SNAPSHOT_TOOL):
            self.console.warning("timeshift_missing")
            return self.skipped()

        self.console.info("creating_snapshot")

        comment = self.build_comment()
        result = self.runner.run(
            "sudo", [SNAPSHOT_TOOL, "--create", "--comments", comment, "--scripted"]
        )
        if not result.ok:
            self.console.warning("snapshot_failed")
            return self.failed(result.error)

        self.console.success("snapshot_success")
        return self.ok()
