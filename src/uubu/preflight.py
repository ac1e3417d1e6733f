"""
Preflight checks run before any package operation.

Both checks are fatal: uubu escalates privileges itself per command, so
it must not start as root, and nothing works without the network.
"""

from __future__ import annotations

import logging
import os
import socket
import threading
from typing import Callable, Optional

from .config import (
    NETWORK_PROBE_HOST,
    NETWORK_PROBE_PORT,
    NETWORK_PROBE_TIMEOUT,
    RunConfig,
)
from .exceptions import NetworkError, PrivilegeError
from .steps import Step, StepContext, StepOutcome

logger = logging.getLogger(__name__)


def effective_uid() -> Optional[int]:
    geteuid = getattr(os, "geteuid", None)
    return geteuid() if geteuid else None


class PrivilegeCheck(Step):
    """Refuse to run as the superuser."""

    name = "privilege_check"
    fatal = True

    def __init__(
        self,
        context: StepContext,
        geteuid: Callable[[], Optional[int]] = effective_uid,
    ):
        super().__init__(context)
        self._geteuid = geteuid

    def execute(self, config: RunConfig) -> StepOutcome:
        uid = self._geteuid()
        if uid == 0:
            self.console.error("no_root")
            self.console.warning("use_sudo")
            return self.failed(PrivilegeError(uid))
        return self.ok()


class NetworkCheck(Step):
    """
    Probe a well-known host with a bounded TCP connect.

    Name resolution happens inside the connect callable, and the socket
    timeout does not cover it, so the whole attempt runs on a daemon
    thread that is abandoned once the deadline passes.
    """

    name = "network_check"
    fatal = True

    def __init__(
        self,
        context: StepContext,
        host: str = NETWORK_PROBE_HOST,
        port: int = NETWORK_PROBE_PORT,
        timeout: float = NETWORK_PROBE_TIMEOUT,
        connect: Callable = socket.create_connection,
    ):
        super().__init__(context)
        self.host = host
        self.port = port
        self.timeout = timeout
        self._connect = connect

    def _probe(self):
        """Connect within ``self.timeout`` seconds, resolution included."""
        result = {}
        lock = threading.Lock()

        def attempt():
            try:
                conn = self._connect((self.host, self.port), timeout=self.timeout)
            except Exception as e:
                with lock:
                    result["error"] = e
                return
            with lock:
                if result.get("abandoned"):
                    conn.close()
                else:
                    result["conn"] = conn

        thread = threading.Thread(target=attempt, name="uubu-network-probe", daemon=True)
        thread.start()
        thread.join(self.timeout)

        with lock:
            if "conn" in result:
                return result["conn"]
            if "error" in result:
                raise result["error"]
            result["abandoned"] = True
        raise socket.timeout(f"no answer from {self.host}:{self.port} within {self.timeout}s")

    def execute(self, config: RunConfig) -> StepOutcome:
        self.console.info("checking_internet")

        try:
            conn = self._probe()
        except OSError as e:
            logger.debug(f"Network probe to {self.host}:{self.port} failed: {e}")
            self.console.error("internet_error")
            return self.failed(NetworkError(self.host, self.port, cause=e))

        conn.close()
        self.console.success("internet_ok")
        return self.ok()
