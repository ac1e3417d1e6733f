"""
Tests for the privilege and network preflight checks.
"""

import socket

import pytest

from uubu.config import RunConfig


class TestPrivilegeCheck:
    """Root fails, every other uid passes."""

    @pytest.mark.unit
    def test_root_is_fatal(self, context, output):
        from uubu.exceptions import PrivilegeError
        from uubu.preflight import PrivilegeCheck
        from uubu.steps import Severity, StepStatus

        outcome = PrivilegeCheck(context, geteuid=lambda: 0).execute(RunConfig())

        assert outcome.status == StepStatus.FAILED
        assert outcome.severity == Severity.FATAL
        assert outcome.fatal
        assert isinstance(outcome.cause, PrivilegeError)
        text = output.getvalue()
        assert "Do not run this program as root" in text
        assert "sudo" in text

    @pytest.mark.unit
    @pytest.mark.parametrize("uid", [1, 1000, 65534])
    def test_regular_user_passes(self, context, output, uid):
        from uubu.preflight import PrivilegeCheck
        from uubu.steps import StepStatus

        outcome = PrivilegeCheck(context, geteuid=lambda: uid).execute(RunConfig())

        assert outcome.status == StepStatus.OK
        assert output.getvalue() == ""

    @pytest.mark.unit
    def test_platform_without_uid_passes(self, context):
        from uubu.preflight import PrivilegeCheck

        outcome = PrivilegeCheck(context, geteuid=lambda: None).execute(RunConfig())
        assert not outcome.failed


class TestNetworkCheck:

    @pytest.mark.unit
    def test_reachable(self, context, output, connect_ok):
        from uubu.preflight import NetworkCheck
        from uubu.steps import StepStatus

        outcome = NetworkCheck(context, connect=connect_ok).execute(RunConfig())

        assert outcome.status == StepStatus.OK
        (address, timeout, conn), = connect_ok.connections
        assert address == ("google.com", 80)
        assert timeout == 3.0
        assert conn.closed
        assert "Internet connection OK" in output.getvalue()

    @pytest.mark.unit
    def test_timeout_is_fatal(self, context, output, connect_timeout):
        from uubu.exceptions import NetworkError
        from uubu.preflight import NetworkCheck

        outcome = NetworkCheck(context, connect=connect_timeout).execute(RunConfig())

        assert outcome.fatal
        assert isinstance(outcome.cause, NetworkError)
        assert isinstance(outcome.cause.cause, socket.timeout)
        assert "No internet connection" in output.getvalue()

    @pytest.mark.unit
    def test_dns_failure_is_fatal(self, context):
        from uubu.preflight import NetworkCheck

        def connect(address, timeout=None):
            raise socket.gaierror("Name or service not known")

        outcome = NetworkCheck(context, connect=connect).execute(RunConfig())
        assert outcome.fatal

    @pytest.mark.unit
    def test_custom_target(self, context, connect_ok):
        from uubu.preflight import NetworkCheck

        NetworkCheck(
            context, host="deb.debian.org", port=443, timeout=1.5, connect=connect_ok
        ).execute(RunConfig())

        (address, timeout, _), = connect_ok.connections
        assert address == ("deb.debian.org", 443)
        assert timeout == 1.5

    @pytest.mark.unit
    def test_stalled_resolver_bounded(self, context, output, monkeypatch):
        import threading
        import time

        from uubu.exceptions import NetworkError
        from uubu.preflight import NetworkCheck

        release = threading.Event()

        def slow_getaddrinfo(*args, **kwargs):
            release.wait(5)
            raise socket.gaierror("Temporary failure in name resolution")

        monkeypatch.setattr(socket, "getaddrinfo", slow_getaddrinfo)
        step = NetworkCheck(context, timeout=0.2)

        start = time.monotonic()
        try:
            outcome = step.execute(RunConfig())
        finally:
            release.set()
        elapsed = time.monotonic() - start

        assert elapsed < 1.5
        assert outcome.fatal
        assert isinstance(outcome.cause, NetworkError)
        assert isinstance(outcome.cause.cause, socket.timeout)
        assert "No internet connection" in output.getvalue()

    @pytest.mark.unit
    def test_late_connection_is_closed(self, context):
        import threading

        from uubu.preflight import NetworkCheck

        release = threading.Event()
        closed = threading.Event()

        class LateConnection:
            def close(self):
                closed.set()

        def connect(address, timeout=None):
            release.wait(5)
            return LateConnection()

        outcome = NetworkCheck(context, timeout=0.1, connect=connect).execute(RunConfig())
        release.set()

        assert outcome.fatal
        assert closed.wait(5)

    @pytest.mark.unit
    def test_unexpected_connect_error_propagates(self, context):
        from uubu.preflight import NetworkCheck

        def connect(address, timeout=None):
            raise ValueError("bad address")

        with pytest.raises(ValueError):
            NetworkCheck(context, connect=connect).execute(RunConfig())
