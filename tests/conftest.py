"""
Pytest configuration and shared fixtures for uubu tests.

Provides a fake command runner and in-memory console so no real system
command ever runs.
"""

import io
import pytest
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from uubu.exceptions import CommandError
from uubu.runner import CommandResult, CommandRunner


APT_LIST_HEADER = "Listing... Done"


class FakeRunner(CommandRunner):
    """
    Records every invocation and answers from a script.

    Responses are keyed by the full command line; anything not scripted
    succeeds with empty output.
    """

    def __init__(self):
        self.calls: List[List[str]] = []
        self._responses: Dict[Tuple[str, ...], Tuple[str, int]] = {}

    def script(self, *cmd: str, output: str = "", returncode: int = 0):
        self._responses[tuple(cmd)] = (output, returncode)
        return self

    def fail(self, *cmd: str, output: str = "E: failure", returncode: int = 100):
        return self.script(*cmd, output=output, returncode=returncode)

    def run(self, name: str, args: Sequence[str] = ()) -> CommandResult:
        cmd = [name, *args]
        self.calls.append(cmd)
        output, returncode = self._responses.get(tuple(cmd), ("", 0))
        if returncode != 0:
            return CommandResult(
                command=cmd,
                output=output,
                returncode=returncode,
                error=CommandError(cmd, returncode, output),
            )
        return CommandResult(command=cmd, output=output, returncode=0)

    def invoked(self, *cmd: str) -> bool:
        return list(cmd) in self.calls

    def count(self, *cmd: str) -> int:
        return self.calls.count(list(cmd))

    def programs(self) -> List[str]:
        """Second word for sudo calls, first word otherwise."""
        return [c[1] if c[0] == "sudo" else c[0] for c in self.calls]


def upgradable_output(*packages: str) -> str:
    return "\n".join([APT_LIST_HEADER, *packages]) + "\n"


# ============ Catalog / Console Fixtures ============

@pytest.fixture
def catalog():
    """The bundled English catalog."""
    from uubu.i18n import load_catalog
    return load_catalog("en")


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(catalog, output):
    from uubu.console import Console
    return Console(catalog, stream=output, color=False)


# ============ Runner Fixtures ============

@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def tools():
    """Set of tool names reported as installed; mutate in tests."""
    return {"timeshift", "snap", "flatpak"}


@pytest.fixture
def context(console, fake_runner, tools):
    from uubu.steps import StepContext
    return StepContext(
        console=console,
        runner=fake_runner,
        tool_exists=lambda name: name in tools,
    )


# ============ Network Fixtures ============

class FakeConnection:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture
def connect_ok():
    """Network probe that always connects."""
    connections = []

    def connect(address, timeout: Optional[float] = None):
        conn = FakeConnection()
        connections.append((address, timeout, conn))
        return conn

    connect.connections = connections
    return connect


@pytest.fixture
def connect_timeout():
    """Network probe that always times out."""
    import socket

    def connect(address, timeout: Optional[float] = None):
        raise socket.timeout("timed out")

    return connect


# ============ Marker Configuration ============

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "unit: fast unit tests with no external deps"
    )
    config.addinivalue_line(
        "markers", "integration: tests that spawn real processes"
    )
