"""
Tests for the subprocess runner and tool presence check.
"""

import sys

import pytest


class TestCommandExists:
    """command_exists() resolves names on PATH and never raises."""

    @pytest.mark.unit
    def test_existing_command(self):
        from uubu.runner import command_exists
        assert command_exists("sh") is True

    @pytest.mark.unit
    def test_missing_command(self):
        from uubu.runner import command_exists
        assert command_exists("commandthatdoesnotexist123") is False

    @pytest.mark.unit
    def test_empty_name(self):
        from uubu.runner import command_exists
        assert command_exists("") is False

    @pytest.mark.unit
    def test_empty_path(self, monkeypatch):
        from uubu.runner import command_exists
        monkeypatch.setenv("PATH", "")
        assert command_exists("sh") is False

    @pytest.mark.unit
    def test_odd_name_does_not_raise(self):
        from uubu.runner import command_exists
        assert command_exists("bad\x00name") is False


class TestCommandResult:

    @pytest.mark.unit
    def test_ok_without_error(self):
        from uubu.runner import CommandResult
        assert CommandResult(command=["true"], returncode=0).ok is True

    @pytest.mark.unit
    def test_not_ok_with_error(self):
        from uubu.exceptions import CommandError
        from uubu.runner import CommandResult

        result = CommandResult(
            command=["false"], returncode=1, error=CommandError(["false"], 1)
        )
        assert result.ok is False


class TestSubprocessRunner:
    """Runs real, harmless processes."""

    @pytest.mark.integration
    def test_captures_stdout(self):
        from uubu.runner import SubprocessRunner

        result = SubprocessRunner().run(sys.executable, ["-c", "print('hello')"])
        assert result.ok
        assert result.returncode == 0
        assert "hello" in result.output

    @pytest.mark.integration
    def test_combines_stdout_and_stderr(self):
        from uubu.runner import SubprocessRunner

        script = (
            "import sys\n"
            "print('out', flush=True)\n"
            "print('err', file=sys.stderr, flush=True)\n"
        )
        result = SubprocessRunner().run(sys.executable, ["-c", script])
        assert "out" in result.output
        assert "err" in result.output

    @pytest.mark.integration
    def test_nonzero_exit_is_error(self):
        from uubu.exceptions import CommandError
        from uubu.runner import SubprocessRunner

        result = SubprocessRunner().run(
            sys.executable, ["-c", "print('boom'); raise SystemExit(3)"]
        )
        assert not result.ok
        assert isinstance(result.error, CommandError)
        assert result.returncode == 3
        assert result.error.returncode == 3
        assert "boom" in result.error.output

    @pytest.mark.integration
    def test_missing_program_is_error_not_exception(self):
        from uubu.runner import SubprocessRunner

        result = SubprocessRunner().run("commandthatdoesnotexist", [])
        assert not result.ok
        assert result.returncode is None
        assert result.error.cause is not None
        assert "could not execute" in result.error.message
