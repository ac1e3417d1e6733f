"""
uubu Exception Hierarchy

Structured errors carrying a machine-readable code, context details and
the underlying cause. Rendering to localized text happens in the console
layer, never here.
"""

from typing import Optional, Dict, Any, List


class UubuError(Exception):
    """
    Base exception for all uubu errors.

    Attributes:
        message: Untranslated one-line summary, shown after the localized prefix
        code: Stable identifier, defaults to the class name
        details: Context for the log file (command line, host, uid)
        cause: Lower-level exception, if any
        recoverable: False for conditions that end the run on their own
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        self.recoverable = recoverable

    def __str__(self):
        s = f"[{self.code}] {self.message}"
        if self.details:
            s += f" (details: {self.details})"
        if self.cause:
            s += f" caused by: {self.cause}"
        return s

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into a record for the run log."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
            "cause": repr(self.cause) if self.cause is not None else None,
            "recoverable": self.recoverable,
        }


# =============================================================================
# External command errors
# =============================================================================

class CommandError(UubuError):
    """An external program could not be started or exited non-zero."""
    def __init__(
        self,
        command: List[str],
        returncode: Optional[int] = None,
        output: str = "",
        cause: Optional[Exception] = None,
    ):
        cmdline = " ".join(command)
        if returncode is None:
            message = f"could not execute '{cmdline}'"
        else:
            message = f"'{cmdline}' exited with status {returncode}"
        super().__init__(
            message,
            code="COMMAND_FAILED",
            details={"command": cmdline, "returncode": returncode},
            cause=cause,
        )
        self.command = list(command)
        self.returncode = returncode
        self.output = output


# =============================================================================
# Startup errors
# =============================================================================

class CatalogError(UubuError):
    """A message catalog could not be loaded."""
    def __init__(self, language: str, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Cannot load message catalog '{language}': {reason}",
            code="CATALOG_UNAVAILABLE",
            details={"language": language},
            cause=cause,
            recoverable=False,
        )


# =============================================================================
# Preflight errors
# =============================================================================

class PrivilegeError(UubuError):
    """The tool was started by the superuser."""
    def __init__(self, uid: int = 0):
        super().__init__(
            "Running as root is not allowed; uubu calls sudo itself",
            code="RUNNING_AS_ROOT",
            details={"uid": uid},
            recoverable=False,
        )


class NetworkError(UubuError):
    """The reachability probe failed."""
    def __init__(self, host: str, port: int, cause: Optional[Exception] = None):
        super().__init__(
            f"Cannot reach {host}:{port}",
            code="NETWORK_UNREACHABLE",
            details={"host": host, "port": port},
            cause=cause,
            recoverable=False,
        )


# =============================================================================
# Interactive errors
# =============================================================================

class PromptError(UubuError):
    """The operator's answer could not be read."""
    def __init__(self, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Cannot read answer: {reason}",
            code="PROMPT_FAILED",
            cause=cause,
        )
