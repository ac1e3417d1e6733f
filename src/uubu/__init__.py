"""
uubu - Ubuntu/Debian system updater

Runs the routine maintenance sequence in one command:
- Optional Timeshift snapshot before touching anything
- APT index refresh, upgrade (or dist-upgrade) and cleanup
- Snap and Flatpak refresh when those tools are installed
- Reboot-required detection with an interactive prompt
"""

__version__ = "1.2.0"
__build_time__ = "unknown"
__git_commit__ = "unknown"
__author__ = "NDXDev (NDXDev@gmail.com)"
__license__ = "MIT"

from .config import RunConfig
from .exceptions import UubuError, CommandError, CatalogError
from .i18n import MessageCatalog, load_catalog, detect_language
from .orchestrator import Orchestrator, build_pipeline
from .runner import CommandResult, CommandRunner, SubprocessRunner, command_exists
from .steps import Severity, Step, StepContext, StepOutcome, StepStatus

__all__ = [
    "RunConfig",
    "UubuError",
    "CommandError",
    "CatalogError",
    "MessageCatalog",
    "load_catalog",
    "detect_language",
    "Orchestrator",
    "build_pipeline",
    "CommandResult",
    "CommandRunner",
    "SubprocessRunner",
    "command_exists",
    "Severity",
    "Step",
    "StepContext",
    "StepOutcome",
    "StepStatus",
]
