"""
Run configuration for uubu.

The CLI builds one RunConfig before the pipeline starts and hands it to
every step; it is frozen so no step can change another step's
eligibility.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

REBOOT_MARKER = Path("/var/run/reboot-required")
REBOOT_PACKAGES = Path("/var/run/reboot-required.pkgs")

NETWORK_PROBE_HOST = "google.com"
NETWORK_PROBE_PORT = 80
NETWORK_PROBE_TIMEOUT = 3.0

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class RunConfig:
    """Toggles for a single uubu run."""

    create_snapshot: bool = False
    update_snap: bool = True
    update_flatpak: bool = True
    check_reboot_needed: bool = True
    distribution_upgrade: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RunConfig":
        """Build a configuration from parsed command-line flags."""
        return cls(
            create_snapshot=args.snapshot,
            update_snap=not args.no_snap,
            update_flatpak=not args.no_flatpak,
            check_reboot_needed=not args.no_reboot,
            distribution_upgrade=args.dist_upgrade,
        )
