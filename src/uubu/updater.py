#!/usr/bin/env python3
"""
uubu Package Update Step

Runs the APT sequence:
1. Refresh the package index (apt update)       - fatal
2. List upgradable packages (apt list)          - fatal
3. Upgrade or dist-upgrade, never both          - advisory
4. Remove unneeded packages (apt autoremove)    - advisory
5. Clean the package cache (apt autoclean)      - advisory
"""

from __future__ import annotations

import logging
from typing import List

from .config import RunConfig
from .steps import Step, StepOutcome

logger = logging.getLogger(__name__)

# apt banners that can leak into the combined output of `apt list`
APT_NOISE_PREFIXES = (
    "Listing...",
    "En train de lister",
    "WARNING: apt does not have a stable CLI interface",
)


def parse_upgradable(output: str) -> List[str]:
    """
    Extract package descriptor lines from `apt list --upgradable` output.

    The first line is the header and is always dropped, as are blank
    lines and apt's own banners. Descriptors are returned verbatim.
    """
    packages = []
    for index, line in enumerate(output.strip().split("\n")):
        line = line.strip()
        if index == 0 or not line:
            continue
        if line.startswith(APT_NOISE_PREFIXES):
            continue
        packages.append(line)
    return packages


class PackageUpdateStep(Step):
    """System package upgrade through APT."""

    name = "package_update"
    fatal = True
    failure_key = "error_update"
    spaced = True

    def execute(self, config: RunConfig) -> StepOutcome:
        self.console.info("update_start")

        self.console.info("update_packages")
        result = self.runner.run("sudo", ["apt", "update"])
        if not result.ok:
            self.console.error("update_error")
            return self.failed(result.error)

        result = self.runner.run("apt", ["list", "--upgradable"])
        if not result.ok:
            self.console.error("check_packages")
            return self.failed(result.error)

        packages = parse_upgradable(result.output)
        logger.info(f"{len(packages)} upgradable packages")
        if not packages:
            self.console.success("no_packages")
            return self.ok()

        self.console.warning("packages_count", len(packages))
        self.console.info("packages_list")
        for line in packages:
            self.console.raw(line)
        self.console.blank()

        self.console.info("installing_updates")
        if config.distribution_upgrade:
            self.console.info("dist_upgrade")
            if not self.runner.run("sudo", ["apt", "dist-upgrade", "-y"]).ok:
                self.console.warning("dist_error")
        else:
            self.console.info("upgrade")
            if not self.runner.run("sudo", ["apt", "upgrade", "-y"]).ok:
                self.console.warning("upgrade_error")

        self.console.info("removing_obsolete")
        if not self.runner.run("sudo", ["apt", "autoremove", "-y"]).ok:
            self.console.warning("autoremove_error")

        self.console.info("cleaning_cache")
        if not self.runner.run("sudo", ["apt", "autoclean"]).ok:
            self.console.warning("autoclean_error")

        self.console.success("update_finished")
        return self.ok()
