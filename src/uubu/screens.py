"""
Help and version screens.

Rendered from Jinja2 templates bundled with the package; the active
message catalog is exposed to templates as msg().
"""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from . import __author__, __build_time__, __git_commit__, __license__, __version__
from .i18n import MessageCatalog

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

HELP_OPTIONS = [
    ("-h, --help", "flag_help"),
    ("-v, --version", "flag_version"),
    ("-s, --snapshot", "flag_snapshot"),
    ("--no-snap", "flag_no_snap"),
    ("--no-flatpak", "flag_no_flatpak"),
    ("--no-reboot", "flag_no_reboot"),
    ("--dist-upgrade", "flag_dist_upgrade"),
    ("--verbose", "flag_verbose"),
    ("--log-file PATH", "flag_log_file"),
]

HELP_EXAMPLES = [
    ("", "help_example_1"),
    ("-s", "help_example_2"),
    ("--dist-upgrade", "help_example_3"),
    ("--no-snap --no-flatpak", "help_example_4"),
]


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def render(name: str, catalog: MessageCatalog, **variables) -> str:
    """Render a screen template with the catalog available as msg()."""
    logger.debug(f"Rendering {name} ({catalog.language})")
    template = _environment().get_template(name)
    return template.render(msg=catalog.get, **variables)


def help_text(catalog: MessageCatalog, prog: str) -> str:
    return render(
        "help.txt.j2",
        catalog,
        prog=prog,
        options=HELP_OPTIONS,
        examples=HELP_EXAMPLES,
        author=__author__,
        license=__license__,
    )


def version_text(catalog: MessageCatalog, prog: str = "uubu") -> str:
    return render(
        "version.txt.j2",
        catalog,
        prog=prog,
        version=__version__,
        build_time=__build_time__,
        git_commit=__git_commit__,
        language=catalog.language,
    )
