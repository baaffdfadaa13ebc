# __init__.py
# SPDX-License-Identifier: MIT
"""
Top-level package exports for :mod:`listlicenses`.

listlicenses inventories the dependencies of Go packages, finds the license
file of each one, and matches it against a catalog of well-known license
texts. Most callers need only:

- :class:`ReportConfig` (or :func:`load_config_from_path`) to describe a run,
- :func:`run_report` to enumerate, match, group, and render in one call.

The matching core is usable on its own: :func:`load_templates`,
:func:`find_license`, :func:`match_templates`, and :func:`group_licenses`
operate on plain data and never run ``go``.

Examples:
    Report on one command::

        >>> from listlicenses import ReportConfig, run_report
        >>> cfg = ReportConfig(packages=("github.com/owner/tool/cmd/tool",))
        >>> stats = run_report(cfg)

    Score a single license file::

        >>> from listlicenses import load_templates, match_templates
        >>> result = match_templates(open("LICENSE", "rb").read(), load_templates())
        >>> result.template.title, round(result.score, 2)
"""

from __future__ import annotations

try:
    from importlib.metadata import version as _pkg_version

    __version__ = _pkg_version("listlicenses")
except Exception:  # PackageNotFoundError or runtime env oddities
    __version__ = "0.0.0+unknown"

from .cli.runner import ReportStats, run_report
from .core.config import ReportConfig, load_config_from_path
from .core.errors import (
    EnumerationError,
    GroupingError,
    LicenseSearchError,
    ListLicensesError,
    MissingPackageError,
    TemplateError,
)
from .core.grouping import group_licenses, longest_common_prefix
from .core.interfaces import LicenseRecord, MatchResult, PackageInfo, Template
from .core.licenses import list_licenses, match_packages
from .core.locator import find_license, score_license_name
from .core.log import configure_logging, get_logger
from .core.matcher import match_templates
from .core.templates import load_templates, parse_template
from .core.wordset import normalize

__all__ = [
    "__version__",
    "ReportConfig",
    "ReportStats",
    "load_config_from_path",
    "run_report",
    "list_licenses",
    "match_packages",
    "load_templates",
    "parse_template",
    "normalize",
    "find_license",
    "score_license_name",
    "match_templates",
    "group_licenses",
    "longest_common_prefix",
    "Template",
    "PackageInfo",
    "MatchResult",
    "LicenseRecord",
    "ListLicensesError",
    "EnumerationError",
    "MissingPackageError",
    "LicenseSearchError",
    "GroupingError",
    "TemplateError",
    "configure_logging",
    "get_logger",
]
