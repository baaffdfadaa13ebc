# locator.py
# SPDX-License-Identifier: MIT
"""Find the license file governing a package.

The search starts in the package directory and walks up the import path one
component at a time, stopping at the first directory holding a file whose
name looks like a license.
"""

from __future__ import annotations

import os
import posixpath
import re

from .errors import LicenseSearchError
from .interfaces import PackageInfo
from .log import get_logger

log = get_logger(__name__)

__all__ = ["score_license_name", "find_license", "package_dir", "SOURCE_DIR"]

SOURCE_DIR = "src"

LICENSE_NAME_RE = re.compile(
    r"^(?:"
    r"((?:un)?licen[sc]e)|"
    r"((?:un)?licen[sc]e\.(?:md|markdown|txt))|"
    r"(copy(?:ing|right)(?:\.[^.]+)?)|"
    r"(licen[sc]e\.[^.]+)"
    r")$",
    re.IGNORECASE,
)
# Score for each capture group of LICENSE_NAME_RE, in group order.
_GROUP_SCORES = (1.0, 0.9, 0.8, 0.7)


def score_license_name(name: str) -> float:
    """Return how likely ``name`` is a license file, between 0 and 1."""
    match = LICENSE_NAME_RE.match(name)
    if match is None:
        return 0.0
    for group, score in zip(match.groups(), _GROUP_SCORES):
        if group:
            return score
    return 0.0


def package_dir(root: str, import_path: str) -> str:
    """Return the on-disk directory of ``import_path`` under ``root``."""
    return os.path.join(root, SOURCE_DIR, *import_path.split("/"))


def _best_license_name(directory: str) -> str:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        raise LicenseSearchError(
            f"cannot list {directory}: {exc.strerror or exc}", path=directory
        ) from exc
    best_score = 0.0
    best_name = ""
    for entry in entries:
        if not entry.is_file(follow_symlinks=False):
            continue
        score = score_license_name(entry.name)
        if score > best_score:
            best_score = score
            best_name = entry.name
    return best_name


def find_license(info: PackageInfo) -> str:
    """Locate the license file of a package.

    Args:
        info (PackageInfo): Package whose directory is searched first.

    Returns:
        str: Slash separated path of the license file relative to
        ``info.root/src``, or an empty string when no directory up the
        import path holds one.

    Raises:
        LicenseSearchError: If a directory along the way cannot be listed.
    """
    path = info.import_path.strip("/") or "."
    while path != ".":
        name = _best_license_name(package_dir(info.root, path))
        if name:
            found = posixpath.join(path, name)
            log.debug("License for %s found at %s", info.import_path, found)
            return found
        path = posixpath.dirname(path) or "."
    log.debug("No license file found for %s", info.import_path)
    return ""
