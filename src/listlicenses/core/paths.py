# paths.py
# SPDX-License-Identifier: MIT
"""Turn license file paths into browsable repository paths for reports."""

from __future__ import annotations

import re
from collections.abc import Sequence

from .log import get_logger

log = get_logger(__name__)

__all__ = ["make_replacer", "display_path", "display_package", "VERSION_PARSE_ERROR"]

VERSION_PARSE_ERROR = "UNKNOWN-version parse error"


def make_replacer(replacements: Sequence[tuple[str, str]]):
    """Return a function applying ``replacements`` in a single left-to-right pass.

    At each position the first listed ``old`` string that matches wins, and
    replaced text is never scanned again.
    """
    pairs = [(old, new) for old, new in replacements if old]
    if not pairs:
        return lambda text: text
    table = dict(pairs[::-1])
    pattern = re.compile("|".join(re.escape(old) for old, _ in pairs))
    return lambda text: pattern.sub(lambda m: table[m.group(0)], text)


def _split_gopkg_name(versioned: str) -> tuple[str, str] | None:
    parts = versioned.split(".")
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


def display_path(raw_path: str, prune_prefix: str, replacer=None) -> str:
    """Rewrite a license path for display.

    Nothing changes unless ``prune_prefix`` is set. Otherwise the prefix is
    trimmed, ``replacer`` maps vanity hosts to their repositories, and GitHub
    and gopkg.in paths become ``blob`` URLs:

    * ``github.com/o/r/LICENSE`` -> ``github.com/o/r/blob/master/LICENSE``
    * ``gopkg.in/yaml.v2/LICENSE`` -> ``github.com/go-yaml/yaml/blob/v2/LICENSE``
    * ``gopkg.in/user/pkg.v3/LICENSE`` -> ``github.com/user/pkg/blob/v3/LICENSE``
    """
    if not prune_prefix:
        return raw_path
    path = raw_path.removeprefix(prune_prefix)
    if replacer is not None:
        path = replacer(path)
    parts = path.split("/")
    if len(parts) < 3:
        return path
    host = parts[0]
    if host == "github.com":
        return "/".join([*parts[:3], "blob/master", *parts[3:]])
    if host == "gopkg.in":
        has_user = "." not in parts[1]
        if has_user:
            versioned = _split_gopkg_name(parts[2])
            if versioned is None:
                return VERSION_PARSE_ERROR
            name, version = versioned
            return "/".join(["github.com", parts[1], name, "blob", version, *parts[3:]])
        versioned = _split_gopkg_name(parts[1])
        if versioned is None:
            return VERSION_PARSE_ERROR
        name, version = versioned
        return "/".join(["github.com", f"go-{name}", name, "blob", version, *parts[2:]])
    log.debug("No repository mapping for license path %s", path)
    return path


def display_package(package: str, prune_prefix: str) -> str:
    """Return ``package`` without ``prune_prefix``."""
    if not prune_prefix:
        return package
    return package.removeprefix(prune_prefix)
