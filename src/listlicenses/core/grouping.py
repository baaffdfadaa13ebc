# grouping.py
# SPDX-License-Identifier: MIT
"""Collapse packages sharing one license file into a single entry.

Sub-packages of one repository usually carry the repository's root license.
They are merged under their longest common import path prefix.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace

from .errors import GroupingError
from .interfaces import LicenseRecord
from .log import get_logger

log = get_logger(__name__)

__all__ = ["longest_common_prefix", "group_licenses"]


@dataclass
class _PrefixNode:
    name: str = ""
    children: dict[str, "_PrefixNode"] = field(default_factory=dict)
    # A package path ends at this node.
    terminal: bool = False


def longest_common_prefix(packages: Iterable[str]) -> str:
    """Return the longest common prefix of import paths, by path component.

    ``["x/y/a", "x/y/b"]`` gives ``"x/y"``; ``["x/ya", "x/yb"]`` gives ``"x"``;
    ``["x/y", "x/y/z"]`` gives ``"x/y"``.
    """
    root = _PrefixNode()
    for package in packages:
        node = root
        for part in package.split("/"):
            child = node.children.get(part)
            if child is None:
                child = node.children[part] = _PrefixNode(name=part)
            node = child
        node.terminal = True

    prefix: list[str] = []
    node = root
    while len(node.children) == 1 and not node.terminal:
        node = next(iter(node.children.values()))
        prefix.append(node.name)
    return "/".join(prefix)


def group_licenses(records: Sequence[LicenseRecord]) -> list[LicenseRecord]:
    """Group records by license path under their common import prefix.

    Records without a license path are kept as they are. Each group is
    emitted where its first member appeared, built from that first member
    with ``package`` replaced by the group's prefix.

    Raises:
        GroupingError: If records sharing a path have no common prefix.
    """
    buckets: dict[str, list[LicenseRecord]] = {}
    for record in records:
        if record.path:
            buckets.setdefault(record.path, []).append(record)

    merged: dict[str, LicenseRecord] = {}
    for path, members in buckets.items():
        if len(members) == 1:
            merged[path] = members[0]
            continue
        prefix = longest_common_prefix(m.package for m in members)
        if not prefix:
            packages = ", ".join(m.package for m in members)
            raise GroupingError(
                f"packages share the license file {path} but no common prefix: {packages}",
                members,
            )
        log.debug("Grouped %d packages under %s (%s)", len(members), prefix, path)
        merged[path] = replace(members[0], package=prefix)

    kept: list[LicenseRecord] = []
    for record in records:
        if not record.path:
            kept.append(record)
            continue
        group = merged.pop(record.path, None)
        if group is not None:
            kept.append(group)
    return kept
