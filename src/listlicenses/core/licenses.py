# licenses.py
# SPDX-License-Identifier: MIT
"""
Match the license of every dependency of a set of packages.

Order of work for one run:
1. Ask the enumerator for the requested packages and their dependencies,
   minus standard library packages.
2. Locate each package's license file (see :mod:`.locator`).
3. Score each distinct license file once against the template catalog.
"""

from __future__ import annotations

import os
from collections.abc import Collection, Iterable, Sequence
from pathlib import Path

from .errors import EnumerationError, LicenseSearchError, MissingPackageError
from .interfaces import LicenseRecord, MatchResult, PackageEnumerator, PackageInfo, Template
from .locator import find_license, package_dir
from .log import get_logger
from .matcher import match_templates
from .templates import load_templates

log = get_logger(__name__)

__all__ = [
    "match_packages",
    "list_licenses",
]


def _read_license(path: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise LicenseSearchError(f"cannot read license file {path}: {exc}", path=path) from exc


def match_packages(
    infos: Iterable[PackageInfo],
    templates: Sequence[Template],
    *,
    standard: Collection[str] = (),
) -> list[LicenseRecord]:
    """Build one license record per package.

    Packages the enumerator failed to resolve get a record carrying the
    error and are not searched. Packages listed in ``standard`` are skipped.
    License files shared by several packages are read and scored once.

    Args:
        infos (Iterable[PackageInfo]): Packages to inspect, in report order.
        templates (Sequence[Template]): License template catalog.
        standard (Collection[str]): Import paths to leave out.

    Returns:
        list[LicenseRecord]: Records in the order of ``infos``.

    Raises:
        LicenseSearchError: If a directory cannot be listed or a license
            file cannot be read.
    """
    matched: dict[str, MatchResult] = {}
    records: list[LicenseRecord] = []
    for info in infos:
        if info.error:
            records.append(LicenseRecord(package=info.name or info.import_path, error=info.error))
            continue
        if info.import_path in standard:
            continue
        path = find_license(info)
        if not path:
            records.append(LicenseRecord(package=info.import_path))
            continue
        abs_path = os.path.abspath(package_dir(info.root, path))
        match = matched.get(abs_path)
        if match is None:
            match = match_templates(_read_license(abs_path), templates)
            matched[abs_path] = match
        else:
            log.debug("Reusing match of %s for %s", abs_path, info.import_path)
        records.append(LicenseRecord.from_match(info.import_path, path, match))
    log.info(
        "Matched %d packages against %d distinct license files",
        len(records),
        len(matched),
    )
    return records


def list_licenses(
    enumerator: PackageEnumerator,
    pkgs: Sequence[str],
    *,
    templates: Sequence[Template] | None = None,
) -> list[LicenseRecord]:
    """List the licenses of ``pkgs`` and all their non-standard dependencies.

    Args:
        enumerator (PackageEnumerator): Source of package metadata.
        pkgs (Sequence[str]): Requested package specifiers.
        templates (Sequence[Template] | None): Template catalog; the packaged
            catalog when omitted.

    Returns:
        list[LicenseRecord]: One record per dependency, ungrouped.

    Raises:
        MissingPackageError: If a requested package does not exist.
        EnumerationError: If the enumerator fails otherwise.
        LicenseSearchError: If the license search hits a filesystem error.
        TemplateError: If the template catalog cannot be loaded.
    """
    if templates is None:
        templates = load_templates()
    try:
        deps = enumerator.list_packages_and_deps(pkgs)
    except MissingPackageError:
        raise
    except EnumerationError as exc:
        raise EnumerationError(f"could not list {' '.join(pkgs)} dependencies: {exc}") from exc
    try:
        standard = set(enumerator.list_standard_packages())
    except EnumerationError as exc:
        raise EnumerationError(f"could not list standard packages: {exc}") from exc
    infos = enumerator.get_packages_info(deps)
    log.debug("Resolved %d dependencies (%d standard packages known)", len(infos), len(standard))
    return match_packages(infos, templates, standard=standard)
