# golist.py
# SPDX-License-Identifier: MIT
"""Package enumerator backed by the ``go list`` command."""

from __future__ import annotations

import json
import os
import subprocess
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any

from ..core.errors import EnumerationError, MissingPackageError
from ..core.interfaces import PackageInfo
from ..core.log import get_logger

log = get_logger(__name__)

__all__ = ["GoListEnumerator", "parse_package_stream", "MISSING_MARKERS"]

# ``go list`` output fragments meaning a requested package does not exist.
MISSING_MARKERS = (
    "cannot find package",
    "no buildable Go source files",
)

DEPS_TEMPLATE = "{{range .Deps}}{{.}}|{{end}}"

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


def _env_with_gopath(gopath: str | None, base: Mapping[str, str] | None = None) -> dict[str, str] | None:
    """Return a copy of the environment with GOPATH forced, or None to inherit."""
    if not gopath:
        return None
    env = {k: v for k, v in (base if base is not None else os.environ).items() if k != "GOPATH"}
    env["GOPATH"] = gopath
    return env


def parse_package_stream(output: str) -> Iterator[dict[str, Any]]:
    """Yield the JSON objects of a ``go list -json`` output stream."""
    decoder = json.JSONDecoder()
    index = 0
    length = len(output)
    while True:
        while index < length and output[index].isspace():
            index += 1
        if index >= length:
            return
        obj, index = decoder.raw_decode(output, index)
        yield obj


def _package_info(obj: Mapping[str, Any]) -> PackageInfo:
    error = obj.get("Error")
    err_text = error.get("Err") if isinstance(error, Mapping) else None
    import_path = obj.get("ImportPath", "")
    name = obj.get("Name", "")
    if err_text and not name:
        name = import_path
    return PackageInfo(
        import_path=import_path,
        root=obj.get("Root", ""),
        name=name,
        dir=obj.get("Dir", ""),
        error=err_text or None,
    )


class GoListEnumerator:
    """List Go packages, their dependencies, and their locations.

    Args:
        gopath (str | None): GOPATH for the subprocesses; inherited when None.
        go_binary (str): ``go`` executable.
        runner: Callable with the signature of :func:`subprocess.run`.
    """

    def __init__(self, gopath: str | None = None, *, go_binary: str = "go", runner: Runner | None = None):
        self.gopath = gopath
        self.go_binary = go_binary
        self._run = runner or subprocess.run

    def _go(self, args: Sequence[str], *, detect_missing: bool = True) -> str:
        argv = [self.go_binary, *args]
        log.debug("Running %s", " ".join(argv))
        try:
            proc = self._run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                env=_env_with_gopath(self.gopath),
                check=False,
            )
        except OSError as exc:
            raise EnumerationError(f"cannot run {self.go_binary}: {exc}") from exc
        output = proc.stdout or ""
        if proc.returncode != 0:
            if detect_missing and any(marker in output for marker in MISSING_MARKERS):
                raise MissingPackageError(output)
            raise EnumerationError(f"'go {' '.join(args)}' failed with:\n{output}")
        return output

    def expand_packages(self, pkgs: Sequence[str]) -> list[str]:
        """Expand package patterns such as ``./...`` into import paths."""
        output = self._go(["list", *pkgs])
        return [line.strip() for line in output.splitlines() if line.strip()]

    def list_packages_and_deps(self, pkgs: Sequence[str]) -> list[str]:
        """Return the requested packages and all their dependencies, sorted."""
        expanded = self.expand_packages(pkgs)
        output = self._go(["list", "-f", DEPS_TEMPLATE, *expanded])
        seen: set[str] = set()
        deps: list[str] = []
        for name in [*output.split("|"), *expanded]:
            name = name.strip()
            if name and name not in seen:
                seen.add(name)
                deps.append(name)
        return sorted(deps)

    def list_standard_packages(self) -> list[str]:
        return self.expand_packages(["std", "cmd"])

    def get_packages_info(self, pkgs: Sequence[str]) -> list[PackageInfo]:
        """Return metadata for each of ``pkgs``, in the same order.

        Raises:
            EnumerationError: If ``go list`` fails or answers for other
                packages than the ones asked for.
        """
        if not pkgs:
            return []
        # TODO: split the argument list for platforms with a small ARG_MAX.
        output = self._go(["list", "-e", "-json", *pkgs], detect_missing=False)
        try:
            objects = list(parse_package_stream(output))
        except json.JSONDecodeError as exc:
            raise EnumerationError(f"cannot decode go list output: {exc}") from exc
        infos: list[PackageInfo] = []
        for index, pkg in enumerate(pkgs):
            if index >= len(objects):
                raise EnumerationError(f"could not retrieve package information for {pkg}")
            info = _package_info(objects[index])
            if info.import_path != pkg:
                raise EnumerationError(
                    f"package information mismatch: asked for {pkg}, got {info.import_path}"
                )
            infos.append(info)
        return infos
