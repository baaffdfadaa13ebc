# conftest.py
# SPDX-License-Identifier: MIT
from __future__ import annotations

from importlib import resources
from pathlib import Path

import pytest

from listlicenses.core.interfaces import PackageInfo


def template_body(asset_name: str) -> str:
    """Return the license body of a packaged template, after its header."""
    text = (resources.files("listlicenses") / "assets" / asset_name).read_text(encoding="utf-8")
    return text.split("---\n", 2)[2]


@pytest.fixture
def mit_text() -> str:
    return template_body("mit.txt").replace("[year] [fullname]", "2020 Jane Doe")


class FakeEnumerator:
    """In-memory package enumerator over a GOPATH-like tree."""

    def __init__(self, root: Path, deps: list[str], *, standard=(), errors=None):
        self.root = root
        self.deps = deps
        self.standard = list(standard)
        self.errors = dict(errors or {})
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    def list_packages_and_deps(self, pkgs):
        self.calls.append(("deps", tuple(pkgs)))
        return list(self.deps)

    def list_standard_packages(self):
        return list(self.standard)

    def get_packages_info(self, pkgs):
        infos = []
        for pkg in pkgs:
            error = self.errors.get(pkg)
            infos.append(
                PackageInfo(
                    import_path=pkg,
                    root=str(self.root),
                    name=pkg.rsplit("/", 1)[-1] if not error else "",
                    error=error,
                )
            )
        return infos


@pytest.fixture
def gopath(tmp_path: Path) -> Path:
    root = tmp_path / "gopath"
    (root / "src").mkdir(parents=True)
    return root


def make_package(root: Path, import_path: str, files: dict[str, str] | None = None) -> Path:
    pkg_dir = root / "src" / import_path
    pkg_dir.mkdir(parents=True, exist_ok=True)
    for name, content in (files or {}).items():
        (pkg_dir / name).write_text(content, encoding="utf-8")
    return pkg_dir
