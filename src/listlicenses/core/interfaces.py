# interfaces.py
# SPDX-License-Identifier: MIT
"""Data types and protocols shared by the enumerator, core, and renderers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

__all__ = [
    "WordSet",
    "Template",
    "PackageInfo",
    "MatchResult",
    "LicenseRecord",
    "PackageEnumerator",
    "Product",
]

# Normalized token -> index of its first occurrence in the source text.
WordSet = dict[str, int]


# -----------------------------------------------------------------------------
# Shared data types
# -----------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Template:
    """
    A canonical license text reduced to its vocabulary.

    Attributes:
        title (str): Display title, e.g. ``MIT License``.
        nickname (str): Optional short name from the template header.
        words (Mapping[str, int]): Word set of the license body.
    """

    title: str
    nickname: str = ""
    words: Mapping[str, int] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class PackageInfo:
    """
    Package metadata supplied by a package enumerator.

    Attributes:
        import_path (str): Slash separated import path, e.g.
            ``github.com/owner/repo/sub``.
        root (str): Source root; the package lives under ``root/src``.
        name (str): Package name as reported by the enumerator.
        dir (str): Package directory on disk, informational only.
        error (str | None): Set when the enumerator could not resolve the
            package.
    """

    import_path: str
    root: str = ""
    name: str = ""
    dir: str = ""
    error: str | None = None


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Best template for one license file, with its vocabulary differences."""

    template: Template | None
    score: float
    extra_words: tuple[str, ...] = ()
    missing_words: tuple[str, ...] = ()
    file_content: bytes = b""


@dataclass(slots=True)
class LicenseRecord:
    """
    Result of the matching pass for one package, or one license file after
    grouping.

    Attributes:
        package (str): Import path, or the common prefix after grouping.
        path (str): License path relative to the source root; empty when no
            license file was found.
        score (float): Similarity of the file to ``template``.
        template (Template | None): Best matching template.
        extra_words (Sequence[str]): Words in the file but not the template.
        missing_words (Sequence[str]): Words in the template but not the file.
        file_content (bytes): Raw license file content.
        error (str): Resolution error reported by the enumerator.
        manual_path (str): Displayed license URI, overriding ``path``.
    """

    package: str
    path: str = ""
    score: float = 0.0
    template: Template | None = None
    extra_words: Sequence[str] = ()
    missing_words: Sequence[str] = ()
    file_content: bytes = b""
    error: str = ""
    manual_path: str = ""

    def __post_init__(self) -> None:
        if self.error and self.template is not None:
            raise ValueError(
                f"license record for {self.package!r} cannot carry both an error and a template"
            )

    @classmethod
    def from_match(cls, package: str, path: str, match: MatchResult) -> "LicenseRecord":
        return cls(
            package=package,
            path=path,
            score=match.score,
            template=match.template,
            extra_words=match.extra_words,
            missing_words=match.missing_words,
            file_content=match.file_content,
        )


# -----------------------------------------------------------------------------
# Collaborator protocols
# -----------------------------------------------------------------------------

@runtime_checkable
class PackageEnumerator(Protocol):
    """Lists packages, their dependencies, and their on-disk metadata."""

    def list_packages_and_deps(self, pkgs: Sequence[str]) -> list[str]:
        ...

    def list_standard_packages(self) -> list[str]:
        ...

    def get_packages_info(self, pkgs: Sequence[str]) -> list[PackageInfo]:
        ...


@runtime_checkable
class Product(Protocol):
    """Per-deployment customisation of a license report."""

    name: str

    def skip_license(self, record: LicenseRecord) -> bool:
        """Return True to drop ``record`` from the report."""
        ...

    def extra_licenses(self) -> list[LicenseRecord]:
        """Return licenses of dependencies the enumerator cannot see."""
        ...

    def replacements(self) -> list[tuple[str, str]]:
        """Return ordered (old, new) substitutions for displayed paths."""
        ...

    def override_license(self, pkg: str, label: str) -> str:
        """Return a forced license label for ``pkg``, or ``label`` unchanged."""
        ...
