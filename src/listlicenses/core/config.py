# config.py
# SPDX-License-Identifier: MIT
"""Configuration models and helpers for license report runs.

A report is configured by :class:`ReportConfig`, whose sections mirror the
tables of a TOML config file::

    packages = ["github.com/owner/tool/cmd/tool"]
    product = "generic"

    [enumerator]
    gopath = "/home/me/go"

    [matching]
    confidence = 0.9

    [output]
    format = "csv"
    prune_path = "github.com/owner/tool/vendor/"

    [logging]
    level = "INFO"
"""
from __future__ import annotations

import json
try:  # pragma: no cover - optional dependency
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover
    try:
        import tomli as tomllib  # type: ignore[assignment]
    except Exception:  # pragma: no cover
        tomllib = None  # type: ignore[assignment]
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar

from .products import GENERIC_PRODUCT_NAME

__all__ = [
    "OutputFormat",
    "DEFAULT_CONFIDENCE",
    "EXACT_MATCH_SCORE",
    "EnumeratorConfig",
    "MatchingConfig",
    "OutputConfig",
    "LoggingConfig",
    "ReportConfig",
    "load_config_from_path",
]

T = TypeVar("T")

# Scores above this are reported without any confidence annotation.
EXACT_MATCH_SCORE = 0.99
DEFAULT_CONFIDENCE = 0.9


class OutputFormat:
    """Supported report formats."""

    TABLE = "table"
    CSV = "csv"
    MARKDOWN = "markdown"
    ALL = {TABLE, CSV, MARKDOWN}

    @classmethod
    def normalize(cls, value: Optional[str]) -> str:
        fmt = (value or cls.TABLE).strip().lower()
        if fmt not in cls.ALL:
            raise ValueError(f"Invalid output format: {value!r}. Expected one of {sorted(cls.ALL)}")
        return fmt


@dataclass(slots=True)
class EnumeratorConfig:
    """Settings for the ``go list`` package enumerator.

    Attributes:
        gopath (str | None): GOPATH for the ``go`` subprocesses; the
            inherited environment is used when None.
        go_binary (str): Name or path of the ``go`` executable.
    """
    gopath: Optional[str] = None
    go_binary: str = "go"


@dataclass(slots=True)
class MatchingConfig:
    """Settings for license matching and grouping.

    Attributes:
        confidence (float): Minimum score for a match to be accepted.
        run_all (bool): Report every package instead of grouping packages
            that share a license file.
        template_dir (str | None): Directory of template documents to use
            instead of the packaged catalog.
    """
    confidence: float = DEFAULT_CONFIDENCE
    run_all: bool = False
    template_dir: Optional[str] = None


@dataclass(slots=True)
class OutputConfig:
    """Settings for rendering the report.

    Attributes:
        format (str): One of ``table``, ``csv``, ``markdown``.
        words (bool): List words differing from the matched template.
        print_confidence (bool): Annotate inexact matches with their score.
        prune_path (str): Prefix trimmed from packages and license paths.
        consolidated_license_file (str | None): When set, the accepted
            license texts are concatenated into this file.
    """
    format: str = OutputFormat.TABLE
    words: bool = False
    print_confidence: bool = False
    prune_path: str = ""
    consolidated_license_file: Optional[str] = None


@dataclass(slots=True)
class LoggingConfig:
    level: str = "WARNING"


@dataclass(slots=True)
class ReportConfig:
    """Top-level configuration of a license report run."""

    packages: Tuple[str, ...] = ()
    product: str = GENERIC_PRODUCT_NAME
    enumerator: EnumeratorConfig = field(default_factory=EnumeratorConfig)
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self) -> None:
        if isinstance(self.packages, str):
            self.packages = (self.packages,)
        else:
            self.packages = tuple(self.packages)

    def validate(self) -> None:
        """Check value ranges and normalize enumerated settings.

        Raises:
            ValueError: If the confidence is outside [0, 1], the output
                format is unknown, or no package is requested.
        """
        try:
            confidence = float(self.matching.confidence)
        except (TypeError, ValueError):
            raise ValueError("matching.confidence must be a float between 0.0 and 1.0.")
        if confidence < 0.0 or confidence > 1.0:
            raise ValueError("matching.confidence must be between 0.0 and 1.0.")
        self.matching.confidence = confidence
        self.output.format = OutputFormat.normalize(self.output.format)
        if not self.packages:
            raise ValueError("expect at least one package argument")

    # -------------------------
    # Serialization helpers
    # -------------------------
    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation, skipping None values."""
        return _dataclass_to_dict(self)

    def to_json(self, path: Path | str, *, indent: int = 2) -> str:
        """Serialize the configuration to JSON at ``path`` and return the path."""
        target = Path(path)
        target.write_text(json.dumps(self.to_dict(), indent=indent, sort_keys=True), encoding="utf-8")
        return str(target)

    @classmethod
    def from_dict(cls: Type[T], data: Mapping[str, Any]) -> T:
        """Instantiate a ReportConfig from a mapping.

        Raises:
            ValueError: If a key does not name a config field.
        """
        return _dataclass_from_dict(cls, data)

    @classmethod
    def from_json(cls: Type[T], path: Path | str) -> T:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.from_dict(payload)

    @classmethod
    def from_toml(cls: Type[T], path: Path | str) -> T:
        """
        Load a ReportConfig from a TOML file.

        Top-level keys hold ``packages`` and ``product``; the sections are
        the tables [enumerator], [matching], [output] and [logging].
        """
        if tomllib is None:
            raise RuntimeError(
                "TOML support requires Python 3.11+ (tomllib) or installing the 'tomli' package."
            )
        data = tomllib.loads(Path(path).read_bytes().decode("utf-8"))
        if not isinstance(data, Mapping):
            raise TypeError(f"Top-level TOML document must be a mapping; got {type(data).__name__}.")
        return cls.from_dict(data)


def load_config_from_path(path: str | Path) -> ReportConfig:
    """Load a ReportConfig from a JSON or TOML file.

    Raises:
        ValueError: If the file extension is not ``.toml`` or ``.json``.
    """
    p = Path(path)
    suffix = p.suffix.lower()
    if suffix == ".toml":
        return ReportConfig.from_toml(p)
    if suffix == ".json":
        return ReportConfig.from_json(p)
    raise ValueError(f"Unsupported config extension {p.suffix!r}; expected .toml or .json.")


def _dataclass_to_dict(obj: Any) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is None:
            continue
        if is_dataclass(value):
            result[f.name] = _dataclass_to_dict(value)
        elif isinstance(value, tuple):
            result[f.name] = list(value)
        else:
            result[f.name] = value
    return result


def _dataclass_from_dict(cls: Type[T], data: Mapping[str, Any] | None) -> T:
    """Instantiate a dataclass of type ``cls`` from a mapping, recursing into
    nested dataclass sections."""
    if data is None:
        return cls()  # type: ignore[call-arg]
    if not isinstance(data, Mapping):
        raise TypeError(f"{cls.__name__} expects a mapping; got {type(data).__name__}.")
    known = {f.name: f for f in fields(cls)}  # type: ignore[arg-type]
    unknown = sorted(k for k in data if k not in known)
    if unknown:
        raise ValueError(
            f"Unsupported options for {cls.__name__}: {', '.join(unknown)}. "
            f"Allowed keys: {', '.join(sorted(known))}"
        )
    kwargs: Dict[str, Any] = {}
    for name, value in data.items():
        default = known[name].default_factory  # type: ignore[misc]
        section = default() if callable(default) else None
        if is_dataclass(section):
            kwargs[name] = _dataclass_from_dict(type(section), value)
        else:
            kwargs[name] = value
    return cls(**kwargs)
