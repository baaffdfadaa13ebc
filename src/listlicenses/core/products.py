# products.py
# SPDX-License-Identifier: MIT
"""Product customisations applied around the license report.

A product decides which records to drop, which licenses to add for
dependencies the enumerator cannot see, how displayed license paths are
rewritten, and which labels are forced for packages the matcher gets wrong.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from .interfaces import LicenseRecord, Product

__all__ = [
    "COMMON_REPLACEMENTS",
    "COMMON_OVERRIDES",
    "MIT_FORM",
    "APACHE_2_0_FORM",
    "common_overrides",
    "GenericProduct",
    "ProductRegistry",
    "default_product_registry",
    "GENERIC_PRODUCT_NAME",
]

GENERIC_PRODUCT_NAME = "generic"

MIT_FORM = "MIT License"
APACHE_2_0_FORM = "Apache License 2.0"

# Vanity import hosts and the repositories that serve them.
COMMON_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("k8s.io", "github.com/kubernetes"),
    ("golang.org/x", "github.com/golang"),
    ("go.uber.org", "github.com/uber-go"),
    ("cloud.google.com/go", "github.com/googleapis/google-cloud-go"),
    ("google.golang.org/grpc", "github.com/grpc/grpc-go"),
    ("istio.io", "github.com/istio"),
    (
        "contrib.go.opencensus.io/exporter/prometheus",
        "github.com/census-ecosystem/opencensus-go-exporter-prometheus",
    ),
    ("google.golang.org/genproto", "github.com/googleapis/go-genproto"),
    ("sigs.k8s.io", "github.com/kubernetes-sigs"),
    ("knative.dev", "github.com/knative"),
)

# Packages whose license file does not match its template well enough.
COMMON_OVERRIDES: Mapping[str, str] = {
    "github.com/ghodss/yaml": MIT_FORM,
    "github.com/jmespath/go-jmespath": APACHE_2_0_FORM,
    "sigs.k8s.io/yaml": MIT_FORM,
}


def common_overrides(pkg: str, label: str) -> str:
    """Return the forced label for ``pkg``, or ``label`` if none is known."""
    return COMMON_OVERRIDES.get(pkg, label)


@dataclass
class GenericProduct:
    """Product with the common replacements and overrides and nothing else.

    Attributes:
        name (str): Product name used for registry lookups.
        extras (Sequence[LicenseRecord]): Licenses appended to the report.
        skipped (frozenset[str]): Package names dropped from the report.
        extra_replacements (Sequence[tuple[str, str]]): Path substitutions
            tried before the common ones.
        overrides (Mapping[str, str]): Forced labels, consulted before the
            common overrides.
    """

    name: str = GENERIC_PRODUCT_NAME
    extras: Sequence[LicenseRecord] = ()
    skipped: frozenset[str] = frozenset()
    extra_replacements: Sequence[tuple[str, str]] = ()
    overrides: Mapping[str, str] = field(default_factory=dict)

    def skip_license(self, record: LicenseRecord) -> bool:
        return record.package in self.skipped

    def extra_licenses(self) -> list[LicenseRecord]:
        return list(self.extras)

    def replacements(self) -> list[tuple[str, str]]:
        return [*self.extra_replacements, *COMMON_REPLACEMENTS]

    def override_license(self, pkg: str, label: str) -> str:
        if pkg in self.overrides:
            return self.overrides[pkg]
        return common_overrides(pkg, label)


ProductFactory = Callable[[], Product]


@dataclass
class ProductRegistry:
    """Registry of product factories keyed by product name."""

    _factories: dict[str, ProductFactory] = field(default_factory=dict)

    def register(self, name: str, factory: ProductFactory, *, replace: bool = False) -> None:
        if not replace and name in self._factories:
            raise ValueError(f"Product {name!r} is already registered")
        self._factories[name] = factory

    def names(self) -> Iterable[str]:
        return sorted(self._factories)

    def build(self, name: str) -> Product:
        try:
            factory = self._factories[name]
        except KeyError:
            raise ValueError(
                f"Unknown product {name!r}; expected one of {list(self.names())}"
            ) from None
        return factory()


def default_product_registry() -> ProductRegistry:
    """Return a registry holding the built-in products."""
    registry = ProductRegistry()
    registry.register(GENERIC_PRODUCT_NAME, GenericProduct)
    return registry
