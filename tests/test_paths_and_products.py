# test_paths_and_products.py
# SPDX-License-Identifier: MIT
import pytest

from listlicenses.core.interfaces import LicenseRecord, Product
from listlicenses.core.paths import VERSION_PARSE_ERROR, display_package, display_path, make_replacer
from listlicenses.core.products import (
    MIT_FORM,
    GenericProduct,
    ProductRegistry,
    common_overrides,
    default_product_registry,
)

REPLACE = make_replacer(GenericProduct().replacements())


def test_paths_are_untouched_without_prune_prefix():
    assert display_path("vendor/golang.org/x/net/LICENSE", "", REPLACE) == "vendor/golang.org/x/net/LICENSE"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("vendor/github.com/o/r/LICENSE", "github.com/o/r/blob/master/LICENSE"),
        ("vendor/golang.org/x/net/LICENSE", "github.com/golang/net/blob/master/LICENSE"),
        ("vendor/sigs.k8s.io/yaml/LICENSE", "github.com/kubernetes-sigs/yaml/blob/master/LICENSE"),
        ("vendor/gopkg.in/yaml.v2/LICENSE", "github.com/go-yaml/yaml/blob/v2/LICENSE"),
        ("vendor/gopkg.in/user/pkg.v3/LICENSE", "github.com/user/pkg/blob/v3/LICENSE"),
        ("vendor/gopkg.in/user/pkg/LICENSE", VERSION_PARSE_ERROR),
        ("vendor/a/LICENSE", "a/LICENSE"),
        ("vendor/example.com/x/LICENSE", "example.com/x/LICENSE"),
    ],
)
def test_display_path_rewrites(raw, expected):
    assert display_path(raw, "vendor/", REPLACE) == expected


def test_replacer_prefers_first_listed_and_never_rescans():
    assert make_replacer([("ab", "X"), ("a", "Y")])("abc a") == "Xc Y"
    assert make_replacer([("a", "b"), ("b", "c")])("a") == "b"
    assert make_replacer([])("same") == "same"


def test_display_package_trims_prefix():
    assert display_package("vendor/github.com/o/r", "vendor/") == "github.com/o/r"
    assert display_package("github.com/o/r", "") == "github.com/o/r"


def test_common_overrides():
    assert common_overrides("github.com/ghodss/yaml", "UNKNOWN") == MIT_FORM
    assert common_overrides("github.com/other/pkg", "UNKNOWN") == "UNKNOWN"


def test_generic_product_customisations():
    extra = LicenseRecord(package="envoy", manual_path="https://example.com/LICENSE")
    product = GenericProduct(
        extras=[extra],
        skipped=frozenset({"darwin/only"}),
        extra_replacements=[("k8s.io", "example.com/k8s")],
        overrides={"github.com/ghodss/yaml": "Custom"},
    )
    assert isinstance(product, Product)
    assert product.extra_licenses() == [extra]
    assert product.skip_license(LicenseRecord(package="darwin/only"))
    assert not product.skip_license(LicenseRecord(package="linux/pkg"))
    assert product.replacements()[0] == ("k8s.io", "example.com/k8s")
    assert product.override_license("github.com/ghodss/yaml", "?") == "Custom"
    assert product.override_license("sigs.k8s.io/yaml", "?") == MIT_FORM


def test_product_registry():
    registry = default_product_registry()
    assert list(registry.names()) == ["generic"]
    assert isinstance(registry.build("generic"), GenericProduct)
    with pytest.raises(ValueError, match="Unknown product"):
        registry.build("nope")
    with pytest.raises(ValueError, match="already registered"):
        registry.register("generic", GenericProduct)
    registry.register("generic", lambda: GenericProduct(name="custom"), replace=True)
    assert registry.build("generic").name == "custom"


def test_empty_registry_lists_nothing():
    assert list(ProductRegistry().names()) == []
