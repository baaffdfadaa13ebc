# runner.py
# SPDX-License-Identifier: MIT

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TextIO

from ..core.config import ReportConfig
from ..core.grouping import group_licenses
from ..core.interfaces import LicenseRecord, PackageEnumerator, Product, Template
from ..core.licenses import list_licenses
from ..core.log import get_logger
from ..core.products import ProductRegistry, default_product_registry
from ..core.templates import load_templates
from ..sinks.render import build_rows, make_sink, write_consolidated_license_file
from ..sources.golist import GoListEnumerator

log = get_logger(__name__)


@dataclass(slots=True)
class ReportStats:
    """Counts describing one finished report.

    Attributes:
        rows (int): Rows written to the report.
        accepted (int): Rows whose license was matched with enough confidence.
        errors (int): Rows for packages the enumerator could not resolve.
        consolidated_path (str | None): Consolidated license file, if written.
    """
    rows: int = 0
    accepted: int = 0
    errors: int = 0
    consolidated_path: str | None = None

    def as_dict(self) -> dict[str, int | str]:
        data: dict[str, int | str] = {
            "rows": self.rows,
            "accepted": self.accepted,
            "errors": self.errors,
        }
        if self.consolidated_path:
            data["consolidated_path"] = self.consolidated_path
        return data


def make_enumerator(cfg: ReportConfig) -> PackageEnumerator:
    return GoListEnumerator(cfg.enumerator.gopath, go_binary=cfg.enumerator.go_binary)


def collect_records(
    cfg: ReportConfig,
    enumerator: PackageEnumerator,
    product: Product,
    templates: Sequence[Template],
) -> list[LicenseRecord]:
    """Match, group, and filter the license records of a report.

    Product extras are appended after grouping, so they are never merged
    with enumerated packages.
    """
    records = list_licenses(enumerator, cfg.packages, templates=templates)
    if not cfg.matching.run_all:
        records = group_licenses(records)
    records = [r for r in records if not product.skip_license(r)]
    records.extend(product.extra_licenses())
    return records


def run_report(
    cfg: ReportConfig,
    *,
    enumerator: PackageEnumerator | None = None,
    products: ProductRegistry | None = None,
    stream: TextIO | None = None,
) -> ReportStats:
    """Produce a license report for ``cfg.packages``.

    This is the main programmatic entry point. The report goes to
    ``stream`` (stdout by default) in the configured format; the accepted
    license texts are also written to ``cfg.output.consolidated_license_file``
    when it is set.

    Args:
        cfg (ReportConfig): Run configuration; validated here.
        enumerator (PackageEnumerator | None): Package source; a ``go list``
            enumerator built from ``cfg.enumerator`` when omitted.
        products (ProductRegistry | None): Registry used to resolve
            ``cfg.product``.
        stream (TextIO | None): Report destination.

    Returns:
        ReportStats: Counts for the written report.
    """
    cfg.validate()
    templates = load_templates(cfg.matching.template_dir)
    product = (products or default_product_registry()).build(cfg.product)
    if enumerator is None:
        enumerator = make_enumerator(cfg)

    records = collect_records(cfg, enumerator, product, templates)
    out = cfg.output
    rows, accepted = build_rows(
        records,
        confidence=cfg.matching.confidence,
        print_confidence=out.print_confidence,
        words=out.words,
        prune_path=out.prune_path,
        product=product,
    )
    with make_sink(out.format, stream or sys.stdout) as sink:
        sink.write_all(rows)

    stats = ReportStats(
        rows=len(rows),
        accepted=len(accepted),
        errors=sum(1 for r in records if r.error),
    )
    if out.consolidated_license_file:
        stats.consolidated_path = write_consolidated_license_file(
            out.consolidated_license_file, accepted
        )
    log.info("report complete: %s", stats.as_dict())
    return stats
