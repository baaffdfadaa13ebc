# main.py
# SPDX-License-Identifier: MIT

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from ..core.config import OutputFormat, ReportConfig, load_config_from_path
from ..core.log import configure_logging
from ..core.products import GENERIC_PRODUCT_NAME
from .runner import run_report

DESCRIPTION = """\
listlicenses lists all dependencies of the given packages or commands,
excluding standard library packages, and prints their licenses. Licenses are
detected by looking for files named like LICENSE, COPYING, COPYRIGHT and other
variants in the package directory, and its parent directories until one is
found. File content is matched against a set of well-known licenses and the
best match is displayed.

With -a, all individual packages are displayed instead of grouping them by
license file. With -w, words of the license file missing from the matched
template, and template words missing from the file, are displayed to help
judge how much the license was changed.
"""


def _build_parser() -> argparse.ArgumentParser:
    """Build the listlicenses argument parser.

    Boolean flags only switch options on; everything left unset falls back
    to the ``--config`` file, then to the built-in defaults.
    """
    parser = argparse.ArgumentParser(
        prog="listlicenses",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("packages", nargs="*", metavar="PACKAGE", help="Import paths or patterns to inspect.")
    parser.add_argument("-c", "--config", help="Path to config file (TOML or JSON).")
    parser.add_argument("--log-level", help="Logging level (e.g., DEBUG, INFO, WARNING).")
    parser.add_argument("-a", "--all", dest="run_all", action="store_true", default=None,
                        help="Display all individual packages.")
    parser.add_argument("-w", "--words", action="store_true", default=None,
                        help="Display words not matching the license template.")
    parser.add_argument("--print-confidence", action="store_true", default=None,
                        help="Display the confidence level of inexact matches.")
    fmt = parser.add_mutually_exclusive_group()
    fmt.add_argument("--csv", dest="output_format", action="store_const", const=OutputFormat.CSV,
                     help="Print in CSV format.")
    fmt.add_argument("--markdown", dest="output_format", action="store_const", const=OutputFormat.MARKDOWN,
                     help="Print a markdown table.")
    parser.add_argument("--confidence", type=float,
                        help="Minimum score for a license match to be accepted (default 0.9).")
    parser.add_argument("--prune-path",
                        help="Prefix removed from packages and license paths on display, "
                             "e.g. 'github.com/owner/project/vendor/'.")
    parser.add_argument("--consolidated-license-file",
                        help="Write the text of every accepted license to this file.")
    parser.add_argument("--product-name",
                        help=f"Product customisations to apply (default {GENERIC_PRODUCT_NAME}).")
    parser.add_argument("--gopath", help="GOPATH used when running go list.")
    parser.add_argument("--template-dir", help="Directory of license templates replacing the built-in ones.")
    return parser


def _apply_overrides(cfg: ReportConfig, args: argparse.Namespace) -> ReportConfig:
    """Apply command line values on top of ``cfg`` in place and return it."""
    if args.packages:
        cfg.packages = tuple(args.packages)
    if args.product_name:
        cfg.product = args.product_name
    if args.gopath:
        cfg.enumerator.gopath = args.gopath
    if args.run_all:
        cfg.matching.run_all = True
    if args.confidence is not None:
        cfg.matching.confidence = args.confidence
    if args.template_dir:
        cfg.matching.template_dir = args.template_dir
    if args.output_format:
        cfg.output.format = args.output_format
    if args.words:
        cfg.output.words = True
    if args.print_confidence:
        cfg.output.print_confidence = True
    if args.prune_path is not None:
        cfg.output.prune_path = args.prune_path
    if args.consolidated_license_file:
        cfg.output.consolidated_license_file = args.consolidated_license_file
    if args.log_level:
        cfg.logging.level = args.log_level
    return cfg


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the listlicenses command-line interface.

    Args:
        argv (Sequence[str] | None): Argument strings to parse instead of
            ``sys.argv[1:]``.

    Returns:
        int: Process exit code, 0 on success and 1 on any error.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    try:
        cfg = load_config_from_path(args.config) if args.config else ReportConfig()
        _apply_overrides(cfg, args)
        configure_logging(level=cfg.logging.level)
        run_report(cfg)
    except Exception as exc:  # noqa: BLE001
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
