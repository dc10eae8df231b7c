#!/usr/bin/env python3
"""Validate translation catalogs before accepting a PR."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from core.audit import audit_directory
from core.registry import DEFAULT_TRANSLATIONS_DIR
from utils.logging_utils import configure_logging


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate VEIL translation catalogs")
    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=DEFAULT_TRANSLATIONS_DIR,
        help="Directory containing veil_*.ts catalogs",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for engine messages",
    )
    args = parser.parse_args()

    configure_logging(args.log_level)
    print(f"Checking catalogs in {args.directory}...")
    audit = audit_directory(args.directory)

    for report in audit.reports:
        if report.error:
            print(f"❌ {report.code}: {report.error}")
            continue
        status = "✓" if report.ok else "⚠"
        print(f"{status} {report.code}: {report.coverage:.0%} translated")
        for context, key in report.missing:
            print(f"  - missing {context}/{key!r}")
        for context, key in report.extra:
            print(f"  - not in {audit.base}: {context}/{key!r}")
        for context, key in report.untranslated:
            print(f"  - untranslated {context}/{key!r}")

    if audit.ok:
        print("✅ All catalogs are valid and complete!")
        return 0
    print("\n❌ Catalog check failed")
    return 1


if __name__ == "__main__":
    sys.exit(main())
