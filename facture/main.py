from __future__ import annotations

# Allow running this file directly (python facture/main.py) by ensuring the project root is on sys.path
import os
import sys
if __package__ in (None, ""):
    sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import argparse
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional

from facture.core.errors import FactureError
from facture.core.paths import default_archive_dir
from facture.core.records import Invoice, PartnerRecipient
from facture.core.settings import Settings, load_settings
from facture.data.db import create_db_and_tables
from facture.data.repo import load_invoice_bundle
from facture.pdf.pdf_draw import build_invoice_pdf

logger = logging.getLogger(__name__)


def sample_invoice() -> Invoice:
    return Invoice(
        number="INV-001",
        issue_date=date(2024, 1, 10),
        due_date=date(2024, 1, 20),
        amount=150000,
        entity_type="partner",
        status="pending",
    )


def sample_recipient() -> PartnerRecipient:
    return PartnerRecipient(name="ACME Corp", email="a@x.com", phone="699000000")


def _output_dir(args: argparse.Namespace, settings: Settings) -> Path:
    if args.out:
        return Path(args.out)
    if settings.archive_root:
        return Path(settings.archive_root)
    return default_archive_dir()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="facture", description="Generate Studya invoice PDFs.")
    p.add_argument("numbers", nargs="*", help="invoice numbers to render from the store")
    p.add_argument("--sample", action="store_true", help="render the built-in sample invoice")
    p.add_argument("--out", help="output directory")
    p.add_argument("--settings", help="path to settings.json")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not args.numbers and not args.sample:
        logger.error("Nothing to do: pass invoice numbers or --sample")
        return 2

    settings = load_settings(args.settings)
    out_dir = _output_dir(args, settings)
    failures = 0

    if args.sample:
        try:
            path = build_invoice_pdf(out_dir, sample_invoice(), sample_recipient(), settings)
        except FactureError:
            logger.exception("Failed to generate the sample invoice")
            failures += 1
        else:
            print(path)

    if args.numbers:
        create_db_and_tables(settings.database_url)
        for number in args.numbers:
            try:
                invoice, recipient = load_invoice_bundle(number)
                path = build_invoice_pdf(out_dir, invoice, recipient, settings)
            except (FactureError, LookupError):
                logger.exception("Failed to generate invoice %s", number)
                failures += 1
                continue
            print(path)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
