from __future__ import annotations

from datetime import date
from pathlib import Path
import sys

# Ensure project root is on sys.path when running this script directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from facture.core.records import CommercialRecipient, Invoice, LineItem
from facture.core.settings import load_settings
from facture.pdf.pdf_draw import build_invoice_pdf

# Generates a multi-page sample invoice (itemised lines) for README/demo purposes.


def sample_invoice(n_items: int = 60) -> Invoice:
    items = tuple(
        LineItem(description=f"Commission CV #{i:03d}", amount=1500 + 25 * i)
        for i in range(1, n_items + 1)
    )
    return Invoice(
        number="INV-SAMPLE-001",
        issue_date=date(2024, 5, 1),
        due_date=date(2024, 5, 10),
        amount=sum(it.amount for it in items),
        entity_type="commercial",
        status="pending",
        period_start=date(2024, 4, 1),
        period_end=date(2024, 4, 30),
        items=items,
    )


def main() -> None:
    out_dir = ROOT / "assets" / "samples"
    recipient = CommercialRecipient("Armand", "Onana", "armand.onana@studya.cm", "677123456")
    out_pdf = build_invoice_pdf(out_dir, sample_invoice(), recipient, load_settings())
    print(f"Wrote sample to: {out_pdf}")


if __name__ == "__main__":
    main()
