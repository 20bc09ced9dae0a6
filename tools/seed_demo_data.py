from __future__ import annotations

from pathlib import Path
import sys

# Ensure project root is on sys.path when running this script directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from facture.core.settings import load_settings
from facture.data.db import create_db_and_tables
from facture.data.repo import create_commercial, create_invoice, create_partner, get_invoice_by_number, list_invoices

# Demo partners, commercials and invoices for the dashboard store.

PARTNERS = [
    ("KmerTech Recruit", "contact@kmertech.cm", "699112233"),
    ("Douala Career Services", "info@dcs.cm", "677445566"),
    ("Yaounde Job Connect", "hello@yjc.cm", "655778899"),
]

COMMERCIALS = [
    ("Armand", "Onana", "armand.onana@studya.cm", "677123456"),
    ("Brenda", "Ngassa", "brenda.ngassa@studya.cm", "699654321"),
]

# number, entity type, index into PARTNERS/COMMERCIALS (None: no recipient), amount, issue, due, status
INVOICES = [
    ("INV-2024-001", "partner", 0, 3200, "2024-04-01", "2024-04-15", "overdue"),
    ("INV-2024-002", "partner", 2, 5600, "2024-04-01", "2024-04-15", "overdue"),
    ("INV-2024-003", "commercial", 0, 2670, "2024-05-01", "2024-05-10", "pending"),
    ("INV-2024-004", "commercial", 1, 4092, "2024-05-01", "2024-05-10", "pending"),
    ("INV-2024-005", "partner", 1, 2450, "2024-05-01", "2024-05-15", "paid"),
    ("INV-2024-006", "direct", None, 150, "2024-05-01", "2024-05-15", "paid"),
]


def main() -> None:
    settings = load_settings()
    create_db_and_tables(settings.database_url)
    if get_invoice_by_number(INVOICES[0][0]):
        print("Demo data already present")
        return

    partner_ids = [create_partner(name, email, phone).id for name, email, phone in PARTNERS]
    commercial_ids = [create_commercial(first, last, email, phone).id for first, last, email, phone in COMMERCIALS]

    for number, entity_type, idx, amount, issue, due, status in INVOICES:
        ids = partner_ids if entity_type == "partner" else commercial_ids
        create_invoice({
            "number": number,
            "entity_type": entity_type,
            "entity_id": ids[idx] if idx is not None else None,
            "amount": amount,
            "issue_date": issue,
            "due_date": due,
            "status": status,
        })

    print("Invoices:", len(list_invoices()))


if __name__ == "__main__":
    main()
