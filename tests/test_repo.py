from __future__ import annotations

from datetime import date

import pytest

from facture.core.records import CommercialRecipient, PartnerRecipient
from facture.data.repo import (
    create_commercial,
    create_invoice,
    create_partner,
    get_invoice_by_number,
    list_invoices,
    load_invoice_bundle,
)
from facture.pdf.pdf_draw import render_invoice_pdf


def _dto(number: str, entity_type: str, entity_id, **extra) -> dict:
    dto = {
        "number": number,
        "entity_type": entity_type,
        "entity_id": entity_id,
        "amount": 150000,
        "issue_date": "2024-01-10",
        "due_date": date(2024, 1, 20),
    }
    dto.update(extra)
    return dto


def test_partner_bundle(store_url) -> None:
    p = create_partner("ACME Corp", email="a@x.com", phone="699000000")
    create_invoice(_dto("INV-001", "partner", p.id))

    invoice, recipient = load_invoice_bundle("INV-001")

    assert invoice.number == "INV-001"
    assert invoice.issue_date == date(2024, 1, 10)
    assert invoice.entity_type == "partner"
    assert recipient == PartnerRecipient(name="ACME Corp", email="a@x.com", phone="699000000")
    assert recipient.kind == "partner"


def test_commercial_bundle(store_url) -> None:
    c = create_commercial("Armand", "Onana", email="ao@studya.cm", phone="677123456")
    create_invoice(_dto("INV-003", "commercial", c.id, amount=2670))

    invoice, recipient = load_invoice_bundle("INV-003")

    assert isinstance(recipient, CommercialRecipient)
    assert recipient.display_name == "Armand Onana"
    assert invoice.amount == 2670


def test_missing_recipient_is_none(store_url) -> None:
    create_invoice(_dto("INV-006", "direct", None, amount=150))
    create_invoice(_dto("INV-007", "partner", 999))

    assert load_invoice_bundle("INV-006")[1] is None
    assert load_invoice_bundle("INV-007")[1] is None


def test_bundle_renders(store_url) -> None:
    p = create_partner("ACME Corp")
    create_invoice(_dto("INV-001", "partner", p.id))
    assert render_invoice_pdf(*load_invoice_bundle("INV-001")).startswith(b"%PDF")


def test_duplicate_number_rejected(store_url) -> None:
    create_invoice(_dto("INV-001", "partner", None))
    with pytest.raises(ValueError):
        create_invoice(_dto("INV-001", "partner", None))


def test_invalid_input_rejected(store_url) -> None:
    with pytest.raises(ValueError):
        create_invoice(_dto("", "partner", None))
    with pytest.raises(ValueError):
        create_invoice(_dto("INV-NEG", "partner", None, amount=-5))
    with pytest.raises(ValueError):
        create_partner("  ")
    assert get_invoice_by_number("INV-NEG") is None


def test_unknown_number_raises_lookup_error(store_url) -> None:
    with pytest.raises(LookupError):
        load_invoice_bundle("NOPE")


def test_list_invoices_orders_and_filters(store_url) -> None:
    create_invoice(_dto("INV-A", "partner", None, issue_date="2024-04-01", status="overdue"))
    create_invoice(_dto("INV-B", "partner", None, issue_date="2024-05-01", status="paid"))

    assert [i.number for i in list_invoices()] == ["INV-B", "INV-A"]
    assert [i.number for i in list_invoices(status="paid")] == ["INV-B"]
    assert len(list_invoices(limit=1)) == 1
