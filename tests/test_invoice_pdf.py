from __future__ import annotations

from datetime import date
from pathlib import Path

import math
import re

import pytest
from pypdf import PdfReader

from facture.core.errors import DocumentError, FormatError
from facture.core.records import Invoice, LineItem, PartnerRecipient
from facture.pdf.assembler import DocumentAssembler
from facture.pdf.pdf_draw import build_invoice_pdf, output_filename, render_document, render_invoice_pdf


def _a4_size_points() -> tuple[float, float]:
    # ReportLab A4 in points
    return (595.2755905511812, 841.8897637795277)


def _invoice(**overrides) -> Invoice:
    data = dict(
        number="INV-001",
        issue_date=date(2024, 1, 10),
        due_date=date(2024, 1, 20),
        amount=150000,
        entity_type="partner",
    )
    data.update(overrides)
    return Invoice(**data)


ACME = PartnerRecipient(name="ACME Corp", email="a@x.com", phone="699000000")


def test_partner_invoice_pdf(tmp_path: Path) -> None:
    # Act
    out_pdf = build_invoice_pdf(tmp_path, _invoice(), ACME)

    # Assert: deterministic file name and a single A4 page
    assert out_pdf == tmp_path / "Facture-INV-001.pdf"
    reader = PdfReader(str(out_pdf))
    assert len(reader.pages) == 1

    page = reader.pages[0]
    box = page.mediabox
    width = float(box.right - box.left)
    height = float(box.top - box.bottom)
    a4w, a4h = _a4_size_points()
    assert math.isclose(width, a4w, rel_tol=0, abs_tol=1.0)
    assert math.isclose(height, a4h, rel_tol=0, abs_tol=1.0)

    text = page.extract_text() or ""
    for expected in (
        "Studya",
        "Yaoundé, Cameroun",
        "FACTURE",
        "INV-001",
        "Facturé à:",
        "ACME Corp",
        "Date de facturation",
        "Montant total",
        "Description",
        "Montant",
        "10/01/2024",
        "20/01/2024",
        "Règlement de dette",
        "Merci de votre confiance.",
        "Page 1 sur 1",
    ):
        assert expected in text
    # Grouping separator may come back as NBSP or a plain space
    assert re.search(r"150\s000\sFCFA", text) is not None


def test_no_recipient_block_without_recipient(tmp_path: Path) -> None:
    out_pdf = build_invoice_pdf(tmp_path, _invoice(entity_type="commercial"), None)
    text = PdfReader(str(out_pdf)).pages[0].extract_text() or ""
    assert "Facturé à:" not in text
    assert "Paiement de commission" in text


def test_output_is_byte_identical_for_identical_input() -> None:
    first = render_invoice_pdf(_invoice(), ACME)
    second = render_invoice_pdf(_invoice(), ACME)
    assert first.startswith(b"%PDF")
    assert first == second


def test_negative_amount_writes_nothing(tmp_path: Path) -> None:
    with pytest.raises(FormatError):
        build_invoice_pdf(tmp_path, _invoice(amount=-5), ACME)
    assert list(tmp_path.iterdir()) == []


def test_every_page_is_stamped(tmp_path: Path) -> None:
    items = tuple(LineItem(f"Commission CV #{i}", 1500 + i) for i in range(90))
    out_pdf = build_invoice_pdf(tmp_path, _invoice(entity_type="commercial", items=items), None)

    reader = PdfReader(str(out_pdf))
    total = len(reader.pages)
    assert total > 1
    for i, page in enumerate(reader.pages, start=1):
        text = page.extract_text() or ""
        assert f"Page {i} sur {total}" in text
        assert "Merci de votre confiance." in text
        # Header row repeated on continuation pages
        assert "Description" in text


def test_unstamped_document_is_rejected() -> None:
    doc = DocumentAssembler().assemble(_invoice(), ACME)
    with pytest.raises(DocumentError):
        render_document(doc)


def test_output_filename() -> None:
    assert output_filename("INV-2024-001") == "Facture-INV-2024-001.pdf"
    with pytest.raises(FormatError):
        output_filename("")
    with pytest.raises(FormatError):
        output_filename("../INV-1")


def test_failed_write_leaves_no_temp_file(tmp_path: Path, monkeypatch) -> None:
    def fail_replace(self, target):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", fail_replace)
    with pytest.raises(OSError):
        build_invoice_pdf(tmp_path, _invoice(), ACME)
    assert list(tmp_path.iterdir()) == []
