from __future__ import annotations

from pathlib import Path

from facture.core.settings import Settings, save_settings
from facture.data.repo import create_invoice, create_partner
from facture.main import main


def _settings_file(tmp_path: Path, store_url: str) -> str:
    p = tmp_path / "settings.json"
    save_settings(Settings(database_url=store_url), p)
    return str(p)


def test_sample_invoice(tmp_path: Path, store_url) -> None:
    out = tmp_path / "out"
    rc = main(["--sample", "--out", str(out), "--settings", _settings_file(tmp_path, store_url)])
    assert rc == 0
    assert (out / "Facture-INV-001.pdf").exists()


def test_invoice_from_store(tmp_path: Path, store_url) -> None:
    p = create_partner("ACME Corp", email="a@x.com", phone="699000000")
    create_invoice({
        "number": "INV-2024-001",
        "entity_type": "partner",
        "entity_id": p.id,
        "amount": 3200,
        "issue_date": "2024-04-01",
        "due_date": "2024-04-15",
    })
    out = tmp_path / "out"

    rc = main(["INV-2024-001", "--out", str(out), "--settings", _settings_file(tmp_path, store_url)])

    assert rc == 0
    assert (out / "Facture-INV-2024-001.pdf").exists()


def test_unknown_invoice_fails(tmp_path: Path, store_url) -> None:
    out = tmp_path / "out"
    rc = main(["NOPE", "--out", str(out), "--settings", _settings_file(tmp_path, store_url)])
    assert rc == 1
    assert not (out / "Facture-NOPE.pdf").exists()


def test_nothing_to_do() -> None:
    assert main([]) == 2


def test_sample_with_bad_locale_fails_cleanly(tmp_path: Path, store_url) -> None:
    p = tmp_path / "settings.json"
    save_settings(Settings(locale="xx-XX", database_url=store_url), p)
    out = tmp_path / "out"

    rc = main(["--sample", "--out", str(out), "--settings", str(p)])

    assert rc == 1
    assert not (out / "Facture-INV-001.pdf").exists()
