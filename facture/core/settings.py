from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging

from facture.core.paths import settings_path

logger = logging.getLogger(__name__)

# Path to the settings.json (runtime-aware)
SETTINGS_PATH = settings_path()


@dataclass(frozen=True)
class DocumentChrome:
	"""Static text of the invoice template, injected into the assembler."""

	issuer_name: str = "Studya"
	issuer_location: str = "Yaoundé, Cameroun"
	document_label: str = "FACTURE"
	recipient_heading: str = "Facturé à:"
	summary_headers: tuple = ("Date de facturation", "Date d'échéance", "Montant total")
	line_headers: tuple = ("Description", "Montant")
	partner_description: str = "Règlement de dette"
	commercial_description: str = "Paiement de commission"
	footer_message: str = "Merci de votre confiance."
	# Supports {page} and {total}
	page_marker: str = "Page {page} sur {total}"


@dataclass
class Settings:
	issuer_name: str = "Studya"
	issuer_location: str = "Yaoundé, Cameroun"
	footer_message: str = "Merci de votre confiance."
	# One locale and currency per document
	locale: str = "fr-CM"
	currency: str = "XAF"
	# Headline amounts (summary table) vs itemised amounts; None = currency default
	summary_fraction_digits: Optional[int] = 0
	line_fraction_digits: Optional[int] = None
	# When True, an entity type outside {partner, commercial} fails generation
	strict_entity_types: bool = False
	# Optional root directory for saving PDFs; if None, defaults to Documents/Studya Factures
	archive_root: Optional[str] = None
	# Optional SQLAlchemy URL for the invoice store; if None, studya.db beside settings.json
	database_url: Optional[str] = None

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Settings":
		# Merge provided values over defaults, ignore unknown keys
		defaults = asdict(cls())
		merged: Dict[str, Any] = {**defaults, **{k: v for k, v in data.items() if k in defaults}}
		return cls(**merged)

	def to_dict(self) -> Dict[str, Any]:
		return asdict(self)

	def chrome(self) -> DocumentChrome:
		return DocumentChrome(
			issuer_name=self.issuer_name,
			issuer_location=self.issuer_location,
			footer_message=self.footer_message,
		)


def _coerce_path(path: Optional[Union[str, Path]]) -> Path:
	return Path(path) if path is not None else SETTINGS_PATH


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
	"""
	Load settings from JSON (UTF-8). If the file is missing, write defaults and return them.
	"""
	p = _coerce_path(path)
	if not p.exists():
		settings = Settings()
		save_settings(settings, p)
		return settings

	try:
		with p.open("r", encoding="utf-8") as f:
			raw: Dict[str, Any] = json.load(f)
	except (json.JSONDecodeError, OSError):
		# If unreadable/corrupt, fall back to defaults (do not overwrite automatically)
		logger.warning("Unreadable settings file %s; using defaults", p)
		return Settings()

	return Settings.from_dict(raw if isinstance(raw, dict) else {})


def save_settings(settings: Settings, path: Optional[Union[str, Path]] = None) -> None:
	"""Save settings to JSON (UTF-8), creating parent dirs if needed."""
	p = _coerce_path(path)
	p.parent.mkdir(parents=True, exist_ok=True)
	tmp = p.with_suffix(p.suffix + ".tmp")
	with tmp.open("w", encoding="utf-8", newline="\n") as f:
		json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)
		f.write("\n")
	tmp.replace(p)
