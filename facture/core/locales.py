from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from facture.core.errors import FormatError


# Default fraction digits per ISO 4217 currency
CURRENCY_DIGITS: Dict[str, int] = {
	"XAF": 0,
	"XOF": 0,
	"EUR": 2,
	"USD": 2,
}

NBSP = "\u00a0"


@dataclass(frozen=True)
class LocaleConventions:
	tag: str
	group: str
	decimal: str
	# True: "150 000 FCFA", False: "$150,000.00"
	symbol_after: bool
	date_format: str
	symbols: Dict[str, str] = field(default_factory=dict)

	def symbol(self, currency_code: str) -> str:
		return self.symbols.get(currency_code, currency_code)


# Grouping uses NBSP rather than U+202F so the standard PDF fonts can draw it.
_FRENCH_SYMBOLS = {"XAF": "FCFA", "XOF": f"F{NBSP}CFA", "EUR": "€", "USD": "$US"}
_ENGLISH_SYMBOLS = {"XAF": "FCFA", "XOF": f"F{NBSP}CFA", "EUR": "€", "USD": "$"}

LOCALES: Dict[str, LocaleConventions] = {
	"fr-CM": LocaleConventions("fr-CM", NBSP, ",", True, "{d:02d}/{m:02d}/{y:04d}", _FRENCH_SYMBOLS),
	"fr-FR": LocaleConventions("fr-FR", NBSP, ",", True, "{d:02d}/{m:02d}/{y:04d}", _FRENCH_SYMBOLS),
	"en-US": LocaleConventions("en-US", ",", ".", False, "{m}/{d}/{y:04d}", _ENGLISH_SYMBOLS),
}


def get_locale(tag: str) -> LocaleConventions:
	try:
		return LOCALES[tag]
	except (KeyError, TypeError):
		raise FormatError(f"Unsupported locale: {tag!r}") from None


def currency_digits(currency_code: str) -> int:
	try:
		return CURRENCY_DIGITS[currency_code]
	except (KeyError, TypeError):
		raise FormatError(f"Unsupported currency: {currency_code!r}") from None
