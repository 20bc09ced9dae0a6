from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, localcontext
from typing import Optional, Union

from facture.core.errors import FormatError
from facture.core.locales import NBSP, currency_digits, get_locale


Amount = Union[int, float, Decimal, str]


def to_decimal(x: object) -> Decimal:
	"""Convert to Decimal via str to avoid binary float artifacts.

	Raises FormatError for booleans, non-numeric values and NaN/Infinity.
	"""
	if isinstance(x, bool) or x is None:
		raise FormatError(f"Not a monetary amount: {x!r}")
	if isinstance(x, float) and not math.isfinite(x):
		raise FormatError(f"Non-finite amount: {x!r}")
	try:
		d = x if isinstance(x, Decimal) else Decimal(str(x).strip())
	except (InvalidOperation, ValueError, TypeError):
		raise FormatError(f"Not a monetary amount: {x!r}") from None
	if not d.is_finite():
		raise FormatError(f"Non-finite amount: {x!r}")
	return d


def round_money(x: Amount, fraction_digits: int) -> Decimal:
	"""Round half away from zero to `fraction_digits` places, as Intl.NumberFormat does."""
	if fraction_digits < 0:
		raise FormatError(f"fraction_digits must be >= 0, got {fraction_digits}")
	d = to_decimal(x)
	q = Decimal(1).scaleb(-fraction_digits)
	with localcontext() as ctx:
		# Room for every integer digit plus the requested fraction digits
		ctx.prec = max(ctx.prec, d.adjusted() + fraction_digits + 2)
		try:
			return d.quantize(q, rounding=ROUND_HALF_UP)
		except InvalidOperation:
			raise FormatError(f"Amount cannot be rounded: {x!r}") from None


def _group(digits: str, sep: str) -> str:
	parts = []
	while len(digits) > 3:
		parts.insert(0, digits[-3:])
		digits = digits[:-3]
	parts.insert(0, digits)
	return sep.join(parts)


def format_currency(
	value: Amount,
	locale_tag: str,
	currency_code: str,
	fraction_digits: Optional[int] = None,
) -> str:
	"""
	Render a non-negative amount with the locale's grouping, decimal mark and
	symbol placement.

	fraction_digits=None uses the currency's default digits (XAF: 0, EUR: 2).
	Negative or non-finite amounts raise FormatError.
	"""
	conv = get_locale(locale_tag)
	digits = currency_digits(currency_code) if fraction_digits is None else int(fraction_digits)
	if to_decimal(value) < 0:
		raise FormatError(f"Negative amount: {value!r}")
	# copy_abs drops the sign of a negative zero
	d = round_money(value, digits).copy_abs()

	text = f"{d:.{digits}f}"
	int_part, _, frac_part = text.partition(".")
	number = _group(int_part, conv.group)
	if frac_part:
		number = f"{number}{conv.decimal}{frac_part}"

	symbol = conv.symbol(currency_code)
	if conv.symbol_after:
		return f"{number}{NBSP}{symbol}"
	# Alphabetic symbols (FCFA) are separated from the number, "$" and "€" are not
	if symbol[-1:].isalpha():
		return f"{symbol}{NBSP}{number}"
	return f"{symbol}{number}"


def parse_currency(text: str, locale_tag: str, currency_code: str) -> Decimal:
	"""Parse a string produced by format_currency back into a Decimal."""
	conv = get_locale(locale_tag)
	symbol = conv.symbol(currency_code)
	s = (text or "").replace(symbol, "").replace(NBSP, "").replace(" ", "")
	s = s.replace(conv.group, "").replace(conv.decimal, ".")
	if not s:
		raise FormatError(f"Not a formatted amount: {text!r}")
	return to_decimal(s)
