from __future__ import annotations

import datetime as _dt
from typing import Union

from facture.core.errors import FormatError
from facture.core.locales import get_locale


DateLike = Union[_dt.date, _dt.datetime, str]


def to_date(val: object) -> _dt.date:
	"""Coerce a date, datetime or ISO-8601 string ("2024-01-10", "2024-01-10T09:00:00")."""
	if isinstance(val, _dt.datetime):
		return val.date()
	if isinstance(val, _dt.date):
		return val
	if isinstance(val, str) and val.strip():
		s = val.strip()
		try:
			if "T" in s or " " in s:
				return _dt.datetime.fromisoformat(s).date()
			return _dt.date.fromisoformat(s)
		except ValueError:
			pass
	raise FormatError(f"Invalid date: {val!r}")


def format_date(val: DateLike, locale_tag: str) -> str:
	"""Render a calendar date in the locale's short date convention (fr-CM: 10/01/2024)."""
	conv = get_locale(locale_tag)
	d = to_date(val)
	return conv.date_format.format(d=d.day, m=d.month, y=d.year)
