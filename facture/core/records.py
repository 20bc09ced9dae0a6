from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple, Union


PARTNER = "partner"
COMMERCIAL = "commercial"
ENTITY_TYPES = (PARTNER, COMMERCIAL)

INVOICE_STATUSES = ("draft", "sent", "pending", "paid", "overdue")


@dataclass(frozen=True)
class LineItem:
	description: str
	amount: Union[int, float, Decimal]


@dataclass(frozen=True)
class Invoice:
	"""Invoice record as supplied by the data store; immutable for one generation call."""

	number: str
	issue_date: date
	due_date: date
	amount: Union[int, float, Decimal]
	entity_type: str
	status: str = "pending"
	period_start: Optional[date] = None
	period_end: Optional[date] = None
	# Explicit itemised lines; empty means one line derived from entity_type
	items: Tuple[LineItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PartnerRecipient:
	name: str
	email: str = ""
	phone: str = ""
	kind: str = field(default=PARTNER, init=False)

	@property
	def display_name(self) -> str:
		return self.name


@dataclass(frozen=True)
class CommercialRecipient:
	first_name: str
	last_name: str
	email: str = ""
	phone: str = ""
	kind: str = field(default=COMMERCIAL, init=False)

	@property
	def display_name(self) -> str:
		return f"{self.first_name} {self.last_name}"


Recipient = Union[PartnerRecipient, CommercialRecipient]
