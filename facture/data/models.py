from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import Field, SQLModel


class Partner(SQLModel, table=True):
	id: Optional[int] = Field(default=None, primary_key=True)
	name: str
	company: Optional[str] = None
	email: str = ""
	phone: str = ""
	status: str = "active"


class Commercial(SQLModel, table=True):
	id: Optional[int] = Field(default=None, primary_key=True)
	first_name: str
	last_name: str
	email: str = ""
	phone: str = ""
	commission_rate: float = 0.0
	status: str = "active"


class InvoiceRecord(SQLModel, table=True):
	__tablename__ = "invoice"

	id: Optional[int] = Field(default=None, primary_key=True)
	number: str = Field(
		index=True,
		sa_column_kwargs={"unique": True},
	)
	# "partner", "commercial", or another channel such as "direct"
	entity_type: str = Field(index=True)
	# Partner.id or Commercial.id depending on entity_type
	entity_id: Optional[int] = None
	amount: float = 0.0
	issue_date: date
	due_date: date
	period_start: Optional[date] = None
	period_end: Optional[date] = None
	status: str = "pending"
