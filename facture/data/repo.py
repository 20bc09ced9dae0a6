from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Tuple
import logging

from sqlmodel import select

from facture.core.currency import round_money
from facture.core.dates import to_date
from facture.core.records import (
	COMMERCIAL,
	PARTNER,
	CommercialRecipient,
	Invoice,
	PartnerRecipient,
	Recipient,
)
from facture.data.db import get_session, session_scope
from facture.data.models import Commercial, InvoiceRecord, Partner

logger = logging.getLogger(__name__)


def create_partner(name: str, email: str = "", phone: str = "", company: Optional[str] = None) -> Partner:
	normalized = (name or "").strip()
	if not normalized:
		raise ValueError("Partner name is required")
	with session_scope() as s:
		partner = Partner(name=normalized, email=email, phone=phone, company=company)
		s.add(partner)
		# Ensure PK is populated before leaving the session
		s.flush()
		s.refresh(partner)
		return partner


def create_commercial(first_name: str, last_name: str, email: str = "", phone: str = "", commission_rate: float = 0.0) -> Commercial:
	if not (first_name or "").strip() or not (last_name or "").strip():
		raise ValueError("Commercial first and last name are required")
	with session_scope() as s:
		commercial = Commercial(
			first_name=first_name.strip(),
			last_name=last_name.strip(),
			email=email,
			phone=phone,
			commission_rate=commission_rate,
		)
		s.add(commercial)
		s.flush()
		s.refresh(commercial)
		return commercial


def create_invoice(invoice_dto: Dict[str, Any]) -> InvoiceRecord:
	"""
	Create an invoice record.

	invoice_dto structure:
	  {
		'number': str,  # required (must be unique)
		'entity_type': str,  # required ('partner', 'commercial', ...)
		'entity_id': int | None,
		'amount': number,  # required, >= 0
		'issue_date': date | str,  # required
		'due_date': date | str,  # required
		'period_start': date | str | None,
		'period_end': date | str | None,
		'status': str,  # default 'pending'
	  }
	"""
	number = (invoice_dto.get("number") or "").strip()
	entity_type = invoice_dto.get("entity_type")
	if not (number and entity_type):
		raise ValueError("Missing required fields: number, entity_type")

	amount = round_money(invoice_dto.get("amount", 0), 2)
	if amount < 0:
		raise ValueError(f"Invoice amount must be >= 0: {amount}")

	def _opt_date(key: str) -> Optional[date]:
		val = invoice_dto.get(key)
		return to_date(val) if val else None

	with session_scope() as s:
		dup = s.exec(select(InvoiceRecord).where(InvoiceRecord.number == number)).first()
		if dup:
			raise ValueError(f"Invoice number already exists: {number}")

		rec = InvoiceRecord(
			number=number,
			entity_type=str(entity_type),
			entity_id=invoice_dto.get("entity_id"),
			amount=float(amount),
			issue_date=to_date(invoice_dto.get("issue_date")),
			due_date=to_date(invoice_dto.get("due_date")),
			period_start=_opt_date("period_start"),
			period_end=_opt_date("period_end"),
			status=str(invoice_dto.get("status") or "pending"),
		)
		s.add(rec)
		s.flush()
		s.refresh(rec)
		return rec


def list_invoices(status: Optional[str] = None, limit: Optional[int] = None) -> List[InvoiceRecord]:
	"""Return invoices ordered by issue date DESC, id DESC."""
	with get_session() as s:
		stmt = select(InvoiceRecord).order_by(InvoiceRecord.issue_date.desc(), InvoiceRecord.id.desc())
		if status:
			stmt = stmt.where(InvoiceRecord.status == status)
		if isinstance(limit, int) and limit > 0:
			stmt = stmt.limit(limit)
		return list(s.exec(stmt).all())


def get_invoice_by_number(number: str) -> Optional[InvoiceRecord]:
	with get_session() as s:
		return s.exec(select(InvoiceRecord).where(InvoiceRecord.number == number)).first()


def to_invoice(rec: InvoiceRecord) -> Invoice:
	return Invoice(
		number=rec.number,
		issue_date=rec.issue_date,
		due_date=rec.due_date,
		amount=rec.amount,
		entity_type=rec.entity_type,
		status=rec.status,
		period_start=rec.period_start,
		period_end=rec.period_end,
	)


def find_recipient(entity_type: str, entity_id: Optional[int]) -> Optional[Recipient]:
	"""Resolve the billed party; None when the type is not billable or the row is gone."""
	if entity_id is None:
		return None
	with get_session() as s:
		if entity_type == PARTNER:
			p = s.get(Partner, entity_id)
			return PartnerRecipient(name=p.name, email=p.email, phone=p.phone) if p else None
		if entity_type == COMMERCIAL:
			c = s.get(Commercial, entity_id)
			if c:
				return CommercialRecipient(first_name=c.first_name, last_name=c.last_name, email=c.email, phone=c.phone)
	return None


def load_invoice_bundle(number: str) -> Tuple[Invoice, Optional[Recipient]]:
	"""Fetch the invoice and its recipient (if any) ready for document generation."""
	rec = get_invoice_by_number(number)
	if rec is None:
		raise LookupError(f"Invoice not found: {number}")
	recipient = find_recipient(rec.entity_type, rec.entity_id)
	if recipient is None:
		logger.info("Invoice %s has no recipient record; recipient block omitted", number)
	return to_invoice(rec), recipient
