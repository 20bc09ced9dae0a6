from __future__ import annotations


class FactureError(Exception):
	"""Base class for invoice document generation failures."""


class FormatError(FactureError, ValueError):
	"""An amount, date or locale that cannot be rendered."""


class UnknownEntityTypeError(FactureError, ValueError):
	"""Invoice entity type outside {partner, commercial} (strict mode only)."""

	def __init__(self, entity_type: object):
		super().__init__(f"Unknown invoice entity type: {entity_type!r}")
		self.entity_type = entity_type


class LayoutError(FactureError):
	"""Content that cannot be placed on the page geometry."""


class DocumentError(FactureError):
	"""A document that is not ready to be serialized."""
