from __future__ import annotations

from typing import Generator, Optional
from contextlib import contextmanager

from sqlmodel import SQLModel, Session, create_engine

from facture.core.paths import default_database_url


_ENGINE = None
_ENGINE_URL: Optional[str] = None


def get_engine(url: Optional[str] = None, echo: bool = False):
	"""Return a singleton SQLAlchemy engine; a different URL replaces it."""
	global _ENGINE, _ENGINE_URL
	url = url or _ENGINE_URL or default_database_url()
	if _ENGINE is None or url != _ENGINE_URL:
		if _ENGINE is not None:
			_ENGINE.dispose()
		connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
		_ENGINE = create_engine(url, echo=echo, connect_args=connect_args)
		_ENGINE_URL = url
	return _ENGINE


def create_db_and_tables(url: Optional[str] = None, echo: bool = False) -> None:
	"""Create the database (SQLite file by default) and all SQLModel tables."""
	# Ensure models are imported so metadata has all tables
	import facture.data.models  # noqa: F401

	engine = get_engine(url, echo=echo)
	SQLModel.metadata.create_all(engine)


def get_session(echo: bool = False) -> Session:
	"""Create a new SQLModel Session bound to the current engine.

	expire_on_commit=False so returned instances keep attribute values after commit.
	"""
	return Session(get_engine(echo=echo), expire_on_commit=False)


@contextmanager
def session_scope(echo: bool = False) -> Generator[Session, None, None]:
	"""Commit on success, roll back on error.

	Usage:
		with session_scope() as s:
			... use s ...
	"""
	session = get_session(echo=echo)
	try:
		yield session
		session.commit()
	except Exception:
		session.rollback()
		raise
	finally:
		session.close()
