from __future__ import annotations

from pathlib import Path

import pytest

from facture.data.db import create_db_and_tables


@pytest.fixture
def store_url(tmp_path: Path) -> str:
    """A fresh SQLite invoice store for one test."""
    url = f"sqlite:///{(tmp_path / 'studya.db').as_posix()}"
    create_db_and_tables(url)
    return url
