import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from case_ingestion.config.settings import Settings
from case_ingestion.database.connection import close_pool, get_connection, init_pool


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "lightpoint_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute("SELECT 1")
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def documents_table(db_conn: psycopg.Connection[Any]) -> None:
    row = db_conn.execute("SELECT to_regclass('documents')").fetchone()
    db_conn.commit()
    if row is None or row[0] is None:
        pytest.skip("documents table (with pgvector) is not present in the test DB")


@pytest.fixture
def integration_cleanup(
    integration_pool: None,
) -> Generator[list[str], None, None]:
    """Collects ids of inserted documents and deletes them afterwards."""
    document_ids: list[str] = []
    yield document_ids
    if not document_ids:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for document_id in document_ids:
                cur.execute("DELETE FROM documents WHERE id = %s", (document_id,))
        conn.commit()
