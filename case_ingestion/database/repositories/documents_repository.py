from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from case_ingestion.database.connection import get_connection
from case_ingestion.processor.exceptions import DocumentNotFoundError, PersistenceError
from case_ingestion.processor.models import DocumentRecord, format_vector

_COLUMNS = """
    id, complaint_id, document_type, file_path, processed_data,
    embedding::text AS embedding, uploaded_at
"""


class DocumentsRepository:
    """Database operations for the documents table."""

    def insert(self, record: DocumentRecord) -> DocumentRecord:
        """Insert a processed document and return it with its generated id.

        Raises:
            PersistenceError: on any database error.
        """
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        INSERT INTO documents
                        (complaint_id, document_type, file_path, processed_data, embedding)
                        VALUES (%s, %s, %s, %s, CAST(%s AS vector))
                        RETURNING id, uploaded_at
                        """,
                        (
                            record.case_id,
                            record.document_type.value,
                            record.file_path,
                            Jsonb(record.to_processed_data()),
                            format_vector(record.embedding),
                        ),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Database insert failed: {exc}") from exc

        if row is None:
            raise PersistenceError("Database insert returned no row")
        return record.with_identity(str(row["id"]), row.get("uploaded_at"))

    def find_by_id(self, document_id: str) -> DocumentRecord:
        """Find a stored document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
            PersistenceError: on any database error.
        """
        row = self._fetch_one(
            f"SELECT {_COLUMNS} FROM documents WHERE id = %s",
            (document_id,),
        )
        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return DocumentRecord.from_row(row)

    def list_for_case(self, case_id: str) -> list[DocumentRecord]:
        """All documents of a case, newest first."""
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        SELECT {_COLUMNS} FROM documents
                        WHERE complaint_id = %s
                        ORDER BY uploaded_at DESC
                        """,
                        (case_id,),
                    )
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise PersistenceError(f"Database query failed: {exc}") from exc
        return [DocumentRecord.from_row(row) for row in rows]

    @staticmethod
    def _fetch_one(query: str, params: tuple[Any, ...]) -> dict[str, Any] | None:
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(query, params)
                    return cur.fetchone()
        except psycopg.Error as exc:
            raise PersistenceError(f"Database query failed: {exc}") from exc
